from __future__ import annotations

from typing import Any

from sqlalchemy import delete
from sqlalchemy.orm import Session

from outreach.core.errors import NotFoundError
from outreach.models.event import Event
from outreach.models.event_registration import EventRegistration
from outreach.schemas.admin import EventCreate, EventUpdate
from outreach.schemas.forms import FormFieldSpec, parse_fields

DEFAULT_REGISTRATION_FIELDS = [
    FormFieldSpec(id="name", type="text", label="Full Name", placeholder="Your name", required=True),
    FormFieldSpec(id="email", type="email", label="Email Address", placeholder="your@email.com", required=True),
    FormFieldSpec(id="phone", type="phone", label="Phone Number", placeholder="(555) 123-4567", required=False),
]


def effective_registration_fields(event: Event) -> list[FormFieldSpec]:
    fields = parse_fields(event.registration_fields)
    return fields if fields else list(DEFAULT_REGISTRATION_FIELDS)


def serialize_event(row: Event) -> dict[str, Any]:
    internal = row.registration_type == "internal"
    return {
        "id": row.id,
        "title": row.title,
        "date": row.date.isoformat() if row.date else None,
        "time": row.time,
        "location": row.location,
        "description": row.description,
        "category": row.category,
        "image_url": row.image_url,
        "registration_type": row.registration_type,
        "registration_url": row.registration_url if row.registration_type == "external" else None,
        "registration_fields": [f.to_storage() for f in parse_fields(row.registration_fields)] if internal else [],
        "max_registrations": row.max_registrations if internal else None,
        "created_at": row.created_at.isoformat() if row.created_at else None,
        "updated_at": row.updated_at.isoformat() if row.updated_at else None,
    }


def list_events(db: Session) -> list[Event]:
    return db.query(Event).order_by(Event.date.asc(), Event.id.asc()).all()


def get_event(db: Session, event_id: int) -> Event:
    row = db.get(Event, event_id)
    if row is None:
        raise NotFoundError("Event not found")
    return row


def _storage_changes(payload: EventCreate | EventUpdate, *, partial: bool) -> dict[str, Any]:
    changes = payload.model_dump(exclude_unset=partial)
    if "registration_fields" in changes and changes["registration_fields"] is not None:
        changes["registration_fields"] = [f.to_storage() for f in payload.registration_fields or []]
    return changes


def create_event(db: Session, payload: EventCreate) -> Event:
    row = Event(**_storage_changes(payload, partial=False))
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def update_event(db: Session, event_id: int, payload: EventUpdate) -> Event:
    row = get_event(db, event_id)
    for key, value in _storage_changes(payload, partial=True).items():
        if value is None and key in EventUpdate.REQUIRED_COLUMNS:
            continue
        setattr(row, key, value)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def delete_event(db: Session, event_id: int) -> bool:
    row = db.get(Event, event_id)
    if row is None:
        return False
    db.execute(delete(EventRegistration).where(EventRegistration.event_id == row.id))
    db.delete(row)
    db.commit()
    return True
