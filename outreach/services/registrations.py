"""Event registration store and the capacity / anti-spam gate in front of it.

Capacity is enforced as count-then-insert without a guarding transaction.
Two registrations racing for the last seat can both see a free spot and both
be stored, overshooting ``max_registrations``; admins reconcile that by
cancelling or waitlisting. ``REGISTRATION_STRICT_CAPACITY`` takes a row lock on
the event before counting, which serializes the check on PostgreSQL.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from outreach.core.config import settings
from outreach.core.errors import (
    CapacityExceededError,
    NotFoundError,
    RegistrationClosedError,
    ValidationFailed,
)
from outreach.models.event import Event
from outreach.models.event_registration import REGISTRATION_STATUSES, EventRegistration
from outreach.services.events import effective_registration_fields, get_event
from outreach.services.submissions import SubmitOutcome, validated_status, is_honeypot_tripped
from outreach.services.validation import normalize_record, validate

_LOG = logging.getLogger("outreach.registrations")

DECOY_SUCCESS_MESSAGE = "Thank you for registering!"


def _to_iso(value) -> str | None:
    return value.isoformat() if value is not None else None


def serialize_registration(row: EventRegistration) -> dict[str, Any]:
    return {
        "id": row.id,
        "event_id": row.event_id,
        "data": dict(row.data or {}),
        "status": row.status,
        "notes": row.notes,
        "created_at": _to_iso(row.created_at),
        "updated_at": _to_iso(row.updated_at),
    }


def count_registrations(db: Session, event_id: int, excluding_status: str | None = "cancelled") -> int:
    query = select(func.count(EventRegistration.id)).where(EventRegistration.event_id == event_id)
    if excluding_status:
        query = query.where(EventRegistration.status != excluding_status)
    return int(db.execute(query).scalar() or 0)


def spots_remaining(db: Session, event: Event) -> int | None:
    if not event.max_registrations:
        return None
    return max(0, int(event.max_registrations) - count_registrations(db, event.id))


def registration_success_message(event: Event) -> str:
    return f"You're registered for {event.title}! We'll see you there."


def confirmation_message(event: Event) -> str:
    when = f"{event.date:%A, %B} {event.date.day}, {event.date.year}" if event.date else ""
    return f"You're registered for {event.title} on {when} at {event.time}."


def registration_schema(db: Session, event_id: int) -> dict[str, Any]:
    """Form-schema view of one event's internal registration."""
    event = get_event(db, event_id)
    if event.registration_type != "internal":
        raise RegistrationClosedError()
    remaining = spots_remaining(db, event)
    return {
        "event_id": event.id,
        "title": f"Register for {event.title}",
        "description": f"{event.date.isoformat()} at {event.time}, {event.location}",
        "fields": [f.to_storage() for f in effective_registration_fields(event)],
        "submit_button_text": "Register",
        "success_message": registration_success_message(event),
        "enabled": remaining is None or remaining > 0,
        "max_registrations": event.max_registrations,
        "registration_count": count_registrations(db, event.id),
        "spots_remaining": remaining,
    }


def _load_event_for_registration(db: Session, event_id: int) -> Event:
    if settings.REGISTRATION_STRICT_CAPACITY:
        event = db.execute(select(Event).where(Event.id == event_id).with_for_update()).scalar_one_or_none()
        if event is None:
            raise NotFoundError("Event not found")
    else:
        event = get_event(db, event_id)
    if event.registration_type != "internal":
        raise RegistrationClosedError()
    return event


def ensure_capacity(db: Session, event: Event) -> None:
    if not event.max_registrations:
        return
    current = count_registrations(db, event.id)
    if current >= int(event.max_registrations):
        _LOG.info("event full event_id=%s count=%s max=%s", event.id, current, event.max_registrations)
        raise CapacityExceededError()


def create_registration(db: Session, event_id: int, data: Mapping[str, Any]) -> EventRegistration:
    row = EventRegistration(event_id=event_id, data=normalize_record(data), status="confirmed")
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def register_for_event(db: Session, event_id: int, data: Mapping[str, Any] | None, honeypot: Any = None) -> SubmitOutcome:
    if is_honeypot_tripped(honeypot):
        _LOG.info("honeypot tripped event_id=%s; registration discarded", event_id)
        return SubmitOutcome(message=DECOY_SUCCESS_MESSAGE, reference_id=0, stored=False, record={})

    event = _load_event_for_registration(db, event_id)
    ensure_capacity(db, event)

    record = normalize_record(data)
    errors = validate(effective_registration_fields(event), record)
    if errors:
        raise ValidationFailed(errors)

    row = create_registration(db, event.id, record)
    _LOG.info("registration stored event_id=%s id=%s", event.id, row.id)
    return SubmitOutcome(message=registration_success_message(event), reference_id=row.id, stored=True, record=record)


def list_registrations(db: Session, event_id: int | None = None) -> list[EventRegistration]:
    query = db.query(EventRegistration)
    if event_id is not None:
        query = query.filter(EventRegistration.event_id == event_id)
    return query.order_by(EventRegistration.created_at.desc(), EventRegistration.id.desc()).all()


def update_registration(
    db: Session, registration_id: int, *, status: str | None = None, notes: str | None = None
) -> EventRegistration:
    row = db.get(EventRegistration, registration_id)
    if row is None:
        raise NotFoundError("Registration not found")
    new_status = validated_status(status, REGISTRATION_STATUSES)
    if new_status is not None:
        row.status = new_status
    if notes is not None:
        row.notes = notes
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def delete_registration(db: Session, registration_id: int) -> bool:
    row = db.get(EventRegistration, registration_id)
    if row is None:
        return False
    db.delete(row)
    db.commit()
    return True
