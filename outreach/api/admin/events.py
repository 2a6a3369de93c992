from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from outreach.core.deps import require_admin
from outreach.core.errors import NotFoundError
from outreach.db.session import get_db
from outreach.schemas.admin import EventCreate, EventUpdate
from outreach.services.events import create_event, delete_event, list_events, serialize_event, update_event
from outreach.services.registrations import count_registrations

router = APIRouter()


def _with_count(db: Session, row) -> dict:
    data = serialize_event(row)
    data["registration_count"] = count_registrations(db, row.id)
    return data


@router.get("")
def get_events(db: Session = Depends(get_db), admin=Depends(require_admin)):
    return [_with_count(db, row) for row in list_events(db)]


@router.post("", status_code=201)
def post_event(payload: EventCreate, db: Session = Depends(get_db), admin=Depends(require_admin)):
    return serialize_event(create_event(db, payload))


@router.patch("/{event_id}")
def patch_event(event_id: int, payload: EventUpdate, db: Session = Depends(get_db), admin=Depends(require_admin)):
    return _with_count(db, update_event(db, event_id, payload))


@router.delete("/{event_id}")
def remove_event(event_id: int, db: Session = Depends(get_db), admin=Depends(require_admin)):
    if not delete_event(db, event_id):
        raise NotFoundError("Event not found")
    return {"success": True}
