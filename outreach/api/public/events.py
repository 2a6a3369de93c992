from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from outreach.core.deps import get_optional_admin
from outreach.db.session import get_db
from outreach.schemas.public import PublicSubmission, RegistrationCount, SubmitResult
from outreach.services.events import get_event, list_events, serialize_event
from outreach.services.rate_limit import enforce_public_submit_limit
from outreach.services.registrations import (
    confirmation_message,
    count_registrations,
    list_registrations,
    register_for_event,
    registration_schema,
    serialize_registration,
)
from outreach.services.submission_mail import notify_submission

router = APIRouter()


@router.get("")
def get_events(db: Session = Depends(get_db)):
    return [serialize_event(row) for row in list_events(db)]


@router.get("/{event_id}")
def get_one_event(event_id: int, db: Session = Depends(get_db)):
    return serialize_event(get_event(db, event_id))


@router.get("/{event_id}/registration-form")
def get_registration_form(event_id: int, db: Session = Depends(get_db)):
    return registration_schema(db, event_id)


@router.get("/{event_id}/registrations")
def get_event_registrations(
    event_id: int,
    count_only: bool = Query(False, alias="countOnly"),
    db: Session = Depends(get_db),
    admin: dict | None = Depends(get_optional_admin),
):
    event = get_event(db, event_id)
    if count_only:
        return RegistrationCount(count=count_registrations(db, event.id))
    if admin is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return [serialize_registration(row) for row in list_registrations(db, event.id)]


@router.post("/{event_id}/registrations", response_model=SubmitResult)
def register(
    event_id: int,
    payload: PublicSubmission,
    request: Request,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    enforce_public_submit_limit(request, "registrations")
    outcome = register_for_event(db, event_id, payload.data, payload.honeypot)
    if outcome.stored:
        event = get_event(db, event_id)
        # The stored row keeps only registrant data; mail also names the event.
        notified = {**outcome.record, "event_title": event.title, "event_date": event.date.isoformat()}
        background_tasks.add_task(
            notify_submission, f"event_registration_{event.id}", notified, outcome.reference_id, confirmation_message(event)
        )
    return outcome.response()
