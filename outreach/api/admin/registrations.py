import logging

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from outreach.core.deps import require_admin
from outreach.core.errors import NotFoundError
from outreach.db.session import get_db
from outreach.schemas.admin import RegistrationUpdate
from outreach.services.csv_export import records_to_csv
from outreach.services.registrations import (
    delete_registration,
    list_registrations,
    serialize_registration,
    update_registration,
)

router = APIRouter()
_LOG = logging.getLogger("outreach.admin")


@router.get("")
def get_registrations(
    event_id: int | None = Query(None), db: Session = Depends(get_db), admin=Depends(require_admin)
):
    try:
        rows = list_registrations(db, event_id)
    except SQLAlchemyError:
        _LOG.exception("listing registrations failed event_id=%s", event_id)
        db.rollback()
        return []
    return [serialize_registration(row) for row in rows]


@router.get("/export.csv")
def export_registrations(
    event_id: int | None = Query(None), db: Session = Depends(get_db), admin=Depends(require_admin)
):
    records = [serialize_registration(row) for row in list_registrations(db, event_id)]
    filename = f"registrations-{event_id if event_id is not None else 'all'}.csv"
    return Response(
        content=records_to_csv(records, "event_id"),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.patch("/{registration_id}")
def patch_registration(
    registration_id: int, payload: RegistrationUpdate, db: Session = Depends(get_db), admin=Depends(require_admin)
):
    row = update_registration(db, registration_id, status=payload.status, notes=payload.notes)
    _LOG.info("registration %s updated by %s status=%s", row.id, admin.get("email"), row.status)
    return serialize_registration(row)


@router.delete("/{registration_id}")
def remove_registration(registration_id: int, db: Session = Depends(get_db), admin=Depends(require_admin)):
    if not delete_registration(db, registration_id):
        raise NotFoundError("Registration not found")
    _LOG.info("registration %s deleted by %s", registration_id, admin.get("email"))
    return {"success": True}
