import logging

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from outreach.core.deps import require_admin
from outreach.core.errors import NotFoundError
from outreach.db.session import get_db
from outreach.schemas.admin import SubmissionUpdate
from outreach.services.csv_export import records_to_csv
from outreach.services.submissions import (
    delete_submission,
    list_submissions,
    serialize_submission,
    update_submission,
)

router = APIRouter()
_LOG = logging.getLogger("outreach.admin")


@router.get("")
def get_submissions(
    form_type: str | None = Query(None), db: Session = Depends(get_db), admin=Depends(require_admin)
):
    try:
        rows = list_submissions(db, form_type)
    except SQLAlchemyError:
        _LOG.exception("listing submissions failed form_type=%s", form_type)
        db.rollback()
        return []
    return [serialize_submission(row) for row in rows]


@router.get("/export.csv")
def export_submissions(
    form_type: str | None = Query(None), db: Session = Depends(get_db), admin=Depends(require_admin)
):
    records = [serialize_submission(row) for row in list_submissions(db, form_type)]
    filename = f"submissions-{form_type or 'all'}.csv"
    return Response(
        content=records_to_csv(records, "form_type"),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.patch("/{submission_id}")
def patch_submission(
    submission_id: int, payload: SubmissionUpdate, db: Session = Depends(get_db), admin=Depends(require_admin)
):
    row = update_submission(db, submission_id, status=payload.status, notes=payload.notes)
    _LOG.info("submission %s updated by %s status=%s", row.id, admin.get("email"), row.status)
    return serialize_submission(row)


@router.delete("/{submission_id}")
def remove_submission(submission_id: int, db: Session = Depends(get_db), admin=Depends(require_admin)):
    if not delete_submission(db, submission_id):
        raise NotFoundError("Submission not found")
    _LOG.info("submission %s deleted by %s", submission_id, admin.get("email"))
    return {"success": True}
