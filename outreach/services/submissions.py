from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from sqlalchemy.orm import Session

from outreach.core.errors import FormsError, NotFoundError, ValidationFailed
from outreach.models.form_submission import SUBMISSION_STATUSES, FormSubmission
from outreach.services.form_configs import form_fields, get_enabled_form_config
from outreach.services.validation import normalize_record, validate

_LOG = logging.getLogger("outreach.forms")

DECOY_SUCCESS_MESSAGE = "Thank you! We'll be in touch soon."


def _to_iso(value) -> str | None:
    return value.isoformat() if value is not None else None


def serialize_submission(row: FormSubmission) -> dict[str, Any]:
    return {
        "id": row.id,
        "form_type": row.form_type,
        "data": dict(row.data or {}),
        "status": row.status,
        "notes": row.notes,
        "created_at": _to_iso(row.created_at),
        "updated_at": _to_iso(row.updated_at),
    }


@dataclass
class SubmitOutcome:
    message: str
    reference_id: int
    stored: bool
    record: dict[str, str]

    def response(self) -> dict[str, Any]:
        return {"success": True, "message": self.message, "submission_id": self.reference_id}


def is_honeypot_tripped(honeypot: Any) -> bool:
    # Any non-empty decoy trips, whitespace and non-string values included.
    return bool(str(honeypot or ""))


def create_submission(db: Session, form_type: str, data: Mapping[str, Any]) -> FormSubmission:
    row = FormSubmission(form_type=form_type, data=normalize_record(data), status="new")
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def submit_form(db: Session, form_type: str, data: Mapping[str, Any] | None, honeypot: Any = None) -> SubmitOutcome:
    """Authoritative server-side submit path for public forms."""
    if is_honeypot_tripped(honeypot):
        _LOG.info("honeypot tripped form_type=%s; submission discarded", form_type)
        return SubmitOutcome(message=DECOY_SUCCESS_MESSAGE, reference_id=0, stored=False, record={})

    config = get_enabled_form_config(db, form_type)
    record = normalize_record(data)
    errors = validate(form_fields(config), record)
    if errors:
        _LOG.info("submission rejected form_type=%s invalid_fields=%s", config.form_type, [e.field_id for e in errors])
        raise ValidationFailed(errors)

    row = create_submission(db, config.form_type, record)
    _LOG.info("submission stored form_type=%s id=%s", row.form_type, row.id)
    return SubmitOutcome(message=config.success_message, reference_id=row.id, stored=True, record=record)


def list_submissions(db: Session, form_type: str | None = None) -> list[FormSubmission]:
    query = db.query(FormSubmission)
    normalized = str(form_type or "").strip().lower()
    if normalized:
        query = query.filter(FormSubmission.form_type == normalized)
    return query.order_by(FormSubmission.created_at.desc(), FormSubmission.id.desc()).all()


def validated_status(status: str | None, allowed: tuple[str, ...]) -> str | None:
    if status is None:
        return None
    value = str(status).strip().lower()
    if value not in allowed:
        raise FormsError(f"Status must be one of: {', '.join(allowed)}")
    return value


def update_submission(db: Session, submission_id: int, *, status: str | None = None, notes: str | None = None) -> FormSubmission:
    row = db.get(FormSubmission, submission_id)
    if row is None:
        raise NotFoundError("Submission not found")
    new_status = validated_status(status, SUBMISSION_STATUSES)
    if new_status is not None:
        row.status = new_status
    if notes is not None:
        row.notes = notes
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def delete_submission(db: Session, submission_id: int) -> bool:
    row = db.get(FormSubmission, submission_id)
    if row is None:
        return False
    db.delete(row)
    db.commit()
    return True
