from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from outreach.core.errors import DisabledFormError, NotFoundError
from outreach.models.form_config import FormConfig
from outreach.schemas.forms import FormConfigUpdate, FormFieldSpec, parse_fields

_LOG = logging.getLogger("outreach.forms")

DEFAULT_SUBMIT_TEXT = "Submit"
DEFAULT_SUCCESS_MESSAGE = "Thank you! We'll be in touch soon."


def normalize_form_type(raw: str | None) -> str:
    return str(raw or "").strip().lower()


def serialize_form_config(row: FormConfig) -> dict[str, Any]:
    return {
        "form_type": row.form_type,
        "title": row.title,
        "description": row.description,
        "fields": [field.to_storage() for field in parse_fields(row.fields)],
        "submit_button_text": row.submit_button_text,
        "success_message": row.success_message,
        "enabled": bool(row.enabled),
        "created_at": row.created_at.isoformat() if row.created_at else None,
        "updated_at": row.updated_at.isoformat() if row.updated_at else None,
    }


def find_form_config(db: Session, form_type: str) -> FormConfig | None:
    normalized = normalize_form_type(form_type)
    if not normalized:
        return None
    return db.get(FormConfig, normalized)


def get_form_config(db: Session, form_type: str) -> FormConfig:
    row = find_form_config(db, form_type)
    if row is None:
        raise NotFoundError("Form configuration not found")
    return row


def get_enabled_form_config(db: Session, form_type: str) -> FormConfig:
    row = get_form_config(db, form_type)
    if not row.enabled:
        raise DisabledFormError()
    return row


def form_fields(row: FormConfig) -> list[FormFieldSpec]:
    return parse_fields(row.fields)


def list_form_configs(db: Session) -> list[FormConfig]:
    return db.query(FormConfig).order_by(FormConfig.form_type.asc()).all()


def upsert_form_config(db: Session, form_type: str, updates: FormConfigUpdate) -> FormConfig:
    """Apply a partial update; attributes absent from ``updates`` keep their values.

    An unknown form type is created, with defaults for whatever was omitted.
    """
    normalized = normalize_form_type(form_type)
    if not normalized:
        raise NotFoundError("Form configuration not found")

    changes = updates.model_dump(exclude_unset=True)
    # Non-nullable columns cannot be cleared by an explicit null; an empty list clears fields.
    for key in ("title", "fields", "submit_button_text", "success_message", "enabled"):
        if key in changes and changes[key] is None:
            changes.pop(key)
    if "fields" in changes:
        changes["fields"] = [field.to_storage() for field in updates.fields]

    row = db.get(FormConfig, normalized)
    if row is None:
        row = FormConfig(
            form_type=normalized,
            title=normalized.replace("_", " ").title(),
            description=None,
            fields=[],
            submit_button_text=DEFAULT_SUBMIT_TEXT,
            success_message=DEFAULT_SUCCESS_MESSAGE,
            enabled=True,
        )
        _LOG.info("creating form config form_type=%s", normalized)
    for key, value in changes.items():
        setattr(row, key, value)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row
