from __future__ import annotations

from sqlalchemy.orm import Session

from outreach.core.errors import NotFoundError
from outreach.data.default_forms import DEFAULT_SETTINGS, PUBLIC_SETTING_KEYS
from outreach.models.setting import Setting


def normalize_setting_key(raw: str | None) -> str:
    return str(raw or "").strip().lower()


def get_setting_value(db: Session, key: str) -> str:
    normalized = normalize_setting_key(key)
    row = db.get(Setting, normalized)
    if row is not None:
        return row.value
    if normalized in DEFAULT_SETTINGS:
        return DEFAULT_SETTINGS[normalized]
    raise NotFoundError("Setting not found")


def get_public_setting_value(db: Session, key: str) -> str:
    if normalize_setting_key(key) not in PUBLIC_SETTING_KEYS:
        raise NotFoundError("Setting not found")
    return get_setting_value(db, key)


def put_setting(db: Session, key: str, value: str) -> Setting:
    normalized = normalize_setting_key(key)
    if not normalized:
        raise NotFoundError("Setting not found")
    row = db.get(Setting, normalized)
    if row is None:
        row = Setting(key=normalized, value=value)
    else:
        row.value = value
    db.add(row)
    db.commit()
    db.refresh(row)
    return row
