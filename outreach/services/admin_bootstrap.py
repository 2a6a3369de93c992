from __future__ import annotations

import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from outreach.core.config import settings
from outreach.core.security import hash_password, verify_password
from outreach.models.admin_user import AdminUser

_LOG = logging.getLogger("outreach.admin")


def normalize_admin_email(raw: str | None) -> str:
    return str(raw or "").strip().lower()


def is_allowed_admin_email(email: str | None) -> bool:
    """An empty ADMIN_EMAILS allowlist admits every active admin user."""
    allowlist = settings.admin_emails_list
    return not allowlist or normalize_admin_email(email) in allowlist


def get_active_admin_by_email(db: Session, email: str) -> AdminUser | None:
    normalized = normalize_admin_email(email)
    if not normalized:
        return None
    return (
        db.query(AdminUser)
        .filter(func.lower(AdminUser.email) == normalized, AdminUser.is_active.is_(True))
        .first()
    )


def ensure_bootstrap_admin_for_login(db: Session, email: str, password: str) -> AdminUser | None:
    if not settings.ADMIN_BOOTSTRAP_ENABLED:
        return None

    normalized_email = normalize_admin_email(email)
    bootstrap_email = normalize_admin_email(settings.ADMIN_BOOTSTRAP_EMAIL)
    bootstrap_password = str(settings.ADMIN_BOOTSTRAP_PASSWORD or "")
    if not bootstrap_email or normalized_email != bootstrap_email:
        return None
    if str(password or "") != bootstrap_password:
        return None

    user = db.query(AdminUser).filter(func.lower(AdminUser.email) == bootstrap_email).first()
    if user is None:
        user = AdminUser(
            role="ADMIN",
            name=str(settings.ADMIN_BOOTSTRAP_NAME or "Site Administrator"),
            email=bootstrap_email,
            password_hash=hash_password(bootstrap_password),
            is_active=True,
        )
        _LOG.info("bootstrap admin created email=%s", bootstrap_email)
    else:
        user.is_active = True
        if not verify_password(bootstrap_password, str(user.password_hash or "")):
            user.password_hash = hash_password(bootstrap_password)
    db.add(user)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        return get_active_admin_by_email(db, bootstrap_email)
    db.refresh(user)
    return user


def authenticate_admin(db: Session, email: str, password: str) -> AdminUser | None:
    normalized = normalize_admin_email(email)
    if not is_allowed_admin_email(normalized):
        _LOG.info("admin login refused: %s is not on the allowlist", normalized)
        return None
    user = ensure_bootstrap_admin_for_login(db, normalized, password)
    if user is None:
        user = get_active_admin_by_email(db, normalized)
    if user is None or not verify_password(password, user.password_hash):
        return None
    return user
