from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from outreach.core.deps import require_admin
from outreach.db.session import get_db
from outreach.scripts.seed_forms import seed_default_form_configs
from outreach.services.email_service import email_provider_health

router = APIRouter()
_LOG = logging.getLogger("outreach.admin")


@router.post("/init")
def init_defaults(db: Session = Depends(get_db), admin: dict = Depends(require_admin)):
    created, skipped = seed_default_form_configs(db)
    _LOG.info("default forms seeded by %s created=%s skipped=%s", admin.get("email"), created, skipped)
    return {"success": True, "created": created, "skipped": skipped}


@router.get("/email-provider-health")
def get_email_provider_health(admin: dict = Depends(require_admin)):
    _ = admin
    return email_provider_health()
