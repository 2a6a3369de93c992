from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from outreach.core.deps import require_admin
from outreach.db.session import get_db
from outreach.schemas.forms import FormConfigUpdate
from outreach.services.form_configs import (
    get_form_config,
    list_form_configs,
    serialize_form_config,
    upsert_form_config,
)

router = APIRouter()


@router.get("")
def get_forms(db: Session = Depends(get_db), admin=Depends(require_admin)):
    return [serialize_form_config(row) for row in list_form_configs(db)]


@router.get("/{form_type}")
def get_form(form_type: str, db: Session = Depends(get_db), admin=Depends(require_admin)):
    return serialize_form_config(get_form_config(db, form_type))


@router.put("/{form_type}")
def put_form(form_type: str, payload: FormConfigUpdate, db: Session = Depends(get_db), admin=Depends(require_admin)):
    return serialize_form_config(upsert_form_config(db, form_type, payload))
