from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from outreach.core.deps import require_admin
from outreach.db.session import get_db
from outreach.schemas.admin import SettingUpdate
from outreach.services.site_settings import get_setting_value, normalize_setting_key, put_setting

router = APIRouter()


@router.get("/{key}")
def get_setting(key: str, db: Session = Depends(get_db), admin=Depends(require_admin)):
    return {"key": normalize_setting_key(key), "value": get_setting_value(db, key)}


@router.put("/{key}")
def update_setting(key: str, payload: SettingUpdate, db: Session = Depends(get_db), admin=Depends(require_admin)):
    row = put_setting(db, key, payload.value)
    return {"key": row.key, "value": row.value}
