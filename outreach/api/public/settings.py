from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from outreach.db.session import get_db
from outreach.services.site_settings import get_public_setting_value, normalize_setting_key

router = APIRouter()


@router.get("/{key}")
def get_setting(key: str, db: Session = Depends(get_db)):
    return {"key": normalize_setting_key(key), "value": get_public_setting_value(db, key)}
