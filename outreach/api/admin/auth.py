from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from outreach.core.config import settings
from outreach.core.deps import get_current_admin
from outreach.core.security import create_admin_token
from outreach.db.session import get_db
from outreach.schemas.admin import AdminLogin, AdminToken
from outreach.services.admin_bootstrap import authenticate_admin

router = APIRouter()


@router.post("/login", response_model=AdminToken)
def login(payload: AdminLogin, db: Session = Depends(get_db)):
    user = authenticate_admin(db, payload.email, payload.password)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid email or password")
    token = create_admin_token(
        user_id=str(user.id),
        email=user.email,
        role=user.role,
        secret=settings.ADMIN_JWT_SECRET,
        ttl_minutes=settings.ADMIN_JWT_TTL_MINUTES,
    )
    return AdminToken(access_token=token)


@router.get("/me")
def me(admin: dict = Depends(get_current_admin)):
    return {"email": admin.get("email"), "role": admin.get("role")}
