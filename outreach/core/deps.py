from fastapi import Depends, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from outreach.core.config import settings
from outreach.core.security import decode_jwt

bearer = HTTPBearer(auto_error=False)

ADMIN_ROLE = "ADMIN"


def _decode_admin(token: str) -> dict:
    try:
        claims = decode_jwt(token, settings.ADMIN_JWT_SECRET)
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid token")
    allowlist = settings.admin_emails_list
    if allowlist and str(claims.get("email") or "").strip().lower() not in allowlist:
        raise HTTPException(status_code=403, detail="Not an administrator")
    return claims

def get_current_admin(creds: HTTPAuthorizationCredentials = Depends(bearer)) -> dict:
    if not creds:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return _decode_admin(creds.credentials)

def get_optional_admin(creds: HTTPAuthorizationCredentials = Depends(bearer)) -> dict | None:
    if not creds:
        return None
    return _decode_admin(creds.credentials)

def require_role(*roles: str):
    def _inner(admin: dict = Depends(get_current_admin)) -> dict:
        if admin.get("role") not in roles:
            raise HTTPException(status_code=403, detail="Forbidden")
        return admin
    return _inner

require_admin = require_role(ADMIN_ROLE)
