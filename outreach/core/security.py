from datetime import datetime, timedelta, timezone
from jose import jwt
from passlib.context import CryptContext

JWT_ALGORITHM = "HS256"

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

def hash_password(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(password: str, password_hash: str) -> bool:
    if not password_hash:
        return False
    return pwd_context.verify(password, password_hash)

def create_jwt(payload: dict, secret: str, expires_delta: timedelta) -> str:
    now = datetime.now(timezone.utc)
    claims = {**payload, "iat": int(now.timestamp()), "exp": int((now + expires_delta).timestamp())}
    return jwt.encode(claims, secret, algorithm=JWT_ALGORITHM)

def decode_jwt(token: str, secret: str) -> dict:
    return jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])

def create_admin_token(*, user_id: str, email: str, role: str, secret: str, ttl_minutes: int) -> str:
    """Bearer token for the admin API; ``email`` is re-checked against ADMIN_EMAILS on every request."""
    return create_jwt(
        {"sub": user_id, "email": email.strip().lower(), "role": role},
        secret,
        timedelta(minutes=max(int(ttl_minutes), 1)),
    )
