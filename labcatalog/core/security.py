from datetime import datetime, timedelta, timezone

from jose import jwt

from labcatalog.core.config import settings

ALGO = "HS256"
ADMIN_ROLES = {"admin", "superadmin"}

def now_utc() -> datetime:
    return datetime.now(timezone.utc)

def create_access_token(sub: str, role: str) -> str:
    issued = now_utc()
    exp = issued + timedelta(minutes=settings.JWT_ACCESS_MINUTES)
    payload = {"sub": sub, "role": role, "type": "access", "iat": issued, "exp": exp}
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=ALGO)

def decode_token(token: str) -> dict:
    return jwt.decode(token, settings.JWT_SECRET, algorithms=[ALGO])

def token_too_old(payload: dict) -> bool:
    issued_at = payload.get("iat")
    if issued_at is None:
        return True
    issued = datetime.fromtimestamp(int(issued_at), tz=timezone.utc)
    return now_utc() - issued > timedelta(days=settings.JWT_MAX_TOKEN_AGE_DAYS)
