from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError
from sqlalchemy.orm import Session

from labcatalog.core.security import ADMIN_ROLES, decode_token, token_too_old
from labcatalog.db.session import get_db
from labcatalog.models.user import User

bearer = HTTPBearer(auto_error=False)


def _get_user_from_access_token(creds: HTTPAuthorizationCredentials | None, db: Session) -> tuple[User, dict]:
    if creds is None or not creds.credentials:
        raise HTTPException(status_code=401, detail="Access denied. No token provided.")
    try:
        payload = decode_token(creds.credentials)
    except ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired. Please login again.")
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid token. Please login again.")
    if payload.get("type") != "access":
        raise HTTPException(status_code=401, detail="Invalid token type")
    if token_too_old(payload):
        raise HTTPException(status_code=401, detail="Token too old. Please login again for security reasons.")
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise HTTPException(status_code=401, detail="Invalid token. Please login again.")
    user = db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=401, detail="User not found.")
    return user, payload


def get_current_admin(
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
    db: Session = Depends(get_db),
) -> User:
    user, payload = _get_user_from_access_token(creds, db)
    if not user.active:
        raise HTTPException(status_code=401, detail="User account is disabled. Please contact an administrator.")
    if payload.get("role") != user.role:
        raise HTTPException(status_code=401, detail="Token invalid due to role change. Please login again.")
    if user.role not in ADMIN_ROLES:
        raise HTTPException(status_code=403, detail="Access denied. Admin role required.")
    return user
