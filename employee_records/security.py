"""
Authentication helpers.

Passwords are hashed with bcrypt through passlib. Access tokens
are HS256 JWTs carrying the user id in "sub", issued at signup
and login and checked on every protected route by
get_current_user.
"""

from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from passlib.exc import UnknownHashError
from sqlalchemy.orm import Session

from employee_records.config import get_settings
from employee_records.errors import AuthenticationError
from employee_records.models.base import get_db
from employee_records.models.user import User

bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache()
def get_pwd_context() -> CryptContext:
    settings = get_settings()
    return CryptContext(
        schemes=["bcrypt"],
        deprecated="auto",
        bcrypt__rounds=settings.BCRYPT_ROUNDS,
    )


def hash_password(password: str) -> str:
    return get_pwd_context().hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return get_pwd_context().verify(password, password_hash)
    except (ValueError, TypeError, UnknownHashError):
        # A corrupt stored hash is a failed login, not a crash.
        return False


def create_access_token(user_id: int, *, now: datetime | None = None) -> str:
    settings = get_settings()
    now = now or datetime.now(timezone.utc)
    claims = {
        "sub": str(user_id),
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(days=settings.JWT_EXPIRES_DAYS)).timestamp()),
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> int:
    """Return the user id carried by a valid token."""
    settings = get_settings()
    try:
        payload: dict[str, Any] = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require_sub": True, "require_exp": True},
        )
    except JWTError as exc:
        raise AuthenticationError("Invalid token") from exc

    subject = payload.get("sub")
    try:
        return int(subject)
    except (TypeError, ValueError) as exc:
        raise AuthenticationError("Invalid token") from exc


def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """
    Resolve the bearer token to a stored user.

    Absent header, bad signature, expiry, and a token for a user
    that no longer exists all fail with 401.
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationError("Unauthorized")

    user_id = decode_access_token(credentials.credentials)
    user = db.get(User, user_id)
    if user is None:
        raise AuthenticationError("Unauthorized")

    request.state.actor_id = user.id
    return user
