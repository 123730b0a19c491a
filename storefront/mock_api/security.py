"""
Bearer token handling for the mock API

Tokens are HS256 JWTs carrying the user id and role. Requests without a
token proceed anonymously; endpoints that need a user declare it through
the dependencies below.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt
from fastapi import Depends, HTTPException, Request

from ..core.config import get_settings
from ..models.auth import Role, User

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


def issue_token(user: User) -> str:
    settings = get_settings()
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user.id),
        "role": user.role.value,
        "iat": now,
        "exp": now + timedelta(hours=settings.jwt_ttl_hours),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=ALGORITHM)


def decode_token(token: str) -> dict:
    return jwt.decode(token, get_settings().jwt_secret, algorithms=[ALGORITHM])


def _bearer(request: Request) -> Optional[str]:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    return token


async def optional_user(request: Request) -> Optional[User]:
    """Signed-in user, or None for anonymous requests"""
    token = _bearer(request)
    if not token:
        return None
    try:
        claims = decode_token(token)
    except jwt.PyJWTError as e:
        logger.warning(f"Rejected bearer token: {e}")
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    user = request.app.state.user_db.get_by_id(claims.get("sub"))
    if not user:
        raise HTTPException(status_code=401, detail="User not found")
    return user


async def require_user(user: Optional[User] = Depends(optional_user)) -> User:
    if user is None:
        raise HTTPException(status_code=401, detail="Authentication required")
    return user


def require_roles(*roles: Role) -> Callable:
    """Dependency factory restricting an endpoint to some roles"""

    async def dependency(user: User = Depends(require_user)) -> User:
        if user.role not in roles:
            raise HTTPException(status_code=403, detail="Insufficient permissions")
        return user

    return dependency
