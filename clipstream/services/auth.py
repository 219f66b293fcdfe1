"""
Identity Verification
Bearer JWT verification for required and optional authentication.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import Header
from jose import JWTError, jwt

from ..config import get_settings
from ..utils.exceptions import AuthenticationError
from ..utils.logger import get_logger

logger = get_logger()


def create_access_token(user_id: str, expires_in: timedelta = timedelta(hours=24)) -> str:
    """Issue a signed token for ``user_id``. Used by tooling and tests."""
    settings = get_settings()
    now = datetime.now(timezone.utc)
    payload: Dict[str, Any] = {
        "sub": user_id,
        "user": {"id": user_id},
        "iat": now,
        "exp": now + expires_in,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> str:
    """Return the user id carried by ``token`` or raise AuthenticationError."""
    settings = get_settings()
    try:
        claims = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise AuthenticationError("Token is not valid") from exc

    user = claims.get("user") or {}
    user_id = user.get("id") if isinstance(user, dict) else None
    user_id = user_id or claims.get("sub")
    if not user_id:
        raise AuthenticationError("Token is not valid")
    return str(user_id)


def _extract_bearer(authorization: Optional[str]) -> str:
    if not authorization:
        return ""
    scheme, _, credential = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return ""
    return credential.strip()


async def require_user(authorization: Optional[str] = Header(default=None)) -> str:
    """Dependency for endpoints that need an authenticated caller."""
    token = _extract_bearer(authorization)
    if not token:
        raise AuthenticationError()
    return verify_token(token)


async def optional_viewer(authorization: Optional[str] = Header(default=None)) -> Optional[str]:
    """
    Dependency for public endpoints that personalize when they can.

    Resolved once per request; a missing or bad credential means an anonymous
    viewer, never an error.
    """
    token = _extract_bearer(authorization)
    if not token:
        return None
    try:
        return verify_token(token)
    except AuthenticationError:
        logger.debug("Ignoring invalid bearer token on public endpoint")
        return None
