"""Tests for bearer token verification"""
from datetime import timedelta

import pytest
from jose import jwt

from clipstream.config import get_settings
from clipstream.services.auth import (
    create_access_token,
    optional_viewer,
    require_user,
    verify_token,
)
from clipstream.utils.exceptions import AuthenticationError


def test_issued_token_verifies():
    assert verify_token(create_access_token("user-42")) == "user-42"


def test_subject_only_token_accepted():
    settings = get_settings()
    token = jwt.encode({"sub": "user-7"}, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    assert verify_token(token) == "user-7"


@pytest.mark.parametrize(
    "token",
    [
        "garbage",
        jwt.encode({"sub": "user-1"}, "wrong-secret", algorithm="HS256"),
    ],
)
def test_bad_tokens_rejected(token):
    with pytest.raises(AuthenticationError) as exc_info:
        verify_token(token)
    assert exc_info.value.status_code == 401


def test_expired_token_rejected():
    token = create_access_token("user-1", expires_in=timedelta(seconds=-10))
    with pytest.raises(AuthenticationError):
        verify_token(token)


@pytest.mark.asyncio
async def test_optional_viewer_degrades_to_anonymous():
    assert await optional_viewer(None) is None
    assert await optional_viewer("Bearer not-a-jwt") is None
    assert await optional_viewer("Basic abc") is None
    assert await optional_viewer(f"Bearer {create_access_token('u9')}") == "u9"


@pytest.mark.asyncio
async def test_require_user_needs_credential():
    with pytest.raises(AuthenticationError):
        await require_user(None)
    with pytest.raises(AuthenticationError):
        await require_user("Bearer not-a-jwt")
    assert await require_user(f"Bearer {create_access_token('u9')}") == "u9"
