"""Tests for session token handling."""
from __future__ import annotations

import pytest

from metricboard.core.config import AuthSettings
from metricboard.core.security import (
    AuthenticationError,
    create_access_token,
    decode_access_token,
)


@pytest.fixture()
def auth_settings() -> AuthSettings:
    return AuthSettings(
        secret_key="unit-test-secret-0123456789abcdef",
        algorithm="HS256",
        access_token_expire_minutes=5,
        default_tenant_id="demo",
    )


def test_token_round_trip_resolves_tenant(auth_settings: AuthSettings) -> None:
    token = create_access_token("tenant-42", subject="alice", settings=auth_settings)

    principal = decode_access_token(token, settings=auth_settings)

    assert principal.tenant_id == "tenant-42"
    assert principal.subject == "alice"


def test_token_signed_with_other_secret_is_rejected(auth_settings: AuthSettings) -> None:
    other = AuthSettings(
        secret_key="another-secret-0123456789abcdefghij",
        algorithm="HS256",
        access_token_expire_minutes=5,
        default_tenant_id="demo",
    )
    token = create_access_token("tenant-42", settings=other)

    with pytest.raises(AuthenticationError, match="Invalid token"):
        decode_access_token(token, settings=auth_settings)


def test_expired_token_is_rejected(auth_settings: AuthSettings) -> None:
    auth_settings.access_token_expire_minutes = -1
    token = create_access_token("tenant-42", settings=auth_settings)

    with pytest.raises(AuthenticationError, match="Token expired"):
        decode_access_token(token, settings=auth_settings)
