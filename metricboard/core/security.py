"""JWT-backed session checks that resolve the requesting tenant."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt
from fastapi import HTTPException, Request, status
from jwt import ExpiredSignatureError, InvalidTokenError

from metricboard.core.config import AuthSettings, get_settings
from metricboard.core.logger import get_logger

LOGGER = get_logger(__name__)


class AuthenticationError(Exception):
    """Raised when authentication or token validation fails."""


@dataclass(frozen=True, slots=True)
class TenantPrincipal:
    """The authenticated owner whose metric rows may be read."""

    tenant_id: str
    subject: str | None = None


def _auth_settings(settings: AuthSettings | None) -> AuthSettings:
    return settings or get_settings().auth


def create_access_token(
    tenant_id: str,
    *,
    subject: str | None = None,
    settings: AuthSettings | None = None,
) -> str:
    """Create a signed JWT granting access to ``tenant_id``."""

    auth = _auth_settings(settings)
    now = datetime.now(tz=timezone.utc)
    expires = now + timedelta(minutes=auth.access_token_expire_minutes)
    payload: dict[str, object] = {
        "sub": subject or tenant_id,
        "tenant_id": tenant_id,
        "iat": int(now.timestamp()),
        "exp": int(expires.timestamp()),
    }
    return jwt.encode(payload, auth.secret_key, algorithm=auth.algorithm)


def decode_access_token(token: str, *, settings: AuthSettings | None = None) -> TenantPrincipal:
    """Decode a JWT and return the corresponding ``TenantPrincipal``."""

    auth = _auth_settings(settings)
    try:
        payload = jwt.decode(token, auth.secret_key, algorithms=[auth.algorithm])
    except ExpiredSignatureError as exc:
        raise AuthenticationError("Token expired") from exc
    except InvalidTokenError as exc:
        raise AuthenticationError("Invalid token") from exc

    tenant_id = payload.get("tenant_id")
    if not isinstance(tenant_id, str) or not tenant_id:
        raise AuthenticationError("Token payload missing tenant_id claim")
    subject = payload.get("sub")
    return TenantPrincipal(
        tenant_id=tenant_id,
        subject=subject if isinstance(subject, str) else None,
    )


def _extract_token(request: Request, cookie_name: str) -> str | None:
    header = request.headers.get("Authorization", "")
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials.strip()
    return request.cookies.get(cookie_name)


def get_current_tenant(request: Request) -> TenantPrincipal:
    """Resolve the tenant for the current request or reject it with 401."""

    auth = get_settings().auth
    if not auth.enabled:
        return TenantPrincipal(tenant_id=auth.default_tenant_id)

    token = _extract_token(request, auth.cookie_name)
    if token is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Login required")
    try:
        return decode_access_token(token, settings=auth)
    except AuthenticationError as exc:
        LOGGER.info("Rejected session token: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
        ) from exc
