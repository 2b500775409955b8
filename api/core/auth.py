"""API-key authentication.

Two keys:
- service role key: privileged, required on every /api/admin route
- public API key: optional; when configured, directory routes require it
  (or the service role key) in an ``apikey`` header or a bearer token
"""

from __future__ import annotations

import secrets
from typing import Annotated

from fastapi import Depends, HTTPException, Request

from core.config import get_settings
from core.logger import get_logger
from core.wide_event import set_wide_event_fields

logger = get_logger(__name__)


def _bearer_token(request: Request) -> str | None:
    header = request.headers.get("authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def _matches(candidate: str, key: str) -> bool:
    return bool(key) and secrets.compare_digest(
        candidate.encode("utf-8"), key.encode("utf-8")
    )


def require_service_role(request: Request) -> str:
    """Raises unless the request carries the service role key.

    500 when the key is not configured, 401 without a token, 403 for a wrong
    token.
    """
    service_key = get_settings().service_role_key
    if not service_key:
        logger.error("auth.service_role_key.missing", path=request.url.path)
        raise HTTPException(status_code=500, detail="Service configuration error")

    token = _bearer_token(request)
    if token is None:
        raise HTTPException(
            status_code=401,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not _matches(token, service_key):
        set_wide_event_fields(auth_error="invalid_service_key")
        raise HTTPException(status_code=403, detail="Admin access required")

    set_wide_event_fields(auth_role="service")
    return "service"


def require_public_key(request: Request) -> str:
    """Open when no public key is configured, otherwise 401 without one."""
    settings = get_settings()
    if not settings.public_api_key:
        return "anon"

    token = request.headers.get("apikey") or _bearer_token(request)
    if token is None:
        raise HTTPException(status_code=401, detail="Unauthorized")

    if _matches(token, settings.service_role_key):
        set_wide_event_fields(auth_role="service")
        return "service"
    if _matches(token, settings.public_api_key):
        set_wide_event_fields(auth_role="anon")
        return "anon"

    set_wide_event_fields(auth_error="invalid_api_key")
    raise HTTPException(status_code=401, detail="Unauthorized")


ServiceRole = Annotated[str, Depends(require_service_role)]
PublicRole = Annotated[str, Depends(require_public_key)]
