"""
Token gate for mutating project routes.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, Request

from portfolio_api.config import Settings, get_settings
from portfolio_api.db import DbClient
from portfolio_api.dependencies import get_db_client
from portfolio_api.errors import ApiError

logger = logging.getLogger(__name__)


def _bearer_token(request: Request) -> Optional[str]:
    header = request.headers.get("authorization")
    if not header:
        return None
    scheme, _, value = header.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    return value.strip() or None


def _cookie_token(request: Request, cookie_name: str) -> Optional[str]:
    return request.cookies.get(cookie_name) or None


def extract_credential(request: Request, settings: Settings) -> Optional[str]:
    """Return the caller's token from the configured transport, if any."""
    if settings.auth_transport == "cookie":
        return _cookie_token(request, settings.auth_cookie_name)
    return _bearer_token(request)


def require_token(
    request: Request,
    settings: Settings = Depends(get_settings),
    db: DbClient = Depends(get_db_client),
) -> str:
    token = extract_credential(request, settings)
    if not token:
        raise ApiError(401, "Unauthorized")
    if not db.check_token(token):
        logger.info("Rejected %s %s: invalid token", request.method, request.url.path)
        raise ApiError(401, "Unauthorized")
    return token
