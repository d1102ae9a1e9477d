"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

import logging

from portfolio_api.config import get_settings
from portfolio_api.db import DbClient, NullDbClient, SqlDbClient
from portfolio_api.errors import ConfigurationError

logger = logging.getLogger(__name__)

_db_client: DbClient | None = None


def get_db_client() -> DbClient:
    """
    Return the process-wide storage adapter, choosing the variant on first use.
    """
    global _db_client
    if _db_client:
        return _db_client

    settings = get_settings()
    if settings.offline_mode:
        logger.warning("Offline mode enabled; storage operations are no-ops")
        _db_client = NullDbClient()
    elif settings.database_url:
        _db_client = SqlDbClient(settings.database_url)
    else:
        raise ConfigurationError(
            "Database binding not found. Set DATABASE_URL or enable "
            "PORTFOLIO_OFFLINE_MODE for local runs."
        )
    return _db_client


def reset_db_client() -> None:
    """Forget the cached adapter so the next call re-reads settings."""
    global _db_client
    _db_client = None
