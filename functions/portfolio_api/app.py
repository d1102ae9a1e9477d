"""
FastAPI application entry point for the portfolio backend.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from portfolio_api.config import Settings, get_settings
from portfolio_api.errors import ApiError, PortfolioApiError
from portfolio_api.routes import router

logger = logging.getLogger(__name__)


async def _api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.as_dict())


async def _backend_error_handler(
    request: Request, exc: PortfolioApiError
) -> JSONResponse:
    logger.error("Unhandled backend failure on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=500,
        content={"error": "Storage unavailable", "details": str(exc)},
    )


def create_api(settings: Settings) -> FastAPI:
    """The /api sub-application; CORS only applies underneath it."""
    api = FastAPI(title="Portfolio API", version="0.1.0")
    api.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_origin],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["content-type", "Authorization"],
        max_age=settings.cors_max_age,
    )
    api.add_exception_handler(ApiError, _api_error_handler)
    api.add_exception_handler(PortfolioApiError, _backend_error_handler)
    api.include_router(router)
    return api


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(title="Portfolio Backend (FastAPI)", version="0.1.0")
    api = create_api(settings)

    @app.get("/", response_class=PlainTextResponse)
    def index():
        return "Portfolio API is up and running"

    @app.get("/debug/env")
    def debug_env():
        return {
            "has_db": bool(settings.database_url),
            "offline_mode": settings.offline_mode,
            "environment": settings.environment,
            "env_keys": sorted(settings.model_fields_set),
        }

    app.mount(settings.api_prefix, api)
    app.state.api = api
    return app


app = create_app()
