"""
Main entrypoint for the Lawn Care Booking API.

This module assembles the FastAPI application: it sets up logging,
builds the storage backend selected by the settings, registers error
handlers and includes the API router under ``/api``.  ``create_app``
accepts explicit settings and an explicit storage instance so tests
and embedding applications control both; the module-level ``app``
uses the environment configuration and can be served with::

    uvicorn lawncare_api.app.main:app --reload
"""

import dataclasses
import logging
import secrets
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.router import router as api_router
from .core.config import Settings, settings as default_settings
from .core.logging_config import setup_logging
from .core.security import TokenBlocklist
from .services.user_service import UserService
from .storage import Storage, create_storage


logger = logging.getLogger(__name__)


async def bootstrap_admin(storage: Storage, settings: Settings) -> None:
    """Seed the administrator account configured in the settings, if any."""
    if not settings.admin_username or not settings.admin_password:
        logger.warning("ADMIN_USERNAME/ADMIN_PASSWORD not set; no administrator account seeded")
        return
    await UserService(storage).ensure_admin(settings.admin_username, settings.admin_password)


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        content = exc.detail if isinstance(exc.detail, dict) else {"message": exc.detail}
        return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = [
            {
                "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body") or "body",
                "message": error.get("msg", "Invalid value"),
            }
            for error in exc.errors()
        ]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=jsonable_encoder({"message": "Invalid request data", "errors": errors}),
        )

    @app.exception_handler(Exception)
    async def unexpected_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error"},
        )


def create_app(settings: Optional[Settings] = None, storage: Optional[Storage] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use.  Defaults to the environment-derived
        settings from ``core.config``.
    storage : Optional[Storage]
        Storage backend to use.  When omitted one is built from
        ``settings.storage_backend``.  The backend is opened on startup
        and closed on shutdown.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    setup_logging(settings)

    if not settings.secret_key:
        logger.warning("SECRET_KEY not set; generated a temporary key, tokens will not survive a restart")
        settings = dataclasses.replace(settings, secret_key=secrets.token_urlsafe(32))

    storage = storage or create_storage(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await storage.open()
        await bootstrap_admin(storage, settings)
        try:
            yield
        finally:
            await storage.close()

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.storage = storage
    app.state.token_blocklist = TokenBlocklist()

    _register_error_handlers(app)
    app.include_router(api_router, prefix="/api")

    return app


# Created at import time so uvicorn can discover it.
app = create_app()
