import secrets
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from tresor.api.dependencies import CredentialComponents
from tresor.api.exception_handlers import (base_api_exception_handler,
                                           general_exception_handler,
                                           http_exception_handler,
                                           validation_exception_handler)
from tresor.api.routes import auth, health, users
from tresor.core.config import Settings, get_settings
from tresor.core.exceptions import BaseAPIException
from tresor.infrastructure.database import DatabaseConnection
from tresor.infrastructure.logging import get_logger, setup_logging
from tresor.infrastructure.middleware.correlation import CorrelationIDMiddleware
from tresor.infrastructure.middleware.logging import LoggingMiddleware

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    setup_logging(settings)
    logger.info(
        "application_startup",
        app_name=settings.app_name,
        environment=settings.environment,
        bcrypt_rounds=settings.bcrypt_rounds,
        credential_workers=settings.effective_credential_workers,
    )

    db = DatabaseConnection(settings.database_url)
    await db.connect()
    await db.create_schema()

    credentials = CredentialComponents.from_settings(settings)
    # Verified against for unknown emails; its plaintext is never kept
    credentials.dummy_hash = await credentials.executor.run(
        credentials.password_hasher.hash_password, secrets.token_urlsafe(32)
    )

    app.state.db = db
    app.state.credentials = credentials

    try:
        yield
    finally:
        credentials.executor.shutdown()
        await db.disconnect()
        logger.info("application_shutdown", app_name=settings.app_name)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application; tests pass their own settings."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="User registration and password authentication backend",
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(LoggingMiddleware)
    app.add_middleware(CorrelationIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cross_origin],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    app.add_exception_handler(BaseAPIException, base_api_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    @app.get("/", response_model=Dict[str, Any])
    async def root():
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "status": "running",
            "environment": settings.environment,
            "endpoints": {
                "api": settings.api_prefix,
                "docs": "/docs",
                "health": "/health",
                "metrics": "/metrics",
            },
        }

    # Health and metrics at root level (no prefix)
    app.include_router(health.router)

    app.include_router(users.router, prefix=settings.api_prefix)
    app.include_router(auth.router, prefix=settings.api_prefix)

    return app


app = create_app()
