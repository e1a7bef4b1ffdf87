# src/radio_calico/main.py
"""Main entry point for the Radio Calico application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from radio_calico.api import (
    ratings_router,
    register_exception_handlers,
    system_router,
    users_router,
)
from radio_calico.core.logging import configure_logging
from radio_calico.core.settings import Settings, settings as default_settings
from radio_calico.db.session import Database

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """Build the FastAPI application around an explicitly owned database.

    Args:
        settings: Configuration to use; defaults to the environment-derived settings.
        database: Pre-built database, mainly for tests; built from settings otherwise.
    """
    settings = settings or default_settings
    owns_database = database is None
    database = database or Database.from_settings(settings)

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Live radio song ratings and user registration",
        version=settings.app_version,
        debug=settings.debug,
    )
    app.state.settings = settings
    app.state.database = database

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    # Add GZip middleware for compression
    app.add_middleware(GZipMiddleware)

    register_exception_handlers(app)

    app.include_router(system_router)
    app.include_router(ratings_router)
    app.include_router(users_router)

    @app.on_event("startup")
    def on_startup() -> None:
        database.create_tables()
        logger.info("Database initialized (%s)", database.backend)

    @app.on_event("shutdown")
    def on_shutdown() -> None:
        if owns_database:
            database.dispose()
            logger.info("Database pool closed")

    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    configure_logging(default_settings.log_level)
    logger.info(
        "%s server running at http://%s:%d",
        default_settings.app_name,
        default_settings.host,
        default_settings.port,
    )
    uvicorn.run(
        "radio_calico.main:app",
        host=default_settings.host,
        port=default_settings.port,
        reload=default_settings.debug,
    )


if __name__ == "__main__":
    run()
