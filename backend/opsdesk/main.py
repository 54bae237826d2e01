"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from opsdesk.config import get_settings
from opsdesk.infrastructure.database import create_tables, engine
from opsdesk.infrastructure.logging.log_config import setup_logging
from opsdesk.presentation.api.errors import register_exception_handlers
from opsdesk.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — configure logging, create tables and the storage root."""
    settings = get_settings()
    setup_logging()

    # 1. Create all database tables
    await create_tables()

    # 2. Ensure the object storage directory exists
    Path(settings.storage_dir).mkdir(parents=True, exist_ok=True)

    logger.info(
        "%s %s started (env=%s, timezone=%s)",
        settings.app_title,
        settings.app_version,
        settings.app_env,
        settings.display_timezone,
    )
    yield
    logger.info("%s shutting down", settings.app_title)
    await engine.dispose()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Mount API routes
    app.include_router(api_router)

    # Public URLs handed out by the object storage
    app.mount(
        settings.storage_base_url,
        StaticFiles(directory=settings.storage_dir, check_dir=False),
        name="files",
    )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "opsdesk.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
