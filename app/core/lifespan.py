"""Application lifespan: startup and shutdown.

Single place for startup/shutdown wiring (logging, DB engine dispose);
no business logic here.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.core.config import get_settings
from app.shared.telemetry.logging import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging, then yield; on exit dispose the SQL engine if one was created."""
    setup_logging()
    settings = get_settings()
    if not settings.database_url:
        logger.warning(
            "DATABASE_URL is not set; SQL-backed routes will answer 503"
        )
    logger.info("%s %s started", settings.app_name, settings.app_version)

    yield

    from app.infrastructure.persistence import database

    if getattr(database, "engine", None) is not None:
        await database.engine.dispose()
        logger.info("Database engine disposed")
