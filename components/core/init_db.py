"""Database initialization and dependency injection."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import fastapi
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.config import get_settings
from components.core.database import DatabaseManager
# Import all models to ensure they're registered
import components.payment.models

logger = logging.getLogger(__name__)

# Create a single instance of DatabaseManager
db_manager = DatabaseManager()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for getting database sessions."""
    async with db_manager.get_db() as session:
        yield session


@asynccontextmanager
async def lifespan(app: fastapi.FastAPI) -> AsyncGenerator[None, None]:
    """Create tables on startup if configured, release the pool on shutdown."""
    if get_settings().CREATE_TABLES:
        await db_manager.create_tables()
        logger.info("Database tables ensured")
    yield
    await db_manager.dispose()
    logger.info("Database engine disposed")
