"""Database initialization - registers models and creates tables."""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine

# Import all models to register them with Base metadata
from academy.curriculum.models import *  # noqa: F403
from academy.exercises.models import *  # noqa: F403
from academy.profiles.models import *  # noqa: F403
from academy.progress.models import *  # noqa: F403
from academy.quizzes.models import *  # noqa: F403
from academy.recommendations.models import *  # noqa: F403

from .base import Base


logger = logging.getLogger(__name__)


async def init_database(db_engine: AsyncEngine) -> None:
    """Create all tables from the registered models."""
    async with db_engine.begin() as conn:
        logger.info("Creating database tables from models...")
        await conn.run_sync(Base.metadata.create_all)
        logger.info("All tables created successfully")


async def drop_database(db_engine: AsyncEngine) -> None:
    """Drop every table known to the metadata."""
    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.info("All tables dropped")
