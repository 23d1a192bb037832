from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool

from academy.config.settings import get_settings


settings = get_settings()


def create_app_engine() -> AsyncEngine:
    """Create the async engine for Postgres or a local SQLite file.

    - Postgres: standard pool with pre-ping.
    - SQLite (tests, local experiments): no pooling, every session opens its own connection.
    """
    database_url = settings.DATABASE_URL

    if database_url.startswith("sqlite"):
        return create_async_engine(
            database_url,
            echo=False,
            poolclass=NullPool,
        )

    return create_async_engine(
        database_url,
        echo=False,  # Set True for SQL debugging
        pool_size=10,
        max_overflow=10,
        pool_recycle=3600,  # ~1h
        pool_pre_ping=True,
        connect_args={"connect_timeout": 10},
    )


engine: AsyncEngine = create_app_engine()
