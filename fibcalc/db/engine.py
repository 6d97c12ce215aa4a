# =============================================================================
# Database Engine & Session Factory
# =============================================================================
#
# The engine is built explicitly from Settings by the process that owns it
# (see fibcalc/resources.py) and disposed when that process shuts down.
# Nothing here is created at import time.
#
# Pool sizing comes from Settings.pool_size / max_overflow. The API serves
# requests concurrently, so each request checks out its own connection;
# there is no application-level locking around writes.
# =============================================================================

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from fibcalc.config import Settings
from fibcalc.db.models import Base


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine (asyncpg) for the Durable Store."""
    return create_async_engine(
        settings.resolved_database_url(),
        echo=settings.debug,
        pool_size=settings.pool_size,
        max_overflow=settings.max_overflow,
        pool_pre_ping=True,
        connect_args=settings.database_connect_args(),
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False so rows stay readable after the session closes
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def check_database(engine: AsyncEngine) -> None:
    """
    Startup probe: ``SELECT 1`` followed by idempotent table creation.

    Raises whatever the driver raises; the caller owns the retry policy.
    """
    async with engine.begin() as conn:
        await conn.execute(text("SELECT 1"))
        await conn.run_sync(Base.metadata.create_all)
