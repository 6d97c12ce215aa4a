# =============================================================================
# Process Resources: Explicit Client Construction and Release
# =============================================================================
#
# Each process opens its backing-store clients exactly once, checks them,
# hands them to the gateways/worker, and releases them on shutdown:
#
#   async with open_resources(settings) as resources:
#       await verify_resources(resources)
#       gateway = SubmissionGateway(resources.cache, resources.channel, ...)
#
# Two Redis clients are created from the same URL: one for hash commands
# (cache) and one for pub/sub (channel). The worker opens no database.
# =============================================================================

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncEngine

from fibcalc.config import Settings
from fibcalc.db.engine import build_engine, build_session_factory, check_database
from fibcalc.db.store import SubmissionStore
from fibcalc.services.cache import ValuesCache
from fibcalc.services.channel import NotificationChannel
from fibcalc.services.startup import ensure_connection

logger = logging.getLogger(__name__)


@dataclass
class Resources:
    """Clients owned by one process for its whole lifetime."""

    settings: Settings
    cache: ValuesCache
    channel: NotificationChannel
    engine: AsyncEngine | None = None
    store: SubmissionStore | None = None


def _build_redis(settings: Settings) -> Redis:
    return Redis.from_url(settings.resolved_redis_url(), decode_responses=True)


@asynccontextmanager
async def open_resources(
    settings: Settings,
    *,
    with_database: bool = True,
) -> AsyncIterator[Resources]:
    """Create the clients, yield them, and close them on exit."""
    cache_redis = _build_redis(settings)
    pubsub_redis = _build_redis(settings)
    engine = build_engine(settings) if with_database else None

    resources = Resources(
        settings=settings,
        cache=ValuesCache(cache_redis, settings.values_key, settings.placeholder),
        channel=NotificationChannel(pubsub_redis, settings.insert_channel),
        engine=engine,
        store=SubmissionStore(build_session_factory(engine)) if engine is not None else None,
    )
    try:
        yield resources
    finally:
        await pubsub_redis.aclose()
        await cache_redis.aclose()
        if engine is not None:
            await engine.dispose()
        logger.info("Backing-store clients closed")


async def verify_resources(resources: Resources) -> None:
    """
    Startup probes for every opened backing store, Postgres first.

    Raises:
        BackingStoreUnavailableError: a store never answered.
    """
    settings = resources.settings
    if resources.engine is not None:
        engine = resources.engine
        await ensure_connection(
            "Postgres",
            lambda: check_database(engine),
            retries=settings.startup_max_retries,
            delay=settings.postgres_retry_delay,
        )
    await ensure_connection(
        "Redis",
        resources.cache.ping,
        retries=settings.startup_max_retries,
        delay=settings.redis_retry_delay,
    )
    await ensure_connection(
        "Redis pub/sub",
        resources.channel.ping,
        retries=settings.startup_max_retries,
        delay=settings.redis_retry_delay,
    )
