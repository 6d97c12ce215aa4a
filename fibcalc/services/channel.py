# =============================================================================
# Notification Channel: Redis Pub/Sub
# =============================================================================
#
# One fixed topic (default "insert"). The payload is the raw index text as
# submitted. Delivery is at-most-once to whoever is subscribed at publish
# time: nothing is persisted and nothing is replayed.
#
# The channel owns its own Redis client, separate from the cache client,
# because a connection in subscribe mode cannot issue regular commands.
# =============================================================================

from __future__ import annotations

import logging
from collections.abc import AsyncIterator

from redis.asyncio import Redis

logger = logging.getLogger(__name__)


class NotificationChannel:
    """Publish indices and iterate over received ones."""

    def __init__(self, redis: Redis, channel: str = "insert") -> None:
        self._redis = redis
        self.channel = channel

    async def ping(self) -> bool:
        return await self._redis.ping()

    async def publish(self, index: str) -> int:
        """Publish ``index``; returns the number of subscribers that got it."""
        receivers = await self._redis.publish(self.channel, index)
        if not receivers:
            logger.warning(
                "Published index=%s to '%s' with no subscribers; "
                "its cache entry will keep the placeholder",
                index,
                self.channel,
            )
        return receivers

    async def messages(self) -> AsyncIterator[str]:
        """
        Subscribe and yield each payload in arrival order.

        Runs until the consuming task is cancelled. The subscription is
        released on exit.
        """
        pubsub = self._redis.pubsub(ignore_subscribe_messages=True)
        await pubsub.subscribe(self.channel)
        logger.info("Subscribed to channel '%s'", self.channel)
        try:
            async for message in pubsub.listen():
                if message.get("type") != "message":
                    continue
                yield message["data"]
        finally:
            await pubsub.unsubscribe(self.channel)
            await pubsub.aclose()
            logger.info("Unsubscribed from channel '%s'", self.channel)
