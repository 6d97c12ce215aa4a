# =============================================================================
# Compute Worker: Notifications In, Cache Results Out
# =============================================================================
#
# PER MESSAGE:
#   1. parse the leading integer of the payload
#   2. calculator.compute(n)        ← synchronous CPU work, blocks the loop
#   3. HSET values <payload> <result>
#
# Messages are handled one at a time in arrival order. Nothing is
# acknowledged, retried or dead-lettered: a notification published while
# the worker is not subscribed is simply lost, and its cache entry keeps
# the placeholder.
#
# FAILURE POLICY: an exception from steps 1-3 is logged with its traceback
# and the message is dropped. The subscription loop keeps running so later
# notifications are still processed.
#
# RECONNECT: if the subscription connection drops, the worker waits
# ``reconnect_delay`` seconds and subscribes again, for as long as the
# process runs. Notifications published in the gap are lost.
# =============================================================================

from __future__ import annotations

import asyncio
import logging
import time

from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from fibcalc.services.cache import ValuesCache
from fibcalc.services.channel import NotificationChannel
from fibcalc.services.fibonacci import FibonacciCalculator
from fibcalc.services.startup import is_network_error
from fibcalc.services.submission import parse_index

logger = logging.getLogger(__name__)


class ComputeWorker:
    """Single-subscription, single-threaded Fibonacci worker."""

    def __init__(
        self,
        cache: ValuesCache,
        channel: NotificationChannel,
        calculator: FibonacciCalculator,
        reconnect_delay: float = 1.0,
    ) -> None:
        self._cache = cache
        self._channel = channel
        self._calculator = calculator
        self.reconnect_delay = reconnect_delay
        self.messages_processed = 0
        self.messages_dropped = 0
        self.reconnects = 0

    async def handle(self, message: str) -> int | None:
        """
        Compute and cache the value for one notification.

        Returns the computed value, or None when the message was dropped.
        """
        start_time = time.monotonic()
        try:
            n = parse_index(message)
            if n is None:
                raise ValueError(f"No integer in notification {message!r}")
            result = self._calculator.compute(n)
            await self._cache.set_result(message, result)
        except Exception:
            self.messages_dropped += 1
            logger.exception("Dropped notification %r", message)
            return None

        self.messages_processed += 1
        logger.info(
            "Computed index=%s value=%d in %.1fms",
            message,
            result,
            (time.monotonic() - start_time) * 1000,
        )
        return result

    async def _consume(self) -> None:
        async for message in self._channel.messages():
            await self.handle(message)

    async def run(self) -> None:
        """Consume the channel until the task is cancelled."""
        logger.info("Worker listening for fibonacci calculations...")
        try:
            while True:
                try:
                    await self._consume()
                    return
                except (RedisConnectionError, RedisTimeoutError) as exc:
                    self.reconnects += 1
                    logger.error(
                        "Redis subscription lost%s: %s. Resubscribing in %.1fs",
                        " (network)" if is_network_error(exc) else "",
                        exc,
                        self.reconnect_delay,
                    )
                    await asyncio.sleep(self.reconnect_delay)
        finally:
            logger.info(
                "Worker stopped. Processed: %d, Dropped: %d, Reconnects: %d",
                self.messages_processed,
                self.messages_dropped,
                self.reconnects,
            )
