# =============================================================================
# Fast-Path Cache: Redis Hash of index → value
# =============================================================================
#
# A single hash (default key "values") maps the index text to either the
# placeholder or the decimal text of the computed result:
#
#   HSET values 5 "Nothing yet!"    ← Submission Gateway
#   HSET values 5 "8"               ← Compute Worker
#   HGETALL values                  ← Read Gateway
#
# Entries are never deleted. Concurrent writes to the same field are not
# coordinated; the last HSET wins.
# =============================================================================

from __future__ import annotations

import logging

from redis.asyncio import Redis

logger = logging.getLogger(__name__)


class ValuesCache:
    """Read/write access to the values hash. Expects ``decode_responses=True``."""

    def __init__(self, redis: Redis, key: str = "values", placeholder: str = "Nothing yet!") -> None:
        self._redis = redis
        self.key = key
        self.placeholder = placeholder

    async def ping(self) -> bool:
        return await self._redis.ping()

    async def get_all(self) -> dict[str, str]:
        return await self._redis.hgetall(self.key)

    async def set_placeholder(self, index: str) -> None:
        await self._redis.hset(self.key, index, self.placeholder)

    async def set_result(self, index: str, value: int) -> None:
        await self._redis.hset(self.key, index, str(value))
        logger.debug("Cached result %s=%d", index, value)
