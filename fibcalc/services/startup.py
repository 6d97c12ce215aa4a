# =============================================================================
# Startup Probes: Bounded Retry, Then Fail
# =============================================================================
#
# Both processes check their backing stores before serving:
#   API    → Postgres (SELECT 1 + create table), Redis (PING)
#   Worker → Redis (PING)
#
# Each probe is attempted up to ``retries`` times with a fixed ``delay``
# between attempts. When the last attempt fails the probe raises
# BackingStoreUnavailableError and startup aborts; there is no recovery.
# =============================================================================

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from fibcalc.errors import BackingStoreUnavailableError

logger = logging.getLogger(__name__)

_NETWORK_ERRORS = (OSError, RedisConnectionError, RedisTimeoutError)


def is_network_error(exc: BaseException) -> bool:
    """True when ``exc`` (or what it wraps) is a connection-level failure."""
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        if isinstance(current, _NETWORK_ERRORS):
            return True
        seen.add(id(current))
        # SQLAlchemy keeps the DBAPI error on .orig
        current = getattr(current, "orig", None) or current.__cause__
    return False


async def ensure_connection(
    name: str,
    probe: Callable[[], Awaitable[object]],
    *,
    retries: int,
    delay: float,
) -> None:
    """
    Run ``probe`` until it succeeds or ``retries`` attempts have failed.

    Raises:
        BackingStoreUnavailableError: every attempt failed. The last probe
            error is chained as ``__cause__``.
    """
    retries = max(1, retries)
    for attempt in range(1, retries + 1):
        try:
            await probe()
        except Exception as exc:
            logger.error(
                "%s connection attempt %d/%d failed%s: %s",
                name,
                attempt,
                retries,
                " (network)" if is_network_error(exc) else "",
                exc,
            )
            if attempt == retries:
                raise BackingStoreUnavailableError(name, retries) from exc
            await asyncio.sleep(delay)
        else:
            logger.info("%s connection verified", name)
            return
