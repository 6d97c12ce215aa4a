# =============================================================================
# Worker Process Entry Point
# =============================================================================
#
# STARTUP:
#   1. Open the two Redis clients (no database in the worker)
#   2. PING with bounded retry; on exhaustion exit with status 1
#   3. Subscribe and process until SIGINT/SIGTERM, resubscribing after a
#      dropped connection
#
# Shutdown cancels the subscription task; the message being computed at
# that moment finishes first because the computation never yields.
# =============================================================================

from __future__ import annotations

import asyncio
import logging
import signal
import sys

from fibcalc.config import Settings, configure_logging, get_settings
from fibcalc.errors import BackingStoreUnavailableError
from fibcalc.resources import open_resources, verify_resources
from fibcalc.services.fibonacci import get_calculator
from fibcalc.worker.compute import ComputeWorker

logger = logging.getLogger(__name__)


async def main(settings: Settings | None = None) -> None:
    settings = settings or get_settings()
    calculator = get_calculator(settings.calculator)

    async with open_resources(settings, with_database=False) as resources:
        await verify_resources(resources)

        worker = ComputeWorker(
            resources.cache,
            resources.channel,
            calculator,
            reconnect_delay=settings.redis_retry_delay,
        )
        task = asyncio.create_task(worker.run(), name="compute-worker")

        loop = asyncio.get_running_loop()
        for sig in (signal.SIGTERM, signal.SIGINT):
            try:
                loop.add_signal_handler(sig, task.cancel)
            except NotImplementedError:
                # Windows: KeyboardInterrupt still stops asyncio.run
                pass

        try:
            await task
        except asyncio.CancelledError:
            logger.info("Shutdown signal received")


def run() -> None:
    """Console entry point: ``fibcalc-worker``."""
    settings = get_settings()
    configure_logging(settings)
    try:
        asyncio.run(main(settings))
    except BackingStoreUnavailableError as exc:
        logger.critical("Worker failed to start: %s", exc)
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received")


if __name__ == "__main__":
    run()
