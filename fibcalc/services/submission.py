# =============================================================================
# Submission Gateway: Accept an Index and Fan Out
# =============================================================================
#
# FLOW (fixed order, best-effort, NOT a transaction):
#   0. Validate: an index that parses as an integer above max_index is
#      rejected with IndexTooHighError before anything is written.
#   1. Cache:   HSET values <index> <placeholder>
#   2. Channel: PUBLISH insert <index>
#   3. Store:   INSERT INTO values(number)
#
# If a step raises, the exception propagates and the earlier steps stay
# applied. Possible partial states:
#   - placeholder only                (publish failed)
#   - placeholder + notification      (store append failed)
# A reader may therefore see a cache entry with no matching stored row.
#
# PARSING: the index is read as its leading integer, so "45abc" and "45.5"
# count as 45 and are rejected. Text is cached and published as submitted.
#
# KNOWN GAP: only the upper bound is checked. Negative indices are accepted.
# Text with no leading integer ("abc") passes validation, gets its
# placeholder and notification, then fails at step 3 with ValueError.
# =============================================================================

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from fibcalc.db.store import SubmissionStore
from fibcalc.errors import IndexTooHighError
from fibcalc.services.cache import ValuesCache
from fibcalc.services.channel import NotificationChannel

logger = logging.getLogger(__name__)

_LEADING_INTEGER = re.compile(r"\s*([+-]?[0-9]+)")


@dataclass(frozen=True)
class SubmissionReceipt:
    """Acknowledgement that all three side effects completed."""

    index: str
    number: int
    submission_id: int | None


def parse_index(index: str | int) -> int | None:
    """
    Leading integer of ``index``, or None when it has none.

    Leading whitespace and an optional sign are accepted; anything after the
    digits is ignored, so ``"45abc"`` and ``"45.5"`` both parse as 45.
    """
    if isinstance(index, int):
        return index
    match = _LEADING_INTEGER.match(str(index))
    if match is None:
        return None
    return int(match.group(1))


class SubmissionGateway:
    """Write half of the API: validate, then cache → publish → store."""

    def __init__(
        self,
        cache: ValuesCache,
        channel: NotificationChannel,
        store: SubmissionStore,
        max_index: int = 40,
    ) -> None:
        self._cache = cache
        self._channel = channel
        self._store = store
        self.max_index = max_index

    def validate(self, index: str | int) -> None:
        number = parse_index(index)
        if number is not None and number > self.max_index:
            raise IndexTooHighError(number, self.max_index)

    async def submit(self, index: str | int) -> SubmissionReceipt:
        """
        Run the submission pipeline for one index.

        Returns as soon as the store append completes; the result is
        computed later by the worker.

        Raises:
            IndexTooHighError: index above max_index (nothing written).
            ValueError: index has no leading integer, or trailing text after it
                (raised at the store step).
            Exception: any Redis/Postgres error from steps 1-3.
        """
        self.validate(index)
        index_text = str(index)

        await self._cache.set_placeholder(index_text)
        await self._channel.publish(index_text)
        row = await self._store.append(int(index_text))

        logger.info("Accepted index=%s (submission id=%s)", index_text, row.id)
        return SubmissionReceipt(index=index_text, number=row.number, submission_id=row.id)
