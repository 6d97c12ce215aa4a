# =============================================================================
# Read Gateway: Snapshots of the Cache and the Submission Log
# =============================================================================
#
# Both reads are side-effect free and independent of each other. There is
# no consistency between them: a submission may be visible in one and not
# yet in the other.
# =============================================================================

from __future__ import annotations

from fibcalc.db.models import SubmittedValue
from fibcalc.db.store import SubmissionStore
from fibcalc.services.cache import ValuesCache


class ReadGateway:
    """Read half of the API."""

    def __init__(self, cache: ValuesCache, store: SubmissionStore) -> None:
        self._cache = cache
        self._store = store

    async def current_values(self) -> dict[str, str]:
        """Every cache entry: index → placeholder or computed value."""
        return await self._cache.get_all()

    async def all_submissions(self) -> list[SubmittedValue]:
        """Full submission history in insertion order."""
        return await self._store.list_all()
