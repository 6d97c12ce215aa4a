# =============================================================================
# Durable Store: Append-Only Submission Log
# =============================================================================
#
# Thin repository over the ``values`` table. Every call opens its own
# session and commits immediately; there is no transaction spanning the
# Submission Gateway's side effects.
# =============================================================================

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from fibcalc.db.models import SubmittedValue

logger = logging.getLogger(__name__)


class SubmissionStore:
    """Append and list submitted indices."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def append(self, number: int) -> SubmittedValue:
        """Insert one row. Duplicates are allowed."""
        async with self._session_factory() as session:
            row = SubmittedValue(number=number)
            session.add(row)
            await session.commit()
        logger.debug("Stored submission number=%d id=%s", number, row.id)
        return row

    async def list_all(self) -> list[SubmittedValue]:
        """Every stored row, oldest first."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(SubmittedValue).order_by(SubmittedValue.id)
            )
            return list(result.scalars().all())
