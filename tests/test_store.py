# =============================================================================
# Unit Tests: Submission Store and Database Engine
# =============================================================================
#
# Sessions are faked; no PostgreSQL instance is needed.
# =============================================================================

from __future__ import annotations

import asyncio
from unittest.mock import MagicMock

from fibcalc.config import Settings
from fibcalc.db.engine import build_engine
from fibcalc.db.models import SubmittedValue
from fibcalc.db.store import SubmissionStore


def _run(coro):
    """Helper to run async functions in sync tests."""
    return asyncio.run(coro)


class FakeSession:
    """Async-context-manager session recording adds and commits."""

    def __init__(self, table: list):
        self.table = table
        self.pending: list = []
        self.commits = 0

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    def add(self, row):
        self.pending.append(row)

    async def commit(self):
        for row in self.pending:
            row.id = len(self.table) + 1
            self.table.append(row)
        self.pending.clear()
        self.commits += 1

    async def execute(self, stmt):
        result = MagicMock()
        result.scalars.return_value.all.return_value = list(self.table)
        return result


class TestSubmissionStore:
    """Append-only repository over the session factory."""

    def _make_store(self):
        table: list = []
        sessions: list = []

        def factory():
            session = FakeSession(table)
            sessions.append(session)
            return session

        return SubmissionStore(factory), table, sessions

    def test_append_commits_one_row(self):
        """append commits and returns the new row."""
        store, table, sessions = self._make_store()
        row = _run(store.append(5))
        assert isinstance(row, SubmittedValue)
        assert row.number == 5
        assert row.id == 1
        assert sessions[0].commits == 1

    def test_each_append_uses_own_session(self):
        """Every append opens a fresh session."""
        store, table, sessions = self._make_store()
        _run(store.append(5))
        _run(store.append(5))
        assert len(sessions) == 2
        assert [r.number for r in table] == [5, 5]

    def test_list_all(self):
        """list_all returns rows in insertion order."""
        store, table, _ = self._make_store()
        _run(store.append(3))
        _run(store.append(8))
        assert [r.number for r in _run(store.list_all())] == [3, 8]


class TestModel:
    """The values table."""

    def test_table_name(self):
        """The table is named values."""
        assert SubmittedValue.__tablename__ == "values"

    def test_columns(self):
        """The table has id, number and created_at."""
        assert set(SubmittedValue.__table__.columns.keys()) == {"id", "number", "created_at"}


class TestBuildEngine:
    """Engine construction from settings."""

    def test_engine_uses_asyncpg_url(self):
        """The engine uses the asyncpg driver."""
        settings = Settings(
            _env_file=None,
            database_url="postgresql+asyncpg://u:p@db:5432/fib",
        )
        engine = build_engine(settings)
        try:
            assert engine.url.drivername == "postgresql+asyncpg"
            assert engine.url.host == "db"
        finally:
            _run(engine.dispose())
