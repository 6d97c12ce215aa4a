# =============================================================================
# Shared Test Fakes: In-Memory Cache, Channel and Store
# =============================================================================
#
# The fakes mirror the public methods of ValuesCache, NotificationChannel
# and SubmissionStore. Every call is appended to a shared ``events`` list so
# tests can assert the order of side effects across components.
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from fibcalc.services.reader import ReadGateway
from fibcalc.services.submission import SubmissionGateway

PLACEHOLDER = "Nothing yet!"


class FakeCache:
    """Stand-in for ValuesCache backed by a dict."""

    def __init__(self, events: list, fail: bool = False):
        self.values: dict[str, str] = {}
        self.events = events
        self.fail = fail
        self.placeholder = PLACEHOLDER

    async def ping(self):
        return True

    async def get_all(self):
        if self.fail:
            raise ConnectionError("cache unreachable")
        return dict(self.values)

    async def set_placeholder(self, index):
        if self.fail:
            raise ConnectionError("cache unreachable")
        self.events.append(("placeholder", index))
        self.values[index] = self.placeholder

    async def set_result(self, index, value):
        if self.fail:
            raise ConnectionError("cache unreachable")
        self.events.append(("result", index))
        self.values[index] = str(value)


class FakeChannel:
    """Stand-in for NotificationChannel. ``messages()`` drains ``inbox``."""

    def __init__(self, events: list, fail: bool = False):
        self.published: list[str] = []
        self.inbox: list[str] = []
        self.events = events
        self.fail = fail

    async def ping(self):
        return True

    async def publish(self, index):
        if self.fail:
            raise ConnectionError("pub/sub unreachable")
        self.events.append(("publish", index))
        self.published.append(index)
        return 1

    async def messages(self):
        while self.inbox:
            yield self.inbox.pop(0)


@dataclass
class FakeRow:
    id: int
    number: int


@dataclass
class FakeStore:
    """Stand-in for SubmissionStore backed by a list."""

    events: list
    fail: bool = False
    rows: list = field(default_factory=list)

    async def append(self, number):
        if self.fail:
            raise ConnectionError("database unreachable")
        self.events.append(("append", number))
        row = FakeRow(id=len(self.rows) + 1, number=number)
        self.rows.append(row)
        return row

    async def list_all(self):
        if self.fail:
            raise ConnectionError("database unreachable")
        return list(self.rows)


@pytest.fixture
def events():
    return []


@pytest.fixture
def cache(events):
    return FakeCache(events)


@pytest.fixture
def channel(events):
    return FakeChannel(events)


@pytest.fixture
def store(events):
    return FakeStore(events)


@pytest.fixture
def submission_gateway(cache, channel, store):
    return SubmissionGateway(cache=cache, channel=channel, store=store, max_index=40)


@pytest.fixture
def read_gateway(cache, store):
    return ReadGateway(cache, store)
