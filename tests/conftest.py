"""Shared pytest fixtures."""

import asyncio
from collections.abc import Iterable
from typing import Any

import pytest

from airtable_links import (
    AsyncTTLCache,
    EmptyResultError,
    NotFoundError,
    Settings,
    TransportError,
)

LIST_ID = "recAAAAAAAAA"
LINK_ID = "recBBBBBBBBB"


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, now: int = 1_700_000_000_000) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class FakeSource:
    """In-memory record source that counts calls."""

    def __init__(self) -> None:
        self.lists: dict[str, dict[str, Any]] = {}
        self.links: dict[str, dict[str, Any]] = {}
        self.fetch_calls: list[str] = []
        self.query_calls: list[list[str]] = []
        self.delay = 0.0
        self.disconnected = False

    def add_list(self, list_id: str, name: str | None, links: list[str]) -> None:
        fields: dict[str, Any] = {"Links": links}
        if name is not None:
            fields["Name"] = name
        self.lists[list_id] = {"id": list_id, "fields": fields}

    def add_link(self, record_id: str, **fields: Any) -> None:
        self.links[record_id] = fields

    def _check_open(self) -> None:
        if self.disconnected:
            raise TransportError("Source is closed")

    async def fetch_list(self, list_id: str) -> dict[str, Any]:
        self._check_open()
        self.fetch_calls.append(list_id)
        if self.delay:
            await asyncio.sleep(self.delay)
        if list_id not in self.lists:
            raise NotFoundError(f"List not found: {list_id}")
        return self.lists[list_id]

    async def query_links(
        self, record_ids: Iterable[str], list_name: str
    ) -> list[dict[str, Any]]:
        self._check_open()
        ids = list(record_ids)
        self.query_calls.append(ids)
        found = [self.links[r] for r in ids if r in self.links]
        if not found:
            raise EmptyResultError(f"No links found for list {list_name!r}")
        return found

    async def disconnect(self) -> None:
        self.disconnected = True


@pytest.fixture
def settings() -> Settings:
    """Valid settings pointing at the default API URL."""
    return Settings(
        access_token="test-token",
        base_id="appBASE000001",
        lists_table_id="tblLISTS00001",
        links_table_id="tblLINKS00001",
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> AsyncTTLCache:
    """A fresh cache with the default three minute window."""
    return AsyncTTLCache(clock=clock)


def _reading_list_source() -> FakeSource:
    fake = FakeSource()
    fake.add_list(LIST_ID, "Reading", [LINK_ID])
    fake.add_link(
        LINK_ID, Name="Doc", URL="http://x", Done=1, Created="2024-01-01"
    )
    return fake


@pytest.fixture
def source() -> FakeSource:
    """A source holding one list with one link."""
    return _reading_list_source()


@pytest.fixture
def make_source():
    """Factory for more sources holding the same list."""
    return _reading_list_source
