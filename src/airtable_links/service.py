"""LinkService - cached lookup of the links in a list.

Provides:
- get_links(): Links for a list, served from cache within the freshness window
- get_list(): Uncached list resolution
- invalidate(), reconfigure(): Cache control
- disconnect(): Lifecycle; also usable as an async context manager
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Coroutine
from types import TracebackType
from typing import Any

from airtable_links.cache import AsyncTTLCache
from airtable_links.client import AsyncRecordClient, AsyncRecordSource
from airtable_links.log import get_logger
from airtable_links.references import ByRecordID, ListReference, parse_list_reference
from airtable_links.resolver import resolve_links, resolve_list
from airtable_links.settings import Settings
from airtable_links.types import Link, List

logger = get_logger(__name__)


class LinkService:
    """Resolve lists to links, caching each list's links.

    Usage:
        async with LinkService(Settings.from_mapping(data)) as service:
            links = await service.get_links("recXXXXXXXXX")

    Concurrent misses for the same list share one resolution, run as a task
    owned by the service. Its result or error goes to every caller, a caller
    that is cancelled only abandons its own wait, and only that resolution
    writes the cache.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        source: AsyncRecordSource | None = None,
        cache: AsyncTTLCache | None = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self._settings = settings
        self._owns_source = source is None
        if source is None:
            settings.validate()
            source = AsyncRecordClient(settings)
        self._source = source
        if cache is None:
            cache = AsyncTTLCache(settings.freshness_window_ms, clock=clock)
        self._cache = cache
        self._in_flight: dict[str, asyncio.Task[tuple[Link, ...]]] = {}
        # Bumped on reconfigure so loads started earlier don't repopulate
        self._generation = 0

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def cache(self) -> AsyncTTLCache:
        return self._cache

    async def get_links(self, reference: str | ListReference) -> tuple[Link, ...]:
        """Get the links of a list.

        Args:
            reference: Record id, Airtable record URL or ListReference

        Returns:
            The list's links, from cache if resolved within the window

        Raises:
            InvalidIdentifierError: Malformed reference; nothing is fetched.
            NotFoundError, EmptyListError, NoLinksFoundError, TransportError:
                Resolution failed; nothing is cached.
        """
        list_id = parse_list_reference(reference).record_id

        entry = await self._cache.get(list_id)
        if entry is not None:
            logger.debug("Cache hit for list %s", list_id)
            return entry.links

        logger.debug("Cache miss for list %s", list_id)
        return await self._coalesce(list_id, lambda: self._load(list_id))

    async def get_list(self, reference: str | ListReference) -> List:
        """Resolve a list without touching the cache."""
        return await resolve_list(self._source, reference)

    async def invalidate(self, reference: str | ListReference) -> None:
        """Drop the cached links of one list."""
        list_id = parse_list_reference(reference).record_id
        await self._cache.delete(list_id)

    async def reconfigure(self, settings: Settings) -> None:
        """Switch to new settings and drop every cached entry.

        A client created by this service is replaced; an injected source is
        kept as is. Resolutions already in flight finish on the old client,
        which is closed once they are done, and their results are not cached.
        """
        old = None
        if self._owns_source:
            settings.validate()
            old = self._source
            self._source = AsyncRecordClient(settings)
        self._settings = settings
        self._generation += 1
        # Later callers must not join a resolution against the old settings
        pending = list(self._in_flight.values())
        self._in_flight.clear()
        await self._cache.clear()
        logger.info("Settings changed, link cache cleared")

        if old is not None:
            if pending:
                await asyncio.wait(pending)
            await old.disconnect()

    async def disconnect(self) -> None:
        """Cancel pending resolutions, clear the cache, close an owned client."""
        pending = list(self._in_flight.values())
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.wait(pending)
        await self._cache.disconnect()
        if self._owns_source:
            await self._source.disconnect()

    async def __aenter__(self) -> LinkService:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.disconnect()

    # -------------------------------------------------------------------------
    # Internal helpers
    # -------------------------------------------------------------------------

    async def _load(self, list_id: str) -> tuple[Link, ...]:
        # A resolution that finished while this one was being scheduled
        entry = await self._cache.get(list_id)
        if entry is not None:
            return entry.links

        # Both queries go to the same base even if reconfigure() runs between
        source = self._source
        generation = self._generation
        lst = await resolve_list(source, ByRecordID(list_id))
        links = await resolve_links(source, lst)
        if generation == self._generation:
            await self._cache.put(list_id, links)
        logger.debug(
            "Resolved %d links for list %s (%r)", len(links), list_id, lst.name
        )
        return links

    async def _coalesce(
        self,
        key: str,
        fetch: Callable[[], Coroutine[Any, Any, tuple[Link, ...]]],
    ) -> tuple[Link, ...]:
        """Coalesce concurrent requests for same key (stampede protection)."""
        # No await between lookup and insert, so this is atomic on the loop
        task = self._in_flight.get(key)
        if task is None:
            task = asyncio.ensure_future(fetch())
            self._in_flight[key] = task
            task.add_done_callback(lambda done: self._finish(key, done))

        # Shield so a cancelled caller doesn't cancel the shared resolution
        return await asyncio.shield(task)

    def _finish(self, key: str, task: asyncio.Task[tuple[Link, ...]]) -> None:
        if self._in_flight.get(key) is task:
            del self._in_flight[key]
        if not task.cancelled():
            # Mark retrieved so a failure every caller abandoned isn't reported
            task.exception()


__all__ = ["LinkService"]
