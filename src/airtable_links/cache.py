"""In-memory TTL cache for resolved link sets (async only)."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable, Iterable

from airtable_links.duration import parse_duration
from airtable_links.log import get_logger
from airtable_links.types import CacheEntry, Duration, Link

logger = get_logger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


class AsyncTTLCache:
    """Async in-memory cache with sliding expiry.

    An entry is fresh while ``now - cached_at < freshness_window``. Every
    fresh hit resets ``cached_at``, so an entry in steady use never expires;
    only a gap longer than the window between reads does. Stale entries are
    evicted on the read that finds them.
    """

    def __init__(
        self,
        freshness_window: Duration = "3m",
        *,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self._entries: dict[str, CacheEntry] = {}
        self._window = parse_duration(freshness_window)
        self._clock = clock or _now_ms
        self._lock = asyncio.Lock()

    @property
    def freshness_window(self) -> int:
        """Freshness window in milliseconds."""
        return self._window

    async def get(self, key: str) -> CacheEntry | None:
        """Get a fresh entry by key, refreshing its timestamp."""
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            now = self._clock()
            if now - entry.cached_at >= self._window:
                del self._entries[key]
                logger.debug("Evicted stale cache entry for %s", key)
                return None
            entry.cached_at = now
            return entry

    async def put(self, key: str, links: Iterable[Link]) -> CacheEntry:
        """Store links under key, replacing any previous entry."""
        entry = CacheEntry(links=tuple(links), cached_at=self._clock())
        async with self._lock:
            self._entries[key] = entry
        return entry

    async def delete(self, key: str) -> None:
        """Delete a cache entry."""
        async with self._lock:
            self._entries.pop(key, None)

    async def clear(self) -> None:
        """Clear all cached entries."""
        async with self._lock:
            self._entries.clear()

    async def disconnect(self) -> None:
        """Release all entries."""
        await self.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        # Ignores freshness; use get() for a real lookup
        return key in self._entries


__all__ = ["AsyncTTLCache"]
