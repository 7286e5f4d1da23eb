"""Core types for airtable-links."""

from dataclasses import dataclass

# "30s", "3m", "1h" or milliseconds
Duration = str | int


@dataclass(frozen=True, slots=True)
class Link:
    """A display-ready link record belonging to a list."""

    name: str | None
    url: str | None
    list: str  # Display name of the owning list
    done: bool
    created: str | None


@dataclass(frozen=True, slots=True)
class List:
    """A remote list and the record ids of its links."""

    name: str
    id: str
    links: tuple[str, ...] = ()


@dataclass(slots=True)
class CacheEntry:
    """Resolved links for one list, with the time they were last served."""

    links: tuple[Link, ...]
    cached_at: int  # Unix timestamp ms, refreshed on every fresh hit
