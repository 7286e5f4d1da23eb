"""Connection settings for the Airtable lists and links tables."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from typing import Any

from airtable_links.duration import parse_duration
from airtable_links.errors import ConfigurationError
from airtable_links.identifiers import (
    is_valid_base_id,
    is_valid_table_id,
    strip_query,
)
from airtable_links.types import Duration

DEFAULT_API_URL = "https://api.airtable.com/v0"

# Keys used by stored plugin data
_CAMEL_CASE_KEYS = {
    "accessToken": "access_token",
    "baseID": "base_id",
    "linksTableID": "links_table_id",
    "listsTableID": "lists_table_id",
    "apiURL": "api_url",
    "freshnessWindow": "freshness_window",
}

_IDENTIFIER_FIELDS = ("base_id", "links_table_id", "lists_table_id")


@dataclass(frozen=True, slots=True)
class Settings:
    """Read-only configuration for the record client and cache."""

    access_token: str = ""
    base_id: str = ""
    links_table_id: str = ""
    lists_table_id: str = ""
    api_url: str = DEFAULT_API_URL
    timeout: float = 30.0
    freshness_window: Duration = "3m"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> Settings:
        """Build settings from stored data, filling gaps with defaults.

        Accepts both the camelCase keys of stored plugin data and the field
        names. Unknown keys are ignored. Pasted identifiers have their query
        string removed, e.g. ``tblXXXXXXXXX?blocks=hide``.
        """
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in (data or {}).items():
            name = _CAMEL_CASE_KEYS.get(key, key)
            if name in known and value is not None:
                values[name] = value
        for name in _IDENTIFIER_FIELDS:
            if isinstance(values.get(name), str):
                values[name] = strip_query(values[name].strip())
        return cls(**values)

    def with_updates(self, **changes: Any) -> Settings:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    @property
    def freshness_window_ms(self) -> int:
        """Freshness window in milliseconds, as used by the link cache."""
        return parse_duration(self.freshness_window)

    def validate(self) -> None:
        """Raise ConfigurationError listing every invalid field."""
        problems: list[str] = []
        if not self.access_token:
            problems.append("access token is required")
        if not is_valid_base_id(self.base_id):
            problems.append(f"invalid base ID {self.base_id!r}")
        if not is_valid_table_id(self.lists_table_id):
            problems.append(f"invalid lists table ID {self.lists_table_id!r}")
        if not is_valid_table_id(self.links_table_id):
            problems.append(f"invalid links table ID {self.links_table_id!r}")
        if (
            isinstance(self.timeout, bool)
            or not isinstance(self.timeout, (int, float))
            or self.timeout <= 0
        ):
            problems.append(f"timeout must be a positive number, got {self.timeout!r}")
        try:
            parse_duration(self.freshness_window)
        except (TypeError, ValueError):
            problems.append(f"invalid freshness window {self.freshness_window!r}")
        if problems:
            raise ConfigurationError(problems)

    def __repr__(self) -> str:
        token = "***" if self.access_token else "''"
        return (
            f"Settings(access_token={token}, base_id={self.base_id!r}, "
            f"links_table_id={self.links_table_id!r}, "
            f"lists_table_id={self.lists_table_id!r}, api_url={self.api_url!r})"
        )


__all__ = ["DEFAULT_API_URL", "Settings"]
