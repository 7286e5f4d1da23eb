"""Exceptions raised while resolving lists and links."""

from __future__ import annotations


class AirtableLinksError(Exception):
    """Base class for all airtable-links errors."""


class InvalidIdentifierError(AirtableLinksError, ValueError):
    """An identifier does not match its structural format."""

    def __init__(self, identifier: object, kind: str = "list") -> None:
        self.identifier = identifier
        self.kind = kind
        super().__init__(f"Invalid {kind} ID: {identifier!r}")


class ConfigurationError(AirtableLinksError, ValueError):
    """Settings are missing or malformed."""

    def __init__(self, problems: list[str]) -> None:
        self.problems = problems
        super().__init__("Invalid settings: " + "; ".join(problems))


class NotFoundError(AirtableLinksError):
    """The lists table returned no record for an id."""


class EmptyListError(AirtableLinksError):
    """A list exists but declares no links."""


class EmptyResultError(AirtableLinksError):
    """A links query matched zero records."""


class NoLinksFoundError(EmptyResultError):
    """None of a list's declared link ids resolved to a record."""


class TransportError(AirtableLinksError, RuntimeError):
    """Network, HTTP or response parsing failure."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


__all__ = [
    "AirtableLinksError",
    "ConfigurationError",
    "EmptyListError",
    "EmptyResultError",
    "InvalidIdentifierError",
    "NoLinksFoundError",
    "NotFoundError",
    "TransportError",
]
