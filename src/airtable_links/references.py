"""Ways of pointing at a list: by record id or by Airtable URL."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit

from airtable_links.errors import InvalidIdentifierError
from airtable_links.identifiers import is_valid_record_id, strip_query


@dataclass(frozen=True, slots=True)
class ByRecordID:
    """A list addressed by its record id."""

    value: str

    @property
    def record_id(self) -> str:
        """The validated record id.

        Raises:
            InvalidIdentifierError: If the value is not a record id.
        """
        if not is_valid_record_id(self.value):
            raise InvalidIdentifierError(self.value)
        return self.value


@dataclass(frozen=True, slots=True)
class ByURL:
    """A list addressed by a record URL copied from Airtable.

    For example ``https://airtable.com/appXXX/tblXXX/viwXXX/recXXX?blocks=hide``.
    """

    url: str

    @property
    def record_id(self) -> str:
        """The last path segment that is a record id.

        Raises:
            InvalidIdentifierError: If no segment is a record id.
        """
        path = urlsplit(self.url).path
        for segment in reversed(path.split("/")):
            if is_valid_record_id(segment):
                return segment
        raise InvalidIdentifierError(self.url, kind="list URL")


ListReference = ByRecordID | ByURL


def parse_list_reference(value: str | ListReference) -> ListReference:
    """Turn user input into a list reference.

    Strings starting with ``http://`` or ``https://`` become ``ByURL``;
    anything else is taken as a record id with any query string dropped.
    The result is not validated until ``record_id`` is read.
    """
    if isinstance(value, (ByRecordID, ByURL)):
        return value
    if not isinstance(value, str):
        raise InvalidIdentifierError(value)
    text = value.strip()
    if text.lower().startswith(("http://", "https://")):
        return ByURL(text)
    return ByRecordID(strip_query(text))


__all__ = ["ByRecordID", "ByURL", "ListReference", "parse_list_reference"]
