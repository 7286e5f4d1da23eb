"""airtable-links - cached lookup of Airtable lists and their links."""

import logging

from airtable_links.cache import AsyncTTLCache
from airtable_links.client import (
    AsyncRecordClient,
    AsyncRecordSource,
    build_filter_formula,
)

# Duration parsing
from airtable_links.duration import parse_duration

# Errors
from airtable_links.errors import (
    AirtableLinksError,
    ConfigurationError,
    EmptyListError,
    EmptyResultError,
    InvalidIdentifierError,
    NoLinksFoundError,
    NotFoundError,
    TransportError,
)

# Identifier validation
from airtable_links.identifiers import (
    classify_identifier,
    is_valid_base_id,
    is_valid_record_id,
    is_valid_table_id,
    strip_query,
)
from airtable_links.log import setup_logging
from airtable_links.references import (
    ByRecordID,
    ByURL,
    ListReference,
    parse_list_reference,
)
from airtable_links.resolver import (
    UNNAMED_LIST,
    resolve_links,
    resolve_list,
    transform_record,
)
from airtable_links.service import LinkService
from airtable_links.settings import Settings

# Core types
from airtable_links.types import CacheEntry, Duration, Link, List

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "UNNAMED_LIST",
    "AirtableLinksError",
    "AsyncRecordClient",
    "AsyncRecordSource",
    "AsyncTTLCache",
    "ByRecordID",
    "ByURL",
    "CacheEntry",
    "ConfigurationError",
    "Duration",
    "EmptyListError",
    "EmptyResultError",
    "InvalidIdentifierError",
    "Link",
    "LinkService",
    "List",
    "ListReference",
    "NoLinksFoundError",
    "NotFoundError",
    "Settings",
    "TransportError",
    "build_filter_formula",
    "classify_identifier",
    "is_valid_base_id",
    "is_valid_record_id",
    "is_valid_table_id",
    "parse_duration",
    "parse_list_reference",
    "resolve_links",
    "resolve_list",
    "setup_logging",
    "strip_query",
    "transform_record",
]
