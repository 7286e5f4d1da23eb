"""Structural validation of Airtable identifiers."""

import re
from typing import Literal

_RECORD_ID_PATTERN = re.compile(r"rec[A-Za-z0-9]{9,}", re.ASCII)
_TABLE_ID_PATTERN = re.compile(r"tbl[A-Za-z0-9]{9,}", re.ASCII)
_BASE_ID_PATTERN = re.compile(r"app[A-Za-z0-9]{9,}", re.ASCII)

IdentifierKind = Literal["record", "table", "base"]


def _matches(pattern: re.Pattern[str], value: object) -> bool:
    # fullmatch, not match with "$": "$" also accepts a trailing newline
    return isinstance(value, str) and pattern.fullmatch(value) is not None


def is_valid_record_id(value: object) -> bool:
    """Return True if value is a record id such as ``recXXXXXXXXX``."""
    return _matches(_RECORD_ID_PATTERN, value)


def is_valid_table_id(value: object) -> bool:
    """Return True if value is a table id such as ``tblXXXXXXXXX``."""
    return _matches(_TABLE_ID_PATTERN, value)


def is_valid_base_id(value: object) -> bool:
    """Return True if value is a base id such as ``appXXXXXXXXX``."""
    return _matches(_BASE_ID_PATTERN, value)


def classify_identifier(value: object) -> IdentifierKind | None:
    """Return which kind of identifier value is, or None."""
    if is_valid_record_id(value):
        return "record"
    if is_valid_table_id(value):
        return "table"
    if is_valid_base_id(value):
        return "base"
    return None


def strip_query(value: str) -> str:
    """Drop a pasted query string, e.g. ``tblXXXXXXXXX?blocks=hide``."""
    return value.split("?", 1)[0]


__all__ = [
    "IdentifierKind",
    "classify_identifier",
    "is_valid_base_id",
    "is_valid_record_id",
    "is_valid_table_id",
    "strip_query",
]
