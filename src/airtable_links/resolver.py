"""Resolve list references into lists, and lists into links."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from airtable_links.client import AsyncRecordSource
from airtable_links.errors import (
    EmptyListError,
    EmptyResultError,
    NoLinksFoundError,
)
from airtable_links.log import get_logger
from airtable_links.references import ListReference, parse_list_reference
from airtable_links.types import Link, List

logger = get_logger(__name__)

UNNAMED_LIST = "Unnamed List"


async def resolve_list(
    source: AsyncRecordSource, reference: str | ListReference
) -> List:
    """Fetch a list and the record ids of its links.

    The reference is validated before ``source`` is touched.

    Raises:
        InvalidIdentifierError: If the reference is not a valid record id
            or does not contain one.
        NotFoundError: If the lists table has no such record.
        EmptyListError: If the list declares no links.
    """
    list_id = parse_list_reference(reference).record_id
    record = await source.fetch_list(list_id)
    fields = record.get("fields") or {}

    links = fields.get("Links") or ()
    lst = List(
        name=fields.get("Name") or UNNAMED_LIST,
        id=record.get("id") or list_id,
        links=tuple(links),
    )
    if not lst.links:
        logger.warning("List %s (%r) has no links", lst.id, lst.name)
        raise EmptyListError(f"List {lst.name!r} has no links")
    return lst


def transform_record(fields: Mapping[str, Any], list_name: str) -> Link:
    """Map raw link fields onto a Link.

    Field names are matched exactly; anything other than Name, URL, Done and
    Created is ignored.
    """
    return Link(
        name=fields.get("Name"),
        url=fields.get("URL"),
        list=list_name,
        done=bool(fields.get("Done")),
        created=fields.get("Created"),
    )


async def resolve_links(source: AsyncRecordSource, lst: List) -> tuple[Link, ...]:
    """Query the links table for every link the list declares.

    Raises:
        EmptyListError: If the list declares no links; nothing is queried.
        NoLinksFoundError: If none of the declared ids match a record.
    """
    record_ids = tuple(dict.fromkeys(lst.links))
    if not record_ids:
        raise EmptyListError(f"List {lst.name!r} has no links")
    try:
        records = await source.query_links(record_ids, lst.name)
    except NoLinksFoundError:
        raise
    except EmptyResultError as e:
        raise NoLinksFoundError(str(e)) from e
    if not records:
        raise NoLinksFoundError(f"No links found for list {lst.name!r}")
    return tuple(transform_record(fields, lst.name) for fields in records)


__all__ = ["UNNAMED_LIST", "resolve_links", "resolve_list", "transform_record"]
