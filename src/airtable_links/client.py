"""Async client for the Airtable lists and links tables."""

from __future__ import annotations

from collections.abc import Iterable
from types import TracebackType
from typing import Any, Protocol, runtime_checkable

import httpx

from airtable_links.errors import EmptyResultError, NotFoundError, TransportError
from airtable_links.log import get_logger
from airtable_links.settings import Settings

logger = get_logger(__name__)


@runtime_checkable
class AsyncRecordSource(Protocol):
    """Read access to the lists and links tables."""

    async def fetch_list(self, list_id: str) -> dict[str, Any]:
        """Get a single list record (``{"id", "fields"}``)."""
        ...

    async def query_links(
        self, record_ids: Iterable[str], list_name: str
    ) -> list[dict[str, Any]]:
        """Get the fields of every link record whose id is in record_ids."""
        ...

    async def disconnect(self) -> None:
        """Release network resources."""
        ...


def _quote(value: str) -> str:
    return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"


def build_filter_formula(record_ids: Iterable[str]) -> str:
    """Build a formula matching records whose id is any of record_ids.

    Duplicates are dropped; first-seen order is kept.

    Raises:
        ValueError: If record_ids is empty.
    """
    unique = list(dict.fromkeys(record_ids))
    if not unique:
        raise ValueError("At least one record id is required")
    clauses = [f"RECORD_ID()={_quote(record_id)}" for record_id in unique]
    if len(clauses) == 1:
        return clauses[0]
    return f"OR({','.join(clauses)})"


class AsyncRecordClient:
    """Async Airtable client authenticated with a personal access token."""

    def __init__(
        self,
        settings: Settings,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings
        self._owns_client = http_client is None
        if http_client is None:
            http_client = httpx.AsyncClient(timeout=settings.timeout)
        self._client = http_client
        self._headers = {
            "Authorization": f"Bearer {settings.access_token}",
            "Content-Type": "application/json",
        }

    @property
    def settings(self) -> Settings:
        return self._settings

    def _url(self, *parts: str) -> str:
        return "/".join([self._settings.api_url.rstrip("/"), *parts])

    async def _request(
        self,
        method: str,
        url: str,
        *,
        body: dict[str, Any] | None = None,
        allow_not_found: bool = False,
    ) -> dict[str, Any]:
        """Send a request and return the decoded JSON object.

        With allow_not_found, a 404 returns an empty dict instead.

        Raises:
            TransportError: On network failure, non-2xx status or a body
                that is not a JSON object.
        """
        try:
            response = await self._client.request(
                method, url, headers=self._headers, json=body
            )
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise TransportError(f"{method} {url} failed: {e}") from e

        if response.status_code == 404 and allow_not_found:
            return {}
        if not response.is_success:
            try:
                error = response.json().get("error", "Request failed")
                if isinstance(error, dict):
                    error = error.get("message") or error.get("type")
            except Exception:
                error = f"HTTP {response.status_code}"
            logger.warning(
                "%s %s returned %s: %s", method, url, response.status_code, error
            )
            raise TransportError(
                f"HTTP {response.status_code}: {error}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise TransportError(
                f"Invalid JSON from {url}", status_code=response.status_code
            ) from e
        if not isinstance(data, dict):
            raise TransportError(
                f"Unexpected response from {url}", status_code=response.status_code
            )
        return data

    async def fetch_list(self, list_id: str) -> dict[str, Any]:
        """Get a single record from the lists table.

        Raises:
            NotFoundError: If the record does not exist or has no fields.
            TransportError: On any other failure.
        """
        url = self._url(self._settings.base_id, self._settings.lists_table_id, list_id)
        logger.debug("Fetching list %s", list_id)
        data = await self._request("GET", url, allow_not_found=True)
        if not isinstance(data.get("fields"), dict):
            logger.warning("List %s not found", list_id)
            raise NotFoundError(f"List not found: {list_id}")
        return data

    async def query_links(
        self, record_ids: Iterable[str], list_name: str
    ) -> list[dict[str, Any]]:
        """Get the fields of every link whose record id is in record_ids.

        Only the first page of results is read.

        Raises:
            EmptyResultError: If no record matches.
            TransportError: On any other failure.
        """
        url = self._url(
            self._settings.base_id, self._settings.links_table_id, "listRecords"
        )
        formula = build_filter_formula(record_ids)
        logger.debug("Querying links for list %r: %s", list_name, formula)
        data = await self._request("POST", url, body={"filterByFormula": formula})
        records = data.get("records") or []
        if not isinstance(records, list):
            raise TransportError(f"Unexpected response from {url}")
        fields = [
            record.get("fields") or {}
            for record in records
            if isinstance(record, dict)
        ]
        if not fields:
            raise EmptyResultError(f"No links found for list {list_name!r}")
        return fields

    async def disconnect(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> AsyncRecordClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.disconnect()


__all__ = ["AsyncRecordClient", "AsyncRecordSource", "build_filter_formula"]
