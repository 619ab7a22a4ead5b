"""HTTP implementation of CatalogSource."""

from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from bloom_catalog.domain.catalog_item import FetchPage
from bloom_catalog.domain.errors import FetchFailure
from bloom_catalog.domain.query_state import CatalogPageRequest
from bloom_catalog.entrypoints.http.mappers.query_string_mapper import QueryStringMapper
from bloom_catalog.ports.catalog_source import CatalogSource
from bloom_catalog.use_cases.normalize_catalog_items import extract_records, normalize_items

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0
TOTAL_KEYS = ("total", "totalCount", "total_count")
HAS_MORE_KEYS = ("has_more", "hasMore")


def _metadata(payload: Any, keys: tuple[str, ...]) -> Any:
    if not isinstance(payload, Mapping):
        return None
    for key in keys:
        if key in payload:
            return payload[key]
    return None


class HttpCatalogSource(CatalogSource):
    """
    Catalog source backed by a remote catalog API.

    - Sends the canonical encoded query plus ``page`` and ``per_page``
    - Accepts a bare list or an envelope object as the response body
    - Normalizes raw records; malformed ones are omitted from the page
    - Transport, status and JSON errors become FetchFailure; cancellation
      of the awaiting task propagates untouched
    """

    def __init__(self, client: httpx.AsyncClient, path: str = "/v1/catalog") -> None:
        """
        Args:
            client: Async client, usually configured with the API base URL
            path: Catalog listing path relative to the client's base URL
        """
        self._client = client
        self._path = path

    @classmethod
    def from_base_url(
        cls,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> HttpCatalogSource:
        return cls(httpx.AsyncClient(base_url=base_url, timeout=timeout))

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_catalog_page(self, request: CatalogPageRequest) -> FetchPage:
        params = QueryStringMapper.to_params(request.query, include_paging=False)
        params.append(("page", str(request.page)))
        params.append(("per_page", str(request.page_size)))

        try:
            response = await self._client.get(self._path, params=params)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            raise FetchFailure(
                f"Catalog source responded with HTTP {exc.response.status_code}",
                page=request.page,
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise FetchFailure(f"Catalog source request failed: {exc}", page=request.page) from exc
        except ValueError as exc:
            raise FetchFailure("Catalog source returned a malformed body", page=request.page) from exc

        return self._to_page(payload, request)

    def _to_page(self, payload: Any, request: CatalogPageRequest) -> FetchPage:
        records = extract_records(payload)
        items = tuple(normalize_items(records))

        # Bodies without metadata are treated as a plain slice of the result
        total = _metadata(payload, TOTAL_KEYS)
        if isinstance(total, bool) or not isinstance(total, int) or total < 0:
            total = (request.page - 1) * request.page_size + len(records)
            fallback_has_more = len(records) >= request.page_size
        else:
            fallback_has_more = request.page * request.page_size < total

        has_more = _metadata(payload, HAS_MORE_KEYS)
        if not isinstance(has_more, bool):
            has_more = fallback_has_more

        logger.debug(
            "Catalog page received",
            extra={
                "page": request.page,
                "records": len(records),
                "items": len(items),
                "total": total,
                "has_more": has_more,
            },
        )
        return FetchPage(page=request.page, items=items, total=total, has_more=has_more)
