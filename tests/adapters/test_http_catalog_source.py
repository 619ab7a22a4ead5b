"""
Test suite for HttpCatalogSource.

Uses httpx.MockTransport, so no network is involved.
"""

from __future__ import annotations

import json
from typing import Callable

import httpx
import pytest

from bloom_catalog.adapters.http_catalog_source import HttpCatalogSource
from bloom_catalog.domain.errors import FetchFailure
from bloom_catalog.domain.query_state import CatalogPageRequest, QueryState, SortKey


def make_source(handler: Callable[[httpx.Request], httpx.Response]) -> HttpCatalogSource:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://catalog.test")
    return HttpCatalogSource(client)


def json_response(payload: object, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(payload).encode("utf-8"))


# ==============================================================================
# Request Encoding
# ==============================================================================


@pytest.mark.asyncio
async def test_sends_canonical_query_with_paging() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return json_response({"items": [], "total": 0, "has_more": False})

    source = make_source(handler)
    query = QueryState(types=frozenset({"Tulips", "Roses"}), search="red", sort=SortKey.PRICE_ASC, page=4)

    await source.fetch_catalog_page(CatalogPageRequest(query=query, page=2, page_size=12))

    params = seen[0].url.params
    assert seen[0].url.path == "/v1/catalog"
    assert params.get_list("type") == ["Roses", "Tulips"]
    assert params["q"] == "red"
    assert params["sort"] == "price-asc"
    assert params["page"] == "2"
    assert params["per_page"] == "12"
    assert params.get_list("page") == ["2"]


# ==============================================================================
# Response Parsing
# ==============================================================================


@pytest.mark.asyncio
async def test_parses_envelope_and_normalizes_records() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return json_response(
            {
                "items": [
                    {"_id": "b-1", "name": "Velvet Roses", "price": "250000"},
                    {"price": 5},
                    {"id": "b-2", "title": "Posy", "price": -1},
                ],
                "total": 40,
                "has_more": True,
            }
        )

    page = await make_source(handler).fetch_catalog_page(CatalogPageRequest(query=QueryState(), page=1))

    assert [item.id for item in page.items] == ["b-1", "b-2"]
    assert page.total == 40
    assert page.has_more is True
    assert page.page == 1


@pytest.mark.asyncio
async def test_derives_has_more_from_total_when_missing() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return json_response({"data": [{"_id": "b-9", "name": "Lily"}], "totalCount": 9})

    page = await make_source(handler).fetch_catalog_page(
        CatalogPageRequest(query=QueryState(), page=3, page_size=4)
    )

    assert page.total == 9
    assert page.has_more is False


@pytest.mark.asyncio
async def test_bare_list_body_is_treated_as_a_slice() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return json_response([{"_id": f"b-{i}", "name": f"Bouquet {i}"} for i in range(2)])

    page = await make_source(handler).fetch_catalog_page(
        CatalogPageRequest(query=QueryState(), page=2, page_size=2)
    )

    assert page.total == 4
    assert page.has_more is True


# ==============================================================================
# Failures
# ==============================================================================


@pytest.mark.asyncio
async def test_http_error_status_becomes_fetch_failure() -> None:
    source = make_source(lambda request: httpx.Response(503))

    with pytest.raises(FetchFailure) as exc_info:
        await source.fetch_catalog_page(CatalogPageRequest(query=QueryState(), page=2))

    assert exc_info.value.page == 2
    assert exc_info.value.context["status_code"] == 503
    assert exc_info.value.retryable is True


@pytest.mark.asyncio
async def test_transport_error_becomes_fetch_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(FetchFailure):
        await make_source(handler).fetch_catalog_page(CatalogPageRequest(query=QueryState()))


@pytest.mark.asyncio
async def test_malformed_body_becomes_fetch_failure() -> None:
    source = make_source(lambda request: httpx.Response(200, content=b"<html>oops</html>"))

    with pytest.raises(FetchFailure):
        await source.fetch_catalog_page(CatalogPageRequest(query=QueryState()))


@pytest.mark.asyncio
async def test_aclose_closes_client() -> None:
    client = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(200)))
    source = HttpCatalogSource(client)

    await source.aclose()

    assert client.is_closed
