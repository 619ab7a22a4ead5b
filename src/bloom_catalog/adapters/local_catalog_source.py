from __future__ import annotations

from bloom_catalog.domain.catalog_item import FetchPage
from bloom_catalog.domain.query_state import CatalogPageRequest
from bloom_catalog.ports.catalog_repository import CatalogRepository
from bloom_catalog.ports.catalog_source import CatalogSource
from bloom_catalog.use_cases.search_catalog import SearchCatalog, SearchCatalogRequest


class LocalCatalogSource(CatalogSource):
    """
    Fetch-all-then-filter mode: pages are sliced from an in-process catalog.

    Shares SearchCatalog with the HTTP server, so total and has_more follow
    the same contract whichever source feeds the fetch controller.
    """

    def __init__(self, catalog_repository: CatalogRepository) -> None:
        self._search = SearchCatalog(catalog_repository=catalog_repository)

    async def fetch_catalog_page(self, request: CatalogPageRequest) -> FetchPage:
        return self._search.execute(
            SearchCatalogRequest(
                query=request.query,
                page=request.page,
                page_size=request.page_size,
            )
        )
