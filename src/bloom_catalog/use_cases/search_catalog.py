from __future__ import annotations

from dataclasses import dataclass

from bloom_catalog.domain.catalog_item import FetchPage
from bloom_catalog.domain.query_state import QueryState, clamp_page, clamp_page_size
from bloom_catalog.ports.catalog_repository import CatalogRepository
from bloom_catalog.use_cases.filter_catalog import filter_items, sort_items


@dataclass(frozen=True, slots=True)
class SearchCatalogRequest:
    query: QueryState
    page: int = 1
    page_size: int | None = None  # Falls back to query.page_size


class SearchCatalog:
    """
    Catalog search in fetch-all-then-filter mode.

    Loads every item from the repository, filters and sorts with the
    predicate engine, then slices the requested page. total counts matching
    items before paging; has_more is computed from the same count so both
    fields share one contract with remote sources.
    """

    def __init__(self, catalog_repository: CatalogRepository) -> None:
        self._repository = catalog_repository

    def execute(self, request: SearchCatalogRequest) -> FetchPage:
        """
        Execute catalog search.

        Paging parameters are clamped, never rejected: a page past the end
        returns an empty slice with has_more False.

        Args:
            request: Query criteria and page position

        Returns:
            FetchPage with the page items, total matching count and has_more
        """
        page_size = clamp_page_size(request.page_size or request.query.page_size)
        page = clamp_page(request.page)

        matches = sort_items(
            filter_items(self._repository.all_items(), request.query),
            request.query.sort,
        )
        total = len(matches)  # Count BEFORE paging

        start = (page - 1) * page_size
        end = start + page_size

        return FetchPage(
            page=page,
            items=tuple(matches[start:end]),
            total=total,
            has_more=end < total,
        )
