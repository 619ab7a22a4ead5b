from __future__ import annotations

from abc import ABC, abstractmethod

from bloom_catalog.domain.catalog_item import FetchPage
from bloom_catalog.domain.query_state import CatalogPageRequest


class CatalogSource(ABC):
    """
    Port for page-by-page catalog retrieval, consumed by the fetch controller.

    Contract:
        - total is the number of items matching the query across all pages
        - has_more is True while page * page_size < total
        - Cancellation arrives as asyncio.CancelledError (the awaiting task is
          cancelled); implementations must not convert it into a failure
        - Network and parse errors are raised as FetchFailure
    """

    @abstractmethod
    async def fetch_catalog_page(self, request: CatalogPageRequest) -> FetchPage:
        """
        Fetch one page of items matching ``request.query``.

        Raises:
            FetchFailure: If the page could not be fetched or parsed
        """
        ...
