"""
Client-side composition root.

Wires one QueryStateStore to the location (URL sync), to the paginated fetch
controller and to the debounced search and price inputs.
"""

from __future__ import annotations

import logging
from typing import Callable

from bloom_catalog.adapters.http_catalog_source import HttpCatalogSource
from bloom_catalog.domain.catalog_item import FetchPage
from bloom_catalog.domain.query_state import QueryState
from bloom_catalog.entrypoints.location.url_sync import UrlStateSync
from bloom_catalog.infra import config
from bloom_catalog.ports.catalog_source import CatalogSource
from bloom_catalog.ports.location import Location
from bloom_catalog.use_cases.debounce import (
    DEFAULT_DEBOUNCE_SECONDS,
    DebouncedPriceInput,
    DebouncedSearchInput,
    Scheduler,
)
from bloom_catalog.use_cases.paginated_fetch_controller import PaginatedFetchController
from bloom_catalog.use_cases.query_state_store import QueryStateStore

logger = logging.getLogger(__name__)


class CatalogBrowseSession:
    def __init__(
        self,
        store: QueryStateStore,
        source: CatalogSource,
        location: Location,
        scheduler: Scheduler,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        is_favorite: Callable[[str], bool] | None = None,
    ) -> None:
        self.store = store
        self.controller = PaginatedFetchController(source, store.state)
        self.url_sync = UrlStateSync(store, location)
        self.search_input = DebouncedSearchInput(store, scheduler, debounce_seconds)
        self.price_input = DebouncedPriceInput(store, scheduler, debounce_seconds)
        self._source = source
        self._is_favorite = is_favorite
        self._unsubscribe: Callable[[], None] | None = None

    @classmethod
    def from_environment(cls, location: Location, scheduler: Scheduler) -> CatalogBrowseSession:
        """
        Build a session against the remote catalog API configured in the environment.

        Uses CATALOG_API_URL, CATALOG_PAGE_SIZE and CATALOG_DEBOUNCE_SECONDS.
        """
        return cls(
            store=QueryStateStore(QueryState(page_size=config.page_size())),
            source=HttpCatalogSource.from_base_url(config.catalog_api_url()),
            location=location,
            scheduler=scheduler,
            debounce_seconds=config.debounce_seconds(),
        )

    def start(self) -> None:
        """Adopt the location's state and point the controller at it."""
        self.url_sync.start()
        if self._unsubscribe is None:
            self._unsubscribe = self.store.subscribe(self._on_state_change)
        self.controller.set_query(self.store.state)

    async def load_more(self) -> FetchPage | None:
        return await self.controller.load_more()

    def is_favorite(self, item_id: str) -> bool:
        """Ask the injected favorites predicate; without one nothing is a favorite."""
        if self._is_favorite is None:
            return False
        return bool(self._is_favorite(item_id))

    async def aclose(self) -> None:
        """Teardown: stop listening, drop pending input and abort in-flight fetches."""
        self.url_sync.stop()
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self.search_input.debouncer.cancel()
        self.price_input.debouncer.cancel()
        self.controller.close()
        if isinstance(self._source, HttpCatalogSource):
            await self._source.aclose()
        logger.debug("Catalog browse session closed")

    def _on_state_change(self, previous: QueryState, current: QueryState) -> None:
        self.controller.set_query(current)
