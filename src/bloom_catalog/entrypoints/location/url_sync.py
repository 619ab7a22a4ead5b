"""
Bidirectional synchronization between QueryState and the location's query string.

Each update cycle runs in one direction only. A navigation decodes into the
store; a store change encodes out to the location. Both directions compare
the desired value with the current one first and do nothing when they are
equal, which is what stops a write in one direction from echoing back.
"""

from __future__ import annotations

import logging
from typing import Callable

from bloom_catalog.domain.query_state import QueryState
from bloom_catalog.entrypoints.http.mappers.query_string_mapper import QueryStringMapper
from bloom_catalog.ports.location import Location
from bloom_catalog.use_cases.query_state_store import QueryStateStore

logger = logging.getLogger(__name__)


class UrlStateSync:
    def __init__(self, store: QueryStateStore, location: Location) -> None:
        self._store = store
        self._location = location
        self._applying_navigation = False
        self._unsubscribe: Callable[[], None] | None = None

    def start(self) -> None:
        """Adopt the state carried by the current location, then follow store changes."""
        if self._unsubscribe is not None:
            return
        self.on_navigation(self._location.read_query_string())
        self._unsubscribe = self._store.subscribe(self.on_state_change)

    def stop(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def on_navigation(self, query_string: str) -> bool:
        """
        Location → store. Called on mount and on back/forward navigation.

        Returns:
            True if the store changed
        """
        decoded = QueryStringMapper.decode(query_string)
        if decoded == self._store.state:
            logger.debug("Navigation matches current query state, nothing to apply")
            return False

        self._applying_navigation = True
        try:
            return self._store.replace(decoded)
        finally:
            self._applying_navigation = False

    def on_state_change(self, previous: QueryState, current: QueryState) -> bool:
        """
        Store → location. Registered as a store listener by ``start``.

        Returns:
            True if the location was rewritten
        """
        if self._applying_navigation:
            return False

        desired = QueryStringMapper.encode(current)
        if desired == self._location.read_query_string().lstrip("?"):
            logger.debug("Location already reflects query state, write skipped")
            return False

        self._location.replace_query_string(desired)
        return True
