from __future__ import annotations

from dataclasses import replace
from typing import Callable, Iterable

from bloom_catalog.domain.catalog_item import canonical_size
from bloom_catalog.domain.query_state import (
    DEFAULT_QUERY_STATE,
    FilterField,
    PriceRange,
    QueryState,
    SortKey,
    clamp_page,
    clamp_page_size,
    clean_selection,
)

Listener = Callable[[QueryState, QueryState], None]


class QueryStateStore:
    """
    Owner of the current QueryState.

    State is only changed through the operations below. Every operation
    except ``set_page`` puts the page position back to 1, since changing
    criteria invalidates it. Listeners receive ``(previous, current)`` after
    each effective change; a mutation that yields an equal state notifies
    nobody.
    """

    def __init__(self, initial: QueryState = DEFAULT_QUERY_STATE) -> None:
        self._state = initial
        self._listeners: list[Listener] = []

    @property
    def state(self) -> QueryState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # Categorical selections -------------------------------------------------

    def set_filter(self, field: FilterField | str, values: Iterable[str]) -> bool:
        field = FilterField(field)
        return self._commit(self._state.with_selection(field, clean_selection(values)))

    def toggle_set_member(self, field: FilterField | str, value: str) -> bool:
        field = FilterField(field)
        member = value.strip()
        if not member:
            return self._commit(self._state)
        if field is FilterField.SIZE:
            member = canonical_size(member)
        current = self._state.selection(field)
        updated = current - {member} if member in current else current | {member}
        return self._commit(self._state.with_selection(field, updated))

    def clear_filter(self, field: FilterField | str) -> bool:
        field = FilterField(field)
        return self._commit(self._state.with_selection(field, frozenset()))

    def clear_all(self) -> bool:
        return self._commit(DEFAULT_QUERY_STATE, keep_page_size=True)

    # Free text --------------------------------------------------------------

    def set_search(self, text: str) -> bool:
        return self._commit(replace(self._state, search=text.strip()))

    def set_collection_name(self, name: str) -> bool:
        return self._commit(replace(self._state, collection_name=name.strip()))

    # Ordering, range and paging ---------------------------------------------

    def set_sort(self, sort: SortKey | str) -> bool:
        return self._commit(replace(self._state, sort=SortKey.parse(sort)))

    def set_price_range(self, low: float, high: float) -> bool:
        return self._commit(replace(self._state, price_range=PriceRange.of(low, high)))

    def set_page_size(self, page_size: int) -> bool:
        return self._commit(replace(self._state, page_size=clamp_page_size(page_size)))

    def set_page(self, page: int, total: int | None = None) -> bool:
        """Move to ``page``; clamped to the last page when ``total`` is known."""
        page = clamp_page(page, total, self._state.page_size)
        return self._commit(replace(self._state, page=page), reset_page=False)

    def replace(self, state: QueryState) -> bool:
        """Adopt a complete state (e.g. decoded from a URL) including its page."""
        return self._commit(state, reset_page=False)

    # Internal ---------------------------------------------------------------

    def _commit(
        self,
        state: QueryState,
        reset_page: bool = True,
        keep_page_size: bool = False,
    ) -> bool:
        if reset_page:
            state = replace(state, page=1)
        if keep_page_size:
            state = replace(state, page_size=self._state.page_size)
        if state == self._state:
            return False

        previous, self._state = self._state, state
        for listener in list(self._listeners):
            listener(previous, state)
        return True
