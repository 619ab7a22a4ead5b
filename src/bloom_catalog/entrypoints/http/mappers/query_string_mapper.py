"""
URL codec for QueryState.

``encode`` writes a canonical query string: parameters at their default
value are omitted, set members are sorted, and a free-text collection filter
is dropped when collections are selected. ``decode`` accepts anything a user
or an old link may carry: unknown parameters are ignored, aliases are
honoured, repeated and comma-separated values are merged and deduplicated,
and numbers are clamped instead of rejected. Decoding an encoded state and
encoding it again yields the same string.
"""

from __future__ import annotations

import math

from starlette.datastructures import QueryParams

from bloom_catalog.domain.catalog_item import canonical_size
from bloom_catalog.domain.query_state import (
    DEFAULT_PAGE_SIZE,
    PRICE_DOMAIN_MAX,
    PRICE_DOMAIN_MIN,
    PriceRange,
    QueryState,
    SortKey,
    clamp_page,
    clamp_page_size,
    clean_selection,
)

# Canonical parameter name first, accepted aliases after
SEARCH_PARAMS = ("q", "search")
COLLECTION_NAME_PARAMS = ("name", "filter")
MIN_PRICE_PARAMS = ("min", "minPrice")
MAX_PRICE_PARAMS = ("max", "maxPrice")
TYPE_PARAM = "type"
SIZE_PARAM = "size"
COLLECTION_PARAM = "collection"
SORT_PARAM = "sort"
PAGE_PARAM = "page"
PAGE_SIZE_PARAMS = ("per_page", "perPage")


def _first_text(params: QueryParams, names: tuple[str, ...]) -> str:
    for name in names:
        for value in params.getlist(name):
            if value.strip():
                return value.strip()
    return ""


def _members(params: QueryParams, name: str) -> frozenset[str]:
    values: list[str] = []
    for raw in params.getlist(name):
        values.extend(raw.split(","))
    return clean_selection(values)


def _first_int(params: QueryParams, names: tuple[str, ...], default: int) -> int:
    text = _first_text(params, names)
    if not text:
        return default
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return default
    if not math.isfinite(number):
        return default
    return int(number)


class QueryStringMapper:
    """Maps between QueryState and its URL query-string form."""

    @staticmethod
    def to_params(state: QueryState, include_paging: bool = True) -> list[tuple[str, str]]:
        """
        Canonical ``(name, value)`` pairs for a state, defaults omitted.

        Args:
            state: Query state to serialize
            include_paging: Whether page and page size are written

        Returns:
            Ordered parameter pairs; repeated names carry set members
        """
        params: list[tuple[str, str]] = []

        if state.search:
            params.append((SEARCH_PARAMS[0], state.search))
        if state.collection_name and not state.collections:
            params.append((COLLECTION_NAME_PARAMS[0], state.collection_name))

        params.extend((TYPE_PARAM, value) for value in sorted(state.types))
        params.extend((SIZE_PARAM, value) for value in sorted(state.sizes))
        params.extend((COLLECTION_PARAM, value) for value in sorted(state.collections))

        if state.price_range.minimum != PRICE_DOMAIN_MIN:
            params.append((MIN_PRICE_PARAMS[0], str(state.price_range.minimum)))
        if state.price_range.maximum != PRICE_DOMAIN_MAX:
            params.append((MAX_PRICE_PARAMS[0], str(state.price_range.maximum)))

        if state.sort is not SortKey.NONE:
            params.append((SORT_PARAM, state.sort.value))

        if include_paging:
            if state.page != 1:
                params.append((PAGE_PARAM, str(state.page)))
            if state.page_size != DEFAULT_PAGE_SIZE:
                params.append((PAGE_SIZE_PARAMS[0], str(state.page_size)))

        return params

    @staticmethod
    def encode(state: QueryState) -> str:
        """
        Serialize a state to a query string (no leading ``?``).

        The default state encodes to the empty string.
        """
        return str(QueryParams(QueryStringMapper.to_params(state)))

    @staticmethod
    def decode(query_string: str) -> QueryState:
        """
        Parse a possibly tampered query string into a valid state.

        Never raises; anything unusable falls back to its default.
        """
        params = QueryParams(query_string.lstrip("?"))

        collections = _members(params, COLLECTION_PARAM)
        collection_name = "" if collections else _first_text(params, COLLECTION_NAME_PARAMS)

        price_range = PriceRange.of(
            _first_int(params, MIN_PRICE_PARAMS, PRICE_DOMAIN_MIN),
            _first_int(params, MAX_PRICE_PARAMS, PRICE_DOMAIN_MAX),
        )

        return QueryState(
            price_range=price_range,
            types=_members(params, TYPE_PARAM),
            sizes=frozenset(canonical_size(size) for size in _members(params, SIZE_PARAM)),
            collections=collections,
            collection_name=collection_name,
            search=_first_text(params, SEARCH_PARAMS),
            sort=SortKey.parse(params.get(SORT_PARAM)),
            page=clamp_page(_first_int(params, (PAGE_PARAM,), 1)),
            page_size=clamp_page_size(_first_int(params, PAGE_SIZE_PARAMS, DEFAULT_PAGE_SIZE)),
        )
