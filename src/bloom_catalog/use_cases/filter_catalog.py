"""
Filter/sort predicate engine.

Pure functions: every call returns a new list and never mutates its input.
All filter predicates use AND semantics; an empty selection never excludes.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Sequence

from bloom_catalog.domain.catalog_item import CatalogItem
from bloom_catalog.domain.query_state import (
    PriceRange,
    QueryState,
    SortKey,
    clamp_page,
    page_count,
)
from bloom_catalog.use_cases.memo import HashMemo, content_hash

ZERO = Decimal("0")


def _effective_price(item: CatalogItem) -> Decimal:
    price = item.price
    if not isinstance(price, Decimal) or not price.is_finite() or price < 0:
        return ZERO
    return price


def _matches_collection(item: CatalogItem, query: QueryState) -> bool:
    collection = item.collection_name.strip()
    selected = {c.strip() for c in query.collections if c.strip()}
    if selected:
        return collection in selected

    needle = query.collection_name.strip().casefold()
    return not needle or collection.casefold() == needle


def _matches_search(item: CatalogItem, needle: str) -> bool:
    if not needle:
        return True
    fields = (item.name, item.description, item.type, item.size, item.collection_name)
    return any(needle in value.casefold() for value in fields if value)


def matches(item: CatalogItem, query: QueryState) -> bool:
    # Inverted or out-of-domain bounds are canonicalized, never treated as empty
    price_range = PriceRange.of(query.price_range.minimum, query.price_range.maximum)
    price = _effective_price(item)
    if price < price_range.minimum or price > price_range.maximum:
        return False
    if query.types and item.type not in query.types:
        return False
    if query.sizes and item.size not in query.sizes:
        return False
    if not _matches_collection(item, query):
        return False
    return _matches_search(item, query.search.strip().casefold())


def filter_items(items: Iterable[CatalogItem], query: QueryState) -> list[CatalogItem]:
    return [item for item in items if matches(item, query)]


def _collation_key(text: str) -> tuple[str, str]:
    # Accent- and case-insensitive primary key, raw text as the tie-breaker
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), text


def sort_items(items: Iterable[CatalogItem], sort: SortKey | str) -> list[CatalogItem]:
    """
    Stable sort; ties keep their input order in both directions.

    Unknown sort keys fall back to identity order.
    """
    key = SortKey.parse(sort)

    if key is SortKey.PRICE_ASC:
        return sorted(items, key=_effective_price)
    if key is SortKey.PRICE_DESC:
        return sorted(items, key=_effective_price, reverse=True)
    if key is SortKey.NAME_ASC:
        return sorted(items, key=lambda item: _collation_key(item.name))
    if key is SortKey.NAME_DESC:
        return sorted(items, key=lambda item: _collation_key(item.name), reverse=True)
    return list(items)


@dataclass(frozen=True, slots=True)
class CatalogView:
    """Everything the render coordinator reads for one query."""

    items: tuple[CatalogItem, ...]  # Filtered and sorted, all pages
    page_items: tuple[CatalogItem, ...]
    total: int
    page: int
    page_count: int
    has_active_filters: bool
    min_price: Decimal | None


def derive_catalog_view(items: Sequence[CatalogItem], query: QueryState) -> CatalogView:
    ordered = sort_items(filter_items(items, query), query.sort)
    total = len(ordered)
    page = clamp_page(query.page, total, query.page_size)
    start = (page - 1) * query.page_size

    return CatalogView(
        items=tuple(ordered),
        page_items=tuple(ordered[start : start + query.page_size]),
        total=total,
        page=page,
        page_count=page_count(total, query.page_size),
        has_active_filters=query.has_active_filters,
        min_price=min((_effective_price(item) for item in ordered), default=None),
    )


class CatalogViewDeriver:
    """
    Memoized ``derive_catalog_view``.

    The memo key hashes the item sequence and the query; any change to
    either recomputes, repeated renders with equal inputs reuse the result.
    """

    def __init__(self) -> None:
        self._memo: HashMemo[CatalogView] = HashMemo()

    def derive(self, items: Sequence[CatalogItem], query: QueryState) -> CatalogView:
        key = content_hash(tuple(items), query)
        return self._memo.get(key, lambda: derive_catalog_view(items, query))

    @property
    def memo(self) -> HashMemo[CatalogView]:
        return self._memo
