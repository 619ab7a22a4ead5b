from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from bloom_catalog.domain.catalog_item import SIZE_ORDER, CatalogItem
from bloom_catalog.use_cases.memo import HashMemo, content_hash

# Offered when the loaded catalog carries no type at all
FALLBACK_TYPES = ("Orchid", "Mixed")


@dataclass(frozen=True, slots=True)
class FacetOptions:
    types: tuple[str, ...]
    sizes: tuple[str, ...]
    collections: tuple[str, ...]


def _distinct(values: Sequence[str]) -> tuple[str, ...]:
    seen: dict[str, None] = {}
    for value in values:
        text = value.strip()
        if text:
            seen.setdefault(text, None)
    return tuple(seen)


def _size_sort_key(size: str) -> tuple[int, str]:
    if size in SIZE_ORDER:
        return SIZE_ORDER.index(size), ""
    return len(SIZE_ORDER), size.casefold()


def build_facet_options(items: Sequence[CatalogItem]) -> FacetOptions:
    """
    Selectable filter values derived from the loaded catalog.

    Types and collections keep first-appearance order; sizes follow the
    canonical size order with unknown sizes alphabetically after.
    """
    types = _distinct([item.type for item in items])
    sizes = tuple(sorted(_distinct([item.size for item in items]), key=_size_sort_key))
    collections = _distinct([item.collection_name for item in items])

    return FacetOptions(
        types=types or FALLBACK_TYPES,
        sizes=sizes,
        collections=collections,
    )


class FacetOptionsProvider:
    """Facet options memoized on a content hash of the catalog."""

    def __init__(self) -> None:
        self._memo: HashMemo[FacetOptions] = HashMemo()

    def options_for(self, items: Sequence[CatalogItem]) -> FacetOptions:
        key = content_hash(tuple((item.type, item.size, item.collection_name) for item in items))
        return self._memo.get(key, lambda: build_facet_options(items))

    @property
    def memo(self) -> HashMemo[FacetOptions]:
        return self._memo
