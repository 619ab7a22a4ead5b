from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable

from bloom_catalog.domain.catalog_item import canonical_size

# ==============================================================================
# Constants
# ==============================================================================

PRICE_DOMAIN_MIN = 0
PRICE_DOMAIN_MAX = 1_000_000
PRICE_SLIDER_STEP = 50_000

DEFAULT_PAGE_SIZE = 24
MAX_PAGE_SIZE = 200


class SortKey(str, Enum):
    NONE = ""
    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"
    NAME_ASC = "name-asc"
    NAME_DESC = "name-desc"

    @classmethod
    def parse(cls, value: object) -> SortKey:
        """Unknown or missing values fall back to identity order."""
        if isinstance(value, SortKey):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                return cls.NONE
        return cls.NONE


class FilterField(str, Enum):
    TYPE = "type"
    SIZE = "size"
    COLLECTION = "collection"


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def price_bound(value: float, default: int) -> int:
    """
    Coerce a price bound to an int inside the price domain.

    NaN falls back to ``default``; infinities saturate at the domain edges.
    """
    if isinstance(value, float) and not math.isfinite(value):
        if math.isnan(value):
            return default
        return PRICE_DOMAIN_MAX if value > 0 else PRICE_DOMAIN_MIN
    return _clamp(int(value), PRICE_DOMAIN_MIN, PRICE_DOMAIN_MAX)


@dataclass(frozen=True, slots=True)
class PriceRange:
    minimum: int = PRICE_DOMAIN_MIN
    maximum: int = PRICE_DOMAIN_MAX

    @classmethod
    def of(cls, low: float, high: float) -> PriceRange:
        """
        Build a canonical range: both bounds are coerced into the price
        domain, then inverted bounds are swapped.
        """
        low = price_bound(low, PRICE_DOMAIN_MIN)
        high = price_bound(high, PRICE_DOMAIN_MAX)
        if low > high:
            low, high = high, low
        return cls(minimum=low, maximum=high)

    @property
    def is_default(self) -> bool:
        return self.minimum == PRICE_DOMAIN_MIN and self.maximum == PRICE_DOMAIN_MAX


DEFAULT_PRICE_RANGE = PriceRange()


def snap_to_step(value: float, step: int = PRICE_SLIDER_STEP, default: int = PRICE_DOMAIN_MIN) -> int:
    """Round a slider value to the nearest step, inside the price domain."""
    value = price_bound(value, default)
    snapped = int(round(value / step)) * step
    return _clamp(snapped, PRICE_DOMAIN_MIN, PRICE_DOMAIN_MAX)


def clean_selection(values: Iterable[str]) -> frozenset[str]:
    """Trim members and drop blanks; duplicates collapse in the set."""
    return frozenset(v.strip() for v in values if isinstance(v, str) and v.strip())


def clamp_page_size(page_size: int) -> int:
    return _clamp(int(page_size), 1, MAX_PAGE_SIZE)


def page_count(total: int, page_size: int) -> int:
    """Number of pages for ``total`` items; an empty result still has page 1."""
    if total <= 0:
        return 1
    return math.ceil(total / clamp_page_size(page_size))


def clamp_page(page: int, total: int | None = None, page_size: int = DEFAULT_PAGE_SIZE) -> int:
    """Pages are 1-based; when the total is known they never exceed the last page."""
    page = max(1, int(page))
    if total is None:
        return page
    return min(page, page_count(total, page_size))


@dataclass(frozen=True, slots=True)
class QueryState:
    """
    Complete, serializable description of which subset of the catalog is
    shown, in what order, at what page.
    """

    price_range: PriceRange = DEFAULT_PRICE_RANGE
    types: frozenset[str] = field(default_factory=frozenset)
    sizes: frozenset[str] = field(default_factory=frozenset)
    collections: frozenset[str] = field(default_factory=frozenset)
    collection_name: str = ""
    search: str = ""
    sort: SortKey = SortKey.NONE
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def selection(self, field_: FilterField) -> frozenset[str]:
        if field_ is FilterField.TYPE:
            return self.types
        if field_ is FilterField.SIZE:
            return self.sizes
        return self.collections

    def with_selection(self, field_: FilterField, values: frozenset[str]) -> QueryState:
        if field_ is FilterField.TYPE:
            return replace(self, types=values)
        if field_ is FilterField.SIZE:
            return replace(self, sizes=frozenset(canonical_size(value) for value in values))
        # Picking collections explicitly supersedes the free-text collection filter
        return replace(self, collections=values, collection_name="")

    @property
    def criteria(self) -> QueryState:
        """The state with page position removed; identifies the logical query."""
        return replace(self, page=1)

    @property
    def has_active_filters(self) -> bool:
        return bool(
            self.types
            or self.sizes
            or self.collections
            or self.collection_name
            or self.search
            or self.sort is not SortKey.NONE
            or not self.price_range.is_default
        )


DEFAULT_QUERY_STATE = QueryState()


@dataclass(frozen=True, slots=True)
class CatalogPageRequest:
    """Parameters for one catalog source round trip."""

    query: QueryState
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
