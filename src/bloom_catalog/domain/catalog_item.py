from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum


class ItemStatus(str, Enum):
    READY = "ready"
    PREORDER = "preorder"


# Canonical size labels, smallest first
SIZE_ORDER = ("Extra-Small", "Small", "Medium", "Large", "Extra-Large", "Jumbo")

_SIZE_ALIASES = {
    "extra-small": "Extra-Small",
    "extra small": "Extra-Small",
    "xs": "Extra-Small",
    "xsmall": "Extra-Small",
    "small": "Small",
    "medium": "Medium",
    "large": "Large",
    "extra-large": "Extra-Large",
    "extra large": "Extra-Large",
    "x-large": "Extra-Large",
    "jumbo": "Jumbo",
    "xl": "Jumbo",
    "xxl": "Jumbo",
}


def canonical_size(value: str) -> str:
    """Map known size spellings to their canonical label; others pass through trimmed."""
    text = value.strip()
    return _SIZE_ALIASES.get(text.lower(), text)


@dataclass(frozen=True, slots=True)
class CatalogItem:
    """
    A single purchasable listing.

    Instances are only produced by the normalizer, so id and name are
    always non-empty and price/quantity are never negative.
    """

    id: str
    name: str
    price: Decimal
    description: str = ""
    type: str = ""
    size: str = ""
    collection_name: str = ""
    image: str = ""
    status: ItemStatus = ItemStatus.READY
    is_featured: bool = False
    is_new_edition: bool = False
    quantity: int = 0
    occasions: tuple[str, ...] = field(default_factory=tuple)
    flowers: tuple[str, ...] = field(default_factory=tuple)
    custom_tags: tuple[str, ...] = field(default_factory=tuple)
    care_instructions: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class FetchPage:
    """One page round trip from a catalog source."""

    page: int
    items: tuple[CatalogItem, ...]
    total: int  # Items matching the query across all pages
    has_more: bool
