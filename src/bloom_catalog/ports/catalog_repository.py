from __future__ import annotations

from abc import ABC, abstractmethod

from bloom_catalog.domain.catalog_item import CatalogItem


class CatalogRepository(ABC):
    """
    Port for the server-side store of normalized catalog items.

    Contract:
        - Items are already normalized (ids and names non-empty)
        - all_items() preserves insertion order and returns a fresh list
    """

    @abstractmethod
    def all_items(self) -> list[CatalogItem]:
        """Every item in catalog order."""
        ...

    @abstractmethod
    def get_by_id(self, item_id: str) -> CatalogItem | None:
        """
        Look up one item.

        Returns:
            The item, or None if no item has this id
        """
        ...
