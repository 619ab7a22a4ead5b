from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable

from bloom_catalog.domain.catalog_item import CatalogItem
from bloom_catalog.ports.catalog_repository import CatalogRepository
from bloom_catalog.use_cases.normalize_catalog_items import extract_records, normalize_items

logger = logging.getLogger(__name__)


class InMemoryCatalogRepository(CatalogRepository):
    """
    Canonical contract implementation.

    - Stores items in insertion order
    - Duplicate ids keep the first occurrence
    - Raw records go through the normalizer; rejected records are omitted
    """

    def __init__(self, items: Iterable[CatalogItem]) -> None:
        self._items: list[CatalogItem] = []
        self._by_id: dict[str, CatalogItem] = {}
        for item in items:
            if item.id in self._by_id:
                continue
            self._by_id[item.id] = item
            self._items.append(item)

    @classmethod
    def from_records(cls, payload: Any) -> InMemoryCatalogRepository:
        """Build from a raw payload: a list of records or an envelope carrying one."""
        records = extract_records(payload)
        items = normalize_items(records)

        logger.info(
            "Catalog loaded",
            extra={"records": len(records), "items": len(items), "omitted": len(records) - len(items)},
        )
        return cls(items)

    @classmethod
    def from_json_file(cls, path: str | Path) -> InMemoryCatalogRepository:
        """
        Load a catalog JSON file.

        Raises:
            OSError: If the file cannot be read
            ValueError: If the file is not valid JSON
        """
        with open(path, encoding="utf-8") as handle:
            payload = json.load(handle)
        return cls.from_records(payload)

    def all_items(self) -> list[CatalogItem]:
        return list(self._items)

    def get_by_id(self, item_id: str) -> CatalogItem | None:
        return self._by_id.get(item_id)
