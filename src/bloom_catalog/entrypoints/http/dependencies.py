"""
Dependency injection for FastAPI routes.

Key principle: the catalog is loaded from disk once and shared.
Only stateless singletons should use lru_cache; use cases are built per request.
"""

from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from bloom_catalog.adapters.in_memory_catalog_repository import InMemoryCatalogRepository
from bloom_catalog.infra.config import catalog_data_path
from bloom_catalog.ports.catalog_repository import CatalogRepository
from bloom_catalog.use_cases.facet_options import FacetOptionsProvider
from bloom_catalog.use_cases.get_catalog_item import GetCatalogItemById
from bloom_catalog.use_cases.search_catalog import SearchCatalog


@lru_cache(maxsize=1)
def get_catalog_repository() -> CatalogRepository:
    """
    Catalog repository loaded from CATALOG_DATA_PATH on first use.

    Raises:
        RuntimeError: If CATALOG_DATA_PATH is not set
    """
    return InMemoryCatalogRepository.from_json_file(catalog_data_path())


@lru_cache(maxsize=1)
def get_facet_options_provider() -> FacetOptionsProvider:
    return FacetOptionsProvider()


def get_search_catalog_use_case(
    repository: CatalogRepository = Depends(get_catalog_repository),
) -> SearchCatalog:
    """
    Factory function that returns a configured SearchCatalog use case.

    Args:
        repository: Shared catalog repository (injected by FastAPI)

    Returns:
        SearchCatalog: Use case instance for this request
    """
    return SearchCatalog(catalog_repository=repository)


def get_catalog_item_use_case(
    repository: CatalogRepository = Depends(get_catalog_repository),
) -> GetCatalogItemById:
    return GetCatalogItemById(catalog_repository=repository)
