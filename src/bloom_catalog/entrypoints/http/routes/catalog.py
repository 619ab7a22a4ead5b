from fastapi import APIRouter, Depends, Request

from bloom_catalog.entrypoints.http.dependencies import (
    get_catalog_item_use_case,
    get_catalog_repository,
    get_facet_options_provider,
    get_search_catalog_use_case,
)
from bloom_catalog.entrypoints.http.dtos.catalog import (
    CatalogItemResponseDTO,
    CatalogPageResponseDTO,
    FacetOptionsResponseDTO,
)
from bloom_catalog.entrypoints.http.error_responses import ErrorResponse
from bloom_catalog.entrypoints.http.mappers.catalog_mapper import CatalogMapper
from bloom_catalog.entrypoints.http.mappers.query_string_mapper import QueryStringMapper
from bloom_catalog.ports.catalog_repository import CatalogRepository
from bloom_catalog.use_cases.facet_options import FacetOptionsProvider
from bloom_catalog.use_cases.get_catalog_item import (
    GetCatalogItemById,
    GetCatalogItemByIdRequest,
)
from bloom_catalog.use_cases.search_catalog import SearchCatalog, SearchCatalogRequest

router = APIRouter(tags=["Catalog"])


@router.get(
    "/catalog",
    response_model=CatalogPageResponseDTO,
    summary="Browse the catalog",
    description="""
    One page of the filtered and sorted catalog.

    ## Query parameters
    - `q` (alias `search`): case-insensitive substring over name, description, type, size, collection
    - `type`, `size`, `collection`: repeatable or comma-separated; empty means no restriction
    - `name` (alias `filter`): single collection name, ignored when `collection` is given
    - `min` / `max` (aliases `minPrice` / `maxPrice`): inclusive price range within [0, 1000000]
    - `sort`: `price-asc`, `price-desc`, `name-asc`, `name-desc`
    - `page` (1-based), `per_page` (1 to 200, default 24)

    Out-of-range or malformed values are corrected, never rejected.

    ## Example
    ```
    GET /v1/catalog?type=Roses&min=100000&max=300000&sort=price-asc
    ```
    """,
)
def get_catalog(
    request: Request,
    use_case: SearchCatalog = Depends(get_search_catalog_use_case),
) -> CatalogPageResponseDTO:
    """Catalog page endpoint following parse → execute → map → return pattern."""
    # 1. Decode the raw query string
    state = QueryStringMapper.decode(request.url.query)

    # 2. Execute use case
    page = use_case.execute(
        SearchCatalogRequest(query=state, page=state.page, page_size=state.page_size)
    )

    # 3. Map to response
    return CatalogMapper.to_page_response(page, page_size=state.page_size)


@router.get(
    "/catalog/facets",
    response_model=FacetOptionsResponseDTO,
    summary="Filter options",
    description="Distinct types, sizes and collections present in the catalog.",
)
def get_catalog_facets(
    repository: CatalogRepository = Depends(get_catalog_repository),
    provider: FacetOptionsProvider = Depends(get_facet_options_provider),
) -> FacetOptionsResponseDTO:
    return CatalogMapper.to_facets_response(provider.options_for(repository.all_items()))


@router.get(
    "/catalog/items/{item_id}",
    response_model=CatalogItemResponseDTO,
    summary="Get a catalog item",
    responses={404: {"model": ErrorResponse, "description": "Item not found"}},
)
def get_catalog_item(
    item_id: str,
    use_case: GetCatalogItemById = Depends(get_catalog_item_use_case),
) -> CatalogItemResponseDTO:
    result = use_case.execute(GetCatalogItemByIdRequest(item_id=item_id))
    return CatalogMapper.to_item_response(result.item)
