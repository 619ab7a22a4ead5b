from __future__ import annotations

from bloom_catalog.domain.catalog_item import CatalogItem, FetchPage
from bloom_catalog.entrypoints.http.dtos.catalog import (
    CatalogItemResponseDTO,
    CatalogPageResponseDTO,
    FacetOptionsResponseDTO,
)
from bloom_catalog.use_cases.facet_options import FacetOptions


class CatalogMapper:
    """Maps catalog domain objects to REST response DTOs."""

    @staticmethod
    def to_item_response(item: CatalogItem) -> CatalogItemResponseDTO:
        """
        Converts a domain CatalogItem to its response DTO.

        Handles Decimal → str and datetime → ISO-8601 at the boundary.
        """
        return CatalogItemResponseDTO(
            id=item.id,
            name=item.name,
            price=str(item.price),  # Decimal → str at boundary
            description=item.description,
            type=item.type,
            size=item.size,
            collection_name=item.collection_name,
            image=item.image,
            status=item.status.value,
            is_featured=item.is_featured,
            is_new_edition=item.is_new_edition,
            quantity=item.quantity,
            occasions=list(item.occasions),
            flowers=list(item.flowers),
            custom_tags=list(item.custom_tags),
            care_instructions=item.care_instructions,
            created_at=item.created_at.isoformat() if item.created_at else None,
            updated_at=item.updated_at.isoformat() if item.updated_at else None,
        )

    @staticmethod
    def to_page_response(page: FetchPage, page_size: int) -> CatalogPageResponseDTO:
        """
        Converts a fetched page to the REST response with paging metadata.

        Args:
            page: Page produced by SearchCatalog
            page_size: Effective page size (echoed back)
        """
        return CatalogPageResponseDTO(
            items=[CatalogMapper.to_item_response(item) for item in page.items],
            total=page.total,
            page=page.page,
            page_size=page_size,
            has_more=page.has_more,
        )

    @staticmethod
    def to_facets_response(options: FacetOptions) -> FacetOptionsResponseDTO:
        return FacetOptionsResponseDTO(
            types=list(options.types),
            sizes=list(options.sizes),
            collections=list(options.collections),
        )
