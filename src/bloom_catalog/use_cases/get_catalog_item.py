"""Get catalog item by ID use case."""

from __future__ import annotations

from dataclasses import dataclass

from bloom_catalog.domain.catalog_item import CatalogItem
from bloom_catalog.domain.errors import NotFoundError, ValidationError
from bloom_catalog.ports.catalog_repository import CatalogRepository


@dataclass(frozen=True, slots=True)
class GetCatalogItemByIdRequest:
    """Request to get a catalog item by ID."""

    item_id: str


@dataclass(frozen=True, slots=True)
class GetCatalogItemByIdResponse:
    """Response containing the requested item."""

    item: CatalogItem


class GetCatalogItemById:
    """
    Use case for retrieving a single catalog item by ID.

    Responsibilities:
    - Reject blank ids
    - Delegate to repository for data access
    - Raise NotFoundError if the item doesn't exist
    """

    def __init__(self, catalog_repository: CatalogRepository) -> None:
        self._repository = catalog_repository

    def execute(self, request: GetCatalogItemByIdRequest) -> GetCatalogItemByIdResponse:
        """
        Execute the get item by ID use case.

        Raises:
            ValidationError: If item_id is blank
            NotFoundError: If no item has the given ID
        """
        item_id = request.item_id.strip()
        if not item_id:
            raise ValidationError(
                errors=[
                    {
                        "field": "item_id",
                        "message": "Must not be empty",
                        "code": "EMPTY_ID",
                    }
                ]
            )

        item = self._repository.get_by_id(item_id)

        if item is None:
            raise NotFoundError(resource="CatalogItem", identifier=item_id)

        return GetCatalogItemByIdResponse(item=item)
