from pydantic import BaseModel, ConfigDict, Field


class CatalogItemResponseDTO(BaseModel):
    id: str
    name: str
    price: str = Field(description="Decimal price as string", examples=["250000"])
    description: str
    type: str
    size: str
    collection_name: str
    image: str
    status: str = Field(examples=["ready", "preorder"])
    is_featured: bool
    is_new_edition: bool
    quantity: int
    occasions: list[str]
    flowers: list[str]
    custom_tags: list[str]
    care_instructions: str | None = None
    created_at: str | None = Field(default=None, description="ISO-8601 timestamp")
    updated_at: str | None = Field(default=None, description="ISO-8601 timestamp")


class CatalogPageResponseDTO(BaseModel):
    """One page of the filtered and sorted catalog."""

    items: list[CatalogItemResponseDTO]
    total: int = Field(description="Items matching the query across all pages")
    page: int
    page_size: int
    has_more: bool

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "items": [],
                "total": 42,
                "page": 1,
                "page_size": 24,
                "has_more": True,
            }
        }
    )


class FacetOptionsResponseDTO(BaseModel):
    """Selectable filter values derived from the catalog."""

    types: list[str]
    sizes: list[str]
    collections: list[str]
