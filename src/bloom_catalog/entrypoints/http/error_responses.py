"""REST API error response models.

Documents the structured body every error handler returns.
"""

from pydantic import BaseModel, ConfigDict


class ErrorDetail(BaseModel):
    """Field-level error detail, present on validation errors."""

    field: str
    message: str
    code: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "item_id",
                "message": "Must not be empty",
                "code": "EMPTY_ID",
            }
        }
    )


class ErrorResponse(BaseModel):
    """Structured error response format.

    Examples:
        Simple error:
            {
                "detail": "CatalogItem with identifier 'b-404' not found",
                "code": "NOT_FOUND"
            }

        Retryable upstream failure:
            {
                "detail": "Catalog source responded with HTTP 503",
                "code": "FETCH_FAILED",
                "retryable": true
            }
    """

    detail: str
    code: str | None = None
    errors: list[ErrorDetail] | None = None
    retryable: bool | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"detail": "CatalogItem with identifier 'b-404' not found", "code": "NOT_FOUND"},
                {
                    "detail": "Validation failed",
                    "code": "VALIDATION_ERROR",
                    "errors": [
                        {
                            "field": "item_id",
                            "message": "Must not be empty",
                            "code": "EMPTY_ID",
                        }
                    ],
                },
            ]
        }
    )
