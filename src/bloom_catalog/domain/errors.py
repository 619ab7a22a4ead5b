"""Domain error classes.

Protocol-agnostic errors that represent catalog failures.
These errors are translated to HTTP responses by the FastAPI exception handlers
and surfaced as explicit states by the paginated fetch controller.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain errors.

    Protocol-agnostic. Contains error information that can be translated
    to an HTTP response or to a render-boundary error state.
    """

    # Default error code (can be used as i18n key)
    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, **context: Any) -> None:
        """Create a domain error.

        Args:
            message: Human-readable error message (default locale)
            **context: Additional context for error (e.g., field names, values)
        """
        self.message = message
        self.context = context
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to structured format for protocol translation."""
        return {
            "message": self.message,
            "code": self.error_code,
            **self.context,
        }


class ValidationError(DomainError):
    """Business rule validation error.

    Untrusted query input is clamped rather than rejected, so this is only
    raised for inputs that cannot be corrected (e.g. an empty item id).

    Protocol mappings:
        - REST: 422 Unprocessable Entity
    """

    error_code: str = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str | None = None,
        errors: list[dict[str, str]] | None = None,
        **context: Any,
    ) -> None:
        """Create a validation error.

        Args:
            message: Overall validation error message (optional if errors provided)
            errors: List of field-specific errors, each with 'field' and 'message'
                   Example: [{"field": "item_id", "message": "Must not be empty"}]
            **context: Additional context
        """
        self.errors: list[dict[str, str]] | None
        if errors:
            self.errors = errors
            msg = message or "Validation failed"
        else:
            self.errors = None
            msg = message or "Validation error"

        super().__init__(msg, **context)

    def to_dict(self) -> dict[str, Any]:
        """Convert to structured format."""
        if self.errors:
            return {
                "message": self.message,
                "code": self.error_code,
                "errors": self.errors,
                **self.context,
            }
        return super().to_dict()


class NotFoundError(DomainError):
    """Resource not found.

    Protocol mappings:
        - REST: 404 Not Found
    """

    error_code: str = "NOT_FOUND"

    def __init__(self, resource: str, identifier: str | None = None, **context: Any) -> None:
        """Create a not found error.

        Args:
            resource: Type of resource (e.g., "CatalogItem")
            identifier: Resource identifier
            **context: Additional context
        """
        if identifier:
            message = f"{resource} with identifier '{identifier}' not found"
        else:
            message = f"{resource} not found"

        super().__init__(message, resource=resource, identifier=identifier, **context)


class NormalizationRejection(DomainError):
    """A single raw record could not become a CatalogItem.

    Never fatal: batch normalization records the rejection as an omission
    and moves on to the next record.
    """

    error_code: str = "NORMALIZATION_REJECTED"

    def __init__(self, reason: str, **context: Any) -> None:
        self.reason = reason
        super().__init__(f"Record rejected: {reason}", reason=reason, **context)


class FetchFailure(DomainError):
    """A catalog page could not be fetched or parsed.

    Retryable. The fetch controller stores it as its error state without
    discarding pages that were already accumulated.

    Protocol mappings:
        - REST: 502 Bad Gateway
    """

    error_code: str = "FETCH_FAILED"
    retryable: bool = True

    def __init__(self, message: str, page: int | None = None, **context: Any) -> None:
        self.page = page
        super().__init__(message, page=page, **context)


class InternalError(DomainError):
    """Internal domain error (unexpected conditions).

    Should be logged for investigation.

    Protocol mappings:
        - REST: 500 Internal Server Error
    """

    error_code: str = "INTERNAL_ERROR"


class FetchCancelled(Exception):
    """A fetch was superseded or torn down before it settled.

    Not an error and not a DomainError: it is never stored as
    an error state and never reaches a user-visible error path.
    """

    def __init__(self, reason: str = "superseded", page: int | None = None) -> None:
        self.reason = reason
        self.page = page
        super().__init__(f"Fetch cancelled ({reason})")
