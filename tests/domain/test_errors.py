"""Tests for domain error classes."""

from bloom_catalog.domain.errors import (
    DomainError,
    FetchCancelled,
    FetchFailure,
    InternalError,
    NormalizationRejection,
    NotFoundError,
    ValidationError,
)


class TestDomainError:
    """Tests for base DomainError class."""

    def test_creates_error_with_message(self) -> None:
        """DomainError stores message and has correct error code."""
        error = DomainError("Something went wrong")

        assert error.message == "Something went wrong"
        assert error.error_code == "DOMAIN_ERROR"
        assert error.context == {}

    def test_creates_error_with_context(self) -> None:
        """DomainError stores additional context."""
        error = DomainError("Error occurred", resource="CatalogItem", action="load")

        assert error.context == {"resource": "CatalogItem", "action": "load"}

    def test_to_dict_returns_structured_format(self) -> None:
        """DomainError.to_dict() returns structured error format."""
        error = DomainError("Test error", field="test", value=123)

        assert error.to_dict() == {
            "message": "Test error",
            "code": "DOMAIN_ERROR",
            "field": "test",
            "value": 123,
        }

    def test_str_representation(self) -> None:
        """DomainError string representation is the message."""
        assert str(DomainError("Test message")) == "Test message"


class TestValidationError:
    """Tests for ValidationError class."""

    def test_creates_simple_validation_error(self) -> None:
        error = ValidationError("Invalid input")

        assert error.message == "Invalid input"
        assert error.error_code == "VALIDATION_ERROR"
        assert error.errors is None

    def test_creates_validation_error_with_default_message(self) -> None:
        error = ValidationError()

        assert error.message == "Validation error"

    def test_to_dict_includes_field_errors(self) -> None:
        """ValidationError.to_dict() includes field-level errors."""
        errors = [{"field": "item_id", "message": "Must not be empty", "code": "EMPTY_ID"}]

        error = ValidationError(errors=errors)

        assert error.message == "Validation failed"
        assert error.to_dict() == {
            "message": "Validation failed",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        }


class TestNotFoundError:
    """Tests for NotFoundError class."""

    def test_creates_not_found_error_with_identifier(self) -> None:
        error = NotFoundError(resource="CatalogItem", identifier="b-0001")

        assert error.message == "CatalogItem with identifier 'b-0001' not found"
        assert error.error_code == "NOT_FOUND"
        assert error.context == {"resource": "CatalogItem", "identifier": "b-0001"}

    def test_creates_not_found_error_without_identifier(self) -> None:
        error = NotFoundError(resource="CatalogItem")

        assert error.message == "CatalogItem not found"


class TestNormalizationRejection:
    """Tests for NormalizationRejection class."""

    def test_carries_reason(self) -> None:
        error = NormalizationRejection("missing name", id="b-1")

        assert error.reason == "missing name"
        assert error.error_code == "NORMALIZATION_REJECTED"
        assert error.context == {"reason": "missing name", "id": "b-1"}
        assert "missing name" in error.message


class TestFetchFailure:
    """Tests for FetchFailure class."""

    def test_is_retryable_domain_error(self) -> None:
        error = FetchFailure("Catalog source request failed", page=3)

        assert isinstance(error, DomainError)
        assert error.retryable is True
        assert error.page == 3
        assert error.to_dict()["code"] == "FETCH_FAILED"
        assert error.to_dict()["page"] == 3


class TestFetchCancelled:
    """Tests for FetchCancelled class."""

    def test_is_not_a_domain_error(self) -> None:
        """Cancellation never travels the domain error path."""
        cancelled = FetchCancelled(page=2)

        assert not isinstance(cancelled, DomainError)
        assert cancelled.reason == "superseded"
        assert cancelled.page == 2


class TestInternalError:
    """Tests for InternalError class."""

    def test_creates_internal_error(self) -> None:
        error = InternalError("Unexpected condition")

        assert error.message == "Unexpected condition"
        assert error.error_code == "INTERNAL_ERROR"
