"""
Tests for custom exception classes.

Tests exception creation, message formatting, and details handling.
"""

import pytest

from bookshelf.core.exceptions import (
    BookshelfError,
    ConfigurationError,
    DatabaseError,
    ValidationError,
    SearchError,
    BackendUnavailableError,
    RelayError
)


class TestBookshelfError:
    """Tests for base BookshelfError."""

    def test_basic_creation(self):
        """Test creating exception with just a message."""
        error = BookshelfError("Something went wrong")

        assert error.message == "Something went wrong"
        assert error.details == {}
        assert str(error) == "Something went wrong"

    def test_creation_with_details(self):
        """Test creating exception with details dict."""
        error = BookshelfError(
            "Record error",
            {"title": "আরণ্যক", "id": 7}
        )

        assert error.message == "Record error"
        assert error.details["title"] == "আরণ্যক"
        assert error.details["id"] == 7


class TestConfigurationError:
    """Tests for ConfigurationError."""

    def test_is_subclass_of_base(self):
        """Test that ConfigurationError inherits from BookshelfError."""
        error = ConfigurationError("Config missing")

        assert isinstance(error, BookshelfError)

    def test_can_be_caught_as_base(self):
        """Test that ConfigurationError can be caught as BookshelfError."""
        with pytest.raises(BookshelfError):
            raise ConfigurationError("Test error")


class TestDatabaseError:
    """Tests for DatabaseError."""

    def test_is_subclass_of_base(self):
        """Test that DatabaseError inherits from BookshelfError."""
        assert isinstance(DatabaseError("Locked"), BookshelfError)


class TestValidationError:
    """Tests for ValidationError."""

    def test_stores_field(self):
        """Test that the offending field is kept."""
        error = ValidationError("Missing required field: title", field="title")

        assert error.field == "title"
        assert error.message == "Missing required field: title"

    def test_field_optional(self):
        """Test that field defaults to None."""
        assert ValidationError("Bad record").field is None


class TestSearchError:
    """Tests for SearchError and BackendUnavailableError."""

    def test_stores_query(self):
        """Test that the query is kept on the error."""
        error = SearchError("Search failed", query="aranyak")

        assert error.query == "aranyak"
        assert isinstance(error, BookshelfError)

    def test_backend_unavailable_is_search_error(self):
        """Test that BackendUnavailableError can be caught as SearchError."""
        with pytest.raises(SearchError) as exc_info:
            raise BackendUnavailableError("Store down", query="kbita")

        assert exc_info.value.query == "kbita"


class TestRelayError:
    """Tests for RelayError."""

    def test_default_status_code(self):
        """Test that relay failures default to status 500."""
        error = RelayError("Connection refused", url="https://example.com/a.pdf")

        assert error.status_code == 500
        assert error.url == "https://example.com/a.pdf"

    def test_custom_status_code(self):
        """Test that an upstream status code is preserved."""
        error = RelayError("Not Found", status_code=404)

        assert error.status_code == 404
        assert isinstance(error, BookshelfError)
