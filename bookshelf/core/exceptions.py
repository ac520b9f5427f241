"""
Custom exception hierarchy for the Bookshelf catalog.

Provides specific exception types for different failure modes:
configuration errors, database issues, invalid records, search backend
failures and document relay problems.
"""


class BookshelfError(Exception):
    """Base exception for all Bookshelf errors."""

    def __init__(self, message: str, details: dict = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(BookshelfError):
    """Raised when configuration is invalid or missing."""
    pass


class DatabaseError(BookshelfError):
    """Raised when SQLite operations fail."""
    pass


class ValidationError(BookshelfError):
    """Raised when a record submitted to the catalog is incomplete."""

    def __init__(self, message: str, field: str = None, details: dict = None):
        """
        Initialize validation error.

        Args:
            message: Error description.
            field: Name of the offending field.
            details: Additional context.
        """
        super().__init__(message, details)
        self.field = field


class SearchError(BookshelfError):
    """Raised when search query execution fails."""

    def __init__(self, message: str, query: str = None, details: dict = None):
        """
        Initialize search error.

        Args:
            message: Error description.
            query: The search query being executed.
            details: Additional context.
        """
        super().__init__(message, details)
        self.query = query


class BackendUnavailableError(SearchError):
    """Raised when the record store cannot be read during a search."""
    pass


class RelayError(BookshelfError):
    """Raised when a remote document cannot be relayed."""

    def __init__(
        self,
        message: str,
        url: str = None,
        status_code: int = 500,
        details: dict = None
    ):
        """
        Initialize relay error.

        Args:
            message: Error description.
            url: The remote URL that was requested.
            status_code: HTTP status to report to the caller.
            details: Additional context.
        """
        super().__init__(message, details)
        self.url = url
        self.status_code = status_code
