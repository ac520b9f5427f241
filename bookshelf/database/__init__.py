"""
Database module for SQLite persistence of the book catalog.

Provides connection management, schema definitions, and CRUD operations
for books, including regular-expression filtering inside SQLite.
"""

from .connection import get_connection, get_cursor, DatabaseManager
from .schema import init_schema, reset_schema, get_statistics
from .repository import Book, AuthorSummary, BookRepository

__all__ = [
    "get_connection",
    "get_cursor",
    "DatabaseManager",
    "init_schema",
    "reset_schema",
    "get_statistics",
    "Book",
    "AuthorSummary",
    "BookRepository"
]
