"""
Database schema definitions for the Bookshelf catalog.

Defines the books table and its indexes, plus helpers to create,
reset and summarise the catalog.
"""

import sqlite3

from ..core import get_logger, DatabaseError
from .connection import get_cursor, get_connection

logger = get_logger(__name__)


BOOKS_TABLE = """
CREATE TABLE IF NOT EXISTS books (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    author TEXT NOT NULL,
    description TEXT NOT NULL,
    cover_image TEXT NOT NULL,
    pdf_url TEXT NOT NULL,
    category TEXT NOT NULL DEFAULT 'General',
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
)
"""

BOOKS_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_books_author ON books(author)",
    "CREATE INDEX IF NOT EXISTS idx_books_created_at ON books(created_at)",
]


def init_schema() -> None:
    """
    Initialize database schema if not exists.

    Raises:
        DatabaseError: If the tables cannot be created.
    """
    logger.info("Initializing database schema")

    try:
        with get_cursor() as cur:
            cur.execute(BOOKS_TABLE)

            for index_sql in BOOKS_INDEXES:
                cur.execute(index_sql)
    except sqlite3.Error as e:
        raise DatabaseError(f"Failed to create schema: {e}")

    logger.info("Schema initialization complete")


def reset_schema() -> None:
    """
    Drop and recreate all tables.

    Warning: This deletes every book in the catalog.
    """
    logger.warning("Resetting database schema - all books will be deleted")

    with get_cursor() as cur:
        cur.execute("DROP TABLE IF EXISTS books")

    init_schema()

    logger.info("Schema reset complete")


def get_statistics() -> dict:
    """
    Get catalog statistics for dashboard display.

    Returns:
        Dictionary with book, author and category counts.
    """
    with get_connection() as conn:
        stats = {}

        row = conn.execute("SELECT COUNT(*) as count FROM books").fetchone()
        stats["total_books"] = row["count"]

        row = conn.execute(
            "SELECT COUNT(DISTINCT author) as count FROM books"
        ).fetchone()
        stats["total_authors"] = row["count"]

        row = conn.execute(
            "SELECT COUNT(DISTINCT category) as count FROM books"
        ).fetchone()
        stats["total_categories"] = row["count"]

        row = conn.execute(
            "SELECT MAX(created_at) as newest FROM books"
        ).fetchone()
        stats["newest_book"] = row["newest"]

    return stats
