"""
Book repository for CRUD operations on the books table.

Provides a clean interface for adding, listing and filtering the books
of the catalog. This is the record store the search engine reads from.
"""

from dataclasses import dataclass, asdict
from typing import Callable, Dict, Iterator, List, Optional, Sequence, Union

from ..core import get_config, get_logger, DatabaseError, ValidationError
from .connection import get_connection, get_cursor

logger = get_logger(__name__)


BOOK_FIELDS = ("title", "author", "description", "cover_image", "pdf_url", "category")

# Columns that may appear in a pattern filter
SEARCHABLE_FIELDS = frozenset({"title", "author", "description", "category"})

# camelCase keys accepted from JSON payloads
# A REGEXP operand (flags inline), or a predicate run as a SQL function
Matcher = Union[str, Callable[[Optional[str]], bool]]

FIELD_ALIASES = {
    "coverImage": "cover_image",
    "pdfUrl": "pdf_url",
}


@dataclass
class Book:
    """Represents a single book of the catalog."""
    id: int
    title: str
    author: str
    description: str
    cover_image: str
    pdf_url: str
    category: str
    created_at: str

    def to_dict(self) -> Dict:
        """Return the book as a plain dictionary."""
        return asdict(self)


@dataclass
class AuthorSummary:
    """An author with the number of books and a thumbnail cover."""
    name: str
    count: int
    image: Optional[str]


class BookRepository:
    """
    Repository for book CRUD operations.

    Provides methods for creating books, listing them, grouping them
    by author, and filtering them with regular-expression patterns.
    """

    def create(self, record: Dict) -> Book:
        """
        Validate and insert a new book.

        Args:
            record: Mapping of book fields. camelCase keys (coverImage,
                    pdfUrl) are accepted. Unknown keys are ignored.

        Returns:
            The stored Book with its assigned id.

        Raises:
            ValidationError: If a required field is missing or blank.
        """
        values = self._normalize_record(record)

        with get_cursor() as cur:
            cur.execute("""
                INSERT INTO books
                (title, author, description, cover_image, pdf_url, category)
                VALUES (?, ?, ?, ?, ?, ?)
            """, tuple(values[name] for name in BOOK_FIELDS))
            book_id = cur.lastrowid

        logger.info(f"Added book {book_id}: {values['title']} by {values['author']}")

        return self.get_by_id(book_id)

    def create_batch(self, records: List[Dict]) -> int:
        """
        Validate and insert several books in a single transaction.

        Args:
            records: List of record mappings accepted by create().

        Returns:
            Number of rows inserted.

        Raises:
            ValidationError: If any record is invalid. Nothing is inserted.
        """
        if not records:
            return 0

        rows = []
        for record in records:
            values = self._normalize_record(record)
            rows.append(tuple(values[name] for name in BOOK_FIELDS))

        with get_cursor() as cur:
            cur.executemany("""
                INSERT INTO books
                (title, author, description, cover_image, pdf_url, category)
                VALUES (?, ?, ?, ?, ?, ?)
            """, rows)
            return cur.rowcount

    def find(self, author: str = None) -> List[Book]:
        """
        List books, newest first.

        Args:
            author: If given, only books whose author is exactly this name.

        Returns:
            List of Book objects.
        """
        sql = "SELECT * FROM books"
        params: tuple = ()

        if author:
            sql += " WHERE author = ?"
            params = (author,)

        sql += " ORDER BY created_at DESC, id DESC"

        with get_connection() as conn:
            rows = conn.execute(sql, params).fetchall()
            return [self._row_to_book(row) for row in rows]

    def list_all(self) -> List[Book]:
        """
        List every book in natural (insertion) order.

        Returns:
            List of Book objects ordered by id.
        """
        with get_connection() as conn:
            rows = conn.execute("SELECT * FROM books ORDER BY id").fetchall()
            return [self._row_to_book(row) for row in rows]

    def iter_all(self) -> Iterator[Book]:
        """
        Stream every book in natural (insertion) order.

        The connection stays open until the iterator is exhausted or closed.

        Yields:
            Book objects ordered by id.
        """
        with get_connection() as conn:
            for row in conn.execute("SELECT * FROM books ORDER BY id"):
                yield self._row_to_book(row)

    def get_by_id(self, book_id: int) -> Optional[Book]:
        """
        Fetch a book by its ID.

        Args:
            book_id: Book row ID.

        Returns:
            Book object or None.
        """
        with get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM books WHERE id = ?",
                (book_id,)
            ).fetchone()

            if row:
                return self._row_to_book(row)
            return None

    def list_authors(self) -> List[AuthorSummary]:
        """
        Group books by author.

        Returns:
            One AuthorSummary per author, sorted by name, with the
            cover of the author's first book as thumbnail.
        """
        sql = """
            SELECT
                b.author AS name,
                COUNT(*) AS count,
                (
                    SELECT cover_image FROM books earliest
                    WHERE earliest.author = b.author
                    ORDER BY earliest.id
                    LIMIT 1
                ) AS image
            FROM books b
            GROUP BY b.author
            ORDER BY b.author
        """

        with get_connection() as conn:
            rows = conn.execute(sql).fetchall()
            return [
                AuthorSummary(name=row["name"], count=row["count"], image=row["image"])
                for row in rows
            ]

    def find_matching(
        self,
        patterns: Sequence[Matcher],
        fields: Sequence[str],
        limit: int
    ) -> List[Book]:
        """
        Find books where any field matches any pattern.

        The filter runs inside SQLite. Strings go through the REGEXP
        function registered on every connection; predicates are
        registered on the query's connection and called per value.

        Args:
            patterns: Regular expressions with flags inline, or
                      callables taking a column value.
            fields: Column names to test.
            limit: Maximum number of books to return.

        Returns:
            Matching books in natural (id) order.

        Raises:
            DatabaseError: If a field is not searchable.
        """
        if not patterns or not fields or limit <= 0:
            return []

        unknown = [name for name in fields if name not in SEARCHABLE_FIELDS]
        if unknown:
            raise DatabaseError(
                f"Unknown search field(s): {', '.join(unknown)}",
                {"fields": list(fields)}
            )

        predicates = {}
        clauses = []
        params = []
        for name in fields:
            for index, pattern in enumerate(patterns):
                if callable(pattern):
                    function = f"match_{index}"
                    predicates[function] = pattern
                    clauses.append(f"{function}({name})")
                else:
                    clauses.append(f"{name} REGEXP ?")
                    params.append(pattern)

        sql = f"SELECT * FROM books WHERE {' OR '.join(clauses)} ORDER BY id LIMIT ?"
        params.append(limit)

        with get_connection() as conn:
            for function, predicate in predicates.items():
                conn.create_function(function, 1, predicate, deterministic=True)
            rows = conn.execute(sql, params).fetchall()
            return [self._row_to_book(row) for row in rows]

    def count(self) -> int:
        """
        Get total book count.

        Returns:
            Number of books in the catalog.
        """
        with get_connection() as conn:
            row = conn.execute("SELECT COUNT(*) as count FROM books").fetchone()
            return row["count"]

    @staticmethod
    def _normalize_record(record: Dict) -> Dict[str, str]:
        """Map aliases, apply defaults and check required fields."""
        config = get_config()

        values = {}
        for key, value in record.items():
            name = FIELD_ALIASES.get(key, key)
            if name in BOOK_FIELDS:
                values[name] = value.strip() if isinstance(value, str) else value

        if not values.get("category"):
            values["category"] = config.catalog.default_category

        for name in config.catalog.required_fields:
            value = values.get(name)
            if not isinstance(value, str) or not value:
                raise ValidationError(
                    f"Missing required field: {name}",
                    field=name
                )

        for name in BOOK_FIELDS:
            values.setdefault(name, "")

        return values

    @staticmethod
    def _row_to_book(row) -> Book:
        """Convert a database row to a Book object."""
        return Book(
            id=row["id"],
            title=row["title"],
            author=row["author"],
            description=row["description"],
            cover_image=row["cover_image"],
            pdf_url=row["pdf_url"],
            category=row["category"],
            created_at=row["created_at"]
        )
