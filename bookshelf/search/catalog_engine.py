"""
Catalog search engine over the book store.

Entry point for a search request: compiles the literal and phonetic
patterns for the query and lets SQLite filter the books table with their
matchers, returning at most the configured number of books in catalog order.
"""

import sqlite3
import time
from typing import List, Tuple

from ..core import get_config, get_logger, BackendUnavailableError, DatabaseError
from ..database import Book, BookRepository
from .evaluator import QueryEvaluator, is_blank
from .models import SearchQuery, SearchStats

logger = get_logger(__name__)


class CatalogSearchEngine:
    """
    Cross-script search over the books of the catalog.

    A book matches when its title or author matches the query as typed
    (case-insensitive) or any Bengali spelling of the romanized query.
    Filtering is pushed down to the store; QueryEvaluator gives the same
    result over a list of books.
    """

    def __init__(self, repository: BookRepository = None):
        """
        Initialize the search engine with configuration.

        Args:
            repository: Book store to search. Defaults to a new BookRepository.
        """
        self.config = get_config()
        self.repository = repository or BookRepository()
        self.evaluator = QueryEvaluator()

        self.fields = self.evaluator.fields
        self.max_results = self.config.search.max_results

    def search(self, query: SearchQuery) -> Tuple[List[Book], SearchStats]:
        """
        Execute a catalog search.

        Args:
            query: SearchQuery with the raw text and a limit.

        Returns:
            Tuple of (list of Book, SearchStats).

        Raises:
            BackendUnavailableError: If the book store cannot be read.
        """
        start_time = time.time()

        if is_blank(query.text):
            return [], SearchStats(
                query=query.text or "",
                total_results=0,
                execution_time_ms=0
            )

        limit = min(query.limit or self.max_results, self.max_results)
        literal, phonetic = self.evaluator.compile(query.text)

        try:
            books = self.repository.find_matching(
                [literal.matches, phonetic.matches],
                self.fields,
                limit
            )
        except (DatabaseError, sqlite3.Error) as e:
            logger.error(f"Search failed: {e}")
            raise BackendUnavailableError(
                f"Search backend unavailable: {e}",
                query=query.text
            ) from e

        execution_time = (time.time() - start_time) * 1000

        stats = SearchStats(
            query=query.text,
            total_results=len(books),
            execution_time_ms=round(execution_time, 2),
            phonetic_pattern=phonetic.source,
            fallback=phonetic.fallback
        )

        logger.debug(
            f"Search '{query.text}': {len(books)} results in {execution_time:.1f}ms"
        )

        return books, stats

    def search_simple(self, text: str, limit: int = None) -> List[Book]:
        """
        Convenience method for simple searches.

        Args:
            text: Search query text.
            limit: Maximum results.

        Returns:
            List of Book objects.
        """
        query = SearchQuery(text=text, limit=limit or self.max_results)
        results, _ = self.search(query)
        return results

    def search_in_memory(self, text: str) -> List[Book]:
        """
        Same search, filtering client-side over every book of the store.

        Args:
            text: Search query text.

        Returns:
            List of Book objects, identical to search_simple(text).
        """
        if is_blank(text):
            return []
        return self.evaluator.search(text, self.repository.iter_all()).to_list()
