"""
Literal pattern builder for Latin-script matches.

Catches titles and author names that are already written in Latin
letters ("The Hobbit"), which the phonetic compiler would rewrite into
Bengali alternatives and miss.

By default every metacharacter of the query is escaped, so the query is
a plain case-insensitive substring. With escaping disabled the query is
used as a regular expression as typed; a query that is not a valid
expression is then escaped after all.
"""

import re

from ..core import get_logger
from .models import LiteralPattern

logger = get_logger(__name__)


DEFAULT_FLAGS = re.IGNORECASE


class LiteralPatternBuilder:
    """Builds the case-insensitive literal matcher for a query."""

    def __init__(self, escape: bool = True, flags: int = DEFAULT_FLAGS):
        """
        Initialize the builder.

        Args:
            escape: Whether to escape metacharacters in the query.
            flags: `re` flags used for the compiled pattern.
        """
        self.escape = escape
        self.flags = flags

    def compile(self, query: str) -> LiteralPattern:
        """
        Compile the query into a LiteralPattern.

        Never rejects input.

        Args:
            query: Raw user input.

        Returns:
            LiteralPattern for the query.
        """
        query = query or ""

        if not self.escape:
            try:
                regex = re.compile(query, self.flags)
            except re.error as e:
                logger.debug(f"Literal query {query!r} is not a valid expression ({e}), escaping")
            else:
                return LiteralPattern(query=query, regex=regex, escaped=False)

        return LiteralPattern(
            query=query,
            regex=re.compile(re.escape(query), self.flags),
            escaped=True
        )
