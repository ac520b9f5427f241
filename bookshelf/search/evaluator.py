"""
Query evaluator applying compiled patterns to records.

A record is a match when any of the searched fields matches either the
literal pattern or the phonetic pattern. Matches are deduplicated by
record identity and capped; the corpus is read in its natural order
and reading stops once the cap is reached.
"""

from typing import Any, Iterable, Iterator, Mapping, Optional, Sequence, Tuple

from ..core import get_config, get_logger, BackendUnavailableError
from .literal_pattern import LiteralPatternBuilder
from .models import LiteralPattern, MatchPattern, PhoneticPattern, ResultSet
from .phonetic_compiler import compile_phonetic

logger = get_logger(__name__)


DEFAULT_FIELDS = ("title", "author")


def field_value(record: Any, name: str) -> Optional[str]:
    """Read a text field from a mapping or an object. Missing fields are None."""
    if isinstance(record, Mapping):
        value = record.get(name)
    else:
        value = getattr(record, name, None)
    return value if isinstance(value, str) else None


def is_blank(query: Optional[str]) -> bool:
    """Empty, missing and whitespace-only queries mean "no search"."""
    return not query or not query.strip()


def _unavailable(query: str, error: Exception) -> BackendUnavailableError:
    logger.error(f"Corpus read failed during search for {query!r}: {error}")
    return BackendUnavailableError(f"Search backend unavailable: {error}", query=query)


class QueryEvaluator:
    """
    Evaluates a query against an in-memory or streamed corpus.

    Holds no per-request state: patterns and the result set are local to
    each search() call, so one evaluator may serve concurrent requests.
    """

    def __init__(
        self,
        fields: Sequence[str] = None,
        max_results: int = None,
        escape_literal: bool = None
    ):
        """
        Initialize the evaluator.

        Args:
            fields: Record attributes to test. Defaults to config value.
            max_results: Result cap. Defaults to config value.
            escape_literal: Literal pattern policy. Defaults to config value.
        """
        config = get_config()

        self.fields = tuple(fields or config.search.fields or DEFAULT_FIELDS)
        self.max_results = max_results if max_results is not None else config.search.max_results
        if escape_literal is None:
            escape_literal = config.search.escape_literal
        self.literal_builder = LiteralPatternBuilder(escape=escape_literal)

    def compile(self, query: str) -> Tuple[LiteralPattern, PhoneticPattern]:
        """
        Compile both patterns for a query.

        Args:
            query: Raw user input.

        Returns:
            Tuple of (literal pattern, phonetic pattern).
        """
        return self.literal_builder.compile(query), compile_phonetic(query)

    def search(
        self,
        query: str,
        corpus: Iterable[Any],
        fields: Sequence[str] = None
    ) -> ResultSet:
        """
        Find the records of a corpus that match a query.

        Args:
            query: Raw user input. A blank query returns an empty result
                   set without reading the corpus.
            corpus: Records in their natural order.
            fields: Attributes to test, overriding the evaluator default.

        Returns:
            ResultSet of at most max_results records, in corpus order.

        Raises:
            BackendUnavailableError: If reading the corpus fails.
        """
        results = ResultSet(max_size=self.max_results)

        if is_blank(query) or self.max_results <= 0:
            return results

        patterns = self.compile(query)
        fields = tuple(fields or self.fields)

        records = self._read(corpus, query)
        for record in records:
            if self.matches(record, patterns, fields):
                results.add(record)
                if results.is_full:
                    break

        return results

    @staticmethod
    def _read(corpus: Iterable[Any], query: str) -> Iterator[Any]:
        """
        Yield the records of a corpus, reporting read failures as BackendUnavailableError.

        Only the corpus is guarded; errors raised while matching a
        record propagate unchanged.
        """
        try:
            iterator = iter(corpus)
        except Exception as e:
            raise _unavailable(query, e) from e

        while True:
            try:
                record = next(iterator)
            except StopIteration:
                return
            except BackendUnavailableError:
                raise
            except Exception as e:
                raise _unavailable(query, e) from e
            yield record

    @staticmethod
    def matches(
        record: Any,
        patterns: Sequence[MatchPattern],
        fields: Sequence[str]
    ) -> bool:
        """Whether any field of the record matches any of the patterns."""
        for name in fields:
            value = field_value(record, name)
            if value is None:
                continue
            if any(pattern.matches(value) for pattern in patterns):
                return True
        return False
