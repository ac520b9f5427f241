"""
Data models for search functionality.

Defines the compiled pattern types produced from a query, the
query and statistics dataclasses, and the capped result set used
throughout the search module.
"""

import re
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Hashable, Iterator, List, Mapping, Tuple, Union


# Inline letters for the flags that may be carried into SQLite
_INLINE_FLAGS = (
    (re.IGNORECASE, "i"),
    (re.DOTALL, "s"),
    (re.MULTILINE, "m"),
)

FLEXIBLE_GAP_REGEX = ".*"


@dataclass(frozen=True)
class AlternationGroup:
    """
    The set of graphemes acceptable at one position of a query.

    Attributes:
        source: The romanized token this group was built from.
        alternatives: Acceptable graphemes, in table order. May contain
            the empty string when the sound is optional.
        literal: True when the token had no table entry and only
            matches itself.
    """
    source: str
    alternatives: Tuple[str, ...]
    literal: bool = False

    @property
    def optional(self) -> bool:
        """Whether this position may be absent from the target text."""
        return "" in self.alternatives

    def render(self) -> str:
        """Render as a regular-expression fragment, every alternative escaped."""
        escaped = [re.escape(alternative) for alternative in self.alternatives]
        if len(escaped) == 1 and escaped[0]:
            return escaped[0]
        return "(?:" + "|".join(escaped) + ")"


@dataclass(frozen=True)
class FlexibleGap:
    """Stands for a run of whitespace; matches any characters, including none."""
    source: str = " "

    def render(self) -> str:
        return FLEXIBLE_GAP_REGEX


PatternElement = Union[AlternationGroup, FlexibleGap]


@dataclass(frozen=True)
class MatchPattern:
    """
    A compiled, case-insensitive matcher built from a query.

    Attributes:
        query: The original query text.
        regex: The compiled expression, with its flags.
    """
    query: str
    regex: "re.Pattern"

    @property
    def source(self) -> str:
        """Expression text without flags."""
        return self.regex.pattern

    @property
    def flags(self) -> int:
        return self.regex.flags

    @property
    def inline_source(self) -> str:
        """Expression text with its flags inline, for engines that take only a string."""
        letters = "".join(letter for flag, letter in _INLINE_FLAGS if self.regex.flags & flag)
        if not letters:
            return self.source
        return f"(?{letters}){self.source}"

    def matches(self, text: str) -> bool:
        """Whether the pattern occurs anywhere in text. None never matches."""
        if text is None:
            return False
        return self.regex.search(text) is not None


@dataclass(frozen=True)
class PhoneticPattern(MatchPattern):
    """
    Pattern accepting the Bengali spellings of a romanized query.

    The whole expression is kept in `regex` for display, but matching
    runs one gap-free segment at a time: each segment is found at its
    earliest end, and the next one is searched from there. This accepts
    the same texts as `seg1.*seg2.*...` without backtracking across gaps.

    Attributes:
        elements: Alternation groups and flexible gaps in query order.
        segments: One compiled expression per run of groups between gaps.
        fallback: True when the phonetic expression could not be built
            and the pattern is the escaped literal of the query instead.
    """
    elements: Tuple[PatternElement, ...] = ()
    segments: Tuple["re.Pattern", ...] = ()
    fallback: bool = False

    def matches(self, text: str) -> bool:
        """Whether every segment occurs in text, in order. None never matches."""
        if text is None:
            return False
        if not self.segments:
            return super().matches(text)

        position = 0
        last = len(self.segments) - 1
        for index, segment in enumerate(self.segments):
            if segment.search(text, position) is None:
                return False
            if index < last:
                position = earliest_end(segment, text, position)
        return True

    @property
    def groups(self) -> List[AlternationGroup]:
        """The alternation groups, without gaps."""
        return [element for element in self.elements if isinstance(element, AlternationGroup)]


@dataclass(frozen=True)
class LiteralPattern(MatchPattern):
    """
    Pattern matching the query as typed, for Latin-script records.

    Attributes:
        escaped: True when metacharacters of the query were escaped
            (plain substring search).
    """
    escaped: bool = True


@dataclass
class SearchQuery:
    """
    Represents a catalog search request.

    Attributes:
        text: The raw query text.
        limit: Maximum number of books to return.
    """
    text: str
    limit: int = 20


@dataclass
class SearchStats:
    """
    Statistics about a search execution.

    Attributes:
        query: The original query text.
        total_results: Number of books returned.
        execution_time_ms: Search time in milliseconds.
        phonetic_pattern: The phonetic expression that was used.
        fallback: Whether the phonetic pattern fell back to a literal.
    """
    query: str
    total_results: int
    execution_time_ms: float
    phonetic_pattern: str = ""
    fallback: bool = False


def earliest_end(regex: "re.Pattern", text: str, start: int) -> int:
    """
    Smallest end position of a match of regex in text[start:].

    A match must exist. Uses endpos, so each probe is one plain search.
    """
    low, high = start, len(text)
    while low < high:
        middle = (low + high) // 2
        if regex.search(text, start, middle) is None:
            low = middle + 1
        else:
            high = middle
    return low


def record_identity(record: Any) -> Hashable:
    """
    Identity of a record for deduplication.

    Uses the `id` attribute or mapping key when present, otherwise
    the object itself.
    """
    if isinstance(record, Mapping):
        for key in ("id", "_id"):
            if record.get(key) is not None:
                return record[key]
        return id(record)

    value = getattr(record, "id", None)
    if value is not None:
        return value
    return id(record)


@dataclass
class ResultSet:
    """
    Records matched by a search, in order of first match.

    A record is stored once per identity and nothing is added past
    max_size.
    """
    max_size: int = 20
    _records: "OrderedDict[Hashable, Any]" = field(default_factory=OrderedDict, repr=False)

    def add(self, record: Any) -> bool:
        """
        Add a record unless already present or the set is full.

        Returns:
            True if the record was added.
        """
        if self.is_full:
            return False

        key = record_identity(record)
        if key in self._records:
            return False

        self._records[key] = record
        return True

    @property
    def is_full(self) -> bool:
        return len(self._records) >= self.max_size

    def to_list(self) -> List[Any]:
        return list(self._records.values())

    def __contains__(self, record: Any) -> bool:
        return record_identity(record) in self._records

    def __iter__(self) -> Iterator[Any]:
        return iter(self._records.values())

    def __len__(self) -> int:
        return len(self._records)
