"""
Phonetic pattern compiler for romanized queries.

Turns a Latin-alphabet query such as "aranyak" into a regular expression
that accepts the plausible Bengali spellings of it (আরণ্যক, অরণ্যক, ...).
Whitespace becomes a flexible gap so that word joins may differ between
the query and the title.

Tokenization is a single left-to-right maximal-munch scan: a known
digraph always wins over its two letters, and a character without a
table entry stands for itself.
"""

import re
import string
from functools import lru_cache
from typing import List, Optional, Tuple

from ..core import get_logger
from .bengali_table import DIGRAPH_LENGTH, lookup_digraph, lookup_single
from .models import AlternationGroup, FlexibleGap, PatternElement, PhoneticPattern

logger = get_logger(__name__)


DEFAULT_FLAGS = re.IGNORECASE | re.DOTALL

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


class PhoneticCompiler:
    """
    Compiles romanized queries into phonetic Bengali patterns.

    The compiler never fails: if the expression it builds cannot be
    used, it returns the escaped literal of the query instead and marks
    the pattern as a fallback.
    """

    def __init__(self, flags: int = DEFAULT_FLAGS):
        """
        Initialize the compiler.

        Args:
            flags: `re` flags used for every compiled pattern.
        """
        self.flags = flags

    def compile(self, query: str) -> PhoneticPattern:
        """
        Compile a query into a phonetic pattern.

        Args:
            query: Raw user input, any script.

        Returns:
            PhoneticPattern matching the Bengali renderings of the query
            and any literal occurrence of its unmapped characters.
        """
        query = query or ""
        elements = self.tokenize(query)

        problem = self._validate(elements)
        if problem is None:
            expression = self.render(elements)
            try:
                regex = re.compile(expression, self.flags)
                segments = tuple(
                    re.compile(self.render(run), self.flags)
                    for run in self.split_segments(elements)
                )
            except re.error as e:
                problem = f"rejected by re: {e}"
            else:
                logger.debug(f"Query: {query!r} -> phonetic pattern: {expression}")
                return PhoneticPattern(
                    query=query,
                    regex=regex,
                    elements=tuple(elements),
                    segments=segments
                )

        logger.debug(f"Query {query!r} compiled as literal ({problem})")
        return self.compile_literal_fallback(query)

    def tokenize(self, query: str) -> List[PatternElement]:
        """
        Split a query into alternation groups and flexible gaps.

        Latin letters A-Z are lower-cased first; other scripts are left
        as typed. Every maximal whitespace run becomes one FlexibleGap.

        Args:
            query: Raw user input.

        Returns:
            Pattern elements in query order.
        """
        text = query.translate(_ASCII_LOWER)
        elements: List[PatternElement] = []
        position = 0

        while position < len(text):
            char = text[position]

            if char.isspace():
                end = position
                while end < len(text) and text[end].isspace():
                    end += 1
                elements.append(FlexibleGap(source=text[position:end]))
                position = end
                continue

            pair = text[position:position + DIGRAPH_LENGTH]
            alternatives = lookup_digraph(pair) if len(pair) == DIGRAPH_LENGTH else ()
            if alternatives:
                elements.append(AlternationGroup(source=pair, alternatives=alternatives))
                position += DIGRAPH_LENGTH
                continue

            alternatives = lookup_single(char)
            if alternatives:
                elements.append(AlternationGroup(source=char, alternatives=alternatives))
            else:
                elements.append(AlternationGroup(source=char, alternatives=(char,), literal=True))
            position += 1

        return elements

    @staticmethod
    def split_segments(elements: List[PatternElement]) -> List[List[AlternationGroup]]:
        """Split elements at every gap, dropping empty runs."""
        runs: List[List[AlternationGroup]] = [[]]
        for element in elements:
            if isinstance(element, FlexibleGap):
                runs.append([])
            else:
                runs[-1].append(element)
        return [run for run in runs if run]

    @staticmethod
    def render(elements: List[PatternElement]) -> str:
        """Concatenate the rendered elements into one expression."""
        return "".join(element.render() for element in elements)

    @staticmethod
    def _validate(elements: List[PatternElement]) -> Optional[str]:
        """
        Check that the elements can be rendered into a well-formed expression.

        Returns:
            None if valid, otherwise a short description of the problem.
        """
        for index, element in enumerate(elements):
            if isinstance(element, FlexibleGap):
                continue
            if not element.alternatives:
                return f"empty group at position {index}"
            if element.literal and len(element.alternatives) != 1:
                return f"literal group with several alternatives at position {index}"
            if not all(isinstance(alternative, str) for alternative in element.alternatives):
                return f"non-text alternative at position {index}"
        return None

    def compile_literal_fallback(self, query: str) -> PhoneticPattern:
        """
        Build the escaped-literal pattern used when phonetic compilation fails.

        Args:
            query: Raw user input.

        Returns:
            PhoneticPattern with fallback=True matching the query as a substring.
        """
        regex = re.compile(re.escape(query), self.flags)
        literal = AlternationGroup(source=query, alternatives=(query,), literal=True)
        return PhoneticPattern(
            query=query,
            regex=regex,
            elements=(literal,),
            fallback=True
        )


@lru_cache(maxsize=256)
def compile_phonetic(query: str, flags: int = DEFAULT_FLAGS) -> PhoneticPattern:
    """
    Cached PhoneticCompiler.compile.

    Patterns are immutable, so the cached value is shared between requests.
    """
    return PhoneticCompiler(flags).compile(query)


def describe(pattern: PhoneticPattern) -> List[Tuple[str, str]]:
    """
    List each element of a pattern with its rendered expression.

    Useful for showing how a query was interpreted.
    """
    return [(element.source, element.render()) for element in pattern.elements]


if __name__ == "__main__":
    compiler = PhoneticCompiler()

    for q in ["aranyak", "Aranyak ", "pather panchali", "shesher kobita", "xyz123", "c++ (draft)"]:
        pattern = compiler.compile(q)
        print(f"  '{q}' -> {pattern.source}  fallback={pattern.fallback}")
