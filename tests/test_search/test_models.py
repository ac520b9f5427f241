"""
Tests for search data models.

Tests pattern types, SearchQuery, SearchStats and ResultSet.
"""

import re
import pytest
from dataclasses import FrozenInstanceError

from bookshelf.search.models import (
    AlternationGroup,
    FlexibleGap,
    MatchPattern,
    LiteralPattern,
    PhoneticPattern,
    ResultSet,
    SearchQuery,
    SearchStats,
    earliest_end,
    record_identity,
)


class TestAlternationGroup:
    """Tests for AlternationGroup rendering."""

    def test_render_several_alternatives(self):
        """Test that several alternatives become a non-capturing group."""
        group = AlternationGroup(source="k", alternatives=("ক", "খ"))

        assert group.render() == "(?:ক|খ)"

    def test_render_optional_keeps_empty_branch(self):
        """Test that an empty alternative is rendered as a trailing empty branch."""
        group = AlternationGroup(source="a", alternatives=("অ", "আ", "া", ""))

        assert group.optional is True
        assert group.render() == "(?:অ|আ|া|)"

    def test_render_single_alternative_bare(self):
        """Test that one alternative is rendered without a group."""
        group = AlternationGroup(source="p", alternatives=("প",))

        assert group.render() == "প"
        assert group.optional is False

    def test_render_escapes_metacharacters(self):
        """Test that alternatives are escaped."""
        group = AlternationGroup(source="+", alternatives=("+",), literal=True)

        assert group.render() == re.escape("+")

    def test_is_immutable(self):
        """Test that groups are frozen."""
        group = AlternationGroup(source="p", alternatives=("প",))

        with pytest.raises(FrozenInstanceError):
            group.source = "q"


class TestFlexibleGap:
    """Tests for FlexibleGap."""

    def test_render(self):
        """Test that a gap matches any run of characters."""
        assert FlexibleGap().render() == ".*"


class TestMatchPattern:
    """Tests for the shared pattern behaviour."""

    def test_matches_anywhere(self):
        """Test unanchored matching."""
        pattern = MatchPattern(query="bit", regex=re.compile("bit", re.IGNORECASE))

        assert pattern.matches("The Hobbit")
        assert not pattern.matches("Dune")

    def test_none_never_matches(self):
        """Test that a missing field does not match."""
        pattern = MatchPattern(query="", regex=re.compile(""))

        assert pattern.matches(None) is False

    def test_inline_source_carries_flags(self):
        """Test that flags are written inline for SQLite."""
        pattern = PhoneticPattern(query="p", regex=re.compile("প", re.IGNORECASE | re.DOTALL))

        assert pattern.inline_source == "(?is)প"
        assert re.compile(pattern.inline_source).flags & re.DOTALL

    def test_inline_source_without_flags(self):
        """Test that a pattern without flags is unchanged."""
        pattern = LiteralPattern(query="x", regex=re.compile("x"))

        assert pattern.inline_source == "x"

    def test_phonetic_groups_skip_gaps(self):
        """Test that groups excludes flexible gaps."""
        p = AlternationGroup(source="p", alternatives=("প",))
        pattern = PhoneticPattern(
            query="p p",
            regex=re.compile("প.*প"),
            elements=(p, FlexibleGap(), p)
        )

        assert pattern.groups == [p, p]


    def test_phonetic_segments_in_order(self):
        """Test that segments must match one after the other."""
        pattern = PhoneticPattern(
            query="p k",
            regex=re.compile("প.*ক"),
            segments=(re.compile("প"), re.compile("ক"))
        )

        assert pattern.matches("পথক")
        assert not pattern.matches("কপ")
        assert not pattern.matches(None)


class TestEarliestEnd:
    """Tests for earliest_end."""

    def test_shortest_match_end(self):
        """Test that the end of the shortest match is returned, not the leftmost."""
        assert earliest_end(re.compile("ab+|b"), "xabbb", 0) == 3
        assert earliest_end(re.compile("a?b"), "xabbb", 2) == 3

    def test_empty_match(self):
        """Test that a pattern matching nothing ends where the search starts."""
        assert earliest_end(re.compile("x?"), "abc", 1) == 1

class TestSearchQuery:
    """Tests for SearchQuery dataclass."""

    def test_query_creation_minimal(self):
        """Test creating query with just text."""
        query = SearchQuery(text="aranyak")

        assert query.text == "aranyak"
        assert query.limit == 20

    def test_query_text_is_required(self):
        """Test that text parameter is required."""
        with pytest.raises(TypeError):
            SearchQuery()


class TestSearchStats:
    """Tests for SearchStats dataclass."""

    def test_stats_defaults(self):
        """Test optional stats fields."""
        stats = SearchStats(query="kbita", total_results=1, execution_time_ms=2.5)

        assert stats.phonetic_pattern == ""
        assert stats.fallback is False


class TestResultSet:
    """Tests for the capped, deduplicated result set."""

    def test_add_and_order(self):
        """Test that records keep their insertion order."""
        results = ResultSet(max_size=5)
        results.add({"id": 2})
        results.add({"id": 1})

        assert [r["id"] for r in results] == [2, 1]

    def test_duplicate_rejected(self):
        """Test that the same identity is stored once."""
        results = ResultSet()

        assert results.add({"id": 1, "title": "a"}) is True
        assert results.add({"id": 1, "title": "b"}) is False
        assert len(results) == 1
        assert results.to_list()[0]["title"] == "a"

    def test_cap(self):
        """Test that nothing is added once full."""
        results = ResultSet(max_size=2)
        for i in range(5):
            results.add({"id": i})

        assert len(results) == 2
        assert results.is_full
        assert {"id": 4} not in results

    def test_contains(self):
        """Test membership by identity."""
        results = ResultSet()
        results.add({"id": 7})

        assert {"id": 7, "title": "other copy"} in results


class TestRecordIdentity:
    """Tests for record_identity."""

    def test_mapping_id(self):
        """Test id and _id keys."""
        assert record_identity({"id": 3}) == 3
        assert record_identity({"_id": "abc"}) == "abc"

    def test_object_id_attribute(self):
        """Test objects with an id attribute."""
        class Record:
            id = 9

        assert record_identity(Record()) == 9

    def test_fallback_to_object(self):
        """Test records without id use object identity."""
        a = {"title": "x"}
        b = {"title": "x"}

        assert record_identity(a) != record_identity(b)
        assert record_identity(a) == record_identity(a)
