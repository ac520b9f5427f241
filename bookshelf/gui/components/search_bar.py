"""
Search bar component for the Bookshelf catalog.

Provides the search input, the results header and the
"how was my query read" panel.
"""

import streamlit as st
from typing import Tuple

from ...search import SearchStats, compile_phonetic, describe
from ..state import get_state, set_state, clear_search_state


def render_search_bar() -> Tuple[str, bool]:
    """
    Render the search input bar.

    Returns:
        Tuple of (query_text, was_submitted).
    """
    col1, col2 = st.columns([5, 1])

    with col1:
        query = st.text_input(
            "Search",
            value=get_state("search_query", ""),
            placeholder="Title or author, e.g. aranyak or The Hobbit",
            key="search_input",
            label_visibility="collapsed"
        )

    with col2:
        submitted = st.button(
            "Search",
            type="primary",
            use_container_width=True
        )

    previous_query = get_state("search_query", "")
    query_changed = query != previous_query and query.strip() != ""

    if query_changed:
        clear_search_state()
        set_state("search_query", query)

    return query, submitted or query_changed


def render_search_header(stats: SearchStats) -> None:
    """
    Render search results header with stats.

    Args:
        stats: SearchStats of the last search.
    """
    if not stats:
        return

    col1, col2, col3 = st.columns([2, 2, 1])

    with col1:
        st.markdown(f"**{stats.total_results}** books found")

    with col2:
        st.caption(f"Query: \"{stats.query}\"")

    with col3:
        st.caption(f"{stats.execution_time_ms:.0f} ms")


def render_interpretation(query: str) -> None:
    """Show how each part of the query was turned into Bengali alternatives."""
    pattern = compile_phonetic(query)

    with st.expander("How your query was read"):
        if pattern.fallback:
            st.caption("Matched as plain text.")
            return

        rows = [
            {"typed": source if source.strip() else "(space)", "matches": expression}
            for source, expression in describe(pattern)
        ]
        st.table(rows)


def render_no_results(query: str) -> None:
    """Display no results message with suggestions."""
    st.info(f"No books found for \"{query}\"")

    with st.expander("Suggestions"):
        st.markdown("""
        - Try spelling the title the way it sounds (`aranyak`, `gitanjali`)
        - Leave out vowels you are unsure of, or add a space where a word may split
        - Search for the author instead of the title
        """)
