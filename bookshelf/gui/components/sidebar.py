"""
Sidebar component for the Bookshelf catalog.

Displays navigation, catalog statistics and search help.
"""

import sqlite3

import streamlit as st

from ...core import DatabaseError
from ...database import get_statistics
from ..state import get_state, navigate, repeat_query


NAVIGATION = {
    "catalog": "All books",
    "search": "Search",
    "authors": "Authors",
    "add_book": "Add a book",
}


def render_sidebar() -> str:
    """
    Render the sidebar.

    Returns:
        The page to display.
    """
    with st.sidebar:
        st.title("Bookshelf")

        _render_navigation()

        st.divider()

        st.subheader("Catalog")
        _render_statistics()

        st.divider()

        _render_recent_searches()

        _render_help()

    return get_state("page", "catalog")


def _render_navigation() -> None:
    """Render one button per top-level page."""
    current = get_state("page", "catalog")

    for page, label in NAVIGATION.items():
        if st.button(
            label,
            key=f"nav_{page}",
            type="primary" if page == current else "secondary",
            use_container_width=True
        ):
            navigate(page, selected_author=None)
            st.rerun()


def _render_recent_searches() -> None:
    """List recent queries; clicking one runs it again."""
    recent = get_state("recent_queries", [])
    if not recent:
        return

    st.subheader("Recent searches")

    for index, query in enumerate(recent):
        if st.button(query, key=f"recent_{index}", use_container_width=True):
            repeat_query(query)
            st.rerun()

    st.divider()


def _render_statistics() -> None:
    """Display catalog statistics."""
    try:
        stats = get_statistics()
    except (DatabaseError, sqlite3.Error) as e:
        st.warning(f"Could not load statistics: {e}")
        return

    col1, col2 = st.columns(2)

    with col1:
        st.metric("Books", f"{stats['total_books']:,}")

    with col2:
        st.metric("Authors", f"{stats['total_authors']:,}")

    if stats["newest_book"]:
        st.caption(f"Last added: {stats['newest_book'][:16]}")


def _render_help() -> None:
    """Display search help text."""
    with st.expander("Search help"):
        st.markdown("""
        Type a title or author in English letters or in Bengali.

        **Romanized search:**
        - `aranyak` finds আরণ্যক
        - `gitanjali` finds গীতাঞ্জলি
        - Spaces may stand for any number of characters

        **Latin titles** are matched as typed, ignoring case:
        - `hobbit` finds *The Hobbit*

        At most 20 books are shown per search.
        """)
