"""
Streamlit session state management.

Provides helpers for initializing, reading, and updating
session state values used across the application.
"""

import streamlit as st
from typing import Any


PAGES = ("catalog", "search", "authors", "add_book", "reader")

MAX_RECENT_QUERIES = 8

DEFAULT_STATE = {
    "page": "catalog",
    "search_query": "",
    "search_results": [],
    "search_stats": None,
    "search_error": None,
    "selected_book_id": None,
    "selected_author": None,
    "recent_queries": [],
    "pending_query": None,
}


def init_state() -> None:
    """
    Initialize session state with default values.

    Only sets values that don't already exist, preserving
    state across reruns.
    """
    for key, default_value in DEFAULT_STATE.items():
        if key not in st.session_state:
            st.session_state[key] = default_value


def get_state(key: str, default: Any = None) -> Any:
    """
    Get a value from session state.

    Args:
        key: State key to retrieve.
        default: Default value if key doesn't exist.

    Returns:
        The stored value or default.
    """
    return st.session_state.get(key, default)


def set_state(key: str, value: Any) -> None:
    """
    Set a value in session state.

    Args:
        key: State key to set.
        value: Value to store.
    """
    st.session_state[key] = value


def navigate(page: str, **updates: Any) -> None:
    """
    Switch to another page, optionally setting state on the way.

    Args:
        page: One of PAGES.
        updates: Extra state values to set.
    """
    for key, value in updates.items():
        st.session_state[key] = value
    st.session_state["page"] = page if page in PAGES else "catalog"


def clear_search_state() -> None:
    """Reset search-related state to defaults."""
    set_state("search_results", [])
    set_state("search_stats", None)
    set_state("search_error", None)


def remember_query(query: str) -> None:
    """
    Put a query at the top of the recent-searches list.

    Repeats move to the top instead of being listed twice; the list
    keeps at most MAX_RECENT_QUERIES entries.
    """
    query = query.strip()
    if not query:
        return

    recent = [q for q in get_state("recent_queries", []) if q.lower() != query.lower()]
    recent.insert(0, query)
    set_state("recent_queries", recent[:MAX_RECENT_QUERIES])


def repeat_query(query: str) -> None:
    """Open the search page with a previous query pending."""
    clear_search_state()
    navigate("search", search_query=query, search_input=query, pending_query=query)
