"""
Main Streamlit application for the Bookshelf catalog.

Entry point that assembles all components into the complete
web interface: catalog, search, authors, add-book form and reader.

Note: This file is run directly by Streamlit, so it needs to
set up the Python path before importing other modules.
"""

import sys
from pathlib import Path

# Add project root to path for imports when run directly by Streamlit
_project_root = Path(__file__).parent.parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import streamlit as st  # noqa: E402

from bookshelf.core import get_config, get_logger, BackendUnavailableError  # noqa: E402
from bookshelf.database import init_schema, BookRepository  # noqa: E402
from bookshelf.search import CatalogSearchEngine, SearchQuery  # noqa: E402

from bookshelf.gui.state import init_state, get_state, set_state, navigate, remember_query  # noqa: E402
from bookshelf.gui.components import (  # noqa: E402
    render_sidebar,
    render_search_bar,
    render_books,
    render_authors,
    render_book_form,
    render_reader_from_state,
)
from bookshelf.gui.components.search_bar import (  # noqa: E402
    render_search_header,
    render_interpretation,
    render_no_results,
)

logger = get_logger(__name__)


def main():
    """Main application entry point."""
    config = get_config()

    st.set_page_config(
        page_title=config.gui.page_title,
        page_icon="📚",
        layout="wide",
        initial_sidebar_state="expanded"
    )

    init_state()

    init_schema()

    page = render_sidebar()

    if page == "search":
        _render_search_page()
    elif page == "authors":
        _render_authors_page()
    elif page == "add_book":
        render_book_form()
    elif page == "reader":
        render_reader_from_state()
    else:
        _render_catalog_page()


def _render_catalog_page() -> None:
    """Render every book, newest first."""
    st.header("All books")

    books = BookRepository().find()
    if not books:
        st.info("The catalog is empty. Use \"Add a book\" to create the first entry.")
        return

    render_books(books, key_prefix="catalog")


def _render_search_page() -> None:
    """Render the search bar and the results of the last search."""
    st.header("Search")

    pending = get_state("pending_query")
    if pending:
        set_state("pending_query", None)
        _execute_search(pending)

    query_text, submitted = render_search_bar()

    if submitted and query_text.strip():
        _execute_search(query_text)

    error = get_state("search_error")
    if error:
        st.error(error)
        return

    stats = get_state("search_stats")
    if not stats:
        return

    render_search_header(stats)
    render_interpretation(stats.query)

    results = get_state("search_results", [])
    if not results:
        render_no_results(stats.query)
        return

    st.divider()
    render_books(results, key_prefix="search")


def _execute_search(query_text: str) -> None:
    """
    Execute search and store results in state.

    Args:
        query_text: The search query string.
    """
    engine = CatalogSearchEngine()

    with st.spinner("Searching..."):
        try:
            results, stats = engine.search(SearchQuery(text=query_text))
        except BackendUnavailableError as e:
            set_state("search_results", [])
            set_state("search_stats", None)
            set_state("search_error", "Search backend unavailable. Please try again later.")
            logger.error(f"Search error: {e.message}")
            return

    set_state("search_results", results)
    set_state("search_stats", stats)
    set_state("search_error", None)
    remember_query(query_text)

    logger.info(f"Search '{query_text}': {stats.total_results} results")


def _render_authors_page() -> None:
    """Render the author list, or one author's books when selected."""
    repository = BookRepository()
    selected = get_state("selected_author")

    if selected:
        col1, col2 = st.columns([4, 1])
        with col1:
            st.header(selected)
        with col2:
            if st.button("All authors", use_container_width=True):
                navigate("authors", selected_author=None)
                st.rerun()

        render_books(repository.find(author=selected), key_prefix="author")
        return

    st.header("Authors")
    render_authors(repository.list_authors())


if __name__ == "__main__":
    main()
