"""
Reusable UI components for the Streamlit application.

Contains modular components for the sidebar, search bar,
book cards, authors, the add-book form and the PDF reader.
"""

from .sidebar import render_sidebar
from .search_bar import render_search_bar
from .book_list import render_books
from .authors import render_authors
from .book_form import render_book_form
from .pdf_viewer import render_reader, render_reader_from_state

__all__ = [
    "render_sidebar",
    "render_search_bar",
    "render_books",
    "render_authors",
    "render_book_form",
    "render_reader",
    "render_reader_from_state"
]
