"""
Book list component for displaying books as cards.

Used for the full catalog, an author's books and search results.
"""

import streamlit as st
from typing import List

from ...core import get_config
from ...database import Book
from ..state import navigate


def render_books(books: List[Book], key_prefix: str = "books") -> None:
    """
    Render books as a grid of cards.

    Args:
        books: Books to display, in display order.
        key_prefix: Prefix for widget keys, unique per page section.
    """
    if not books:
        return

    per_row = max(1, get_config().gui.books_per_row)

    for start in range(0, len(books), per_row):
        columns = st.columns(per_row)
        for column, book in zip(columns, books[start:start + per_row]):
            with column:
                _render_book_card(book, key_prefix)


def _render_book_card(book: Book, key_prefix: str) -> None:
    """Render a single book card."""
    with st.container(border=True):
        if book.cover_image:
            st.image(book.cover_image, use_container_width=True)

        st.markdown(f"**{book.title}**")
        st.caption(book.author)

        if book.category:
            st.caption(f"Category: {book.category}")

        if book.description:
            with st.expander("About"):
                st.write(book.description)

        if st.button("Read", key=f"{key_prefix}_read_{book.id}", use_container_width=True):
            navigate("reader", selected_book_id=book.id)
            st.rerun()
