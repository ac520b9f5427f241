"""
Authors component listing every author with a book count.
"""

import streamlit as st
from typing import List

from ...core import get_config
from ...database import AuthorSummary
from ..state import navigate


def render_authors(authors: List[AuthorSummary]) -> None:
    """
    Render authors as a grid; clicking one shows their books.

    Args:
        authors: Authors sorted by name.
    """
    if not authors:
        st.info("No authors yet.")
        return

    per_row = max(1, get_config().gui.books_per_row)

    for start in range(0, len(authors), per_row):
        columns = st.columns(per_row)
        for column, author in zip(columns, authors[start:start + per_row]):
            with column:
                with st.container(border=True):
                    if author.image:
                        st.image(author.image, use_container_width=True)
                    st.markdown(f"**{author.name}**")
                    st.caption(f"{author.count} book{'s' if author.count != 1 else ''}")
                    if st.button("View books", key=f"author_{start}_{author.name}", use_container_width=True):
                        navigate("authors", selected_author=author.name)
                        st.rerun()
