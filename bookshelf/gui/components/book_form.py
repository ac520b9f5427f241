"""
Add-book form component.

Collects the fields of a new book and stores it through the repository.
"""

import streamlit as st

from ...core import get_config, get_logger, ValidationError
from ...database import BookRepository

logger = get_logger(__name__)


FIELD_LABELS = {
    "title": "Title",
    "author": "Author",
    "description": "Description",
    "cover_image": "Cover image URL",
    "pdf_url": "PDF URL",
    "category": "Category",
}


def render_book_form() -> None:
    """Render the form and create the book on submit."""
    config = get_config()

    st.subheader("Add a book")

    with st.form("add_book", clear_on_submit=False):
        title = st.text_input(FIELD_LABELS["title"])
        author = st.text_input(FIELD_LABELS["author"])
        description = st.text_area(FIELD_LABELS["description"])
        cover_image = st.text_input(FIELD_LABELS["cover_image"], placeholder="https://...")
        pdf_url = st.text_input(FIELD_LABELS["pdf_url"], placeholder="https://...")
        category = st.text_input(FIELD_LABELS["category"], value=config.catalog.default_category)

        submitted = st.form_submit_button("Add book", type="primary")

    if not submitted:
        return

    record = {
        "title": title,
        "author": author,
        "description": description,
        "cover_image": cover_image,
        "pdf_url": pdf_url,
        "category": category,
    }

    try:
        book = BookRepository().create(record)
    except ValidationError as e:
        label = FIELD_LABELS.get(e.field, e.field)
        st.error(f"{label} is required.")
        return

    st.success(f"Added \"{book.title}\".")
    logger.info(f"Book {book.id} added from form")
