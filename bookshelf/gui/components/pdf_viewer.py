"""
PDF reader component for an embedded book viewer.

The book's PDF is fetched through the document relay, so books hosted
on servers without CORS headers or with bad certificates still open.
"""

import base64
from typing import Optional

import streamlit as st

from ...core import get_config, get_logger, RelayError
from ...database import Book, BookRepository
from ...relay import DocumentRelay
from ..state import get_state, navigate

logger = get_logger(__name__)


def render_reader(book: Book, height: int = None) -> None:
    """
    Render an embedded PDF viewer for a book.

    Args:
        book: The book to display.
        height: Viewer height in pixels. Defaults to config value.
    """
    height = height or get_config().gui.reader_height

    col1, col2 = st.columns([4, 1])

    with col1:
        st.subheader(book.title)
        st.caption(book.author)

    with col2:
        if st.button("Back to catalog", key="close_reader", use_container_width=True):
            navigate("catalog", selected_book_id=None)
            st.rerun()

    pdf_data = _fetch_pdf(book.pdf_url)
    if pdf_data is None:
        _render_fallback(book)
        return

    base64_pdf = base64.b64encode(pdf_data).decode("utf-8")

    pdf_display = f"""
        <iframe
            src="data:application/pdf;base64,{base64_pdf}"
            width="100%"
            height="{height}px"
            type="application/pdf"
            style="border: 1px solid #ccc; border-radius: 4px;"
        >
        </iframe>
    """

    st.markdown(pdf_display, unsafe_allow_html=True)

    _render_download_button(book, pdf_data)


@st.cache_data(show_spinner="Loading book...", max_entries=8)
def _fetch_pdf_cached(url: str) -> bytes:
    """Fetch a document body through the relay; cached per URL."""
    with DocumentRelay().fetch(url) as response:
        return response.read()


def _fetch_pdf(url: str) -> Optional[bytes]:
    """Fetch a book PDF, reporting relay failures in the page."""
    try:
        return _fetch_pdf_cached(url)
    except RelayError as e:
        logger.error(f"Reader could not fetch {url}: {e.message}")
        st.error(f"Could not load the book ({e.status_code}): {e.message}")
        return None


def _render_download_button(book: Book, pdf_data: bytes) -> None:
    """
    Render a download button for the PDF.

    Args:
        book: The book being read.
        pdf_data: PDF bytes.
    """
    st.download_button(
        label="Download PDF",
        data=pdf_data,
        file_name=f"{book.title}.pdf",
        mime="application/pdf",
        key=f"download_{book.id}"
    )


def _render_fallback(book: Book) -> None:
    """
    Render a direct link when the PDF cannot be displayed.

    Args:
        book: The book being read.
    """
    st.warning("The book cannot be displayed here.")
    st.markdown(f"[Open the PDF at its source]({book.pdf_url})")


def render_reader_from_state() -> None:
    """
    Render the reader for the book selected in session state.
    """
    book_id = get_state("selected_book_id")

    if book_id is None:
        st.info("Choose a book to read.")
        return

    book = BookRepository().get_by_id(book_id)
    if book is None:
        st.error("This book no longer exists.")
        return

    render_reader(book)
