"""
Relay module for streaming remote documents.

Used by the reader to display book PDFs hosted elsewhere.
"""

from .document_relay import DocumentRelay, RelayResponse

__all__ = [
    "DocumentRelay",
    "RelayResponse"
]
