"""
Bookshelf catalog package.

A small digital library of Bengali and English books stored in SQLite,
searchable with romanized queries that match Bengali titles, and browsable
through a Streamlit web interface.
"""

__version__ = "1.0.0"
