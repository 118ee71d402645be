"""
Recent Books - most-recently-used list of opened documents for a reading device.

This package provides:
- A bounded recent list with reading progress and reading time per book
- Display-ready progress and remaining-time estimates
- JSON persistence with migration from the legacy binary format
"""

__version__ = "0.1.0"

# Make key components available at package level
from recent_books.core import BookMetadata, RecentBook
from recent_books.io import RecentBooksPersistence
from recent_books.services import RecentBooksStore

__all__ = [
    "BookMetadata",
    "RecentBook",
    "RecentBooksPersistence",
    "RecentBooksStore",
]
