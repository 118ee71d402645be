"""I/O layer - Storage primitives, file formats and persistence."""

from .legacy_recent_books import LegacyParseResult, parse_legacy_recent_books
from .recent_books_codec import (
    decode_recent_books,
    encode_recent_books,
    recent_book_from_record,
    recent_book_to_record,
)
from .recent_books_persistence import MAX_RECENT_BOOKS, PersistenceState, RecentBooksPersistence
from .storage import InMemoryStorage, LocalStorage, Storage

__all__ = [
    "Storage",
    "LocalStorage",
    "InMemoryStorage",
    "LegacyParseResult",
    "parse_legacy_recent_books",
    "decode_recent_books",
    "encode_recent_books",
    "recent_book_from_record",
    "recent_book_to_record",
    "MAX_RECENT_BOOKS",
    "PersistenceState",
    "RecentBooksPersistence",
]
