"""JSON encoding of the recent books list.

Format (``recent.json``)::

    [
        {
            "path": "/books/dune.epub",
            "title": "Dune",
            "author": "Frank Herbert",
            "coverPath": "/.crosspoint/epub_123/thumb.bmp",
            "readTimeSeconds": 5400,
            "readPercent": 42,
            "remainingTimeSeconds": 7457
        }
    ]

``readPercent`` is -1 when progress is unknown (null is accepted as well).
``remainingTimeSeconds`` is written for external readers and is never trusted
on load; it is derived again from the other two counters.
"""

import json
from typing import Any, Callable, Dict, Iterable, List

from recent_books.core import READ_SECONDS_MAX, RecentBook
from recent_books.exceptions import RecentBooksFormatError

UNKNOWN_PERCENT = -1
UNKNOWN_REMAINING = -1

EntryBuilder = Callable[[Dict[str, Any]], RecentBook]


def recent_book_to_record(book: RecentBook) -> Dict[str, Any]:
    """Convert a RecentBook into its JSON record."""
    return {
        "path": book.path,
        "title": book.title,
        "author": book.author,
        "coverPath": book.cover_path,
        "readTimeSeconds": book.read_seconds,
        "readPercent": UNKNOWN_PERCENT if book.progress_percent is None else book.progress_percent,
        "remainingTimeSeconds": (
            UNKNOWN_REMAINING if book.remaining_seconds is None else book.remaining_seconds
        ),
    }


def recent_book_from_record(record: Dict[str, Any]) -> RecentBook:
    """
    Build a RecentBook from a decoded JSON record.

    Raises:
        RecentBooksFormatError: If the record is not an object, has no usable
            path, or carries a field of the wrong type.
    """
    if not isinstance(record, dict):
        raise RecentBooksFormatError(f"Recent book record must be an object, got {type(record).__name__}")

    path = record.get("path")
    if not isinstance(path, str) or not path:
        raise RecentBooksFormatError("Recent book record is missing a path")

    read_seconds = _int_field(record, "readTimeSeconds", default=0)
    percent = _int_field(record, "readPercent", default=UNKNOWN_PERCENT)

    return RecentBook(
        path=path,
        title=_str_field(record, "title"),
        author=_str_field(record, "author"),
        cover_path=_str_field(record, "coverPath"),
        read_seconds=min(max(0, read_seconds), READ_SECONDS_MAX),
        progress_percent=None if percent < 0 else percent,
    )


def encode_recent_books(books: Iterable[RecentBook]) -> bytes:
    """Serialize books (in list order) to UTF-8 JSON bytes."""
    records = [recent_book_to_record(book) for book in books]
    return json.dumps(records, indent=2, ensure_ascii=False).encode("utf-8")


def decode_recent_books(
    data: bytes,
    build_entry: EntryBuilder = recent_book_from_record,
) -> List[RecentBook]:
    """
    Parse JSON bytes into RecentBook entries.

    Args:
        data: Raw file contents.
        build_entry: Turns one decoded record into a RecentBook. The default
            is recent_book_from_record; owners may inject their own. Any
            error a builder raises is reported as RecentBooksFormatError.

    Returns:
        Entries in file order.

    Raises:
        RecentBooksFormatError: If the data is not valid JSON, is not an
            array, or any record is malformed.
    """
    try:
        payload = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise RecentBooksFormatError(f"Invalid recent books JSON: {e}") from e

    if not isinstance(payload, list):
        raise RecentBooksFormatError("Recent books JSON must be an array")

    books = []
    for index, record in enumerate(payload):
        try:
            books.append(build_entry(record))
        except RecentBooksFormatError:
            raise
        except Exception as e:
            raise RecentBooksFormatError(f"Invalid recent book record {index}: {e}") from e
    return books


def _str_field(record: Dict[str, Any], key: str) -> str:
    value = record.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise RecentBooksFormatError(f"Field '{key}' must be a string")
    return value


def _int_field(record: Dict[str, Any], key: str, default: int) -> int:
    value = record.get(key)
    if value is None:
        return default
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise RecentBooksFormatError(f"Field '{key}' must be an integer")
    return value
