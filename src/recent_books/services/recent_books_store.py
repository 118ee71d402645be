"""Recent Books Store - most-recently-used list of opened documents."""

import logging
import threading
from dataclasses import replace
from typing import List, Optional, Tuple

from recent_books.core import RecentBook, add_saturating, clamp_progress_percent, format_duration
from recent_books.io import RecentBooksPersistence
from recent_books.services.metadata_resolver import MetadataResolver

logger = logging.getLogger(__name__)


class RecentBooksStore:
    """Owns the ordered list of recently opened books.

    Index 0 is the most recently opened document. Paths are unique and the
    list never grows beyond the persistence cap; overflowing entries are
    dropped from the tail.

    Every mutation recomputes the entry's display fields and rewrites the
    whole file before returning. Mutators return True when the list changed
    and was saved, False for no-ops and failed writes (the in-memory change
    is kept in the latter case).

    A single lock guards the list and the save path so the store can be
    shared with worker threads.
    """

    def __init__(self, persistence: RecentBooksPersistence, resolver: MetadataResolver) -> None:
        if persistence is None:
            raise ValueError("RecentBooksPersistence must not be None")
        if resolver is None:
            raise ValueError("MetadataResolver must not be None")

        self.persistence = persistence
        self.resolver = resolver
        self._books: List[RecentBook] = []
        self._lock = threading.RLock()

    @property
    def max_books(self) -> int:
        return self.persistence.max_books

    def load(self) -> bool:
        """Populate the list from disk. The list is left untouched on failure."""
        with self._lock:
            books = self.persistence.load()
            if books is None:
                logger.info("No recent books could be loaded")
                return False
            self._books = list(books)
            return True

    def save(self) -> bool:
        with self._lock:
            return self.persistence.save(self._books)

    def add_book(self, path: str, title: str, author: str, cover_path: str) -> bool:
        """
        Move a book to the front of the list, inserting it if needed.

        Reading time and progress of an existing entry are carried over.
        """
        with self._lock:
            read_seconds = 0
            progress_percent = None
            index = self._index_of(path)
            if index is not None:
                existing = self._books.pop(index)
                read_seconds = existing.read_seconds
                progress_percent = existing.progress_percent

            self._books.insert(
                0,
                RecentBook(
                    path=path,
                    title=title,
                    author=author,
                    cover_path=cover_path,
                    read_seconds=read_seconds,
                    progress_percent=progress_percent,
                ),
            )
            self._trim()
            return self.save()

    def update_book(self, path: str, title: str, author: str, cover_path: str) -> bool:
        """Update metadata in place without reordering or touching counters."""
        with self._lock:
            index = self._index_of(path)
            if index is None:
                return False
            self._books[index] = replace(self._books[index], title=title, author=author, cover_path=cover_path)
            return self.save()

    def update_progress(self, path: str, percent: int) -> bool:
        """Set progress (clamped to [0, 100]). No-op when absent or unchanged."""
        with self._lock:
            clamped = clamp_progress_percent(percent)
            index = self._index_of(path)
            if index is None or self._books[index].progress_percent == clamped:
                return False
            self._books[index] = replace(self._books[index], progress_percent=clamped)
            return self.save()

    def add_reading_time(self, path: str, elapsed_seconds: int) -> bool:
        """Add elapsed seconds to a book's reading time, saturating on overflow."""
        if elapsed_seconds <= 0:
            return False
        with self._lock:
            index = self._index_of(path)
            if index is None:
                return False
            book = self._books[index]
            self._books[index] = replace(book, read_seconds=add_saturating(book.read_seconds, elapsed_seconds))
            return self.save()

    def update_reading_stats(self, path: str, session_seconds: int, percent: Optional[int]) -> bool:
        """
        Record a finished reading session.

        Unknown paths are created at the front of the list from resolved
        metadata; when the resolver yields no title nothing is created.

        Args:
            path: Document identifier.
            session_seconds: Seconds read in this session.
            percent: Progress at the end of the session, or None to keep the
                current value.
        """
        with self._lock:
            created = False
            index = self._index_of(path)
            if index is None:
                metadata = self.resolver.resolve(path)
                if not metadata.title:
                    logger.debug("Not tracking %s: no title could be resolved", path)
                    return False
                self._books.insert(0, RecentBook.from_metadata(path, metadata))
                self._trim()
                index = 0
                created = True

            book = self._books[index]
            updated = replace(
                book,
                read_seconds=add_saturating(book.read_seconds, max(0, session_seconds)),
                progress_percent=(
                    book.progress_percent if percent is None else clamp_progress_percent(percent)
                ),
            )
            if not created and updated == book:
                return False
            self._books[index] = updated
            return self.save()

    def get_books(self) -> Tuple[RecentBook, ...]:
        """Entries, most recent first."""
        with self._lock:
            return tuple(self._books)

    def get_count(self) -> int:
        with self._lock:
            return len(self._books)

    def get_book(self, path: str) -> Optional[RecentBook]:
        with self._lock:
            index = self._index_of(path)
            return None if index is None else self._books[index]

    @staticmethod
    def get_book_reading_time(book: RecentBook) -> str:
        return format_duration(book.read_seconds)

    def _index_of(self, path: str) -> Optional[int]:
        for index, book in enumerate(self._books):
            if book.path == path:
                return index
        return None

    def _trim(self) -> None:
        if len(self._books) > self.max_books:
            dropped = self._books[self.max_books:]
            del self._books[self.max_books:]
            for book in dropped:
                logger.debug("Dropped oldest recent book: %s", book.path)
