"""Recent Books Coordinator - Connects reader lifecycle events with the recent books store."""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from PySide6.QtCore import QObject, Signal, Slot

from recent_books.core import REMAINING_PLACEHOLDER, RecentBook, format_duration
from recent_books.io import Storage
from recent_books.services import RecentBooksStore

ROW_SEPARATOR = " • "


@dataclass(frozen=True)
class RecentBookRow:
    """Display-ready data for one row of the recent books list.

    Attributes:
        path: Document identifier (passed back when the row is selected).
        title: Row title.
        author: Row subtitle.
        metrics_text: "<progress> • <elapsed> • <remaining>".
        progress_value: Progress bar fill in [0, 100]; 0 when unknown.
    """

    path: str
    title: str
    author: str
    metrics_text: str
    progress_value: int


class RecentBooksCoordinator(QObject):
    """Routes reader events to the store and prepares rows for the list screen.

    Responsibilities:
    - Record opened books, progress changes and reading time
    - Notify listeners when the recent list changed
    - Hide entries whose document no longer exists
    """

    recent_books_changed = Signal()

    def __init__(self, store: RecentBooksStore, storage: Storage):
        super().__init__()

        if store is None:
            raise ValueError("RecentBooksStore must not be None")
        if storage is None:
            raise ValueError("Storage must not be None")

        self.store = store
        self.storage = storage

    @Slot(str, str, str, str)
    def handle_book_opened(self, path: str, title: str, author: str, cover_path: str):
        """Move the opened book to the front of the recent list."""
        self._notify_if(self.store.add_book(path, title, author, cover_path))

    @Slot(str, int)
    def handle_progress_changed(self, path: str, percent: int):
        self._notify_if(self.store.update_progress(path, percent))

    @Slot(str, int)
    def handle_time_elapsed(self, path: str, seconds: int):
        self._notify_if(self.store.add_reading_time(path, seconds))

    @Slot(str, int, int)
    def handle_session_finished(self, path: str, seconds: int, percent: int):
        """
        Record a whole reading session at once.

        Args:
            path: Document identifier.
            seconds: Seconds read in the session.
            percent: Progress at the end of the session; negative if unknown.
        """
        progress: Optional[int] = percent if percent >= 0 else None
        self._notify_if(self.store.update_reading_stats(path, seconds, progress))

    def visible_books(self) -> List[RecentBook]:
        """Recent books whose documents still exist, most recent first."""
        return [book for book in self.store.get_books() if self.storage.exists(Path(book.path))]

    def build_rows(self, books: Optional[Iterable[RecentBook]] = None) -> List[RecentBookRow]:
        """Build list rows for the given books (defaults to visible_books())."""
        if books is None:
            books = self.visible_books()
        return [self._to_row(book) for book in books]

    @staticmethod
    def _to_row(book: RecentBook) -> RecentBookRow:
        remaining = (
            format_duration(book.remaining_seconds)
            if book.has_remaining_estimate
            else REMAINING_PLACEHOLDER
        )
        metrics_text = ROW_SEPARATOR.join(
            [book.progress_text, format_duration(book.read_seconds), remaining]
        )
        return RecentBookRow(
            path=book.path,
            title=book.title,
            author=book.author,
            metrics_text=metrics_text,
            progress_value=book.progress_percent if book.progress_percent is not None else 0,
        )

    def _notify_if(self, changed: bool) -> None:
        if changed:
            self.recent_books_changed.emit()
