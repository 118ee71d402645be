"""Persistence and one-time legacy migration of the recent books list."""

import logging
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from recent_books.core import BookMetadata, RecentBook
from recent_books.exceptions import LegacyFormatError, RecentBooksFormatError

from .legacy_recent_books import parse_legacy_recent_books
from .recent_books_codec import EntryBuilder, decode_recent_books, encode_recent_books, recent_book_from_record
from .storage import Storage

logger = logging.getLogger(__name__)

MAX_RECENT_BOOKS = 10
RECENT_BOOKS_JSON = "recent.json"
RECENT_BOOKS_BIN = "recent.bin"
BACKUP_SUFFIX = ".bak"


class PersistenceState(Enum):
    UNLOADED = "unloaded"
    MIGRATING = "migrating"
    LOADED = "loaded"
    FAILED = "failed"


class RecentBooksPersistence:
    """
    Reads and writes ``recent.json`` inside a data directory.

    When the JSON file is missing, empty or unreadable, ``load`` falls back to
    the legacy ``recent.bin`` file, migrates it, writes the JSON file and
    renames the legacy file to ``recent.bin.bak`` (numbered when an older
    backup is already there, so no backup is ever overwritten).

    Failures are reported through return values (False / None); no exception
    escapes ``load`` or ``save``.
    """

    def __init__(
        self,
        storage: Storage,
        data_dir: Path,
        resolve_metadata: Callable[[str], BookMetadata],
        build_entry: EntryBuilder = recent_book_from_record,
        max_books: int = MAX_RECENT_BOOKS,
    ) -> None:
        if storage is None:
            raise ValueError("Storage must not be None")
        if resolve_metadata is None:
            raise ValueError("Metadata resolver must not be None")
        if max_books < 1:
            raise ValueError(f"max_books must be at least 1, got {max_books}")

        self.storage = storage
        self.data_dir = Path(data_dir)
        self.resolve_metadata = resolve_metadata
        self.build_entry = build_entry
        self.max_books = max_books
        self.state = PersistenceState.UNLOADED

    @property
    def json_path(self) -> Path:
        return self.data_dir / RECENT_BOOKS_JSON

    @property
    def legacy_path(self) -> Path:
        return self.data_dir / RECENT_BOOKS_BIN

    @property
    def backup_path(self) -> Path:
        return self.data_dir / (RECENT_BOOKS_BIN + BACKUP_SUFFIX)

    def save(self, books: Iterable[RecentBook]) -> bool:
        """Write the full list to ``recent.json``. Returns False on I/O failure."""
        data = encode_recent_books(books)
        try:
            self.storage.make_dirs(self.data_dir)
            self.storage.write_bytes(self.json_path, data)
        except OSError as e:
            logger.error("Failed to save recent books to %s: %s", self.json_path, e)
            return False
        logger.debug("Saved recent books to %s", self.json_path)
        return True

    def load(self) -> Optional[List[RecentBook]]:
        """
        Load the recent books list.

        Returns:
            The entries, most recent first, or None when neither the JSON file
            nor a legacy file could be read.
        """
        books = self._load_json()
        if books is not None:
            self.state = PersistenceState.LOADED
            return books

        books = self._migrate_legacy()
        if books is not None:
            self.state = PersistenceState.LOADED
            return books

        self.state = PersistenceState.FAILED
        return None

    def _load_json(self) -> Optional[List[RecentBook]]:
        try:
            if not self.storage.exists(self.json_path):
                return None
            data = self.storage.read_bytes(self.json_path)
        except OSError as e:
            logger.warning("Could not read %s: %s", self.json_path, e)
            return None

        if not data.strip():
            return None

        try:
            books = decode_recent_books(data, self.build_entry)
        except RecentBooksFormatError as e:
            logger.warning("Ignoring unreadable %s: %s", self.json_path, e)
            return None

        books = self._normalize(books)
        logger.debug("Loaded %d recent book(s) from %s", len(books), self.json_path)
        return books

    def _migrate_legacy(self) -> Optional[List[RecentBook]]:
        try:
            if not self.storage.exists(self.legacy_path):
                return None
            data = self.storage.read_bytes(self.legacy_path)
        except OSError as e:
            logger.warning("Could not read %s: %s", self.legacy_path, e)
            return None

        self.state = PersistenceState.MIGRATING
        try:
            result = parse_legacy_recent_books(data, self.resolve_metadata)
        except LegacyFormatError as e:
            logger.error("Deserialization of %s failed: %s", self.legacy_path, e)
            return None

        if result.omitted:
            logger.warning("Omitted %d recent book(s) with missing title", result.omitted)

        books = self._normalize(result.books)
        if not self.save(books):
            logger.warning("Migrated recent books could not be written; keeping %s", self.legacy_path)
            return books

        try:
            backup_path = self._free_backup_path()
            self.storage.rename(self.legacy_path, backup_path)
        except OSError as e:
            logger.warning("Could not back up %s: %s", self.legacy_path, e)

        logger.info(
            "Migrated %d recent book(s) from %s (version %d) to %s",
            len(books),
            self.legacy_path,
            result.version,
            self.json_path,
        )
        return books

    def _free_backup_path(self) -> Path:
        """``recent.bin.bak``, or the first free ``recent.bin.bak.<n>`` if an older backup exists."""
        candidate = self.backup_path
        counter = 1
        while self.storage.exists(candidate):
            candidate = self.data_dir / f"{RECENT_BOOKS_BIN}{BACKUP_SUFFIX}.{counter}"
            counter += 1
        return candidate

    def _normalize(self, books: List[RecentBook]) -> List[RecentBook]:
        """Drop duplicate paths (first occurrence wins) and trim to the cap."""
        seen = set()
        unique = []
        for book in books:
            if book.path in seen:
                logger.warning("Dropping duplicate recent book entry: %s", book.path)
                continue
            seen.add(book.path)
            unique.append(book)
        return unique[: self.max_books]
