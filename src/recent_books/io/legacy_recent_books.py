"""Reader for the legacy binary recent books file (``recent.bin``).

Layout::

    [version: u8][count: u8][record] * count

Strings are a little-endian u32 byte length followed by UTF-8 bytes. The
record layout depends on the version:

    1: path
    2: path, title, author
    3: path, title, author, cover path

None of the versions carried reading metrics.
"""

import logging
import struct
from dataclasses import dataclass, field
from typing import Callable, List

from recent_books.core import BookMetadata, RecentBook
from recent_books.exceptions import LegacyFormatError

logger = logging.getLogger(__name__)

SUPPORTED_VERSIONS = (1, 2, 3)

MetadataLookup = Callable[[str], BookMetadata]


@dataclass
class LegacyParseResult:
    """Entries recovered from a legacy file plus the number of records dropped."""

    version: int
    books: List[RecentBook] = field(default_factory=list)
    omitted: int = 0


class _BinaryReader:
    """Sequential reader over a bytes buffer that fails on truncation."""

    _U8 = struct.Struct("<B")
    _U32 = struct.Struct("<I")

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._offset = 0

    def read_u8(self) -> int:
        return self._unpack(self._U8)

    def read_string(self) -> str:
        length = self._unpack(self._U32)
        raw = self._take(length)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise LegacyFormatError(f"Invalid UTF-8 string at offset {self._offset - length}") from e

    def _unpack(self, fmt: struct.Struct) -> int:
        (value,) = fmt.unpack(self._take(fmt.size))
        return value

    def _take(self, size: int) -> bytes:
        end = self._offset + size
        if end > len(self._data):
            raise LegacyFormatError(
                f"Unexpected end of data at offset {self._offset} (wanted {size} bytes)"
            )
        chunk = self._data[self._offset:end]
        self._offset = end
        return chunk


def parse_legacy_recent_books(data: bytes, resolve_metadata: MetadataLookup) -> LegacyParseResult:
    """
    Parse a legacy recent books file.

    Args:
        data: Raw contents of ``recent.bin``.
        resolve_metadata: Looks up metadata for a document path. Used for
            version 1 records (which only stored the path) and version 2
            records (stored values are the fallback).

    Returns:
        LegacyParseResult with entries in file order. Records that end up
        without a title are left out and counted in ``omitted``.

    Raises:
        LegacyFormatError: On an unknown version tag or truncated/invalid data.
            No partial result is returned in that case.
    """
    reader = _BinaryReader(data)
    version = reader.read_u8()
    if version not in SUPPORTED_VERSIONS:
        raise LegacyFormatError(f"Unknown recent books version {version}")

    count = reader.read_u8()
    result = LegacyParseResult(version=version)

    for _ in range(count):
        book = _read_record(reader, version, resolve_metadata)
        if not book.title:
            result.omitted += 1
            logger.debug("Omitting legacy recent book without title: %s", book.path)
            continue
        result.books.append(book)

    return result


def _read_record(reader: _BinaryReader, version: int, resolve_metadata: MetadataLookup) -> RecentBook:
    path = reader.read_string()

    if version == 1:
        return RecentBook.from_metadata(path, resolve_metadata(path))

    title = reader.read_string()
    author = reader.read_string()

    if version == 2:
        resolved = resolve_metadata(path)
        # Fields the document could not provide come from the old file
        return RecentBook(
            path=path,
            title=resolved.title or title,
            author=resolved.author or author,
            cover_path=resolved.cover_path,
        )

    cover_path = reader.read_string()
    return RecentBook(path=path, title=title, author=author, cover_path=cover_path)
