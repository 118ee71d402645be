"""Tests for parsing the legacy binary recent books file."""

import struct
from unittest.mock import MagicMock

import pytest

from recent_books.core import BookMetadata
from recent_books.exceptions import LegacyFormatError
from recent_books.io import parse_legacy_recent_books


def pack_string(value: str) -> bytes:
    raw = value.encode("utf-8")
    return struct.pack("<I", len(raw)) + raw


def legacy_file(version: int, records) -> bytes:
    """Build a legacy file; each record is a tuple of string fields."""
    data = struct.pack("<BB", version, len(records))
    for record in records:
        data += b"".join(pack_string(field) for field in record)
    return data


@pytest.fixture
def resolver():
    return MagicMock(return_value=BookMetadata.empty())


class TestVersion1:
    def test_metadata_is_resolved_from_path(self, resolver):
        resolver.return_value = BookMetadata(title="Dune", author="Herbert", cover_path="/c.bmp")

        result = parse_legacy_recent_books(legacy_file(1, [("/books/dune.epub",)]), resolver)

        resolver.assert_called_once_with("/books/dune.epub")
        assert result.version == 1
        assert len(result.books) == 1
        book = result.books[0]
        assert (book.path, book.title, book.author, book.cover_path) == (
            "/books/dune.epub",
            "Dune",
            "Herbert",
            "/c.bmp",
        )
        assert book.progress_percent is None
        assert book.read_seconds == 0

    def test_unresolvable_records_are_omitted(self, resolver):
        result = parse_legacy_recent_books(legacy_file(1, [("/missing.epub",)]), resolver)

        assert result.books == []
        assert result.omitted == 1


class TestVersion2:
    def test_resolved_metadata_wins(self, resolver):
        resolver.return_value = BookMetadata(title="Fresh", author="New", cover_path="/fresh.bmp")

        result = parse_legacy_recent_books(
            legacy_file(2, [("/a.epub", "Stale", "Old")]), resolver
        )

        assert result.books[0].title == "Fresh"
        assert result.books[0].cover_path == "/fresh.bmp"

    def test_falls_back_to_stored_title_and_author(self, resolver):
        result = parse_legacy_recent_books(
            legacy_file(2, [("/a.epub", "Stored", "Writer"), ("/b.epub", "Other", "")]),
            resolver,
        )

        assert [book.title for book in result.books] == ["Stored", "Other"]
        assert result.books[0].author == "Writer"
        assert result.books[0].cover_path == ""
        assert result.omitted == 0

    def test_fills_missing_title_from_stored_record(self, resolver):
        resolver.return_value = BookMetadata(title="", author="Resolved Author")

        result = parse_legacy_recent_books(
            legacy_file(2, [("/a.epub", "Stored Title", "Stored Author")]), resolver
        )

        assert result.omitted == 0
        assert len(result.books) == 1
        assert result.books[0].title == "Stored Title"
        assert result.books[0].author == "Resolved Author"


class TestVersion3:
    def test_reads_all_fields_without_resolver(self, resolver):
        result = parse_legacy_recent_books(
            legacy_file(3, [("/a.epub", "A", "Author A", "/a.bmp")]), resolver
        )

        resolver.assert_not_called()
        book = result.books[0]
        assert (book.path, book.title, book.author, book.cover_path) == (
            "/a.epub",
            "A",
            "Author A",
            "/a.bmp",
        )

    def test_empty_titles_are_omitted_and_counted(self, resolver):
        records = [
            ("/a.epub", "A", "Author", "/a.bmp"),
            ("/b.epub", "", "", ""),
            ("/c.epub", "C", "", ""),
            ("/d.epub", "", "Author", "/d.bmp"),
        ]

        result = parse_legacy_recent_books(legacy_file(3, records), resolver)

        assert [book.path for book in result.books] == ["/a.epub", "/c.epub"]
        assert result.omitted == 2

    def test_unicode_strings(self, resolver):
        result = parse_legacy_recent_books(
            legacy_file(3, [("/本/坊っちゃん.epub", "坊っちゃん", "夏目漱石", "")]), resolver
        )

        assert result.books[0].author == "夏目漱石"


class TestCorruptData:
    @pytest.mark.parametrize("version", [0, 4, 255])
    def test_unknown_version_fails(self, resolver, version):
        with pytest.raises(LegacyFormatError, match="Unknown recent books version"):
            parse_legacy_recent_books(legacy_file(version, []), resolver)

    def test_empty_data_fails(self, resolver):
        with pytest.raises(LegacyFormatError):
            parse_legacy_recent_books(b"", resolver)

    def test_truncated_record_fails(self, resolver):
        data = legacy_file(3, [("/a.epub", "A", "B", "C"), ("/b.epub", "B", "C", "D")])

        with pytest.raises(LegacyFormatError, match="Unexpected end of data"):
            parse_legacy_recent_books(data[:-3], resolver)

    def test_count_larger_than_records_fails(self, resolver):
        data = struct.pack("<BB", 3, 2) + b"".join(pack_string(s) for s in ("/a", "A", "", ""))

        with pytest.raises(LegacyFormatError):
            parse_legacy_recent_books(data, resolver)

    def test_invalid_utf8_fails(self, resolver):
        data = struct.pack("<BB", 1, 1) + struct.pack("<I", 2) + b"\xff\xfe"

        with pytest.raises(LegacyFormatError, match="Invalid UTF-8"):
            parse_legacy_recent_books(data, resolver)
