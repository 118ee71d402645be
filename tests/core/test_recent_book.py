"""Tests for the RecentBook entity and its derived display fields."""

from dataclasses import FrozenInstanceError, replace

import pytest

from recent_books.core import READ_SECONDS_MAX, BookMetadata, RecentBook


def test_new_book_has_unknown_progress_and_no_time():
    book = RecentBook(path="/books/a.epub", title="A")

    assert book.progress_percent is None
    assert book.read_seconds == 0
    assert book.remaining_seconds is None
    assert book.progress_text == "--%"
    assert book.timing_text == "0h 00m · --"


def test_derived_fields_follow_counters():
    book = RecentBook(path="/a.epub", read_seconds=3600, progress_percent=50)

    assert book.progress_text == "50%"
    assert book.remaining_seconds == 3600
    assert book.timing_text == "1h 00m · 1h 00m"
    assert book.has_remaining_estimate


def test_replace_recomputes_derived_fields():
    book = RecentBook(path="/a.epub", read_seconds=3600, progress_percent=50)

    finished = replace(book, progress_percent=100)

    assert finished.remaining_seconds == 0
    assert finished.progress_text == "100%"
    assert finished.timing_text == "1h 00m · 0h 00m"


def test_progress_is_clamped_on_construction():
    assert RecentBook(path="/a", progress_percent=140).progress_percent == 100
    assert RecentBook(path="/a", progress_percent=-3).progress_percent == 0


def test_read_seconds_is_bounded():
    book = RecentBook(path="/a", read_seconds=READ_SECONDS_MAX + 50)
    assert book.read_seconds == READ_SECONDS_MAX


def test_book_is_immutable():
    book = RecentBook(path="/a")
    with pytest.raises(FrozenInstanceError):
        book.title = "changed"


def test_from_metadata():
    metadata = BookMetadata(title="Dune", author="Frank Herbert", cover_path="/covers/dune.bmp")

    book = RecentBook.from_metadata("/books/dune.epub", metadata)

    assert book.title == "Dune"
    assert book.author == "Frank Herbert"
    assert book.cover_path == "/covers/dune.bmp"
    assert book.progress_percent is None
    assert book.read_seconds == 0


def test_metadata_empty():
    assert BookMetadata.empty().is_empty
    assert not BookMetadata(author="Someone").is_empty
