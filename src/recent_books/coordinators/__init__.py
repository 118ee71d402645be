"""Coordinators - Orchestration layer connecting reader events with the store."""

from .recent_books_coordinator import RecentBookRow, RecentBooksCoordinator

__all__ = [
    "RecentBooksCoordinator",
    "RecentBookRow",
]
