"""Domain layer - Pure entities and reading metrics."""

from .reading_metrics import (
    PROGRESS_PLACEHOLDER,
    READ_SECONDS_MAX,
    REMAINING_PLACEHOLDER,
    add_saturating,
    clamp_progress_percent,
    estimate_remaining_seconds,
    format_duration,
    format_progress,
    format_timing,
)
from .recent_book import BookMetadata, RecentBook

__all__ = [
    "BookMetadata",
    "RecentBook",
    "READ_SECONDS_MAX",
    "PROGRESS_PLACEHOLDER",
    "REMAINING_PLACEHOLDER",
    "add_saturating",
    "clamp_progress_percent",
    "estimate_remaining_seconds",
    "format_duration",
    "format_progress",
    "format_timing",
]
