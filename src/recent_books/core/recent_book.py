"""Domain entities for recently opened books."""

from dataclasses import dataclass, field
from typing import Optional

from .reading_metrics import (
    READ_SECONDS_MAX,
    clamp_progress_percent,
    estimate_remaining_seconds,
    format_progress,
    format_timing,
)


@dataclass(frozen=True)
class BookMetadata:
    """Descriptive metadata resolved for a document.

    Attributes:
        title: Display title (empty when it could not be resolved).
        author: Author name, may be empty.
        cover_path: Path to a cached cover image, may be empty.
    """

    title: str = ""
    author: str = ""
    cover_path: str = ""

    @classmethod
    def empty(cls) -> "BookMetadata":
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.title and not self.author


@dataclass(frozen=True)
class RecentBook:
    """A document in the recent books list along with its reading metrics.

    Instances are immutable; the store replaces an entry whenever one of its
    inputs changes, and the display fields below are derived on construction.

    Attributes:
        path: Identifier of the underlying document (unique within the list).
        title: Display title.
        author: Author name.
        cover_path: Path to a cover thumbnail.
        read_seconds: Cumulative reading time, saturating at READ_SECONDS_MAX.
        progress_percent: Progress in [0, 100], or None when unknown.
        remaining_seconds: Estimated seconds left, or None when unknown.
        progress_text: Display form of progress_percent.
        timing_text: Display form of elapsed and remaining time.
    """

    path: str
    title: str = ""
    author: str = ""
    cover_path: str = ""
    read_seconds: int = 0
    progress_percent: Optional[int] = None
    remaining_seconds: Optional[int] = field(init=False, default=None)
    progress_text: str = field(init=False, default="")
    timing_text: str = field(init=False, default="")

    def __post_init__(self) -> None:
        read_seconds = min(max(0, int(self.read_seconds)), READ_SECONDS_MAX)
        percent = self.progress_percent
        if percent is not None:
            percent = clamp_progress_percent(percent)
        remaining = estimate_remaining_seconds(read_seconds, percent)

        object.__setattr__(self, "read_seconds", read_seconds)
        object.__setattr__(self, "progress_percent", percent)
        object.__setattr__(self, "remaining_seconds", remaining)
        object.__setattr__(self, "progress_text", format_progress(percent))
        object.__setattr__(self, "timing_text", format_timing(read_seconds, remaining))

    @classmethod
    def from_metadata(cls, path: str, metadata: BookMetadata) -> "RecentBook":
        """Create a fresh entry with unknown progress and no reading time."""
        return cls(
            path=path,
            title=metadata.title,
            author=metadata.author,
            cover_path=metadata.cover_path,
        )

    @property
    def has_remaining_estimate(self) -> bool:
        return self.remaining_seconds is not None
