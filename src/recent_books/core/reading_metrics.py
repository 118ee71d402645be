"""Reading metrics - pure progress, duration and remaining-time helpers."""

from typing import Optional

READ_SECONDS_MAX = 0xFFFFFFFF
PROGRESS_PLACEHOLDER = "--%"
REMAINING_PLACEHOLDER = "--"
TIMING_SEPARATOR = " · "


def clamp_progress_percent(value: int) -> int:
    """Clamp a progress value into [0, 100]."""
    return min(100, max(0, int(value)))


def add_saturating(counter: int, delta: int, maximum: int = READ_SECONDS_MAX) -> int:
    """Add delta to counter, sticking at maximum instead of wrapping."""
    total = counter + delta
    if total > maximum:
        return maximum
    return max(0, total)


def format_progress(percent: Optional[int]) -> str:
    """Format a progress percentage, or the placeholder when unknown."""
    if percent is None:
        return PROGRESS_PLACEHOLDER
    return f"{clamp_progress_percent(percent)}%"


def format_duration(total_seconds: int) -> str:
    """
    Format seconds as ``"<H>h <MM>m"``.

    Partial minutes are truncated, so 59 seconds reads as ``"0h 00m"``.
    """
    total_seconds = max(0, int(total_seconds))
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    return f"{hours}h {minutes:02d}m"


def estimate_remaining_seconds(read_seconds: int, percent: Optional[int]) -> Optional[int]:
    """
    Estimate the seconds left to finish a document.

    Args:
        read_seconds: Cumulative reading time so far.
        percent: Current progress, or None when unknown.

    Returns:
        0 once the document is finished, None when no estimate is possible
        (unknown or zero progress, or no reading time yet), otherwise the
        projected total minus the time already spent.
    """
    if percent is None:
        return None
    if percent >= 100:
        return 0
    if percent <= 0 or read_seconds <= 0:
        return None

    # Integer form of round(read_seconds / (percent / 100)).
    estimated_total = (read_seconds * 100 + percent // 2) // percent
    estimated_total = min(estimated_total, READ_SECONDS_MAX)
    return max(0, estimated_total - read_seconds)


def format_timing(read_seconds: int, remaining_seconds: Optional[int]) -> str:
    """Combine elapsed and remaining time into one display string."""
    remaining_text = (
        REMAINING_PLACEHOLDER
        if remaining_seconds is None
        else format_duration(remaining_seconds)
    )
    return f"{format_duration(read_seconds)}{TIMING_SEPARATOR}{remaining_text}"
