"""Exceptions raised by the recent books persistence layer."""


class RecentBooksError(Exception):
    """Base class for recent books errors."""


class RecentBooksFormatError(RecentBooksError):
    """The structured recent books file could not be decoded."""


class LegacyFormatError(RecentBooksError):
    """The legacy binary recent books file is corrupt or of an unknown version."""
