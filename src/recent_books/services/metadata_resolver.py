"""Metadata Resolver abstraction - plugin interface for document metadata lookup."""

from abc import ABC, abstractmethod
from pathlib import PurePosixPath

from recent_books.core import BookMetadata


class MetadataResolver(ABC):
    """
    Abstract interface for resolving a document path to its metadata.

    Format readers (EPUB, XTC, ...) implement this interface. The store only
    calls it when an entry has to be created without caller-supplied metadata.
    """

    @abstractmethod
    def resolve(self, path: str) -> BookMetadata:
        """
        Look up title, author and cover for a document.

        Args:
            path: Identifier of the document.

        Returns:
            BookMetadata; BookMetadata.empty() when the document cannot be read.
            Implementations must not raise for unreadable documents.
        """
        pass


class FileNameMetadataResolver(MetadataResolver):
    """Uses the file name as title for plain-text documents."""

    TEXT_EXTENSIONS = (".txt", ".md")

    def resolve(self, path: str) -> BookMetadata:
        name = PurePosixPath(path).name
        if name.lower().endswith(self.TEXT_EXTENSIONS):
            return BookMetadata(title=name)
        return BookMetadata.empty()
