"""Services layer - recent list management, metadata lookup and settings."""

from recent_books.services.metadata_resolver import FileNameMetadataResolver, MetadataResolver
from recent_books.services.recent_books_store import RecentBooksStore
from recent_books.services.settings_manager import SettingsManager

__all__ = [
	"MetadataResolver",
	"FileNameMetadataResolver",
	"RecentBooksStore",
	"SettingsManager",
]
