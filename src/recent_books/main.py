"""Main entry point - builds the recent books store and prints the list."""

import logging
import sys
from typing import Optional

from recent_books.io import LocalStorage, RecentBooksPersistence
from recent_books.services import FileNameMetadataResolver, MetadataResolver, RecentBooksStore, SettingsManager


def create_recent_books_store(
    settings: SettingsManager,
    resolver: Optional[MetadataResolver] = None,
) -> RecentBooksStore:
    """
    Bootstrap the store following the Composition Root pattern.

    The returned store is already loaded; it is owned by the caller and passed
    to whoever needs it.
    """
    resolver = resolver or FileNameMetadataResolver()
    persistence = RecentBooksPersistence(
        storage=LocalStorage(),
        data_dir=settings.get_data_dir(),
        resolve_metadata=resolver.resolve,
        max_books=settings.get_max_recent_books(),
    )
    store = RecentBooksStore(persistence=persistence, resolver=resolver)
    store.load()
    return store


def main():
    settings = SettingsManager()
    logging.basicConfig(
        level=settings.get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    store = create_recent_books_store(settings)

    if store.get_count() == 0:
        print("No recent books")
        return 0

    for index, book in enumerate(store.get_books(), start=1):
        print(f"{index:2d}. {book.title or book.path}  {book.progress_text}  {book.timing_text}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
