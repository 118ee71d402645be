"""Settings Manager - Handles data directory and store configuration."""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_MAX_RECENT_BOOKS = 10
DEFAULT_LOG_LEVEL = "INFO"


class SettingsManager:
    """
    Manages recent books configuration.

    Reads values from a .env file in the project root, falling back to
    defaults when a value is missing or invalid.
    """

    def __init__(self, project_root: Optional[Path] = None):
        """
        Initialize settings manager.

        Args:
            project_root: Path to project root where .env is located.
                         If None, searches upward from current file.
        """
        if project_root is None:
            current = Path(__file__).resolve()
            project_root = current.parent.parent.parent.parent

        env_path = project_root / ".env"
        load_dotenv(dotenv_path=env_path)

        self._project_root = project_root

    def get_data_dir(self) -> Path:
        """Directory holding recent.json (and the legacy recent.bin)."""
        value = os.getenv("RECENT_BOOKS_DATA_DIR")
        if value and value.strip():
            return Path(value.strip()).expanduser()
        return Path.home() / ".recent_books"

    def get_max_recent_books(self) -> int:
        """Maximum number of entries kept in the recent list."""
        value = os.getenv("RECENT_BOOKS_MAX")
        if not value or not value.strip():
            return DEFAULT_MAX_RECENT_BOOKS
        try:
            max_books = int(value.strip())
        except ValueError:
            logger.warning("Invalid RECENT_BOOKS_MAX %r, using %d", value, DEFAULT_MAX_RECENT_BOOKS)
            return DEFAULT_MAX_RECENT_BOOKS
        if max_books <= 0:
            logger.warning("Invalid RECENT_BOOKS_MAX %r, using %d", value, DEFAULT_MAX_RECENT_BOOKS)
            return DEFAULT_MAX_RECENT_BOOKS
        return max_books

    def get_log_level(self) -> str:
        value = os.getenv("RECENT_BOOKS_LOG_LEVEL")
        return value.strip().upper() if value and value.strip() else DEFAULT_LOG_LEVEL

    def reload_env(self) -> None:
        """Reload environment variables from .env file."""
        env_path = self._project_root / ".env"
        load_dotenv(dotenv_path=env_path, override=True)
