"""Unit tests for SettingsManager."""

import os
import tempfile
from pathlib import Path

import pytest

from recent_books.services import SettingsManager

SETTING_KEYS = ("RECENT_BOOKS_DATA_DIR", "RECENT_BOOKS_MAX", "RECENT_BOOKS_LOG_LEVEL")


@pytest.fixture
def temp_env_dir():
    """Provide a temporary directory for .env files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def clean_env():
    """Remove recent books settings from the environment around each test."""
    old_values = {key: os.environ.pop(key, None) for key in SETTING_KEYS}
    yield
    for key, value in old_values.items():
        if value is not None:
            os.environ[key] = value
        else:
            os.environ.pop(key, None)


class TestDataDir:
    def test_defaults_to_home_directory(self, temp_env_dir, clean_env):
        settings = SettingsManager(project_root=temp_env_dir)
        assert settings.get_data_dir() == Path.home() / ".recent_books"

    def test_reads_value_from_env_file(self, temp_env_dir, clean_env):
        (temp_env_dir / ".env").write_text(f"RECENT_BOOKS_DATA_DIR={temp_env_dir / 'data'}\n")

        settings = SettingsManager(project_root=temp_env_dir)
        assert settings.get_data_dir() == temp_env_dir / "data"

    def test_whitespace_only_value_uses_default(self, temp_env_dir, clean_env):
        os.environ["RECENT_BOOKS_DATA_DIR"] = "   "

        settings = SettingsManager(project_root=temp_env_dir)
        assert settings.get_data_dir() == Path.home() / ".recent_books"


class TestMaxRecentBooks:
    def test_default_is_ten(self, temp_env_dir, clean_env):
        assert SettingsManager(project_root=temp_env_dir).get_max_recent_books() == 10

    def test_reads_value(self, temp_env_dir, clean_env):
        (temp_env_dir / ".env").write_text("RECENT_BOOKS_MAX=25\n")
        assert SettingsManager(project_root=temp_env_dir).get_max_recent_books() == 25

    @pytest.mark.parametrize("value", ["abc", "0", "-4"])
    def test_invalid_values_fall_back_to_default(self, temp_env_dir, clean_env, value):
        (temp_env_dir / ".env").write_text(f"RECENT_BOOKS_MAX={value}\n")
        assert SettingsManager(project_root=temp_env_dir).get_max_recent_books() == 10


class TestLogLevelAndReload:
    def test_log_level_default_and_normalized(self, temp_env_dir, clean_env):
        settings = SettingsManager(project_root=temp_env_dir)
        assert settings.get_log_level() == "INFO"

        os.environ["RECENT_BOOKS_LOG_LEVEL"] = " debug "
        assert settings.get_log_level() == "DEBUG"

    def test_reload_env_picks_up_changes(self, temp_env_dir, clean_env):
        env_file = temp_env_dir / ".env"
        env_file.write_text("RECENT_BOOKS_MAX=5\n")
        settings = SettingsManager(project_root=temp_env_dir)
        assert settings.get_max_recent_books() == 5

        env_file.write_text("RECENT_BOOKS_MAX=7\n")
        settings.reload_env()
        assert settings.get_max_recent_books() == 7
