"""Storage primitives used by the persistence layer.

The persistence engine only needs a handful of file operations, so they sit
behind a small interface: ``LocalStorage`` talks to the real filesystem and
``InMemoryStorage`` keeps everything in a dict for isolated construction.
"""

import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Set


class Storage(ABC):
    """
    Abstract file storage interface.

    Methods raise OSError (or a subclass such as FileNotFoundError) on failure;
    callers decide how failures are reported.
    """

    @abstractmethod
    def exists(self, path: Path) -> bool:
        """Return True if a file or directory exists at path."""
        pass

    @abstractmethod
    def read_bytes(self, path: Path) -> bytes:
        """Read the whole file at path."""
        pass

    @abstractmethod
    def write_bytes(self, path: Path, data: bytes) -> None:
        """Replace the contents of the file at path."""
        pass

    @abstractmethod
    def rename(self, source: Path, target: Path) -> None:
        """Rename source to target, replacing target if present."""
        pass

    @abstractmethod
    def make_dirs(self, path: Path) -> None:
        """Create directory path and any missing parents."""
        pass


class LocalStorage(Storage):
    """Filesystem-backed storage. Writes are atomic (temp file + replace)."""

    def exists(self, path: Path) -> bool:
        return Path(path).exists()

    def read_bytes(self, path: Path) -> bytes:
        return Path(path).read_bytes()

    def write_bytes(self, path: Path, data: bytes) -> None:
        path = Path(path)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def rename(self, source: Path, target: Path) -> None:
        os.replace(source, target)

    def make_dirs(self, path: Path) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)


class InMemoryStorage(Storage):
    """
    Dict-backed storage.

    Directories are tracked implicitly: writing a file makes its parents
    exist. Set ``fail_writes`` to simulate a full or read-only medium.
    """

    def __init__(self) -> None:
        self.files: Dict[str, bytes] = {}
        self.directories: Set[str] = set()
        self.fail_writes = False
        self.write_count = 0

    def exists(self, path: Path) -> bool:
        key = self._key(path)
        return key in self.files or key in self.directories

    def read_bytes(self, path: Path) -> bytes:
        key = self._key(path)
        if key not in self.files:
            raise FileNotFoundError(key)
        return self.files[key]

    def write_bytes(self, path: Path, data: bytes) -> None:
        if self.fail_writes:
            raise OSError(f"Write refused: {path}")
        self.files[self._key(path)] = bytes(data)
        self._add_parents(Path(path))
        self.write_count += 1

    def rename(self, source: Path, target: Path) -> None:
        key = self._key(source)
        if key not in self.files:
            raise FileNotFoundError(key)
        self.files[self._key(target)] = self.files.pop(key)

    def make_dirs(self, path: Path) -> None:
        self.directories.add(self._key(path))
        self._add_parents(Path(path))

    def _add_parents(self, path: Path) -> None:
        for parent in path.parents:
            self.directories.add(self._key(parent))

    @staticmethod
    def _key(path: Path) -> str:
        return Path(path).as_posix()
