"""Cache of previously discovered directories."""

import json
import logging
import threading
from collections.abc import Iterable
from pathlib import Path
from typing import Optional

from .config import CACHE_DIR

logger = logging.getLogger(__name__)

DIR_CACHE_PATH = CACHE_DIR / "dirs.json"


class DirCache:
    """Known directories from earlier runs, so the list is not empty while scanning.

    One instance per process; stored as a JSON list of paths.
    """

    _instance = None
    _lock = threading.Lock()

    def __new__(cls, cache_path: Optional[Path] = None):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._cache_path = cache_path or DIR_CACHE_PATH
            cls._instance._dirs = []
            cls._instance._dirty = False
            cls._instance._load()
        return cls._instance

    @classmethod
    def reset_instance(cls):
        """Drop the shared instance (used when switching cache files)."""
        with cls._lock:
            cls._instance = None

    @property
    def path(self) -> Path:
        return self._cache_path

    def _load(self):
        """Load cache from disk."""
        if self._cache_path.exists():
            try:
                with open(self._cache_path) as f:
                    data = json.load(f)
                self._dirs = [d for d in data if isinstance(d, str)] if isinstance(data, list) else []
            except (json.JSONDecodeError, IOError) as e:
                logger.warning(f"Ignoring unreadable directory cache {self._cache_path}: {e}")
                self._dirs = []

    def get(self) -> list[str]:
        with self._lock:
            return list(self._dirs)

    def replace(self, dirs: Iterable[str]):
        """Replace the cached directories with the result of a fresh scan.

        Directories missing from the scan are dropped, so deleted or moved
        projects do not come back on the next run.
        """
        unique = list(dict.fromkeys(dirs))
        with self._lock:
            if unique != self._dirs:
                self._dirs = unique
                self._dirty = True

    def save(self):
        """Save cache to disk if dirty."""
        with self._lock:
            if not self._dirty:
                return
            try:
                self._cache_path.parent.mkdir(parents=True, exist_ok=True)
                with open(self._cache_path, "w") as f:
                    json.dump(self._dirs, f)
                self._dirty = False
            except IOError as e:
                logger.warning(f"Failed to save directory cache: {e}")

    def clear(self) -> bool:
        """Forget all directories and delete the cache file. Returns True if a file was removed."""
        with self._lock:
            self._dirs = []
            self._dirty = False
            if self._cache_path.exists():
                self._cache_path.unlink()
                return True
            return False
