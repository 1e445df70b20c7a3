"""Base class for session sources."""

import logging
import shutil
import subprocess
from abc import ABC, abstractmethod

from ..models import SessionSnapshot

logger = logging.getLogger(__name__)

COMMAND_TIMEOUT = 5  # seconds

# name -> source class, filled in as subclasses are defined
_SOURCES: dict[str, type["SessionSource"]] = {}


class SessionSource(ABC):
    """Abstract base class for terminal multiplexer session sources.

    A source reports which sessions exist, keyed by session name. Sessions
    are matched to directories by the directory's leaf folder name.
    """

    name: str = ""  # unique identifier: "zellij", "tmux"
    display_name: str = ""
    executable: str = ""

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if cls.name:
            _SOURCES[cls.name] = cls

    def is_available(self) -> bool:
        """Check if the multiplexer binary is on PATH."""
        return bool(self.executable) and shutil.which(self.executable) is not None

    def run(self, *args: str) -> str | None:
        """Run the multiplexer with `args` and return stdout, or None on failure."""
        cmd = [self.executable, *args]
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=COMMAND_TIMEOUT,
            )
        except (OSError, subprocess.SubprocessError) as e:
            logger.warning(f"{' '.join(cmd)} failed: {e}")
            return None
        if result.returncode != 0:
            logger.debug(f"{' '.join(cmd)} exited {result.returncode}: {result.stderr.strip()}")
            return None
        return result.stdout

    def load_snapshot(self) -> SessionSnapshot:
        """Current sessions, or an empty snapshot if the source is unavailable."""
        if not self.is_available():
            return SessionSnapshot()
        return self.read_snapshot()

    @abstractmethod
    def read_snapshot(self) -> SessionSnapshot:
        """Query the multiplexer for its sessions."""
        ...


def get_source(name: str) -> SessionSource | None:
    """Instance of the source registered under `name`."""
    source_class = _SOURCES.get(name)
    return source_class() if source_class else None


def get_all_sources() -> list[SessionSource]:
    return [cls() for cls in _SOURCES.values()]


def get_available_sources() -> list[SessionSource]:
    """Sources whose multiplexer binary is installed."""
    return [s for s in get_all_sources() if s.is_available()]
