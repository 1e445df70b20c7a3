"""Session sources for zellij and tmux."""

from .base import SessionSource, get_all_sources, get_available_sources, get_source
from . import tmux, zellij  # noqa: F401  (importing registers the sources)

__all__ = [
    "SessionSource",
    "get_source",
    "get_all_sources",
    "get_available_sources",
]
