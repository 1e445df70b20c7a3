"""Text helpers for picker rows."""

from collections.abc import Iterable
from datetime import timedelta
from pathlib import PurePath
from typing import Union

# Left margin reserved for the marker column.
ROW_INDENT = "       "
ROW_MARKER = "> "


def get_folder_name(path: str) -> str:
    """Return the final component of a path, or "" when it has none."""
    name = PurePath(path).name
    if name == "..":
        return ""
    return name


def format_duration(duration: Union[timedelta, int, float]) -> str:
    """Format elapsed time as e.g. "1d 2h 3m ago", or "just now" under a minute."""
    if isinstance(duration, timedelta):
        total_seconds = int(duration.total_seconds())
    else:
        total_seconds = int(duration)
    total_seconds = max(0, total_seconds)

    days = total_seconds // 86400
    hours = (total_seconds % 86400) // 3600
    minutes = (total_seconds % 3600) // 60

    parts = []
    if days > 0:
        parts.append(f"{days}d")
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")

    if not parts:
        return "just now"
    return f"{' '.join(parts)} ago"


def find_duplicates(paths: Iterable[str]) -> set[str]:
    """Leaf names that occur more than once among `paths`."""
    seen = set()
    duplicates = set()
    for path in paths:
        name = get_folder_name(path)
        if name in seen:
            duplicates.add(name)
        else:
            seen.add(name)
    return duplicates


def format_base_text(folder_name: str, path: str, duplicates: set[str]) -> str:
    """Row text before the status suffix.

    The full path is appended in parentheses when another displayed entry
    shares the same leaf name.
    """
    if folder_name in duplicates:
        return f"{ROW_INDENT}{ROW_MARKER}{folder_name} ({path})"
    return f"{ROW_INDENT}{ROW_MARKER}{folder_name}"


def format_more_text(remaining: int) -> str:
    return f"{ROW_INDENT}+{remaining} more"


def truncate(text: str, max_len: int = 100) -> str:
    """Truncate text with ellipsis."""
    if max_len <= 3:
        return text[:max(0, max_len)]
    if len(text) <= max_len:
        return text
    return text[:max_len - 3] + "..."
