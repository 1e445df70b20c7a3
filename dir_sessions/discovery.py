"""Find candidate project directories below configured roots."""

import logging
import os
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)


def scan_roots(roots: Iterable[str], max_depth: int = 1, show_hidden: bool = False) -> list[str]:
    """Absolute paths of directories up to `max_depth` levels below each root.

    Roots themselves are not included. Missing roots and unreadable
    directories are skipped.
    """
    found = []
    for root in roots:
        root_path = Path(root).expanduser()
        if not root_path.is_dir():
            logger.warning(f"Skipping missing root: {root_path}")
            continue
        found.extend(_scan(root_path.resolve(), max_depth, show_hidden))
    logger.debug(f"Scanned {len(found)} directories")
    return found


def _scan(root: Path, max_depth: int, show_hidden: bool) -> list[str]:
    result = []
    stack = [(root, 0)]
    while stack:
        path, depth = stack.pop()
        if depth >= max_depth:
            continue
        try:
            with os.scandir(path) as entries:
                children = [
                    e for e in entries
                    if e.is_dir(follow_symlinks=False) and (show_hidden or not e.name.startswith("."))
                ]
        except OSError as e:
            logger.debug(f"Cannot read {path}: {e}")
            continue
        for entry in children:
            child = Path(entry.path)
            result.append(str(child))
            stack.append((child, depth + 1))
    return result
