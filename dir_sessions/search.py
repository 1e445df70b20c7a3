"""Fuzzy filtering of directory paths.

Filters are plain callables `(paths, term) -> list[str]` registered by name.
Every filter returns a subset of `paths` and is deterministic for a given
input; they differ only in how matches are ordered.
"""

from collections.abc import Callable, Sequence
from pathlib import PurePath
from typing import Optional

FuzzyFilter = Callable[[Sequence[str], str], list[str]]

DEFAULT_FILTER = "subsequence"

_FILTERS: dict[str, FuzzyFilter] = {}


def register_filter(name: str) -> Callable[[FuzzyFilter], FuzzyFilter]:
    """Decorator to register a filter function under `name`."""

    def decorator(func: FuzzyFilter) -> FuzzyFilter:
        _FILTERS[name] = func
        return func

    return decorator


def get_filter(name: str) -> FuzzyFilter | None:
    return _FILTERS.get(name)


def available_filters() -> list[str]:
    return sorted(_FILTERS)


def _subsequence_positions(query: str, target: str) -> Optional[list[int]]:
    """Indices in target where query chars match in order, or None."""
    positions = []
    idx = 0
    for char in query:
        pos = target.find(char, idx)
        if pos == -1:
            return None
        positions.append(pos)
        idx = pos + 1
    return positions


def fuzzy_score(term: str, path: str) -> int:
    """Score how well `term` matches `path`. 0 means no match.

    Every whitespace separated word of the term must appear, case-insensitive,
    as a subsequence of the path.

    Scoring per word:
    - Leaf name equals the word: +1000
    - Leaf name starts with the word: +100
    - Leaf name contains the word: +50
    - Path contains the word: +20
    - Consecutive matched characters: +10 each
    - Any other matched character: +1 each
    """
    words = term.lower().split()
    if not words:
        return 1

    text = path.lower()
    leaf = PurePath(text).name
    score = 0
    for word in words:
        positions = _subsequence_positions(word, text)
        if positions is None:
            return 0
        if leaf == word:
            score += 1000
        elif leaf.startswith(word):
            score += 100
        elif word in leaf:
            score += 50
        if word in text:
            score += 20
        for prev, cur in zip(positions, positions[1:]):
            score += 10 if cur == prev + 1 else 1
        score += 1
    return score


@register_filter("subsequence")
def subsequence_filter(paths: Sequence[str], term: str) -> list[str]:
    """Keep matching paths in their input order."""
    if not term.strip():
        return list(paths)
    return [p for p in paths if fuzzy_score(term, p) > 0]


@register_filter("ranked")
def ranked_filter(paths: Sequence[str], term: str) -> list[str]:
    """Matching paths, best score first; ties keep their input order."""
    if not term.strip():
        return list(paths)
    scored = [(fuzzy_score(term, p), i, p) for i, p in enumerate(paths)]
    scored = [s for s in scored if s[0] > 0]
    scored.sort(key=lambda s: (-s[0], s[1]))
    return [p for _, _, p in scored]


def fuzzy_filter(paths: Sequence[str], term: str) -> list[str]:
    """Filter with the default strategy."""
    return _FILTERS[DEFAULT_FILTER](paths, term)
