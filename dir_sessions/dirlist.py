"""Searchable, session-aware list of project directories."""

import logging
from collections.abc import Iterable, Mapping
from datetime import timedelta
from typing import Optional

from .formatting import find_duplicates, format_base_text, format_more_text, get_folder_name
from .models import HighlightSpan, LiveSession, StyledLine
from .search import FuzzyFilter, fuzzy_filter
from .status import DEFAULT_IDLE_LABEL, classify, sort_by_session, status_suffix
from .viewport import DEFAULT_RESERVED_ROWS, compute_window, max_display_rows

logger = logging.getLogger(__name__)

SELECT_TOP = "top"
SELECT_BOTTOM = "bottom"
SELECTION_POLICIES = (SELECT_TOP, SELECT_BOTTOM)


class DirList:
    """Known directories, the current search and the selection.

    Directories are kept unique and in descending order. The displayed
    order is the filtered list re-sorted by session status, which can change
    between renders without any change to the paths or the search term, so
    the selection follows the selected path rather than a row number.
    """

    def __init__(
        self,
        filter_func: FuzzyFilter = fuzzy_filter,
        default_selection: str = SELECT_TOP,
        reserved_rows: int = DEFAULT_RESERVED_ROWS,
        pad_short_lists: bool = False,
        idle_label: str = DEFAULT_IDLE_LABEL,
    ):
        if default_selection not in SELECTION_POLICIES:
            raise ValueError(f"Unknown selection policy: {default_selection!r}")
        self.filter_func = filter_func
        self.default_selection = default_selection
        self.reserved_rows = reserved_rows
        self.pad_short_lists = pad_short_lists
        self.idle_label = idle_label

        self._unique: set[str] = set()
        self._dirs: list[str] = []
        self.cursor = 0

        self.search_term = ""
        self._filtered: list[str] = []

        # Last displayed order and the path the cursor points at in it.
        self._displayed: Optional[list[str]] = None
        self._selected: Optional[str] = None

    @property
    def dirs(self) -> list[str]:
        return list(self._dirs)

    @property
    def filtered_dirs(self) -> list[str]:
        return list(self._filtered)

    def __len__(self) -> int:
        return len(self._dirs)

    def reset(self):
        """Forget every known directory."""
        self._unique.clear()
        self._dirs.clear()
        self._filtered.clear()
        self.cursor = 0
        self._displayed = None
        self._selected = None

    def update_dirs(self, dirs: Iterable[str]):
        """Add newly discovered directories, ignoring ones already known."""
        added = 0
        for path in dirs:
            if path not in self._unique:
                self._unique.add(path)
                self._dirs.append(path)
                added += 1
        self._dirs.sort(reverse=True)
        logger.debug(f"update_dirs: {added} new, {len(self._dirs)} total")
        self.filter()

    def set_search_term(self, search_term: str):
        self.search_term = search_term
        self.filter()

    def filter(self):
        """Recompute the filtered list and move the cursor to its default row."""
        self._filtered = self.filter_func(self._dirs, self.search_term)
        self.cursor = self._default_cursor()
        self._displayed = None
        self._selected = None
        logger.debug(f"filter {self.search_term!r}: {len(self._filtered)}/{len(self._dirs)} match")

    def _default_cursor(self) -> int:
        if self.default_selection == SELECT_BOTTOM:
            return max(0, len(self._filtered) - 1)
        return 0

    def _last_index(self) -> int:
        return max(0, len(self._filtered) - 1)

    def handle_up(self):
        if self.cursor > 0:
            self.cursor -= 1
            self._remember_cursor()

    def handle_down(self):
        if self.cursor < self._last_index():
            self.cursor += 1
            self._remember_cursor()

    def _remember_cursor(self):
        if self._displayed is not None and self.cursor < len(self._displayed):
            self._selected = self._displayed[self.cursor]

    def displayed(
        self,
        sessions: Mapping[str, LiveSession],
        resurrectable: Optional[Mapping[str, timedelta]] = None,
    ) -> list[str]:
        """The filtered list in display order for the given session tables."""
        return sort_by_session(self._filtered, sessions, resurrectable)

    def _sync(
        self,
        sessions: Mapping[str, LiveSession],
        resurrectable: Optional[Mapping[str, timedelta]] = None,
    ) -> list[str]:
        """Compute the displayed order and point the cursor back at the selected path."""
        displayed = self.displayed(sessions, resurrectable)
        if self._selected is not None and self._selected in displayed:
            self.cursor = displayed.index(self._selected)
        else:
            self.cursor = min(self.cursor, max(0, len(displayed) - 1))
        self._displayed = displayed
        self._selected = displayed[self.cursor] if self.cursor < len(displayed) else None
        return displayed

    def get_selected(
        self,
        sessions: Optional[Mapping[str, LiveSession]] = None,
        resurrectable: Optional[Mapping[str, timedelta]] = None,
    ) -> Optional[str]:
        """Path under the cursor, or None when nothing is displayed.

        Without session tables the last rendered order is used.
        """
        if sessions is not None:
            displayed = self._sync(sessions, resurrectable)
        elif self._displayed is not None:
            displayed = self._displayed
        else:
            displayed = self._filtered
        if 0 <= self.cursor < len(displayed):
            return displayed[self.cursor]
        return None

    def render(
        self,
        rows: int,
        cols: int,
        sessions: Mapping[str, LiveSession],
        resurrectable: Optional[Mapping[str, timedelta]] = None,
    ) -> list[StyledLine]:
        """Build the visible rows plus an optional "+N more" footer.

        `cols` is accepted for the caller's convenience; rows are not
        truncated here.
        """
        displayed = self._sync(sessions, resurrectable)
        window = compute_window(self.cursor, len(displayed), max_display_rows(rows, self.reserved_rows))
        duplicates = find_duplicates(displayed)

        lines: list[StyledLine] = []
        if self.pad_short_lists:
            lines.extend(StyledLine("") for _ in range(window.padding))

        for i in range(window.start, window.end):
            lines.append(self._build_row(displayed[i], i == self.cursor, duplicates, sessions, resurrectable))

        if window.show_more:
            more_text = format_more_text(window.remaining)
            lines.append(StyledLine(more_text, [HighlightSpan(0, len(more_text), "more")]))
        return lines

    def _build_row(
        self,
        path: str,
        is_selected: bool,
        duplicates: set[str],
        sessions: Mapping[str, LiveSession],
        resurrectable: Optional[Mapping[str, timedelta]],
    ) -> StyledLine:
        folder_name = get_folder_name(path)
        base = format_base_text(folder_name, path, duplicates)
        status = classify(folder_name, sessions, resurrectable)
        suffix, span = status_suffix(status, offset=len(base), idle_label=self.idle_label)
        text = base + suffix

        spans = [span] if span is not None else []
        if is_selected:
            spans.append(HighlightSpan(0, len(text), "selected"))
        return StyledLine(text, spans, selected=is_selected)
