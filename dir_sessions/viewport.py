"""Scrolling window over the displayed directory list."""

from dataclasses import dataclass

DEFAULT_RESERVED_ROWS = 4


@dataclass(frozen=True)
class Window:
    """Visible slice [start, start + count) of a list of `total` entries."""

    start: int
    count: int
    total: int
    max_rows: int

    @property
    def end(self) -> int:
        return self.start + self.count

    @property
    def remaining(self) -> int:
        """Entries below the window."""
        return max(0, self.total - self.end)

    @property
    def show_more(self) -> bool:
        return self.remaining > 0 and self.total > self.max_rows

    @property
    def padding(self) -> int:
        """Blank rows left over when the list is shorter than the window."""
        return max(0, self.max_rows - self.count)


def max_display_rows(rows: int, reserved_rows: int = DEFAULT_RESERVED_ROWS) -> int:
    return max(0, rows - reserved_rows)


def compute_window(cursor: int, total: int, max_rows: int) -> Window:
    """Place the cursor as close to the middle of the window as possible.

    The window never starts before 0 and never scrolls past the last full
    page.
    """
    half = max(0, max_rows - 1) // 2
    start = max(0, cursor - half)
    start = min(start, max(0, total - max_rows))
    count = min(max_rows, max(0, total - start))
    return Window(start=start, count=count, total=total, max_rows=max_rows)
