"""UI widgets for the directory picker TUI."""

from collections.abc import Mapping
from datetime import timedelta
from typing import Optional

from rich.text import Text
from textual.widgets import Static

from ..dirlist import DirList
from ..formatting import ROW_INDENT, truncate
from ..models import LiveSession, StyledLine
from .styles import HEADER_STYLE, PROMPT_STYLE, ROW_STYLES, SELECTED_ROW_STYLE


def build_line_text(line: StyledLine) -> Text:
    """Convert a rendered row into Rich text."""
    text = Text(line.text, no_wrap=True, overflow="ellipsis")
    for span in line.spans:
        style = ROW_STYLES.get(span.style)
        if style:
            text.stylize(style, span.start, span.end)
    if line.selected:
        text.stylize(SELECTED_ROW_STYLE, 0, len(line.text))
    return text


def build_header(title: str, search_term: str, width: int) -> list[Text]:
    """Title line, search prompt and spacer."""
    header = Text(truncate(f"{ROW_INDENT}{title}", max(1, width)), style=HEADER_STYLE)
    prompt = Text(ROW_INDENT)
    prompt.append("Search: ", style=PROMPT_STYLE)
    prompt.append(search_term)
    prompt.append("_", style="blink")
    return [header, prompt, Text("")]


def render_lines(lines: list[StyledLine]) -> Text:
    """Join rendered rows into one block of Rich text."""
    return Text("\n").join(build_line_text(line) for line in lines)


class DirListView(Static):
    """Whole picker pane: header, visible rows and the "+N more" footer."""

    def __init__(self, id: Optional[str] = None):
        super().__init__("", id=id)
        self.heading = "Select a directory"

    def show(
        self,
        dir_list: DirList,
        sessions: Mapping[str, LiveSession],
        resurrectable: Optional[Mapping[str, timedelta]] = None,
    ) -> list[StyledLine]:
        """Redraw from the current list state and session tables."""
        rows = self.size.height or 24
        cols = self.size.width or 80
        lines = dir_list.render(rows, cols, sessions, resurrectable)

        body = Text("\n").join(
            build_header(self.heading, dir_list.search_term, cols)
            + [build_line_text(line) for line in lines]
        )
        self.update(body)
        return lines
