"""UI components for the directory picker."""

from .widgets import (
    DirListView,
    build_line_text,
    render_lines,
)
from .styles import APP_CSS

__all__ = [
    "DirListView",
    "build_line_text",
    "render_lines",
    "APP_CSS",
]
