"""CSS styles and row styles for the directory picker."""

APP_CSS = """
Screen {
    layout: vertical;
}

#dir-list {
    height: 1fr;
    width: 100%;
    padding: 0 1;
}

#status-bar {
    height: 1;
    padding: 0 1;
    background: $surface;
    color: $text-muted;
}

Footer {
    background: $surface;
}
"""

# Rich styles for the semantic highlight names produced by DirList.render
ROW_STYLES = {
    "users": "bold yellow",
    "idle": "cyan",
    "exited": "magenta",
    "more": "dim green",
    "selected": "bold",
}

SELECTED_ROW_STYLE = "reverse"
HEADER_STYLE = "bold cyan"
PROMPT_STYLE = "bold green"
