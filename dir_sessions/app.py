"""Directory picker TUI application."""

import logging
from typing import Optional

from rich.text import Text
from textual import events, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Static

from .cache import DirCache
from .config import PickerConfig
from .dirlist import DirList
from .discovery import scan_roots
from .models import SessionSnapshot
from .providers import get_source
from .providers.base import SessionSource
from .search import get_filter
from .ui import APP_CSS, DirListView

logger = logging.getLogger(__name__)


def build_dir_list(config: PickerConfig) -> DirList:
    """A DirList set up from picker configuration."""
    return DirList(
        filter_func=get_filter(config.filter_name),
        default_selection=config.default_selection,
        reserved_rows=config.reserved_rows,
        pad_short_lists=config.pad_short_lists,
        idle_label=config.idle_label,
    )


class DirSessionsPicker(App):
    """Pick a project directory, showing the session state of each one.

    Exits with the selected path, or None when cancelled.
    """

    CSS = APP_CSS

    BINDINGS = [
        Binding("escape", "quit", "Quit"),
        Binding("ctrl+c", "quit", "Quit", show=False, priority=True),
        Binding("enter", "select", "Open", priority=True),
        Binding("up", "cursor_up", "Up", show=False, priority=True),
        Binding("down", "cursor_down", "Down", show=False, priority=True),
        Binding("ctrl+p", "cursor_up", "Up", show=False, priority=True),
        Binding("ctrl+n", "cursor_down", "Down", show=False, priority=True),
        Binding("backspace", "delete_char", "Delete", show=False, priority=True),
        Binding("ctrl+u", "clear_search", "Clear search"),
    ]

    def __init__(
        self,
        config: PickerConfig,
        source: Optional[SessionSource] = None,
        cache: Optional[DirCache] = None,
    ):
        super().__init__()
        self.config = config
        self.source = source if source is not None else get_source(config.session_source)
        self.cache = cache if cache is not None else DirCache()
        self.dir_list = build_dir_list(config)
        self.snapshot = SessionSnapshot()
        self._scanning = False

    def compose(self) -> ComposeResult:
        yield DirListView(id="dir-list")
        yield Static("", id="status-bar")
        yield Footer()

    def on_mount(self):
        """Show cached directories, then start scanning and polling sessions."""
        self.title = "dir-sessions"

        cached = self.cache.get()
        if cached:
            self.dir_list.update_dirs(cached)
        self._redraw()

        self._scanning = True
        self._scan_background()
        self._refresh_sessions()
        self.set_interval(self.config.refresh_interval, self._refresh_sessions)

    @work(thread=True, exclusive=True, group="scan")
    def _scan_background(self):
        dirs = scan_roots(self.config.roots, self.config.max_depth, self.config.show_hidden)
        self.call_from_thread(self._on_dirs_found, dirs)

    def _on_dirs_found(self, dirs: list[str]):
        self._scanning = False
        # Cached entries the scan no longer finds must go, and DirList only grows.
        self.dir_list.reset()
        self.dir_list.update_dirs(dirs)
        self.cache.replace(dirs)
        self.cache.save()
        self._redraw()

    @work(thread=True, exclusive=True, group="sessions")
    def _refresh_sessions(self):
        if self.source is None:
            return
        snapshot = self.source.load_snapshot()
        self.call_from_thread(self._on_snapshot, snapshot)

    def _on_snapshot(self, snapshot: SessionSnapshot):
        self.snapshot = snapshot
        self._redraw()

    def _redraw(self):
        view = self.query_one("#dir-list", DirListView)
        view.show(self.dir_list, self.snapshot.live, self.snapshot.resurrectable)
        self._update_status_bar()

    def _update_status_bar(self):
        text = Text()
        shown = len(self.dir_list.filtered_dirs)
        text.append(f"{shown}/{len(self.dir_list)} dirs", style="bold")
        if self.source is not None:
            text.append(f" | {self.source.display_name}: {len(self.snapshot)} sessions", style="dim")
        if self._scanning:
            text.append(" | scanning...", style="yellow")
        self.query_one("#status-bar", Static).update(text)

    def on_resize(self, event: events.Resize) -> None:
        self._redraw()

    def on_key(self, event: events.Key) -> None:
        """Printable keys edit the search term."""
        if event.is_printable and event.character:
            self.dir_list.set_search_term(self.dir_list.search_term + event.character)
            self._redraw()
            event.stop()

    def action_delete_char(self):
        if self.dir_list.search_term:
            self.dir_list.set_search_term(self.dir_list.search_term[:-1])
            self._redraw()

    def action_clear_search(self):
        self.dir_list.set_search_term("")
        self._redraw()

    def action_cursor_up(self):
        self.dir_list.handle_up()
        self._redraw()

    def action_cursor_down(self):
        self.dir_list.handle_down()
        self._redraw()

    def action_select(self):
        path = self.dir_list.get_selected(self.snapshot.live, self.snapshot.resurrectable)
        if path is None:
            return
        logger.info(f"Selected {path}")
        self.exit(path)
