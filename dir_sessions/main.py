#!/usr/bin/env python3
"""dir-sessions - pick a project directory and see its session state.

Entry point for the CLI application.
"""

import argparse
import logging
import sys
from pathlib import Path

from .config import DEFAULT_LOG_PATH, ConfigError, PickerConfig, load_config

logger = logging.getLogger(__name__)


def setup_logging(log_file: Path | None, debug: bool = False):
    """Log to a file so output never lands on the terminal the TUI draws on."""
    path = log_file or DEFAULT_LOG_PATH
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        logging.basicConfig(
            filename=str(path),
            level=logging.DEBUG if debug else logging.INFO,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    except OSError as e:
        print(f"Logging disabled, cannot write {path}: {e}", file=sys.stderr)
        logging.getLogger().addHandler(logging.NullHandler())


def apply_args(config: PickerConfig, args) -> PickerConfig:
    """Command line values override the config file and environment."""
    if getattr(args, "roots", None):
        config.roots = args.roots
    if getattr(args, "source", None):
        config.session_source = args.source
    if getattr(args, "depth", None):
        config.max_depth = args.depth
    if getattr(args, "bottom", False):
        config.default_selection = "bottom"
    if getattr(args, "ranked", False):
        config.filter_name = "ranked"
    return config.validate()


def cmd_browse(args, config: PickerConfig):
    """Launch the TUI picker and print the chosen directory."""
    from .app import DirSessionsPicker

    app = DirSessionsPicker(config)
    result = app.run()

    if result and isinstance(result, str):
        print(result)
    else:
        sys.exit(1)


def cmd_list(args, config: PickerConfig):
    """Render the list once without the TUI."""
    from rich.console import Console

    from .app import build_dir_list
    from .cache import DirCache
    from .discovery import scan_roots
    from .models import SessionSnapshot
    from .providers import get_source
    from .ui import render_lines

    dir_list = build_dir_list(config)
    dir_list.update_dirs(DirCache().get() if args.cached else [])
    dir_list.update_dirs(scan_roots(config.roots, config.max_depth, config.show_hidden))
    if args.search:
        dir_list.set_search_term(args.search)

    source = get_source(config.session_source)
    snapshot = source.load_snapshot() if source else SessionSnapshot()

    console = Console()
    rows = args.rows or console.size.height
    lines = dir_list.render(rows, console.size.width, snapshot.live, snapshot.resurrectable)

    if args.plain:
        for line in lines:
            print(line.plain)
    else:
        console.print(render_lines(lines))


def cmd_sessions(args, config: PickerConfig):
    """Show the current session snapshot."""
    from .formatting import format_duration
    from .providers import get_source

    source = get_source(config.session_source)
    if source is None:
        print(f"Unknown session source: {config.session_source}")
        sys.exit(2)
    if not source.is_available():
        print(f"{source.display_name} is not installed.")
        return

    snapshot = source.load_snapshot()
    if not len(snapshot):
        print("No sessions found.")
        return

    print(f"{source.display_name} sessions:")
    for name, (is_current, users) in sorted(snapshot.live.items()):
        marker = "*" if is_current else " "
        print(f"  {marker} {name:<30} {users} users")
    for name, age in sorted(snapshot.resurrectable.items()):
        print(f"    {name:<30} exited {format_duration(age)}")


def cmd_sources(args, config: PickerConfig):
    """List session sources."""
    from .providers import get_all_sources

    print("Session sources:")
    for s in get_all_sources():
        status = "✓" if s.is_available() else "✗"
        active = " (active)" if s.name == config.session_source else ""
        print(f"  {status} {s.display_name} ({s.name}){active}")
        if args.status and s.is_available():
            print(f"      Sessions: {len(s.load_snapshot())}")


def cmd_cache(args, config: PickerConfig):
    """Manage the directory cache."""
    from .cache import DirCache

    cache = DirCache()
    if args.action == "clear":
        if cache.clear():
            print(f"Cleared directory cache: {cache.path}")
        else:
            print("No cache file found.")
    elif args.action == "info":
        if cache.path.exists():
            size = cache.path.stat().st_size
            print(f"Directory cache: {cache.path}")
            print(f"  Cached directories: {len(cache.get())}")
            print(f"  Size: {size / 1024:.1f} KB")
        else:
            print("Directory cache: not found")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Pick a project directory and see which ones have sessions",
        prog="dir-sessions",
    )
    parser.add_argument("--version", "-v", action="store_true", help="Show version")
    parser.add_argument("--config", "-c", type=Path, help="Path to config.json")
    parser.add_argument("--log-file", type=Path, help="Log file (default: ~/.cache/dir-sessions/dir-sessions.log)")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    def add_list_options(p):
        p.add_argument("roots", nargs="*", help="Directories to scan (default: from config)")
        p.add_argument("--source", "-s", help="Session source: zellij or tmux")
        p.add_argument("--depth", "-d", type=int, help="How many levels below each root to scan")
        p.add_argument("--bottom", action="store_true", help="Select the last entry after each search")
        p.add_argument("--ranked", action="store_true", help="Order matches by score instead of by path")

    browse_parser = subparsers.add_parser("browse", help="Launch the picker (default)")
    add_list_options(browse_parser)

    list_parser = subparsers.add_parser("list", help="Print the list once")
    add_list_options(list_parser)
    list_parser.add_argument("--search", "-q", help="Search term")
    list_parser.add_argument("--rows", "-r", type=int, help="Rows available (default: terminal height)")
    list_parser.add_argument("--plain", action="store_true", help="No colors")
    list_parser.add_argument("--cached", action="store_true", help="Include cached directories")

    sessions_parser = subparsers.add_parser("sessions", help="Show current sessions")
    sessions_parser.add_argument("--source", "-s", help="Session source: zellij or tmux")

    sources_parser = subparsers.add_parser("sources", help="List session sources")
    sources_parser.add_argument("--status", action="store_true", help="Show session counts")

    cache_parser = subparsers.add_parser("cache", help="Manage directory cache")
    cache_parser.add_argument("action", choices=["clear", "info"], help="Cache action")

    return parser


def main(argv=None):
    """Main entry point for dir-sessions CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        from . import __version__
        print(f"dir-sessions {__version__}")
        return

    setup_logging(args.log_file, args.debug)

    try:
        config = apply_args(load_config(args.config), args)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(2)

    if args.command == "list":
        cmd_list(args, config)
    elif args.command == "sessions":
        cmd_sessions(args, config)
    elif args.command == "sources":
        cmd_sources(args, config)
    elif args.command == "cache":
        cmd_cache(args, config)
    elif args.command == "browse":
        cmd_browse(args, config)
    else:
        browse_args = argparse.Namespace(roots=[], source=None, depth=None, bottom=False, ranked=False)
        cmd_browse(browse_args, apply_args(config, browse_args))


if __name__ == "__main__":
    main()
