"""Tests for the picker application, driven through Textual's pilot."""

import asyncio
import json

import pytest

from dir_sessions.app import DirSessionsPicker
from dir_sessions.cache import DirCache
from dir_sessions.config import PickerConfig
from dir_sessions.models import SessionSnapshot
from dir_sessions.providers.base import SessionSource


class StubSource(SessionSource):
    """A source with no sessions that never shells out."""

    display_name = "Stub"

    def is_available(self) -> bool:
        return True

    def read_snapshot(self) -> SessionSnapshot:
        return SessionSnapshot()


@pytest.fixture
def root(tmp_path):
    root = tmp_path / "projects"
    for name in ["api", "qzone"]:
        (root / name).mkdir(parents=True)
    return root.resolve()


@pytest.fixture
def cache_path(tmp_path):
    DirCache.reset_instance()
    yield tmp_path / "dirs.json"
    DirCache.reset_instance()


def make_app(root, cache_path) -> DirSessionsPicker:
    config = PickerConfig(roots=[str(root)], refresh_interval=60)
    return DirSessionsPicker(config, source=StubSource(), cache=DirCache(cache_path))


async def run_keys(app: DirSessionsPicker, *keys: str):
    async with app.run_test() as pilot:
        await app.workers.wait_for_complete()
        await pilot.pause()
        for key in keys:
            await pilot.press(key)
        await pilot.pause()


class TestPickerKeys:
    """Tests for keyboard handling in the picker."""

    def test_enter_returns_selected_path(self, root, cache_path):
        app = make_app(root, cache_path)
        asyncio.run(run_keys(app, "down", "enter"))
        assert app.return_value == str(root / "qzone")

    def test_typing_filters_before_enter(self, root, cache_path):
        app = make_app(root, cache_path)
        asyncio.run(run_keys(app, "q", "z", "enter"))
        assert app.return_value == str(root / "qzone")

    def test_ctrl_c_quits_without_selection(self, root, cache_path):
        app = make_app(root, cache_path)
        exits = []
        original_exit = app.exit

        def record_exit(*args, **kwargs):
            exits.append(args)
            original_exit(*args, **kwargs)

        app.exit = record_exit
        asyncio.run(run_keys(app, "ctrl+c"))
        assert exits and exits[0] == ()
        assert app.return_value is None

    def test_escape_quits_without_selection(self, root, cache_path):
        app = make_app(root, cache_path)
        asyncio.run(run_keys(app, "escape"))
        assert app.return_value is None


class TestPickerScan:
    """Tests for merging the background scan with cached directories."""

    def test_scan_drops_stale_cached_dirs(self, root, cache_path):
        """Test a cached directory that no longer exists is gone after the scan."""
        cache_path.write_text(json.dumps([str(root / "deleted"), str(root / "api")]))
        app = make_app(root, cache_path)
        asyncio.run(run_keys(app))

        expected = [str(root / "qzone"), str(root / "api")]
        assert app.dir_list.dirs == expected
        assert sorted(json.loads(cache_path.read_text())) == sorted(expected)

    def test_scan_keeps_search_term(self, root, cache_path):
        app = make_app(root, cache_path)
        app.dir_list.set_search_term("qz")
        asyncio.run(run_keys(app))
        assert app.dir_list.filtered_dirs == [str(root / "qzone")]
