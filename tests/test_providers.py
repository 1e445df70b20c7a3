"""Tests for session sources."""

import shutil
import subprocess
from datetime import timedelta

import pytest

from dir_sessions.models import LiveSession
from dir_sessions.providers import get_all_sources, get_available_sources, get_source
from dir_sessions.providers import tmux as tmux_module
from dir_sessions.providers import zellij as zellij_module
from dir_sessions.providers.tmux import TmuxSource
from dir_sessions.providers.zellij import ZellijSource, parse_age


ZELLIJ_OUTPUT = """\
alpha [Created 2h 3m 4s ago] (current)
beta [Created 10s ago]
gamma [Created 1day 2h ago] (EXITED - attach to resurrect)
"""


def fake_run(stdout: str = "", returncode: int = 0):
    def run(cmd, **kwargs):
        return subprocess.CompletedProcess(cmd, returncode, stdout=stdout, stderr="")
    return run


class TestRegistry:
    """Tests for the session source registry."""

    def test_get_source(self):
        assert isinstance(get_source("zellij"), ZellijSource)
        assert isinstance(get_source("tmux"), TmuxSource)

    def test_unknown_source(self):
        assert get_source("screen") is None

    def test_all_sources(self):
        names = {s.name for s in get_all_sources()}
        assert names == {"zellij", "tmux"}

    def test_unnamed_subclass_is_not_registered(self):
        """Test only sources with a name are listed."""
        class Unnamed(ZellijSource):
            name = ""

        assert Unnamed not in {type(s) for s in get_all_sources()}
        assert {s.name for s in get_all_sources()} == {"zellij", "tmux"}

    def test_get_available_sources(self, monkeypatch):
        monkeypatch.setattr(shutil, "which", lambda name: "/usr/bin/tmux" if name == "tmux" else None)
        assert [s.name for s in get_available_sources()] == ["tmux"]


class TestZellijSource:
    """Tests for the zellij session source."""

    def test_parse_age(self):
        assert parse_age("2h 3m 4s") == timedelta(hours=2, minutes=3, seconds=4)
        assert parse_age("3days 4h") == timedelta(days=3, hours=4)
        assert parse_age("1day 250ms") == timedelta(days=1)
        assert parse_age("") == timedelta(0)

    def test_parse_list_sessions(self):
        snapshot = zellij_module.parse_list_sessions(ZELLIJ_OUTPUT)
        assert snapshot.live == {
            "alpha": LiveSession(is_current=True, connected_users=1),
            "beta": LiveSession(is_current=False, connected_users=0),
        }
        assert snapshot.resurrectable == {"gamma": timedelta(days=1, hours=2)}
        assert len(snapshot) == 3

    def test_read_snapshot(self, monkeypatch):
        monkeypatch.setattr(shutil, "which", lambda name: f"/usr/bin/{name}")
        monkeypatch.setattr(subprocess, "run", fake_run(ZELLIJ_OUTPUT))
        snapshot = ZellijSource().load_snapshot()
        assert set(snapshot.live) == {"alpha", "beta"}

    def test_not_installed(self, monkeypatch):
        """Test a missing binary gives an empty snapshot."""
        monkeypatch.setattr(shutil, "which", lambda name: None)
        source = ZellijSource()
        assert not source.is_available()
        assert len(source.load_snapshot()) == 0

    def test_command_failure(self, monkeypatch):
        """Test a failing command gives an empty snapshot."""
        def boom(cmd, **kwargs):
            raise OSError("no such file")

        monkeypatch.setattr(shutil, "which", lambda name: f"/usr/bin/{name}")
        monkeypatch.setattr(subprocess, "run", boom)
        assert len(ZellijSource().load_snapshot()) == 0

    def test_nonzero_exit(self, monkeypatch):
        monkeypatch.setattr(shutil, "which", lambda name: f"/usr/bin/{name}")
        monkeypatch.setattr(subprocess, "run", fake_run("", returncode=1))
        assert ZellijSource().run("list-sessions") is None


class TestTmuxSource:
    """Tests for the tmux session source."""

    def test_parse_list_sessions(self):
        snapshot = tmux_module.parse_list_sessions("main\t2\nwork\t0\n\n", current="main")
        assert snapshot.live == {
            "main": LiveSession(True, 2),
            "work": LiveSession(False, 0),
        }
        assert snapshot.resurrectable == {}

    def test_bad_attached_count(self):
        snapshot = tmux_module.parse_list_sessions("odd\tmany\n")
        assert snapshot.live["odd"] == LiveSession(False, 0)

    def test_current_session_outside_tmux(self, monkeypatch):
        monkeypatch.delenv("TMUX", raising=False)
        assert TmuxSource().current_session() is None

    @pytest.mark.parametrize("attached, expected", [("1", 1), ("3", 3)])
    def test_read_snapshot(self, monkeypatch, attached, expected):
        monkeypatch.delenv("TMUX", raising=False)
        monkeypatch.setattr(shutil, "which", lambda name: f"/usr/bin/{name}")
        monkeypatch.setattr(subprocess, "run", fake_run(f"dev\t{attached}\n"))
        snapshot = TmuxSource().load_snapshot()
        assert snapshot.live == {"dev": LiveSession(False, expected)}
