"""Tests for directory discovery."""

import pytest

from dir_sessions.discovery import scan_roots


@pytest.fixture
def root(tmp_path):
    for name in ["api", "web", ".hidden", "api/nested", "api/nested/deeper"]:
        (tmp_path / name).mkdir()
    (tmp_path / "notes.txt").write_text("not a directory")
    return tmp_path.resolve()


class TestScanRoots:
    """Tests for scanning project roots."""

    def test_immediate_children(self, root):
        assert sorted(scan_roots([str(root)])) == [str(root / "api"), str(root / "web")]

    def test_hidden(self, root):
        found = scan_roots([str(root)], show_hidden=True)
        assert str(root / ".hidden") in found

    def test_depth(self, root):
        found = set(scan_roots([str(root)], max_depth=2))
        assert str(root / "api" / "nested") in found
        assert str(root / "api" / "nested" / "deeper") not in found

    def test_missing_root_skipped(self, root, tmp_path):
        found = scan_roots([str(tmp_path / "missing"), str(root)])
        assert len(found) == 2

    def test_no_roots(self):
        assert scan_roots([]) == []
