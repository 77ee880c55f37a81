"""Tests for xcurlab.io module."""

import logging

import pytest

from xcurlab.io import atomic_write, discover_cursor_files, setup_logging


class TestDiscoverCursorFiles:
    """Tests for discover_cursor_files function."""

    def test_default_pattern_and_ignores(self, cursor_dir):
        found = discover_cursor_files(root=cursor_dir)
        assert [p.name for p in found] == ["broken", "left_ptr", "wait"]

    def test_recurses(self, cursor_dir):
        nested = cursor_dir / "cursor" / "theme" / "cursors"
        nested.mkdir(parents=True)
        (nested / "hand2").write_bytes(b"x")

        found = discover_cursor_files(root=cursor_dir)
        assert cursor_dir / "cursor" / "theme" / "cursors" / "hand2" in found
        assert all(p.is_file() for p in found)

    def test_custom_ignore(self, cursor_dir):
        found = discover_cursor_files(
            "cursor/*", ["cursor/broken", "**/*.theme", "**/*.png"], root=cursor_dir
        )
        assert [p.name for p in found] == ["left_ptr", "wait"]

    def test_root_level_ignore(self, tmp_path):
        (tmp_path / "a.png").write_bytes(b"x")
        (tmp_path / "arrow").write_bytes(b"x")
        found = discover_cursor_files("*", ["**/*.png"], root=tmp_path)
        assert [p.name for p in found] == ["arrow"]

    def test_node_modules_ignored(self, tmp_path):
        (tmp_path / "node_modules" / "pkg").mkdir(parents=True)
        (tmp_path / "node_modules" / "pkg" / "index").write_bytes(b"x")
        (tmp_path / "left_ptr").write_bytes(b"x")

        found = discover_cursor_files("**/*", None, root=tmp_path)
        assert [p.name for p in found] == ["left_ptr"]

    def test_no_matches(self, tmp_path):
        assert discover_cursor_files(root=tmp_path) == []


class TestAtomicWrite:
    """Tests for atomic_write context manager."""

    def test_binary_write(self, tmp_path):
        target = tmp_path / "out.bin"
        with atomic_write(target, "wb") as f:
            f.write(b"\x00\x01")
        assert target.read_bytes() == b"\x00\x01"

    def test_failure_leaves_nothing_behind(self, tmp_path):
        target = tmp_path / "out.txt"
        with pytest.raises(RuntimeError):
            with atomic_write(target) as f:
                f.write("partial")
                raise RuntimeError("boom")
        assert list(tmp_path.iterdir()) == []


def test_setup_logging_creates_log_file(tmp_path):
    log_dir = tmp_path / "logs"
    logger = setup_logging(log_dir, "DEBUG")

    assert logger.name == "xcurlab"
    assert logging.getLogger().level == logging.DEBUG
    assert len(list(log_dir.glob("xcurlab_*.log"))) == 1
