"""
Tests for autoreadme.discovery module.

Tests path enumeration and ignore patterns.
"""

import os
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from autoreadme.discovery import (
    DEFAULT_IGNORE,
    DEFAULT_STRUCTURE_IGNORE,
    DiscoveryResult,
    PathDiscovery,
    discover_paths,
)


@pytest.fixture
def tmppath():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


class TestDefaultIgnore:
    """Tests for the default ignore sets."""

    def test_common_dirs_ignored(self):
        """Dependency and build directories are in both sets."""
        for pattern in ("node_modules/**", ".git/**", "dist/**", "build/**"):
            assert pattern in DEFAULT_IGNORE
            assert pattern in DEFAULT_STRUCTURE_IGNORE

    def test_structure_ignores_os_files(self):
        assert ".DS_Store" in DEFAULT_STRUCTURE_IGNORE
        assert "Thumbs.db" in DEFAULT_STRUCTURE_IGNORE
        assert "*.log" in DEFAULT_STRUCTURE_IGNORE


class TestPathDiscovery:
    """Tests for the PathDiscovery class."""

    def test_nonexistent_root(self):
        """A missing root raises ValueError."""
        with pytest.raises(ValueError, match="does not exist"):
            PathDiscovery("/nonexistent/path/for/tests")

    def test_root_is_file(self, tmppath):
        """A file root raises ValueError."""
        target = tmppath / "file.txt"
        target.write_text("x")

        with pytest.raises(ValueError, match="not a directory"):
            PathDiscovery(target)

    def test_empty_directory(self, tmppath):
        result = discover_paths(tmppath)

        assert isinstance(result, DiscoveryResult)
        assert result.paths == []
        assert len(result) == 0

    def test_files_and_directories(self, tmppath):
        """Directories and files are both reported as relative POSIX paths."""
        (tmppath / "src" / "utils").mkdir(parents=True)
        (tmppath / "src" / "index.ts").write_text("")
        (tmppath / "src" / "utils" / "file.ts").write_text("")
        (tmppath / "README.md").write_text("")

        result = discover_paths(tmppath)

        assert set(result.paths) == {
            "src",
            "src/utils",
            "src/index.ts",
            "src/utils/file.ts",
            "README.md",
        }
        assert result.files() == [p for p in result.paths if "." in p]

    def test_ignored_directory_is_pruned(self, tmppath):
        """Everything below an ignored directory is skipped, at any depth."""
        (tmppath / "node_modules" / "pkg").mkdir(parents=True)
        (tmppath / "node_modules" / "pkg" / "index.js").write_text("")
        (tmppath / "app" / "node_modules").mkdir(parents=True)
        (tmppath / "app" / "main.js").write_text("")

        result = discover_paths(tmppath, ignore=DEFAULT_IGNORE)

        assert set(result.paths) == {"app", "app/main.js"}
        assert ("node_modules", "node_modules/**") in result.skipped
        assert ("app/node_modules", "node_modules/**") in result.skipped

    def test_directory_pattern_does_not_match_files(self, tmppath):
        """A 'build/**' pattern leaves a file named 'build' alone."""
        (tmppath / "build").write_text("#!/bin/sh")

        result = discover_paths(tmppath, ignore=("build/**",))

        assert result.paths == ["build"]

    def test_name_patterns(self, tmppath):
        """Patterns without a slash match base names anywhere."""
        (tmppath / "logs").mkdir()
        (tmppath / "debug.log").write_text("")
        (tmppath / "logs" / "app.log").write_text("")
        (tmppath / "logs" / "keep.txt").write_text("")
        (tmppath / ".DS_Store").write_text("")

        result = discover_paths(tmppath, ignore=DEFAULT_STRUCTURE_IGNORE)

        assert set(result.paths) == {"logs", "logs/keep.txt"}

    def test_path_patterns(self, tmppath):
        """Patterns with a slash match the full relative path."""
        (tmppath / "docs").mkdir()
        (tmppath / "docs" / "draft.tmp").write_text("")
        (tmppath / "draft.tmp").write_text("")

        result = discover_paths(tmppath, ignore=("docs/*.tmp",))

        assert set(result.paths) == {"docs", "draft.tmp"}

    def test_hidden_entries(self, tmppath):
        """Hidden files and directories can be excluded."""
        (tmppath / ".github" / "workflows").mkdir(parents=True)
        (tmppath / ".env").write_text("")
        (tmppath / "main.py").write_text("")

        with_hidden = discover_paths(tmppath, ignore=())
        without_hidden = discover_paths(tmppath, ignore=(), include_hidden=False)

        assert ".env" in with_hidden.paths
        assert ".github/workflows" in with_hidden.paths
        assert without_hidden.paths == ["main.py"]

    def test_extensions_return_only_files(self, tmppath):
        """Filtering by extension drops directories and other files."""
        (tmppath / "pages" / "api").mkdir(parents=True)
        (tmppath / "pages" / "api" / "users.ts").write_text("")
        (tmppath / "pages" / "index.jsx").write_text("")
        (tmppath / "style.css").write_text("")

        result = discover_paths(tmppath, extensions=(".ts", ".jsx"))

        assert set(result.paths) == {"pages/api/users.ts", "pages/index.jsx"}

    def test_directories_can_be_excluded(self, tmppath):
        (tmppath / "src").mkdir()
        (tmppath / "src" / "a.py").write_text("")

        result = discover_paths(tmppath, include_dirs=False)

        assert result.paths == ["src/a.py"]

    def test_order_is_stable(self, tmppath):
        """Two walks over the same tree give the same order."""
        for name in ("b", "a", "c"):
            (tmppath / name).mkdir()
            (tmppath / name / "x.txt").write_text("")

        assert discover_paths(tmppath).paths == discover_paths(tmppath).paths

    def test_anchored_patterns(self, tmppath):
        """A leading slash matches only at the project root."""
        (tmppath / "docs").mkdir()
        (tmppath / "README.md").write_text("")
        (tmppath / "docs" / "README.md").write_text("")

        result = discover_paths(tmppath, ignore=("/README.md",), include_dirs=False)

        assert result.paths == ["docs/README.md"]
        assert ("README.md", "/README.md") in result.skipped

    def test_anchored_directory_pattern(self, tmppath):
        (tmppath / "out").mkdir()
        (tmppath / "out" / "a.txt").write_text("")
        (tmppath / "src" / "out").mkdir(parents=True)
        (tmppath / "src" / "out" / "b.txt").write_text("")

        result = discover_paths(tmppath, ignore=("/out/**",), include_dirs=False)

        assert result.paths == ["src/out/b.txt"]

    def test_unreadable_directory_is_a_warning(self, tmppath):
        """Walk errors are collected as warnings instead of raised."""
        denied = str(tmppath / "secret")

        def walk_with_error(top, onerror=None):
            onerror(PermissionError(13, "Permission denied", denied))
            yield str(top), [], ["main.py"]

        with patch("autoreadme.discovery.os.walk", side_effect=walk_with_error):
            result = discover_paths(tmppath)

        assert result.paths == ["main.py"]
        assert result.warnings == [f"Could not read directory: {denied}"]

    @pytest.mark.skipif(
        not hasattr(os, "geteuid") or os.geteuid() == 0,
        reason="permission bits are not enforced for root",
    )
    def test_unreadable_directory_on_disk(self, tmppath):
        locked = tmppath / "locked"
        locked.mkdir()
        (locked / "hidden.txt").write_text("")
        (tmppath / "main.py").write_text("")
        locked.chmod(0)
        try:
            result = discover_paths(tmppath)
        finally:
            locked.chmod(0o755)

        assert "locked/hidden.txt" not in result.paths
        assert "main.py" in result.paths
        assert any("locked" in warning for warning in result.warnings)

    def test_symlinked_directory_not_followed(self, tmppath):
        """A symlinked directory is listed, its contents are not."""
        outside = tmppath / "outside"
        outside.mkdir()
        (outside / "inner.txt").write_text("")
        project = tmppath / "project"
        project.mkdir()
        (project / "main.py").write_text("")
        try:
            (project / "link").symlink_to(outside, target_is_directory=True)
        except (OSError, NotImplementedError):
            pytest.skip("symlinks are not supported here")

        result = discover_paths(project, ignore=())

        assert "link" in result.paths
        assert "link/inner.txt" not in result.paths
        assert "main.py" in result.paths
