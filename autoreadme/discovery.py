"""
autoreadme Path Discovery Module

This module enumerates the paths of a project directory while respecting
glob-style ignore patterns. Every generator (folder tree, features, routes,
screenshots, checksum) asks this module for its input paths.

Key Responsibilities:
    1. Walk the directory tree starting from a root path
    2. Prune ignored directories so their contents are never visited
    3. Optionally keep directories, hidden entries, or only some extensions
    4. Return project-relative POSIX paths in a stable order

Pattern Semantics:
    - "name/**" ignores the directory "name" and everything below it
    - Patterns without a "/" match the entry's base name at any depth
      ("*.log", ".DS_Store", "node_modules/**")
    - Patterns with a "/" match the full relative path ("docs/*.tmp")
    - A leading "/" anchors a pattern to the root ("/README.md" matches only
      the top-level README, not "docs/README.md")

Limitations:
    - Negation patterns ("!keep.log") are not supported
    - Symlinked directories are listed but never followed, to avoid cycles
"""

import fnmatch
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

logger = logging.getLogger(__name__)


# Ignore set shared by the source scanners (features, routes).
DEFAULT_IGNORE: tuple[str, ...] = (
    "node_modules/**",
    ".git/**",
    "dist/**",
    "build/**",
)

# Ignore set for the folder structure tree.
DEFAULT_STRUCTURE_IGNORE: tuple[str, ...] = (
    "node_modules/**",
    ".git/**",
    "dist/**",
    "build/**",
    ".next/**",
    "coverage/**",
    ".nyc_output/**",
    "*.log",
    ".DS_Store",
    "Thumbs.db",
)


@dataclass
class DiscoveryResult:
    """
    Complete result of a path discovery operation.

    Attributes:
        root_path: The project root that was scanned
        paths: Relative POSIX paths, in walk order
        skipped: Relative paths pruned by ignore patterns, with the pattern
        warnings: Non-fatal problems hit during the walk
    """
    root_path: Path
    paths: list[str] = field(default_factory=list)
    skipped: list[tuple[str, str]] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.paths)

    def files(self) -> list[str]:
        """Return only the paths that are regular files on disk."""
        return [p for p in self.paths if (self.root_path / p).is_file()]


class PathDiscovery:
    """
    Enumerates project paths with glob-style ignore patterns.

    Usage:
        discovery = PathDiscovery("/path/to/project", ignore=DEFAULT_IGNORE)
        result = discovery.discover()

        # Only TypeScript sources, files only
        discovery = PathDiscovery(root, extensions=(".ts", ".tsx"))

    Attributes:
        root_path: The project root to scan
        ignore: Glob patterns excluding paths
        include_dirs: Whether directories appear in the result
        include_hidden: Whether dot-prefixed entries are visited
        extensions: If set, only files with these suffixes are returned
    """

    def __init__(
        self,
        root_path: str | Path,
        ignore: Iterable[str] = DEFAULT_IGNORE,
        include_dirs: bool = True,
        include_hidden: bool = True,
        extensions: Optional[Iterable[str]] = None,
    ):
        """
        Initialize the discovery.

        Args:
            root_path: Path to the project root
            ignore: Glob patterns excluding paths
            include_dirs: Whether to report directories (ignored when
                extensions is given)
            include_hidden: Whether to visit entries starting with "."
            extensions: Restrict results to files with these suffixes

        Raises:
            ValueError: If root_path is missing or not a directory
        """
        self.root_path = Path(root_path).resolve()
        self.ignore = tuple(ignore)
        self.extensions = tuple(extensions) if extensions else None
        self.include_dirs = include_dirs and self.extensions is None
        self.include_hidden = include_hidden

        if not self.root_path.exists():
            raise ValueError(f"Path does not exist: {self.root_path}")
        if not self.root_path.is_dir():
            raise ValueError(f"Path is not a directory: {self.root_path}")

    def _match_ignore(self, relative: str, is_dir: bool) -> Optional[str]:
        """
        Find the ignore pattern excluding a path.

        Args:
            relative: POSIX path relative to the root
            is_dir: Whether the path is a directory

        Returns:
            The matching pattern, or None if the path is kept
        """
        name = relative.rsplit("/", 1)[-1]

        for pattern in self.ignore:
            if pattern.endswith("/**"):
                if not is_dir:
                    continue
                target = pattern[:-3]
            else:
                target = pattern

            if target.startswith("/"):
                if fnmatch.fnmatchcase(relative, target[1:]):
                    return pattern
            elif "/" in target:
                if fnmatch.fnmatchcase(relative, target):
                    return pattern
            elif fnmatch.fnmatchcase(name, target):
                return pattern

        return None

    def _wanted_file(self, name: str) -> bool:
        if self.extensions is None:
            return True
        return name.endswith(self.extensions)

    def discover(self) -> DiscoveryResult:
        """
        Walk the project and collect the kept paths.

        Returns:
            DiscoveryResult with relative paths, pruned paths and warnings
        """
        result = DiscoveryResult(root_path=self.root_path)

        def on_error(error: OSError) -> None:
            message = f"Could not read directory: {error.filename}"
            logger.warning(message)
            result.warnings.append(message)

        for dirpath, dirnames, filenames in os.walk(self.root_path, onerror=on_error):
            current = Path(dirpath)
            relative_dir = current.relative_to(self.root_path).as_posix()
            base = "" if relative_dir == "." else f"{relative_dir}/"

            # Sorting in place fixes the order os.walk descends in.
            dirnames.sort()
            kept_dirs = []
            for dirname in dirnames:
                relative = base + dirname
                if not self.include_hidden and dirname.startswith("."):
                    continue
                pattern = self._match_ignore(relative, is_dir=True)
                if pattern is not None:
                    result.skipped.append((relative, pattern))
                    continue
                kept_dirs.append(dirname)
                if self.include_dirs:
                    result.paths.append(relative)
            dirnames[:] = kept_dirs

            for filename in sorted(filenames):
                relative = base + filename
                if not self.include_hidden and filename.startswith("."):
                    continue
                if not self._wanted_file(filename):
                    continue
                pattern = self._match_ignore(relative, is_dir=False)
                if pattern is not None:
                    result.skipped.append((relative, pattern))
                    continue
                result.paths.append(relative)

        return result


def discover_paths(
    path: str | Path,
    ignore: Iterable[str] = DEFAULT_IGNORE,
    include_dirs: bool = True,
    include_hidden: bool = True,
    extensions: Optional[Iterable[str]] = None,
) -> DiscoveryResult:
    """
    Convenience function to enumerate a project's paths.

    Args:
        path: Path to the project root
        ignore: Glob patterns excluding paths
        include_dirs: Whether directories appear in the result
        include_hidden: Whether dot-prefixed entries are visited
        extensions: Restrict results to files with these suffixes

    Returns:
        DiscoveryResult containing the kept paths

    Example:
        result = discover_paths("/path/to/project", extensions=(".js", ".ts"))
        for relative in result.paths:
            print(relative)
    """
    discovery = PathDiscovery(
        root_path=path,
        ignore=ignore,
        include_dirs=include_dirs,
        include_hidden=include_hidden,
        extensions=extensions,
    )
    return discovery.discover()
