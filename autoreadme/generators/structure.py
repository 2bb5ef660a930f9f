"""
Folder structure generation.

Enumerates the project (files and directories, dotfiles included), builds
the tree and renders it. This is the only entry point the README pipeline
uses for the "Project Structure" section, and it never raises.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional

from autoreadme.discovery import DEFAULT_STRUCTURE_IGNORE, discover_paths
from autoreadme.tree import build_tree, format_tree

logger = logging.getLogger(__name__)

STRUCTURE_ERROR = "Error generating folder structure"


def generate_folder_structure(
    project_root: str | Path,
    ignore: Iterable[str] = DEFAULT_STRUCTURE_IGNORE,
    max_workers: Optional[int] = None,
) -> str:
    """
    Render the annotated folder tree of a project.

    Args:
        project_root: The project root directory
        ignore: Glob patterns excluding paths from the tree
        max_workers: Stat paths on a thread pool of this size

    Returns:
        The rendered tree, or STRUCTURE_ERROR if anything went wrong
    """
    try:
        result = discover_paths(project_root, ignore=ignore, include_hidden=True)
        tree = build_tree(result.paths, result.root_path, max_workers=max_workers)
        return format_tree(tree)
    except Exception as e:
        logger.error("Error generating folder structure: %s", e)
        return STRUCTURE_ERROR
