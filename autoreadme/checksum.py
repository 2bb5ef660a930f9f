"""
Project change detection.

The checksum covers every project file's relative path and modification
time, so any edit, addition or removal changes it. The top-level README and
the generator's config file are excluded, otherwise writing them would always
invalidate the checksum.
"""

import hashlib
import logging
from datetime import datetime, timezone
from pathlib import Path

from autoreadme.discovery import discover_paths

logger = logging.getLogger(__name__)

CHECKSUM_IGNORE: tuple[str, ...] = (
    "node_modules/**",
    ".git/**",
    "dist/**",
    "build/**",
    ".next/**",
    "coverage/**",
    "/README.md",
    "/.autoreadme.json",
)


def calculate_checksum(project_root: str | Path) -> str:
    """
    Compute the MD5 checksum of a project's file list and mtimes.

    Returns:
        Hex digest, or an empty string if the project could not be read
    """
    root = Path(project_root)
    try:
        result = discover_paths(
            root,
            ignore=CHECKSUM_IGNORE,
            include_dirs=False,
            include_hidden=True,
        )
        digest = hashlib.md5()
        for relative in sorted(result.paths):
            mtime = (root / relative).stat().st_mtime
            stamp = datetime.fromtimestamp(mtime, tz=timezone.utc).isoformat()
            digest.update(relative.encode("utf-8"))
            digest.update(stamp.encode("utf-8"))
        return digest.hexdigest()
    except Exception as e:
        logger.error("Error calculating checksum: %s", e)
        return ""
