"""Screenshot discovery in the conventional image folders."""

import logging
from pathlib import Path

from autoreadme.discovery import discover_paths
from autoreadme.schema import Screenshot

logger = logging.getLogger(__name__)

SCREENSHOT_DIRS = ("screenshots", "images", "assets/images", "public/images")
IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".gif", ".webp")


def get_screenshots(project_root: str | Path) -> list[Screenshot]:
    """
    Find images to embed in the README.

    Returns:
        Screenshots in folder order, or an empty list on error
    """
    root = Path(project_root)
    screenshots: list[Screenshot] = []

    try:
        for folder in SCREENSHOT_DIRS:
            folder_path = root / folder
            if not folder_path.is_dir():
                continue

            images = discover_paths(
                folder_path,
                ignore=(),
                include_hidden=False,
                extensions=IMAGE_EXTENSIONS,
            ).paths
            for image in images:
                screenshots.append(Screenshot(
                    name=Path(image).stem,
                    path=f"{folder}/{image}",
                    filename=image,
                ))
    except Exception as e:
        logger.error("Error getting screenshots: %s", e)
        return []

    return screenshots
