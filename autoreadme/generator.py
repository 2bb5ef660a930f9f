"""
autoreadme Generation Pipeline

This module orchestrates a full README generation:
    change check -> information gathering -> rendering -> write

Only the generators whose feature flag is enabled in the Config are run.
The resulting checksum is returned to the caller, which decides whether and
where to store it; this module never writes the config file.
"""

import json
import logging
import subprocess
from pathlib import Path
from typing import Optional

from autoreadme.checksum import calculate_checksum
from autoreadme.config import (
    API_ROUTES,
    FEATURE_EXTRACTION,
    FOLDER_STRUCTURE,
    SCREENSHOTS,
    Config,
)
from autoreadme.generators import (
    analyze_project_structure,
    detect_routes,
    extract_features,
    generate_folder_structure,
    get_screenshots,
)
from autoreadme.renderer import render_readme
from autoreadme.schema import GenerateResult, PackageInfo, ProjectInfo

logger = logging.getLogger(__name__)

README_FILE = "README.md"


def get_git_url(project_root: Path) -> Optional[str]:
    """
    Read remote.origin.url of the project's git checkout.

    Returns:
        The remote URL, or None if git is unavailable or no remote is set
    """
    try:
        result = subprocess.run(
            ["git", "config", "--get", "remote.origin.url"],
            cwd=project_root,
            capture_output=True,
            text=True,
            timeout=5,
        )
    except (subprocess.TimeoutExpired, FileNotFoundError, OSError):
        return None

    if result.returncode != 0:
        return None
    return result.stdout.strip() or None


def load_package_info(project_root: Path) -> Optional[PackageInfo]:
    """Parse package.json at the project root, if present and valid."""
    package_path = project_root / "package.json"
    if not package_path.exists():
        return None
    try:
        data = json.loads(package_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Could not read %s: %s", package_path, e)
        return None
    if not isinstance(data, dict):
        logger.warning("Ignoring %s: top-level value is not an object", package_path)
        return None
    return PackageInfo.from_dict(data)


def gather_project_info(config: Config, project_root: str | Path) -> ProjectInfo:
    """
    Collect everything the README needs from the project on disk.

    Args:
        config: Generation settings (feature flags select the generators)
        project_root: The project root directory

    Returns:
        A populated ProjectInfo
    """
    root = Path(project_root).resolve()

    info = ProjectInfo(
        project_name=config.project_name or root.name,
        description=config.description or "",
        features=list(config.features),
        license=config.license or "MIT",
    )

    if config.has_feature(FOLDER_STRUCTURE):
        info.folder_structure = generate_folder_structure(root)

    if config.has_feature(FEATURE_EXTRACTION):
        info.extracted_features = extract_features(root)

    if config.has_feature(API_ROUTES):
        info.api_routes = detect_routes(root)

    if config.has_feature(FEATURE_EXTRACTION) or config.has_feature(API_ROUTES):
        info.project_structure = analyze_project_structure(root)

    if config.has_feature(SCREENSHOTS):
        info.screenshots = get_screenshots(root)

    info.package_info = load_package_info(root)
    info.git_url = get_git_url(root)

    return info


def build_readme(config: Config, project_root: str | Path) -> str:
    """Gather project information and render the README without writing it."""
    info = gather_project_info(config, project_root)
    return render_readme(info, config)


def generate_readme(
    config: Config,
    project_root: str | Path = ".",
    force: bool = False,
) -> GenerateResult:
    """
    Generate README.md for a project.

    Args:
        config: Generation settings, including the last stored checksum
        project_root: The project root directory
        force: Regenerate even if nothing changed since the last run

    Returns:
        GenerateResult. updated is False when the existing README was kept.

    Raises:
        ValueError: If project_root is not a directory
        OSError: If the README cannot be written
    """
    root = Path(project_root).resolve()
    if not root.is_dir():
        raise ValueError(f"Path is not a directory: {root}")

    readme_path = root / README_FILE

    if not force and readme_path.exists():
        current = calculate_checksum(root)
        if current and current == (config.last_checksum or ""):
            logger.info("No changes detected in %s", root)
            return GenerateResult(updated=False, checksum=current, readme_path=str(readme_path))

    content = build_readme(config, root)
    readme_path.write_text(content, encoding="utf-8")
    logger.info("README written to %s", readme_path)

    return GenerateResult(
        updated=True,
        checksum=calculate_checksum(root),
        readme_path=str(readme_path),
    )
