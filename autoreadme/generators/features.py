"""
Feature extraction from source code.

Two signals are combined:
    - Marker comments such as "// feature: dark mode" or "# TODO: caching"
    - Framework/library signatures found in the code (substring matches)
"""

import logging
import re
from pathlib import Path

from autoreadme.discovery import DEFAULT_IGNORE, discover_paths

logger = logging.getLogger(__name__)

SOURCE_EXTENSIONS = (".js", ".ts", ".jsx", ".tsx", ".py", ".go", ".rs", ".java", ".php")

NO_FEATURES = "Feature extraction in progress..."
FEATURES_ERROR = "Error extracting features"

COMMENT_FEATURE_RE = re.compile(
    r"(?://|/\*|\*|#)\s*(?:feature|todo|fixme|note):\s*(.+)",
    re.IGNORECASE,
)

# (needles, label); a label applies when any needle occurs in the content.
CODE_SIGNATURES: list[tuple[tuple[str, ...], str]] = [
    (("express()", "app.listen"), "REST API server"),
    (("React", "jsx"), "React frontend"),
    (("useState", "useEffect"), "React hooks"),
    (("mongoose", "MongoDB"), "MongoDB database"),
    (("mysql", "PostgreSQL"), "SQL database"),
    (("jwt", "passport"), "Authentication"),
    (("multer", "file upload"), "File upload"),
    (("socket.io", "WebSocket"), "Real-time communication"),
    (("test", "jest", "mocha"), "Unit testing"),
]


def extract_from_comments(content: str) -> list[str]:
    return [m.group(1).strip() for m in COMMENT_FEATURE_RE.finditer(content)]


def extract_from_code(content: str, filename: str) -> list[str]:
    features = [
        label
        for needles, label in CODE_SIGNATURES
        if any(needle in content for needle in needles)
    ]
    if "docker" in content or "Dockerfile" in filename:
        features.append("Docker containerization")
    return features


def extract_features(project_root: str | Path) -> list[str]:
    """
    Collect feature labels from every source file in a project.

    Args:
        project_root: The project root directory

    Returns:
        Unique labels in first-seen order. A placeholder entry is returned
        when nothing was found, and an error entry when the scan failed.
    """
    root = Path(project_root)
    features: list[str] = []

    try:
        files = discover_paths(
            root,
            ignore=DEFAULT_IGNORE,
            include_hidden=False,
            extensions=SOURCE_EXTENSIONS,
        ).paths

        for relative in files:
            file_path = root / relative
            if not file_path.is_file():
                continue
            try:
                content = file_path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Skipping file %s: %s", relative, e)
                continue

            features.extend(extract_from_comments(content))
            features.extend(extract_from_code(content, relative))

    except Exception as e:
        logger.error("Error extracting features: %s", e)
        return [FEATURES_ERROR]

    unique = list(dict.fromkeys(features))
    return unique or [NO_FEATURES]
