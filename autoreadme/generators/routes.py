"""
API route detection.

Scans JavaScript, TypeScript and Python sources for Express routes, Next.js
API route handlers and FastAPI-style decorators, grouped by HTTP method.
"""

import logging
import re
from pathlib import Path
from typing import Optional

from autoreadme.discovery import DEFAULT_IGNORE, discover_paths
from autoreadme.schema import Route

logger = logging.getLogger(__name__)

SCRIPT_EXTENSIONS = (".js", ".ts", ".jsx", ".tsx")
ROUTE_EXTENSIONS = SCRIPT_EXTENSIONS + (".py",)

NEXT_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH")

EXPRESS_ROUTE_RE = re.compile(
    r"(?:app|router)\.(get|post|put|delete|patch|use)\s*\(\s*['\"`]([^'\"`]+)['\"`]"
    r"\s*,?\s*(?:.*?)(?:function|=>|\(req,\s*res\))"
)
FASTAPI_ROUTE_RE = re.compile(
    r"@app\.(get|post|put|delete|patch)\s*\(\s*['\"`]([^'\"`]+)['\"`]"
)


def extract_express_routes(content: str) -> list[Route]:
    return [
        Route(method=m.group(1).upper(), path=m.group(2), type="express")
        for m in EXPRESS_ROUTE_RE.finditer(content)
    ]


def next_route_path(filename: str) -> str:
    """Map a pages/api or app/api file name to its URL path."""
    route = re.sub(r"^pages/api/", "/api/", filename)
    route = re.sub(r"^app/api/", "/api/", route)
    route = re.sub(r"\.(js|ts|jsx|tsx)$", "", route)
    return re.sub(r"/index$", "", route)


def extract_next_routes(content: str, filename: str) -> list[Route]:
    route_path = next_route_path(filename)
    return [
        Route(method=method, path=route_path, type="nextjs")
        for method in NEXT_METHODS
        if f"export async function {method}" in content
        or f"export function {method}" in content
    ]


def extract_fastapi_routes(content: str) -> list[Route]:
    return [
        Route(method=m.group(1).upper(), path=m.group(2), type="fastapi")
        for m in FASTAPI_ROUTE_RE.finditer(content)
    ]


def group_routes(routes: list[Route]) -> dict[str, list[Route]]:
    """Group routes by method, keeping first-seen order."""
    grouped: dict[str, list[Route]] = {}
    for route in routes:
        grouped.setdefault(route.method, []).append(route)
    return grouped


def detect_routes(project_root: str | Path) -> Optional[dict[str, list[Route]]]:
    """
    Detect HTTP routes declared in a project's sources.

    Args:
        project_root: The project root directory

    Returns:
        Routes grouped by method, or None when nothing was found or the
        scan failed
    """
    root = Path(project_root)
    routes: list[Route] = []

    try:
        files = discover_paths(
            root,
            ignore=DEFAULT_IGNORE,
            include_hidden=False,
            extensions=ROUTE_EXTENSIONS,
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

            found: list[Route] = []
            if relative.endswith(SCRIPT_EXTENSIONS):
                found.extend(extract_express_routes(content))
                if "pages/api/" in relative or "app/api/" in relative:
                    found.extend(extract_next_routes(content, relative))
            found.extend(extract_fastapi_routes(content))

            for route in found:
                route.file = relative
            routes.extend(found)

    except Exception as e:
        logger.error("Error detecting routes: %s", e)
        return None

    return group_routes(routes) if routes else None
