"""
Flask-based Web API for autoreadme.

Exposes README generation for project directories on the server's
filesystem.

Endpoints:
    GET  /api/health    - Health check
    POST /api/structure - Annotated folder tree of a project
    POST /api/generate  - Generate (or preview) README.md for a project
"""

import logging
from pathlib import Path
from typing import Any

from flask import Flask, Response, jsonify, request

from autoreadme import __version__
from autoreadme.config import load_config
from autoreadme.generator import build_readme, generate_readme
from autoreadme.generators import generate_folder_structure

logger = logging.getLogger(__name__)

app = Flask(__name__)


def resolve_project_path(data: Any) -> Path:
    """
    Get the project directory from a request body.

    Raises:
        ValueError: If the body is not an object, or the path is missing or
            not a directory
    """
    if not isinstance(data, dict):
        raise ValueError("request body must be a JSON object")

    raw = data.get("path")
    if not raw or not isinstance(raw, str):
        raise ValueError("'path' is required")

    project_path = Path(raw).expanduser().resolve()
    if not project_path.exists():
        raise ValueError(f"Path does not exist: {project_path}")
    if not project_path.is_dir():
        raise ValueError(f"Path is not a directory: {project_path}")
    return project_path


@app.route("/api/health", methods=["GET"])
def health_check() -> Response:
    """Health check endpoint."""
    return jsonify({"status": "healthy", "version": __version__})


@app.route("/api/structure", methods=["POST"])
def folder_structure() -> tuple[Response, int]:
    """
    Return the annotated folder tree of a project.

    Request JSON:
        - path: Project directory (required)
    """
    data = request.get_json(silent=True) or {}
    try:
        project_path = resolve_project_path(data)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    return jsonify({"structure": generate_folder_structure(project_path)}), 200


@app.route("/api/generate", methods=["POST"])
def generate() -> tuple[Response, int]:
    """
    Generate README.md for a project.

    Request JSON:
        - path: Project directory (required)
        - force: Regenerate even if nothing changed (default: false)
        - dry_run: Return the README without writing it (default: false)

    Returns:
        JSON with either "readme" (dry run) or "updated", "checksum" and
        "readme_path"
    """
    data = request.get_json(silent=True) or {}
    try:
        project_path = resolve_project_path(data)
        config = load_config(project_path)

        if data.get("dry_run", False):
            return jsonify({"readme": build_readme(config, project_path)}), 200

        result = generate_readme(config, project_path, force=bool(data.get("force", False)))
        return jsonify({
            "updated": result.updated,
            "checksum": result.checksum,
            "readme_path": result.readme_path,
        }), 200

    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        logger.exception("README generation failed")
        return jsonify({"error": f"Processing failed: {str(e)}"}), 500


@app.errorhandler(404)
def not_found(error):
    return jsonify({"error": "Not found"}), 404


@app.errorhandler(500)
def internal_server_error(error):
    """Handle internal server errors."""
    return jsonify({"error": "Internal server error"}), 500


def create_app() -> Flask:
    """
    Application factory for creating the Flask app.

    Returns:
        Configured Flask application instance.
    """
    return app


def main() -> None:
    """Run the development server."""
    logging.basicConfig(level=logging.INFO, format="[autoreadme] %(levelname)s %(message)s")
    print("Starting autoreadme API server...")
    print()
    print("API Endpoints:")
    print("  GET  /api/health    - Health check")
    print("  POST /api/structure - Folder tree of a project")
    print("  POST /api/generate  - Generate README.md for a project")
    print()
    app.run(host="127.0.0.1", port=5001, debug=False)


if __name__ == "__main__":
    main()
