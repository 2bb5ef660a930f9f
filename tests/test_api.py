"""
Tests for autoreadme.api module.

Tests the Flask REST API endpoints for README generation.
"""

import json
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from autoreadme import __version__
from autoreadme.api import app, create_app, resolve_project_path
from autoreadme.config import CONFIG_FILE
from autoreadme.generators import STRUCTURE_ERROR


@pytest.fixture
def client():
    """Create a test client for the Flask app."""
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


@pytest.fixture
def project():
    """Create a sample project with a config file."""
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        (root / "src").mkdir()
        (root / "src" / "index.ts").write_text("export {}")
        (root / CONFIG_FILE).write_text(json.dumps({
            "projectName": "sample",
            "features": ["folderStructure"],
        }))
        with patch("autoreadme.generator.get_git_url", return_value=None):
            yield root


class TestCreateApp:
    def test_returns_app(self):
        assert create_app() is app


class TestResolveProjectPath:
    def test_missing_path(self):
        with pytest.raises(ValueError, match="'path' is required"):
            resolve_project_path({})

    def test_body_must_be_object(self):
        with pytest.raises(ValueError, match="must be a JSON object"):
            resolve_project_path([1, 2])

    def test_not_a_directory(self, project):
        with pytest.raises(ValueError, match="not a directory"):
            resolve_project_path({"path": str(project / CONFIG_FILE)})

    def test_valid(self, project):
        assert resolve_project_path({"path": str(project)}) == project.resolve()


class TestHealthEndpoint:
    def test_health_check(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        data = response.get_json()
        assert data["status"] == "healthy"
        assert data["version"] == __version__


class TestStructureEndpoint:
    def test_structure(self, client, project):
        response = client.post("/api/structure", json={"path": str(project)})

        assert response.status_code == 200
        structure = response.get_json()["structure"]
        assert "├── src/ # Source code" in structure
        assert "└── .autoreadme.json # README generator configuration" in structure

    def test_missing_path(self, client):
        response = client.post("/api/structure", json={})

        assert response.status_code == 400
        assert "error" in response.get_json()

    def test_array_body(self, client):
        response = client.post("/api/structure", json=[1, 2])

        assert response.status_code == 400
        assert "must be a JSON object" in response.get_json()["error"]

    def test_generator_failure_is_not_an_http_error(self, client, project):
        with patch("autoreadme.generators.structure.build_tree", side_effect=RuntimeError("x")):
            response = client.post("/api/structure", json={"path": str(project)})

        assert response.status_code == 200
        assert response.get_json()["structure"] == STRUCTURE_ERROR


class TestGenerateEndpoint:
    def test_dry_run(self, client, project):
        response = client.post("/api/generate", json={"path": str(project), "dry_run": True})

        assert response.status_code == 200
        readme = response.get_json()["readme"]
        assert readme.startswith("# sample")
        assert "## 📁 Project Structure" in readme
        assert not (project / "README.md").exists()

    def test_generate_writes_file(self, client, project):
        response = client.post("/api/generate", json={"path": str(project)})

        assert response.status_code == 200
        data = response.get_json()
        assert data["updated"] is True
        assert len(data["checksum"]) == 32
        assert Path(data["readme_path"]).read_text(encoding="utf-8").startswith("# sample")

    def test_unchanged_project_not_rewritten(self, client, project):
        first = client.post("/api/generate", json={"path": str(project)}).get_json()
        config = json.loads((project / CONFIG_FILE).read_text())
        config["lastChecksum"] = first["checksum"]
        (project / CONFIG_FILE).write_text(json.dumps(config))

        second = client.post("/api/generate", json={"path": str(project)}).get_json()

        assert second["updated"] is False

    def test_invalid_path(self, client):
        response = client.post("/api/generate", json={"path": "/nonexistent/project/for/tests"})

        assert response.status_code == 400
        assert "does not exist" in response.get_json()["error"]

    def test_array_body(self, client):
        response = client.post("/api/generate", json=["path"])

        assert response.status_code == 400
        assert "must be a JSON object" in response.get_json()["error"]

    def test_unexpected_failure(self, client, project):
        with patch("autoreadme.api.generate_readme", side_effect=RuntimeError("disk full")):
            response = client.post("/api/generate", json={"path": str(project)})

        assert response.status_code == 500
        assert "disk full" in response.get_json()["error"]
