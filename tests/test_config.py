"""
Tests for autoreadme.config module.

Tests default values and read-only loading of the project config file.
"""

import json
import tempfile
from pathlib import Path

import pytest

from autoreadme.config import (
    CONFIG_FILE,
    CONTRIBUTING_GUIDE,
    DEFAULT_FEATURES,
    FOLDER_STRUCTURE,
    Config,
    default_config,
    load_config,
)


@pytest.fixture
def tmppath():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


class TestDefaultConfig:
    """Tests for the default configuration."""

    def test_defaults(self):
        config = default_config()

        assert config.project_name == ""
        assert config.description == ""
        assert config.license == "MIT"
        assert config.auto_update is True
        assert config.last_checksum == ""
        assert config.features == DEFAULT_FEATURES

    def test_features_are_not_shared(self):
        """Each Config gets its own feature list."""
        first = default_config()
        first.features.remove(FOLDER_STRUCTURE)

        assert FOLDER_STRUCTURE in default_config().features

    def test_has_feature(self):
        config = Config(features=[CONTRIBUTING_GUIDE])

        assert config.has_feature(CONTRIBUTING_GUIDE)
        assert not config.has_feature(FOLDER_STRUCTURE)


class TestLoadConfig:
    """Tests for load_config."""

    def test_missing_file(self, tmppath):
        assert load_config(tmppath) == default_config()

    def test_camel_case_keys(self, tmppath):
        (tmppath / CONFIG_FILE).write_text(json.dumps({
            "projectName": "demo",
            "description": "A demo",
            "features": ["folderStructure"],
            "license": "Apache-2.0",
            "lastChecksum": "abc",
            "grokApiKey": "secret",
        }))

        config = load_config(tmppath)

        assert config.project_name == "demo"
        assert config.description == "A demo"
        assert config.features == ["folderStructure"]
        assert config.license == "Apache-2.0"
        assert config.last_checksum == "abc"
        assert config.api_key == "secret"

    def test_partial_file_keeps_defaults(self, tmppath):
        (tmppath / CONFIG_FILE).write_text(json.dumps({"projectName": "demo", "unknown": 1}))

        config = load_config(tmppath)

        assert config.project_name == "demo"
        assert config.features == DEFAULT_FEATURES

    def test_malformed_file(self, tmppath, caplog):
        (tmppath / CONFIG_FILE).write_text("{broken")

        with caplog.at_level("WARNING"):
            config = load_config(tmppath)

        assert config == default_config()
        assert "Failed to load config file" in caplog.text

    def test_non_object_file(self, tmppath):
        (tmppath / CONFIG_FILE).write_text("[1, 2]")

        assert load_config(tmppath) == default_config()

    def test_loading_never_writes(self, tmppath):
        load_config(tmppath)

        assert not (tmppath / CONFIG_FILE).exists()

    def test_non_list_features_keep_defaults(self, tmppath, caplog):
        """A bare string is not split into single-character flags."""
        (tmppath / CONFIG_FILE).write_text(json.dumps({
            "projectName": "demo",
            "features": "folderStructure",
        }))

        with caplog.at_level("WARNING"):
            config = load_config(tmppath)

        assert config.project_name == "demo"
        assert config.features == DEFAULT_FEATURES
        assert "expected a list" in caplog.text
