"""
autoreadme Configuration

Settings live in a JSON file at the project root. This module only reads it:
values missing from the file fall back to the defaults, and a missing or
broken file yields the defaults outright.

File format (camelCase keys):
    {
        "projectName": "my-app",
        "description": "",
        "useAI": true,
        "apiKey": "",
        "features": ["folderStructure", "apiRoutes"],
        "license": "MIT",
        "autoUpdate": true,
        "lastChecksum": ""
    }
"""

import json
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

CONFIG_FILE = ".autoreadme.json"

# Feature flags understood by the generator.
FOLDER_STRUCTURE = "folderStructure"
FEATURE_EXTRACTION = "featureExtraction"
API_ROUTES = "apiRoutes"
SCREENSHOTS = "screenshots"
INSTALL_COMMANDS = "installCommands"
CONTRIBUTING_GUIDE = "contributingGuide"

DEFAULT_FEATURES = [
    FOLDER_STRUCTURE,
    FEATURE_EXTRACTION,
    API_ROUTES,
    SCREENSHOTS,
    INSTALL_COMMANDS,
    CONTRIBUTING_GUIDE,
]

# JSON key -> dataclass attribute
_KEY_MAP = {
    "projectName": "project_name",
    "description": "description",
    "useAI": "use_ai",
    "apiKey": "api_key",
    "grokApiKey": "api_key",
    "features": "features",
    "license": "license",
    "autoUpdate": "auto_update",
    "lastChecksum": "last_checksum",
}


@dataclass
class Config:
    """
    README generation settings.

    Attributes:
        project_name: README title (defaults to the directory name)
        description: Manual description; empty means none
        use_ai: Kept for file compatibility; no AI calls are made
        api_key: Kept for file compatibility
        features: Enabled feature flags (see DEFAULT_FEATURES)
        license: License name shown in the License section
        auto_update: Kept for file compatibility
        last_checksum: Checksum of the project at the last generation
    """
    project_name: str = ""
    description: str = ""
    use_ai: bool = True
    api_key: str = ""
    features: list[str] = field(default_factory=lambda: list(DEFAULT_FEATURES))
    license: str = "MIT"
    auto_update: bool = True
    last_checksum: str = ""

    def has_feature(self, feature: str) -> bool:
        return feature in self.features

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Config":
        """Build a Config from parsed JSON, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in data.items():
            attr = _KEY_MAP.get(key, key)
            if attr in known and value is not None:
                values[attr] = value
        if "features" in values:
            if isinstance(values["features"], list):
                values["features"] = list(values["features"])
            else:
                logger.warning(
                    "Ignoring 'features': expected a list, got %s",
                    type(values["features"]).__name__,
                )
                del values["features"]
        return cls(**values)


def default_config() -> Config:
    """Return the default configuration."""
    return Config()


def load_config(project_root: str | Path = ".") -> Config:
    """
    Load the configuration of a project.

    Args:
        project_root: Directory holding the config file

    Returns:
        The parsed Config, or the defaults if the file is missing or invalid
    """
    config_path = Path(project_root) / CONFIG_FILE

    if not config_path.exists():
        return default_config()

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError("top-level value is not an object")
        return Config.from_dict(data)
    except (OSError, ValueError, TypeError) as e:
        logger.warning("Failed to load config file %s, using defaults: %s", config_path, e)
        return default_config()
