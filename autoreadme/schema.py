"""
autoreadme Project Schema

This module defines the data structures passed between the generators and
the renderer. Generators fill a ProjectInfo; the renderer only reads it.

Design Principles:
    1. Optional sections are None (or empty) when their feature is disabled
    2. package.json is kept as typed fields plus the raw mapping
    3. Everything is a plain dataclass, serializable with dataclasses.asdict
"""

from dataclasses import dataclass, field
from typing import Any, Optional


def _as_mapping(value: Any) -> dict[str, Any]:
    return dict(value) if isinstance(value, dict) else {}


@dataclass
class PackageInfo:
    """
    The subset of package.json the README cares about.

    Attributes:
        name: Package name
        version: Package version
        description: Package description
        scripts: npm script name -> command
        dependencies: Runtime dependency -> version range
        dev_dependencies: Development dependency -> version range
        raw: The parsed package.json as read
    """
    name: Optional[str] = None
    version: Optional[str] = None
    description: Optional[str] = None
    scripts: dict[str, str] = field(default_factory=dict)
    dependencies: dict[str, str] = field(default_factory=dict)
    dev_dependencies: dict[str, str] = field(default_factory=dict)
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PackageInfo":
        """
        Build from a parsed package.json, tolerating missing keys.

        Mapping fields that are not JSON objects are read as empty.
        """
        return cls(
            name=data.get("name"),
            version=data.get("version"),
            description=data.get("description"),
            scripts=_as_mapping(data.get("scripts")),
            dependencies=_as_mapping(data.get("dependencies")),
            dev_dependencies=_as_mapping(data.get("devDependencies")),
            raw=dict(data),
        )

    def declares_dependencies(self) -> bool:
        """Whether package.json has a dependencies or devDependencies entry."""
        if self.dependencies or self.dev_dependencies:
            return True
        return any(self.raw.get(key) is not None for key in ("dependencies", "devDependencies"))

    def all_dependencies(self) -> dict[str, str]:
        """Runtime and development dependencies merged (dev wins on clash)."""
        return {**self.dependencies, **self.dev_dependencies}


@dataclass
class Screenshot:
    """An image found in one of the conventional screenshot folders."""
    name: str
    path: str
    filename: str


@dataclass
class ApplicationInfo:
    """
    One application inside a (possibly multi-app) project.

    Attributes:
        name: Directory name, or the project name for a root application
        type: backend, frontend, mobile, admin, provider, user, docs or main
        path: Directory relative to the project root ("." for the root)
        framework: Detected framework or language
        features: Detected feature labels
        description: One-sentence templated description
        package_info: The application's package.json, if any
    """
    name: str
    type: str
    path: str
    framework: str
    features: list[str] = field(default_factory=list)
    description: str = ""
    package_info: Optional[PackageInfo] = None


@dataclass
class ProjectStructure:
    """High-level shape of the project (applications, stack, deployment)."""
    type: str = "unknown"
    applications: list[ApplicationInfo] = field(default_factory=list)
    main_technologies: list[str] = field(default_factory=list)
    has_backend: bool = False
    has_frontend: bool = False
    has_mobile: bool = False
    databases: list[str] = field(default_factory=list)
    deployment_info: dict[str, bool] = field(default_factory=dict)


@dataclass
class Route:
    """
    A detected HTTP route.

    Attributes:
        method: Upper-case HTTP method (or USE for Express middleware)
        path: URL path as written in the source
        type: Detector that found it: express, nextjs or fastapi
        file: Source file relative to the project root
    """
    method: str
    path: str
    type: str
    file: Optional[str] = None


@dataclass
class ProjectInfo:
    """
    Everything gathered about a project for one README generation.

    Attributes:
        project_name: Title of the README
        description: Free-text description (may be empty)
        features: Enabled feature flags from the config
        license: License name for the License section
        folder_structure: Rendered tree, or the structure error string
        extracted_features: Labels from comment markers and code signatures
        api_routes: Detected routes grouped by HTTP method
        project_structure: Application and technology analysis
        screenshots: Images to embed
        package_info: Parsed package.json at the project root
        git_url: remote.origin.url, if the project is a git checkout
    """
    project_name: str
    description: str = ""
    features: list[str] = field(default_factory=list)
    license: str = "MIT"
    folder_structure: Optional[str] = None
    extracted_features: list[str] = field(default_factory=list)
    api_routes: Optional[dict[str, list[Route]]] = None
    project_structure: Optional[ProjectStructure] = None
    screenshots: list[Screenshot] = field(default_factory=list)
    package_info: Optional[PackageInfo] = None
    git_url: Optional[str] = None


@dataclass
class GenerateResult:
    """
    Outcome of a generate_readme call.

    Attributes:
        updated: False when the README was left untouched (no changes)
        checksum: Project checksum after generation, for the caller to store
        readme_path: Where the README was written
    """
    updated: bool
    checksum: str = ""
    readme_path: Optional[str] = None
