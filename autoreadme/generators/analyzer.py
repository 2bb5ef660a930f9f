"""
Project structure analysis.

Works out what kind of project this is: which applications it contains
(backend, frontend, mobile, ...), which frameworks they use, and which
technologies, databases and deployment targets the repository points at.

The analysis is heuristic. Directory names and package.json dependencies
are the only inputs; no source files are parsed here.
"""

import json
import logging
import re
from pathlib import Path
from typing import Optional

from autoreadme.discovery import discover_paths
from autoreadme.schema import ApplicationInfo, PackageInfo, ProjectStructure

logger = logging.getLogger(__name__)

ANALYZER_IGNORE = ("node_modules/**", ".git/**", "dist/**", "build/**", ".next/**")

# Top-level directory name -> application type. First match wins.
APP_PATTERNS: list[tuple[re.Pattern, str]] = [
    (re.compile(r"^(backend|server|api)$", re.IGNORECASE), "backend"),
    (re.compile(r"^(frontend|client|web)$", re.IGNORECASE), "frontend"),
    (re.compile(r"^(mobile|app|react-native)$", re.IGNORECASE), "mobile"),
    (re.compile(r"^(admin|dashboard)$", re.IGNORECASE), "admin"),
    (re.compile(r"^(provider|vendor).*app$", re.IGNORECASE), "provider"),
    (re.compile(r"^(traveler|user|customer).*app$", re.IGNORECASE), "user"),
    (re.compile(r"^(docs|documentation)$", re.IGNORECASE), "docs"),
]

# Checked in order: mobile, then frontend, then backend frameworks.
FRAMEWORK_DEPENDENCIES: list[tuple[tuple[str, ...], str]] = [
    (("react-native", "expo"), "React Native/Expo"),
    (("flutter",), "Flutter"),
    (("ionic",), "Ionic"),
    (("next",), "Next.js"),
    (("react",), "React"),
    (("vue",), "Vue.js"),
    (("angular",), "Angular"),
    (("svelte",), "Svelte"),
    (("express",), "Node.js/Express"),
    (("fastify",), "Node.js/Fastify"),
    (("koa",), "Node.js/Koa"),
    (("nestjs",), "NestJS"),
]

FRAMEWORK_FILES: list[tuple[str, str]] = [
    ("requirements.txt", "Python"),
    ("go.mod", "Go"),
    ("Cargo.toml", "Rust"),
    ("pom.xml", "Java/Maven"),
]

FEATURE_DEPENDENCIES: list[tuple[tuple[str, ...], str]] = [
    (("passport", "jsonwebtoken", "auth0"), "Authentication & Authorization"),
    (("mongoose", "mongodb"), "MongoDB Integration"),
    (("mysql", "mysql2"), "MySQL Database"),
    (("pg", "postgresql"), "PostgreSQL Database"),
    (("sqlite3",), "SQLite Database"),
    (("socket.io",), "Real-time Communication"),
    (("multer", "cloudinary"), "File Upload & Management"),
    (("jest", "mocha", "cypress"), "Testing Suite"),
    (("tailwindcss",), "Tailwind CSS Styling"),
    (("styled-components",), "Styled Components"),
    (("material-ui", "@mui/material"), "Material-UI Components"),
]

MOBILE_FEATURE_DEPENDENCIES: list[tuple[str, str]] = [
    ("@react-navigation/native", "Navigation System"),
    ("expo-camera", "Camera Integration"),
    ("expo-location", "Location Services"),
]

TRAILING_FEATURE_DEPENDENCIES: list[tuple[tuple[str, ...], str]] = [
    (("redux", "zustand", "recoil"), "State Management"),
    (("axios", "fetch"), "API Integration"),
]

FEATURE_DIRECTORIES: list[tuple[tuple[str, ...], str]] = [
    (("src/auth", "auth"), "Authentication System"),
    (("src/api", "api"), "API Layer"),
    (("src/components", "components"), "Reusable Components"),
]

DATABASE_DEPENDENCIES: list[tuple[tuple[str, ...], str]] = [
    (("mongoose", "mongodb"), "MongoDB"),
    (("mysql", "mysql2"), "MySQL"),
    (("pg", "postgresql"), "PostgreSQL"),
    (("sqlite3",), "SQLite"),
    (("redis",), "Redis"),
]

TECH_INDICATORS: list[tuple[tuple[str, ...], str]] = [
    (("package.json",), "Node.js"),
    (("requirements.txt", "setup.py"), "Python"),
    (("go.mod",), "Go"),
    (("Cargo.toml",), "Rust"),
    (("pom.xml",), "Java"),
    (("composer.json",), "PHP"),
    (("Dockerfile",), "Docker"),
    (("docker-compose.yml", "docker-compose.yaml"), "Docker Compose"),
    ((".github/workflows",), "GitHub Actions"),
    (("vercel.json",), "Vercel"),
    (("netlify.toml",), "Netlify"),
]

APP_DESCRIPTIONS = {
    "backend": "{framework} API server providing backend services and data management.",
    "frontend": "{framework} web application for user interface and client-side functionality.",
    "mobile": "{framework} mobile application for iOS and Android platforms.",
    "admin": "{framework} administrative dashboard for platform management and oversight.",
    "provider": "{framework} application for service providers to manage their offerings.",
    "user": "{framework} application for end users to access and interact with services.",
    "docs": "Documentation and guides for the project.",
    "main": "{framework} application providing the core functionality of the project.",
}


def read_package_json(path: Path) -> Optional[dict]:
    """Parse a package.json, returning None if it is missing or malformed."""
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning("Could not parse %s: %s", path, e)
        return None
    return data if isinstance(data, dict) else None


def detect_framework(app_path: Path, package: Optional[PackageInfo]) -> str:
    """
    Guess the framework of an application directory.

    Without a dependencies or devDependencies entry in package.json the
    answer is "Unknown". Empty entries still fall through to marker files.
    """
    if package is None or not package.declares_dependencies():
        return "Unknown"

    deps = package.all_dependencies()
    for names, framework in FRAMEWORK_DEPENDENCIES:
        if any(name in deps for name in names):
            return framework

    for filename, framework in FRAMEWORK_FILES:
        if (app_path / filename).exists():
            return framework

    return "Node.js"


def extract_application_features(
    app_path: Path,
    package: Optional[PackageInfo],
    framework: str,
) -> list[str]:
    features: list[str] = []

    if package is not None:
        deps = package.all_dependencies()
        for names, label in FEATURE_DEPENDENCIES:
            if any(name in deps for name in names):
                features.append(label)
        if "React Native" in framework:
            for name, label in MOBILE_FEATURE_DEPENDENCIES:
                if name in deps:
                    features.append(label)
        for names, label in TRAILING_FEATURE_DEPENDENCIES:
            if any(name in deps for name in names):
                features.append(label)

    for candidates, label in FEATURE_DIRECTORIES:
        if any((app_path / candidate).exists() for candidate in candidates):
            features.append(label)

    return features or ["Core Functionality"]


def describe_application(app_type: str, framework: str) -> str:
    template = APP_DESCRIPTIONS.get(app_type, "{framework} application.")
    return template.format(framework=framework)


def analyze_application(
    project_root: Path,
    app_dir: str,
    app_type: str,
) -> Optional[ApplicationInfo]:
    """
    Analyze one application directory.

    Returns:
        ApplicationInfo, or None if the directory could not be analyzed
    """
    app_path = project_root / app_dir
    try:
        data = read_package_json(app_path / "package.json")
        package = PackageInfo.from_dict(data) if data is not None else None
        framework = detect_framework(app_path, package)
        features = extract_application_features(app_path, package, framework)
    except OSError as e:
        logger.error("Error analyzing application %s: %s", app_dir, e)
        return None

    return ApplicationInfo(
        name=project_root.name if app_dir == "." else app_dir,
        type=app_type,
        path=app_dir,
        framework=framework,
        features=features,
        description=describe_application(app_type, framework),
        package_info=package,
    )


def detect_applications(project_root: Path, directories: list[str]) -> list[ApplicationInfo]:
    """Find application directories at the top level of the project."""
    applications: list[ApplicationInfo] = []

    for directory in directories:
        if "/" in directory:
            continue
        for pattern, app_type in APP_PATTERNS:
            if pattern.match(directory):
                app = analyze_application(project_root, directory, app_type)
                if app is not None:
                    applications.append(app)
                break

    if not applications:
        app = analyze_application(project_root, ".", "main")
        if app is not None:
            applications.append(app)

    return applications


def determine_project_type(applications: list[ApplicationInfo]) -> str:
    types = {app.type for app in applications}

    if len(applications) > 1:
        if {"backend", "frontend", "mobile"} <= types:
            return "Full-Stack Multi-Platform"
        if {"backend", "frontend"} <= types:
            return "Full-Stack Web Application"
        if {"backend", "mobile"} <= types:
            return "Backend + Mobile Application"
        return "Multi-Application Project"

    if len(applications) == 1:
        return {
            "backend": "Backend API",
            "frontend": "Frontend Web Application",
            "mobile": "Mobile Application",
        }.get(applications[0].type, "Single Application")

    return "Unknown Project Type"


def detect_technologies(project_root: Path, files: set[str]) -> list[str]:
    technologies = []
    for indicators, tech in TECH_INDICATORS:
        if any(i in files or (project_root / i).exists() for i in indicators):
            technologies.append(tech)
    return technologies


def detect_databases(project_root: Path, files: list[str]) -> list[str]:
    databases: list[str] = []
    for relative in files:
        if not relative.endswith("package.json"):
            continue
        data = read_package_json(project_root / relative)
        if data is None:
            continue
        deps = PackageInfo.from_dict(data).all_dependencies()
        for names, database in DATABASE_DEPENDENCIES:
            if any(name in deps for name in names):
                databases.append(database)
    return list(dict.fromkeys(databases))


def analyze_deployment(project_root: Path, files: set[str]) -> dict[str, bool]:
    deployment: dict[str, bool] = {}
    if "Dockerfile" in files:
        deployment["docker"] = True
    if "docker-compose.yml" in files or "docker-compose.yaml" in files:
        deployment["docker_compose"] = True
    if "vercel.json" in files:
        deployment["vercel"] = True
    if "netlify.toml" in files:
        deployment["netlify"] = True
    if (project_root / ".github" / "workflows").is_dir():
        deployment["github_actions"] = True
    return deployment


def analyze_project_structure(project_root: str | Path) -> ProjectStructure:
    """
    Analyze the applications and technologies of a project.

    Args:
        project_root: The project root directory

    Returns:
        ProjectStructure. On error, whatever was filled in so far.
    """
    root = Path(project_root)
    structure = ProjectStructure()

    try:
        result = discover_paths(root, ignore=ANALYZER_IGNORE, include_hidden=False)
        directories = [p for p in result.paths if (root / p).is_dir()]
        file_set = set(result.paths)

        structure.applications = detect_applications(root, directories)
        structure.type = determine_project_type(structure.applications)
        structure.main_technologies = detect_technologies(root, file_set)

        app_types = {app.type for app in structure.applications}
        structure.has_backend = "backend" in app_types
        structure.has_frontend = "frontend" in app_types
        structure.has_mobile = "mobile" in app_types

        structure.databases = detect_databases(root, result.paths)
        structure.deployment_info = analyze_deployment(root, file_set)
    except Exception as e:
        logger.error("Error analyzing project structure: %s", e)

    return structure
