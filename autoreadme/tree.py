"""
autoreadme Folder Tree

This module turns a flat list of project-relative paths into a nested tree
and renders it as an annotated ASCII diagram for the "Project Structure"
section of a generated README.

Key Responsibilities:
    1. Rebuild the directory hierarchy from relative paths
    2. Decide whether each leaf is a file or a directory (one stat per path)
    3. Render the hierarchy with box-drawing connectors
    4. Annotate well-known files and directories from static lookup tables

Design Notes:
    - Nodes are a tagged variant (FileNode | DirectoryNode) rather than
      None-or-dict, so a file is never confused with an empty directory
    - Rendering re-sorts every level, so insertion order is irrelevant
    - A failed stat records the entry as a file and never aborts the build

Example:
    >>> tree = build_tree(["src/index.ts", "README.md"], "/path/to/project")
    >>> print(format_tree(tree))
    ├── src/ # Source code
    │   └── index.ts # TypeScript source
    └── README.md # Project documentation
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Sequence, Union

logger = logging.getLogger(__name__)


# Annotations for well-known directory names (keys are lowercase).
DIRECTORY_DESCRIPTIONS: Mapping[str, str] = MappingProxyType({
    # Source layout
    "src": "# Source code",
    "lib": "# Library code",
    "app": "# Application code",
    "bin": "# Executable scripts",
    "cmd": "# Command entry points",
    "pkg": "# Reusable packages",
    "internal": "# Internal packages",
    "core": "# Core logic",
    "server": "# Server code",
    "client": "# Client code",
    "backend": "# Backend application",
    "frontend": "# Frontend application",
    "api": "# API layer",
    "routes": "# Route definitions",
    "controllers": "# Request controllers",
    "middleware": "# Middleware",
    "models": "# Data models",
    "schemas": "# Data schemas",
    "services": "# Service layer",
    "utils": "# Utility functions",
    "helpers": "# Helper functions",
    "hooks": "# Custom hooks",
    "types": "# Type definitions",
    "config": "# Configuration files",
    "constants": "# Shared constants",
    "generators": "# Content generators",

    # UI
    "components": "# Reusable components",
    "pages": "# Page components",
    "views": "# View templates",
    "layouts": "# Layout components",
    "templates": "# Templates",
    "styles": "# Stylesheets",
    "store": "# State management",

    # Assets
    "public": "# Static public assets",
    "static": "# Static files",
    "assets": "# Static assets",
    "images": "# Image assets",
    "screenshots": "# Screenshots",
    "fonts": "# Font files",

    # Data and persistence
    "db": "# Database files",
    "database": "# Database files",
    "migrations": "# Database migrations",
    "seeds": "# Database seed data",
    "data": "# Data files",

    # Quality and docs
    "test": "# Test files",
    "tests": "# Test files",
    "__tests__": "# Test files",
    "spec": "# Test specifications",
    "e2e": "# End-to-end tests",
    "fixtures": "# Test fixtures",
    "docs": "# Documentation",
    "examples": "# Usage examples",
    "scripts": "# Utility scripts",
    "tools": "# Development tools",

    # Tooling and deployment
    ".github": "# GitHub configuration",
    "workflows": "# CI workflows",
    ".vscode": "# VS Code settings",
    "docker": "# Docker configuration",
    "deploy": "# Deployment configuration",
    "k8s": "# Kubernetes manifests",
})

# Annotations for well-known file names (keys are lowercase).
FILE_DESCRIPTIONS: Mapping[str, str] = MappingProxyType({
    # Documentation
    "readme.md": "# Project documentation",
    "license": "# License file",
    "license.md": "# License file",
    "changelog.md": "# Version history",
    "contributing.md": "# Contribution guidelines",
    "code_of_conduct.md": "# Code of conduct",

    # Node.js
    "package.json": "# Project dependencies and scripts",
    "package-lock.json": "# Locked dependency versions",
    "yarn.lock": "# Locked dependency versions",
    "pnpm-lock.yaml": "# Locked dependency versions",
    "tsconfig.json": "# TypeScript configuration",
    "jsconfig.json": "# JavaScript configuration",
    ".eslintrc": "# ESLint configuration",
    ".eslintrc.js": "# ESLint configuration",
    ".eslintrc.json": "# ESLint configuration",
    ".prettierrc": "# Prettier configuration",
    "jest.config.js": "# Jest configuration",
    "vite.config.js": "# Vite configuration",
    "vite.config.ts": "# Vite configuration",
    "webpack.config.js": "# Webpack configuration",
    "next.config.js": "# Next.js configuration",
    "tailwind.config.js": "# Tailwind CSS configuration",
    "babel.config.js": "# Babel configuration",

    # Python
    "requirements.txt": "# Python dependencies",
    "setup.py": "# Package setup script",
    "setup.cfg": "# Package setup configuration",
    "pyproject.toml": "# Python project configuration",
    "pipfile": "# Pipenv dependencies",
    "poetry.lock": "# Locked dependency versions",
    "manage.py": "# Django management script",

    # Other ecosystems
    "go.mod": "# Go module definition",
    "go.sum": "# Go module checksums",
    "cargo.toml": "# Rust package manifest",
    "cargo.lock": "# Locked dependency versions",
    "pom.xml": "# Maven project file",
    "build.gradle": "# Gradle build file",
    "composer.json": "# PHP dependencies",
    "gemfile": "# Ruby dependencies",
    "makefile": "# Build automation",

    # Entry points
    "index.js": "# Application entry point",
    "index.ts": "# Application entry point",
    "main.js": "# Application entry point",
    "main.ts": "# Application entry point",
    "main.py": "# Application entry point",
    "app.js": "# Application setup",
    "app.ts": "# Application setup",
    "app.py": "# Application setup",
    "server.js": "# Server entry point",
    "server.ts": "# Server entry point",

    # Environment and deployment
    ".env": "# Environment variables",
    ".env.example": "# Environment variables template",
    ".gitignore": "# Git ignore rules",
    ".dockerignore": "# Docker ignore rules",
    ".editorconfig": "# Editor configuration",
    ".autoreadme.json": "# README generator configuration",
    "dockerfile": "# Docker image definition",
    "docker-compose.yml": "# Docker Compose services",
    "docker-compose.yaml": "# Docker Compose services",
    "vercel.json": "# Vercel deployment configuration",
    "netlify.toml": "# Netlify deployment configuration",
    "procfile": "# Process definitions",
})

# Annotations by extension, including the leading dot (keys are lowercase).
EXTENSION_DESCRIPTIONS: Mapping[str, str] = MappingProxyType({
    ".js": "# JavaScript source",
    ".mjs": "# JavaScript module",
    ".cjs": "# CommonJS module",
    ".jsx": "# React component",
    ".ts": "# TypeScript source",
    ".tsx": "# React TypeScript component",
    ".vue": "# Vue component",
    ".svelte": "# Svelte component",
    ".py": "# Python source",
    ".go": "# Go source",
    ".rs": "# Rust source",
    ".java": "# Java source",
    ".kt": "# Kotlin source",
    ".php": "# PHP source",
    ".rb": "# Ruby source",
    ".c": "# C source",
    ".h": "# C header",
    ".cpp": "# C++ source",
    ".hpp": "# C++ header",
    ".cs": "# C# source",
    ".swift": "# Swift source",
    ".sh": "# Shell script",
    ".css": "# Stylesheet",
    ".scss": "# Sass stylesheet",
    ".less": "# Less stylesheet",
    ".html": "# HTML template",
    ".md": "# Markdown document",
    ".json": "# JSON data",
    ".yml": "# YAML configuration",
    ".yaml": "# YAML configuration",
    ".toml": "# TOML configuration",
    ".xml": "# XML document",
    ".sql": "# SQL script",
    ".env": "# Environment variables",
    ".png": "# Image",
    ".jpg": "# Image",
    ".jpeg": "# Image",
    ".gif": "# Image",
    ".svg": "# Vector image",
    ".webp": "# Image",
    ".ico": "# Icon",
})


@dataclass(frozen=True)
class FileNode:
    """A leaf in the tree. Carries no children."""


@dataclass
class DirectoryNode:
    """
    A directory in the tree.

    Attributes:
        children: Mapping from entry name to child node (names are unique)
    """
    children: dict[str, "Node"] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.children)


Node = Union[FileNode, DirectoryNode]


def _split_path(path: str) -> list[str]:
    """Split a relative path into non-empty segments on '/' and os.sep."""
    normalized = path.replace(os.sep, "/") if os.sep != "/" else path
    return [part for part in normalized.split("/") if part and part != "."]


def _is_directory(full_path: Path) -> bool:
    """Stat a path. Anything that cannot be stat'ed counts as a file."""
    try:
        return full_path.is_dir()
    except OSError as e:
        logger.debug("Could not stat %s, treating as file: %s", full_path, e)
        return False


def build_tree(
    paths: Sequence[str],
    root: Union[str, Path],
    max_workers: Optional[int] = None,
) -> DirectoryNode:
    """
    Build a directory tree from project-relative paths.

    Args:
        paths: Relative paths (already filtered by ignore patterns)
        root: Project root used to stat the final segment of each path
        max_workers: If set, stat paths concurrently on a thread pool

    Returns:
        Root DirectoryNode holding the full hierarchy
    """
    root_path = Path(root)
    segmented = [_split_path(p) for p in paths]
    segmented = [parts for parts in segmented if parts]
    # Shallow paths first so parents exist before their children.
    segmented.sort(key=lambda parts: (len(parts), parts))

    full_paths = [root_path.joinpath(*parts) for parts in segmented]
    if max_workers and len(full_paths) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            dir_flags = list(executor.map(_is_directory, full_paths))
    else:
        dir_flags = [_is_directory(p) for p in full_paths]

    tree = DirectoryNode()
    for parts, is_dir in zip(segmented, dir_flags):
        current = tree
        for part in parts[:-1]:
            child = current.children.get(part)
            if not isinstance(child, DirectoryNode):
                child = DirectoryNode()
                current.children[part] = child
            current = child

        leaf = parts[-1]
        if isinstance(current.children.get(leaf), DirectoryNode):
            continue
        current.children[leaf] = DirectoryNode() if is_dir else FileNode()

    return tree


def describe(name: str, is_directory: bool) -> Optional[str]:
    """
    Look up the annotation for a file or directory name.

    Exact (lowercase) name matches win. Files fall back to their
    extension. Returns None when nothing matches.
    """
    lowered = name.lower()
    if is_directory:
        return DIRECTORY_DESCRIPTIONS.get(lowered)

    description = FILE_DESCRIPTIONS.get(lowered)
    if description is not None:
        return description

    extension = os.path.splitext(lowered)[1]
    if extension:
        return EXTENSION_DESCRIPTIONS.get(extension)
    return None


def _sort_key(item: tuple[str, Node]) -> tuple[int, str, str]:
    # Case-insensitive order; on a tie lowercase sorts first ("a.txt", "A.txt").
    name, node = item
    return (0 if isinstance(node, DirectoryNode) else 1, name.casefold(), name.swapcase())


def _render(node: DirectoryNode, prefix: str, lines: list[str]) -> None:
    entries = sorted(node.children.items(), key=_sort_key)
    for index, (name, child) in enumerate(entries):
        is_last = index == len(entries) - 1
        connector = "└── " if is_last else "├── "
        is_dir = isinstance(child, DirectoryNode)

        display = f"{name}/" if is_dir else name
        description = describe(name, is_dir)
        if description:
            display = f"{display} {description}"
        lines.append(f"{prefix}{connector}{display}")

        if is_dir:
            _render(child, prefix + ("    " if is_last else "│   "), lines)


def format_tree(tree: DirectoryNode) -> str:
    """
    Render a tree as an annotated ASCII diagram.

    Directories come before files at every level, then entries are
    ordered by name. The output has one line per node and no trailing
    newline; an empty tree renders as an empty string.
    """
    lines: list[str] = []
    _render(tree, "", lines)
    return "\n".join(lines)


def count_nodes(tree: DirectoryNode) -> int:
    """Count every node below the root."""
    total = 0
    for child in tree.children.values():
        total += 1
        if isinstance(child, DirectoryNode):
            total += count_nodes(child)
    return total
