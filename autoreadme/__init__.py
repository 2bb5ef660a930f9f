"""
autoreadme - README generation from a project's files.

Scans a project directory, detects frameworks, features and API routes,
builds an annotated folder tree, and renders a README.md from templates.
"""

__version__ = "0.1.0"
