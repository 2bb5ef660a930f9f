"""
README content generators.

Each generator inspects the project on disk and returns one piece of the
README. Generators never raise on bad input files: they log and fall back to
a documented default so a single broken file cannot block generation.

Available Generators:
    - generate_folder_structure: Annotated ASCII tree of the project
    - extract_features: Feature labels from comments and code signatures
    - detect_routes: HTTP routes (Express, Next.js, FastAPI)
    - get_screenshots: Images from the conventional screenshot folders
    - analyze_project_structure: Applications, technologies, databases
"""

from autoreadme.generators.analyzer import analyze_project_structure
from autoreadme.generators.features import extract_features
from autoreadme.generators.routes import Route, detect_routes
from autoreadme.generators.screenshots import get_screenshots
from autoreadme.generators.structure import STRUCTURE_ERROR, generate_folder_structure

__all__ = [
    "Route",
    "STRUCTURE_ERROR",
    "analyze_project_structure",
    "detect_routes",
    "extract_features",
    "generate_folder_structure",
    "get_screenshots",
]
