"""
autoreadme Markdown Renderer

This module generates README.md content from a gathered ProjectInfo.
Each section is produced by its own method and appended in a fixed order;
sections without data are skipped rather than rendered empty.

Output Structure:
    1. Title and description
    2. Quick Start (prerequisites, installation, environment setup)
    3. Development commands (from package.json scripts)
    4. Screenshots
    5. Project overview (applications, technologies, databases)
    6. Features
    7. API endpoints
    8. Project structure tree
    9. Available scripts
    10. Usage
    11. Contributing (when the contributingGuide feature is enabled)
    12. License and acknowledgments
"""

from typing import Optional

from autoreadme.config import CONTRIBUTING_GUIDE, Config
from autoreadme.schema import ProjectInfo

FENCE = "```"


def code_block(command: str, language: str = "bash", indent: str = "") -> str:
    """Wrap a command in a fenced code block."""
    return f"{indent}{FENCE}{language}\n{indent}{command}\n{indent}{FENCE}"


class ReadmeRenderer:
    """
    Renders a ProjectInfo into Markdown README content.

    Usage:
        renderer = ReadmeRenderer(info, config)
        readme_content = renderer.render()
    """

    def __init__(self, info: ProjectInfo, config: Optional[Config] = None):
        """
        Initialize the renderer.

        Args:
            info: The gathered project information
            config: Generation settings (defaults if not provided)
        """
        self.info = info
        self.config = config or Config()
        self._sections: list[str] = []

    def render(self) -> str:
        """
        Generate the complete README content.

        Returns:
            The rendered README as a Markdown string
        """
        self._sections = []

        self._add_title_section()
        self._add_description_section()
        self._add_quick_start_section()
        self._add_development_commands_section()
        self._add_screenshots_section()
        self._add_overview_section()
        self._add_features_section()
        self._add_api_routes_section()
        self._add_project_structure_section()
        self._add_scripts_section()
        self._add_usage_section()
        self._add_contributing_section()
        self._add_license_section()
        self._add_acknowledgments_section()

        return "\n".join(self._sections)

    def _add(self, *lines: str) -> None:
        self._sections.extend(lines)

    @property
    def _scripts(self) -> dict[str, str]:
        if self.info.package_info is None:
            return {}
        return self.info.package_info.scripts

    def _add_title_section(self) -> None:
        self._add(f"# {self.info.project_name}")

    def _add_description_section(self) -> None:
        if self.info.description:
            self._add(f"\n{self.info.description}")

    def _add_quick_start_section(self) -> None:
        """Prerequisites, installation steps and environment setup."""
        self._add("\n## 🚀 Quick Start")

        self._add("\n### Prerequisites")
        self._add("\nBefore you begin, ensure you have the following installed:")
        package = self.info.package_info
        if package is not None:
            self._add("- [Node.js](https://nodejs.org/) (version 14 or higher)")
            self._add("- [npm](https://www.npmjs.com/) or [yarn](https://yarnpkg.com/)")
            if "python" in package.dependencies:
                self._add("- [Python](https://www.python.org/) (version 3.7 or higher)")
            if "docker" in package.dependencies:
                self._add("- [Docker](https://www.docker.com/)")
        else:
            self._add("- Check the project requirements in the documentation")

        self._add("\n### Installation")
        if self.info.git_url:
            self._add(
                "\n1. **Clone the repository:**\n"
                + code_block(f"git clone {self.info.git_url}")
            )
            self._add(
                "\n2. **Navigate to the project directory:**\n"
                + code_block(f"cd {self.info.project_name}")
            )
        self._add("\n3. **Install dependencies:**\n" + code_block("npm install"))

        self._add("\n4. **Environment Setup:**")
        self._add(
            f"{FENCE}bash",
            "# Copy environment variables",
            "cp .env.example .env",
            "",
            "# Edit the .env file with your configuration",
            "nano .env",
            FENCE,
        )

    def _add_development_commands_section(self) -> None:
        scripts = self._scripts
        if not scripts:
            return

        self._add("\n### Development Commands")
        if "dev" in scripts:
            self._add("\n**Start development server:**\n" + code_block("npm run dev"))
        elif "start" in scripts:
            self._add("\n**Start the application:**\n" + code_block("npm start"))
        if "build" in scripts:
            self._add("\n**Build for production:**\n" + code_block("npm run build"))
        if "test" in scripts:
            self._add("\n**Run tests:**\n" + code_block("npm test"))
        if "lint" in scripts:
            self._add("\n**Run linting:**\n" + code_block("npm run lint"))

    def _add_screenshots_section(self) -> None:
        if not self.info.screenshots:
            return
        self._add("\n## 📸 Screenshots")
        for screenshot in self.info.screenshots:
            self._add(f"\n![{screenshot.name}]({screenshot.path})")

    def _add_overview_section(self) -> None:
        """Project type, stack and per-application summaries."""
        structure = self.info.project_structure
        if structure is None:
            return

        self._add("\n## 🏗️ Project Overview")
        self._add(f"\n**Project Type:** {structure.type}")
        if structure.main_technologies:
            self._add(f"\n**Technologies:** {', '.join(structure.main_technologies)}")
        if structure.databases:
            self._add(f"\n**Databases:** {', '.join(structure.databases)}")

        for app in structure.applications:
            self._add(f"\n### {app.name} ({app.framework})")
            self._add(f"\n{app.description}")
            for feature in app.features:
                self._add(f"- {feature}")

    def _add_features_section(self) -> None:
        if not self.info.extracted_features:
            return
        self._add("\n## ✨ Features")
        for feature in self.info.extracted_features:
            self._add(f"- {feature}")

    def _add_api_routes_section(self) -> None:
        if not self.info.api_routes:
            return

        self._add("\n## 🛣️ API Endpoints")
        for method, routes in self.info.api_routes.items():
            self._add(f"\n### {method} Routes")
            for route in routes:
                self._add(f"- `{method} {route.path}`")
                if "/api/" in route.path:
                    self._add(code_block(
                        f"curl -X {method} http://localhost:3000{route.path}",
                        indent="  ",
                    ))

    def _add_project_structure_section(self) -> None:
        # The error string is embedded too; only a disabled feature skips this.
        if self.info.folder_structure is None:
            return
        self._add("\n## 📁 Project Structure")
        self._add(FENCE, self.info.folder_structure, FENCE)

    def _add_scripts_section(self) -> None:
        scripts = self._scripts
        if not scripts:
            return
        self._add("\n## 📋 Available Scripts")
        for script, command in scripts.items():
            self._add(f"\n### `npm run {script}`\n" + code_block(command))

    def _add_usage_section(self) -> None:
        self._add("\n## 💻 Usage")
        scripts = self._scripts
        if "start" in scripts:
            self._add("\n1. Start the application:\n" + code_block("npm start"))
        elif "dev" in scripts:
            self._add("\n1. Start the development server:\n" + code_block("npm run dev"))
        else:
            return
        self._add("\n2. Open your browser and navigate to `http://localhost:3000`")

    def _add_contributing_section(self) -> None:
        if not self.config.has_feature(CONTRIBUTING_GUIDE):
            return
        self._add("\n## 🤝 Contributing")
        self._add(
            "\n1. Fork the repository\n"
            "2. Create your feature branch (`git checkout -b feature/AmazingFeature`)\n"
            "3. Commit your changes (`git commit -m 'Add some AmazingFeature'`)\n"
            "4. Push to the branch (`git push origin feature/AmazingFeature`)\n"
            "5. Open a Pull Request"
        )

    def _add_license_section(self) -> None:
        self._add("\n## 📄 License")
        self._add(
            f"\nThis project is licensed under the {self.info.license} License"
            " - see the [LICENSE](LICENSE) file for details."
        )

    def _add_acknowledgments_section(self) -> None:
        self._add("\n## 🙏 Acknowledgments")
        self._add(
            "\n- Built with ❤️ using modern technologies\n"
            "- README generated with autoreadme"
        )


def render_readme(info: ProjectInfo, config: Optional[Config] = None) -> str:
    """
    Convenience function to render a README.

    Args:
        info: The gathered project information
        config: Generation settings (defaults if not provided)

    Returns:
        The rendered README as a Markdown string
    """
    return ReadmeRenderer(info, config).render()
