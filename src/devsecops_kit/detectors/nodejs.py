"""Node.js ecosystem detection from package.json.

Only the top-level "name", "dependencies" and "devDependencies" fields are
read. Framework lookups are exact, case-sensitive key matches.
"""

import json
from pathlib import Path
from typing import Any

from devsecops_kit.detectors.base import Detector
from devsecops_kit.models.project import ProjectInfo
from devsecops_kit.utils.logging import get_logger

_logger = get_logger()

# Priority order: the first entry with any matching package wins
NODE_FRAMEWORKS: list[tuple[str, tuple[str, ...]]] = [
    ("nextjs", ("next",)),
    ("nestjs", ("@nestjs/core",)),
    ("express", ("express",)),
    ("react", ("react", "react-dom")),
]

DEPENDENCY_SECTIONS = ("dependencies", "devDependencies")


class NodeDetector(Detector):
    """Detects Node.js projects from package.json."""

    name = "nodejs"
    manifest_file = "package.json"

    def parse_manifest(self, manifest: Path, root_dir: Path) -> ProjectInfo:
        """Parse package.json and identify the framework.

        Args:
            manifest: Path to package.json
            root_dir: Directory being scanned

        Returns:
            ProjectInfo for a Node.js project
        """
        data = json.loads(manifest.read_text(encoding="utf-8"))
        sections = _read_sections(data)

        dependencies: set[str] = set()
        for section in sections.values():
            dependencies.update(section)

        framework = detect_node_framework(sections)

        _logger.debug(
            f"Parsed {manifest}: {len(dependencies)} dependencies, "
            f"framework={framework or '(none)'}"
        )

        return ProjectInfo(
            language=self.name,
            framework=framework,
            manifest_file=self.manifest_file,
            root_dir=root_dir,
            dependencies=frozenset(dependencies),
        )


def _read_sections(data: Any) -> dict[str, dict[str, str]]:
    """Validate the package.json shape and return its dependency maps.

    Raises:
        ValueError: If the document does not match the expected shape
    """
    if not isinstance(data, dict):
        raise ValueError("package.json must contain a JSON object")

    name = data.get("name")
    if name is not None and not isinstance(name, str):
        raise ValueError("package.json 'name' must be a string")

    sections: dict[str, dict[str, str]] = {}
    for key in DEPENDENCY_SECTIONS:
        section = data.get(key)
        if section is None:
            sections[key] = {}
            continue
        if not isinstance(section, dict):
            raise ValueError(f"package.json '{key}' must be an object")
        for dep_name, version in section.items():
            if not isinstance(version, str):
                raise ValueError(f"package.json '{key}.{dep_name}' must be a version string")
        sections[key] = section

    return sections


def detect_node_framework(sections: dict[str, dict[str, str]]) -> str:
    """Return the highest-priority framework declared in any dependency map.

    Args:
        sections: Dependency maps keyed by section name

    Returns:
        Framework identifier, or "" if none matched
    """
    for framework, packages in NODE_FRAMEWORKS:
        for package in packages:
            if any(package in section for section in sections.values()):
                return framework
    return ""
