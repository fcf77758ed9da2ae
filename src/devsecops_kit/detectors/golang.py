"""Go ecosystem detection from go.mod.

The parser is deliberately minimal: it only collects module paths from
single-line "require" directives and "require ( ... )" blocks.
"""

from pathlib import Path

from devsecops_kit.detectors.base import Detector
from devsecops_kit.models.project import ProjectInfo
from devsecops_kit.utils.logging import get_logger

_logger = get_logger()

# Priority order: substring match of the module path against any dependency
GO_FRAMEWORKS: list[tuple[str, str]] = [
    ("github.com/gin-gonic/gin", "gin"),
    ("github.com/labstack/echo", "echo"),
    ("github.com/gofiber/fiber", "fiber"),
    ("github.com/gorilla/mux", "gorilla-mux"),
]


class GoDetector(Detector):
    """Detects Go projects from go.mod."""

    name = "golang"
    manifest_file = "go.mod"

    def parse_manifest(self, manifest: Path, root_dir: Path) -> ProjectInfo:
        """Parse go.mod and identify the framework.

        Args:
            manifest: Path to go.mod
            root_dir: Directory being scanned

        Returns:
            ProjectInfo for a Go project
        """
        dependencies = parse_go_mod(manifest.read_text(encoding="utf-8", errors="replace"))
        framework = detect_go_framework(dependencies)

        _logger.debug(
            f"Parsed {manifest}: {len(dependencies)} modules, "
            f"framework={framework or '(none)'}"
        )

        return ProjectInfo(
            language=self.name,
            framework=framework,
            manifest_file=self.manifest_file,
            root_dir=root_dir,
            dependencies=dependencies,
        )


def parse_go_mod(content: str) -> frozenset[str]:
    """Extract required module paths from go.mod content.

    Handles both forms:
        require github.com/foo/bar v1.2.3

        require (
            github.com/foo/bar v1.2.3
            golang.org/x/text v0.12.0 // indirect
        )

    Args:
        content: go.mod file content

    Returns:
        Set of module paths
    """
    deps: set[str] = set()
    in_require_block = False

    for raw_line in content.splitlines():
        line = raw_line.strip()

        if line.startswith("require ("):
            in_require_block = True
            continue

        if in_require_block and line.startswith(")"):
            in_require_block = False
            continue

        if line.startswith("require ") and "(" not in line:
            fields = line.split()
            if len(fields) >= 2:
                deps.add(fields[1])
            continue

        if in_require_block and line and not line.startswith("//"):
            deps.add(line.split()[0])

    return frozenset(deps)


def detect_go_framework(dependencies: frozenset[str] | set[str]) -> str:
    """Return the highest-priority framework whose module path appears in dependencies.

    Args:
        dependencies: Module paths from go.mod

    Returns:
        Framework identifier, or "" if none matched
    """
    for module_path, framework in GO_FRAMEWORKS:
        if any(module_path in dep for dep in dependencies):
            return framework
    return ""
