"""Environment readiness checks for the diagnose command.

Looks up the security scanners the generated workflow runs (Semgrep,
Gitleaks, Trivy) and the Docker CLI. Missing tools are reported, never
fatal: the workflow installs its scanners on the CI runner.
"""

import shutil
import subprocess
from dataclasses import dataclass, field
from typing import Any

from devsecops_kit.config import ToolsConfig
from devsecops_kit.utils.logging import get_logger

_logger = get_logger()


@dataclass(frozen=True)
class ToolSpec:
    """How to locate and query one external tool."""

    name: str
    label: str
    command: str
    version_args: tuple[str, ...] = ("--version",)
    install_hint: str = ""


KNOWN_TOOLS: dict[str, ToolSpec] = {
    "semgrep": ToolSpec(
        name="semgrep",
        label="Semgrep",
        command="semgrep",
        install_hint="Install from: https://semgrep.dev/docs/getting-started/",
    ),
    "gitleaks": ToolSpec(
        name="gitleaks",
        label="Gitleaks",
        command="gitleaks",
        version_args=("version",),
        install_hint="Install from: https://github.com/gitleaks/gitleaks",
    ),
    "trivy": ToolSpec(
        name="trivy",
        label="Trivy",
        command="trivy",
        install_hint="Install from: https://trivy.dev/latest/getting-started/installation/",
    ),
    "docker": ToolSpec(
        name="docker",
        label="Docker",
        command="docker",
        install_hint="Install from: https://docs.docker.com/get-docker/",
    ),
}


@dataclass
class ToolCheck:
    """Result of checking a single tool.

    Attributes:
        name: Tool name
        label: Display name
        available: Whether the tool is on PATH
        version: First line of the version output, if available
        path: Path to executable if available
        message: Status message (install hint when missing)
    """

    name: str
    label: str
    available: bool
    version: str | None = None
    path: str | None = None
    message: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "name": self.name,
            "label": self.label,
            "available": self.available,
            "version": self.version,
            "path": self.path,
            "message": self.message,
        }


@dataclass
class PreflightResult:
    """Aggregated tool checks.

    Attributes:
        checks: Individual tool check results
        warnings: One message per missing tool
    """

    checks: list[ToolCheck] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def all_available(self) -> bool:
        """Return True if every checked tool was found."""
        return all(c.available for c in self.checks)

    def add_check(self, check: ToolCheck) -> None:
        """Add a tool check result."""
        self.checks.append(check)
        if not check.available:
            self.warnings.append(f"{check.label} not found on PATH")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "all_available": self.all_available,
            "checks": [c.to_dict() for c in self.checks],
            "warnings": self.warnings,
        }


class PreflightChecker:
    """Checks external tool availability.

    Usage:
        checker = PreflightChecker()
        result = checker.check_all(config.tools)
        for warning in result.warnings:
            ...
    """

    def __init__(self, timeout: int = 10) -> None:
        """Initialize preflight checker.

        Args:
            timeout: Timeout in seconds for version probes
        """
        self.timeout = timeout

    def check_command_available(self, command: str) -> tuple[bool, str | None]:
        """Check if a command is available in PATH.

        Returns:
            Tuple of (available, path)
        """
        path = shutil.which(command)
        return path is not None, path

    def get_command_version(
        self,
        command: str,
        version_args: tuple[str, ...] = ("--version",),
    ) -> str | None:
        """Get the first line of a command's version output.

        Returns:
            Version string if available, None otherwise
        """
        try:
            result = subprocess.run(
                [command, *version_args],
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except (subprocess.TimeoutExpired, OSError) as e:
            _logger.debug(f"Version probe failed for {command}: {e}")
            return None

        if result.returncode != 0:
            return None
        output = result.stdout.strip() or result.stderr.strip()
        return output.split("\n")[0] if output else None

    def check_tool(self, spec: ToolSpec) -> ToolCheck:
        """Check a single tool.

        Args:
            spec: Tool to look up

        Returns:
            ToolCheck result
        """
        available, path = self.check_command_available(spec.command)
        if not available:
            return ToolCheck(
                name=spec.name,
                label=spec.label,
                available=False,
                message=spec.install_hint,
            )

        return ToolCheck(
            name=spec.name,
            label=spec.label,
            available=True,
            version=self.get_command_version(spec.command, spec.version_args),
            path=path,
        )

    def check_all(
        self,
        tools: ToolsConfig | None = None,
        include_docker: bool = True,
    ) -> PreflightResult:
        """Check every enabled scanner, then Docker.

        Args:
            tools: Enabled scanners (all enabled if None)
            include_docker: Whether to check the Docker CLI

        Returns:
            PreflightResult with all check results
        """
        tools = tools or ToolsConfig()
        result = PreflightResult()

        for name in tools.enabled():
            result.add_check(self.check_tool(KNOWN_TOOLS[name]))

        if include_docker:
            result.add_check(self.check_tool(KNOWN_TOOLS["docker"]))

        return result
