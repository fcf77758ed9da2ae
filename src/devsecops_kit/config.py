"""DevSecOps Kit configuration system.

Configuration is YAML-based with a few CLI overrides (--config, --ci, --severity).
Supports environment variable substitution (${VAR}) in config files.

The severity threshold and tool flags are passed through to the generators
that consume the detected ProjectInfo.

Configuration file discovery (in priority order):
1. CLI --config argument
2. ./.devsecops/config.yaml
3. ./devsecops.yaml
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from devsecops_kit.utils.logging import get_logger

_logger = get_logger()

SEVERITY_LEVELS = ("low", "medium", "high", "critical")
DEFAULT_SEVERITY = "high"

# =============================================================================
# Configuration Dataclasses
# =============================================================================


@dataclass
class ToolsConfig:
    """Security scanners enabled in the generated workflow.

    Attributes:
        semgrep: Static analysis (SAST)
        gitleaks: Secret scanning
        trivy: Dependency and container image scanning
    """

    semgrep: bool = True
    gitleaks: bool = True
    trivy: bool = True

    def enabled(self) -> list[str]:
        """Return the names of enabled tools, in a fixed order."""
        return [
            name
            for name, on in (
                ("semgrep", self.semgrep),
                ("gitleaks", self.gitleaks),
                ("trivy", self.trivy),
            )
            if on
        ]


@dataclass
class CIConfig:
    """CI/CD-specific configuration.

    Attributes:
        json_output: Use JSON log output
        timeout: Timeout for external tool version probes in seconds
    """

    json_output: bool = False
    timeout: int = 10


@dataclass
class KitConfig:
    """Top-level DevSecOps Kit configuration.

    Attributes:
        severity_threshold: Minimum finding severity that fails the pipeline
        tools: Enabled security scanners
        ci: CI/CD settings
    """

    severity_threshold: str = DEFAULT_SEVERITY
    tools: ToolsConfig = field(default_factory=ToolsConfig)
    ci: CIConfig = field(default_factory=CIConfig)

    # Set by load_config
    _config_path: Path | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        """Validate the severity threshold."""
        severity = str(self.severity_threshold).lower()
        if severity not in SEVERITY_LEVELS:
            raise ValueError(
                f"Invalid severity threshold: {self.severity_threshold}. "
                f"Valid: {', '.join(SEVERITY_LEVELS)}"
            )
        self.severity_threshold = severity

    @property
    def config_path(self) -> Path | None:
        """Get the path to the config file that was loaded."""
        return self._config_path


def normalize_severity(value: str | None) -> str:
    """Normalize a user-supplied severity, falling back to the default.

    Unknown values are not an error: a warning is logged and "high" is used.

    Args:
        value: Severity from a CLI flag

    Returns:
        One of low, medium, high, critical
    """
    if not value:
        return DEFAULT_SEVERITY
    severity = value.strip().lower()
    if severity not in SEVERITY_LEVELS:
        _logger.warning(f"Unknown severity '{value}', defaulting to '{DEFAULT_SEVERITY}'")
        return DEFAULT_SEVERITY
    return severity


# =============================================================================
# Environment Variable Substitution
# =============================================================================

_ENV_PATTERN = re.compile(r"\$\{([^}]+)\}")


def substitute_env_vars(value: Any) -> Any:
    """Substitute ${VAR} references in config values.

    Args:
        value: Config value (string, dict, list, or other)

    Returns:
        Value with environment variables substituted

    Raises:
        ValueError: If a referenced variable is not set
    """
    if isinstance(value, str):

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is None:
                raise ValueError(f"Environment variable not set: {var_name}")
            return env_value

        return _ENV_PATTERN.sub(replace_var, value)

    elif isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [substitute_env_vars(v) for v in value]

    return value


# =============================================================================
# Config File Discovery
# =============================================================================


def find_config_file(start_path: Path | None = None) -> Path | None:
    """Find configuration file in standard locations.

    Args:
        start_path: Directory to search (defaults to cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_path is None:
        start_path = Path.cwd()

    start_path = start_path.resolve()

    candidates = [
        start_path / ".devsecops" / "config.yaml",
        start_path / "devsecops.yaml",
    ]

    for candidate in candidates:
        if candidate.is_file():
            return candidate

    return None


# =============================================================================
# Config Loading
# =============================================================================


def _as_bool(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in {"true", "false", "yes", "no"}:
        return value.lower() in {"true", "yes"}
    raise ValueError(f"Config value '{name}' must be a boolean (got {value!r})")


def _as_int(value: Any, name: str) -> int:
    # bool is an int subclass, but "timeout: true" is a mistake
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    raise ValueError(f"Config value '{name}' must be an integer (got {value!r})")


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ValueError(f"Config section '{name}' must be a mapping (got {section!r})")
    return section


def load_config_from_dict(data: dict[str, Any]) -> KitConfig:
    """Load configuration from a dictionary.

    Args:
        data: Configuration dictionary

    Returns:
        KitConfig instance

    Raises:
        ValueError: If a value is invalid
    """
    data = substitute_env_vars(data)
    defaults = KitConfig()

    tools = defaults.tools
    if "tools" in data:
        tools_data = _section(data, "tools")
        tools = ToolsConfig(
            semgrep=_as_bool(tools_data.get("semgrep", True), "tools.semgrep"),
            gitleaks=_as_bool(tools_data.get("gitleaks", True), "tools.gitleaks"),
            trivy=_as_bool(tools_data.get("trivy", True), "tools.trivy"),
        )

    ci = defaults.ci
    if "ci" in data:
        ci_data = _section(data, "ci")
        ci = CIConfig(
            json_output=_as_bool(ci_data.get("json_output", False), "ci.json_output"),
            timeout=_as_int(ci_data.get("timeout", defaults.ci.timeout), "ci.timeout"),
        )

    return KitConfig(
        severity_threshold=data.get("severity_threshold", DEFAULT_SEVERITY),
        tools=tools,
        ci=ci,
    )


def load_config(
    config_path: Path | None = None,
    auto_discover: bool = True,
) -> KitConfig:
    """Load configuration from file.

    Args:
        config_path: Explicit path to config file
        auto_discover: Whether to search for config file if not specified

    Returns:
        KitConfig instance (defaults if no file was found)

    Raises:
        FileNotFoundError: If config_path specified but doesn't exist
        ValueError: If the file is not a YAML mapping or holds invalid values
    """
    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        found_path: Path | None = config_path
    elif auto_discover:
        found_path = find_config_file()
    else:
        found_path = None

    if found_path is None:
        return KitConfig()

    with open(found_path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {found_path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a YAML mapping: {found_path}")

    config = load_config_from_dict(data)
    config._config_path = found_path
    return config
