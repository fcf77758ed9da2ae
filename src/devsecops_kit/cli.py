"""DevSecOps Kit CLI interface.

Commands:
- detect: Detect project language, framework and container usage
- diagnose: Check project detection and security tool availability
- version: Print the version number

Global options:
- --config: Path to configuration file
- --verbose: Enable verbose output with timestamps
- --quiet: Suppress info messages
- --ci: JSON log lines for CI/CD
- --version: Show version and exit
"""

import json
import logging
from pathlib import Path
from typing import Annotated

import typer

from devsecops_kit import __version__
from devsecops_kit.config import KitConfig, load_config, normalize_severity
from devsecops_kit.detectors import NoSupportedProjectError, resolve_project
from devsecops_kit.models import ProjectInfo
from devsecops_kit.utils.logging import configure_from_cli, get_logger

app = typer.Typer(
    name="devsecops",
    help="DevSecOps Kit - generate security pipelines for your project",
    add_completion=False,
    no_args_is_help=True,
)

# Global state
_config: KitConfig | None = None
_logger = get_logger()

PathOption = Annotated[
    Path,
    typer.Option(
        "--path",
        "-p",
        help="Project root path (default: current directory)",
        exists=True,
        file_okay=False,
    ),
]

JsonOption = Annotated[
    bool,
    typer.Option(
        "--json",
        help="Output results as JSON",
    ),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"DevSecOps Kit version {__version__}")
        raise typer.Exit()


def _get_config() -> KitConfig:
    return _config if _config is not None else KitConfig()


@app.callback()
def main(
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output with timestamps",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress info messages (warnings and errors only)",
        ),
    ] = False,
    ci: Annotated[
        bool,
        typer.Option(
            "--ci",
            help="Enable CI mode with JSON log output",
        ),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """DevSecOps Kit - detect your project type and scaffold security scanning.

    An opinionated CLI that detects your project type and generates
    GitHub Actions workflows and configuration for security scanning.
    """
    global _config

    configure_from_cli(verbose=verbose, quiet=quiet, ci=ci)

    try:
        _config = load_config(config_path=config)
    except FileNotFoundError as e:
        _logger.error(str(e))
        raise typer.Exit(1)
    except (ValueError, OSError) as e:
        _logger.error(f"Failed to load config: {e}")
        raise typer.Exit(1)

    if _config.config_path:
        _logger.debug(f"Loaded config from: {_config.config_path}")

    # The config file can turn on JSON logs even without --ci
    if _config.ci.json_output and not ci:
        configure_from_cli(verbose=verbose, quiet=quiet, ci=True)


# =============================================================================
# detect command
# =============================================================================


def _print_project(project: ProjectInfo) -> None:
    typer.echo("✅ Detection result:")
    typer.echo(f"  Language:   {project.language}")
    typer.echo(f"  Framework:  {project.framework or '(none)'}")
    typer.echo(f"  Package:    {project.manifest_file}")
    typer.echo(f"  RootDir:    {project.root_dir}")
    typer.echo(f"  Dependencies detected: {len(project.dependencies)}")
    typer.echo(f"  Docker:     {'yes' if project.has_container_artifact else 'no'}")
    for image in project.container_images:
        typer.echo(f"     └─ {image}")


@app.command()
def detect(
    path: PathOption = Path("."),
    json_output: JsonOption = False,
    severity: Annotated[
        str | None,
        typer.Option(
            "--severity",
            "-s",
            help="Severity threshold override (low, medium, high, critical)",
        ),
    ] = None,
) -> None:
    """Detect project language and framework.

    Exit codes:
        0: A supported project type was detected
        1: No supported project type found
    """
    root = path.resolve()
    config = _get_config()
    severity_threshold = (
        normalize_severity(severity) if severity is not None else config.severity_threshold
    )

    if not json_output:
        typer.echo(f"🔍 Detecting project type in: {root}")

    try:
        project = resolve_project(root)
    except NoSupportedProjectError as e:
        _logger.error(str(e))
        raise typer.Exit(1)

    _logger.structured(
        logging.DEBUG,
        "Project detected",
        language=project.language,
        framework=project.framework,
        has_container_artifact=project.has_container_artifact,
    )

    if json_output:
        payload = {
            "project": project.to_dict(),
            "severity_threshold": severity_threshold,
            "tools": config.tools.enabled(),
        }
        typer.echo(json.dumps(payload, indent=2))
        return

    _print_project(project)
    typer.echo(f"  Severity:   {severity_threshold}")
    typer.echo(f"  Tools:      {', '.join(config.tools.enabled()) or '(none)'}")


# =============================================================================
# diagnose command
# =============================================================================


@app.command()
def diagnose(
    path: PathOption = Path("."),
    json_output: JsonOption = False,
) -> None:
    """Check DevSecOps environment and project readiness.

    Checks project type detection (Node.js / Go), the enabled scanners
    (Semgrep, Gitleaks, Trivy) and the Docker CLI. Missing tools are
    informational, so the exit code is 0 whenever the checks ran.
    """
    from devsecops_kit.utils.preflight import PreflightChecker

    root = path.resolve()
    config = _get_config()

    project: ProjectInfo | None = None
    detection_error: str | None = None
    try:
        project = resolve_project(root)
    except NoSupportedProjectError as e:
        detection_error = str(e)

    checker = PreflightChecker(timeout=config.ci.timeout)
    tools_result = checker.check_all(config.tools)

    if json_output:
        payload = {
            "root": str(root),
            "project": project.to_dict() if project else None,
            "detection_error": detection_error,
            "tools": tools_result.to_dict(),
        }
        typer.echo(json.dumps(payload, indent=2))
        return

    typer.echo("🩺 DevSecOps Kit Diagnose")
    typer.echo("-------------------------")
    typer.echo(f"Project root: {root}\n")

    typer.echo("🔍 Project detection")
    if project is None:
        typer.echo(f"  ❌ Failed to detect project: {detection_error}\n")
    else:
        typer.echo("  ✅ Detection succeeded:")
        typer.echo(f"     • Language:  {project.language}")
        typer.echo(f"     • Framework: {project.framework or '(none)'}")
        typer.echo(f"     • Package:   {project.manifest_file}")
        typer.echo(f"     • RootDir:   {project.root_dir}\n")

    typer.echo("🛠 Tool checks")
    for check in tools_result.checks:
        if check.available:
            version_str = f" ({check.version})" if check.version else ""
            typer.echo(f"  ✅ {check.label}: found at {check.path}{version_str}")
        else:
            typer.echo(f"  ⚠️  {check.label}: NOT found on PATH")
            if check.message:
                typer.echo(f"     └─ {check.message}")

    typer.echo()
    typer.echo("✅ Diagnose finished.")
    if tools_result.warnings:
        typer.echo(
            "If some tools are missing (⚠️), install them or adjust your pipeline configuration."
        )


# =============================================================================
# version command
# =============================================================================


@app.command()
def version() -> None:
    """Print the version number."""
    typer.echo(f"DevSecOps Kit version {__version__}")
