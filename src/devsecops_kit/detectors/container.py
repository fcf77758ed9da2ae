"""Container signal scanning (Dockerfile, docker-compose).

Runs after the winning detector has been chosen, whatever its language.
Container usage is optional metadata: nothing in this module raises.
"""

import dataclasses
from pathlib import Path

from devsecops_kit.models.project import ProjectInfo
from devsecops_kit.utils.logging import get_logger

_logger = get_logger()

DOCKERFILE = "Dockerfile"
COMPOSE_FILES = ("docker-compose.yml", "docker-compose.yaml")


def _file_exists(path: Path) -> bool:
    """Return True if a stat on path succeeds."""
    try:
        path.stat()
    except OSError:
        return False
    return True


def extract_container_images(dockerfile: Path) -> list[str]:
    """Extract base image references from FROM lines.

    "FROM image[:tag]" lines contribute their image. Lines naming a build
    stage ("FROM image AS name") are skipped.

    Args:
        dockerfile: Path to the Dockerfile

    Returns:
        Image references in file order (empty if the file cannot be read)
    """
    try:
        content = dockerfile.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        _logger.debug(f"Could not read {dockerfile}: {e}")
        return []

    images: list[str] = []
    for line in content.splitlines():
        parts = line.strip().split()
        if len(parts) < 2 or parts[0].upper() != "FROM":
            continue
        if len(parts) >= 3 and parts[2].upper() == "AS":
            continue
        images.append(parts[1])

    return images


def scan_for_container_signals(root_dir: Path, info: ProjectInfo) -> ProjectInfo:
    """Return a copy of info enriched with container signals from root_dir.

    Args:
        root_dir: Directory to scan (only its top level is checked)
        info: Detection result to enrich

    Returns:
        New ProjectInfo with has_container_artifact and container_images set
    """
    root_dir = Path(root_dir)
    has_container_artifact = info.has_container_artifact
    images = info.container_images

    dockerfile = root_dir / DOCKERFILE
    if _file_exists(dockerfile):
        has_container_artifact = True
        images = tuple(extract_container_images(dockerfile))

    for compose_name in COMPOSE_FILES:
        if _file_exists(root_dir / compose_name):
            has_container_artifact = True
            break

    if has_container_artifact:
        _logger.debug(f"Container artifacts found in {root_dir}: images={list(images)}")

    return dataclasses.replace(
        info,
        has_container_artifact=has_container_artifact,
        container_images=images,
    )
