"""Project resolution: pick one detection result and enrich it.

Every registered detector runs once. Declines are expected and only logged.
The highest confidence wins; on a tie the earlier registration wins, since a
result only replaces the current best with a strictly greater confidence.
With today's detectors (95 or decline) a tie cannot happen, but the rule
holds for any detector reporting partial confidence.
"""

from pathlib import Path

from devsecops_kit.detectors.base import DetectorDeclined, NoSupportedProjectError
from devsecops_kit.detectors.container import scan_for_container_signals
from devsecops_kit.detectors.registry import DetectorRegistry, get_registry
from devsecops_kit.models.project import ProjectInfo
from devsecops_kit.utils.logging import get_logger

_logger = get_logger()


def resolve_project(
    root_dir: Path | str,
    registry: DetectorRegistry | None = None,
) -> ProjectInfo:
    """Detect the project type of root_dir.

    Args:
        root_dir: Directory to scan (made absolute if relative)
        registry: Detector registry (uses the global registry if None)

    Returns:
        ProjectInfo of the best-matching detector, with container signals merged

    Raises:
        NoSupportedProjectError: If every detector declined or reported zero confidence
    """
    root = Path(root_dir).absolute()
    if registry is None:
        registry = get_registry()

    best_match: ProjectInfo | None = None
    best_confidence = 0
    best_detector = ""

    for detector in registry.create_detectors():
        try:
            info = detector.detect(root)
        except DetectorDeclined as e:
            _logger.debug(str(e))
            continue

        confidence = detector.confidence
        _logger.debug(f"{detector.name} detector matched with confidence {confidence}")

        if confidence > best_confidence:
            best_match = info
            best_confidence = confidence
            best_detector = detector.name

    if best_match is None:
        raise NoSupportedProjectError(root)

    _logger.debug(
        f"Resolved project as {best_match.language} via {best_detector} "
        f"(confidence {best_confidence})"
    )

    return scan_for_container_signals(root, best_match)
