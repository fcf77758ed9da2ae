"""DevSecOps Kit detectors - project language and framework detection.

Detectors:
- NodeDetector: package.json (nodejs)
- GoDetector: go.mod (golang)

The resolver runs every registered detector, keeps the most confident
result and merges in container signals (Dockerfile, docker-compose).
"""

from devsecops_kit.detectors.base import (
    HIGH_CONFIDENCE,
    DetectionError,
    Detector,
    DetectorDeclined,
    NoSupportedProjectError,
)
from devsecops_kit.detectors.container import (
    extract_container_images,
    scan_for_container_signals,
)
from devsecops_kit.detectors.golang import GoDetector
from devsecops_kit.detectors.nodejs import NodeDetector
from devsecops_kit.detectors.registry import (
    DetectorRegistry,
    get_registry,
    reset_registry,
    setup_default_detectors,
)
from devsecops_kit.detectors.resolver import resolve_project

__all__ = [
    "HIGH_CONFIDENCE",
    "DetectionError",
    "Detector",
    "DetectorDeclined",
    "DetectorRegistry",
    "GoDetector",
    "NodeDetector",
    "NoSupportedProjectError",
    "extract_container_images",
    "get_registry",
    "reset_registry",
    "resolve_project",
    "scan_for_container_signals",
    "setup_default_detectors",
]
