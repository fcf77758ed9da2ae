"""Abstract base class for project detectors.

All detectors MUST implement this interface. Each detector:
1. Looks for exactly one manifest file directly inside the root directory
2. Extracts a flat set of declared dependency names
3. Matches the dependencies against its framework table
4. Records a confidence score for the resolver

Adding a new ecosystem MUST NOT require changes outside the detector module
and its registration.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from devsecops_kit.models.project import ProjectInfo

# Manifest present and parsed. Framework absence does not lower it.
HIGH_CONFIDENCE = 95


class Detector(ABC):
    """Abstract interface for manifest-based ecosystem detection.

    Attributes:
        name: Detector identifier (e.g., "nodejs", "golang")
        manifest_file: Canonical manifest file name looked up in the root directory
        confidence: Confidence (0-100) recorded by the most recent detect() call
    """

    name: str = ""
    manifest_file: str = ""

    def __init__(self) -> None:
        """Initialize the detector with zero confidence."""
        self._confidence = 0

    @property
    def confidence(self) -> int:
        """Confidence recorded by the most recent detect() call (0 if none or declined)."""
        return self._confidence

    def manifest_path(self, root_dir: Path) -> Path:
        """Return the manifest location for a root directory (no upward search)."""
        return Path(root_dir) / self.manifest_file

    def detect(self, root_dir: Path) -> ProjectInfo:
        """Inspect root_dir and return a ProjectInfo without container fields.

        Args:
            root_dir: Directory to inspect

        Returns:
            Populated ProjectInfo

        Raises:
            DetectorDeclined: If the manifest is missing, unreadable or unparseable
        """
        self._confidence = 0
        root_dir = Path(root_dir)
        manifest = self.manifest_path(root_dir)

        if not manifest.exists():
            raise DetectorDeclined(self.name, f"{self.manifest_file} not found")

        try:
            info = self.parse_manifest(manifest, root_dir)
        except DetectorDeclined:
            raise
        except (OSError, UnicodeDecodeError, ValueError, RecursionError) as e:
            raise DetectorDeclined(self.name, f"failed to parse {manifest}: {e}") from e

        self._confidence = HIGH_CONFIDENCE
        return info

    @abstractmethod
    def parse_manifest(self, manifest: Path, root_dir: Path) -> ProjectInfo:
        """Parse the manifest and build the detection result.

        Implementations raise OSError, UnicodeDecodeError or ValueError on
        unreadable or malformed input, and a decoder may hit RecursionError on
        pathologically nested input; detect() turns those into a decline.

        Args:
            manifest: Path to the manifest file
            root_dir: Directory being scanned

        Returns:
            Populated ProjectInfo
        """
        pass


class DetectionError(Exception):
    """Base class for project detection errors."""


class DetectorDeclined(DetectionError):
    """Raised when a detector does not recognize the project.

    Recoverable: the resolver moves on to the next detector.
    """

    def __init__(self, detector: str, reason: str) -> None:
        self.detector = detector
        self.reason = reason
        super().__init__(f"{detector} detector declined: {reason}")


class NoSupportedProjectError(DetectionError):
    """Raised when no registered detector recognized the project."""

    def __init__(self, root_dir: Path | str | None = None) -> None:
        self.root_dir = root_dir
        message = "no supported project type detected"
        if root_dir is not None:
            message += f" in {root_dir}"
        super().__init__(message)
