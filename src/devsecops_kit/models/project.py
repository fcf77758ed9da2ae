"""Project detection entities.

ProjectInfo is the single value the detection engine hands to its callers.
It is frozen: the container scan produces an enriched copy instead of
mutating the detector's result.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class ProjectInfo:
    """Resolved description of a project.

    Attributes:
        language: Canonical language identifier (nodejs, golang)
        framework: Framework identifier, empty string if none recognized
        manifest_file: Manifest file name used for detection (package.json, go.mod)
        root_dir: Absolute path of the scanned directory
        dependencies: Coarse set of declared dependency names (unvalidated)
        has_container_artifact: True if a Dockerfile or compose file was found
        container_images: Image references from the Dockerfile, in file order
    """

    language: str
    manifest_file: str
    root_dir: Path
    framework: str = ""
    dependencies: frozenset[str] = field(default_factory=frozenset)
    has_container_artifact: bool = False
    container_images: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate and normalize field types."""
        if not self.language:
            raise ValueError("ProjectInfo.language must not be empty")

        # Accept any iterable from detectors but store immutable collections
        object.__setattr__(self, "root_dir", Path(self.root_dir))
        object.__setattr__(self, "dependencies", frozenset(self.dependencies))
        object.__setattr__(self, "container_images", tuple(self.container_images))

    @property
    def has_framework(self) -> bool:
        """Return True if a known framework was recognized."""
        return bool(self.framework)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "language": self.language,
            "framework": self.framework,
            "manifest_file": self.manifest_file,
            "root_dir": str(self.root_dir),
            "dependencies": sorted(self.dependencies),
            "has_container_artifact": self.has_container_artifact,
            "container_images": list(self.container_images),
        }
