"""Detector registry for pluggable ecosystem detection.

The registry keeps detector classes in registration order. That order is the
resolver's tie-break when two detectors report the same confidence.
"""

from typing import Any

from devsecops_kit.detectors.base import Detector


class DetectorRegistry:
    """Ordered registry of detector classes.

    Adding a new ecosystem:
        1. Implement the Detector interface (manifest_file, parse_manifest)
        2. Build a ProjectInfo from the parsed manifest
        3. Register it here
        4. No changes needed to the resolver
    """

    def __init__(self) -> None:
        """Initialize empty registry."""
        self._detectors: dict[str, type[Detector]] = {}

    # =========================================================================
    # Registration
    # =========================================================================

    def register(self, detector_class: type[Detector], name: str | None = None) -> None:
        """Register a detector class.

        Re-registering an existing name replaces the class but keeps its position.

        Args:
            detector_class: Detector class to register
            name: Registry key (defaults to the class's name attribute)

        Raises:
            ValueError: If no name can be determined
        """
        key = name or detector_class.name
        if not key:
            raise ValueError(f"Detector {detector_class.__name__} has no name")
        self._detectors[key] = detector_class

    def unregister(self, name: str) -> None:
        """Remove a detector by name (no-op if absent)."""
        self._detectors.pop(name, None)

    # =========================================================================
    # Retrieval
    # =========================================================================

    def create_detectors(self) -> list[Detector]:
        """Instantiate every registered detector, in registration order.

        Fresh instances keep each resolution call independent of the last.
        """
        return [detector_class() for detector_class in self._detectors.values()]

    def list_detectors(self) -> list[str]:
        """Get registered detector names in registration order."""
        return list(self._detectors.keys())

    def __len__(self) -> int:
        return len(self._detectors)

    def get_metadata(self) -> dict[str, Any]:
        """Get registry metadata for logging and debugging."""
        return {
            "detectors": [
                {"name": name, "manifest_file": detector_class.manifest_file}
                for name, detector_class in self._detectors.items()
            ],
        }


def setup_default_detectors(registry: DetectorRegistry | None = None) -> DetectorRegistry:
    """Register the built-in detectors.

    Args:
        registry: Registry to populate (uses global if None)

    Returns:
        Populated DetectorRegistry
    """
    from devsecops_kit.detectors.golang import GoDetector
    from devsecops_kit.detectors.nodejs import NodeDetector

    if registry is None:
        registry = get_registry()

    registry.register(NodeDetector)
    registry.register(GoDetector)

    return registry


# Global registry instance
_registry: DetectorRegistry | None = None


def get_registry() -> DetectorRegistry:
    """Get the global detector registry, populated with the built-in detectors."""
    global _registry
    if _registry is None:
        _registry = DetectorRegistry()
        setup_default_detectors(_registry)
    return _registry


def reset_registry() -> None:
    """Reset the global registry (primarily for testing)."""
    global _registry
    _registry = None
