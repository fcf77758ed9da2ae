"""DevSecOps Kit utility modules.

- logging: Standardized logging with human/verbose/JSON modes
- preflight: External security tool availability checks (imported directly,
  it depends on devsecops_kit.config)
"""

from devsecops_kit.utils.logging import get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
]
