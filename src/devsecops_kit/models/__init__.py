"""DevSecOps Kit data models.

- ProjectInfo: Resolved language, framework, dependencies and container signals
"""

from devsecops_kit.models.project import ProjectInfo

__all__ = [
    "ProjectInfo",
]
