"""DevSecOps Kit - security pipeline scaffolding for application repositories.

DevSecOps Kit inspects a project directory, infers its primary language and
framework, and hands the result to generators that emit a security-scanning
CI workflow and configuration tailored to that stack.

Core principles:
- Deterministic detection: fixed detector order and fixed confidence constants
- Read-only: the scanned repository is never modified
- Best-effort enrichment: container signals never fail a detection
"""

__version__ = "0.1.0"
__author__ = "DevSecOps Kit Contributors"
