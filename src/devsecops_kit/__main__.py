"""Entry point for running DevSecOps Kit as a module.

Usage:
    python -m devsecops_kit [command] [options]

Example:
    python -m devsecops_kit detect --path ./my-service
    python -m devsecops_kit diagnose
"""

from devsecops_kit.cli import app

if __name__ == "__main__":
    app()
