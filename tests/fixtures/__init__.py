"""Test fixtures for DevSecOps Kit.

Sample Repositories:
- sample_repos/node_project: Express API with a multi-stage Dockerfile
- sample_repos/go_project: Gin service with a docker-compose.yml
"""

from pathlib import Path

FIXTURES_DIR = Path(__file__).parent

SAMPLE_REPOS_DIR = FIXTURES_DIR / "sample_repos"

NODE_PROJECT_PATH = SAMPLE_REPOS_DIR / "node_project"
GO_PROJECT_PATH = SAMPLE_REPOS_DIR / "go_project"


def get_sample_repo(name: str) -> Path:
    """Get path to a sample repository.

    Raises:
        ValueError: If repository doesn't exist
    """
    repo_path = SAMPLE_REPOS_DIR / name
    if not repo_path.exists():
        raise ValueError(f"Sample repository not found: {name}")
    return repo_path
