"""Shared pytest fixtures for DevSecOps Kit tests.

Fixtures are organized by category:
- Path fixtures: sample repositories shipped with the tests
- Manifest fixtures: package.json / go.mod / Dockerfile contents
- Project fixtures: temporary project directories built from those contents
"""

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from devsecops_kit.detectors.registry import reset_registry

# =============================================================================
# Path Fixtures
# =============================================================================


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_repos_dir(fixtures_dir: Path) -> Path:
    """Return the path to sample repository fixtures."""
    return fixtures_dir / "sample_repos"


@pytest.fixture(autouse=True)
def clean_registry() -> Iterator[None]:
    """Give every test a freshly populated global detector registry."""
    reset_registry()
    yield
    reset_registry()


@pytest.fixture(autouse=True)
def clean_logger() -> Iterator[None]:
    """Drop handlers bound to streams a CLI test may have closed."""
    logger = logging.getLogger("devsecops_kit")
    level, propagate = logger.level, logger.propagate
    yield
    logger.handlers.clear()
    logger.setLevel(level)
    logger.propagate = propagate


# =============================================================================
# Manifest Fixtures
# =============================================================================


@pytest.fixture
def package_json() -> str:
    """Return sample package.json content with an Express dependency."""
    return """{
  "name": "sample-project",
  "version": "1.0.0",
  "dependencies": {
    "express": "^4.18.0",
    "lodash": "^4.17.21"
  },
  "devDependencies": {
    "jest": "^29.0.0",
    "typescript": "^5.0.0"
  }
}"""


@pytest.fixture
def go_mod() -> str:
    """Return sample go.mod content with a Gin dependency."""
    return """module example.com/testapp

go 1.21

require (
    github.com/gin-gonic/gin v1.9.0
    github.com/spf13/cobra v1.7.0
)

require golang.org/x/text v0.12.0
"""


@pytest.fixture
def dockerfile() -> str:
    """Return a multi-stage Dockerfile."""
    return """FROM golang:1.21 AS build
WORKDIR /src
COPY . .
RUN go build -o /out/app ./...

FROM alpine:3.18
COPY --from=build /out/app /usr/local/bin/app
ENTRYPOINT ["app"]
"""


# =============================================================================
# Project Fixtures
# =============================================================================


@pytest.fixture
def node_project(tmp_path: Path, package_json: str) -> Path:
    """Create a temporary Node.js project."""
    (tmp_path / "package.json").write_text(package_json)
    return tmp_path


@pytest.fixture
def go_project(tmp_path: Path, go_mod: str) -> Path:
    """Create a temporary Go project."""
    (tmp_path / "go.mod").write_text(go_mod)
    return tmp_path
