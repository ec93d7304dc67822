"""
Shared pytest fixtures for nglibs tests.

Provides an isolated Angular-style workspace in a temp directory so tests
never touch a real angular.json or tsconfig.json.

Test Tier Markers:
  @pytest.mark.evergreen - Tests that always run, never skip (production tests)
  @pytest.mark.dev       - Development/WIP tests, toggle-able
  @pytest.mark.temporary - Tests with explicit discard flag
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Optional

import pytest

from nglibs.build.config import WorkspaceConfig
from nglibs.core.utils import log


# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test tiers."""
    config.addinivalue_line(
        "markers",
        "evergreen: tests that always run, never skip (production tests)"
    )
    config.addinivalue_line(
        "markers",
        "dev: development/WIP tests, toggle-able for active development"
    )
    config.addinivalue_line(
        "markers",
        "temporary: tests with explicit discard flag"
    )


@pytest.fixture(autouse=True)
def plain_output() -> None:
    """Keep captured output free of ANSI color codes."""
    log.set_color(False)


# =============================================================================
# Workspace Fixtures
# =============================================================================


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """An empty workspace with projects/ and dist/, used as the working directory."""
    (tmp_path / "projects").mkdir()
    (tmp_path / "dist").mkdir()
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def config(workspace: Path) -> WorkspaceConfig:
    """Workspace settings pointing every path into the temp workspace."""
    return WorkspaceConfig(
        projects_path=str(workspace / "projects"),
        output_path=str(workspace / "dist"),
        manifest_path=str(workspace / "angular.json"),
        path_map_path=str(workspace / "tsconfig.json"),
    )


@pytest.fixture
def write_json() -> Callable[[Path, Any], Path]:
    """Write a JSON value to a path, creating parent directories."""

    def write(path: Path, data: Any) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2))
        return path

    return write


@pytest.fixture
def add_library(write_json: Callable[[Path, Any], Path]) -> Callable[..., Path]:
    """Create a library project directory with a package.json.

    Usage: ``add_library(config, "liba", peers=["libb"], built=True)``
    """

    def add(
        cfg: WorkspaceConfig,
        name: str,
        peers: Optional[list[str]] = None,
        built: bool = False,
    ) -> Path:
        package: dict[str, Any] = {"name": cfg.registry_name(name), "version": "0.0.1"}
        if peers is not None:
            package["peerDependencies"] = {peer: "^0.0.1" for peer in peers}
        write_json(cfg.package_descriptor(name), package)

        if built:
            marker = cfg.marker_path(name)
            marker.parent.mkdir(parents=True, exist_ok=True)
            marker.write_text("export {};\n")

        return cfg.project_dir(name)

    return add


@pytest.fixture
def manifest_data() -> dict[str, Any]:
    """An angular.json with a showcase app, two libraries and one orphan."""
    return {
        "$schema": "./node_modules/@angular/cli/lib/config/schema.json",
        "version": 1,
        "projects": {
            "showcase": {"projectType": "application", "root": ""},
            "liba": {
                "projectType": "library",
                "root": "projects/liba",
                "architect": {
                    "test": {
                        "builder": "@angular-devkit/build-angular:karma",
                        "options": {"karmaConfig": "projects/liba/karma.conf.js"},
                    }
                },
            },
            "libb": {"projectType": "library", "root": "projects/libb"},
            "liborphan": {"projectType": "library", "root": "projects/liborphan"},
        },
    }
