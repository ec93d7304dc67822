"""
Tests for library project discovery.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from nglibs.build.config import WorkspaceConfig
from nglibs.build.discovery import (
    DEFAULT_EXCLUDES,
    list_built_projects,
    list_library_projects,
    list_projects,
)


@pytest.mark.evergreen
class TestListProjects:
    """list_projects returns direct sub-directory names only."""

    def test_lists_directories_not_files(self, tmp_path: Path) -> None:
        for name in ("a", "b", "c"):
            (tmp_path / name).mkdir()
        (tmp_path / "readme.md").write_text("# libs\n")

        assert sorted(list_projects(tmp_path)) == ["a", "b", "c"]

    def test_does_not_recurse(self, tmp_path: Path) -> None:
        (tmp_path / "a" / "nested").mkdir(parents=True)
        assert list_projects(tmp_path) == ["a"]

    def test_missing_root_is_empty(self, tmp_path: Path) -> None:
        assert list_projects(tmp_path / "nope") == []

    def test_styles_excluded_by_default(self, tmp_path: Path) -> None:
        assert "styles" in DEFAULT_EXCLUDES
        (tmp_path / "styles").mkdir()
        (tmp_path / "liba").mkdir()
        assert list_projects(tmp_path) == ["liba"]

    def test_custom_excludes(self, tmp_path: Path) -> None:
        (tmp_path / "styles").mkdir()
        (tmp_path / "liba").mkdir()
        assert sorted(list_projects(tmp_path, exclude_names=("liba",))) == ["styles"]


@pytest.mark.evergreen
class TestWorkspaceDiscovery:
    """Discovery through the workspace config."""

    def test_library_projects(self, config: WorkspaceConfig, add_library) -> None:
        add_library(config, "liba")
        add_library(config, "libb")
        assert sorted(list_library_projects(config)) == ["liba", "libb"]

    def test_scoped_library_projects(self, workspace: Path, add_library) -> None:
        config = WorkspaceConfig(
            projects_path=str(workspace / "projects"),
            output_path=str(workspace / "dist"),
            scope_name="@acme",
        )
        add_library(config, "liba")

        assert (workspace / "projects" / "acme" / "liba").is_dir()
        assert list_library_projects(config) == ["liba"]

    def test_built_projects(self, config: WorkspaceConfig, add_library) -> None:
        add_library(config, "liba", built=True)
        add_library(config, "libb")
        assert list_built_projects(config) == ["liba"]

    def test_no_output_directory(self, tmp_path: Path) -> None:
        config = WorkspaceConfig(output_path=str(tmp_path / "dist"))
        assert list_built_projects(config) == []
