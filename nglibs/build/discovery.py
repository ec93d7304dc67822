"""Library project discovery."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Union

from nglibs.build.config import WorkspaceConfig
from nglibs.core.utils import log

# Housekeeping directories that live beside the libraries but are not libraries
DEFAULT_EXCLUDES: tuple[str, ...] = ("styles",)


def list_projects(
    root: Union[str, Path],
    exclude_names: Iterable[str] = DEFAULT_EXCLUDES,
) -> list[str]:
    """Return the names of the direct sub-directories of ``root``.

    Order follows the filesystem listing. A missing root yields an empty
    list rather than an error.
    """
    root = Path(root)
    log.dim(f"Looking in {root} for projects")

    if not root.is_dir():
        log.warning(f"No projects directory at {root}")
        return []

    excluded = set(exclude_names)
    with os.scandir(root) as entries:
        return [
            entry.name
            for entry in entries
            if entry.is_dir() and entry.name not in excluded
        ]


def list_library_projects(config: WorkspaceConfig) -> list[str]:
    """Libraries currently present under the workspace's libraries root."""
    return list_projects(config.libraries_root)


def list_built_projects(config: WorkspaceConfig) -> list[str]:
    """Libraries that already have a build output directory."""
    return list_projects(config.output_root, exclude_names=())
