"""Helpers shared by the command handlers."""

from __future__ import annotations

import argparse

from nglibs.build.config import WorkspaceConfig, resolve_config
from nglibs.build.discovery import list_library_projects
from nglibs.build.orchestrator import LibraryOrchestrator, parse_library_args
from nglibs.build.runner import BatchResult
from nglibs.core.errors import UsageError
from nglibs.core.utils import log


def load_config(args: argparse.Namespace) -> WorkspaceConfig:
    return resolve_config(getattr(args, "config", None))


def make_orchestrator(args: argparse.Namespace, config: WorkspaceConfig) -> LibraryOrchestrator:
    return LibraryOrchestrator(config, dry_run=getattr(args, "dry_run", False))


def target_libraries(
    args: argparse.Namespace,
    config: WorkspaceConfig,
    require_explicit: bool = False,
) -> list[str]:
    """Libraries named on the command line, or every discovered library.

    Raises:
        UsageError: If ``require_explicit`` is set and no library was named.
    """
    libraries = parse_library_args(getattr(args, "libraries", []) or [])
    if libraries:
        return libraries

    if require_explicit:
        raise UsageError("You must specify a library name!")

    log.info(
        f"No library name(s) passed in, getting all libraries from {config.libraries_root.resolve()}."
    )
    return list_library_projects(config)


def exit_code(batch: BatchResult) -> int:
    """0 when every command succeeded, 1 otherwise."""
    if batch.ok:
        return 0
    for result in batch.failed:
        log.error(f"Failed ({result.returncode}): {result.command}")
    return 1
