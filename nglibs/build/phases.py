"""
External build phases for nglibs.

Each function returns a :class:`Command` for one external tool. Nothing
here runs a process.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from nglibs.build.commands import Command, PathLike, command
from nglibs.build.config import WorkspaceConfig

# Polling delay handed to wait-on, in milliseconds
WAIT_ON_DELAY_MS = 200


# =============================================================================
# Filesystem
# =============================================================================


def remove_path(path: PathLike) -> Command:
    """Recursively delete a file or directory."""
    return command("rimraf", path)


def copy_file(source: PathLike, destination: PathLike) -> Command:
    return command("cp", source, destination)


def wait_on_files(paths: Iterable[PathLike], delay_ms: int = 0) -> Command:
    """Block until every path exists."""
    args: list[PathLike] = list(paths)
    if delay_ms:
        args.extend(["-d", str(delay_ms)])
    return command("wait-on", *args)


def clean_output(config: WorkspaceConfig, library: str) -> Command:
    """Remove a library's previous build output."""
    return remove_path(config.dist_dir(library))


# =============================================================================
# Angular CLI
# =============================================================================


def ng_build(config: WorkspaceConfig, library: str, watch: bool = False) -> Command:
    args = ["build", config.registry_name(library)]
    if watch:
        args.append("--watch")
    return command("ng", *args)


def ng_serve() -> Command:
    """Dev server for the showcase application."""
    return command("ng", "serve", "--vendor-source-map")


def ng_generate_library(config: WorkspaceConfig, library: str) -> Command:
    return command("ng", "generate", "library", config.registry_name(library))


# =============================================================================
# npm
# =============================================================================


def npm_pack(dist_dir: Path) -> Command:
    return command("npm", "pack", cwd=dist_dir)


def npm_publish(dist_dir: Path, public: bool = True) -> Command:
    args = ["publish"]
    if public:
        args.extend(["--access", "public"])
    return command("npm", *args, cwd=dist_dir)
