"""nglibs add / remove -- Create or delete library projects, then resync configs."""

from __future__ import annotations

import argparse

from nglibs.build.config import WorkspaceConfig
from nglibs.commands.common import exit_code, load_config, make_orchestrator, target_libraries
from nglibs.core.utils import log
from nglibs.sync import sync_configs


def _resync(args: argparse.Namespace, config: WorkspaceConfig) -> bool:
    if getattr(args, "dry_run", False):
        log.info(f"[DRY-RUN] Would synchronize {config.manifest_path} and {config.path_map_path}")
        return True
    return all(result.ok for result in sync_configs(config))


def cmd_add(args: argparse.Namespace) -> int:
    config = load_config(args)
    libraries = target_libraries(args, config, require_explicit=True)
    code = exit_code(make_orchestrator(args, config).add(libraries))
    if not _resync(args, config):
        code = 1
    return code


def cmd_remove(args: argparse.Namespace) -> int:
    config = load_config(args)
    libraries = target_libraries(args, config)
    code = exit_code(make_orchestrator(args, config).remove(libraries))
    if not _resync(args, config):
        code = 1
    return code
