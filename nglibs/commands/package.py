"""nglibs pack / publish -- Package-manager operations on built libraries."""

from __future__ import annotations

import argparse

from nglibs.commands.common import exit_code, load_config, make_orchestrator, target_libraries


def cmd_pack(args: argparse.Namespace) -> int:
    config = load_config(args)
    libraries = target_libraries(args, config)
    return exit_code(make_orchestrator(args, config).pack(libraries))


def cmd_publish(args: argparse.Namespace) -> int:
    config = load_config(args)
    libraries = target_libraries(args, config)
    return exit_code(make_orchestrator(args, config).publish(libraries))


def cmd_pack_publish(args: argparse.Namespace) -> int:
    config = load_config(args)
    libraries = target_libraries(args, config)
    return exit_code(make_orchestrator(args, config).pack_and_publish(libraries))
