"""nglibs build / build_watch / serve -- Build libraries, optionally watching and serving."""

from __future__ import annotations

import argparse

from nglibs.commands.common import exit_code, load_config, make_orchestrator, target_libraries


def _build_and_serve(args: argparse.Namespace, watch: bool, serve: bool) -> int:
    config = load_config(args)
    libraries = target_libraries(args, config)
    orchestrator = make_orchestrator(args, config)
    batch = orchestrator.build_and_serve(
        libraries,
        watch=watch,
        serve=serve,
        concurrent=not getattr(args, "sequential", False),
    )
    return exit_code(batch)


def cmd_build(args: argparse.Namespace) -> int:
    return _build_and_serve(args, watch=False, serve=False)


def cmd_build_watch(args: argparse.Namespace) -> int:
    return _build_and_serve(args, watch=True, serve=False)


def cmd_serve(args: argparse.Namespace) -> int:
    return _build_and_serve(args, watch=True, serve=True)
