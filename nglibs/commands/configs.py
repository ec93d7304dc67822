"""nglibs configs -- Resynchronize angular.json and tsconfig.json with the libraries on disk."""

from __future__ import annotations

import argparse

from nglibs.commands.common import load_config
from nglibs.core.utils import log
from nglibs.sync import sync_configs


def cmd_configs(args: argparse.Namespace) -> int:
    config = load_config(args)
    results = sync_configs(config)

    failed = [r for r in results if not r.ok]
    if failed:
        return 1

    changed = sum(len(r.removed) + len(r.added) + len(r.fixed) for r in results)
    log.success(f"Configs synchronized ({changed} change(s))")
    return 0
