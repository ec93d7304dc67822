"""
Batch execution of external commands.

A batch is best-effort: a failing command is reported and the remaining
commands still run. Callers inspect the returned :class:`BatchResult`.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass, field
from typing import Iterable

from nglibs.build.commands import Command
from nglibs.core.errors import ExternalCommandFailure
from nglibs.core.utils import log, run_shell, spawn_shell

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Outcome of one dispatched command."""

    command: str
    returncode: int
    label: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def failure(self) -> ExternalCommandFailure:
        return ExternalCommandFailure(self.command, self.returncode, self.stderr)


@dataclass
class BatchResult:
    """Aggregated outcome of a batch, in dispatch order."""

    results: list[CommandResult] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(r.ok for r in self.results)

    @property
    def failed(self) -> list[CommandResult]:
        return [r for r in self.results if not r.ok]

    def extend(self, other: "BatchResult") -> None:
        self.results.extend(other.results)


def _report(result: CommandResult) -> None:
    if result.ok:
        return
    where = f" ({result.label})" if result.label else ""
    log.error(f"Exit code: {result.returncode}{where}")
    log.error(str(result.failure()))


def _dry_run(cmd: Command) -> CommandResult:
    line = cmd.to_shell()
    log.info(f"[DRY-RUN] Would run: {line}")
    return CommandResult(command=line, returncode=0, label=cmd.label)


def run_sequential(commands: Iterable[Command], dry_run: bool = False) -> BatchResult:
    """Run each command to completion before starting the next."""
    batch = BatchResult()

    for cmd in commands:
        if dry_run:
            batch.results.append(_dry_run(cmd))
            continue

        line = cmd.to_shell()
        logger.debug(f"Running: {line}")
        proc = run_shell(line, capture_stderr=True)
        result = CommandResult(
            command=line,
            returncode=proc.returncode,
            label=cmd.label,
            stderr=proc.stderr or "",
        )
        if result.ok and result.stderr.strip():
            log.dim(result.stderr.rstrip())
        _report(result)
        batch.results.append(result)

    return batch


def run_concurrent(commands: Iterable[Command], dry_run: bool = False) -> BatchResult:
    """Start every command at once and wait for all of them to exit."""
    commands = list(commands)
    batch = BatchResult()

    if dry_run:
        batch.results.extend(_dry_run(cmd) for cmd in commands)
        return batch

    running: list[tuple[Command, str, subprocess.Popen]] = []
    try:
        for cmd in commands:
            line = cmd.to_shell()
            logger.debug(f"Spawning: {line}")
            running.append((cmd, line, spawn_shell(line)))

        for cmd, line, proc in running:
            result = CommandResult(command=line, returncode=proc.wait(), label=cmd.label)
            _report(result)
            batch.results.append(result)
    except BaseException:
        for _, _, proc in running:
            if proc.poll() is None:
                proc.terminate()
        for _, _, proc in running:
            proc.wait()
        raise

    if batch.ok:
        log.success("All done")
    else:
        log.warning(f"{len(batch.failed)} of {len(batch.results)} commands failed")
    return batch
