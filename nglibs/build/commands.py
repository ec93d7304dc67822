"""
In-memory representation of external commands.

Commands stay structured until dispatch so that planners and the
orchestrator can be tested without a shell; ``to_shell`` is the only place
they become a command line.
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, Path]


@dataclass(frozen=True)
class Command:
    """An external program invocation gated on zero or more preceding commands.

    ``preconditions`` run first, in order; the program itself only runs when
    all of them succeed (shell ``&&`` semantics).
    """

    program: str
    args: tuple[str, ...] = ()
    preconditions: tuple["Command", ...] = ()
    cwd: Optional[Path] = None
    label: str = ""

    def after(self, *commands: "Command") -> "Command":
        """Return a copy that runs ``commands`` before any existing preconditions."""
        return replace(self, preconditions=tuple(commands) + self.preconditions)

    def with_label(self, label: str) -> "Command":
        return replace(self, label=label)

    def own_shell(self) -> str:
        """This command alone, without its preconditions."""
        line = shlex.join([self.program, *self.args])
        if self.cwd is not None:
            # subshell, so the directory change does not leak into later steps
            line = f"(cd {shlex.quote(str(self.cwd))} && {line})"
        return line

    def to_shell(self) -> str:
        """Serialize the whole chain to a POSIX shell command line."""
        steps = [p.to_shell() for p in self.preconditions]
        steps.append(self.own_shell())
        return " && ".join(steps)

    def flatten(self) -> list["Command"]:
        """All commands of the chain in execution order, without nesting."""
        flat: list[Command] = []
        for p in self.preconditions:
            flat.extend(p.flatten())
        flat.append(replace(self, preconditions=()))
        return flat

    def __str__(self) -> str:
        return self.to_shell()


def command(program: str, *args: PathLike, cwd: Optional[PathLike] = None) -> Command:
    """Build a :class:`Command`, stringifying path arguments."""
    return Command(
        program=program,
        args=tuple(str(a) for a in args),
        cwd=Path(cwd) if cwd is not None else None,
    )


@dataclass
class BuildCommandList:
    """Ordered commands for one invocation, one per library plus an optional serve step."""

    commands: list[Command] = field(default_factory=list)

    def append(self, cmd: Command) -> None:
        self.commands.append(cmd)

    def __iter__(self):
        return iter(self.commands)

    def __len__(self) -> int:
        return len(self.commands)

    def __getitem__(self, index: int) -> Command:
        return self.commands[index]

    def to_shell(self) -> list[str]:
        return [c.to_shell() for c in self.commands]
