"""Exception types raised by nglibs."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class NglibsError(Exception):
    """Base class for all nglibs errors."""

    pass


class ConfigParseError(NglibsError):
    """A JSON options file or generated document could not be read or parsed."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Could not parse {self.path}: {reason}")


class MissingPathError(NglibsError):
    """A referenced file or directory does not exist."""

    def __init__(self, path: Union[str, Path], what: str = "path"):
        self.path = Path(path)
        super().__init__(f"No {what} found at {self.path}")


class UsageError(NglibsError):
    """The command line was incomplete or named an unknown command."""

    pass


class ExternalCommandFailure(NglibsError):
    """A spawned process exited with a non-zero code."""

    def __init__(self, command: str, returncode: int, stderr: Optional[str] = None):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr or ""
        message = f"Command exited with code {returncode}: {command}"
        if self.stderr.strip():
            message += f"\n{self.stderr.strip()}"
        super().__init__(message)
