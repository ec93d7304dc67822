"""
Shared utilities for the nglibs CLI.
"""

from __future__ import annotations

import subprocess
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

# =============================================================================
# Constants
# =============================================================================

DEFAULT_OPTIONS_FILE = Path("./libs.config.json")


# =============================================================================
# Logging
# =============================================================================


class Severity(Enum):
    """How loudly a diagnostic should be reported."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Diagnostic:
    """A message surfaced to the user by a component."""

    severity: Severity
    message: str


class Logger:
    """Simple colored logger with --no-color support."""

    COLORS = {
        "reset": "\033[0m",
        "red": "\033[91m",
        "green": "\033[92m",
        "yellow": "\033[93m",
        "cyan": "\033[96m",
        "bold": "\033[1m",
        "dim": "\033[2m",
    }

    def __init__(self, use_color: Optional[bool] = None):
        if use_color is None:
            self._use_color = sys.stdout.isatty()
        else:
            self._use_color = use_color

    def set_color(self, use_color: bool) -> None:
        """Set whether to use color output."""
        self._use_color = use_color

    def _color(self, text: str, color: str) -> str:
        if not self._use_color:
            return text
        return f"{self.COLORS.get(color, '')}{text}{self.COLORS['reset']}"

    def header(self, message: str) -> None:
        """Print a section header."""
        print(f"\n{self._color('===', 'cyan')} {self._color(message, 'bold')} {self._color('===', 'cyan')}")

    def info(self, message: str) -> None:
        """Print an info message."""
        print(f"  {message}")

    def success(self, message: str) -> None:
        """Print a success message."""
        print(f"  {self._color('[OK]', 'green')} {message}")

    def warning(self, message: str) -> None:
        """Print a warning message."""
        print(f"  {self._color('[WARN]', 'yellow')} {message}")

    def error(self, message: str) -> None:
        """Print an error message."""
        print(f"  {self._color('[ERROR]', 'red')} {message}")

    def dim(self, message: str) -> None:
        """Print a dim/secondary message."""
        print(f"  {self._color(message, 'dim')}")

    def rule(self) -> None:
        """Print a horizontal separator."""
        print(f"  {self._color('-' * 78, 'dim')}")

    def emit(self, diagnostic: Diagnostic) -> None:
        """Print a diagnostic at its own severity."""
        if diagnostic.severity is Severity.ERROR:
            self.error(diagnostic.message)
        elif diagnostic.severity is Severity.WARNING:
            self.warning(diagnostic.message)
        else:
            self.info(diagnostic.message)


# Global logger instance
log = Logger()


# =============================================================================
# Runtime Utilities
# =============================================================================


def run_shell(
    command: str,
    cwd: Optional[Path] = None,
    capture: bool = False,
    capture_stderr: bool = False,
) -> subprocess.CompletedProcess:
    """Run a shell command line without raising on a non-zero exit.

    Output goes straight to the terminal unless captured. With
    ``capture_stderr`` only stderr is collected and stdout still streams.
    """
    sys.stdout.flush()
    if capture:
        return subprocess.run(command, shell=True, cwd=cwd, capture_output=True, text=True, check=False)
    return subprocess.run(
        command,
        shell=True,
        cwd=cwd,
        stderr=subprocess.PIPE if capture_stderr else None,
        text=True,
        check=False,
    )


def spawn_shell(command: str, cwd: Optional[Path] = None) -> subprocess.Popen:
    """Start a shell command line in the background, sharing our stdout/stderr."""
    sys.stdout.flush()
    return subprocess.Popen(command, shell=True, cwd=cwd)
