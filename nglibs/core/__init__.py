"""
nglibs.core - Foundation layer for the nglibs CLI.

Exports logging, diagnostics, error types and subprocess helpers.
"""

from nglibs.core.errors import (
    ConfigParseError,
    ExternalCommandFailure,
    MissingPathError,
    NglibsError,
    UsageError,
)
from nglibs.core.utils import (
    DEFAULT_OPTIONS_FILE,
    Diagnostic,
    Logger,
    Severity,
    log,
    run_shell,
    spawn_shell,
)

__all__ = [
    # Logging
    "log",
    "Logger",
    "Diagnostic",
    "Severity",
    # Constants
    "DEFAULT_OPTIONS_FILE",
    # Errors
    "NglibsError",
    "ConfigParseError",
    "MissingPathError",
    "UsageError",
    "ExternalCommandFailure",
    # Runtime utilities
    "run_shell",
    "spawn_shell",
]
