"""
Library name transforms.

A library has three spellings: bare (``button``), prefixed (``ui-button``)
and scoped (``@acme/ui-button`` in the registry, ``acme/ui-button`` on disk).
Every function here is total and idempotent.
"""

from __future__ import annotations

import os
from typing import Optional


def scope_directory(scope: Optional[str]) -> str:
    """Return the scope as a directory name (``@acme`` -> ``acme``)."""
    if not scope:
        return ""
    return scope.strip().lstrip("@").strip("/")


def strip_scope(name: str, scope: Optional[str]) -> str:
    """Remove a leading registry or filesystem scope from ``name``."""
    directory = scope_directory(scope)
    if not directory:
        return name
    for lead in (f"@{directory}/", f"{directory}/", f"{directory}{os.sep}"):
        if name.startswith(lead):
            return name[len(lead):]
    return name


def to_prefixed(name: str, prefix: Optional[str]) -> str:
    """Prepend the library prefix unless ``name`` already carries it."""
    if not prefix or name.startswith(prefix):
        return name
    return f"{prefix}{name}"


def unprefix(name: str, prefix: Optional[str]) -> str:
    """Inverse of :func:`to_prefixed`."""
    if prefix and name.startswith(prefix):
        return name[len(prefix):]
    return name


def to_scoped_fs_path(name: str, scope: Optional[str]) -> str:
    """Return ``<scope>/<name>`` using the platform separator, or ``name`` unscoped."""
    directory = scope_directory(scope)
    if not directory:
        return name
    return os.path.join(directory, strip_scope(name, scope))


def from_scoped_fs_path(path: str, scope: Optional[str]) -> str:
    """Inverse of :func:`to_scoped_fs_path`."""
    return strip_scope(path, scope)


def to_registry_name(name: str, scope: Optional[str]) -> str:
    """Return the package-registry name (``@acme/ui-button``)."""
    directory = scope_directory(scope)
    if not directory:
        return name
    return f"@{directory}/{strip_scope(name, scope)}"


def from_scoped_registry_name(name: str, scope: Optional[str]) -> str:
    """Return the on-disk library directory name for a registry name."""
    return strip_scope(name, scope)
