"""
Config synchronization.

Keeps the workspace manifest and the path map consistent with the library
directories that actually exist: entries for deleted libraries are removed,
missing path-map entries are added, and known misconfigurations are fixed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Iterable, Optional

from nglibs.build.config import WorkspaceConfig
from nglibs.build.discovery import list_library_projects
from nglibs.core.errors import ConfigParseError
from nglibs.core.utils import Diagnostic, Severity, log
from nglibs.sync.documents import ConfigDocument, DocumentKind

# (collection, key) -> diagnostics describing what was changed
Fixup = Callable[[dict[str, Any], str], list[Diagnostic]]

# library name -> initial collection entry
EntryFactory = Callable[[str], Any]


@dataclass
class SyncResult:
    """What synchronizing one document did."""

    path: Path
    showcase_name: Optional[str] = None
    removed: list[str] = field(default_factory=list)
    added: list[str] = field(default_factory=list)
    fixed: list[str] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def changed(self) -> bool:
        return bool(self.removed or self.added or self.fixed)

    def note(self, severity: Severity, message: str) -> None:
        diagnostic = Diagnostic(severity, message)
        self.diagnostics.append(diagnostic)
        log.emit(diagnostic)


# =============================================================================
# Showcase detection
# =============================================================================


def find_application_projects(document: ConfigDocument) -> list[str]:
    """Manifest keys whose ``projectType`` marks them as an application."""
    return [
        key
        for key, entry in document.collection.items()
        if isinstance(entry, dict) and entry.get("projectType") == "application"
    ]


# =============================================================================
# Fixups
# =============================================================================


def runner_config_fixup(config: WorkspaceConfig) -> Optional[Fixup]:
    """Point every library's test runner at the shared config file.

    Returns None when no shared test-runner config is configured.
    """
    canonical = config.test_runner_config_path
    if not canonical:
        return None

    def fix(collection: dict[str, Any], key: str) -> list[Diagnostic]:
        entry = collection.get(key)
        architect = entry.get("architect") if isinstance(entry, dict) else None
        test = architect.get("test") if isinstance(architect, dict) else None
        if not isinstance(test, dict):
            return []

        options = test.setdefault("options", {})
        current = options.get("karmaConfig")
        if current == canonical:
            return []

        options["karmaConfig"] = canonical
        return [
            Diagnostic(
                Severity.WARNING,
                f"{key} karmaConfig path: {current}. Setting to {canonical}.",
            )
        ]

    return fix


def local_source_fixup(config: WorkspaceConfig) -> Fixup:
    """Keep the library's local source path exactly once, last in its path list.

    The last entry is the fallback the compiler uses when no build output
    exists, which lets a library be consumed from source.
    """

    def fix(collection: dict[str, Any], key: str) -> list[Diagnostic]:
        paths = collection.get(key)
        if not isinstance(paths, list):
            return []

        canonical = config.local_source_path(config.library_name(key))
        count = paths.count(canonical)
        if count == 1 and paths[-1] == canonical:
            return []

        if count == 0:
            message = f"No project path for {key} found in {config.path_map_path}; ADDING."
        elif paths[0] == canonical:
            message = f"{canonical} was found at index 0 in {config.path_map_path} - MOVING TO END OF ARRAY"
        else:
            message = f"{canonical} is not the last path for {key} in {config.path_map_path} - MOVING TO END OF ARRAY"

        paths[:] = [p for p in paths if p != canonical] + [canonical]
        return [Diagnostic(Severity.WARNING, message)]

    return fix


def path_map_entry(config: WorkspaceConfig) -> EntryFactory:
    """Initial path-map entry for a library: build output first, sources last."""

    def make(library: str) -> list[str]:
        return [config.dist_dir(library).as_posix(), config.local_source_path(library)]

    return make


# =============================================================================
# Synchronization
# =============================================================================


def synchronize(
    document: ConfigDocument,
    project_set: Iterable[str],
    config: WorkspaceConfig,
    showcase_name: Optional[str] = None,
    fixup: Optional[Fixup] = None,
    entry_factory: Optional[EntryFactory] = None,
) -> SyncResult:
    """Reconcile one document's collection against the discovered libraries.

    The document is always rewritten, whether or not anything changed.
    """
    result = SyncResult(path=document.path, showcase_name=showcase_name)
    collection = document.collection
    projects = list(project_set)

    if not showcase_name and document.kind is DocumentKind.MANIFEST:
        applications = find_application_projects(document)
        if applications:
            result.showcase_name = applications[0]
            result.note(
                Severity.WARNING,
                f"No showcaseProjectName set in options, setting to {result.showcase_name}",
            )
        else:
            result.note(
                Severity.WARNING,
                f"No showcaseProjectName found in options or {document.path}.",
            )

    for key in list(collection):
        if key == result.showcase_name:
            continue

        library = config.library_name(key)
        if library not in projects:
            result.note(
                Severity.WARNING,
                f"{library} was found in {document.path} but not in {config.libraries_root}"
                f" - DELETING FROM {document.path}",
            )
            del collection[key]
            result.removed.append(key)
            continue

        if fixup is not None:
            diagnostics = fixup(collection, key)
            for diagnostic in diagnostics:
                result.diagnostics.append(diagnostic)
                log.emit(diagnostic)
            if diagnostics:
                result.fixed.append(key)

    if entry_factory is not None:
        for library in projects:
            key = config.registry_name(library)
            if key in collection:
                continue
            collection[key] = entry_factory(library)
            result.added.append(key)
            result.note(Severity.WARNING, f"No entry for {key} found in {document.path}; ADDING.")

    document.save()

    libraries = [k for k in collection if k != result.showcase_name]
    log.info(f"{document.path} contains following library projects:")
    log.dim(", ".join(libraries) if libraries else "(none)")
    return result


def sync_configs(
    config: WorkspaceConfig,
    projects: Optional[Iterable[str]] = None,
) -> list[SyncResult]:
    """Synchronize the manifest, then the path map.

    A parse failure in one document is reported and does not stop the other.
    A showcase name derived from the manifest is reused for the path map.
    """
    log.header("Synchronizing workspace configs")
    project_set = list(projects) if projects is not None else list_library_projects(config)
    showcase_name = config.showcase_project_name

    steps = [
        (config.manifest_path, DocumentKind.MANIFEST, runner_config_fixup(config), None),
        (config.path_map_path, DocumentKind.PATH_MAP, local_source_fixup(config), path_map_entry(config)),
    ]

    results: list[SyncResult] = []
    for path, kind, fixup, entry_factory in steps:
        try:
            document = ConfigDocument.load(path, kind)
        except ConfigParseError as e:
            log.error(str(e))
            results.append(SyncResult(path=Path(path), showcase_name=showcase_name, error=str(e)))
            continue

        result = synchronize(
            document,
            project_set,
            config,
            showcase_name=showcase_name,
            fixup=fixup,
            entry_factory=entry_factory,
        )
        showcase_name = result.showcase_name
        results.append(result)

    return results
