"""
nglibs.sync - Keeps angular.json and tsconfig.json in step with the libraries on disk.
"""

from nglibs.sync.documents import ConfigDocument, DocumentKind, ManifestProject
from nglibs.sync.synchronizer import (
    SyncResult,
    find_application_projects,
    local_source_fixup,
    path_map_entry,
    runner_config_fixup,
    sync_configs,
    synchronize,
)

__all__ = [
    "ConfigDocument",
    "DocumentKind",
    "ManifestProject",
    "SyncResult",
    "find_application_projects",
    "local_source_fixup",
    "path_map_entry",
    "runner_config_fixup",
    "sync_configs",
    "synchronize",
]
