"""
Workspace configuration for nglibs.

Options are read once from ``libs.config.json`` into an immutable
:class:`WorkspaceConfig`; every component receives that value explicitly.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, model_validator

from nglibs.build import names
from nglibs.core.errors import ConfigParseError
from nglibs.core.utils import DEFAULT_OPTIONS_FILE, log

__all__ = [
    "DEFAULT_OPTIONS_FILE",
    "LOCAL_SOURCE_ENTRY",
    "WorkspaceConfig",
    "resolve_config",
]

# Entry point of a library's sources, relative to its project directory
LOCAL_SOURCE_ENTRY = "src/public-api.ts"


class WorkspaceConfig(BaseModel):
    """Resolved settings for one invocation. Absent keys use their defaults."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    projects_path: str = Field("./projects", validation_alias=AliasChoices("projectsPath", "projects_path"))
    manifest_path: str = Field(
        "./angular.json",
        validation_alias=AliasChoices("manifestPath", "angularJsonPath", "manifest_path"),
    )
    path_map_path: str = Field(
        "./tsconfig.json",
        validation_alias=AliasChoices("pathMapPath", "tsconfigPath", "path_map_path"),
    )
    test_runner_config_path: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("testRunnerConfigPath", "karmaConfigPath", "test_runner_config_path"),
    )
    showcase_project_name: Optional[str] = Field(
        None, validation_alias=AliasChoices("showcaseProjectName", "showcase_project_name")
    )
    library_name_prefix: str = Field("", validation_alias=AliasChoices("libraryNamePrefix", "library_name_prefix"))
    scope_name: Optional[str] = Field(None, validation_alias=AliasChoices("scopeName", "scope_name"))
    is_public_scope: bool = Field(True, validation_alias=AliasChoices("isPublicScope", "is_public_scope"))
    lib_file_to_wait_on_for_build: str = Field(
        "public-api.d.ts",
        validation_alias=AliasChoices("libFileToWaitOnForBuild", "lib_file_to_wait_on_for_build"),
    )
    registry_auth_file_path: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("registryAuthFilePath", "npmrcPath", "registry_auth_file_path"),
    )
    output_path: str = Field("./dist", validation_alias=AliasChoices("outputPath", "output_path"))

    @model_validator(mode="before")
    @classmethod
    def _drop_blank_options(cls, data: Any) -> Any:
        """Treat null and empty-string options as absent."""
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None and v != ""}
        return data

    # -------------------------------------------------------------------------
    # Derived paths
    # -------------------------------------------------------------------------

    @property
    def scope_directory(self) -> str:
        return names.scope_directory(self.scope_name)

    @property
    def libraries_root(self) -> Path:
        """Directory holding one sub-directory per library."""
        root = Path(self.projects_path)
        return root / self.scope_directory if self.scope_directory else root

    @property
    def output_root(self) -> Path:
        """Directory holding one build output directory per library."""
        root = Path(self.output_path)
        return root / self.scope_directory if self.scope_directory else root

    def prefixed(self, library: str) -> str:
        return names.to_prefixed(library, self.library_name_prefix)

    def registry_name(self, library: str) -> str:
        return names.to_registry_name(library, self.scope_name)

    def library_name(self, registry_name: str) -> str:
        return names.from_scoped_registry_name(registry_name, self.scope_name)

    def project_dir(self, library: str) -> Path:
        return self.libraries_root / library

    def package_descriptor(self, library: str) -> Path:
        return self.project_dir(library) / "package.json"

    def dist_dir(self, library: str) -> Path:
        return self.output_root / library

    def marker_path(self, library: str) -> Path:
        """File whose appearance signals that ``library`` finished building."""
        return self.dist_dir(library) / self.lib_file_to_wait_on_for_build

    def local_source_path(self, library: str) -> str:
        """Path-map entry pointing at the library's sources, as written in tsconfig."""
        parts = [self.projects_path.rstrip("/")]
        if self.scope_directory:
            parts.append(self.scope_directory)
        parts.extend([library, LOCAL_SOURCE_ENTRY])
        return "/".join(parts)


def resolve_config(options_path: Optional[Union[str, Path]] = None) -> WorkspaceConfig:
    """Load the options file, falling back to defaults when it does not exist.

    Raises:
        ConfigParseError: If the file exists but is not a valid options object.
    """
    path = Path(options_path) if options_path else DEFAULT_OPTIONS_FILE

    if not path.exists():
        log.warning(f"No options file found at {path.resolve()}. Using default values.")
        return WorkspaceConfig()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ConfigParseError(path, str(e)) from e
    except OSError as e:
        raise ConfigParseError(path, e.strerror or str(e)) from e

    if not isinstance(data, dict):
        raise ConfigParseError(path, "expected a JSON object at the top level")

    try:
        return WorkspaceConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigParseError(path, str(e)) from e
