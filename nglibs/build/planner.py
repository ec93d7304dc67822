"""
Dependency wait planning.

Before a library is built, each of its peer dependencies that lives in the
workspace must have build output. This module classifies those
dependencies and produces the commands that make the build wait for them.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional

from nglibs.build.commands import Command
from nglibs.build.config import WorkspaceConfig
from nglibs.build.discovery import list_library_projects
from nglibs.build.phases import ng_build, wait_on_files
from nglibs.core.errors import ConfigParseError, MissingPathError
from nglibs.core.utils import log


class DependencyStatus(Enum):
    """Build state of a dependency at the time its dependent is planned."""

    BUILT = "Built"
    BUILDING = "Building"
    UNBUILT = "Unbuilt - WILL BUILD FIRST"


@dataclass
class DependencyWaitPlan:
    """What has to happen before ``library`` may start building."""

    library: str
    dependencies: dict[str, DependencyStatus] = field(default_factory=dict)
    prebuild: list[Command] = field(default_factory=list)
    wait_on: list[Path] = field(default_factory=list)

    def _with_status(self, status: DependencyStatus) -> list[str]:
        return [name for name, s in self.dependencies.items() if s is status]

    @property
    def built(self) -> list[str]:
        return self._with_status(DependencyStatus.BUILT)

    @property
    def building(self) -> list[str]:
        return self._with_status(DependencyStatus.BUILDING)

    @property
    def unbuilt(self) -> list[str]:
        return self._with_status(DependencyStatus.UNBUILT)

    @property
    def steps(self) -> list[Command]:
        """Prebuild commands followed by a single wait on every marker file."""
        steps = list(self.prebuild)
        if self.wait_on:
            steps.append(wait_on_files(self.wait_on))
        return steps


def read_peer_dependencies(config: WorkspaceConfig, library: str) -> list[str]:
    """Return the peer dependency names declared in a library's package.json.

    Raises:
        MissingPathError: If the library has no package.json.
        ConfigParseError: If package.json is not valid JSON or malformed.
    """
    path = config.package_descriptor(library)
    if not path.exists():
        raise MissingPathError(path, "package descriptor")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ConfigParseError(path, str(e)) from e
    except OSError as e:
        raise ConfigParseError(path, e.strerror or str(e)) from e

    if not isinstance(data, dict):
        raise ConfigParseError(path, "expected a JSON object at the top level")

    peers = data.get("peerDependencies") or {}
    if not isinstance(peers, dict):
        raise ConfigParseError(path, "peerDependencies must be an object")
    return list(peers)


def order_dependencies_first(targets: Iterable[str], config: WorkspaceConfig) -> list[str]:
    """Reorder ``targets`` so each one follows the targets it depends on.

    The sort is stable: unrelated targets keep their relative order.
    Duplicates are dropped. A dependency cycle is broken at the point where
    it is first re-entered.
    """
    targets = list(dict.fromkeys(targets))
    target_set = set(targets)

    dependencies: dict[str, list[str]] = {}
    for target in targets:
        try:
            peers = read_peer_dependencies(config, target)
        except MissingPathError:
            peers = []
        names = [config.library_name(peer) for peer in peers]
        dependencies[target] = [n for n in names if n in target_set and n != target]

    ordered: list[str] = []
    placed: set[str] = set()
    visiting: set[str] = set()

    def visit(library: str) -> None:
        if library in placed or library in visiting:
            return
        visiting.add(library)
        for dep in dependencies[library]:
            visit(dep)
        visiting.discard(library)
        placed.add(library)
        ordered.append(library)

    for target in targets:
        visit(target)
    return ordered


def plan_dependency_waits(
    library: str,
    all_targets: Iterable[str],
    unbuilt_projects: Iterable[str],
    config: WorkspaceConfig,
    projects: Optional[Iterable[str]] = None,
    scheduled: Optional[set[str]] = None,
) -> DependencyWaitPlan:
    """Classify ``library``'s in-workspace peer dependencies and plan the waits.

    Args:
        library: Library about to be built (on-disk name).
        all_targets: Libraries being built by this invocation.
        unbuilt_projects: Libraries with no build output that are not targets.
        config: Workspace settings.
        projects: Known library names; discovered when omitted.
        scheduled: Unbuilt dependencies already given a prebuild step in this
            invocation. Updated in place. Later plans wait on them without
            building them again.
    """
    plan = DependencyWaitPlan(library=library)

    try:
        peers = read_peer_dependencies(config, library)
    except MissingPathError as e:
        log.warning(f"{e}; {library} will not wait on any dependencies")
        return plan

    known = set(projects if projects is not None else list_library_projects(config))
    targets = set(all_targets)
    unbuilt = set(unbuilt_projects)

    dependencies: list[str] = []
    for peer in peers:
        name = config.library_name(peer)
        if name in known and name != library and name not in dependencies:
            dependencies.append(name)

    if not dependencies:
        return plan

    for dep in dependencies:
        if dep in targets:
            status = DependencyStatus.BUILDING
        elif dep in unbuilt:
            if scheduled is not None and dep in scheduled:
                status = DependencyStatus.BUILDING
            else:
                status = DependencyStatus.UNBUILT
                plan.prebuild.append(ng_build(config, dep))
                if scheduled is not None:
                    scheduled.add(dep)
        else:
            status = DependencyStatus.BUILT
        plan.dependencies[dep] = status

    plan.wait_on = [config.marker_path(dep) for dep in dependencies]

    log.info(f"Found {len(dependencies)} lib dependencies in {library}")
    for dep, status in plan.dependencies.items():
        log.dim(f"{dep} (Currently {status.value})")

    return plan
