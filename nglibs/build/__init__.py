"""
nglibs.build - Build orchestration for Angular library workspaces.

Provides workspace configuration, library discovery and naming, dependency
wait planning, and batch dispatch of external build commands.
"""

from nglibs.build.commands import BuildCommandList, Command, command
from nglibs.build.config import (
    DEFAULT_OPTIONS_FILE,
    LOCAL_SOURCE_ENTRY,
    WorkspaceConfig,
    resolve_config,
)
from nglibs.build.discovery import (
    DEFAULT_EXCLUDES,
    list_built_projects,
    list_library_projects,
    list_projects,
)
from nglibs.build.orchestrator import LibraryOrchestrator, parse_library_args
from nglibs.build.planner import (
    DependencyStatus,
    DependencyWaitPlan,
    order_dependencies_first,
    plan_dependency_waits,
    read_peer_dependencies,
)
from nglibs.build.runner import BatchResult, CommandResult, run_concurrent, run_sequential

__all__ = [
    # Constants
    "DEFAULT_OPTIONS_FILE",
    "DEFAULT_EXCLUDES",
    "LOCAL_SOURCE_ENTRY",
    # Configuration
    "WorkspaceConfig",
    "resolve_config",
    # Discovery
    "list_projects",
    "list_library_projects",
    "list_built_projects",
    # Commands
    "Command",
    "BuildCommandList",
    "command",
    # Planning
    "DependencyStatus",
    "DependencyWaitPlan",
    "order_dependencies_first",
    "plan_dependency_waits",
    "read_peer_dependencies",
    # Execution
    "BatchResult",
    "CommandResult",
    "run_sequential",
    "run_concurrent",
    # Orchestrator
    "LibraryOrchestrator",
    "parse_library_args",
]
