"""
Library orchestrator for nglibs.

Turns a list of library names into external commands (build, serve, pack,
publish, generate, remove) and dispatches them as a batch.
"""

from __future__ import annotations

from typing import Callable, Iterable, Optional

from nglibs.build.commands import BuildCommandList, Command
from nglibs.build.config import WorkspaceConfig
from nglibs.build.discovery import list_built_projects, list_library_projects
from nglibs.build.phases import (
    WAIT_ON_DELAY_MS,
    clean_output,
    copy_file,
    ng_build,
    ng_generate_library,
    ng_serve,
    npm_pack,
    npm_publish,
    remove_path,
    wait_on_files,
)
from nglibs.build.planner import order_dependencies_first, plan_dependency_waits
from nglibs.build.runner import BatchResult, run_concurrent, run_sequential
from nglibs.core.errors import UsageError
from nglibs.core.utils import log

# Produces the command for one library, or None to skip it
CommandFactory = Callable[[str], Optional[Command]]


class LibraryOrchestrator:
    """Runs per-library commands for one invocation."""

    def __init__(self, config: WorkspaceConfig, dry_run: bool = False):
        self.config = config
        self.dry_run = dry_run

    # -------------------------------------------------------------------------
    # Sequential per-library flow
    # -------------------------------------------------------------------------

    def library_commands(
        self,
        libraries: list[str],
        command_for: CommandFactory,
        wait_for_previous: bool = True,
    ) -> list[Command]:
        """Build one command per library, in order.

        With ``wait_for_previous`` every command after the first waits for
        the previous library's package.json, so package-manager steps never
        race an unfinished prior step.
        """
        commands: list[Command] = []
        previous: Optional[str] = None

        for library in libraries:
            cmd = command_for(library)
            if cmd is None:
                continue
            if previous is not None and wait_for_previous:
                descriptor = self.config.package_descriptor(self.config.prefixed(previous))
                cmd = cmd.after(wait_on_files([descriptor.resolve()], WAIT_ON_DELAY_MS))
            commands.append(cmd.with_label(library))
            previous = library

        return commands

    def process_libraries(
        self,
        libraries: list[str],
        command_for: CommandFactory,
        wait_for_previous: bool = True,
    ) -> BatchResult:
        log.info(f"Running command against {len(libraries)} libs: {', '.join(libraries)}")
        commands = self.library_commands(libraries, command_for, wait_for_previous)

        batch = BatchResult()
        for index, cmd in enumerate(commands):
            log.rule()
            log.info(f"Processing library {index + 1} of {len(commands)}: {cmd.label}")
            log.dim(cmd.to_shell())
            log.rule()
            batch.extend(run_sequential([cmd], dry_run=self.dry_run))
        return batch

    # -------------------------------------------------------------------------
    # Build / serve
    # -------------------------------------------------------------------------

    def build_commands(
        self,
        targets: list[str],
        watch: bool = False,
        serve: bool = False,
        projects: Optional[list[str]] = None,
        built: Optional[list[str]] = None,
    ) -> BuildCommandList:
        """Compose ``clean && <dependency waits> && build`` per target, plus serve.

        ``projects`` and ``built`` default to what is currently on disk.
        """
        if projects is None:
            projects = list_library_projects(self.config)
        if built is None:
            built = list_built_projects(self.config)

        unbuilt = [p for p in projects if p not in built and p not in targets]
        scheduled: set[str] = set()

        commands = BuildCommandList()
        for target in targets:
            plan = plan_dependency_waits(
                target,
                targets,
                unbuilt,
                self.config,
                projects=projects,
                scheduled=scheduled,
            )
            cmd = ng_build(self.config, target, watch=watch).after(
                clean_output(self.config, target),
                *plan.steps,
            )
            commands.append(cmd.with_label(target))

        if serve:
            markers = [self.config.marker_path(t) for t in targets]
            serve_cmd = ng_serve()
            if markers:
                serve_cmd = serve_cmd.after(wait_on_files(markers))
            commands.append(serve_cmd.with_label("serve"))

        return commands

    def build_and_serve(
        self,
        targets: list[str],
        watch: bool = True,
        serve: bool = True,
        concurrent: bool = True,
    ) -> BatchResult:
        """Build ``targets`` and optionally serve the showcase app.

        Raises:
            UsageError: If a watch build is requested without concurrency.
        """
        if watch and not concurrent:
            raise UsageError("--sequential cannot be combined with a watching build (build_watch, serve)")

        targets = [self.config.prefixed(t) for t in targets]
        if not concurrent:
            ordered = order_dependencies_first(targets, self.config)
            if ordered != targets:
                log.dim(f"Reordered so dependencies build first: {', '.join(ordered)}")
            targets = ordered
        log.info(f"Libraries: {', '.join(targets) if targets else '(none)'}")

        commands = self.build_commands(targets, watch=watch, serve=serve)
        mode = " concurrently" if concurrent else ""
        log.header(f"{len(commands)} commands to run{mode}")
        for cmd in commands:
            log.dim(cmd.to_shell())

        if concurrent:
            return run_concurrent(commands, dry_run=self.dry_run)
        return run_sequential(commands, dry_run=self.dry_run)

    # -------------------------------------------------------------------------
    # Pack / publish
    # -------------------------------------------------------------------------

    def _in_dist(self, library: str, make: Callable[..., Command]) -> Optional[Command]:
        dist_dir = self.config.dist_dir(self.config.prefixed(library))
        if not dist_dir.exists():
            log.warning(f"no path {dist_dir} was found, skipping {library}")
            return None
        return make(dist_dir)

    def pack(self, libraries: list[str]) -> BatchResult:
        return self.process_libraries(libraries, lambda lib: self._in_dist(lib, npm_pack))

    def publish(self, libraries: list[str]) -> BatchResult:
        public = self.config.is_public_scope
        return self.process_libraries(
            libraries,
            lambda lib: self._in_dist(lib, lambda d: npm_publish(d, public)),
        )

    def pack_and_publish(self, libraries: list[str]) -> BatchResult:
        public = self.config.is_public_scope
        return self.process_libraries(
            libraries,
            lambda lib: self._in_dist(lib, lambda d: npm_publish(d, public).after(npm_pack(d))),
        )

    # -------------------------------------------------------------------------
    # Add / remove
    # -------------------------------------------------------------------------

    def _generate(self, library: str) -> Command:
        prefixed = self.config.prefixed(library)
        project_dir = self.config.project_dir(prefixed)

        followups: list[Command] = []
        if self.config.registry_auth_file_path:
            followups.append(copy_file(self.config.registry_auth_file_path, project_dir))
        if self.config.test_runner_config_path:
            followups.append(remove_path(project_dir / "karma.conf.js"))

        cmd = ng_generate_library(self.config, prefixed)
        for followup in followups:
            cmd = followup.after(cmd)
        return cmd

    def add(self, libraries: list[str]) -> BatchResult:
        return self.process_libraries(libraries, self._generate)

    def remove(self, libraries: list[str]) -> BatchResult:
        return self.process_libraries(
            libraries,
            lambda lib: remove_path(self.config.project_dir(self.config.prefixed(lib))),
            wait_for_previous=False,
        )


def parse_library_args(args: Iterable[str]) -> list[str]:
    """Split comma-separated library arguments into trimmed, lowercase names."""
    libraries: list[str] = []
    for arg in args:
        for name in arg.split(","):
            name = name.strip().lower()
            if name:
                libraries.append(name)
    return libraries
