"""The Project: one detection context per build.

Detection runs in five stages, each depending on the previous one:

  package manager -> workspaces -> build systems -> frameworks -> settings

Every stage is exposed as an async accessor that can be called on its own
and in any order; upstream stages are run first when needed. A stage runs
at most once per Project. Concurrent first calls share the same in-flight
task, and later calls return the stored result.

Stage results are tri-state. A stage that has not run has no result yet
(reading it raises StageNotRunError). A stage that ran and found nothing
stores None or an empty collection. A stage that found something stores
it.

A stage that fails reports the error and stores its degraded result
(None or an empty collection) instead of raising, so later stages still
run with less information.
"""

import asyncio
import enum
import logging
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Mapping, Optional

from buildinfo import events
from buildinfo.build_systems import BuildSystem, detect_build_systems
from buildinfo.core.config import Settings, get_settings
from buildinfo.core.sentry import ErrorReporter, SentryReporter
from buildinfo.events import EventEmitter
from buildinfo.file_system import FileSystem
from buildinfo.frameworks import DetectedFramework, detect_frameworks_in_path
from buildinfo.package_managers import AVAILABLE_PACKAGE_MANAGERS, detect_package_manager
from buildinfo.settings import BuildSettings, get_build_settings
from buildinfo.types import PackageManager, WorkspaceInfo
from buildinfo.workspaces import detect_workspaces

logger = logging.getLogger(__name__)

PACKAGE_MANAGER = "package_manager"
WORKSPACES = "workspaces"
BUILD_SYSTEMS = "build_systems"
FRAMEWORKS = "frameworks"
SETTINGS = "settings"

STAGES = (PACKAGE_MANAGER, WORKSPACES, BUILD_SYSTEMS, FRAMEWORKS, SETTINGS)

# Loose version match: "v18", "18.17", "lts 18.17.1"
_VERSION_RE = re.compile(r"(\d+)(?:\.(\d+))?(?:\.(\d+))?")

NODE_VERSION_FILES = (".nvmrc", ".node_version")


class StageNotRunError(RuntimeError):
    """A stage result was read before the stage ran."""

    def __init__(self, stage: str):
        super().__init__(f"Stage '{stage}' has not run yet")
        self.stage = stage


class StageStatus(enum.Enum):
    NOT_RUN = "not_run"
    RUNNING = "running"
    DONE = "done"


@dataclass
class StageState:
    status: StageStatus = StageStatus.NOT_RUN
    value: Any = None
    task: Optional[asyncio.Future] = None


class Project:
    """Detection context for one repository checkout.

    Args:
        fs: Filesystem gateway. Its cwd is moved to the base directory.
        base_directory: Directory to detect, relative to `root` (or the
            filesystem's cwd) unless absolute.
        root: Repository root; upward searches stop there. Unset when it
            equals the base directory.
        environment: Environment snapshot used by detection. Defaults to
            an empty mapping; the process environment is never read.
        reporter: Where stage failures are reported. Defaults to Sentry.
        config: Library settings (catalog, offline mode).
    """

    def __init__(
        self,
        fs: FileSystem,
        base_directory: Optional[str] = None,
        root: Optional[str] = None,
        *,
        environment: Optional[Mapping[str, str]] = None,
        reporter: Optional[ErrorReporter] = None,
        config: Optional[Settings] = None,
    ):
        self.fs = fs
        self.base_directory = fs.resolve(
            root or "", base_directory if base_directory is not None else fs.cwd
        )
        self.root: Optional[str] = fs.resolve(root) if root else None
        if self.root == self.base_directory:
            self.root = None

        if base_directory is not None and not fs.is_absolute(base_directory):
            self.relative_base_directory = base_directory
        else:
            self.relative_base_directory = fs.relative(self.root or fs.cwd, self.base_directory)

        self.fs.cwd = self.base_directory

        # Directory of the upper-most package.json, set by get_root_package_json()
        self.js_workspace_root: Optional[str] = None
        self.events = EventEmitter()
        self.config = config or get_settings()
        self.reporter: ErrorReporter = reporter or SentryReporter()
        self._environment: Mapping[str, str] = MappingProxyType(dict(environment or {}))
        self._node_version: Optional[str] = None
        self._stages: dict[str, StageState] = {stage: StageState() for stage in STAGES}

    # ------------------------------------------------------------------
    # Environment and reporting
    # ------------------------------------------------------------------

    def set_environment(self, env: Mapping[str, str]) -> "Project":
        self._environment = MappingProxyType(dict(env))
        return self

    def get_env(self, key: str) -> Optional[str]:
        return self._environment.get(key)

    def report(self, error: BaseException) -> None:
        """Log an error and forward it to the reporter with build metadata."""
        logger.error("Detection failed in %s: %s", self.base_directory, error)
        self.reporter.report(
            error,
            {"build": {"base_directory": self.base_directory, "root": self.root}},
        )

    # ------------------------------------------------------------------
    # Node.js version
    # ------------------------------------------------------------------

    def set_node_version(self, version: str) -> "Project":
        self._node_version = coerce_version(version)
        return self

    async def get_current_node_version(self) -> Optional[str]:
        """Node.js version for the build, as major.minor.patch.

        Checked in order: the version set with set_node_version(), the
        NODE_VERSION environment entry, then .nvmrc and .node_version in the
        base directory.
        """
        if self._node_version:
            return self._node_version

        from_env = coerce_version(self.get_env("NODE_VERSION"))
        if from_env:
            return from_env

        for filename in NODE_VERSION_FILES:
            content = await self.fs.gracefully_read_file(
                self.fs.join(self.base_directory, filename)
            )
            version = coerce_version(content)
            if version:
                logger.debug("Node.js version %s from %s", version, filename)
                return version
        return None

    # ------------------------------------------------------------------
    # package.json helpers
    # ------------------------------------------------------------------

    def get_npm_script_command(self, npm_script: str) -> str:
        """Command running an npm script with the detected package manager."""
        package_manager = (
            self._stages[PACKAGE_MANAGER].value if self.is_stage_done(PACKAGE_MANAGER) else None
        )
        run_command = (package_manager or AVAILABLE_PACKAGE_MANAGERS["npm"]).run_command
        return f"{run_command} {npm_script}"

    async def get_root_package_json(self) -> dict:
        """Read the upper-most package.json between base directory and root."""
        paths = await self.fs.find_up_multiple(
            "package.json", cwd=self.base_directory, stop_at=self.root
        )
        if not paths:
            return {}
        root_json_path = paths[-1]
        self.js_workspace_root = self.fs.dirname(root_json_path)
        return await self.fs.read_json(root_json_path)

    async def get_package_json(self, start_directory: Optional[str] = None) -> dict:
        """Read the nearest package.json, with its location under `pkg_path`."""
        pkg_path = await self.fs.find_up(
            "package.json",
            cwd=start_directory or self.base_directory,
            stop_at=self.root,
        )
        if pkg_path is None:
            return {"pkg_path": None}
        pkg_json = await self.fs.read_json(pkg_path)
        return {**pkg_json, "pkg_path": pkg_path}

    # ------------------------------------------------------------------
    # Stage accessors
    # ------------------------------------------------------------------

    async def detect_package_manager(self) -> Optional[PackageManager]:
        return await self._run_stage(
            PACKAGE_MANAGER,
            lambda: detect_package_manager(self),
            degraded=lambda: None,
            event=events.DETECT_PACKAGE_MANAGER,
        )

    async def detect_workspaces(self) -> Optional[WorkspaceInfo]:
        async def _detect() -> Optional[WorkspaceInfo]:
            await self.detect_package_manager()
            return await detect_workspaces(self)

        return await self._run_stage(
            WORKSPACES, _detect, degraded=lambda: None, event=events.DETECT_WORKSPACES
        )

    async def detect_build_systems(self) -> list[BuildSystem]:
        async def _detect() -> list[BuildSystem]:
            await self.detect_workspaces()
            return await detect_build_systems(self)

        return await self._run_stage(
            BUILD_SYSTEMS, _detect, degraded=list, event=events.DETECT_BUILD_SYSTEMS
        )

    async def detect_frameworks(self) -> dict[str, list[DetectedFramework]]:
        """Detected frameworks per package path.

        Inside a workspace every member path gets an entry; otherwise the
        only key is "" for the base directory.
        """

        async def _detect() -> dict[str, list[DetectedFramework]]:
            await self.detect_build_systems()
            workspace = self.workspace
            if workspace is None:
                return {"": await self.detect_frameworks_in_path()}

            paths = [pkg.path for pkg in workspace.packages]
            results = await asyncio.gather(
                *(
                    self.detect_frameworks_in_path(
                        self.fs.join(workspace.root_dir, path), package_path=path
                    )
                    for path in paths
                )
            )
            return dict(zip(paths, results))

        return await self._run_stage(
            FRAMEWORKS, _detect, degraded=dict, event=events.DETECT_FRAMEWORKS
        )

    async def detect_frameworks_in_path(
        self, path: Optional[str] = None, package_path: str = ""
    ) -> list[DetectedFramework]:
        """Relevant frameworks for one directory, most relevant first."""
        try:
            return await detect_frameworks_in_path(self, path, package_path)
        except Exception as error:
            self.report(error)
            return []

    async def get_build_settings(self) -> list[BuildSettings]:
        return await self._run_stage(
            SETTINGS,
            lambda: get_build_settings(self),
            degraded=list,
            event=events.DETECT_SETTINGS,
        )

    # ------------------------------------------------------------------
    # Stored results
    # ------------------------------------------------------------------

    def is_stage_done(self, stage: str) -> bool:
        return self._stages[stage].status is StageStatus.DONE

    def _result(self, stage: str) -> Any:
        if not self.is_stage_done(stage):
            raise StageNotRunError(stage)
        return self._stages[stage].value

    @property
    def package_manager(self) -> Optional[PackageManager]:
        return self._result(PACKAGE_MANAGER)

    @property
    def workspace(self) -> Optional[WorkspaceInfo]:
        return self._result(WORKSPACES)

    @property
    def build_systems(self) -> list[BuildSystem]:
        return self._result(BUILD_SYSTEMS)

    @property
    def frameworks(self) -> dict[str, list[DetectedFramework]]:
        return self._result(FRAMEWORKS)

    @property
    def settings(self) -> list[BuildSettings]:
        return self._result(SETTINGS)

    # ------------------------------------------------------------------
    # Stage machinery
    # ------------------------------------------------------------------

    async def _run_stage(
        self,
        stage: str,
        detect: Callable[[], Awaitable[Any]],
        degraded: Callable[[], Any],
        event: str,
    ) -> Any:
        state = self._stages[stage]
        if state.status is StageStatus.DONE:
            return state.value
        if state.task is None:
            state.status = StageStatus.RUNNING
            state.task = asyncio.ensure_future(
                self._execute_stage(state, stage, detect, degraded, event)
            )
        # A cancelled caller must not cancel detection for the other callers
        return await asyncio.shield(state.task)

    async def _execute_stage(
        self,
        state: StageState,
        stage: str,
        detect: Callable[[], Awaitable[Any]],
        degraded: Callable[[], Any],
        event: str,
    ) -> Any:
        try:
            result = await detect()
        except Exception as error:
            self.report(error)
            state.value = degraded()
            state.status = StageStatus.DONE
            return state.value

        state.value = result
        state.status = StageStatus.DONE
        logger.debug("Stage %s done for %s", stage, self.base_directory)
        self.events.emit(event, result)
        return result


def coerce_version(value: Optional[str]) -> Optional[str]:
    """Coerce a loose version string to major.minor.patch, or None."""
    if not value:
        return None
    match = _VERSION_RE.search(value)
    if match is None:
        return None
    major, minor, patch = match.groups()
    return f"{int(major)}.{int(minor or 0)}.{int(patch or 0)}"
