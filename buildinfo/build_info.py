"""One-shot build info for a repository checkout.

Runs every detection stage and returns a single JSON-serializable result:

    info = await get_build_info("/repo/apps/site", "/repo", env={"BUILDINFO_USE_PNPM": "true"})
    print(info.to_dict())
"""

import logging
from dataclasses import dataclass, field
from typing import Mapping, Optional

from buildinfo.build_systems import BuildSystem
from buildinfo.core.config import Settings, get_settings
from buildinfo.core.logging import configure_structlog
from buildinfo.core.sentry import ErrorReporter, init_sentry
from buildinfo.file_system import FileSystem
from buildinfo.frameworks import DetectedFramework
from buildinfo.project import Project
from buildinfo.settings import BuildSettings
from buildinfo.types import PackageManager, WorkspaceInfo

logger = logging.getLogger(__name__)


@dataclass
class BuildInfo:
    package_manager: Optional[PackageManager] = None
    js_workspaces: Optional[WorkspaceInfo] = None
    build_systems: list[BuildSystem] = field(default_factory=list)
    frameworks: list[DetectedFramework] = field(default_factory=list)
    settings: list[BuildSettings] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "package_manager": self.package_manager.to_dict() if self.package_manager else None,
            "js_workspaces": self.js_workspaces.to_dict() if self.js_workspaces else None,
            "build_systems": [build_system.to_dict() for build_system in self.build_systems],
            "frameworks": [framework.to_dict() for framework in self.frameworks],
            "settings": [entry.to_dict() for entry in self.settings],
        }


async def get_build_info(
    project_dir: Optional[str] = None,
    root_dir: Optional[str] = None,
    *,
    env: Optional[Mapping[str, str]] = None,
    config: Optional[Settings] = None,
    reporter: Optional[ErrorReporter] = None,
) -> BuildInfo:
    """Detect everything about the project at `project_dir`.

    Configures logging from `config` and, unless a reporter is given,
    initialises Sentry for the default reporter.
    """
    config = config or get_settings()
    if reporter is None:
        init_sentry(config.sentry_dsn, config.environment)

    project = Project(
        FileSystem(),
        project_dir,
        root_dir,
        environment=env,
        reporter=reporter,
        config=config,
    )

    configure_structlog(config.debug, base_directory=project.base_directory)

    settings = await project.get_build_settings()
    frameworks = [
        framework
        for detected in project.frameworks.values()
        for framework in detected
    ]

    info = BuildInfo(
        package_manager=project.package_manager,
        js_workspaces=project.workspace,
        build_systems=project.build_systems,
        frameworks=frameworks,
        settings=settings,
    )
    logger.info(
        "Build info for %s: pm=%s frameworks=%s settings=%d",
        project.base_directory,
        info.package_manager.name if info.package_manager else None,
        [framework.id for framework in frameworks],
        len(settings),
    )
    return info
