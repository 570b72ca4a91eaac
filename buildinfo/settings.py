"""Build settings compilation.

Turns the per-path framework matches into one settings entry per package,
in workspace member order. A path without frameworks falls back to a build
system that can target the package; a path with neither yields nothing.

Build command priority:
1. the workspace's monorepo tool (nx, turbo, lerna, ...) for that package
2. the package's own `build` npm script, run through the package manager
3. the framework's default build command
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from buildinfo.build_systems import BuildSystem
from buildinfo.build_systems.javascript import MonorepoTool
from buildinfo.catalog import IntegrationResponse, get_available_integrations
from buildinfo.frameworks import DetectedFramework

if TYPE_CHECKING:
    from buildinfo.project import Project
    from buildinfo.types import WorkspaceInfo, WorkspacePackage

logger = logging.getLogger(__name__)


@dataclass
class BuildSettings:
    """Concrete build settings for one package."""

    name: str
    package_path: str
    base_directory: str
    build_command: Optional[str] = None
    dev_command: Optional[str] = None
    dist_dir: Optional[str] = None
    framework: Optional[dict] = None
    build_system: Optional[str] = None
    framework_port: Optional[int] = None
    env: dict[str, str] = field(default_factory=dict)
    integrations: list[dict] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "package_path": self.package_path,
            "base_directory": self.base_directory,
            "build_command": self.build_command,
            "dev_command": self.dev_command,
            "dist_dir": self.dist_dir,
            "framework": self.framework,
            "build_system": self.build_system,
            "framework_port": self.framework_port,
            "env": self.env,
            "integrations": self.integrations,
        }


async def get_build_settings(project: Project) -> list[BuildSettings]:
    """Compile settings for every path of the frameworks mapping, in order."""
    frameworks = await project.detect_frameworks()
    build_systems = await project.detect_build_systems()
    workspace = await project.detect_workspaces()
    catalog = await _load_catalog(project, frameworks)

    settings: list[BuildSettings] = []
    for package_path, detected in frameworks.items():
        entry = await _settings_for_path(
            project, package_path, detected, build_systems, workspace, catalog
        )
        if entry is not None:
            settings.append(entry)

    logger.info("Compiled %d build settings", len(settings))
    return settings


async def _settings_for_path(
    project: Project,
    package_path: str,
    detected: list[DetectedFramework],
    build_systems: list[BuildSystem],
    workspace: Optional[WorkspaceInfo],
    catalog: Optional[list[IntegrationResponse]],
) -> Optional[BuildSettings]:
    directory = (
        project.fs.join(workspace.root_dir, package_path) if workspace else project.base_directory
    )
    pkg_json = await project.get_package_json(directory)
    member = workspace.get_package(package_path) if workspace else None
    name = (member and member.name) or pkg_json.get("name")

    tool, tool_commands = _monorepo_commands(build_systems, package_path, member, workspace)
    if not detected:
        if tool_commands is None:
            return None
        return BuildSettings(
            name=name or package_path or tool.name,
            package_path=package_path,
            base_directory=directory,
            build_command=tool_commands.get("build"),
            dev_command=tool_commands.get("dev"),
            build_system=tool.id,
        )

    if workspace is None:
        # Outside a workspace the framework knows best how to build itself
        tool, tool_commands = None, None

    match = detected[0]
    framework = match.framework
    scripts = pkg_json.get("scripts") or {}

    if tool_commands and tool_commands.get("build"):
        build_command = tool_commands["build"]
    elif "build" in scripts:
        build_command = project.get_npm_script_command("build")
    else:
        build_command = framework.build_command

    dist_dir = None
    if framework.build_directory:
        dist_dir = (
            os.path.join(package_path, framework.build_directory)
            if package_path
            else framework.build_directory
        )

    return BuildSettings(
        name=name or match.name,
        package_path=package_path,
        base_directory=directory,
        build_command=build_command,
        dev_command=(tool_commands or {}).get("dev") or framework.dev_command,
        dist_dir=dist_dir,
        framework={"id": match.id, "name": match.name},
        build_system=tool.id if tool else None,
        framework_port=framework.dev_port,
        env=dict(framework.env),
        integrations=_resolve_integrations(framework.integrations, catalog),
    )


def _monorepo_commands(
    build_systems: list[BuildSystem],
    package_path: str,
    member: Optional[WorkspacePackage],
    workspace: Optional[WorkspaceInfo],
) -> tuple[Optional[BuildSystem], Optional[dict[str, str]]]:
    """First build system able to target the package.

    Inside a workspace only monorepo tools are consulted and the package
    must be a member; outside of one only the repository itself can be
    targeted, by any build system.
    """
    if workspace and member is None:
        return None, None
    for build_system in build_systems:
        if workspace and not isinstance(build_system, MonorepoTool):
            continue
        commands = build_system.get_commands(package_path, member.name if member else None)
        if commands:
            return build_system, commands
    return None, None


async def _load_catalog(
    project: Project, frameworks: dict[str, list[DetectedFramework]]
) -> Optional[list[IntegrationResponse]]:
    recommended = any(
        match.framework.integrations
        for detected in frameworks.values()
        for match in detected[:1]
        if match.framework
    )
    if not recommended or project.config.offline or not project.config.catalog_url:
        return None
    return await get_available_integrations(project.config)


def _resolve_integrations(
    slugs: tuple[str, ...], catalog: Optional[list[IntegrationResponse]]
) -> list[dict]:
    """Resolve recommended slugs against the catalog.

    Without a catalog the slugs are passed through unresolved; with one,
    slugs the catalog does not know are dropped.
    """
    if catalog is None:
        return [{"slug": slug, "version": None, "has_build": False} for slug in slugs]
    by_slug = {integration.slug: integration for integration in catalog}
    return [by_slug[slug].to_dict() for slug in slugs if slug in by_slug]
