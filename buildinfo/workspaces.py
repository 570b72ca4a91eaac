"""JavaScript workspace detection.

Workspace globs are declared in pnpm-workspace.yaml for pnpm and in the
`workspaces` field of the root package.json for npm, yarn and bun. The
globs are expanded relative to the workspace root and only directories
holding a package.json become members.
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import TYPE_CHECKING, Optional

import yaml

from buildinfo.events import DETECTED_WORKSPACE_GLOBS
from buildinfo.file_system import NotFoundError, ParseError
from buildinfo.types import WorkspaceInfo, WorkspacePackage

if TYPE_CHECKING:
    from buildinfo.project import Project

logger = logging.getLogger(__name__)


async def detect_workspaces(project: Project) -> Optional[WorkspaceInfo]:
    """Resolve the workspace the base directory belongs to, or None."""
    if project.package_manager is None:
        return None

    pkg_json = await project.get_root_package_json()
    root_dir = project.js_workspace_root or project.base_directory

    if project.package_manager.name == "pnpm":
        globs = await _pnpm_workspace_globs(project, root_dir)
    else:
        globs = _package_json_workspace_globs(pkg_json)

    if not globs:
        return None

    packages = await get_workspace_packages(project, root_dir, globs)

    is_root = project.base_directory == root_dir
    relative_base = project.fs.relative(root_dir, project.base_directory)
    if is_root or any(pkg.path == relative_base for pkg in packages):
        logger.info(
            "Workspace detected at %s with %d packages", root_dir, len(packages)
        )
        project.events.emit(DETECTED_WORKSPACE_GLOBS, globs)
        return WorkspaceInfo(root_dir=root_dir, packages=packages, is_root=is_root)

    logger.debug("Base directory %s is not a member of %s", relative_base, root_dir)
    return None


async def get_workspace_packages(
    project: Project,
    root_dir: str,
    globs: list[str],
) -> list[WorkspacePackage]:
    """Expand globs into unique members that contain a package.json."""
    candidates = await project.fs.glob(globs, cwd=root_dir)
    members = await asyncio.gather(
        *(_read_member(project, root_dir, path) for path in candidates)
    )
    return [member for member in members if member is not None]


async def _read_member(
    project: Project, root_dir: str, path: str
) -> Optional[WorkspacePackage]:
    try:
        pkg_json = await project.fs.read_json(os.path.join(root_dir, path, "package.json"))
    except NotFoundError:
        return None
    except ParseError as error:
        logger.warning("Skipping workspace member %s: %s", path, error)
        project.report(error)
        return None
    name = pkg_json.get("name") if isinstance(pkg_json, dict) else None
    return WorkspacePackage(path=path, name=name)


async def _pnpm_workspace_globs(project: Project, root_dir: str) -> list[str]:
    content = await project.fs.gracefully_read_file(
        os.path.join(root_dir, "pnpm-workspace.yaml")
    )
    if not content:
        return []
    data = yaml.safe_load(content) or {}
    packages = data.get("packages", []) if isinstance(data, dict) else []
    return [glob for glob in packages if isinstance(glob, str)]


def _package_json_workspace_globs(pkg_json: dict) -> list[str]:
    workspaces = pkg_json.get("workspaces")
    if isinstance(workspaces, dict):
        workspaces = workspaces.get("packages")
    if not isinstance(workspaces, list):
        return []
    return [glob for glob in workspaces if isinstance(glob, str)]
