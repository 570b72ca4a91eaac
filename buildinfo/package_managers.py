"""Package manager detection.

Resolution order:
1. BUILDINFO_USE_PNPM / BUILDINFO_USE_YARN set to "true" force a manager
2. packageManager field (corepack) in the nearest package.json
3. Lock files: the nearest directory holding any known lock file wins,
   ties inside one directory are broken by priority
   (pnpm > yarn > bun > npm)

No signal at all means the project is not a JavaScript project and the
result is None.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Optional

from buildinfo.types import PackageManager

if TYPE_CHECKING:
    from buildinfo.project import Project

logger = logging.getLogger(__name__)

AVAILABLE_PACKAGE_MANAGERS: dict[str, PackageManager] = {
    "pnpm": PackageManager(
        name="pnpm",
        install_command="pnpm install",
        run_command="pnpm run",
        lock_files=("pnpm-lock.yaml",),
        priority=0,
        force_environment="BUILDINFO_USE_PNPM",
    ),
    "yarn": PackageManager(
        name="yarn",
        install_command="yarn install",
        run_command="yarn",
        lock_files=("yarn.lock",),
        priority=1,
        force_environment="BUILDINFO_USE_YARN",
    ),
    "bun": PackageManager(
        name="bun",
        install_command="bun install",
        run_command="bun run",
        lock_files=("bun.lockb", "bun.lock"),
        priority=2,
    ),
    "npm": PackageManager(
        name="npm",
        install_command="npm install",
        run_command="npm run",
        lock_files=("package-lock.json", "npm-shrinkwrap.json"),
        priority=3,
    ),
}


def _by_priority() -> list[PackageManager]:
    return sorted(AVAILABLE_PACKAGE_MANAGERS.values(), key=lambda pm: pm.priority)


async def detect_package_manager(project: Project) -> Optional[PackageManager]:
    """Pick one package manager for the project, or None."""
    forced = _detect_forced(project)
    if forced:
        logger.debug("Package manager forced through %s", forced.force_environment)
        return forced

    pkg_json = await project.get_package_json()
    from_field = _from_package_manager_field(pkg_json.get("packageManager"))
    if from_field:
        logger.debug("Package manager %s from packageManager field", from_field.name)
        return from_field

    return await _from_lock_files(project)


def _detect_forced(project: Project) -> Optional[PackageManager]:
    for pm in _by_priority():
        if pm.force_environment and project.get_env(pm.force_environment) == "true":
            return pm
    return None


def _from_package_manager_field(value: object) -> Optional[PackageManager]:
    """Parse a corepack specifier like "pnpm@8.6.0+sha256.abc"."""
    if not isinstance(value, str) or not value:
        return None
    name = value.split("@", 1)[0].strip()
    return AVAILABLE_PACKAGE_MANAGERS.get(name)


async def _from_lock_files(project: Project) -> Optional[PackageManager]:
    all_lock_files = [lock for pm in _by_priority() for lock in pm.lock_files]
    nearest = await project.fs.find_up(
        all_lock_files,
        cwd=project.base_directory,
        stop_at=project.root,
    )
    if nearest is None:
        return None

    directory = project.fs.dirname(nearest)
    for pm in _by_priority():
        for lock_file in pm.lock_files:
            if await project.fs.exists(os.path.join(directory, lock_file)):
                logger.debug("Package manager %s from lock file %s", pm.name, lock_file)
                return pm
    return None
