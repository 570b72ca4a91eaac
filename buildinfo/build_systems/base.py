"""Base class for build system detectors.

A build system is matched when any of its marker files exists between the
base directory and the repository root. Matches never exclude each other.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from buildinfo.project import Project

logger = logging.getLogger(__name__)


class BuildSystem:
    id: str = ""
    name: str = ""
    config_files: tuple[str, ...] = ()
    # npm package the tool ships as, used to read its version
    npm_package: Optional[str] = None

    def __init__(self, project: Project):
        self.project = project
        self.config_path: Optional[str] = None
        self.version: Optional[str] = None

    async def detect(self) -> Optional[BuildSystem]:
        config = await self.project.fs.find_up(
            self.config_files,
            cwd=self.project.base_directory,
            stop_at=self.project.root,
        )
        if config is None:
            return None

        self.config_path = config
        if self.npm_package:
            self.version = await self._read_npm_version()
        logger.debug("Build system %s matched %s", self.id, config)
        return self

    def get_commands(
        self, package_path: str, package_name: Optional[str] = None
    ) -> Optional[dict[str, str]]:
        """Commands to build or serve one package through this tool.

        Tools that cannot target a single package return None.
        """
        return None

    async def _read_npm_version(self) -> Optional[str]:
        pkg_json = await self.project.get_root_package_json()
        for key in ("devDependencies", "dependencies"):
            deps = pkg_json.get(key) or {}
            if self.npm_package in deps:
                return deps[self.npm_package]
        return None

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "version": self.version}

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id!r} version={self.version!r}>"
