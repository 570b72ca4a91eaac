"""Build system registry.

Public API:
    BUILD_SYSTEMS -- the ordered detector classes
    detect_build_systems(project) -> list[BuildSystem]
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from buildinfo.build_systems.base import BuildSystem
from buildinfo.build_systems.javascript import Lage, Lerna, Moon, Node, Nx, Rush, Turbo
from buildinfo.build_systems.polyglot import Bazel, Buck, Gradle, Maven, Nix, Pants

if TYPE_CHECKING:
    from buildinfo.project import Project

# JavaScript monorepo tools come first so they win the settings fallback
# inside workspaces.
BUILD_SYSTEMS: tuple[type[BuildSystem], ...] = (
    Node,
    Nx,
    Lerna,
    Turbo,
    Rush,
    Lage,
    Moon,
    Bazel,
    Buck,
    Pants,
    Gradle,
    Maven,
    Nix,
)


async def detect_build_systems(project: Project) -> list[BuildSystem]:
    """Run every detector concurrently; keep matches in registration order."""
    results = await asyncio.gather(*(cls(project).detect() for cls in BUILD_SYSTEMS))
    return [build_system for build_system in results if build_system is not None]


__all__ = ["BUILD_SYSTEMS", "BuildSystem", "detect_build_systems"]
