"""Framework registry.

Public API:
    FRAMEWORKS -- the ordered detector classes
    detect_frameworks_in_path(project, path, package_path) -> list[DetectedFramework]
    filter_by_relevance(detected) -> list[DetectedFramework]
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Optional

from buildinfo.frameworks.base import (
    Accuracy,
    Category,
    DetectedFramework,
    Framework,
    filter_by_relevance,
)
from buildinfo.frameworks.build_tools import Parcel, Vite, Webpack
from buildinfo.frameworks.static_site_generators import (
    Astro,
    Docusaurus,
    Eleventy,
    Gatsby,
    Hugo,
    Next,
    Nuxt,
    VitePress,
)
from buildinfo.frameworks.web import (
    Angular,
    CreateReactApp,
    Ember,
    Express,
    NestJS,
    Remix,
    SvelteKit,
    Vue,
)

if TYPE_CHECKING:
    from buildinfo.project import Project

FRAMEWORKS: tuple[type[Framework], ...] = (
    Next,
    Nuxt,
    Gatsby,
    Astro,
    Docusaurus,
    Eleventy,
    VitePress,
    Hugo,
    Remix,
    SvelteKit,
    Angular,
    Vue,
    Ember,
    CreateReactApp,
    NestJS,
    Express,
    Vite,
    Parcel,
    Webpack,
)


async def detect_frameworks_in_path(
    project: Project,
    path: Optional[str] = None,
    package_path: str = "",
) -> list[DetectedFramework]:
    """Run every framework detector concurrently against one path."""
    detected = await asyncio.gather(
        *(
            framework_cls(project, path, package_path=package_path, order=order).detect()
            for order, framework_cls in enumerate(FRAMEWORKS)
        )
    )
    return filter_by_relevance([match for match in detected if match is not None])


__all__ = [
    "FRAMEWORKS",
    "Accuracy",
    "Category",
    "DetectedFramework",
    "Framework",
    "detect_frameworks_in_path",
    "filter_by_relevance",
]
