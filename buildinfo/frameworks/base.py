"""Framework detector base class and relevance filtering.

A framework is matched from two kinds of evidence found for a package
path: one of its npm dependencies, and one of its config files. The
accuracy of a match depends only on which evidence was found:

  dependency + config file (or no config file declared)  -> NPM
  config file without dependency                         -> CONFIG_ONLY
  dependency, but its declared config file is missing    -> NPM_HINT

When several frameworks match one path, filter_by_relevance() keeps the
most relevant ones: a lower-accuracy match is dropped when a more accurate
match of the same category exists, and the survivors are ordered by
accuracy, category and registration order.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from buildinfo.project import Project

logger = logging.getLogger(__name__)


class Accuracy(enum.IntEnum):
    NPM_HINT = 1
    CONFIG_ONLY = 2
    NPM = 3


class Category(str, enum.Enum):
    """Framework categories, declared in relevance order.

    Static site generators rank above frontend frameworks, which rank
    above backend frameworks, which rank above generic build tools.
    """

    SSG = "static_site_generator"
    FRONTEND_FRAMEWORK = "frontend_framework"
    BACKEND_FRAMEWORK = "backend_framework"
    BUILD_TOOL = "build_tool"

    @property
    def rank(self) -> int:
        return list(Category).index(self)


@dataclass
class DetectedFramework:
    """One framework match for one package path."""

    id: str
    name: str
    category: Category
    accuracy: Accuracy
    package_path: str = ""
    dependency: Optional[str] = None
    version: Optional[str] = None
    config_path: Optional[str] = None
    # Position in the framework registry, the final tie-break
    order: int = 0
    framework: Optional[Framework] = field(default=None, repr=False, compare=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category.value,
            "accuracy": self.accuracy.name.lower(),
            "package_path": self.package_path,
            "dependency": self.dependency,
            "version": self.version,
            "config_path": self.config_path,
        }


class Framework:
    id: str = ""
    name: str = ""
    category: Category = Category.BUILD_TOOL
    npm_dependencies: tuple[str, ...] = ()
    excluded_npm_dependencies: tuple[str, ...] = ()
    config_files: tuple[str, ...] = ()

    build_command: Optional[str] = None
    build_directory: Optional[str] = None
    dev_command: Optional[str] = None
    dev_port: Optional[int] = None
    env: dict[str, str] = {}
    # Slugs of integrations recommended for sites built with this framework
    integrations: tuple[str, ...] = ()

    def __init__(
        self,
        project: Project,
        path: Optional[str] = None,
        package_path: str = "",
        order: int = 0,
    ):
        self.project = project
        self.path = path or project.base_directory
        self.package_path = package_path
        self.order = order

    async def detect(self) -> Optional[DetectedFramework]:
        deps = await self._read_dependencies()
        if any(name in deps for name in self.excluded_npm_dependencies):
            return None

        dependency = next((name for name in self.npm_dependencies if name in deps), None)
        config_path = await self._find_config_file()

        if dependency and (config_path or not self.config_files):
            accuracy = Accuracy.NPM
        elif config_path:
            accuracy = Accuracy.CONFIG_ONLY
        elif dependency:
            accuracy = Accuracy.NPM_HINT
        else:
            return None

        return DetectedFramework(
            id=self.id,
            name=self.name,
            category=self.category,
            accuracy=accuracy,
            package_path=self.package_path,
            dependency=dependency,
            version=deps.get(dependency) if dependency else None,
            config_path=config_path,
            order=self.order,
            framework=self,
        )

    async def _read_dependencies(self) -> dict[str, str]:
        if not self.npm_dependencies and not self.excluded_npm_dependencies:
            return {}
        pkg_json = await self.project.get_package_json(self.path)
        deps: dict[str, str] = {}
        for key in ("devDependencies", "dependencies"):
            section = pkg_json.get(key)
            if isinstance(section, dict):
                deps.update(section)
        return deps

    async def _find_config_file(self) -> Optional[str]:
        if not self.config_files:
            return None
        return await self.project.fs.find_up(
            self.config_files, cwd=self.path, stop_at=self.path
        )


def _relevance_key(detected: DetectedFramework) -> tuple[int, int, int]:
    return (-detected.accuracy, detected.category.rank, detected.order)


def filter_by_relevance(detected: list[DetectedFramework]) -> list[DetectedFramework]:
    """Reduce the matches of one path to the relevant ones, most relevant first."""
    kept: list[DetectedFramework] = []
    for candidate in sorted(detected, key=_relevance_key):
        shadowed_by = next(
            (
                other
                for other in kept
                if other.category is candidate.category
                and other.accuracy > candidate.accuracy
            ),
            None,
        )
        if shadowed_by:
            logger.debug(
                "Dropping %s (%s) in favour of %s (%s)",
                candidate.id,
                candidate.accuracy.name,
                shadowed_by.id,
                shadowed_by.accuracy.name,
            )
            continue
        kept.append(candidate)
    return kept
