"""Shared types for the build-info detectors.

Every stage of the detection pipeline produces one of these descriptors.
All of them are plain dataclasses with a `to_dict()` for JSON output.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class PackageManager:
    """A JavaScript package manager and the commands it runs with.

    `priority` breaks ties when several lock files live in the same
    directory (lower wins).
    """

    name: str
    install_command: str
    run_command: str
    lock_files: tuple[str, ...]
    priority: int
    force_environment: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "install_command": self.install_command,
            "run_command": self.run_command,
            "lock_files": list(self.lock_files),
            "force_environment": self.force_environment,
        }


@dataclass(frozen=True)
class WorkspacePackage:
    """A workspace member, relative to the workspace root."""

    path: str
    name: Optional[str] = None

    def to_dict(self) -> dict:
        return {"path": self.path, "name": self.name}


@dataclass
class WorkspaceInfo:
    """A detected JavaScript workspace.

    `root_dir` is absolute and is the base directory or one of its
    ancestors. Member paths are relative to it and unique.
    """

    root_dir: str
    packages: list[WorkspacePackage] = field(default_factory=list)
    is_root: bool = False

    def get_package(self, path: str) -> Optional[WorkspacePackage]:
        for pkg in self.packages:
            if pkg.path == path:
                return pkg
        return None

    def to_dict(self) -> dict:
        return {
            "root_dir": self.root_dir,
            "is_root": self.is_root,
            "packages": [pkg.to_dict() for pkg in self.packages],
        }
