"""Infer how to build a source repository.

Public API:
    Project -- staged, memoized detection context
    get_build_info(project_dir, root_dir) -> BuildInfo
"""

from buildinfo.build_info import BuildInfo, get_build_info
from buildinfo.file_system import FileSystem
from buildinfo.project import Project, StageNotRunError

__all__ = ["BuildInfo", "FileSystem", "Project", "StageNotRunError", "get_build_info"]
