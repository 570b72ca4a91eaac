"""Shared fixtures for the build-info test suite.

Every test builds its fixture repository under pytest's `tmp_path` and
detects it through a Project wired to a recording reporter, so no test
talks to Sentry or the network.
"""

from typing import Any, Optional

import pytest

from buildinfo.core.config import Settings
from buildinfo.file_system import FileSystem
from buildinfo.project import Project


class RecordingReporter:
    """Error reporter that keeps every report in memory."""

    def __init__(self) -> None:
        self.reports: list[tuple[BaseException, dict[str, Any]]] = []

    def report(self, error: BaseException, metadata: dict[str, Any]) -> None:
        self.reports.append((error, metadata))


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def config() -> Settings:
    return Settings(catalog_url="", offline=True, sentry_dsn="")


@pytest.fixture
def make_project(tmp_path, reporter, config):
    """Factory for a Project rooted in the test's temp directory."""

    def _make(
        base_directory: Optional[str] = None,
        root: Optional[str] = None,
        env: Optional[dict[str, str]] = None,
        **kwargs: Any,
    ) -> Project:
        kwargs.setdefault("reporter", reporter)
        kwargs.setdefault("config", config)
        return Project(
            FileSystem(str(tmp_path)),
            base_directory,
            root,
            environment=env,
            **kwargs,
        )

    return _make
