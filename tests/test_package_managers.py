"""Tests for package manager resolution."""

import json

import pytest

from buildinfo.package_managers import AVAILABLE_PACKAGE_MANAGERS


class TestLockFiles:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "lock_file,expected",
        [
            ("pnpm-lock.yaml", "pnpm"),
            ("yarn.lock", "yarn"),
            ("bun.lockb", "bun"),
            ("bun.lock", "bun"),
            ("package-lock.json", "npm"),
            ("npm-shrinkwrap.json", "npm"),
        ],
    )
    async def test_each_lock_file(self, make_project, tmp_path, lock_file, expected):
        (tmp_path / lock_file).write_text("")
        pm = await make_project().detect_package_manager()
        assert pm.name == expected

    @pytest.mark.asyncio
    async def test_priority_breaks_ties_in_one_directory(self, make_project, tmp_path):
        (tmp_path / "package-lock.json").write_text("{}")
        (tmp_path / "yarn.lock").write_text("")
        pm = await make_project().detect_package_manager()
        assert pm.name == "yarn"

    @pytest.mark.asyncio
    async def test_nearest_directory_wins_over_priority(self, make_project, tmp_path):
        (tmp_path / "pnpm-lock.yaml").write_text("")
        site = tmp_path / "apps" / "site"
        site.mkdir(parents=True)
        (site / "package-lock.json").write_text("{}")

        pm = await make_project("apps/site", str(tmp_path)).detect_package_manager()

        assert pm.name == "npm"

    @pytest.mark.asyncio
    async def test_lock_file_in_ancestor_is_found(self, make_project, tmp_path):
        (tmp_path / "yarn.lock").write_text("")
        (tmp_path / "apps" / "site").mkdir(parents=True)

        pm = await make_project("apps/site", str(tmp_path)).detect_package_manager()

        assert pm.name == "yarn"

    @pytest.mark.asyncio
    async def test_search_stops_at_root(self, make_project, tmp_path):
        (tmp_path / "yarn.lock").write_text("")
        repo = tmp_path / "repo"
        (repo / "site").mkdir(parents=True)

        pm = await make_project("site", str(repo)).detect_package_manager()

        assert pm is None

    @pytest.mark.asyncio
    async def test_no_signal_means_no_package_manager(self, make_project):
        assert await make_project().detect_package_manager() is None


class TestPackageManagerField:
    @pytest.mark.asyncio
    async def test_corepack_field_beats_lock_files(self, make_project, tmp_path):
        (tmp_path / "package.json").write_text(
            json.dumps({"packageManager": "pnpm@8.6.0+sha256.abc"})
        )
        (tmp_path / "package-lock.json").write_text("{}")

        pm = await make_project().detect_package_manager()

        assert pm.name == "pnpm"

    @pytest.mark.asyncio
    async def test_unknown_manager_falls_back_to_lock_files(self, make_project, tmp_path):
        (tmp_path / "package.json").write_text(json.dumps({"packageManager": "deno@1.0.0"}))
        (tmp_path / "yarn.lock").write_text("")

        pm = await make_project().detect_package_manager()

        assert pm.name == "yarn"


class TestForcedByEnvironment:
    @pytest.mark.asyncio
    async def test_env_beats_everything(self, make_project, tmp_path):
        (tmp_path / "package.json").write_text(json.dumps({"packageManager": "npm@10.0.0"}))
        (tmp_path / "package-lock.json").write_text("{}")

        pm = await make_project(env={"BUILDINFO_USE_YARN": "true"}).detect_package_manager()

        assert pm.name == "yarn"

    @pytest.mark.asyncio
    async def test_env_only_counts_when_true(self, make_project, tmp_path):
        (tmp_path / "package-lock.json").write_text("{}")

        pm = await make_project(env={"BUILDINFO_USE_PNPM": "1"}).detect_package_manager()

        assert pm.name == "npm"

    @pytest.mark.asyncio
    async def test_process_environment_is_ignored(self, make_project, monkeypatch):
        monkeypatch.setenv("BUILDINFO_USE_PNPM", "true")
        assert await make_project().detect_package_manager() is None


class TestDescriptors:
    def test_run_commands(self):
        assert AVAILABLE_PACKAGE_MANAGERS["npm"].run_command == "npm run"
        assert AVAILABLE_PACKAGE_MANAGERS["yarn"].run_command == "yarn"
        assert AVAILABLE_PACKAGE_MANAGERS["pnpm"].run_command == "pnpm run"

    def test_priorities_are_distinct(self):
        priorities = [pm.priority for pm in AVAILABLE_PACKAGE_MANAGERS.values()]
        assert len(priorities) == len(set(priorities))

    def test_to_dict(self):
        data = AVAILABLE_PACKAGE_MANAGERS["bun"].to_dict()
        assert data["name"] == "bun"
        assert data["lock_files"] == ["bun.lockb", "bun.lock"]
        assert data["force_environment"] is None
