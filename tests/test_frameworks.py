"""Tests for framework detection against fixture directories."""

import json
from pathlib import Path

import pytest

from buildinfo.frameworks import FRAMEWORKS, Accuracy, Category, detect_frameworks_in_path
from buildinfo.frameworks.static_site_generators import Hugo, Next
from buildinfo.frameworks.web import CreateReactApp, Express


def _write_pkg(directory: Path, data: dict) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    (directory / "package.json").write_text(json.dumps(data))


class TestAccuracy:
    @pytest.mark.asyncio
    async def test_dependency_and_config_is_npm(self, make_project, tmp_path):
        _write_pkg(tmp_path, {"dependencies": {"next": "14.0.0"}})
        (tmp_path / "next.config.mjs").write_text("export default {}")

        detected = await Next(make_project()).detect()

        assert detected.accuracy is Accuracy.NPM
        assert detected.config_path == str(tmp_path / "next.config.mjs")

    @pytest.mark.asyncio
    async def test_dependency_without_config_is_hint(self, make_project, tmp_path):
        _write_pkg(tmp_path, {"devDependencies": {"next": "^13"}})

        detected = await Next(make_project()).detect()

        assert detected.accuracy is Accuracy.NPM_HINT
        assert detected.version == "^13"
        assert detected.config_path is None

    @pytest.mark.asyncio
    async def test_config_without_dependency_is_config_only(self, make_project, tmp_path):
        _write_pkg(tmp_path, {"dependencies": {}})
        (tmp_path / "next.config.js").write_text("")

        detected = await Next(make_project()).detect()

        assert detected.accuracy is Accuracy.CONFIG_ONLY
        assert detected.dependency is None

    @pytest.mark.asyncio
    async def test_config_only_framework(self, make_project, tmp_path):
        (tmp_path / "hugo.toml").write_text('title = "site"')

        detected = await Hugo(make_project()).detect()

        assert detected.accuracy is Accuracy.CONFIG_ONLY
        assert detected.category is Category.SSG

    @pytest.mark.asyncio
    async def test_dependency_of_framework_without_config_files_is_npm(
        self, make_project, tmp_path
    ):
        _write_pkg(tmp_path, {"dependencies": {"react-scripts": "5.0.1"}})

        detected = await CreateReactApp(make_project()).detect()

        assert detected.accuracy is Accuracy.NPM

    @pytest.mark.asyncio
    async def test_no_evidence_is_no_match(self, make_project, tmp_path):
        _write_pkg(tmp_path, {"dependencies": {"lodash": "4.0.0"}})
        assert await Next(make_project()).detect() is None

    @pytest.mark.asyncio
    async def test_excluded_dependency_prevents_match(self, make_project, tmp_path):
        _write_pkg(tmp_path, {"dependencies": {"express": "4.18.0", "@nestjs/core": "10.0.0"}})
        assert await Express(make_project()).detect() is None


class TestDetectFrameworksInPath:
    @pytest.mark.asyncio
    async def test_generator_and_unrelated_bundler_both_kept(self, make_project, tmp_path):
        _write_pkg(tmp_path, {"dependencies": {"gatsby": "5.0.0", "webpack": "5.0.0"}})
        (tmp_path / "gatsby-config.js").write_text("module.exports = {}")

        detected = await detect_frameworks_in_path(make_project())

        assert [(f.id, f.accuracy) for f in detected] == [
            ("gatsby", Accuracy.NPM),
            ("webpack", Accuracy.NPM_HINT),
        ]

    @pytest.mark.asyncio
    async def test_two_generators_keep_the_accurate_one(self, make_project, tmp_path):
        _write_pkg(tmp_path, {"dependencies": {"astro": "4.0.0", "@11ty/eleventy": "2.0.0"}})
        (tmp_path / "astro.config.mjs").write_text("export default {}")

        detected = await detect_frameworks_in_path(make_project())

        assert [f.id for f in detected] == ["astro"]

    @pytest.mark.asyncio
    async def test_sveltekit_hides_vite(self, make_project, tmp_path):
        _write_pkg(tmp_path, {"devDependencies": {"@sveltejs/kit": "2.0.0", "vite": "5.0.0"}})
        (tmp_path / "svelte.config.js").write_text("export default {}")
        (tmp_path / "vite.config.ts").write_text("export default {}")

        detected = await detect_frameworks_in_path(make_project())

        assert [f.id for f in detected] == ["sveltekit"]

    @pytest.mark.asyncio
    async def test_config_files_are_only_looked_up_in_the_path(self, make_project, tmp_path):
        (tmp_path / "hugo.toml").write_text("")
        site = tmp_path / "site"
        site.mkdir()

        detected = await detect_frameworks_in_path(make_project(), str(site), package_path="site")

        assert detected == []

    @pytest.mark.asyncio
    async def test_dependencies_read_from_nearest_package_json(self, make_project, tmp_path):
        _write_pkg(tmp_path, {"dependencies": {"gatsby": "5.0.0"}})
        _write_pkg(tmp_path / "docs", {"dependencies": {"@docusaurus/core": "3.0.0"}})
        (tmp_path / "docs" / "docusaurus.config.js").write_text("")

        detected = await detect_frameworks_in_path(
            make_project(), str(tmp_path / "docs"), package_path="docs"
        )

        assert [f.id for f in detected] == ["docusaurus"]
        assert detected[0].package_path == "docs"

    @pytest.mark.asyncio
    async def test_order_follows_registry(self, make_project, tmp_path):
        _write_pkg(tmp_path, {"dependencies": {"nuxt": "3.0.0", "next": "14.0.0"}})

        detected = await detect_frameworks_in_path(make_project())

        assert [f.id for f in detected] == ["next", "nuxt"]
        assert [f.order for f in detected] == [
            FRAMEWORKS.index(Next),
            FRAMEWORKS.index(Next) + 1,
        ]


class TestRegistry:
    def test_ids_are_unique(self):
        ids = [framework.id for framework in FRAMEWORKS]
        assert len(ids) == len(set(ids))

    def test_every_framework_has_evidence(self):
        for framework in FRAMEWORKS:
            assert framework.npm_dependencies or framework.config_files, framework.id
