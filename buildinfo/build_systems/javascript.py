"""Node.js toolchain and JavaScript monorepo tools."""

from typing import Optional

from buildinfo.build_systems.base import BuildSystem


class Node(BuildSystem):
    id = "node"
    name = "Node.js"
    config_files = ("package.json",)


class MonorepoTool(BuildSystem):
    """A JavaScript monorepo tool that can run tasks for one package.

    `command_templates` are formatted with the package name, falling back
    to the last segment of the package path.
    """

    command_templates: dict[str, str] = {}

    def get_commands(
        self, package_path: str, package_name: Optional[str] = None
    ) -> Optional[dict[str, str]]:
        target = package_name or package_path.rstrip("/").rsplit("/", 1)[-1]
        if not target:
            return None
        return {
            command: template.format(target=target)
            for command, template in self.command_templates.items()
        }


class Nx(MonorepoTool):
    id = "nx"
    name = "Nx"
    config_files = ("nx.json",)
    npm_package = "nx"
    command_templates = {"build": "nx run {target}:build", "dev": "nx run {target}:serve"}


class Lerna(MonorepoTool):
    id = "lerna"
    name = "Lerna"
    config_files = ("lerna.json",)
    npm_package = "lerna"
    command_templates = {
        "build": "lerna run build --scope {target} --include-dependencies",
        "dev": "lerna run dev --scope {target}",
    }


class Turbo(MonorepoTool):
    id = "turbo"
    name = "Turborepo"
    config_files = ("turbo.json",)
    npm_package = "turbo"
    command_templates = {
        "build": "turbo run build --filter {target}",
        "dev": "turbo run dev --filter {target}",
    }


class Rush(MonorepoTool):
    id = "rush"
    name = "Rush"
    config_files = ("rush.json",)
    npm_package = "@microsoft/rush"
    command_templates = {"build": "rush build --to {target}"}


class Lage(MonorepoTool):
    id = "lage"
    name = "Lage"
    config_files = ("lage.config.js", "lage.config.cjs")
    npm_package = "lage"
    command_templates = {"build": "lage build --to {target}"}


class Moon(MonorepoTool):
    id = "moon"
    name = "moon"
    config_files = (".moon",)
    npm_package = "@moonrepo/cli"
    command_templates = {"build": "moon run {target}:build", "dev": "moon run {target}:dev"}
