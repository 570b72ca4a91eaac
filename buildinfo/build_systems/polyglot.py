"""Language-agnostic and JVM build tools.

Gradle and Maven can target a single module from the command line, but
only outside JavaScript workspaces; the rest are detected for reporting
purposes.
"""

from typing import Optional

from buildinfo.build_systems.base import BuildSystem


class Bazel(BuildSystem):
    id = "bazel"
    name = "Bazel"
    config_files = (".bazelrc", "WORKSPACE", "WORKSPACE.bazel", "MODULE.bazel")


class Buck(BuildSystem):
    id = "buck"
    name = "Buck"
    config_files = (".buckconfig", "BUCK")


class Pants(BuildSystem):
    id = "pants"
    name = "Pants"
    config_files = ("pants.toml",)


class Gradle(BuildSystem):
    id = "gradle"
    name = "Gradle"
    config_files = ("build.gradle", "build.gradle.kts", "settings.gradle", "settings.gradle.kts")

    def get_commands(
        self, package_path: str, package_name: Optional[str] = None
    ) -> Optional[dict[str, str]]:
        if not package_path:
            return {"build": "gradle build"}
        project_path = ":" + package_path.strip("/").replace("/", ":")
        return {"build": f"gradle {project_path}:build"}


class Maven(BuildSystem):
    id = "maven"
    name = "Maven"
    config_files = ("pom.xml",)

    def get_commands(
        self, package_path: str, package_name: Optional[str] = None
    ) -> Optional[dict[str, str]]:
        if not package_path:
            return {"build": "mvn package"}
        return {"build": f"mvn package -pl {package_path} -am"}


class Nix(BuildSystem):
    id = "nix"
    name = "Nix"
    config_files = ("flake.nix", "default.nix", "shell.nix")
