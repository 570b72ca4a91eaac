"""Local filesystem gateway used by every detector.

Path helpers are synchronous string operations. Anything that touches the
disk is a coroutine so detectors can fan out over many files at once; the
blocking calls run in worker threads via asyncio.to_thread.
"""

import asyncio
import json
import os
from pathlib import Path
from typing import Any, Iterable, Optional, Union

Names = Union[str, Iterable[str]]


class FileSystemError(Exception):
    """Base class for filesystem gateway failures."""

    def __init__(self, path: str, message: str):
        super().__init__(f"{message}: {path}")
        self.path = path


class NotFoundError(FileSystemError):
    def __init__(self, path: str):
        super().__init__(path, "File not found")


class ParseError(FileSystemError):
    def __init__(self, path: str, reason: str):
        super().__init__(path, f"Could not parse JSON ({reason})")
        self.reason = reason


class FileSystem:
    """Async access to the files of a repository checkout.

    `cwd` is the directory relative paths are resolved against. The
    project sets it to its base directory on construction.
    """

    def __init__(self, cwd: Optional[str] = None):
        self.cwd = os.path.abspath(cwd or os.getcwd())

    # ------------------------------------------------------------------
    # Path helpers
    # ------------------------------------------------------------------

    def resolve(self, *paths: str) -> str:
        """Resolve path segments right to left into an absolute path."""
        resolved = self.cwd
        for segment in paths:
            if segment:
                resolved = os.path.join(resolved, segment)
        return os.path.normpath(resolved)

    def relative(self, from_path: str, to_path: str) -> str:
        rel = os.path.relpath(self.resolve(to_path), self.resolve(from_path))
        return "" if rel == "." else rel

    def is_absolute(self, path: str) -> bool:
        return os.path.isabs(path)

    def join(self, *paths: str) -> str:
        return os.path.normpath(os.path.join(*[p for p in paths if p] or ["."]))

    def dirname(self, path: str) -> str:
        return os.path.dirname(path)

    def basename(self, path: str) -> str:
        return os.path.basename(path)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def exists(self, path: str) -> bool:
        return await asyncio.to_thread(os.path.exists, self.resolve(path))

    async def read_file(self, path: str) -> str:
        full_path = self.resolve(path)
        try:
            return await asyncio.to_thread(Path(full_path).read_text, encoding="utf-8")
        except FileNotFoundError as exc:
            raise NotFoundError(full_path) from exc

    async def gracefully_read_file(self, path: str) -> Optional[str]:
        """Read a file, returning None when it does not exist."""
        try:
            return await self.read_file(path)
        except NotFoundError:
            return None

    async def read_json(self, path: str) -> Any:
        full_path = self.resolve(path)
        content = await self.read_file(full_path)
        try:
            return json.loads(content)
        except json.JSONDecodeError as exc:
            raise ParseError(full_path, str(exc)) from exc

    # ------------------------------------------------------------------
    # Searches
    # ------------------------------------------------------------------

    async def find_up(
        self,
        names: Names,
        cwd: Optional[str] = None,
        stop_at: Optional[str] = None,
    ) -> Optional[str]:
        """Return the nearest path named after any of `names`.

        The search starts in `cwd` and walks towards the filesystem root,
        stopping after `stop_at` has been inspected. Within one directory
        the order of `names` decides which match is returned.
        """
        candidates = [names] if isinstance(names, str) else list(names)
        for directory in self._ancestors(cwd, stop_at):
            for name in candidates:
                path = os.path.join(directory, name)
                if await asyncio.to_thread(os.path.exists, path):
                    return path
        return None

    async def find_up_multiple(
        self,
        name: str,
        cwd: Optional[str] = None,
        stop_at: Optional[str] = None,
    ) -> list[str]:
        """Return every ancestor match for `name`, nearest first."""
        matches: list[str] = []
        for directory in self._ancestors(cwd, stop_at):
            path = os.path.join(directory, name)
            if await asyncio.to_thread(os.path.exists, path):
                matches.append(path)
        return matches

    async def glob(self, patterns: Iterable[str], cwd: Optional[str] = None) -> list[str]:
        """Expand directory globs relative to `cwd`.

        Patterns starting with `!` remove earlier matches. Returned paths are
        relative to `cwd`, POSIX-style and sorted.
        """
        base = Path(self.resolve(cwd or self.cwd))
        return await asyncio.to_thread(_expand_globs, base, list(patterns))

    def _ancestors(self, cwd: Optional[str], stop_at: Optional[str]) -> list[str]:
        directory = self.resolve(cwd or self.cwd)
        stop = self.resolve(stop_at) if stop_at else None
        ancestors: list[str] = []
        while True:
            ancestors.append(directory)
            if directory == stop:
                break
            parent = os.path.dirname(directory)
            if parent == directory:
                break
            directory = parent
        return ancestors


def _expand_globs(base: Path, patterns: list[str]) -> list[str]:
    included: set[str] = set()
    excluded: set[str] = set()
    for pattern in patterns:
        negated = pattern.startswith("!")
        pattern = pattern[1:] if negated else pattern
        pattern = pattern.strip().removeprefix("./").rstrip("/")
        if not pattern:
            continue
        matches = {
            match.relative_to(base).as_posix()
            for match in base.glob(pattern)
            if match.is_dir() and "node_modules" not in match.relative_to(base).parts
        }
        (excluded if negated else included).update(matches)
    return sorted(included - excluded)
