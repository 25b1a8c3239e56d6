"""Component file discovery."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence

COMPONENT_SUFFIX = ".svelte"

_SKIPPED_DIRS = {"node_modules", "__pycache__", "build", "dist"}


@dataclass(frozen=True)
class ExcludePattern:
    """One gitignore-style line: ``dir/``, ``/rooted``, ``*.glob`` or ``!negated``.

    Patterns without a slash match the last path segment at any depth;
    patterns with one are matched against the whole project-relative path.
    """

    glob: str
    negated: bool = False
    dirs_only: bool = False
    rooted: bool = False

    @classmethod
    def parse(cls, line: str) -> Optional["ExcludePattern"]:
        text = line.strip()
        if not text or text.startswith("#"):
            return None
        negated = text.startswith("!")
        if negated:
            text = text[1:]
        dirs_only = text.endswith("/")
        rooted = "/" in text.rstrip("/")
        glob = text.strip("/")
        if not glob:
            return None
        return cls(glob=glob, negated=negated, dirs_only=dirs_only, rooted=rooted)

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if self.dirs_only and not is_dir:
            return False
        subject = rel_path if self.rooted else rel_path.rsplit("/", 1)[-1]
        return fnmatchcase(subject, self.glob)


def _read_ignore_file(path: Path) -> List[ExcludePattern]:
    if not path.is_file():
        return []
    lines = path.read_text(encoding="utf-8").splitlines()
    return [pattern for pattern in map(ExcludePattern.parse, lines) if pattern is not None]


def _excluded(rel_path: str, is_dir: bool, patterns: Sequence[ExcludePattern]) -> bool:
    # the last matching line decides, as in .gitignore
    excluded = False
    for pattern in patterns:
        if pattern.matches(rel_path, is_dir):
            excluded = not pattern.negated
    return excluded


class ComponentScanner:
    """Finds component files below a project root.

    Hidden directories, dependency/build directories, ``.gitignore`` entries
    and the configured ``exclude_paths`` are skipped.
    """

    def __init__(self, exclude_paths: Iterable[str] = ()) -> None:
        self.exclude_paths = list(exclude_paths)

    def find(self, root: str | Path) -> List[Path]:
        """Return component files under ``root`` sorted by relative path."""
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise FileNotFoundError(f"Project path not found: {root}")
        if root_path.is_file():
            return [root_path] if root_path.suffix == COMPONENT_SUFFIX else []

        patterns = _read_ignore_file(root_path / ".gitignore")
        patterns.extend(
            pattern
            for pattern in map(ExcludePattern.parse, self.exclude_paths)
            if pattern is not None
        )
        found = self._walk(root_path, patterns)
        return sorted(found, key=lambda path: path.relative_to(root_path).as_posix())

    @staticmethod
    def _walk(root: Path, patterns: Sequence[ExcludePattern]) -> Iterator[Path]:
        for dirpath, dirnames, filenames in os.walk(root):
            current = Path(dirpath)
            prefix = current.relative_to(root).as_posix()
            prefix = "" if prefix == "." else f"{prefix}/"

            dirnames[:] = [
                name
                for name in dirnames
                if not name.startswith(".")
                and name not in _SKIPPED_DIRS
                and not _excluded(prefix + name, True, patterns)
            ]
            for filename in filenames:
                if filename.endswith(COMPONENT_SUFFIX) and not _excluded(
                    prefix + filename, False, patterns
                ):
                    yield current / filename


__all__ = ["COMPONENT_SUFFIX", "ComponentScanner", "ExcludePattern"]
