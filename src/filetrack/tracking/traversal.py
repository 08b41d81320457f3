"""Filesystem enumeration used by the reconciler.

The reconciler only depends on the ``Traversal`` protocol: given a
root-relative path and an ignore predicate, return the non-ignored files
under it as root-relative POSIX strings. ``FileSystemTraversal`` is the
default implementation, an ``os.walk`` that prunes ignored directories.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path
from typing import Protocol

from filetrack.tracking.paths import ROOT, to_posix

IgnorePredicate = Callable[[str], bool]


class Traversal(Protocol):
    """Enumerates files under a root-relative path."""

    def list_files(self, path: str, is_ignored: IgnorePredicate) -> list[str]: ...


def _raise(error: OSError) -> None:
    raise error


class FileSystemTraversal:
    """Walks the real filesystem beneath a project root.

    - Directory and file names are visited in sorted order, so results are
      deterministic.
    - A directory whose relative path is ignored is not descended into.
    - ``path`` naming a single file yields just that file (unless ignored).
    - Directory symlinks are not followed; file symlinks are listed.
    - ``OSError`` raised while walking propagates to the caller.
    """

    def __init__(self, root: Path) -> None:
        self._root = root

    @property
    def root(self) -> Path:
        return self._root

    def list_files(self, path: str, is_ignored: IgnorePredicate) -> list[str]:
        start = self._root / path
        if path != ROOT and is_ignored(path):
            return []
        if not start.is_dir():
            return [path] if start.is_file() else []

        files: list[str] = []
        for dirpath, dirnames, filenames in os.walk(start, onerror=_raise):
            rel_dir = to_posix(Path(dirpath).relative_to(self._root).as_posix())
            prefix = "" if rel_dir == ROOT else f"{rel_dir}/"

            # Prune in-place so os.walk skips ignored subtrees
            dirnames[:] = sorted(d for d in dirnames if not is_ignored(prefix + d))

            for filename in sorted(filenames):
                rel = prefix + filename
                if is_ignored(rel):
                    continue
                if (Path(dirpath) / filename).is_file():
                    files.append(rel)
        return files
