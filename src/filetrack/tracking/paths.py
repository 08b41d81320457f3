"""Path normalization at the tracker's public boundary.

Internally every tracked path is a ``str``: root-relative, POSIX separators,
no ``./`` prefix, no trailing slash, ``"."`` for the project root itself.
Equality and hashing are plain string equality on that form.
"""

from __future__ import annotations

import os
import posixpath
from pathlib import Path

from filetrack.core.errors import TrackerError

ROOT = "."

PathLike = str | os.PathLike[str]


def to_posix(path: PathLike) -> str:
    """Normalize a relative path to the canonical tracked form."""
    raw = os.fspath(path).replace("\\", "/")
    if not raw:
        return ROOT
    return posixpath.normpath(raw)


def normalize_path(path: PathLike, root: Path) -> str:
    """Convert public path input to the canonical root-relative form.

    Relative paths are taken as relative to ``root``. Absolute paths must lie
    under ``root``.

    Raises:
        TrackerError: If the path (absolute, or relative with ``..``) escapes ``root``.
    """
    candidate = Path(os.fspath(path))
    if candidate.is_absolute():
        try:
            candidate = candidate.relative_to(root)
        except ValueError:
            # The caller may hand us a resolved form of a symlinked root
            try:
                candidate = candidate.resolve().relative_to(root.resolve())
            except ValueError:
                raise TrackerError.outside_root(str(path), str(root)) from None
    rel = to_posix(candidate.as_posix())
    if rel == ".." or rel.startswith("../"):
        raise TrackerError.outside_root(str(path), str(root))
    return rel


def is_within(path: str, scope: str) -> bool:
    """Return whether normalized ``path`` equals ``scope`` or lies beneath it."""
    if scope == ROOT:
        return True
    return path == scope or path.startswith(scope + "/")

