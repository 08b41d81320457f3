"""The set of files known to exist as of the last reconciliation."""

from __future__ import annotations

from collections.abc import Iterator

from filetrack.tracking.paths import is_within


class PathSet:
    """Unordered set of normalized, root-relative file paths.

    Only the reconciler mutates it (through ``add``/``discard``); everything
    else reads a ``snapshot()``.
    """

    def __init__(self) -> None:
        self._paths: set[str] = set()

    def add(self, path: str) -> None:
        self._paths.add(path)

    def discard(self, path: str) -> None:
        self._paths.discard(path)

    def __contains__(self, path: object) -> bool:
        return path in self._paths

    def __iter__(self) -> Iterator[str]:
        return iter(self._paths)

    def __len__(self) -> int:
        return len(self._paths)

    def under(self, scope: str) -> set[str]:
        """Return the known paths equal to ``scope`` or nested beneath it.

        The result is a fresh set the caller may consume.
        """
        return {p for p in self._paths if is_within(p, scope)}

    def snapshot(self) -> frozenset[str]:
        return frozenset(self._paths)
