"""Set reconciliation between known paths and a fresh filesystem scan.

For a reconciliation rooted at ``path``:

1. ``scope`` is the slice of the known-path set under ``path``, minus any
   path the ignore list now matches.
2. Every file the traversal reports is removed from ``scope`` and recorded as
   seen (``changed`` handlers fire).
3. Whatever is left in ``scope`` was known but not found, and is recorded as
   removed (``deleted`` handlers fire).

Deletions are therefore confined to the subtree being reconciled. In
``only_new`` mode files already in ``scope`` are left untouched and no
deletions are reported.

Handler and traversal errors are not caught: they abort the pass and
propagate, leaving the unprocessed part of the subtree for the next pass.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import structlog

from filetrack.core.logging import clear_pass_id, get_pass_id, set_pass_id
from filetrack.tracking.callbacks import CallbackRegistry
from filetrack.tracking.ignore import IgnoreFilter
from filetrack.tracking.pathset import PathSet
from filetrack.tracking.traversal import Traversal

logger = structlog.get_logger()


@dataclass
class ReconcileResult:
    """What one reconciliation pass reported, in dispatch order."""

    root: str
    only_new: bool = False
    skipped: bool = False
    changed: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.changed and not self.deleted


class Reconciler:
    """Owns the two mutation primitives and the reconciliation algorithm.

    ``record_seen`` and ``record_removed`` are the only code paths that
    modify the PathSet; both dispatch handlers after the mutation.
    """

    def __init__(
        self,
        root: Path,
        paths: PathSet,
        callbacks: CallbackRegistry,
        ignore: IgnoreFilter,
        traversal: Traversal,
    ) -> None:
        self._root = root
        self._paths = paths
        self._callbacks = callbacks
        self._ignore = ignore
        self._traversal = traversal

    def record_seen(self, path: str) -> None:
        logger.debug("file_changed", path=path)
        self._paths.add(path)
        self._callbacks.dispatch_changed(path)

    def record_removed(self, path: str) -> None:
        logger.debug("file_deleted", path=path)
        self._paths.discard(path)
        self._callbacks.dispatch_deleted(path)

    def reconcile(self, path: str, *, only_new: bool = False) -> ReconcileResult:
        """Reconcile the normalized root-relative ``path`` against the disk."""
        result = ReconcileResult(root=path, only_new=only_new)

        if not (self._root / path).exists():
            logger.debug("reconcile_skipped", root=path, reason="missing")
            result.skipped = True
            return result

        # Nested passes (a handler calling back into the tracker) keep the outer id
        owns_pass_id = get_pass_id() is None
        if owns_pass_id:
            set_pass_id()
        try:
            # Known paths that are now ignored are neither rescanned nor reported deleted
            scope = {p for p in self._paths.under(path) if not self._ignore.is_ignored(p)}

            for found in self._traversal.list_files(path, self._ignore.is_ignored):
                if self._ignore.is_ignored(found):
                    continue
                if only_new and found in scope:
                    continue
                scope.discard(found)
                self.record_seen(found)
                result.changed.append(found)

            if not only_new:
                for missing in sorted(scope):
                    self.record_removed(missing)
                    result.deleted.append(missing)

            logger.debug(
                "reconcile_finished",
                root=path,
                only_new=only_new,
                changed=len(result.changed),
                deleted=len(result.deleted),
            )
        finally:
            if owns_pass_id:
                clear_pass_id()
        return result

    def find_new_files(self, path: str) -> ReconcileResult:
        return self.reconcile(path, only_new=True)
