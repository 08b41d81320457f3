"""Watch driver: turns filesystem notifications into tracker calls.

Design:
- watchfiles ``awatch`` watches the tracker root recursively
- A watch filter drops ignored paths before they reach Python-side batching
- Each debounced batch is applied to the tracker in one synchronous step,
  so the tracker never sees concurrent calls
- Each path is handled by its state on disk when the batch is applied, so
  add-then-delete or delete-then-recreate within one batch resolves correctly
- A created directory is scanned for new files; a removed directory reports
  every known file beneath it as deleted

Handler failures propagate out of ``apply_changes``. The ``run`` loop logs
them and carries on with the next batch.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

import structlog
from watchfiles import Change, awatch

from filetrack.core.errors import TrackerError
from filetrack.tracking.paths import ROOT, is_within
from filetrack.tracking.tracker import FileTracker

logger = structlog.get_logger()

DEFAULT_DEBOUNCE_MS = 300
DEFAULT_STEP_MS = 50


@dataclass
class WatchBatch:
    """Summary of one applied batch of notifications."""

    changed: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    reconciled: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.changed or self.deleted or self.reconciled)


class TreeWatcher:
    """Feeds watchfiles notifications for a tracker's root into the tracker.

    Usage::

        tracker.start()
        watcher = TreeWatcher(tracker)
        task = asyncio.create_task(watcher.run())
        ...
        watcher.stop()
        await task
    """

    def __init__(
        self,
        tracker: FileTracker,
        *,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
        step_ms: int = DEFAULT_STEP_MS,
        force_polling: bool | None = None,
    ) -> None:
        self._tracker = tracker
        self._debounce_ms = debounce_ms
        self._step_ms = step_ms
        self._force_polling = force_polling
        self._stop_event = asyncio.Event()
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    def stop(self) -> None:
        """Signal ``run`` to return after the current batch."""
        self._stop_event.set()

    def _accepts(self, _change: Change, path: str) -> bool:
        """watchfiles filter: drop paths the tracker ignores."""
        return not self._tracker.is_ignored(path)

    async def run(self) -> None:
        """Watch until ``stop()`` is called."""
        self._running = True
        self._stop_event.clear()
        logger.info(
            "watch_started",
            root=str(self._tracker.root),
            debounce_ms=self._debounce_ms,
            force_polling=self._force_polling,
        )
        try:
            async for changes in awatch(
                self._tracker.root,
                watch_filter=self._accepts,
                debounce=self._debounce_ms,
                step=self._step_ms,
                stop_event=self._stop_event,
                force_polling=self._force_polling,
                ignore_permission_denied=True,
            ):
                try:
                    self.apply_changes(changes)
                except Exception as e:
                    logger.error(
                        "watch_batch_failed",
                        error=str(e),
                        error_type=type(e).__name__,
                        count=len(changes),
                        exc_info=True,
                    )
        finally:
            self._running = False
            logger.info("watch_stopped", root=str(self._tracker.root))

    def apply_changes(self, changes: set[tuple[Change, str]]) -> WatchBatch:
        """Apply one batch of ``(Change, absolute_path)`` notifications.

        Each distinct non-ignored path is handled once, in sorted order, by
        what is on disk now:
        - directory: ``find_new_files`` on it
        - file: ``notify_changed``
        - gone and known: ``notify_deleted``
        - gone and unknown (a directory went away): ``notify_deleted`` for
          every known file beneath it
        """
        batch = WatchBatch()
        root = self._tracker.root

        # Files already picked up by scanning a new directory in this batch
        scanned: set[str] = set()

        for rel in self._relevant_paths(changes):
            if rel in scanned:
                continue
            target = root / rel
            if target.is_dir():
                batch.reconciled.append(rel)
                result = self._tracker.find_new_files(rel)
                batch.changed.extend(result.changed)
                scanned.update(result.changed)
            elif target.is_file():
                self._tracker.notify_changed(rel)
                batch.changed.append(rel)
            elif self._tracker.exists(rel):
                self._tracker.notify_deleted(rel)
                batch.deleted.append(rel)
            else:
                gone = [
                    p
                    for p in self._tracker.known_paths
                    if is_within(p, rel) and not self._tracker.is_ignored(p)
                ]
                for known in sorted(gone):
                    self._tracker.notify_deleted(known)
                    batch.deleted.append(known)

        if not batch.is_empty:
            logger.info(
                "watch_batch_applied",
                changed=len(batch.changed),
                deleted=len(batch.deleted),
                reconciled=len(batch.reconciled),
            )
        return batch

    def _relevant_paths(self, changes: set[tuple[Change, str]]) -> list[str]:
        relevant: set[str] = set()
        for _change, raw_path in changes:
            try:
                rel = self._tracker.normalize(raw_path)
            except TrackerError:
                continue
            if rel != ROOT and not self._tracker.is_ignored(rel):
                relevant.add(rel)
        return sorted(relevant)

