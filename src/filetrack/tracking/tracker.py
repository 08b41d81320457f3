"""FileTracker: the public API over known paths, ignore rules and handlers.

Usage::

    tracker = FileTracker(Path("/site"), TrackerConfig(build_dir="_site"))
    tracker.on_changed(r"\\.md$", rebuild_page)
    tracker.on_deleted(handler=forget_page)
    tracker.start()                 # baseline: reconcile(".")

    tracker.reconcile("source/posts")
    tracker.find_new_files("source")
    tracker.exists("/site/source/index.md")  # same as exists("source/index.md")

All calls are expected from a single control flow. Callers that receive
events from several sources must serialize them before calling in.
"""

from __future__ import annotations

import re
from pathlib import Path

import structlog

from filetrack.config.models import FileTrackConfig, TrackerConfig
from filetrack.core.errors import TrackerError
from filetrack.core.excludes import build_dir_pattern
from filetrack.tracking.callbacks import (
    CallbackEntry,
    CallbackRegistry,
    EventKind,
    HandlerLike,
)
from filetrack.tracking.ignore import IgnoreFilter, Pattern
from filetrack.tracking.paths import ROOT, PathLike, normalize_path
from filetrack.tracking.pathset import PathSet
from filetrack.tracking.reconciler import Reconciler, ReconcileResult
from filetrack.tracking.traversal import FileSystemTraversal, Traversal

logger = structlog.get_logger()


class FileTracker:
    """Tracks the files under a project root and routes change events.

    The tracker exclusively owns its known-path set, its ignore list and both
    handler sequences; callers only ever see snapshots of them.
    """

    def __init__(
        self,
        root: Path,
        config: TrackerConfig | None = None,
        *,
        traversal: Traversal | None = None,
    ) -> None:
        self._root = Path(root).resolve()
        self._config = config or TrackerConfig()
        self._ignore = IgnoreFilter(self._config.all_ignore_patterns)
        self._paths = PathSet()
        self._callbacks = CallbackRegistry()
        self._reconciler = Reconciler(
            self._root,
            self._paths,
            self._callbacks,
            self._ignore,
            traversal or FileSystemTraversal(self._root),
        )
        self._started = False

    @classmethod
    def from_config(
        cls,
        root: Path,
        config: FileTrackConfig,
        *,
        traversal: Traversal | None = None,
    ) -> FileTracker:
        return cls(root, config.tracker, traversal=traversal)

    @property
    def root(self) -> Path:
        return self._root

    @property
    def config(self) -> TrackerConfig:
        return self._config

    @property
    def started(self) -> bool:
        return self._started

    @property
    def known_paths(self) -> frozenset[str]:
        return self._paths.snapshot()

    @property
    def ignore_patterns(self) -> tuple[re.Pattern[str], ...]:
        return self._ignore.patterns

    @property
    def changed_entries(self) -> tuple[CallbackEntry, ...]:
        return self._callbacks.entries(EventKind.CHANGED)

    @property
    def deleted_entries(self) -> tuple[CallbackEntry, ...]:
        return self._callbacks.entries(EventKind.DELETED)

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    def add_ignore_pattern(self, pattern: Pattern) -> re.Pattern[str]:
        """Append an ignore rule. Only allowed before ``start()``.

        Raises:
            ConfigError: After start, or if the pattern does not compile.
        """
        return self._ignore.add_pattern(pattern)

    def start(self) -> ReconcileResult | None:
        """Finalize configuration and establish the baseline.

        Appends the build-output rule, freezes the ignore list and runs one
        full reconciliation of the project root. Calling it again is a no-op.
        """
        if self._started:
            return None
        self._ignore.add_pattern(build_dir_pattern(self._config.build_dir))
        self._ignore.freeze()
        self._started = True
        result = self._reconciler.reconcile(ROOT)
        logger.info(
            "tracker_started",
            root=str(self._root),
            files=len(self._paths),
            ignore_patterns=len(self._ignore),
        )
        return result

    # -------------------------------------------------------------------------
    # Handler registration
    # -------------------------------------------------------------------------

    def on_changed(
        self, pattern: Pattern | None = None, handler: HandlerLike | None = None
    ) -> tuple[CallbackEntry, ...]:
        """Register a handler for changed files; return all ``changed`` entries.

        Args:
            pattern: Regex searched against the root-relative path. None matches all.
            handler: Callable taking the path, or an object with ``handle(path)``.
                     When omitted nothing is registered.
        """
        return self._callbacks.on_changed(pattern, handler)

    def on_deleted(
        self, pattern: Pattern | None = None, handler: HandlerLike | None = None
    ) -> tuple[CallbackEntry, ...]:
        """Register a handler for deleted files; return all ``deleted`` entries."""
        return self._callbacks.on_deleted(pattern, handler)

    # -------------------------------------------------------------------------
    # Events and reconciliation
    # -------------------------------------------------------------------------

    def notify_changed(self, path: PathLike) -> None:
        """Record ``path`` as present and run matching ``changed`` handlers."""
        self._reconciler.record_seen(self.normalize(path))

    def notify_deleted(self, path: PathLike) -> None:
        """Record ``path`` as gone and run matching ``deleted`` handlers."""
        self._reconciler.record_removed(self.normalize(path))

    def reconcile(self, path: PathLike = ROOT) -> ReconcileResult:
        """Rescan ``path`` (file or directory) and report the difference."""
        return self._reconciler.reconcile(self.normalize(path))

    def find_new_files(self, path: PathLike = ROOT) -> ReconcileResult:
        """Rescan ``path`` reporting only files not seen before."""
        return self._reconciler.find_new_files(self.normalize(path))

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def exists(self, path: PathLike) -> bool:
        """Return whether ``path`` is a known file.

        Root-relative and absolute forms (under the root) give the same answer;
        paths outside the root are never known.
        """
        try:
            return self.normalize(path) in self._paths
        except TrackerError:
            return False

    def is_ignored(self, path: PathLike) -> bool:
        try:
            normalized = self.normalize(path)
        except TrackerError:
            normalized = str(path)
        return self._ignore.is_ignored(normalized)

    def normalize(self, path: PathLike) -> str:
        """Convert public path input to the root-relative form used internally.

        Raises:
            TrackerError: If the path is outside the project root.
        """
        return normalize_path(path, self._root)
