"""File-change tracking: known paths, ignore rules, handlers, reconciliation."""

from filetrack.tracking.callbacks import (
    CallbackEntry,
    CallbackRegistry,
    EventKind,
    FunctionHandler,
    Handler,
)
from filetrack.tracking.ignore import IgnoreFilter
from filetrack.tracking.paths import normalize_path
from filetrack.tracking.pathset import PathSet
from filetrack.tracking.reconciler import Reconciler, ReconcileResult
from filetrack.tracking.tracker import FileTracker
from filetrack.tracking.traversal import FileSystemTraversal, Traversal

__all__ = [
    "CallbackEntry",
    "CallbackRegistry",
    "EventKind",
    "FileSystemTraversal",
    "FileTracker",
    "FunctionHandler",
    "Handler",
    "IgnoreFilter",
    "PathSet",
    "ReconcileResult",
    "Reconciler",
    "Traversal",
    "normalize_path",
]
