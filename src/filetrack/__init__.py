"""filetrack - known-file tracking with change and deletion handlers."""

from filetrack.tracking import FileTracker, ReconcileResult

__version__ = "0.1.0"

__all__ = ["FileTracker", "ReconcileResult", "__version__"]
