"""Core module exports."""

from filetrack.core.console import pluralize, status
from filetrack.core.errors import (
    ConfigError,
    ErrorCode,
    FileTrackError,
    TrackerError,
)
from filetrack.core.logging import (
    clear_pass_id,
    configure_logging,
    get_logger,
    get_pass_id,
    set_pass_id,
)

__all__ = [
    # Errors
    "FileTrackError",
    "ConfigError",
    "ErrorCode",
    "TrackerError",
    # Logging
    "clear_pass_id",
    "configure_logging",
    "get_logger",
    "get_pass_id",
    "set_pass_id",
    # Console
    "pluralize",
    "status",
]
