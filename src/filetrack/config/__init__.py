"""Config module exports."""

from filetrack.config.loader import load_config
from filetrack.config.models import (
    FileTrackConfig,
    LoggingConfig,
    LogOutputConfig,
    TrackerConfig,
    WatchConfig,
)

__all__ = [
    "load_config",
    "FileTrackConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "TrackerConfig",
    "WatchConfig",
]
