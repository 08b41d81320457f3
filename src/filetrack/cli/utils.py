"""CLI utilities."""

from pathlib import Path

import click

from filetrack.config.loader import load_config
from filetrack.config.models import FileTrackConfig
from filetrack.core.errors import ConfigError
from filetrack.tracking.tracker import FileTracker


def load_tracker(root: Path) -> tuple[FileTracker, FileTrackConfig]:
    """Load config for ``root`` and build a (not yet started) tracker.

    Raises:
        click.ClickException: If the configuration cannot be loaded.
    """
    root = root.resolve()
    try:
        config = load_config(root)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e
    return FileTracker.from_config(root, config), config
