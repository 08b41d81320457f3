"""filetrack command-line interface."""

from filetrack.cli.main import cli

__all__ = ["cli"]
