"""filetrack watch command - stream change and deletion events."""

import asyncio
from pathlib import Path

import click
from rich.markup import escape

from filetrack.cli.utils import load_tracker
from filetrack.core.console import pluralize, status
from filetrack.watch import TreeWatcher


def _print_changed(path: str) -> None:
    status(escape(path), style="changed")


def _print_deleted(path: str) -> None:
    status(escape(path), style="deleted")


@click.command()
@click.argument("path", default=".", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--pattern", default=None, help="Only report paths matching this regex")
@click.option("--poll", is_flag=True, default=None, help="Force polling instead of native events")
def watch_command(path: Path, pattern: str | None, poll: bool | None) -> None:
    """Watch a project root and print every change and deletion.

    PATH is the project root (default: current directory). Stop with Ctrl-C.
    """
    tracker, config = load_tracker(path)
    tracker.start()
    count = pluralize(len(tracker.known_paths), "file")
    status(f"Watching {count} under {tracker.root}", style="success")

    # Registered after the baseline so existing files are not echoed
    tracker.on_changed(pattern, _print_changed)
    tracker.on_deleted(pattern, _print_deleted)

    watcher = TreeWatcher(
        tracker,
        debounce_ms=config.watch.debounce_ms,
        step_ms=config.watch.step_ms,
        force_polling=poll or config.watch.force_polling,
    )
    try:
        asyncio.run(watcher.run())
    except KeyboardInterrupt:
        status("Stopped", style="info")
