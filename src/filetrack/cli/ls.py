"""filetrack ls command - list tracked files."""

import json
from pathlib import Path

import click

from filetrack.cli.utils import load_tracker
from filetrack.core.console import pluralize, status


@click.command()
@click.argument("path", default=".", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def ls_command(path: Path, as_json: bool) -> None:
    """List the files tracked under a project root.

    PATH is the project root (default: current directory).
    """
    tracker, _config = load_tracker(path)
    tracker.start()
    files = sorted(tracker.known_paths)

    if as_json:
        click.echo(json.dumps({"root": str(tracker.root), "files": files}))
        return

    for file in files:
        click.echo(file)
    status(f"Tracking {pluralize(len(files), 'file')} under {tracker.root}", style="success")
