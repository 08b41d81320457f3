"""filetrack check command - report whether a path is tracked or ignored."""

import json
import sys
from pathlib import Path

import click

from filetrack.cli.utils import load_tracker


@click.command()
@click.argument("file", type=str)
@click.option(
    "--root",
    default=".",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Project root (default: current directory)",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def check_command(file: str, root: Path, as_json: bool) -> None:
    """Check whether FILE is tracked and whether it is ignored.

    FILE may be relative to the project root or absolute. Exits 0 when the
    file is tracked, 1 otherwise.
    """
    tracker, _config = load_tracker(root)
    tracker.start()

    tracked = tracker.exists(file)
    ignored = tracker.is_ignored(file)

    if as_json:
        click.echo(json.dumps({"path": file, "tracked": tracked, "ignored": ignored}))
    else:
        click.echo(f"{file}: {'tracked' if tracked else 'not tracked'}")
        if ignored:
            click.echo(f"{file}: ignored")

    sys.exit(0 if tracked else 1)
