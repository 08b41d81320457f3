"""filetrack CLI."""

import click

from filetrack import __version__
from filetrack.cli.check import check_command
from filetrack.cli.ls import ls_command
from filetrack.cli.watch import watch_command
from filetrack.core.logging import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="filetrack")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """filetrack - track the files under a project root and report changes."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "WARNING")


cli.add_command(ls_command, name="ls")
cli.add_command(check_command, name="check")
cli.add_command(watch_command, name="watch")


if __name__ == "__main__":
    cli()
