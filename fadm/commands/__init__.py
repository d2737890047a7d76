"""CLI command definitions for fadm."""

import click

from fadm import __version__
from fadm.commands.add import add
from fadm.commands.copy import copy
from fadm.commands.install import install


@click.group()
@click.version_option(__version__, prog_name="fadm")
@click.option("--debug", is_flag=True, help="Enable debug output for troubleshooting")
@click.option(
    "--repository",
    "-r",
    type=click.Path(file_okay=False),
    default=None,
    help="Local repository directory (overrides config and FADM_REPOSITORY)",
)
@click.pass_context
def cli(ctx, debug, repository):
    """Manage compiled binary dependencies through a local repository."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    ctx.obj["repository"] = repository


cli.add_command(add)
cli.add_command(copy)
cli.add_command(install)

__all__ = ["cli"]


if __name__ == "__main__":
    cli()
