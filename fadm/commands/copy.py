"""Copy command implementation."""

import asyncio

import click

from fadm.commands.utils import build_engine, exit_for, require_path, run_operation


@click.command()
@click.argument("path")
@click.pass_context
def copy(ctx, path: str):
    """Restore the dependencies declared in PATH's fadm.xml.

    PATH is either the directory holding fadm.xml or a file beside it.
    """
    path = require_path(path)
    engine = build_engine(ctx)
    exit_for(asyncio.run(run_operation(engine.copy, path)))
