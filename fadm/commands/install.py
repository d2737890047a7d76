"""Install command implementation."""

import asyncio

import click

from fadm.commands.utils import build_engine, exit_for, require_path, run_operation


@click.command()
@click.argument("path")
@click.pass_context
def install(ctx, path: str):
    """Install a .dll or .exe (and its .pdb) to the local repository."""
    path = require_path(path)
    engine = build_engine(ctx)
    exit_for(asyncio.run(run_operation(engine.install, path)))
