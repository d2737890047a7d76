"""Add command implementation."""

import asyncio

import click

from fadm.commands.utils import build_engine, exit_for, require_path, run_operation


@click.command()
@click.argument("path")
@click.pass_context
def add(ctx, path: str):
    """Add fadm build hooks to a project file or to every project of a solution."""
    path = require_path(path)
    engine = build_engine(ctx)
    exit_for(asyncio.run(run_operation(engine.add, path)))
