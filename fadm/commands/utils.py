"""Shared utility functions for commands."""

import sys
from collections.abc import Awaitable, Callable
from pathlib import Path

import click

from fadm import setup_logging
from fadm.config import ConfigError, load_config
from fadm.engine import Engine
from fadm.errors import format_error, format_suggestion
from fadm.remote import NuGetPackageSource
from fadm.render import render
from fadm.repository import Repository
from fadm.result import Result, Status


def build_engine(ctx: click.Context) -> Engine:
    """Create an engine from the user config and global CLI options.

    Exits with status 1 when the configuration cannot be loaded.
    """
    debug = ctx.obj.get("debug", False)
    setup_logging(debug)
    try:
        config = load_config(repository=ctx.obj.get("repository"))
    except ConfigError as e:
        click.echo(
            format_suggestion(str(e), "fix the file or point FADM_CONFIG elsewhere"),
            err=True,
        )
        sys.exit(1)

    source = None
    if config.package_source:
        source = NuGetPackageSource(config.package_source, timeout=config.download_timeout)
    return Engine(repository=Repository(config.repository), source=source)


async def run_operation(
    operation: Callable[[str], Awaitable[Result]], path: str
) -> Status:
    """Run an engine operation and print its result tree as it completes."""
    result = await operation(path)
    await render(result)
    return result.status


def exit_for(status: Status) -> None:
    if status == Status.ERROR:
        sys.exit(1)


def require_path(path: str) -> str:
    if not path or not path.strip():
        click.echo(format_error("path must not be empty"), err=True)
        sys.exit(1)
    return str(Path(path))
