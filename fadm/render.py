"""Text rendering of result trees."""

from collections.abc import Callable

import click

from fadm.result import Result

INDENT = "\t"


def format_line(result: Result, depth: int) -> str:
    return f"{INDENT * depth}[{result.status}] {result.message}"


async def render(
    result: Result, sink: Callable[[str], object] | None = None, depth: int = 0
) -> None:
    """Write a depth-first, tab-indented trace of a result tree.

    Children are walked through the combined view, so concurrent children are
    printed as soon as they complete.

    Args:
        result: Root of the tree to render
        sink: Callable receiving one line at a time (defaults to click.echo)
        depth: Indentation level of ``result``

    Raises:
        ValueError: If result is None or depth is negative
    """
    if result is None:
        raise ValueError("result must not be None")
    if depth < 0:
        raise ValueError(f"depth must not be negative, got {depth}")

    write = sink if sink is not None else click.echo
    write(format_line(result, depth))
    async for child in result.children():
        await render(child, write, depth + 1)


async def format_result(result: Result) -> str:
    """Render a result tree into a string, one line per node."""
    lines: list[str] = []
    await render(result, lines.append)
    return "".join(f"{line}\n" for line in lines)


__all__ = [
    "format_line",
    "render",
    "format_result",
]
