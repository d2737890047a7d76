"""Execution results reported by every fadm operation.

A Result carries a status, a message and children. Children come in two
flavours:

- resolved children, already known when attached, reported in insertion order;
- pending children, still running when attached, reported in completion order.

The combined view (``Result.children()``) yields resolved children first and
then drains the pending ones as they finish. A child is yielded at most once
across all iterations, so a second pass only sees children attached since.
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Iterable
from enum import Enum

_logging = logging.getLogger(__name__)


class Status(Enum):
    SUCCESS = "Success"
    WARNING = "Warning"
    ERROR = "Error"

    def __str__(self) -> str:
        return self.value


def _build_message(template: str, params: tuple) -> str:
    if template is None or not isinstance(template, str) or not template.strip():
        raise ValueError("message template must be a non-empty string")
    if not params:
        return template
    return template.format(*params)


class Result:
    """Outcome of one step, with append-only children."""

    def __init__(self, status: Status, template: str, *params):
        self._status = status
        self._message = _build_message(template, params)
        self._resolved: list["Result"] = []
        self._yielded = 0
        self._pending: list[asyncio.Future] = []

    @classmethod
    def success(cls, template: str, *params) -> "Result":
        return cls(Status.SUCCESS, template, *params)

    @classmethod
    def warning(cls, template: str, *params) -> "Result":
        return cls(Status.WARNING, template, *params)

    @classmethod
    def error(cls, template: str, *params) -> "Result":
        return cls(Status.ERROR, template, *params)

    @classmethod
    def from_exception(cls, exc: BaseException) -> "Result":
        """Build an Error result describing an exception."""
        if exc is None:
            raise ValueError("exception must not be None")
        description = str(exc) or type(exc).__name__
        return cls(Status.ERROR, description)

    @property
    def status(self) -> Status:
        return self._status

    @property
    def message(self) -> str:
        return self._message

    @property
    def is_leaf(self) -> bool:
        return not self._resolved and not self._pending

    def with_results(self, results: Iterable["Result"]) -> "Result":
        """Append already resolved children and return self for chaining."""
        if results is None:
            raise ValueError("results must not be None")
        self._resolved.extend(results)
        return self

    def with_pending(self, awaitables: Iterable[Awaitable["Result"]]) -> "Result":
        """Schedule still-running children and return self for chaining.

        Coroutines are wrapped into tasks on the running loop, so they start
        immediately and run concurrently with each other.
        """
        if awaitables is None:
            raise ValueError("awaitables must not be None")
        self._pending.extend(asyncio.ensure_future(a) for a in awaitables)
        return self

    async def as_awaitable(self) -> "Result":
        return self

    async def children(self) -> AsyncIterator["Result"]:
        """Yield resolved children, then pending children as they complete."""
        while self._yielded < len(self._resolved):
            child = self._resolved[self._yielded]
            self._yielded += 1
            yield child

        outstanding = self._pending
        while outstanding:
            await asyncio.wait(outstanding, return_when=asyncio.FIRST_COMPLETED)
            # Several handles may finish in the same wake-up: keep attachment
            # order among them.
            finished = [f for f in outstanding if f.done()]
            for future in finished:
                outstanding.remove(future)
                yield _unwrap(future)

    async def collect(self) -> list["Result"]:
        """Drain the combined view into a list."""
        return [child async for child in self.children()]

    def __repr__(self) -> str:
        return f"Result({self._status.value}, {self._message!r})"


def _unwrap(future: asyncio.Future) -> Result:
    if future.cancelled():
        return Result.error("Operation cancelled")
    exc = future.exception()
    if exc is not None:
        _logging.error(f"Pending child failed: {type(exc).__name__}: {exc}")
        return Result.from_exception(exc)
    return future.result()


__all__ = [
    "Status",
    "Result",
]
