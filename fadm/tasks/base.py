"""Shared contract for fadm tasks."""

import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path

from fadm.result import Result

_logging = logging.getLogger(__name__)


class Task(ABC):
    """One-shot unit of work producing a single top-level Result.

    The target path is made absolute once, at construction.
    """

    def __init__(self, path: str | Path):
        if path is None or not str(path).strip():
            raise ValueError("path must not be empty")
        self.target = Path(os.path.abspath(Path(path).expanduser()))

    async def execute(self) -> Result:
        """Run the task; faults become an Error result instead of escaping."""
        try:
            return await self.run()
        except Exception as e:
            _logging.error(f"{type(self).__name__} failed on {self.target}: {type(e).__name__}: {e}")
            return Result.from_exception(e)

    @abstractmethod
    async def run(self) -> Result:
        ...


__all__ = ["Task"]
