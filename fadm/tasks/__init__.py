"""Tasks behind the fadm operations."""

from .add import AddTask
from .base import Task
from .copy import CopyTask
from .install import InstallTask

__all__ = [
    "Task",
    "AddTask",
    "CopyTask",
    "InstallTask",
]
