"""Copy task: restores the dependencies a project declares in fadm.xml."""

import asyncio
import logging
import shutil
from pathlib import Path

from fadm.descriptor import DescriptorLoader, resolve_descriptor_path
from fadm.model import Dependency
from fadm.remote import PackageSource
from fadm.repository import SYMBOL_EXTENSION, Repository, ensure_directory
from fadm.result import Result

from .base import Task

DEPENDENCY_FOLDER = "dependency"
LIBRARY_EXTENSION = "dll"

_logging = logging.getLogger(__name__)


def _store(path: Path, payload: bytes) -> None:
    ensure_directory(path.parent)
    path.write_bytes(payload)


class CopyTask(Task):
    """Restores every declared dependency concurrently.

    A dependency already present in the project's ``dependency/`` folder is
    left untouched. One missing from the repository is looked up on the
    package source, if any, and cached in the repository before being copied.
    """

    def __init__(
        self,
        path: str | Path,
        repository: Repository,
        source: PackageSource | None = None,
        loader: DescriptorLoader | None = None,
    ):
        super().__init__(path)
        if repository is None:
            raise ValueError("repository must not be None")
        self.repository = repository
        self.source = source
        self.loader = loader if loader is not None else DescriptorLoader()

    async def run(self) -> Result:
        descriptor = resolve_descriptor_path(self.target)
        if not descriptor.is_file():
            return Result.error("The file '{0}' doesn't exist", descriptor)

        project = await self.loader.load(descriptor)
        destination = descriptor.parent / DEPENDENCY_FOLDER

        return Result.success("Dependencies restored from '{0}'", descriptor).with_pending(
            self._restore(dependency, destination) for dependency in project.dependencies
        )

    async def _restore(self, dependency: Dependency, destination: Path) -> Result:
        name, version = dependency.name, dependency.version
        target = destination / dependency.file_name(LIBRARY_EXTENSION)
        if target.is_file():
            return Result.success("Nothing to do: dependency '{0}' already restored", target)

        steps: list[Result] = []
        library = self.repository.dependency_file(name, version, LIBRARY_EXTENSION)
        if not library.is_file():
            payload = await self.source.fetch(dependency) if self.source is not None else None
            if payload is None:
                return Result.error("Dependency '{0}' version '{1}' not found", name, version)
            await asyncio.to_thread(_store, library, payload)
            steps.append(Result.success("Downloaded '{0}' version '{1}'", name, version))

        _logging.debug(f"Copying {library} to {target}")
        await asyncio.to_thread(ensure_directory, destination)
        await asyncio.to_thread(shutil.copyfile, library, target)
        steps.append(Result.success("Restored dependency '{0}'", target))

        symbols = self.repository.symbol_file(name, version)
        if symbols.is_file():
            symbols_target = destination / dependency.file_name(SYMBOL_EXTENSION)
            await asyncio.to_thread(shutil.copyfile, symbols, symbols_target)
            steps.append(Result.success("Restored symbols '{0}'", symbols_target))

        return Result.success(
            "Dependency '{0}' version '{1}' restored", name, version
        ).with_results(steps)


__all__ = ["DEPENDENCY_FOLDER", "LIBRARY_EXTENSION", "CopyTask"]
