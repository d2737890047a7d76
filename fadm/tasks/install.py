"""Install task: publishes a build output to the local repository."""

import asyncio
import logging
import shutil
from pathlib import Path

from fadm.identity import ArtifactIdentity, IdentityReader, read_identity
from fadm.repository import SYMBOL_EXTENSION, Repository
from fadm.result import Result

from .base import Task

ALLOWED_EXTENSIONS = (".dll", ".exe")

_logging = logging.getLogger(__name__)


class InstallTask(Task):
    """Copies an artifact and its debug symbols under ``{name}/{version}/``."""

    def __init__(
        self,
        path: str | Path,
        repository: Repository,
        identity_reader: IdentityReader = read_identity,
    ):
        super().__init__(path)
        if repository is None:
            raise ValueError("repository must not be None")
        self.repository = repository
        self.identity_reader = identity_reader

    async def run(self) -> Result:
        if not self.target.is_file():
            return Result.error("The file '{0}' doesn't exist", self.target)

        extension = self.target.suffix.lower()
        if extension not in ALLOWED_EXTENSIONS:
            return Result.error(
                "The file '{0}' must have following extensions [{1}]",
                self.target,
                ",".join(ALLOWED_EXTENSIONS),
            )

        identity = await asyncio.to_thread(self.identity_reader, self.target)

        await asyncio.to_thread(self.repository.ensure_root)
        await asyncio.to_thread(
            self.repository.ensure_dependency_directory, identity.name, identity.version
        )
        destination = self.repository.dependency_file(
            identity.name, identity.version, extension.lstrip(".")
        )

        # Symbols are optional: copy them alongside the artifact and report the
        # outcome as the only child.
        symbols = asyncio.ensure_future(self._install_symbols(identity))

        _logging.debug(f"Installing {self.target} to {destination}")
        try:
            await asyncio.to_thread(shutil.copyfile, self.target, destination)
        except OSError as e:
            return Result.error(
                "Could not install '{0}' to '{1}': {2}", self.target, destination, e
            ).with_pending([symbols])

        return Result.success("File installed to '{0}'", destination).with_pending([symbols])

    async def _install_symbols(self, identity: ArtifactIdentity) -> Result:
        source = self.target.with_suffix(f".{SYMBOL_EXTENSION}")
        if not source.is_file():
            return Result.warning("PDB not found at '{0}'", source)

        destination = self.repository.symbol_file(identity.name, identity.version)
        try:
            await asyncio.to_thread(shutil.copyfile, source, destination)
        except OSError as e:
            return Result.warning("PDB could not be installed to '{0}': {1}", destination, e)
        return Result.success("PDB installed to '{0}'", destination)


__all__ = ["ALLOWED_EXTENSIONS", "InstallTask"]
