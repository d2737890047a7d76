"""Engine dispatching fadm operations to their tasks."""

from pathlib import Path

from fadm.identity import IdentityReader, read_identity
from fadm.paths import get_default_repository_path
from fadm.remote import PackageSource
from fadm.repository import Repository
from fadm.result import Result
from fadm.tasks import AddTask, CopyTask, InstallTask


def _require_path(path: str | Path | None) -> None:
    if path is None or not str(path).strip():
        raise ValueError("path must not be empty")


class Engine:
    """Stateless façade over the add, copy and install tasks.

    The returned Result may still have children in flight; drain it with
    ``Result.children()`` (or ``render``) on the same event loop.
    """

    def __init__(
        self,
        repository: Repository | None = None,
        source: PackageSource | None = None,
        identity_reader: IdentityReader = read_identity,
    ):
        self.repository = (
            repository if repository is not None else Repository(get_default_repository_path())
        )
        self.source = source
        self.identity_reader = identity_reader

    async def add(self, path: str | Path) -> Result:
        _require_path(path)
        return await AddTask(path).execute()

    async def copy(self, path: str | Path) -> Result:
        _require_path(path)
        return await CopyTask(path, self.repository, self.source).execute()

    async def install(self, path: str | Path) -> Result:
        _require_path(path)
        return await InstallTask(path, self.repository, self.identity_reader).execute()


__all__ = ["Engine"]
