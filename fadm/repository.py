"""Layout of the local artifact repository.

Artifacts live at ``{root}/{name}/{version}/{name}-{version}.{ext}``; a debug
symbol file sits beside its artifact with the ``.pdb`` extension.
"""

import logging
from pathlib import Path

_logging = logging.getLogger(__name__)

SYMBOL_EXTENSION = "pdb"


def compute_file_name(name: str, version: str, extension: str) -> str:
    """Return the canonical artifact file name ``{name}-{version}.{extension}``.

    Raises:
        ValueError: If any part is empty
    """
    for label, value in (("name", name), ("version", version), ("extension", extension)):
        if not value or not str(value).strip():
            raise ValueError(f"{label} must be a non-empty string")
    return f"{name}-{version}.{extension.lstrip('.')}"


def ensure_directory(path: Path) -> Path:
    """Create ``path`` (and parents) when missing and return it."""
    if path is None or not str(path).strip():
        raise ValueError("path must not be empty")
    if not path.is_dir():
        _logging.debug(f"Creating directory {path}")
        path.mkdir(parents=True, exist_ok=True)
    return path


class Repository:
    """Computes artifact locations under a repository root."""

    def __init__(self, root: Path):
        if root is None or not str(root).strip():
            raise ValueError("repository root must not be empty")
        self.root = Path(root).expanduser().resolve()

    def dependency_directory(self, name: str, version: str) -> Path:
        return self.root / name / version

    def dependency_file(self, name: str, version: str, extension: str) -> Path:
        return self.dependency_directory(name, version) / compute_file_name(
            name, version, extension
        )

    def symbol_file(self, name: str, version: str) -> Path:
        return self.dependency_file(name, version, SYMBOL_EXTENSION)

    def ensure_root(self) -> Path:
        return ensure_directory(self.root)

    def ensure_dependency_directory(self, name: str, version: str) -> Path:
        return ensure_directory(self.dependency_directory(name, version))

    def __repr__(self) -> str:
        return f"Repository({str(self.root)!r})"


__all__ = [
    "SYMBOL_EXTENSION",
    "Repository",
    "compute_file_name",
    "ensure_directory",
]
