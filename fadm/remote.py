"""Remote package sources used when a dependency is missing locally."""

import asyncio
import logging
import tempfile
import zipfile
from pathlib import Path, PurePosixPath
from typing import Protocol

from fadm.execution import DOWNLOAD_TIMEOUT, run_command_async
from fadm.model import Dependency

_logging = logging.getLogger(__name__)


class PackageSource(Protocol):
    async def fetch(self, dependency: Dependency) -> bytes | None:
        """Return the library bytes for an exact name/version, or None."""
        ...


def find_library(archive: zipfile.ZipFile, file_name: str) -> str | None:
    """Return the archive member named ``file_name``, preferring lib/ entries."""
    wanted = file_name.lower()
    matches = [
        member
        for member in archive.namelist()
        if PurePosixPath(member.replace("\\", "/")).name.lower() == wanted
    ]
    if not matches:
        return None
    matches.sort(key=lambda m: (not m.replace("\\", "/").lower().startswith("lib/"), m))
    return matches[0]


def normalize_version(version: str) -> str:
    """Return the version the way NuGet stores it in flat container paths.

    Leading zeros are stripped, a zero fourth part is dropped and short
    versions are padded to three parts: ``1.0.0.0`` becomes ``1.0.0`` and
    ``2.0`` becomes ``2.0.0``.
    """
    parts = version.strip().lower().split(".")
    if not all(part.isdigit() for part in parts):
        return version.strip().lower()
    parts = [str(int(part)) for part in parts]
    if len(parts) == 4 and parts[3] == "0":
        parts = parts[:3]
    while len(parts) < 3:
        parts.append("0")
    return ".".join(parts)


def extract_library(package: Path, file_name: str) -> bytes | None:
    try:
        with zipfile.ZipFile(package) as archive:
            member = find_library(archive, file_name)
            if member is None:
                return None
            return archive.read(member)
    except zipfile.BadZipFile:
        _logging.error(f"Downloaded package is not a valid archive: {package}")
        return None


class NuGetPackageSource:
    """Fetches packages from a NuGet v3 flat container endpoint.

    Downloads go through curl, like every other network call fadm makes.
    """

    def __init__(self, base_url: str, timeout: int = DOWNLOAD_TIMEOUT):
        if not base_url or not base_url.strip():
            raise ValueError("base_url must be a non-empty string")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def package_url(self, dependency: Dependency) -> str:
        package_id = dependency.name.lower()
        version = normalize_version(dependency.version)
        return f"{self.base_url}/{package_id}/{version}/{package_id}.{version}.nupkg"

    async def fetch(self, dependency: Dependency) -> bytes | None:
        url = self.package_url(dependency)
        with tempfile.TemporaryDirectory(prefix="fadm-") as tmpdir:
            package = Path(tmpdir) / "package.nupkg"
            output, returncode = await run_command_async(
                ["curl", "-fsSL", "-o", str(package), url], timeout=self.timeout
            )
            if returncode != 0 or not package.is_file():
                _logging.debug(f"Package not available at {url}: {output}")
                return None
            return await asyncio.to_thread(
                extract_library, package, f"{dependency.name}.dll"
            )


__all__ = [
    "PackageSource",
    "NuGetPackageSource",
    "find_library",
    "extract_library",
    "normalize_version",
]
