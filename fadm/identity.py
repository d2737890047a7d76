"""Reads the name and version embedded in a compiled binary.

Managed assemblies carry a Win32 version resource whose string table holds
the assembly identity (``InternalName``/``OriginalFilename`` and
``Assembly Version``). pefile exposes that resource without loading the
binary.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

import pefile

from fadm.errors import IdentityError

_logging = logging.getLogger(__name__)

NAME_KEYS = ("InternalName", "OriginalFilename")
VERSION_KEYS = ("Assembly Version", "FileVersion")


@dataclass(frozen=True)
class ArtifactIdentity:
    name: str
    version: str


IdentityReader = Callable[[Path], ArtifactIdentity]


def _clean_version(value: str) -> str:
    # FileVersion strings may carry a suffix such as "1.2.3.4 (built by: x)"
    return value.strip().split(" ", 1)[0]


def identity_from_version_info(
    strings: dict[str, str], fixed_version: str | None, path: Path
) -> ArtifactIdentity:
    """Pick name and version out of a parsed version resource.

    Args:
        strings: StringFileInfo entries
        fixed_version: Dotted version from VS_FIXEDFILEINFO, if any
        path: The binary, used as name fallback

    Raises:
        IdentityError: If no version can be determined
    """
    name = ""
    for key in NAME_KEYS:
        value = strings.get(key, "").strip()
        if value:
            name = Path(value).stem if Path(value).suffix.lower() in (".dll", ".exe") else value
            break
    if not name:
        name = path.stem

    version = ""
    first_key = VERSION_KEYS[0]
    if strings.get(first_key, "").strip():
        version = _clean_version(strings[first_key])
    elif fixed_version:
        version = fixed_version
    elif strings.get(VERSION_KEYS[1], "").strip():
        version = _clean_version(strings[VERSION_KEYS[1]])

    if not version:
        raise IdentityError(f"No version information found in '{path}'")
    return ArtifactIdentity(name=name, version=version)


def _read_string_table(pe: pefile.PE) -> dict[str, str]:
    strings: dict[str, str] = {}
    for file_info in getattr(pe, "FileInfo", None) or []:
        # Older pefile releases expose a flat list instead of a list of lists
        entries = file_info if isinstance(file_info, list) else [file_info]
        for entry in entries:
            if getattr(entry, "Key", b"") != b"StringFileInfo":
                continue
            for table in entry.StringTable:
                for key, value in table.entries.items():
                    strings[key.decode("utf-8", "replace")] = value.decode("utf-8", "replace")
    return strings


def _read_fixed_version(pe: pefile.PE) -> str | None:
    fixed = getattr(pe, "VS_FIXEDFILEINFO", None)
    if not fixed:
        return None
    info = fixed[0] if isinstance(fixed, list) else fixed
    ms, ls = info.FileVersionMS, info.FileVersionLS
    return f"{ms >> 16}.{ms & 0xFFFF}.{ls >> 16}.{ls & 0xFFFF}"


def read_identity(path: Path) -> ArtifactIdentity:
    """Read name and version from a PE binary's version resource.

    Raises:
        IdentityError: If the file is not a PE image or has no version
    """
    try:
        pe = pefile.PE(str(path))
    except pefile.PEFormatError as e:
        raise IdentityError(f"'{path}' is not a valid binary: {e}") from e

    try:
        strings = _read_string_table(pe)
        fixed_version = _read_fixed_version(pe)
    finally:
        pe.close()

    identity = identity_from_version_info(strings, fixed_version, path)
    _logging.debug(f"Read identity {identity.name} {identity.version} from {path}")
    return identity


__all__ = [
    "ArtifactIdentity",
    "IdentityReader",
    "identity_from_version_info",
    "read_identity",
]
