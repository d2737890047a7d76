"""Data models for declared dependencies."""

import re
from dataclasses import dataclass, field
from enum import Enum

INVARIANT_CULTURE = ""

VERSION_PATTERN = re.compile(r"^\d+(\.\d+){1,3}$")
CULTURE_PATTERN = re.compile(r"^[A-Za-z]{2,3}(-[A-Za-z0-9]{2,8})*$")


class Architecture(Enum):
    NONE = "None"
    MSIL = "MSIL"
    X86 = "X86"
    IA64 = "IA64"
    AMD64 = "Amd64"
    ARM = "Arm"

    @classmethod
    def parse(cls, value: str | None) -> "Architecture":
        """Parse an architecture name, falling back to NONE when unknown."""
        if value and value.strip():
            wanted = value.strip().lower()
            for member in cls:
                if member.value.lower() == wanted:
                    return member
        return cls.NONE


def parse_culture(value: str | None) -> str:
    """Return a culture tag, or the invariant culture when unrecognized."""
    if value and CULTURE_PATTERN.match(value.strip()):
        return value.strip()
    return INVARIANT_CULTURE


def is_valid_version(version: str) -> bool:
    return bool(version) and VERSION_PATTERN.match(version) is not None


@dataclass(frozen=True)
class Dependency:
    name: str
    version: str
    culture: str = INVARIANT_CULTURE
    architecture: Architecture = Architecture.NONE

    def __post_init__(self):
        if not self.name or not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("name must be a non-empty string")
        if not self.version or not isinstance(self.version, str) or not self.version.strip():
            raise ValueError("version must be a non-empty string")

    def file_name(self, extension: str) -> str:
        return f"{self.name}-{self.version}.{extension}"


@dataclass
class Project:
    dependencies: list[Dependency] = field(default_factory=list)


__all__ = [
    "INVARIANT_CULTURE",
    "Architecture",
    "Dependency",
    "Project",
    "parse_culture",
    "is_valid_version",
]
