"""Pytest fixtures and utilities for fadm tests."""

import asyncio
import tempfile
from pathlib import Path
from typing import Generator

import pytest

from fadm.identity import ArtifactIdentity
from fadm.model import Dependency
from fadm.repository import Repository

MSBUILD_NS = "http://schemas.microsoft.com/developer/msbuild/2003"

PROJECT_WITHOUT_HOOKS = f"""<?xml version="1.0" encoding="utf-8"?>
<Project ToolsVersion="12.0" DefaultTargets="Build" xmlns="{MSBUILD_NS}">
  <PropertyGroup>
    <OutputType>Library</OutputType>
    <AssemblyName>Sample</AssemblyName>
  </PropertyGroup>
  <!-- Sources -->
  <ItemGroup>
    <Compile Include="Class1.cs" />
  </ItemGroup>
</Project>
"""

PROJECT_WITH_OTHER_EXEC = f"""<?xml version="1.0" encoding="utf-8"?>
<Project ToolsVersion="12.0" DefaultTargets="Build" xmlns="{MSBUILD_NS}">
  <Import Project="$(MSBuildToolsPath)\\Microsoft.CSharp.targets" />
  <Target Name="AfterBuild">
    <Exec Command="echo built" />
  </Target>
</Project>
"""

PROJECT_WITH_HOOKS = f"""<?xml version="1.0" encoding="utf-8"?>
<Project ToolsVersion="12.0" DefaultTargets="Build" xmlns="{MSBUILD_NS}">
  <Import Project="$(MSBuildToolsPath)\\Microsoft.CSharp.targets" />
  <Target Name="BeforeBuild">
    <Exec Command="fadm copy $(ProjectDir)" />
  </Target>
  <Target Name="AfterBuild">
    <Exec Command="fadm install $(TargetPath)" />
  </Target>
</Project>
"""


def run(coro):
    """Run a coroutine to completion on a fresh event loop."""
    return asyncio.run(coro)


def write_descriptor(directory: Path, dependencies: list[tuple[str, str]]) -> Path:
    """Write a fadm.xml declaring (name, version) pairs."""
    entries = "".join(
        f"    <Dependency><Name>{name}</Name><Version>{version}</Version></Dependency>\n"
        for name, version in dependencies
    )
    path = directory / "fadm.xml"
    path.write_text(
        '<?xml version="1.0" encoding="utf-8"?>\n'
        '<Project xmlns="urn:project-schema">\n'
        f"  <Dependencies>\n{entries}  </Dependencies>\n"
        "</Project>\n",
        encoding="utf-8",
    )
    return path


def seed_repository(repository: Repository, name: str, version: str, content: bytes = b"MZ") -> Path:
    """Place an installed artifact in the repository."""
    path = repository.dependency_file(name, version, "dll")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return path


class FakePackageSource:
    """Package source serving canned payloads, optionally after a delay."""

    def __init__(self, packages: dict[tuple[str, str], bytes], delay: float = 0.0):
        self.packages = packages
        self.delay = delay
        self.requested: list[Dependency] = []

    async def fetch(self, dependency: Dependency) -> bytes | None:
        self.requested.append(dependency)
        if self.delay:
            await asyncio.sleep(self.delay)
        return self.packages.get((dependency.name, dependency.version))


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def repository(temp_dir: Path) -> Repository:
    return Repository(temp_dir / "repository")


@pytest.fixture
def identity_reader():
    """Identity reader naming artifacts after their file stem, version 1.0.0.0."""

    def _read(path: Path) -> ArtifactIdentity:
        return ArtifactIdentity(name=path.stem, version="1.0.0.0")

    return _read


@pytest.fixture
def project_dir(temp_dir: Path) -> Path:
    directory = temp_dir / "project"
    directory.mkdir()
    return directory
