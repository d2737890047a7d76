"""Loader for fadm.xml project descriptors.

Expected document::

    <Project xmlns="urn:project-schema">
      <Dependencies>
        <Dependency>
          <Name>Some.Library</Name>
          <Version>1.2.3.4</Version>
          <Culture>en-US</Culture>          <!-- optional -->
          <Architecture>MSIL</Architecture> <!-- optional -->
        </Dependency>
      </Dependencies>
    </Project>
"""

import asyncio
import logging
import xml.etree.ElementTree as ET
from pathlib import Path

from fadm.errors import DescriptorError
from fadm.model import (
    Architecture,
    Dependency,
    Project,
    is_valid_version,
    parse_culture,
)

DESCRIPTOR_FILE_NAME = "fadm.xml"
NAMESPACE = "urn:project-schema"

_PROJECT = f"{{{NAMESPACE}}}Project"
_DEPENDENCIES = f"{{{NAMESPACE}}}Dependencies"
_DEPENDENCY = f"{{{NAMESPACE}}}Dependency"
_NAME = f"{{{NAMESPACE}}}Name"
_VERSION = f"{{{NAMESPACE}}}Version"
_CULTURE = f"{{{NAMESPACE}}}Culture"
_ARCHITECTURE = f"{{{NAMESPACE}}}Architecture"

_REQUIRED = (_NAME, _VERSION)
_ALLOWED = {_NAME, _VERSION, _CULTURE, _ARCHITECTURE}

_logging = logging.getLogger(__name__)


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _parse_dependency(element: ET.Element, index: int) -> Dependency:
    entity = f"Dependency #{index + 1}"
    seen: dict[str, str] = {}
    for child in element:
        if child.tag not in _ALLOWED:
            raise DescriptorError(f"{entity}: unexpected element '{_local(child.tag)}'")
        if child.tag in seen:
            raise DescriptorError(f"{entity}: element '{_local(child.tag)}' appears twice")
        seen[child.tag] = (child.text or "").strip()

    for tag in _REQUIRED:
        if not seen.get(tag):
            raise DescriptorError(f"{entity}: field '{_local(tag)}' is required")

    version = seen[_VERSION]
    if not is_valid_version(version):
        raise DescriptorError(f"{entity}: field 'Version' must be a version number, got '{version}'")

    return Dependency(
        name=seen[_NAME],
        version=version,
        culture=parse_culture(seen.get(_CULTURE)),
        architecture=Architecture.parse(seen.get(_ARCHITECTURE)),
    )


def parse_descriptor(content: str) -> Project:
    """Parse descriptor text into a Project.

    Raises:
        DescriptorError: If the text is not XML or violates the schema
    """
    try:
        root = ET.fromstring(content)
    except ET.ParseError as e:
        raise DescriptorError(f"Descriptor is not valid XML: {e}") from e

    if root.tag != _PROJECT:
        raise DescriptorError(
            f"Descriptor root must be 'Project' in namespace '{NAMESPACE}', got '{root.tag}'"
        )

    dependencies: list[Dependency] = []
    for section in root:
        if section.tag != _DEPENDENCIES:
            raise DescriptorError(f"Unexpected element '{_local(section.tag)}' under 'Project'")
        for element in section:
            if element.tag != _DEPENDENCY:
                raise DescriptorError(
                    f"Unexpected element '{_local(element.tag)}' under 'Dependencies'"
                )
            dependencies.append(_parse_dependency(element, len(dependencies)))

    return Project(dependencies=dependencies)


class DescriptorLoader:
    """Loads fadm.xml files into Project models."""

    async def load(self, path: Path) -> Project:
        if path is None or not str(path).strip():
            raise ValueError("path must not be empty")
        path = Path(path)
        if not path.is_file():
            raise ValueError(f"Descriptor '{path}' not found")

        try:
            content = await asyncio.to_thread(path.read_text, encoding="utf-8")
        except UnicodeDecodeError as e:
            raise DescriptorError(f"Descriptor '{path}' is not valid UTF-8") from e

        project = parse_descriptor(content)
        _logging.debug(f"Loaded {len(project.dependencies)} dependencies from {path}")
        return project


def resolve_descriptor_path(path: Path) -> Path:
    """Locate fadm.xml for a path.

    A path without extension is a directory holding the descriptor; any other
    path is a file whose directory holds it.
    """
    directory = path if not path.suffix else path.parent
    return directory / DESCRIPTOR_FILE_NAME


__all__ = [
    "DESCRIPTOR_FILE_NAME",
    "NAMESPACE",
    "DescriptorLoader",
    "parse_descriptor",
    "resolve_descriptor_path",
]
