"""Add task: injects fadm build hooks into solution and project files."""

import asyncio
import logging
import re
import xml.etree.ElementTree as ET
from pathlib import Path

from fadm.result import Result

from .base import Task

MSBUILD_NAMESPACE = "http://schemas.microsoft.com/developer/msbuild/2003"
CSHARP_TARGETS = r"$(MSBuildToolsPath)\Microsoft.CSharp.targets"
BEFORE_BUILD = "BeforeBuild"
AFTER_BUILD = "AfterBuild"
COPY_COMMAND = "fadm copy $(ProjectDir)"
INSTALL_COMMAND = "fadm install $(TargetPath)"
DEFAULT_INDENT = "  "

SOLUTION_EXTENSION = ".sln"
SOLUTION_PROJECT_PATTERN = re.compile(
    r'^Project\("\{(.+)\}"\)\s*=\s*"(.+)"\s*,\s*"(.+)"\s*,\s*"\{(.+)\}"$'
)

_logging = logging.getLogger(__name__)

ET.register_namespace("", MSBUILD_NAMESPACE)


def parse_solution(path: Path) -> list[Path]:
    """Return the project files a solution references, in order.

    Solution folders use the same line format as projects, so entries that do
    not exist on disk are skipped.
    """
    projects: list[Path] = []
    with open(path, "r", encoding="utf-8-sig") as f:
        for line in f:
            match = SOLUTION_PROJECT_PATTERN.match(line.strip())
            if not match:
                continue
            project = path.parent / match.group(3).replace("\\", "/")
            if not project.is_file():
                _logging.debug(f"Skipping solution entry without file: {project}")
                continue
            if project not in projects:
                projects.append(project)
    return projects


def _namespace(tag: str) -> str:
    return tag[1:].split("}", 1)[0] if tag.startswith("{") else ""


def _indent_unit(root: ET.Element) -> str:
    """Guess the file's indentation from the whitespace before the first child."""
    text = root.text or ""
    if text.strip() or "\n" not in text:
        return DEFAULT_INDENT
    return text.rsplit("\n", 1)[1] or DEFAULT_INDENT


class _ProjectDocument:
    """A parsed project file and the hook edits applied to it."""

    def __init__(self, path: Path):
        builder = ET.TreeBuilder(insert_comments=True, insert_pis=True)
        self.tree = ET.parse(path, parser=ET.XMLParser(target=builder))
        self.root = self.tree.getroot()
        self.namespace = _namespace(self.root.tag)
        if self.root.tag != self.qualify("Project"):
            raise ValueError(f"'{path}' is not a project file")
        self.indent = _indent_unit(self.root)

    def qualify(self, name: str) -> str:
        return f"{{{self.namespace}}}{name}" if self.namespace else name

    def append(self, parent: ET.Element, level: int, name: str, attrib: dict) -> ET.Element:
        """Append a child to ``parent`` (nested ``level`` deep) leaving the
        whitespace around its existing children as it was."""
        child_indent = "\n" + self.indent * (level + 1)
        closing = "\n" + self.indent * level
        if len(parent):
            last = parent[-1]
            if last.tail and not last.tail.strip():
                closing = last.tail
            last.tail = child_indent
        else:
            parent.text = child_indent
        child = ET.SubElement(parent, self.qualify(name), attrib)
        child.tail = closing
        return child

    def ensure_import(self) -> list[Result]:
        for element in self.root.iter(self.qualify("Import")):
            if element.get("Project") == CSHARP_TARGETS:
                return []
        self.append(self.root, 0, "Import", {"Project": CSHARP_TARGETS})
        return [Result.success("MSBuild import injected")]

    def ensure_exec(self, step: str, command: str) -> list[Result]:
        """Make sure target ``step`` runs ``command``, reusing an existing target."""
        targets = [
            t for t in self.root.findall(self.qualify("Target")) if t.get("Name") == step
        ]
        for target in targets:
            for element in target.iter(self.qualify("Exec")):
                if element.get("Command") == command:
                    return []

        results: list[Result] = []
        if targets:
            target = targets[0]
        else:
            target = self.append(self.root, 0, "Target", {"Name": step})
            results.append(Result.success("{0} injected", step))

        self.append(target, 1, "Exec", {"Command": command})
        results.append(Result.success("{0} injected", command))
        return results

    def save(self, path: Path) -> None:
        self.tree.write(path, encoding="utf-8", xml_declaration=True)


def _add_hooks(path: Path) -> list[Result]:
    document = _ProjectDocument(path)
    changes = document.ensure_import()
    changes.extend(document.ensure_exec(BEFORE_BUILD, COPY_COMMAND))
    changes.extend(document.ensure_exec(AFTER_BUILD, INSTALL_COMMAND))
    if changes:
        document.save(path)
    return changes


class AddTask(Task):
    """Adds fadm hooks to a project file, or to every project of a solution."""

    async def run(self) -> Result:
        if not self.target.is_file():
            return Result.error("The file '{0}' doesn't exist", self.target)

        if self.target.suffix.lower() != SOLUTION_EXTENSION:
            return await self._process_project(self.target)

        projects = await asyncio.to_thread(parse_solution, self.target)
        _logging.debug(f"Solution {self.target} references {len(projects)} project(s)")
        return Result.success("Solution processed: '{0}'", self.target).with_pending(
            AddTask(project).execute() for project in projects
        )

    async def _process_project(self, path: Path) -> Result:
        changes = await asyncio.to_thread(_add_hooks, path)
        if not changes:
            return Result.warning("Nothing to do: '{0}'", path)
        return Result.success("File processed: '{0}'", path).with_results(changes)


__all__ = [
    "AddTask",
    "COPY_COMMAND",
    "INSTALL_COMMAND",
    "CSHARP_TARGETS",
    "MSBUILD_NAMESPACE",
    "parse_solution",
]
