"""Tool dispatcher: maps a tool id and argument bag to a normalized result."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Sequence

from .basic_tools import CalculatorTool, ClockTool
from .file_tools import LocalFileTools, ToolResult

LOGGER = logging.getLogger("dispatch.tools")

MANIFEST_EXCERPT_CHARS = 200


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    parameters: Mapping[str, str]
    required: Sequence[str] = ()


TOOL_SPECS: Dict[str, ToolSpec] = {
    spec.name: spec
    for spec in (
        ToolSpec("read_file", "Read the contents of a file", {"path": "file to read"}, ("path",)),
        ToolSpec(
            "write_file",
            "Write content to a file",
            {"path": "file to write", "content": "text to store"},
            ("path", "content"),
        ),
        ToolSpec("list_directory", "List a directory", {"path": "directory (default: .)"}),
        ToolSpec(
            "search_files",
            "Find directory entries whose name contains a term",
            {"term": "text to look for", "path": "directory (default: .)"},
            ("term",),
        ),
        ToolSpec(
            "calculate",
            "Evaluate an arithmetic expression",
            {"expression": "e.g. 2 + 3 * 4"},
            ("expression",),
        ),
        ToolSpec(
            "get_current_time",
            "Return the current time",
            {"format": "iso, timestamp or local (default)"},
        ),
        ToolSpec(
            "complex_task",
            "Run a composite multi-step analysis",
            {"task": "project_analysis"},
            ("task",),
        ),
    )
}


class ToolDispatcher:
    """Invokes tools by id; every failure comes back as a failed ``ToolResult``."""

    def __init__(
        self,
        file_tools: LocalFileTools | None = None,
        root: Path | str | None = None,
        manifest_files: Sequence[str] = ("pyproject.toml", "package.json"),
        clock: ClockTool | None = None,
    ) -> None:
        self.file_tools = file_tools or LocalFileTools(root)
        self.calculator = CalculatorTool()
        self.clock = clock or ClockTool()
        self.manifest_files = tuple(manifest_files)
        self._handlers: Dict[str, Callable[[Mapping[str, Any]], ToolResult]] = {
            "read_file": lambda args: self.file_tools.read_file(str(args["path"])),
            "write_file": lambda args: self.file_tools.write_file(
                str(args["path"]), str(args.get("content", ""))
            ),
            "list_directory": lambda args: self.file_tools.list_directory(str(args.get("path", "."))),
            "search_files": lambda args: self.file_tools.search_files(
                str(args["term"]), str(args.get("path", "."))
            ),
            "calculate": lambda args: self.calculator.execute(str(args.get("expression", ""))),
            "get_current_time": lambda args: self.clock.execute(str(args.get("format", "local"))),
            "complex_task": lambda args: self._complex_task(str(args.get("task", ""))),
        }

    def list_tools(self) -> List[ToolSpec]:
        return [TOOL_SPECS[name] for name in self._handlers]

    def invoke(self, tool_id: str, args: Mapping[str, Any] | None = None) -> ToolResult:
        handler = self._handlers.get(tool_id)
        if handler is None:
            LOGGER.warning("Unknown tool requested: %s", tool_id)
            return ToolResult.fail(f"Unknown tool: {tool_id}")

        if args is None:
            args = {}
        if not isinstance(args, Mapping):
            LOGGER.warning("Tool %s got non-mapping arguments: %r", tool_id, args)
            return ToolResult.fail("Arguments must be an object")
        args = dict(args)
        LOGGER.info("Invoking %s with %s", tool_id, args)
        try:
            result = handler(args)
        except KeyError as e:
            LOGGER.warning("Tool %s missing argument %s", tool_id, e)
            return ToolResult.fail(f"Missing argument for {tool_id}: {e.args[0]}")
        except Exception as e:
            LOGGER.exception("Tool %s failed", tool_id)
            return ToolResult.fail(f"Tool {tool_id} failed: {e}")

        if not result.success:
            LOGGER.info("Tool %s reported failure: %s", tool_id, result.error)
        return result

    # ------------------------------------------------------------------
    # Composite tasks
    # ------------------------------------------------------------------
    def _complex_task(self, task: str) -> ToolResult:
        if task == "project_analysis":
            return self._project_analysis()
        return ToolResult.fail(f"Unknown composite task: {task}")

    def _project_analysis(self) -> ToolResult:
        sections = ["Project analysis:"]

        root_listing = self.file_tools.list_directory(".")
        sections.append(f"Root directory:\n{root_listing.text}")

        for manifest in self.manifest_files:
            info = self.file_tools.read_file(manifest)
            if info.success:
                excerpt = info.content[:MANIFEST_EXCERPT_CHARS]
                sections.append(f"Project info ({manifest}):\n{excerpt}...")
                break

        source = self.file_tools.list_directory("src")
        if source.success:
            sections.append(f"Source code:\n{source.content}")

        sections.append("Analysis complete.")
        return ToolResult.ok("\n\n".join(sections))
