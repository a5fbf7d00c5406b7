"""Tool dispatcher and tool implementations."""

from .file_tools import LocalFileTools, ToolResult
from .registry import TOOL_SPECS, ToolDispatcher, ToolSpec

__all__ = ["LocalFileTools", "ToolResult", "ToolDispatcher", "ToolSpec", "TOOL_SPECS"]
