"""MCP tool host exposing the dispatcher's tools over stdio."""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from core.settings import AgentSettings
from tools.registry import ToolDispatcher

_dispatcher: ToolDispatcher | None = None


def get_dispatcher() -> ToolDispatcher:
    global _dispatcher
    if _dispatcher is None:
        settings = AgentSettings.from_settings()
        _dispatcher = ToolDispatcher(root=settings.tools_root, manifest_files=settings.manifest_files)
    return _dispatcher


def set_dispatcher(dispatcher: ToolDispatcher | None) -> None:
    global _dispatcher
    _dispatcher = dispatcher


def _call(tool_id: str, **args) -> str:
    result = get_dispatcher().invoke(tool_id, args)
    return result.text if result.success else f"Error: {result.error}"


mcp = FastMCP(
    "dispatch-tools",
    instructions="File, search, calculator and clock tools for the dispatch agent.",
)


@mcp.tool(name="read_file")
def read_file(path: str) -> str:
    """Read the contents of a file."""
    return _call("read_file", path=path)


@mcp.tool(name="write_file")
def write_file(path: str, content: str) -> str:
    """Write content to a file."""
    return _call("write_file", path=path, content=content)


@mcp.tool(name="list_directory")
def list_directory(path: str = ".") -> str:
    """List a directory (default: current directory)."""
    return _call("list_directory", path=path)


@mcp.tool(name="search_files")
def search_files(term: str, path: str = ".") -> str:
    """Find directory entries whose name contains the term."""
    return _call("search_files", term=term, path=path)


@mcp.tool(name="calculate")
def calculate(expression: str) -> str:
    """Evaluate an arithmetic expression (digits, + - * / ( ) . only)."""
    return _call("calculate", expression=expression)


@mcp.tool(name="get_current_time")
def get_current_time(format: str = "local") -> str:
    """Return the current time as iso, timestamp or local."""
    return _call("get_current_time", format=format)


def main() -> None:
    mcp.run()


if __name__ == "__main__":
    main()
