"""Filesystem tools the dispatcher delegates to."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DIR_MARKER = "📁"
FILE_MARKER = "📄"


@dataclass(frozen=True)
class ToolResult:
    """Uniform outcome of a tool call."""

    success: bool
    content: str = ""
    error: Optional[str] = None

    @property
    def text(self) -> str:
        return self.content or self.error or ""

    def to_dict(self) -> dict:
        return {"success": self.success, "content": self.content, "error": self.error}

    @classmethod
    def ok(cls, content: str) -> "ToolResult":
        return cls(success=True, content=content)

    @classmethod
    def fail(cls, error: str) -> "ToolResult":
        return cls(success=False, content="", error=error)


def _entry_line(path: Path) -> str:
    marker = DIR_MARKER if path.is_dir() else FILE_MARKER
    return f"{marker} {path.name}"


class LocalFileTools:
    """Reads and writes files below ``root``; relative paths resolve against it."""

    def __init__(self, root: Path | str | None = None) -> None:
        self.root = Path(root) if root is not None else Path.cwd()

    def _resolve(self, path: str) -> Path:
        candidate = Path(path).expanduser()
        if candidate.is_absolute():
            return candidate
        return self.root / candidate

    def read_file(self, path: str) -> ToolResult:
        target = self._resolve(path)
        if not target.is_file():
            return ToolResult.fail(f"File not found: {path}")
        try:
            content = target.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            return ToolResult.fail(f"Failed to read file: {e}")
        return ToolResult.ok(f"File contents ({path}):\n\n{content}")

    def write_file(self, path: str, content: str) -> ToolResult:
        target = self._resolve(path)
        try:
            target.write_text(content, encoding="utf-8")
        except OSError as e:
            return ToolResult.fail(f"Failed to write file: {e}")
        return ToolResult.ok(f"File saved: {path}")

    def list_directory(self, path: str = ".") -> ToolResult:
        target = self._resolve(path)
        if not target.is_dir():
            return ToolResult.fail(f"Directory not found: {path}")
        try:
            entries = sorted(target.iterdir(), key=lambda p: p.name)
        except OSError as e:
            return ToolResult.fail(f"Failed to read directory: {e}")
        listing = "\n".join(_entry_line(entry) for entry in entries)
        return ToolResult.ok(f"Directory contents ({path}):\n\n{listing}")

    def search_files(self, term: str, path: str = ".") -> ToolResult:
        target = self._resolve(path)
        if not target.is_dir():
            return ToolResult.fail(f"Directory not found: {path}")
        try:
            entries = sorted(target.iterdir(), key=lambda p: p.name)
        except OSError as e:
            return ToolResult.fail(f"Failed to search directory: {e}")

        needle = term.lower()
        matches = [_entry_line(entry) for entry in entries if needle in entry.name.lower()]
        if not matches:
            return ToolResult.ok(f'Search results: nothing matches "{term}".')
        return ToolResult.ok(f'Search results for "{term}":\n\n' + "\n".join(matches))
