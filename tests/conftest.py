from __future__ import annotations

from typing import Any, Dict, List, Mapping, Tuple

import pytest

from core.settings import load_settings
from memory import MemoryStore
from tools.file_tools import ToolResult
from tools.registry import ToolDispatcher


class RecordingDispatcher:
    """Dispatcher stand-in that records calls and fails selected tools."""

    def __init__(self, failing: Tuple[str, ...] = (), raising: Tuple[str, ...] = ()) -> None:
        self.failing = failing
        self.raising = raising
        self.calls: List[Tuple[str, Dict[str, Any]]] = []

    def invoke(self, tool_id: str, args: Mapping[str, Any] | None = None) -> ToolResult:
        self.calls.append((tool_id, dict(args or {})))
        if tool_id in self.raising:
            raise RuntimeError(f"{tool_id} exploded")
        if tool_id in self.failing:
            return ToolResult.fail(f"{tool_id} failed")
        return ToolResult.ok(f"{tool_id} ok")


@pytest.fixture
def dispatcher(tmp_path) -> ToolDispatcher:
    return ToolDispatcher(root=tmp_path)


@pytest.fixture
def memory() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def fresh_settings():
    load_settings.cache_clear()
    yield
    load_settings.cache_clear()
