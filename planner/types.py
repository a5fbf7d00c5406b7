"""Core types for the planner module."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict


class Action(str, Enum):
    READ_FILE = "read_file"
    WRITE_FILE = "write_file"
    LIST_DIRECTORY = "list_directory"
    SEARCH_FILES = "search_files"
    CALCULATE = "calculate"
    GET_CURRENT_TIME = "get_current_time"
    ANALYZE_PROJECT = "analyze_project"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Intent:
    action: Action
    confidence: float
    tool: str
    entities: Dict[str, str] = field(default_factory=dict)
    args: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"Intent confidence out of range: {self.confidence}")

    def is_usable(self, threshold: float = 0.3) -> bool:
        return self.confidence >= threshold

    def to_dict(self) -> dict:
        return {
            "action": self.action.value,
            "confidence": self.confidence,
            "tool": self.tool,
            "entities": dict(self.entities),
            "args": dict(self.args),
        }
