"""Utilities for loading the dispatcher configuration settings."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Tuple

import yaml

ROOT_PATH = Path(__file__).resolve().parents[1]
DEFAULT_SETTINGS_PATH = ROOT_PATH / "config" / "settings.yaml"
SETTINGS_ENV = "DISPATCH_SETTINGS"
DEFAULT_QUIT_WORDS = ("quit", "exit", "종료", "그만")
DEFAULT_MANIFEST_FILES = ("pyproject.toml", "package.json")


def settings_path() -> Path:
    override = os.environ.get(SETTINGS_ENV)
    return Path(override) if override else DEFAULT_SETTINGS_PATH


@lru_cache(maxsize=1)
def load_settings() -> Dict[str, Any]:
    config_path = settings_path()
    with config_path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle)
    return data or {}


def get_setting(*keys: str, default: Any | None = None) -> Any:
    settings = load_settings()
    node: Any = settings
    for key in keys:
        if isinstance(node, dict) and key in node:
            node = node[key]
        else:
            return default
    return node


@dataclass(slots=True)
class AgentSettings:
    """Runtime configuration shared by the session, executor and tools."""

    confidence_threshold: float = 0.3
    quit_words: Tuple[str, ...] = DEFAULT_QUIT_WORDS
    memory_capacity: int = 50
    scheduling: str = "ready_queue"
    step_delay_seconds: float = 0.0
    tools_root: Path = field(default_factory=Path.cwd)
    manifest_files: Tuple[str, ...] = DEFAULT_MANIFEST_FILES

    @classmethod
    def from_settings(cls) -> "AgentSettings":
        agent = get_setting("agent", default={}) or {}
        memory = get_setting("memory", default={}) or {}
        executor = get_setting("executor", default={}) or {}
        tools = get_setting("tools", default={}) or {}
        return cls(
            confidence_threshold=float(agent.get("confidence_threshold", 0.3)),
            quit_words=tuple(agent.get("quit_words", DEFAULT_QUIT_WORDS)),
            memory_capacity=int(memory.get("capacity", 50)),
            scheduling=str(executor.get("scheduling", "ready_queue")),
            step_delay_seconds=float(executor.get("step_delay_seconds", 0.0)),
            tools_root=Path(tools.get("root", ".")).expanduser().resolve(),
            manifest_files=tuple(tools.get("manifest_files", DEFAULT_MANIFEST_FILES)),
        )
