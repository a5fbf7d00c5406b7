"""Shared configuration, logging and conversation context."""

from __future__ import annotations

from .context import ConversationContext
from .logs import configure_logging
from .settings import AgentSettings, get_setting, load_settings

__all__ = [
    "AgentSettings",
    "ConversationContext",
    "configure_logging",
    "get_setting",
    "load_settings",
]
