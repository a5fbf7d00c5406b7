"""Conversation context carried through one agent session."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from tools.file_tools import FILE_MARKER


@dataclass
class ConversationContext:
    last_tool: str = ""
    last_result: str = ""
    current_files: List[str] = field(default_factory=list)
    user_preferences: Dict[str, Any] = field(default_factory=dict)
    conversation_history: List[str] = field(default_factory=list)

    def add_user_turn(self, text: str) -> None:
        self.conversation_history.append(f"User: {text}")

    def add_agent_turn(self, text: str) -> None:
        self.conversation_history.append(f"Agent: {text}")

    def observe_tool(self, tool: str, args: Dict[str, Any], success: bool, text: str) -> None:
        """Update the context after a tool call made on the user's behalf."""

        self.last_tool = tool
        self.last_result = text
        if not success:
            return
        if tool == "write_file":
            self.current_files.append(str(args.get("path", "")))
        elif tool == "list_directory":
            files = [
                line[len(FILE_MARKER):].strip()
                for line in text.splitlines()
                if line.startswith(FILE_MARKER)
            ]
            if files:
                self.current_files = files

    def history(self, limit: int = 5) -> List[str]:
        return self.conversation_history[-limit:]
