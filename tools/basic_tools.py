"""Calculator and clock tools."""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Callable

from .arithmetic import ExpressionError, evaluate, is_safe_expression
from .file_tools import ToolResult

LOCAL_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
TIME_FORMATS = ("iso", "timestamp", "local")


class CalculatorTool:
    def execute(self, expression: str) -> ToolResult:
        expression = (expression or "").strip()
        if not is_safe_expression(expression):
            return ToolResult.fail(
                "Unsafe expression: only digits, + - * / ( ) . and spaces are allowed."
            )
        try:
            value = evaluate(expression)
        except ExpressionError as e:
            return ToolResult.fail(f"Calculation error: {e}")
        return ToolResult.ok(f"{expression} = {value}")


class ClockTool:
    def __init__(self, now: Callable[[], datetime] | None = None) -> None:
        self._now = now or (lambda: datetime.now(timezone.utc).astimezone())

    def execute(self, format: str = "local") -> ToolResult:
        current = self._now()
        selector = format if format in TIME_FORMATS else "local"
        if selector == "iso":
            return ToolResult.ok(f"Current time (ISO): {current.isoformat()}")
        if selector == "timestamp":
            millis = int(current.timestamp() * 1000)
            return ToolResult.ok(f"Current time (timestamp): {millis}")
        return ToolResult.ok(f"Current time: {current.strftime(LOCAL_TIME_FORMAT)}")


def local_timestamp() -> str:
    return time.strftime(LOCAL_TIME_FORMAT)
