"""Plan execution and the interactive agent session."""

from .executor import ExecutionReport, TaskExecutor, TaskOutcome
from .session import AgentSession

__all__ = ["AgentSession", "ExecutionReport", "TaskExecutor", "TaskOutcome"]
