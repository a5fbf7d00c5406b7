"""Intent recognition and goal planning."""

from .intent_engine import IntentEngine, IntentRule
from .planner import GoalKind, Plan, PlanError, Planner, Task
from .types import Action, Intent

__all__ = [
    "Action",
    "GoalKind",
    "Intent",
    "IntentEngine",
    "IntentRule",
    "Plan",
    "PlanError",
    "Planner",
    "Task",
]
