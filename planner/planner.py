"""Goal planning: turns a goal label into an ordered set of dependent tasks."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Optional, Tuple

from memory import MemoryStore
from tools.basic_tools import local_timestamp

LOGGER = logging.getLogger("dispatch.planner")


class PlanError(ValueError):
    """Raised when a plan references unknown tasks or has a dependency cycle."""


@dataclass(frozen=True)
class Task:
    """A single planned tool invocation."""
    id: str
    description: str
    tool: str
    args: Dict[str, Any] = field(default_factory=dict)
    priority: int = 1
    dependencies: FrozenSet[str] = frozenset()

    def __post_init__(self) -> None:
        if not isinstance(self.dependencies, frozenset):
            object.__setattr__(self, "dependencies", frozenset(self.dependencies))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "description": self.description,
            "tool": self.tool,
            "args": dict(self.args),
            "priority": self.priority,
            "dependencies": sorted(self.dependencies),
        }


class GoalKind(str, Enum):
    PROJECT_ANALYSIS = "project_analysis"
    DOCUMENT_GENERATION = "document_generation"
    CLEANUP = "cleanup"


@dataclass(frozen=True)
class Plan:
    """Tasks produced for one goal; never shared between invocations."""
    goal: str
    kind: GoalKind
    tasks: Tuple[Task, ...]
    created_at: float = field(default_factory=time.time)

    def __iter__(self):
        return iter(self.tasks)

    def __len__(self) -> int:
        return len(self.tasks)

    def task(self, task_id: str) -> Optional[Task]:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def ordered(self) -> List[Task]:
        """Tasks sorted by priority; ties keep their authored order."""
        return sorted(self.tasks, key=lambda task: task.priority)

    def validate(self) -> None:
        ids = [task.id for task in self.tasks]
        if len(ids) != len(set(ids)):
            raise PlanError(f"Duplicate task ids in plan for '{self.goal}'")

        known = set(ids)
        for task in self.tasks:
            missing = task.dependencies - known
            if missing:
                raise PlanError(f"Task {task.id} depends on unknown tasks: {', '.join(sorted(missing))}")

        visiting: set[str] = set()
        done: set[str] = set()

        def visit(task_id: str) -> None:
            if task_id in done:
                return
            if task_id in visiting:
                raise PlanError(f"Dependency cycle through task {task_id}")
            visiting.add(task_id)
            for dep in self.task(task_id).dependencies:
                visit(dep)
            visiting.discard(task_id)
            done.add(task_id)

        for task_id in ids:
            visit(task_id)

    def to_dict(self) -> dict:
        return {
            "goal": self.goal,
            "kind": self.kind.value,
            "created_at": self.created_at,
            "tasks": [task.to_dict() for task in self.tasks],
        }


# Checked in order; the first kind with a keyword contained in the goal wins.
GOAL_KEYWORDS: Tuple[Tuple[GoalKind, Tuple[str, ...]], ...] = (
    (GoalKind.PROJECT_ANALYSIS, ("프로젝트 분석", "분석", "project analysis", "analysis", "analyze")),
    (GoalKind.DOCUMENT_GENERATION, ("문서 생성", "문서", "document generation", "document", "docs")),
    (GoalKind.CLEANUP, ("정리", "cleanup", "clean up", "clean")),
)

DEFAULT_GOAL = GoalKind.PROJECT_ANALYSIS


class Planner:
    """Maps goal labels to hand-authored task templates."""

    def __init__(
        self,
        memory: MemoryStore | None = None,
        manifest_file: str = "pyproject.toml",
    ) -> None:
        self.memory = memory
        self.manifest_file = manifest_file
        self.templates: Dict[GoalKind, Callable[[], List[Task]]] = {
            GoalKind.PROJECT_ANALYSIS: self._create_analysis_tasks,
            GoalKind.DOCUMENT_GENERATION: self._create_document_tasks,
            GoalKind.CLEANUP: self._create_cleanup_tasks,
        }

    def match_goal(self, goal_label: str) -> GoalKind:
        lowered = goal_label.lower()
        for kind, keywords in GOAL_KEYWORDS:
            if any(keyword.lower() in lowered for keyword in keywords):
                return kind
        return DEFAULT_GOAL

    def plan(self, goal_label: str) -> Plan:
        """
        Create a plan for the given goal label.

        Args:
            goal_label: Free-text goal, e.g. "cleanup" or "프로젝트 분석해줘"

        Returns:
            A fresh plan; unmatched labels get the project analysis plan
        """
        kind = self.match_goal(goal_label)
        plan = Plan(goal=goal_label, kind=kind, tasks=tuple(self.templates[kind]()))
        LOGGER.info("Planned %s for goal %r with %d tasks", kind.value, goal_label, len(plan))
        return plan

    def goal_kinds(self) -> Iterable[GoalKind]:
        return self.templates.keys()

    # ------------------------------------------------------------------
    # Templates
    # ------------------------------------------------------------------
    def _create_analysis_tasks(self) -> List[Task]:
        return [
            Task("analyze-1", "Survey the project structure", "list_directory", {"path": "."}, 1),
            Task(
                "analyze-2",
                "Read the README",
                "read_file",
                {"path": "README.md"},
                2,
                frozenset({"analyze-1"}),
            ),
            Task(
                "analyze-3",
                "Inspect the project manifest",
                "read_file",
                {"path": self.manifest_file},
                2,
                frozenset({"analyze-1"}),
            ),
            Task(
                "analyze-4",
                "Explore the source directory",
                "list_directory",
                {"path": "src"},
                3,
                frozenset({"analyze-1"}),
            ),
        ]

    def _create_document_tasks(self) -> List[Task]:
        hours_since_epoch = f"{int(time.time())} / 60 / 60"
        return [
            Task("doc-1", "Review the current project state", "list_directory", {"path": "."}, 1),
            Task(
                "doc-2",
                "Write the learning summary",
                "write_file",
                {"path": "learning-summary.md", "content": learning_summary()},
                2,
                frozenset({"doc-1"}),
            ),
            Task(
                "doc-3",
                "Compute project statistics",
                "calculate",
                {"expression": hours_since_epoch},
                3,
                frozenset({"doc-2"}),
            ),
        ]

    def _create_cleanup_tasks(self) -> List[Task]:
        return [
            Task("clean-1", "Check the current state", "list_directory", {"path": "."}, 1),
            Task(
                "clean-2",
                "Find generated files",
                "search_files",
                {"term": "ai-", "path": "."},
                2,
                frozenset({"clean-1"}),
            ),
            Task(
                "clean-3",
                "Write the completion report",
                "write_file",
                {"path": "completion-report.md", "content": completion_report(self.memory)},
                3,
                frozenset({"clean-2"}),
            ),
        ]


def learning_summary() -> str:
    return f"""# Learning Summary

## Written
{local_timestamp()}

## Covered
1. Tool dispatch: one uniform result shape for every tool
2. File tools: read, write, list and search
3. Safe arithmetic without a general evaluator
4. Intent classification with an ordered rule table
5. Planning and dependency-aware execution with bounded memory

## Next steps
1. Add more goal templates
2. Expose new tools through the MCP server

---
*Generated by the dispatch agent.*
"""


def completion_report(memory: MemoryStore | None) -> str:
    stats = memory.stats() if memory is not None else {"total": 0, "successful": 0, "success_rate": 0.0}
    return f"""# Completion Report

## Execution statistics
- Tasks run: {stats["total"]}
- Succeeded: {stats["successful"]}
- Success rate: {stats["success_rate"] * 100:.1f}%
- Written: {local_timestamp()}

---
*Generated by the dispatch agent.*
"""
