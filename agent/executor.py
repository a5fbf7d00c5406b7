"""Executor for running plans against the tool dispatcher."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Set

from memory import MemoryStore
from planner.planner import Plan, Task
from tools.file_tools import ToolResult
from tools.registry import ToolDispatcher

LOGGER = logging.getLogger("dispatch.executor")

READY_QUEUE = "ready_queue"
SINGLE_PASS = "single_pass"
SCHEDULING_MODES = (READY_QUEUE, SINGLE_PASS)
PREVIEW_CHARS = 100


@dataclass
class TaskOutcome:
    """Result of running (or skipping) one task."""
    task_id: str
    description: str
    tool: str
    status: str  # completed, failed, skipped
    output: str = ""
    error: Optional[str] = None
    execution_time: float = 0.0
    waiting_on: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.status == "completed"

    def to_dict(self) -> dict:
        return {
            "task_id": self.task_id,
            "description": self.description,
            "tool": self.tool,
            "status": self.status,
            "output": self.output,
            "error": self.error,
            "execution_time": self.execution_time,
            "waiting_on": list(self.waiting_on),
        }


@dataclass
class ExecutionReport:
    goal: str
    outcomes: List[TaskOutcome] = field(default_factory=list)
    started_at: float = field(default_factory=time.time)
    completed_at: Optional[float] = None

    def _ids(self, status: str) -> List[str]:
        return [outcome.task_id for outcome in self.outcomes if outcome.status == status]

    @property
    def completed(self) -> List[str]:
        return self._ids("completed")

    @property
    def failed(self) -> List[str]:
        return self._ids("failed")

    @property
    def skipped(self) -> List[str]:
        return self._ids("skipped")

    @property
    def success(self) -> bool:
        return bool(self.outcomes) and all(outcome.success for outcome in self.outcomes)

    def to_dict(self) -> dict:
        return {
            "goal": self.goal,
            "started_at": self.started_at,
            "completed_at": self.completed_at,
            "completed": self.completed,
            "failed": self.failed,
            "skipped": self.skipped,
            "outcomes": [outcome.to_dict() for outcome in self.outcomes],
        }


class TaskExecutor:
    """Runs plan tasks one at a time, gating each on its dependencies."""

    def __init__(
        self,
        dispatcher: ToolDispatcher,
        memory: MemoryStore | None = None,
        scheduling: str = READY_QUEUE,
        step_delay: float = 0.0,
        on_event: Callable[[str, Dict[str, Any]], None] | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if scheduling not in SCHEDULING_MODES:
            raise ValueError(f"Unknown scheduling mode '{scheduling}'")
        self.dispatcher = dispatcher
        self.memory = memory if memory is not None else MemoryStore()
        self.scheduling = scheduling
        self.step_delay = step_delay
        self.on_event = on_event
        self._sleep = sleep
        self.completed_tasks: Set[str] = set()

    def execute(self, plan: Plan) -> ExecutionReport:
        """
        Execute every runnable task of a plan.

        Args:
            plan: Plan produced by the planner

        Returns:
            Report listing completed, failed and skipped tasks
        """
        self.completed_tasks = set()
        report = ExecutionReport(goal=plan.goal)
        ordered = plan.ordered()
        LOGGER.info("Executing %d tasks for goal %r (%s)", len(ordered), plan.goal, self.scheduling)
        self._emit("plan_started", {"goal": plan.goal, "total": len(ordered)})

        if self.scheduling == SINGLE_PASS:
            self._run_single_pass(ordered, report)
        else:
            self._run_ready_queue(ordered, report)

        report.completed_at = time.time()
        LOGGER.info(
            "Plan %r finished: %d completed, %d failed, %d skipped",
            plan.goal,
            len(report.completed),
            len(report.failed),
            len(report.skipped),
        )
        self._emit("plan_finished", {"report": report})
        return report

    # ------------------------------------------------------------------
    # Scheduling
    # ------------------------------------------------------------------
    def _run_single_pass(self, ordered: List[Task], report: ExecutionReport) -> None:
        for task in ordered:
            waiting = self._unmet(task)
            if waiting:
                report.outcomes.append(self._skip(task, waiting))
                continue
            report.outcomes.append(self._run_task(task))

    def _run_ready_queue(self, ordered: List[Task], report: ExecutionReport) -> None:
        pending = list(ordered)
        while pending:
            ready = next((task for task in pending if not self._unmet(task)), None)
            if ready is None:
                break
            pending.remove(ready)
            report.outcomes.append(self._run_task(ready))

        # Whatever remains waits on a task that failed or never became runnable.
        for task in pending:
            report.outcomes.append(self._skip(task, self._unmet(task)))

    def _unmet(self, task: Task) -> List[str]:
        return sorted(dep for dep in task.dependencies if dep not in self.completed_tasks)

    # ------------------------------------------------------------------
    # Task execution
    # ------------------------------------------------------------------
    def _skip(self, task: Task, waiting: List[str]) -> TaskOutcome:
        LOGGER.warning("Skipping task %s: waiting on %s", task.id, ", ".join(waiting))
        outcome = TaskOutcome(
            task_id=task.id,
            description=task.description,
            tool=task.tool,
            status="skipped",
            waiting_on=waiting,
        )
        self._emit("task_skipped", {"task": task, "outcome": outcome})
        return outcome

    def _run_task(self, task: Task) -> TaskOutcome:
        past = self.memory.query(task.tool)
        if past:
            LOGGER.info("Tool %s has %d earlier uses in memory", task.tool, len(past))
        self._emit("task_started", {"task": task, "past_uses": len(past)})

        start_time = time.time()
        try:
            result = self.dispatcher.invoke(task.tool, task.args)
        except Exception as e:
            LOGGER.exception("Task %s raised", task.id)
            result = ToolResult.fail(f"Task execution failed: {e}")
        execution_time = time.time() - start_time

        event = f"{task.tool}: {task.description}"
        if result.success:
            self.completed_tasks.add(task.id)
            self.memory.record(event, result.content, True)
            outcome = TaskOutcome(
                task_id=task.id,
                description=task.description,
                tool=task.tool,
                status="completed",
                output=result.content,
                execution_time=execution_time,
            )
        else:
            error = result.error or "Unknown error"
            self.memory.record(event, f"Error: {error}", False)
            outcome = TaskOutcome(
                task_id=task.id,
                description=task.description,
                tool=task.tool,
                status="failed",
                error=error,
                execution_time=execution_time,
            )
        LOGGER.info("Task %s %s in %.3fs", task.id, outcome.status, execution_time)
        self._emit("task_finished", {"task": task, "outcome": outcome})

        if self.step_delay > 0:
            self._sleep(self.step_delay)
        return outcome

    def _emit(self, event: str, payload: Dict[str, Any]) -> None:
        if self.on_event is not None:
            self.on_event(event, payload)


def preview(text: str, limit: int = PREVIEW_CHARS) -> str:
    return text if len(text) <= limit else text[:limit] + "..."
