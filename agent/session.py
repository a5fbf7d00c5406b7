"""Interactive agent session: classifies text, dispatches tools, runs plans."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Sequence

from core.context import ConversationContext
from core.settings import AgentSettings
from memory import MemoryStore
from planner import Action, Intent, IntentEngine, Planner
from tools.registry import ToolDispatcher

from .executor import ExecutionReport, TaskExecutor, preview

LOGGER = logging.getLogger("dispatch.session")

RESPONSES: Dict[Action, Sequence[str]] = {
    Action.READ_FILE: (
        "Read {fileName} for you!",
        "Here is the file content.",
        "Opened the requested file.",
    ),
    Action.WRITE_FILE: (
        "Created {fileName}!",
        "The file was saved.",
        "Wrote the new file for you.",
    ),
    Action.LIST_DIRECTORY: (
        "Here is the directory listing.",
        "Fetched the folder contents.",
        "Listed the files and folders.",
    ),
    Action.SEARCH_FILES: (
        "Search finished.",
        "Looked for matching files.",
        "Here are the search results.",
    ),
    Action.CALCULATE: (
        "Calculation done!",
        "Solved the arithmetic.",
        "Worked that out quickly.",
    ),
}
DEFAULT_RESPONSE = "Done."

HELP_TEXT = (
    "Sorry, I did not understand that.\n"
    "Try something like:\n"
    '  - "README.md 읽어줘" or "2 더하기 3 계산해줘"\n'
    '  - "폴더 보여줘" or "지금 몇시야?"\n'
    "  - /plan <goal>, /memory, /stats, /tools"
)


@dataclass
class AgentSession:
    classifier: IntentEngine
    dispatcher: ToolDispatcher
    planner: Planner
    executor: TaskExecutor
    memory: MemoryStore
    context: ConversationContext = field(default_factory=ConversationContext)
    confidence_threshold: float = 0.3
    choose: Callable[[Sequence[str]], str] = random.choice
    plans_run: int = 0

    @classmethod
    def from_settings(cls, settings: AgentSettings | None = None, **overrides) -> "AgentSession":
        settings = settings or AgentSettings.from_settings()
        memory = MemoryStore(capacity=settings.memory_capacity)
        dispatcher = ToolDispatcher(root=settings.tools_root, manifest_files=settings.manifest_files)
        manifest = next(
            (name for name in settings.manifest_files if (settings.tools_root / name).is_file()),
            settings.manifest_files[0] if settings.manifest_files else "pyproject.toml",
        )
        executor = TaskExecutor(
            dispatcher,
            memory=memory,
            scheduling=settings.scheduling,
            step_delay=settings.step_delay_seconds,
            on_event=overrides.pop("on_event", None),
        )
        return cls(
            classifier=IntentEngine(),
            dispatcher=dispatcher,
            planner=Planner(memory=memory, manifest_file=manifest),
            executor=executor,
            memory=memory,
            confidence_threshold=settings.confidence_threshold,
            **overrides,
        )

    # ------------------------------------------------------------------
    def handle_input(self, user_input: str) -> str:
        text = user_input.strip()
        if text.startswith("/plan"):
            goal = text[len("/plan"):].strip()
            if not goal:
                return "Usage: /plan <goal>"
            return self.format_report(self.run_goal(goal))
        if text in {"/memory", "memory"}:
            return self.describe_memory()
        if text in {"/stats", "stats"}:
            return self.describe_stats()
        if text in {"/tools", "tools"}:
            return "\n".join(f"- {spec.name}: {spec.description}" for spec in self.dispatcher.list_tools())
        return self.respond(text)

    def respond(self, text: str) -> str:
        """Handle one natural-language turn."""

        self.context.add_user_turn(text)
        intent = self.classifier.classify(text)
        if not intent.is_usable(self.confidence_threshold):
            LOGGER.info("Low-confidence intent for %r", text)
            return HELP_TEXT

        result = self.dispatcher.invoke(intent.tool, intent.args)
        self.context.observe_tool(intent.tool, intent.args, result.success, result.text)
        self.memory.record(f"{intent.tool}: {text}", result.text, result.success)

        reply = self._natural_response(intent, result.text)
        self.context.add_agent_turn(reply)
        return f"Understood ({intent.confidence * 100:.0f}% sure): {intent.action.value}\n\n{reply}"

    def run_goal(self, goal: str) -> ExecutionReport:
        plan = self.planner.plan(goal)
        report = self.executor.execute(plan)
        self.plans_run += 1
        return report

    # ------------------------------------------------------------------
    def _natural_response(self, intent: Intent, result: str) -> str:
        choices = RESPONSES.get(intent.action, (DEFAULT_RESPONSE,))
        opener = self.choose(list(choices)).format(**{"fileName": "", **intent.entities})
        return f"{opener}\n\n{result}"

    def format_report(self, report: ExecutionReport) -> str:
        lines: List[str] = [f"Goal: {report.goal}"]
        for outcome in report.outcomes:
            if outcome.status == "completed":
                lines.append(f"  ✅ {outcome.description}: {preview(outcome.output)}")
            elif outcome.status == "failed":
                lines.append(f"  ❌ {outcome.description}: {outcome.error}")
            else:
                lines.append(f"  ⏳ {outcome.task_id} skipped (waiting on {', '.join(outcome.waiting_on)})")
        lines.append(
            f"Completed {len(report.completed)}, failed {len(report.failed)}, skipped {len(report.skipped)}."
        )
        return "\n".join(lines)

    def describe_memory(self, limit: int = 5) -> str:
        if not len(self.memory):
            return "Memory is empty."
        lines = ["Agent memory:"]
        for record in self.memory.recent(limit):
            status = "✅" if record.success else "❌"
            lines.append(f"  {status} {record.timestamp.strftime('%H:%M:%S')}: {record.event}")
        if len(self.memory) > limit:
            lines.append(f"  ... and {len(self.memory) - limit} more")
        return "\n".join(lines)

    def describe_stats(self) -> str:
        stats = self.memory.stats()
        return "\n".join(
            [
                "Agent statistics:",
                f"  Tasks run: {stats['total']}",
                f"  Succeeded: {stats['successful']}",
                f"  Success rate: {stats['success_rate'] * 100:.1f}%",
                f"  Memory used: {stats['total']}/{stats['capacity']}",
                f"  Completed tasks (last plan): {len(self.executor.completed_tasks)}",
                f"  Plans run: {self.plans_run}",
            ]
        )
