"""Console rendering and the interactive chat entry point."""

from __future__ import annotations

from typing import Any, Dict

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from agent import AgentSession, ExecutionReport
from agent.executor import preview
from core.logs import configure_logging
from core.settings import AgentSettings
from memory import MemoryStore
from planner import Plan

from .event_loop import EventLoop

console = Console()


def render_plan(plan: Plan) -> Table:
    table = Table(title=f"Plan: {escape(plan.goal)} ({plan.kind.value})", expand=True)
    table.add_column("Id")
    table.add_column("Priority", justify="right")
    table.add_column("Tool")
    table.add_column("Description")
    table.add_column("Depends on")
    for task in plan.ordered():
        table.add_row(
            task.id,
            str(task.priority),
            task.tool,
            escape(task.description),
            ", ".join(sorted(task.dependencies)) or "-",
        )
    return table


def render_report(report: ExecutionReport) -> Table:
    table = Table(title=f"Execution: {escape(report.goal)}", expand=True)
    table.add_column("Task")
    table.add_column("Status")
    table.add_column("Details")
    icons = {"completed": "✅", "failed": "❌", "skipped": "⏳"}
    for outcome in report.outcomes:
        if outcome.status == "completed":
            details = escape(preview(outcome.output))
        elif outcome.status == "failed":
            details = escape(outcome.error or "")
        else:
            details = f"waiting on {', '.join(outcome.waiting_on)}"
        table.add_row(outcome.task_id, f"{icons[outcome.status]} {outcome.status}", details)
    return table


def render_memory(memory: MemoryStore, limit: int = 10) -> Table:
    stats = memory.stats()
    table = Table(title=f"Memory ({stats['total']}/{stats['capacity']})", expand=True)
    table.add_column("Time")
    table.add_column("OK")
    table.add_column("Event")
    for record in memory.recent(limit):
        table.add_row(record.timestamp.strftime("%H:%M:%S"), "✅" if record.success else "❌", escape(record.event))
    return table


def print_progress(event: str, payload: Dict[str, Any]) -> None:
    """Executor callback that narrates plan progress on the console."""

    if event == "plan_started":
        console.print(f"Running {payload['total']} tasks for: {escape(payload['goal'])}")
    elif event == "task_started":
        task = payload["task"]
        if payload["past_uses"]:
            console.print(f"  [dim]memory: {task.tool} used {payload['past_uses']} time(s) before[/dim]")
        console.print(f"  🛠️  {escape(task.description)}")
    elif event == "task_skipped":
        outcome = payload["outcome"]
        console.print(f"  ⏳ {outcome.task_id} waiting on {', '.join(outcome.waiting_on)}")
    elif event == "task_finished":
        outcome = payload["outcome"]
        if outcome.success:
            console.print(f"  ✅ {escape(outcome.description)}")
        else:
            console.print(f"  ❌ {outcome.description}: {outcome.error}", markup=False)


def main() -> None:
    configure_logging()
    settings = AgentSettings.from_settings()
    session = AgentSession.from_settings(settings, on_event=print_progress)

    console.print("[bold]Dispatch agent ready.[/bold] Type 'quit' to exit.")
    console.print('Try: "README.md 읽어줘", "2 더하기 3 계산해줘", "지금 몇시야?", "/plan cleanup", "/memory", "/stats"')
    EventLoop(quit_words=settings.quit_words, console=console).run(session.handle_input)


if __name__ == "__main__":
    main()
