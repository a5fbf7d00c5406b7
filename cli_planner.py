#!/usr/bin/env python3
"""Standalone CLI for the dispatch agent."""

import argparse
import json

from agent import AgentSession
from core.logs import configure_logging
from core.settings import AgentSettings
from interfaces.cli import console, print_progress, render_memory, render_plan, render_report


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Dispatch agent CLI")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("chat", help="Start the interactive session")

    ask_parser = subparsers.add_parser("ask", help="Handle a single natural-language request")
    ask_parser.add_argument("text", help="Request text, e.g. '2 더하기 3'")
    ask_parser.add_argument("--json", action="store_true", help="Print the intent and reply as JSON")

    plan_parser = subparsers.add_parser("plan", help="Create and optionally execute a plan")
    plan_parser.add_argument("goal", help="Goal label, e.g. 'cleanup' or '문서 생성'")
    plan_parser.add_argument("--execute", "-e", action="store_true", help="Execute the plan after creation")
    plan_parser.add_argument("--json", action="store_true", help="Print the plan (and report) as JSON")

    tools_parser = subparsers.add_parser("tools", help="Show available tools")
    tools_parser.add_argument("--test", "-t", help="Invoke a specific tool")
    tools_parser.add_argument("--args", default="{}", help="JSON object of tool arguments")
    tools_parser.add_argument("--json", action="store_true", help="Print the tool result as JSON")

    subparsers.add_parser("serve", help="Run the MCP tool host over stdio")
    return parser


def print_json(payload) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def parse_tool_args(raw: str) -> dict:
    """Decode ``--args``; anything but a JSON object is a usage error."""

    tool_args = json.loads(raw)
    if not isinstance(tool_args, dict):
        raise ValueError("--args must be a JSON object")
    return tool_args


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    if args.command == "serve":
        from interfaces.mcp_server import main as serve

        serve()
        return 0

    configure_logging()

    if args.command == "chat":
        from interfaces.cli import main as chat

        chat()
        return 0

    settings = AgentSettings.from_settings()
    as_json = getattr(args, "json", False)
    session = AgentSession.from_settings(settings, on_event=None if as_json else print_progress)

    try:
        if args.command == "ask":
            if as_json:
                intent = session.classifier.classify(args.text)
                print_json({"intent": intent.to_dict(), "reply": session.handle_input(args.text)})
            else:
                console.print(session.handle_input(args.text), markup=False)

        elif args.command == "plan":
            plan = session.planner.plan(args.goal)
            report = session.executor.execute(plan) if args.execute else None
            if as_json:
                print_json({"plan": plan.to_dict(), "report": report.to_dict() if report else None})
            else:
                console.print(render_plan(plan))
                if report is not None:
                    console.print(render_report(report))
                    console.print(render_memory(session.memory))
                else:
                    console.print(f"To execute: python cli_planner.py plan {args.goal!r} --execute", markup=False)

        elif args.command == "tools":
            if not as_json:
                tools = session.dispatcher.list_tools()
                console.print(f"Available tools ({len(tools)}):")
                for tool in tools:
                    console.print(f"  • {tool.name}: {tool.description}")

            if args.test:
                try:
                    tool_args = parse_tool_args(args.args)
                except ValueError as e:
                    console.print(f"Invalid --args: {e}", markup=False)
                    return 2
                result = session.dispatcher.invoke(args.test, tool_args)
                if as_json:
                    print_json(result.to_dict())
                else:
                    status = "✅" if result.success else "❌"
                    console.print(f"\n{status} {result.text}", markup=False)
                return 0 if result.success else 1

    except KeyboardInterrupt:
        console.print("\nGoodbye!")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
