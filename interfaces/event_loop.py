"""Read-eval-print loop for the interactive agent."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable

from rich.console import Console

LOGGER = logging.getLogger("dispatch.loop")


@dataclass
class EventLoop:
    prompt: str = "You: "
    quit_words: Iterable[str] = ("quit", "exit")
    console: Console | None = None

    def run(self, handler: Callable[[str], str], read: Callable[[str], str] = input) -> None:
        console = self.console or Console()
        stop = {word.lower() for word in self.quit_words}
        try:
            while True:
                user_input = read(self.prompt).strip()
                if not user_input:
                    continue
                if user_input.lower() in stop:
                    console.print("Agent: Goodbye!")
                    break
                try:
                    response = handler(user_input)
                except Exception as e:
                    # One bad turn is reported; the session keeps going.
                    LOGGER.exception("Turn failed for %r", user_input)
                    response = f"Something went wrong: {e}"
                console.print(f"Agent: {response}\n", markup=False)
        except (KeyboardInterrupt, EOFError):
            console.print("\nAgent: Session ended.")
