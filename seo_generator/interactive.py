"""
Interactive terminal session for the content generator.

The session starts by asking which provider to use, then offers two modes:
- Generator: a numbered menu of content kinds, one topic per request
- Chat: every line typed is sent as a content generation topic

In every prompt ``/model``, ``/health`` and ``/help`` are available, and
``exit`` leaves the current mode (or the program from the mode menu).
Requests run in-process through the same runner the one-shot CLI commands use.
"""

from __future__ import annotations

import asyncio
import json
from typing import Callable

from rich.console import Console
from rich.prompt import Prompt

from .core.types import GenerationKind, ProviderTag
from .health import get_health_status
from .orchestrator import GenerationOrchestrator
from .runner import run_generation, run_switch
from .storage.records import JsonlRecordSink

EXIT = "exit"
HELP = "/help"
HEALTH = "/health"
MODEL = "/model"

GENERATOR_MODE = "1"
CHAT_MODE = "2"

_MENU: dict[str, tuple[GenerationKind, str, str]] = {
    "1": (GenerationKind.KEYWORDS, "Keywords", "Enter topic for keyword generation"),
    "2": (GenerationKind.TITLE, "Title Suggestions", "Enter topic for title suggestions"),
    "3": (GenerationKind.META, "Meta Description", "Enter topic for meta description"),
    "4": (GenerationKind.CONTENT, "Full Content", "Enter topic for content generation"),
    "5": (GenerationKind.ALL, "Generate all together", "Enter topic to generate all content types"),
}

AskFn = Callable[[str], str]


class InteractiveSession:
    """Menu-driven loop over the generation runner.

    Args:
        orchestrator: Orchestrator shared by every request in the session
        sink: Record sink for completed generations
        console: Rich console for output
        ask: Prompt function returning the user's answer (defaults to rich Prompt)
    """

    def __init__(
        self,
        orchestrator: GenerationOrchestrator,
        sink: JsonlRecordSink | None = None,
        console: Console | None = None,
        ask: AskFn | None = None,
    ):
        self.orchestrator = orchestrator
        self.sink = sink
        self.console = console or Console()
        self._ask = ask or (lambda prompt: Prompt.ask(prompt, console=self.console, default=""))

    def run(self) -> None:
        """Run until the user exits from the mode menu or closes input."""
        try:
            self._initial_model_selection()
            self._mode_menu()
        except (EOFError, KeyboardInterrupt):
            self.console.print()
        self.console.print("Goodbye!")

    def handle_mode(self, choice: str) -> bool:
        """Handle one mode-menu answer. Returns False when the program should end."""
        if choice.lower() == EXIT:
            return False
        if self._handle_command(choice):
            return True
        if choice == GENERATOR_MODE:
            self._generator_mode()
        elif choice == CHAT_MODE:
            self._chat_mode()
        else:
            self.console.print("[yellow]Invalid selection. Please choose 1 or 2.[/yellow]")
            return True
        self._show_modes()
        return True

    def handle(self, option: str) -> bool:
        """Handle one generator-menu answer. Returns False when the mode should end."""
        if option.lower() == EXIT:
            return False
        if self._handle_command(option):
            return True
        if option in _MENU:
            self._generate(*_MENU[option])
        else:
            self.console.print("[yellow]Invalid option. Please choose 1-5.[/yellow]")
        return True

    def handle_chat(self, message: str) -> bool:
        """Handle one chat line. Returns False when the mode should end."""
        if message.lower() == EXIT:
            return False
        if self._handle_command(message) or not message:
            return True
        envelope = asyncio.run(
            run_generation(self.orchestrator, GenerationKind.CONTENT, message, sink=self.sink)
        )
        if envelope["success"]:
            self.console.print(f"\nAI: {envelope['data']}\n", markup=False)
        else:
            self.console.print(f"[red]Error in chat:[/red] {envelope['error']}")
        return True

    def _initial_model_selection(self) -> None:
        self.console.print("Welcome to Content Generation CLI!\n")
        self.console.print("Please select your preferred AI model:")
        self._switch_model(allow_keep=True)

    def _mode_menu(self) -> None:
        self._show_modes()
        while self.handle_mode(self._ask("Select mode (1/2)").strip()):
            pass

    def _generator_mode(self) -> None:
        self._show_menu()
        while self.handle(self._ask("Select option (1-5)").strip()):
            pass

    def _chat_mode(self) -> None:
        self.console.print("\n[bold]=== Chat Mode ===[/bold]")
        self.console.print("Type your message or use commands (/help for list)\n")
        while self.handle_chat(self._ask("You").strip()):
            pass

    def _handle_command(self, text: str) -> bool:
        command = text.lower()
        if command == HELP:
            self._show_help()
        elif command == HEALTH:
            self._show_health()
        elif command == MODEL:
            self._switch_model()
        else:
            return False
        return True

    def _generate(self, kind: GenerationKind, label: str, prompt: str) -> None:
        topic = self._ask(prompt).strip()
        if not topic:
            self.console.print("[yellow]Topic cannot be empty.[/yellow]")
            return
        selected: list[str] = []
        if kind is GenerationKind.ALL:
            raw = self._ask("Keywords to keep (comma-separated, blank for all)")
            selected = [item.strip() for item in raw.split(",") if item.strip()]

        provider = self.orchestrator.selector.active_tag.value
        self.console.print(f"\nGenerating {label.lower()} with {provider}...\n")
        envelope = asyncio.run(
            run_generation(self.orchestrator, kind, topic, selected or None, sink=self.sink)
        )
        if envelope["success"]:
            self._print_result(kind, envelope["data"])
        else:
            self.console.print(f"[red]Error:[/red] {envelope['error']}")

    def _print_result(self, kind: GenerationKind, data) -> None:
        if kind is GenerationKind.CONTENT:
            self.console.print(data, markup=False)
        else:
            self.console.print_json(json.dumps(data, ensure_ascii=False))
        self.console.print()

    def _switch_model(self, allow_keep: bool = False) -> None:
        tags = list(ProviderTag)
        self.console.print("\nAvailable Models:")
        for idx, tag in enumerate(tags, start=1):
            descriptor = self.orchestrator.selector.registry.get(tag)
            marker = "" if descriptor.available else " [dim](no API key)[/dim]"
            self.console.print(f"{idx}. {tag.value}{marker}")
        choice = self._ask(f"Select model (1-{len(tags)})").strip()
        if not choice and allow_keep:
            current = self.orchestrator.selector.active_tag.value
            self.console.print(f"\nKeeping current model ({current}).")
            return
        if choice.isdigit() and 1 <= int(choice) <= len(tags):
            name = tags[int(choice) - 1].value
        else:
            name = choice
        envelope = run_switch(self.orchestrator, name)
        if envelope["success"]:
            self.console.print(f"\n{envelope['message']}")
        else:
            self.console.print(f"[red]Error switching model:[/red] {envelope['error']}")

    def _show_health(self) -> None:
        status = get_health_status(self.orchestrator.selector, self.sink)
        self.console.print("\nSystem Health Status:")
        self.console.print_json(json.dumps(status))

    def _show_modes(self) -> None:
        self.console.print("\nAvailable modes:")
        self.console.print("1. Generator - Generate specific content types")
        self.console.print("2. Chat - Free conversation mode")
        self.console.print('Type "exit" to quit the program')
        self.console.print('Type "/help" for available commands\n')

    def _show_menu(self) -> None:
        self.console.print("\n[bold]=== Content Generator Mode ===[/bold]")
        self.console.print("Select content type to generate:")
        for key, (_, label, _) in _MENU.items():
            self.console.print(f"{key}. {label}")
        self.console.print('Type "exit" to return to main menu, "/help" for available commands\n')

    def _show_help(self) -> None:
        self.console.print("\nAvailable commands:")
        self.console.print(f"{MODEL}  - Switch between AI models")
        self.console.print(f"{HEALTH} - Show current system health")
        self.console.print(f"{EXIT}    - Exit current mode or program")
        self.console.print(f"{HELP}   - Show this help message\n")
