"""Tests for the interactive terminal session."""

from __future__ import annotations

import io
import json

from rich.console import Console

from seo_generator.core.types import GenerationKind, ProviderTag
from seo_generator.interactive import InteractiveSession
from seo_generator.storage.records import JsonlRecordSink


def _scripted(answers):
    """Return answers in order, then behave like closed input."""
    replies = iter(answers)

    def ask(prompt):
        try:
            return next(replies)
        except StopIteration:
            raise EOFError from None

    return ask


def _session(orchestrator, answers, sink=None):
    output = io.StringIO()
    console = Console(file=output, width=120, color_system=None)
    session = InteractiveSession(
        orchestrator, sink=sink, console=console, ask=_scripted(answers)
    )
    return session, output


def test_session_selects_model_then_generates_in_generator_mode(orchestrator, tmp_path):
    sink = JsonlRecordSink(tmp_path / "generations.jsonl")
    answers = ["2", "1", "1", "AI in healthcare", "exit", "exit"]
    session, output = _session(orchestrator, answers, sink=sink)

    session.run()

    text = output.getvalue()
    assert "Welcome to Content Generation CLI!" in text
    assert "Switched to OpenAI model." in text
    assert "Generating keywords with OPENAI" in text
    assert '"keyword": "x"' in text
    assert text.rstrip().endswith("Goodbye!")
    record = json.loads(sink.path.read_text(encoding="utf-8").splitlines()[0])
    assert record["provider"] == "OPENAI"


def test_blank_initial_selection_keeps_default_model(orchestrator):
    session, output = _session(orchestrator, ["", "exit"])

    session.run()

    assert "Keeping current model (GEMINI)." in output.getvalue()
    assert orchestrator.selector.active_tag is ProviderTag.GEMINI


def test_chat_mode_sends_each_line_as_content(orchestrator, fake_factory):
    answers = ["", "2", "AI in healthcare", "/model", "2", "remote work", "exit", "exit"]
    session, output = _session(orchestrator, answers)

    session.run()

    text = output.getvalue()
    assert "=== Chat Mode ===" in text
    assert "AI: Introduction" in text
    assert fake_factory.calls == [
        (ProviderTag.GEMINI, GenerationKind.CONTENT),
        (ProviderTag.OPENAI, GenerationKind.CONTENT),
    ]
    assert "Goodbye!" in text


def test_chat_mode_reports_errors_and_ignores_blank_lines(orchestrator, fake_factory):
    fake_factory.errors[GenerationKind.CONTENT] = ValueError("provider down")
    session, output = _session(orchestrator, [])

    assert session.handle_chat("") is True
    assert session.handle_chat("AI in healthcare") is True
    assert session.handle_chat("EXIT") is False

    assert "Error in chat: Failed to generate content: provider down" in output.getvalue()
    assert len(fake_factory.calls) == 1


def test_mode_menu_rejects_unknown_mode(orchestrator):
    session, output = _session(orchestrator, [])

    assert session.handle_mode("3") is True
    assert session.handle_mode("/help") is True
    assert session.handle_mode("exit") is False

    text = output.getvalue()
    assert "Invalid selection. Please choose 1 or 2." in text
    assert "/model" in text


def test_generate_all_asks_for_keyword_selection(orchestrator, fake_factory):
    session, output = _session(orchestrator, ["AI in healthcare", "y, z"])

    assert session.handle("5") is True

    start = output.getvalue().index("{")
    data = json.loads(output.getvalue()[start:])
    assert data["keywords"] == [{"keyword": "y", "relevance": 7}]
    assert len(fake_factory.calls) == 4


def test_model_command_switches_by_number_or_name(orchestrator):
    session, output = _session(orchestrator, ["2", "gemini"])

    session.handle("/model")
    assert orchestrator.selector.active_tag is ProviderTag.OPENAI
    assert "Switched to OpenAI model." in output.getvalue()

    session.handle("/model")
    assert orchestrator.selector.active_tag is ProviderTag.GEMINI


def test_model_command_reports_unavailable_provider(orchestrator):
    session, output = _session(orchestrator, ["3"])

    session.handle("/model")

    assert "Error switching model:" in output.getvalue()
    assert "API key not configured" in output.getvalue()
    assert orchestrator.selector.active_tag is ProviderTag.GEMINI


def test_failed_generation_prints_error(orchestrator, fake_factory):
    fake_factory.responses[GenerationKind.META] = "not json"
    session, output = _session(orchestrator, ["AI in healthcare"])

    session.handle("3")

    assert "Failed to generate meta:" in output.getvalue()


def test_invalid_option_and_empty_topic(orchestrator, fake_factory):
    session, output = _session(orchestrator, ["   "])

    assert session.handle("9") is True
    assert session.handle("2") is True

    text = output.getvalue()
    assert "Invalid option. Please choose 1-5." in text
    assert "Topic cannot be empty." in text
    assert fake_factory.calls == []


def test_health_and_help_commands(orchestrator):
    session, output = _session(orchestrator, [])

    session.handle("/help")
    session.handle("/health")

    text = output.getvalue()
    assert "/model" in text
    assert '"active_provider": "GEMINI"' in text


def test_exit_ends_generator_mode(orchestrator):
    session, _ = _session(orchestrator, [])
    assert session.handle("EXIT") is False


def test_closed_input_at_startup_says_goodbye(orchestrator):
    session, output = _session(orchestrator, [])
    session.run()
    assert "Goodbye!" in output.getvalue()


def test_closed_input_mid_prompt_says_goodbye(orchestrator, fake_factory):
    # Input ends while the topic prompt is open.
    session, output = _session(orchestrator, ["", "1", "5"])

    session.run()

    assert output.getvalue().rstrip().endswith("Goodbye!")
    assert fake_factory.calls == []


def test_interrupt_in_keyword_prompt_says_goodbye(orchestrator, fake_factory):
    answers = iter(["", "1", "5", "AI in healthcare"])

    def ask(prompt):
        if prompt.startswith("Keywords to keep"):
            raise KeyboardInterrupt
        return next(answers)

    output = io.StringIO()
    session = InteractiveSession(orchestrator, console=Console(file=output), ask=ask)
    session.run()

    assert "Goodbye!" in output.getvalue()
    assert fake_factory.calls == []
