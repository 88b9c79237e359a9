"""
Command-line interface for the SEO content generator.

Uses Typer to provide one-shot generation commands, provider and health
inspection, and an interactive terminal session. Supports loading .env
files for API key configuration.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from .config import AppConfig, load_config
from .core.types import GenerationKind
from .health import get_health_status
from .interactive import InteractiveSession
from .llm.tracing import flush, setup_langfuse
from .orchestrator import GenerationOrchestrator
from .runner import build_orchestrator, build_sink, run_generation, run_switch
from .storage.records import JsonlRecordSink
from .utils.logging import setup_llm_logger, setup_logging

try:
    from dotenv import load_dotenv
except Exception:  # noqa: BLE001
    load_dotenv = None

app = typer.Typer(
    add_completion=False,
    help="Generate SEO content with interchangeable LLM providers.",
)
console = Console()

ConfigOption = typer.Option(None, "--config", "-c", exists=True, help="YAML config file.")
LogLevelOption = typer.Option(None, "--log-level", help="Logging level.")


def _bootstrap(
    config: Path | None,
    log_level: str | None,
) -> tuple[AppConfig, GenerationOrchestrator, JsonlRecordSink]:
    # Load environment variables from .env if available
    if load_dotenv is not None:
        load_dotenv()

    cfg = load_config(str(config) if config else None)
    if log_level:
        cfg.logging.level = log_level

    log_dir = Path(cfg.logging.log_dir)
    setup_logging(cfg.logging, log_dir)
    llm_logger = setup_llm_logger(cfg.logging, log_dir)
    setup_langfuse(cfg.langfuse)
    return cfg, build_orchestrator(cfg, llm_logger=llm_logger), build_sink(cfg)


@app.command()
def generate(
    kind: GenerationKind = typer.Argument(..., help="keywords, title, meta, content or all."),
    topic: str = typer.Option(..., "--topic", "-t", help="Topic to generate content for."),
    keyword: list[str] | None = typer.Option(
        None,
        "--keyword",
        "-k",
        help="Keyword to keep when generating all (repeatable).",
    ),
    provider: str | None = typer.Option(
        None, "--provider", "-p", help="Provider to use instead of the configured default."
    ),
    config: Path | None = ConfigOption,
    log_level: str | None = LogLevelOption,
):
    """Generate one content kind for a topic and print the JSON envelope."""
    _, orchestrator, sink = _bootstrap(config, log_level)

    if provider:
        switched = run_switch(orchestrator, provider)
        if not switched["success"]:
            console.print_json(json.dumps(switched))
            raise typer.Exit(code=1)

    envelope = asyncio.run(run_generation(orchestrator, kind, topic, keyword, sink=sink))
    console.print_json(json.dumps(envelope, ensure_ascii=False))
    flush()
    if not envelope["success"]:
        raise typer.Exit(code=1)


@app.command()
def providers(
    config: Path | None = ConfigOption,
):
    """List configured providers and whether their API keys are set."""
    _, orchestrator, _ = _bootstrap(config, "WARNING")
    selector = orchestrator.selector

    table = Table(title="Providers")
    table.add_column("Tag")
    table.add_column("Name")
    table.add_column("Model")
    table.add_column("Available")
    table.add_column("Active")
    for descriptor in selector.registry.all():
        table.add_row(
            descriptor.tag.value,
            descriptor.display_name,
            descriptor.model,
            "yes" if descriptor.available else "no",
            "*" if descriptor.tag is selector.active_tag else "",
        )
    console.print(table)


@app.command()
def health(
    config: Path | None = ConfigOption,
):
    """Print a health snapshot as JSON."""
    _, orchestrator, sink = _bootstrap(config, "WARNING")
    console.print_json(json.dumps(get_health_status(orchestrator.selector, sink)))


@app.command()
def interactive(
    config: Path | None = ConfigOption,
    log_level: str | None = LogLevelOption,
):
    """Start an interactive generation session."""
    _, orchestrator, sink = _bootstrap(config, log_level)
    InteractiveSession(orchestrator, sink=sink, console=console).run()
    flush()


if __name__ == "__main__":
    app()
