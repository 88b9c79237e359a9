"""Tests for the Typer command-line entry points."""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from seo_generator.cli import app

runner = CliRunner()


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ("GEMINI_API_KEY", "OPENAI_API_KEY", "CLAUDE_API_KEY"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


def test_providers_lists_every_tag(clean_env, monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")

    result = runner.invoke(app, ["providers"])

    assert result.exit_code == 0
    for tag in ("GEMINI", "OPENAI", "CLAUDE"):
        assert tag in result.output


def test_generate_without_key_exits_with_failure_envelope(clean_env):
    result = runner.invoke(app, ["generate", "title", "--topic", "AI in healthcare"])

    assert result.exit_code == 1
    assert "Failed to generate title" in result.output
    assert "API key not configured" in result.output
    assert not (clean_env / "data" / "generations.jsonl").exists()


def test_generate_with_unknown_provider_exits(clean_env):
    result = runner.invoke(
        app, ["generate", "meta", "--topic", "AI in healthcare", "--provider", "llama"]
    )

    assert result.exit_code == 1
    assert "Failed to switch model" in result.output


def test_health_prints_json(clean_env):
    result = runner.invoke(app, ["health"])

    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["status"] == "degraded"
    assert payload["active_provider"] == "GEMINI"
