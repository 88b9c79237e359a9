"""Prompt loading and rendering helpers for LLM providers."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from ..config import GenerationConfig
from ..core.types import GenerationKind


_PROMPT_DIR = Path(__file__).resolve().parent.parent / "prompts"

_TEMPLATE_NAMES = {
    GenerationKind.KEYWORDS: "keywords",
    GenerationKind.TITLE: "title",
    GenerationKind.META: "meta",
    GenerationKind.CONTENT: "content",
}


@lru_cache(maxsize=None)
def _load_template(name: str) -> str:
    path = _PROMPT_DIR / f"{name}.md"
    return path.read_text(encoding="utf-8").strip()


def _render_template(name: str, **values: object) -> str:
    template = _load_template(name)
    return template.format(**values)


def build_prompt(kind: GenerationKind, topic: str, cfg: GenerationConfig) -> str:
    """Render the prompt for a single-kind generation."""
    name = _TEMPLATE_NAMES.get(kind)
    if name is None:
        raise ValueError(f"No prompt template for kind: {kind.value}")
    return _render_template(
        name,
        topic=topic.strip(),
        keyword_count=cfg.keyword_count,
        title_max_chars=cfg.title_max_chars,
        meta_max_chars=cfg.meta_max_chars,
    )
