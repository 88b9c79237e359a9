"""
Normalization of free-form provider text into structured content.

Providers are asked for bare JSON but often wrap it in a markdown code
fence or surround it with prose. Each content kind has its own normalizer
so a parse failure is reported as a MalformedResponseError for that kind,
carrying the raw text. A malformed payload is never turned into an empty
result.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable

from ..core.types import GenerationKind, KeywordItem, MetaDescription
from ..errors import MalformedResponseError

logger = logging.getLogger(__name__)

META_DESCRIPTION_LIMIT = 160

_LEADING_FENCE_RE = re.compile(r"^```[A-Za-z0-9_-]*[ \t]*\n?")
_TRAILING_FENCE_RE = re.compile(r"\n?[ \t]*```$")

# Top-level JSON shape expected per kind, used when recovering JSON from prose.
_OPENERS = {
    GenerationKind.KEYWORDS.value: "[",
    GenerationKind.TITLE.value: "[",
    GenerationKind.META.value: "{",
}


def strip_code_fence(text: str) -> str:
    """Remove a wrapping markdown code fence and surrounding whitespace."""
    stripped = text.strip()
    stripped = _LEADING_FENCE_RE.sub("", stripped, count=1)
    stripped = _TRAILING_FENCE_RE.sub("", stripped, count=1)
    return stripped.strip()


def parse_structured(text: str, kind: GenerationKind | str) -> Any:
    """Parse provider text as JSON after removing formatting artifacts.

    Tries, in order: the fence-stripped text, a fenced block embedded in
    prose, and the outermost JSON array or object snippet.
    """
    kind_name = _kind_name(kind)
    if not text or not text.strip():
        raise MalformedResponseError(kind_name, text or "", "empty response")

    candidates = [strip_code_fence(text)]
    fenced = _extract_fenced_block(text)
    if fenced:
        candidates.append(fenced)
    snippet = _extract_json_snippet(text, _OPENERS.get(kind_name))
    if snippet:
        candidates.append(snippet)

    for candidate in candidates:
        try:
            return json.loads(candidate)
        except json.JSONDecodeError:
            continue
    raise MalformedResponseError(kind_name, text)


def normalize_keywords(text: str) -> list[KeywordItem]:
    data = parse_structured(text, GenerationKind.KEYWORDS)
    if not isinstance(data, list):
        raise MalformedResponseError("keywords", text, "expected a JSON array")

    items: list[KeywordItem] = []
    for entry in data:
        if not isinstance(entry, dict):
            raise MalformedResponseError("keywords", text, "expected keyword objects")
        keyword = entry.get("keyword")
        if not isinstance(keyword, str):
            raise MalformedResponseError("keywords", text, "missing keyword field")
        relevance = _as_number(entry.get("relevance"))
        if relevance is None:
            raise MalformedResponseError("keywords", text, "missing numeric relevance field")
        items.append(KeywordItem(keyword=keyword, relevance=relevance))
    return items


def normalize_titles(text: str) -> list[str]:
    data = parse_structured(text, GenerationKind.TITLE)
    if not isinstance(data, list) or not all(isinstance(title, str) for title in data):
        raise MalformedResponseError("title", text, "expected a JSON array of strings")
    return data


def normalize_meta(text: str) -> MetaDescription:
    data = parse_structured(text, GenerationKind.META)
    if not isinstance(data, dict) or not isinstance(data.get("description"), str):
        raise MalformedResponseError("meta", text, "expected an object with a description")
    description = data["description"]
    if len(description) > META_DESCRIPTION_LIMIT:
        logger.warning(
            "Meta description exceeds %d characters (%d); passing through unmodified",
            META_DESCRIPTION_LIMIT,
            len(description),
        )
    return MetaDescription(description=description)


def normalize_content(text: str) -> str:
    # Content is prose; it is never required to be structured data.
    return text


_NORMALIZERS: dict[GenerationKind, Callable[[str], Any]] = {
    GenerationKind.KEYWORDS: normalize_keywords,
    GenerationKind.TITLE: normalize_titles,
    GenerationKind.META: normalize_meta,
    GenerationKind.CONTENT: normalize_content,
}


def normalize(kind: GenerationKind, text: str) -> Any:
    """Normalize provider text for a single content kind."""
    normalizer = _NORMALIZERS.get(kind)
    if normalizer is None:
        raise ValueError(f"No normalizer for kind: {kind.value}")
    return normalizer(text)


def _kind_name(kind: GenerationKind | str) -> str:
    return kind.value if isinstance(kind, GenerationKind) else str(kind)


def _as_number(value: Any) -> int | float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
        return int(number) if number.is_integer() else number
    return None


def _extract_fenced_block(content: str) -> str | None:
    lines = content.splitlines()
    start_idx = None
    for idx, line in enumerate(lines):
        if line.strip().startswith("```"):
            start_idx = idx + 1
            break
    if start_idx is None:
        return None
    for idx in range(start_idx, len(lines)):
        if lines[idx].strip().startswith("```"):
            snippet = "\n".join(lines[start_idx:idx]).strip()
            return snippet or None
    return None


def _extract_json_snippet(content: str, opener: str | None = None) -> str | None:
    openers = (opener,) if opener else ("[", "{")
    starts = [pos for pos in (content.find(char) for char in openers) if pos != -1]
    if not starts:
        return None
    start = min(starts)
    closer = "]" if content[start] == "[" else "}"
    end = content.rfind(closer)
    if end <= start:
        return None
    return content[start : end + 1]
