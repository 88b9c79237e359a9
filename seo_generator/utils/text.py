"""Slug helpers for naming generation records."""

from __future__ import annotations

import hashlib
import re


def slugify(text: str) -> str:
    """Convert text to URL-safe slug.

    Args:
        text: The text to slugify

    Returns:
        A lowercase, hyphenated slug limited to 50 characters
    """
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")
    if not slug:
        slug = "untitled"
    return slug[:50].rstrip("-")


def short_hash(text: str) -> str:
    """Return first 5 characters of the MD5 hash of text."""
    return hashlib.md5(text.encode()).hexdigest()[:5]
