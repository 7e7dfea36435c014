"""Filename sanitization helpers for IO module."""

from __future__ import annotations

import re

_INVALID_CHARS_RE = re.compile(r"[^A-Za-z0-9._-]")


def sanitize_name(value: str, fallback: str = "run") -> str:
    """Sanitize a dataset identifier for use inside a filename.

    Replaces spaces with underscores, strips invalid chars,
    falls back if result is empty.

    Args:
        value: Raw string to sanitize.
        fallback: Value to use if result is empty after cleaning.

    Returns:
        A name made of ``[A-Za-z0-9._-]``, at most 100 chars.
    """
    result = value.strip()
    result = result.replace(" ", "_")
    result = _INVALID_CHARS_RE.sub("", result)

    # Strip leading dots so the file is never hidden or relative
    result = result.lstrip(".")

    if not result:
        result = fallback

    return result[:100]
