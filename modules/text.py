"""Cleaning of free text typed in by customers (names, addresses, notes, messages)."""

from __future__ import annotations

import html
from typing import Optional

import bleach


def sanitize_text(text: Optional[str], max_length: Optional[int] = None) -> str:
    """
    Strip surrounding whitespace and every HTML tag, then cap the length.

    Tag contents survive as plain text ("<b>Asha</b>" -> "Asha"). The
    result is plain text for JSON, not HTML: bleach's entity escaping is
    undone, so "Smith & Sons" and "price < 1000" come back unchanged.

    Args:
        text: Raw input; None and "" give ""
        max_length: Characters to keep (None keeps everything)
    """
    if not text:
        return ""

    cleaned = html.unescape(bleach.clean(text.strip(), tags=[], strip=True)).strip()
    return cleaned[:max_length] if max_length else cleaned
