"""
text.py
-------------------
Utilities for deriving titles, previews and snippets from entry text.

Used by the entry repository (derived titles), the search engine
(fallback snippets) and the CLI (previews).
"""
from __future__ import annotations

# --- Standard library imports ---
import re
from typing import Optional

# --- Local imports ---
from daybook.core.config import (
    FALLBACK_CONTEXT_CHARS,
    FALLBACK_PREVIEW_CHARS,
    PREVIEW_MAX_LENGTH,
    SNIPPET_ELLIPSIS,
    TITLE_MAX_LENGTH,
    UNTITLED,
)

_WHITESPACE = re.compile(r"\s+")


def truncate(text: str, max_length: int) -> str:
    """Cut text to max_length characters, appending an ellipsis when cut."""
    if len(text) <= max_length:
        return text
    return text[:max_length].strip() + SNIPPET_ELLIPSIS


def get_preview(content: str, max_length: int = PREVIEW_MAX_LENGTH) -> str:
    """
    input: entry content
    output: single-line preview no longer than max_length (+ ellipsis)
    process: collapses all whitespace runs to single spaces
    """
    cleaned = _WHITESPACE.sub(" ", content or "").strip()
    return truncate(cleaned, max_length)


def generate_title_from_content(content: Optional[str]) -> str:
    """
    Derive a title for an entry saved without one.

    Rules, applied to the first line of the content:
        - Up to TITLE_MAX_LENGTH characters: used as-is
        - A sentence ending within the limit: that sentence
        - Otherwise: cut at the last word boundary past 30 chars, plus '...'
        - Nothing usable: 'Untitled'

    Args:
        content: Entry body

    Returns:
        Non-empty title string

    Examples:
        >>> generate_title_from_content("Had coffee with Sam")
        'Had coffee with Sam'
        >>> generate_title_from_content("")
        'Untitled'
    """
    first_line = (content or "").strip().split("\n")[0].strip()

    if len(first_line) <= TITLE_MAX_LENGTH:
        return first_line or UNTITLED

    sentence_end = first_line.find(". ")
    if 0 < sentence_end <= TITLE_MAX_LENGTH:
        return first_line[: sentence_end + 1]

    cut = first_line[:TITLE_MAX_LENGTH]
    last_space = cut.rfind(" ")
    if last_space > 30:
        return cut[:last_space] + SNIPPET_ELLIPSIS
    return cut + SNIPPET_ELLIPSIS


def generate_snippet(
    content: str,
    query: str,
    context: int = FALLBACK_CONTEXT_CHARS,
) -> str:
    """
    Build a plain-text snippet around the first match of query.

    Matching is case-insensitive on the raw query. Edges that were cut
    get an ellipsis. Without a match, the opening of the content is used.

    Args:
        content: Text to excerpt
        query: Raw search text
        context: Characters kept on each side of the match

    Returns:
        Snippet string (possibly empty for empty content)
    """
    content = content or ""
    index = content.lower().find(query.lower()) if query else -1

    if index == -1:
        return truncate(content, FALLBACK_PREVIEW_CHARS)

    start = max(0, index - context)
    end = min(len(content), index + len(query) + context)

    snippet = content[start:end]
    if start > 0:
        snippet = SNIPPET_ELLIPSIS + snippet
    if end < len(content):
        snippet = snippet + SNIPPET_ELLIPSIS
    return snippet
