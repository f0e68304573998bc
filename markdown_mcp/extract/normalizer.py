"""Whitespace normalization and the plain-text fallback."""

import re
from typing import Optional

from bs4 import Tag

from markdown_mcp.extract.dom import text_content
from markdown_mcp.utils.config import settings

EMPTY_CONTENT_MESSAGE = "No content could be extracted from this page."

_SPACES = re.compile(r" {2,}")
_BLANK_LINES = re.compile(r"\n{3,}")


def clean_markdown(raw: str) -> str:
    """Collapse space runs and blank-line runs, then trim."""
    text = _SPACES.sub(" ", raw)
    text = _BLANK_LINES.sub("\n\n", text)
    return text.strip()


def needs_fallback(text: str, min_chars: Optional[int] = None) -> bool:
    threshold = settings.min_markdown_chars if min_chars is None else min_chars
    return not text or len(text) < threshold


def fallback_text(element: Tag) -> str:
    """Every non-empty line of the element's raw text, separated by blank lines."""
    lines = (line.strip() for line in text_content(element).strip().split("\n"))
    return "\n\n".join(line for line in lines if line)


def normalize(raw: str, content_element: Optional[Tag] = None, min_chars: Optional[int] = None) -> str:
    """Clean *raw* Markdown; fall back to plain text when too little survived.

    The fallback only replaces the structural result when the content element
    has some text of its own. The result may still be empty; callers map that
    to ``EMPTY_CONTENT_MESSAGE``.
    """
    result = clean_markdown(raw)
    if content_element is not None and needs_fallback(result, min_chars):
        plain = fallback_text(content_element)
        if plain:
            result = plain
    return result
