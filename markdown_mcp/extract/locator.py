"""Content locator -- picks the element most likely to hold the main content."""

from typing import Optional

from bs4 import Tag

from markdown_mcp.extract.dom import document_body, text_content
from markdown_mcp.utils.config import settings
from markdown_mcp.utils.logger import get_logger

log = get_logger(__name__)

# Most specific first; Confluence layouts lead, ``body`` is the catch-all.
MAIN_CONTENT_SELECTORS = [
    "#main-content",
    ".wiki-content",
    '[data-test-id="wiki-content"]',
    'main[role="main"]',
    "main",
    "article",
    '[role="main"]',
    ".main-content",
    ".content",
    "#content",
    ".post-content",
    ".article-content",
    "body",
]


def locate_main_content(root: Tag, min_chars: Optional[int] = None) -> Tag:
    """Return the first selector match whose trimmed text exceeds *min_chars*.

    Only the first element matching each selector is considered. When nothing
    qualifies the document body is returned unconditionally.
    """
    threshold = settings.min_content_chars if min_chars is None else min_chars
    for selector in MAIN_CONTENT_SELECTORS:
        element = root.select_one(selector)
        if element is not None and len(text_content(element).strip()) > threshold:
            log.debug("Main content matched selector %r", selector)
            return element

    log.debug("No selector qualified; using document body")
    return document_body(root)
