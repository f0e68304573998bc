"""Extract module -- content location, Markdown conversion, normalization."""

from typing import Optional

from bs4 import Tag

from markdown_mcp.extract.classifier import flatten_text, should_skip
from markdown_mcp.extract.converter import MarkdownConverter, TagRule, classify, convert_to_markdown
from markdown_mcp.extract.dom import parse_html
from markdown_mcp.extract.locator import MAIN_CONTENT_SELECTORS, locate_main_content
from markdown_mcp.extract.normalizer import EMPTY_CONTENT_MESSAGE, clean_markdown, normalize
from markdown_mcp.extract.options import ConversionContext, ExtractOptions


def document_to_markdown(
    root: Tag,
    options: Optional[ExtractOptions] = None,
    base_url: Optional[str] = None,
) -> str:
    """Locate, convert and normalize an already-parsed document."""
    content = locate_main_content(root)
    raw = convert_to_markdown(content, options, base_url=base_url)
    return normalize(raw, content) or EMPTY_CONTENT_MESSAGE


def html_to_markdown(
    html: str,
    options: Optional[ExtractOptions] = None,
    base_url: Optional[str] = None,
) -> str:
    """Convert an HTML string to clean Markdown."""
    return document_to_markdown(parse_html(html), options, base_url=base_url)


__all__ = [
    "EMPTY_CONTENT_MESSAGE",
    "MAIN_CONTENT_SELECTORS",
    "ConversionContext",
    "ExtractOptions",
    "MarkdownConverter",
    "TagRule",
    "classify",
    "clean_markdown",
    "convert_to_markdown",
    "document_to_markdown",
    "flatten_text",
    "html_to_markdown",
    "locate_main_content",
    "normalize",
    "parse_html",
    "should_skip",
]
