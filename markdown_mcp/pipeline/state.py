"""Pipeline state schema -- the single TypedDict that flows through every node."""

from typing import Optional, TypedDict

from bs4 import Tag

from markdown_mcp.extract.options import ExtractOptions
from markdown_mcp.web.renderer import RenderedDocument


class ExtractionState(TypedDict, total=False):
    """State carried across the LangGraph state machine.

    Every node receives the full state and returns a *partial* dict with only
    the keys it wants to update.
    """

    # Input
    url: str
    options: ExtractOptions

    # Rendering
    document: Optional[RenderedDocument]

    # Extraction
    content: Optional[Tag]
    raw_markdown: Optional[str]
    markdown: Optional[str]

    # Routing / observability
    route_taken: str          # "structured" | "fallback" | "empty" | "error"
    error: Optional[str]
    start_time: float
    end_time: Optional[float]
