"""Pipeline module -- render -> locate -> convert -> normalize as a LangGraph."""

import time
from typing import Optional

from markdown_mcp.extract.options import ExtractOptions
from markdown_mcp.pipeline.graph import build_graph
from markdown_mcp.pipeline.nodes import get_renderer, set_renderer, shutdown_renderer
from markdown_mcp.pipeline.state import ExtractionState


class ExtractionError(Exception):
    """Raised by ``get_page_markdown``; the message is ready to show to callers."""


_graph = None


def _get_graph():
    global _graph
    if _graph is None:
        _graph = build_graph()
    return _graph


async def get_page_markdown(url: str, options: Optional[ExtractOptions] = None) -> str:
    """Render *url* and return its main content as Markdown.

    Returns the empty-content sentinel when nothing could be extracted and
    raises ``ExtractionError`` when the request is invalid or rendering failed.
    """
    initial_state: ExtractionState = {
        "url": url,
        "options": options or ExtractOptions(),
        "document": None,
        "content": None,
        "raw_markdown": None,
        "markdown": None,
        "route_taken": "",
        "error": None,
        "start_time": time.time(),
        "end_time": None,
    }
    result = await _get_graph().ainvoke(initial_state)
    if result.get("error"):
        raise ExtractionError(f"Error extracting markdown: {result['error']}")
    return result["markdown"]


__all__ = [
    "ExtractionError",
    "ExtractionState",
    "build_graph",
    "get_page_markdown",
    "get_renderer",
    "set_renderer",
    "shutdown_renderer",
]
