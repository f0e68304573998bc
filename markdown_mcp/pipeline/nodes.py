"""Node implementations for the extraction pipeline.

Each function receives the full ``ExtractionState`` and returns a *partial*
dict with only the keys it updates.
"""

import time
from typing import Any, Dict

from markdown_mcp.extract.converter import convert_to_markdown
from markdown_mcp.extract.locator import locate_main_content
from markdown_mcp.extract.normalizer import EMPTY_CONTENT_MESSAGE, clean_markdown, fallback_text, needs_fallback
from markdown_mcp.extract.options import ExtractOptions
from markdown_mcp.pipeline.state import ExtractionState
from markdown_mcp.security.guardrails import validate_options, validate_url
from markdown_mcp.utils.logger import get_logger, log_extraction
from markdown_mcp.web import create_renderer
from markdown_mcp.web.renderer import Renderer, RenderError

log = get_logger(__name__)

# Shared renderer (created on first use so import-time side effects are avoided).
_renderer: Renderer | None = None


def get_renderer() -> Renderer:
    global _renderer
    if _renderer is None:
        _renderer = create_renderer()
    return _renderer


def set_renderer(renderer: Renderer | None) -> None:
    """Replace the shared renderer (the previous one is not closed)."""
    global _renderer
    _renderer = renderer


async def shutdown_renderer() -> None:
    """Close and forget the shared renderer, if one was ever created."""
    global _renderer
    if _renderer is not None:
        await _renderer.aclose()
        _renderer = None


def _options(state: ExtractionState) -> ExtractOptions:
    return state.get("options") or ExtractOptions()


# ---- Nodes ---------------------------------------------------------------


def validate_node(state: ExtractionState) -> Dict[str, Any]:
    """Reject malformed URLs and options before anything is launched."""
    options = _options(state)
    ok, reason = validate_url(state.get("url", ""))
    if ok:
        ok, reason = validate_options(options.timeout, options.wait_for_selector)
    if not ok:
        log.warning("Rejected request for %r: %s", state.get("url"), reason)
        return {"error": reason, "route_taken": "error"}
    return {"start_time": state.get("start_time") or time.time()}


def error_check_node(state: ExtractionState) -> str:
    """Conditional edge: 'error' once any node has recorded a failure."""
    return "error" if state.get("error") else "ok"


async def render_node(state: ExtractionState) -> Dict[str, Any]:
    """Load the page through the shared renderer."""
    options = _options(state)
    try:
        document = await get_renderer().render(
            state["url"],
            wait_for_selector=options.wait_for_selector,
            timeout=options.timeout,
        )
    except RenderError as exc:
        log.warning("Render failed for %s: %s", state["url"], exc)
        return {"error": str(exc), "route_taken": "error"}
    return {"document": document}


def locate_node(state: ExtractionState) -> Dict[str, Any]:
    """Pick the main content element of the rendered document."""
    content = locate_main_content(state["document"].root)
    log.debug("Content element: <%s>", content.name)
    return {"content": content}


def convert_node(state: ExtractionState) -> Dict[str, Any]:
    """Convert the content element to raw Markdown."""
    raw = convert_to_markdown(
        state["content"],
        _options(state),
        base_url=state["document"].url,
    )
    return {"raw_markdown": raw}


def normalize_node(state: ExtractionState) -> Dict[str, Any]:
    """Collapse whitespace in the structural Markdown."""
    return {"markdown": clean_markdown(state.get("raw_markdown") or "")}


def route_decision_node(state: ExtractionState) -> str:
    """Conditional edge: 'fallback' when the structural result is too short."""
    return "fallback" if needs_fallback(state.get("markdown") or "") else "structured"


def fallback_node(state: ExtractionState) -> Dict[str, Any]:
    """Replace a too-short structural result with the element's plain text."""
    plain = fallback_text(state["content"])
    if not plain:
        return {"route_taken": "structured"}
    log.info("Structural conversion too short -- using plain-text fallback")
    return {"markdown": plain, "route_taken": "fallback"}


def finalize_node(state: ExtractionState) -> Dict[str, Any]:
    """Apply the empty-content sentinel, log the extraction and stamp end_time."""
    end = time.time()
    elapsed_ms = (end - state.get("start_time", end)) * 1000
    error = state.get("error")
    markdown = state.get("markdown") or ""
    route = state.get("route_taken") or "structured"

    if not error and not markdown:
        markdown = EMPTY_CONTENT_MESSAGE
        route = "empty"

    log_extraction(
        url=state.get("url", ""),
        route=route,
        chars=0 if error else len(markdown),
        response_time_ms=elapsed_ms,
        error=error,
    )
    log.info("Done -- route=%s, chars=%d, time=%.0fms", route, len(markdown), elapsed_ms)
    return {"markdown": None if error else markdown, "route_taken": route, "end_time": end}
