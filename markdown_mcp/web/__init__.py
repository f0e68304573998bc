"""Web module -- page rendering collaborators."""

from typing import Optional

from markdown_mcp.utils.config import settings
from markdown_mcp.web.fetcher import HttpRenderer
from markdown_mcp.web.renderer import NavigationError, RenderedDocument, Renderer, RenderError


def create_renderer(kind: Optional[str] = None) -> Renderer:
    """Build the renderer named by *kind* (defaults to ``settings.renderer``)."""
    kind = (kind or settings.renderer).lower()
    if kind == "http":
        return HttpRenderer()
    if kind == "playwright":
        # imported lazily so the http renderer works without a browser install
        from markdown_mcp.web.playwright_renderer import PlaywrightRenderer

        return PlaywrightRenderer()
    raise ValueError(f"Unknown renderer: {kind}")


__all__ = [
    "HttpRenderer",
    "NavigationError",
    "RenderError",
    "RenderedDocument",
    "Renderer",
    "create_renderer",
]
