"""Abstract renderer interface and the shared RenderedDocument dataclass."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from bs4 import BeautifulSoup

from markdown_mcp.utils.config import settings


class RenderError(Exception):
    """The page could not be turned into a document tree."""


class NavigationError(RenderError):
    """Navigation failed, timed out, or the awaited selector never appeared."""


@dataclass
class RenderedDocument:
    """A parsed snapshot of a loaded page."""

    url: str  # final URL after redirects, base for relative links
    root: BeautifulSoup


class Renderer(ABC):
    """Abstract interface -- swap implementations without touching callers."""

    @abstractmethod
    async def render(
        self,
        url: str,
        wait_for_selector: Optional[str] = None,
        timeout: int = settings.navigation_timeout_ms,
    ) -> RenderedDocument:
        """Load *url* and return its document, raising ``RenderError`` on failure."""
        ...

    async def aclose(self) -> None:
        """Release any resources held by the renderer."""
        return None
