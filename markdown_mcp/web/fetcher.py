"""Static page fetcher (no JavaScript) for simple server-rendered pages."""

from typing import Optional

import httpx
from soupsieve import SelectorSyntaxError

from markdown_mcp.extract.dom import parse_html
from markdown_mcp.utils.config import settings
from markdown_mcp.utils.logger import get_logger
from markdown_mcp.web.renderer import NavigationError, RenderedDocument, Renderer

log = get_logger(__name__)


class HttpRenderer(Renderer):
    """GET a URL and parse the body as served."""

    def __init__(self, user_agent: Optional[str] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._user_agent = user_agent or settings.user_agent
        self._transport = transport

    async def render(
        self,
        url: str,
        wait_for_selector: Optional[str] = None,
        timeout: int = settings.navigation_timeout_ms,
    ) -> RenderedDocument:
        try:
            async with httpx.AsyncClient(
                timeout=timeout / 1000,
                follow_redirects=True,
                headers={"User-Agent": self._user_agent},
                transport=self._transport,
            ) as client:
                resp = await client.get(url)
                resp.raise_for_status()
        except httpx.TimeoutException as exc:
            raise NavigationError(f"Timed out loading {url}") from exc
        except httpx.HTTPError as exc:
            log.warning("Failed to fetch %s", url)
            raise NavigationError(str(exc)) from exc

        root = parse_html(resp.text)
        if wait_for_selector:
            try:
                found = root.select_one(wait_for_selector)
            except SelectorSyntaxError as exc:
                raise NavigationError(f"Invalid selector {wait_for_selector!r}: {exc}") from exc
            if found is None:
                raise NavigationError(f"Selector {wait_for_selector!r} not found on {url}")
        return RenderedDocument(url=str(resp.url), root=root)
