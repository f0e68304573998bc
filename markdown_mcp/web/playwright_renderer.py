"""Headless Chromium renderer (default for JavaScript-heavy pages)."""

import asyncio
from typing import Optional

from playwright.async_api import Browser, Playwright, async_playwright
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from markdown_mcp.extract.dom import HIDDEN_MARKER, parse_html
from markdown_mcp.utils.config import settings
from markdown_mcp.utils.logger import get_logger
from markdown_mcp.web.renderer import NavigationError, RenderedDocument, Renderer, RenderError

log = get_logger(__name__)

# Computed style is only available in the live page, so hidden elements are
# marked there before the markup is snapshotted.
MARK_HIDDEN_SCRIPT = """(marker) => {
  for (const el of document.querySelectorAll('body *')) {
    const tag = el.tagName.toLowerCase();
    if (el.offsetParent !== null || tag === 'script' || tag === 'style') continue;
    const style = window.getComputedStyle(el);
    if (style.display === 'none' || style.visibility === 'hidden') {
      el.setAttribute(marker, '1');
    }
  }
}
"""


class PlaywrightRenderer(Renderer):
    """Render pages in one shared, lazily launched Chromium.

    Renders are serialized on the browser handle; every render gets its own
    browser context which is closed even when navigation fails.
    """

    def __init__(self, headless: Optional[bool] = None, user_agent: Optional[str] = None):
        self._headless = settings.browser_headless if headless is None else headless
        self._user_agent = user_agent or settings.user_agent
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._lock = asyncio.Lock()

    async def _ensure_browser(self) -> Browser:
        if self._browser is not None:
            return self._browser
        log.info("Starting Playwright headless browser instance")
        self._playwright = await async_playwright().start()
        try:
            self._browser = await self._playwright.chromium.launch(headless=self._headless)
        except PlaywrightError:
            await self._playwright.stop()
            self._playwright = None
            raise
        return self._browser

    async def render(
        self,
        url: str,
        wait_for_selector: Optional[str] = None,
        timeout: int = settings.navigation_timeout_ms,
    ) -> RenderedDocument:
        async with self._lock:
            try:
                browser = await self._ensure_browser()
                context = await browser.new_context(user_agent=self._user_agent)
            except PlaywrightError as exc:
                raise RenderError(f"Browser could not be started: {exc}") from exc

            try:
                page = await context.new_page()
                log.info("Navigating to %s (timeout=%dms)", url, timeout)
                await page.goto(url, wait_until="domcontentloaded", timeout=timeout)
                if wait_for_selector:
                    await page.wait_for_selector(wait_for_selector, timeout=settings.selector_timeout_ms)
                else:
                    await page.wait_for_timeout(settings.settle_delay_ms)
                await page.evaluate(MARK_HIDDEN_SCRIPT, HIDDEN_MARKER)
                html = await page.content()
                final_url = page.url
            except PlaywrightTimeoutError as exc:
                raise NavigationError(f"Timed out loading {url}: {exc}") from exc
            except PlaywrightError as exc:
                raise NavigationError(str(exc)) from exc
            finally:
                await context.close()

        return RenderedDocument(url=final_url, root=parse_html(html))

    async def aclose(self) -> None:
        async with self._lock:
            if self._browser is not None:
                log.info("Closing Playwright browser")
                await self._browser.close()
                self._browser = None
            if self._playwright is not None:
                await self._playwright.stop()
                self._playwright = None
