# a11y_scout/crawler/renderer.py
"""
Headless browser adapter backed by Playwright (async API).

One Chromium instance lives for the whole crawl; every :meth:`render` call
gets its own page, which is closed again even when navigation fails.
"""
from __future__ import annotations

from typing import Any, Optional, Protocol

from playwright.async_api import Browser, Playwright, async_playwright
from playwright.async_api import Error as PlaywrightError

from a11y_scout.crawler.models import RenderedPage
from a11y_scout.exceptions import RenderError, SetupError
from a11y_scout.logger import logger

__all__ = ("Renderer", "PlaywrightRenderer")

_LAUNCH_ARGS = ["--no-sandbox", "--disable-setuid-sandbox", "--disable-dev-shm-usage"]


class Renderer(Protocol):
    async def start(self) -> None: ...

    async def render(self, url: str, timeout_ms: int) -> RenderedPage: ...

    async def close(self) -> None: ...


class PlaywrightRenderer:
    """Renders pages in headless Chromium and returns the final DOM."""

    def __init__(
        self,
        *,
        viewport_width: int = 1280,
        viewport_height: int = 800,
        wait_until: str = "networkidle",
    ) -> None:
        self.viewport = {"width": viewport_width, "height": viewport_height}
        self.wait_until = wait_until
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None

    @classmethod
    def from_config(cls, config: Any) -> PlaywrightRenderer:
        return cls(viewport_width=config.viewport_width, viewport_height=config.viewport_height)

    async def start(self) -> None:
        if self._browser is not None:
            return
        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(headless=True, args=_LAUNCH_ARGS)
        except Exception as exc:
            await self.close()
            raise SetupError("browser", exc) from exc
        logger.info("Browser launched (Chromium %s)", self._browser.version)

    async def render(self, url: str, timeout_ms: int) -> RenderedPage:
        if self._browser is None:
            raise RenderError(url, "browser is not started")
        page = None
        try:
            page = await self._browser.new_page(viewport=self.viewport)
            await page.goto(url, wait_until=self.wait_until, timeout=timeout_ms)
            return RenderedPage(url=page.url, html=await page.content())
        except PlaywrightError as exc:
            raise RenderError(url, exc) from exc
        finally:
            if page is not None:
                try:
                    await page.close()
                except PlaywrightError as exc:
                    logger.debug("Closing page for %s failed: %s", url, exc)

    async def close(self) -> None:
        browser, self._browser = self._browser, None
        playwright, self._playwright = self._playwright, None
        if browser is not None:
            try:
                await browser.close()
            except PlaywrightError as exc:
                logger.warning("Closing browser failed: %s", exc)
        if playwright is not None:
            await playwright.stop()
