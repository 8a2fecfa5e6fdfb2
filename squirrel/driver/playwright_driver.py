"""Playwright implementation of the browser driver."""

from __future__ import annotations

import functools
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from playwright.async_api import BrowserContext, ElementHandle, Page, async_playwright
from playwright.async_api import Error as PlaywrightError

from squirrel.core.config import Config, launch_args
from squirrel.core.errors import DriverError
from squirrel.driver.base import BrowserDriver

logger = logging.getLogger(__name__)


def _protocol(method):
    """Re-raise Playwright errors from ``method`` as ``DriverError``."""

    @functools.wraps(method)
    async def wrapper(self, *args, **kwargs):
        try:
            return await method(self, *args, **kwargs)
        except PlaywrightError as exc:
            raise DriverError(f"{method.__name__} failed: {exc.message}") from exc

    return wrapper


class PlaywrightDriver(BrowserDriver):
    """
    Drives one Playwright browser context.

    Window handles are Playwright ``Page`` objects; the focused one is the
    page every page-level call goes to.
    """

    def __init__(self, context: BrowserContext, page: Page) -> None:
        self._context = context
        self._page: Page | None = page

    @property
    def page(self) -> Page:
        if self._page is None or self._page.is_closed():
            raise DriverError("No active window: switch to a window first")
        return self._page

    @_protocol
    async def goto(self, url: str) -> None:
        await self.page.goto(url)

    @_protocol
    async def back(self) -> None:
        await self.page.go_back()

    @_protocol
    async def refresh(self) -> None:
        await self.page.reload()

    async def current_url(self) -> str:
        return self.page.url

    @_protocol
    async def find_all(self, selector: str) -> list[ElementHandle]:
        return await self.page.query_selector_all(selector)

    @_protocol
    async def click(self, element: ElementHandle) -> None:
        await element.click()

    @_protocol
    async def send_keys(self, element: ElementHandle, text: str) -> None:
        await element.focus()
        await self.page.keyboard.type(text)

    @_protocol
    async def is_enabled(self, element: ElementHandle) -> bool:
        return await element.is_enabled()

    @_protocol
    async def attribute(self, element: ElementHandle, name: str) -> str | None:
        return await element.get_attribute(name)

    @_protocol
    async def html(self, element: ElementHandle, inner: bool) -> str:
        if inner:
            return await element.inner_html()
        return await element.evaluate("(el) => el.outerHTML")

    @_protocol
    async def screenshot(self, element: ElementHandle) -> bytes:
        # screenshot() waits for visibility; a collapsed box would stall until the timeout
        box = await element.bounding_box()
        if box is None or box["width"] == 0 or box["height"] == 0:
            raise DriverError("screenshot failed: element has zero width or height")
        return await element.screenshot()

    @_protocol
    async def screenshot_page(self) -> bytes:
        return await self.page.screenshot()

    @_protocol
    async def execute_script(self, script: str, arg: Any = None) -> Any:
        return await self.page.evaluate(script, arg)

    @_protocol
    async def get_window_size(self) -> tuple[int, int]:
        size = self.page.viewport_size
        if size is None:
            # Remote browsers attached over CDP have no fixed viewport
            width, height = await self.page.evaluate("() => [window.innerWidth, window.innerHeight]")
            return int(width), int(height)
        return size["width"], size["height"]

    @_protocol
    async def set_window_size(self, width: int, height: int) -> None:
        await self.page.set_viewport_size({"width": width, "height": height})

    @_protocol
    async def open_new_window(self, inherit_context: bool = True) -> Page:
        if inherit_context or self._context.browser is None:
            return await self._context.new_page()
        context = await self._context.browser.new_context()
        return await context.new_page()

    @_protocol
    async def switch_to_window(self, handle: Page) -> None:
        if handle.is_closed():
            raise DriverError("Cannot switch to a closed window")
        self._page = handle
        await handle.bring_to_front()

    @_protocol
    async def close_current_window(self) -> None:
        page = self.page
        self._page = None
        await page.close()

    async def list_window_handles(self) -> list[Page]:
        browser = self._context.browser
        contexts = browser.contexts if browser is not None else [self._context]
        return [p for c in contexts for p in c.pages if not p.is_closed()]


@asynccontextmanager
async def open_driver(config: Config) -> AsyncIterator[PlaywrightDriver]:
    """
    Start a browser session for ``config`` and tear it down on exit.

    Connects over CDP when ``config.browser_endpoint`` is set, otherwise
    launches a local Chromium.
    """
    async with async_playwright() as pw:
        try:
            if config.is_remote:
                logger.info("Connecting to browser at %s", config.browser_endpoint)
                browser = await pw.chromium.connect_over_cdp(config.browser_endpoint)
            else:
                args = launch_args(config)
                logger.info("Launching Chromium with args: %s", args)
                browser = await pw.chromium.launch(headless=config.headless_browser, args=args)
            viewport = None
            if config.window_size is not None:
                viewport = {"width": config.window_size[0], "height": config.window_size[1]}
            context = await browser.new_context(viewport=viewport)
            page = await context.new_page()
        except PlaywrightError as exc:
            raise DriverError(f"Failed establishing the browser session: {exc.message}") from exc
        try:
            yield PlaywrightDriver(context, page)
        finally:
            try:
                await browser.close()
            except PlaywrightError as exc:
                logger.warning("Failed closing the browser session: %s", exc.message)
            else:
                logger.info("Closed the browser session")
