"""
src/slido_poll/core/browser_controller.py
Playwright browser lifecycle and the Playwright-backed page actuator.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, List, Optional

from playwright.async_api import (
    Browser,
    BrowserContext,
    ElementHandle,
    Page,
    Playwright,
    TimeoutError as PwTimeout,
    async_playwright,
)

from ..config import AppConfig, DEFAULT_TIMEOUT_MS
from ..errors import ActuatorTimeout
from ..utils.logger import debug_detail


@dataclass
class BrowserConfig:
    name: str = "chromium"
    channel: Optional[str] = None
    headed: bool = True
    timeout_ms: int = DEFAULT_TIMEOUT_MS

    @classmethod
    def from_app_config(cls, config: AppConfig) -> "BrowserConfig":
        return cls(
            name=config.browser_name,
            channel=config.channel,
            headed=not config.headless,
            timeout_ms=config.timeout_ms,
        )


class PlaywrightActuator:
    """Translate page operations to Playwright calls.

    Playwright timeouts surface as :class:`ActuatorTimeout`; everything else
    propagates untouched.
    """

    def __init__(self, page: Page) -> None:
        self.page = page

    async def goto(self, url: str, *, wait_until: str = "load") -> None:
        debug_detail(f"goto {url} (wait_until={wait_until})")
        try:
            await self.page.goto(url, wait_until=wait_until)
        except PwTimeout as exc:
            raise ActuatorTimeout(f"Timed out loading {url}") from exc

    async def wait_for(self, selector: str, *, timeout_ms: Optional[int] = None, visible: bool = False) -> None:
        state = "visible" if visible else "attached"
        try:
            await self.page.wait_for_selector(selector, state=state, timeout=timeout_ms)
        except PwTimeout as exc:
            raise ActuatorTimeout(f"Timed out waiting for {selector}") from exc

    async def pause(self, ms: int) -> None:
        await self.page.wait_for_timeout(ms)

    @asynccontextmanager
    async def expect_navigation(self, *, wait_until: str = "load") -> AsyncIterator[None]:
        try:
            async with self.page.expect_navigation(wait_until=wait_until):
                yield
        except PwTimeout as exc:
            raise ActuatorTimeout("Timed out waiting for navigation") from exc

    async def click(self, selector: str) -> None:
        try:
            await self.page.click(selector)
        except PwTimeout as exc:
            raise ActuatorTimeout(f"Timed out clicking {selector}") from exc

    async def click_element(self, handle: ElementHandle) -> None:
        # DOM click: the service's controls are not always hit-testable.
        await handle.evaluate("(el) => el.click()")

    async def type(self, selector: str, text: str, *, submit: bool = False) -> None:
        field = self.page.locator(selector).first
        try:
            await field.press_sequentially(text)
            if submit:
                await field.press("Enter")
        except PwTimeout as exc:
            raise ActuatorTimeout(f"Timed out typing into {selector}") from exc

    async def query(self, selector: str) -> Optional[ElementHandle]:
        return await self.page.query_selector(selector)

    async def query_all(self, selector: str) -> List[ElementHandle]:
        return await self.page.query_selector_all(selector)

    async def query_relative(self, handle: ElementHandle, xpath: str) -> Optional[ElementHandle]:
        return await handle.query_selector(f"xpath={xpath}")

    async def read_text(self, handle: ElementHandle) -> str:
        return await handle.inner_text()

    def current_url(self) -> str:
        return self.page.url


class BrowserController:
    """Own one Playwright browser and one page for the length of a run.

    Use as ``async with BrowserController(cfg) as actuator``; the browser is
    closed on every exit path.
    """

    def __init__(self, config: BrowserConfig) -> None:
        self.config = config
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self.context: Optional[BrowserContext] = None

    async def __aenter__(self) -> PlaywrightActuator:
        self._playwright = await async_playwright().start()
        try:
            launcher = getattr(self._playwright, self.config.name)
            launch_kwargs = {"headless": not self.config.headed}
            if self.config.channel and self.config.name == "chromium":
                launch_kwargs["channel"] = self.config.channel
            debug_detail(f"Launching {self.config.name} ({launch_kwargs})")
            self._browser = await launcher.launch(**launch_kwargs)
            self.context = await self._browser.new_context()
            self.context.set_default_timeout(self.config.timeout_ms)
            self.context.set_default_navigation_timeout(self.config.timeout_ms)
            page = await self.context.new_page()
        except BaseException:
            await self._close_after_failure()
            raise
        return PlaywrightActuator(page)

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            await self._close()
        else:
            await self._close_after_failure()
        return False

    async def _close_after_failure(self) -> None:
        # Keep the original failure; a broken browser often fails to close too.
        try:
            await self._close()
        except Exception as exc:
            debug_detail(f"Ignoring error while closing browser: {exc!r}")

    async def _close(self) -> None:
        try:
            if self._browser is not None:
                await self._browser.close()
        finally:
            self._browser = None
            self.context = None
            if self._playwright is not None:
                await self._playwright.stop()
                self._playwright = None
            debug_detail("Browser closed")
