"""
================================================================================
Browser Manager
================================================================================

Browser lifecycle management for UI automation.

Features:
    - One browser per session
    - Isolated context per test (own cookies, storage, history)
    - Run configuration applied to every context/page
      (viewport, base URL, action and navigation timeouts)
    - Assertion timeout for `expect()` taken from the same run configuration

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import (
    async_playwright,
    expect,
    Browser,
    BrowserContext,
    Page,
    Playwright,
)

from .environment import RunConfig, get_run_config


class BrowserManager:
    """
    Manages browser instances and contexts for UI testing.

    Usage:
        async with BrowserManager() as manager:
            page = await manager.new_page()
            await page.goto("/")
    """

    DEFAULT_LAUNCH_OPTIONS: Dict[str, Any] = {
        "headless": True,
        "args": [
            "--ignore-certificate-errors",
        ],
    }

    def __init__(
        self,
        headless: Optional[bool] = None,
        browser_type: Optional[str] = None,
        run_config: Optional[RunConfig] = None,
    ):
        """
        Initialize browser manager.

        Args:
            headless: Run browser in headless mode (config default if None)
            browser_type: 'chromium', 'firefox' or 'webkit' (config default if None)
            run_config: Run settings (defaults to get_run_config())
        """
        self.config = run_config or get_run_config()
        self.headless = self.config.headless if headless is None else headless
        self.browser_type = browser_type or self.config.browser

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._contexts: List[BrowserContext] = []

    async def __aenter__(self) -> "BrowserManager":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def configure_assertions(self) -> None:
        """Apply the run's assertion timeout to `expect()`."""
        expect.set_options(timeout=self.config.expect_timeout)

    async def start(self) -> Browser:
        """Start Playwright and launch browser."""
        self.configure_assertions()
        self._playwright = await async_playwright().start()

        if self.browser_type == "firefox":
            browser_launcher = self._playwright.firefox
        elif self.browser_type == "webkit":
            browser_launcher = self._playwright.webkit
        else:
            browser_launcher = self._playwright.chromium

        launch_options = {
            **self.DEFAULT_LAUNCH_OPTIONS,
            "headless": self.headless,
        }

        self._browser = await browser_launcher.launch(**launch_options)
        logger.debug(
            f"Browser started: {self.browser_type} "
            f"(headless={self.headless})"
        )
        return self._browser

    async def close(self) -> None:
        """Close all contexts and browser."""
        for context in self._contexts:
            try:
                await context.close()
            except PlaywrightError as e:
                logger.debug(f"Context already closed: {e}")
        self._contexts.clear()

        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

        logger.debug("Browser closed")

    def context_options(self, **overrides: Any) -> Dict[str, Any]:
        """Context options from the run configuration plus overrides."""
        return {
            "viewport": dict(self.config.viewport),
            "base_url": self.config.base_url,
            "ignore_https_errors": True,
            **overrides,
        }

    async def new_context(self, **options: Any) -> BrowserContext:
        """
        Create new isolated browser context.

        Args:
            **options: Context option overrides

        Returns:
            New BrowserContext
        """
        if not self._browser:
            raise RuntimeError("Browser not started. Call start() first.")

        context = await self._browser.new_context(**self.context_options(**options))
        context.set_default_timeout(self.config.action_timeout)
        context.set_default_navigation_timeout(self.config.navigation_timeout)
        self._contexts.append(context)
        return context

    async def release_context(self, context: BrowserContext) -> None:
        """Close a context created by this manager."""
        if context in self._contexts:
            self._contexts.remove(context)
        await context.close()

    async def new_page(
        self,
        context: Optional[BrowserContext] = None,
        **context_options: Any,
    ) -> Page:
        """
        Create new page in new or existing context.

        Args:
            context: Existing context to use (creates new if None)
            **context_options: Options for new context
        """
        if context is None:
            context = await self.new_context(**context_options)
        return await context.new_page()

    @property
    def browser(self) -> Optional[Browser]:
        """Get browser instance."""
        return self._browser


__all__ = [
    "BrowserManager",
]
