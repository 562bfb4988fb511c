"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - Navigation relative to the resolved environment
    - Content-loaded heuristic (network idle + first image visible)
    - Smart element location
    - Screenshot and failure capture for Allure
    - TMDB API response capture

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

import allure
from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page, Response

from autotest_tools.report_tools.allure_utils import attach_json, attach_text

from .environment import RunConfig, get_run_config
from .smart_locator import SmartLocator


MAX_CAPTURED_RESPONSES = 20


class BasePage:
    """
    Base class for all page objects.

    Usage:
        class DiscoverPage(BasePage):
            URL_PATH = "/"

            async def search(self, query: str):
                await self.smart.fill("search_input", query)
                await self.smart.press("search_input", "Enter")
                await self.wait_for_content_load()
    """

    # Override in subclasses
    URL_PATH: str = "/"

    def __init__(
        self,
        page: Page,
        base_url: str = "",
        run_config: Optional[RunConfig] = None,
    ):
        """
        Initialize page object.

        Args:
            page: Playwright Page object
            base_url: Base URL for the application (defaults to the environment)
            run_config: Timeouts and capture settings (defaults to get_run_config())
        """
        self.page = page
        self.config = run_config or get_run_config()
        self.base_url = (base_url or self.config.base_url).rstrip("/")
        self.smart = SmartLocator(page)

        self._captured_responses: List[Dict[str, Any]] = []
        self._setup_response_capture()

    def _setup_response_capture(self) -> None:
        """Keep the last few TMDB API responses for failure reports."""

        async def capture_response(response: Response) -> None:
            if self.config.api_marker not in response.url:
                return
            try:
                body = await response.text()
            except PlaywrightError:
                body = "<unable to read>"

            self._captured_responses.append({
                "timestamp": datetime.now().isoformat(),
                "url": response.url,
                "status": response.status,
                "body": body[:1000],
            })
            if len(self._captured_responses) > MAX_CAPTURED_RESPONSES:
                self._captured_responses.pop(0)

        self.page.on("response", capture_response)

    @property
    def url(self) -> str:
        """Get full page URL."""
        return f"{self.base_url}{self.URL_PATH}"

    # =========================================================================
    # Navigation
    # =========================================================================

    async def navigate(self, wait_for: str = "networkidle") -> None:
        """
        Navigate to this page.

        Args:
            wait_for: Wait condition - 'load', 'domcontentloaded', 'networkidle'
        """
        with allure.step(f"Navigate to {self.url}"):
            await self.page.goto(self.url, wait_until=wait_for)
            logger.debug(f"Navigated to: {self.url}")

    async def goto(self, path: str = "/") -> None:
        """Navigate to a path under the base URL and wait for content."""
        full_url = f"{self.base_url}{path}"
        with allure.step(f"Navigate to {path}"):
            await self.page.goto(full_url)
            await self.wait_for_content_load()

    async def wait_for_page_load(
        self,
        state: str = "networkidle",
        timeout: Optional[int] = None,
    ) -> None:
        """
        Wait for the page to reach a stable load state.

        Args:
            state: Playwright load state ('load', 'domcontentloaded', 'networkidle')
            timeout: Timeout in milliseconds (navigation timeout by default)
        """
        await self.page.wait_for_load_state(
            state, timeout=timeout or self.config.navigation_timeout
        )

    async def wait_for_content_load(self) -> None:
        """
        Wait until the page looks rendered: network idle, then any image visible.

        A missing image is not an error; the wait gives up silently after
        `content_image_timeout`.
        """
        await self.page.wait_for_load_state("networkidle")
        try:
            await self.page.locator("img").first.wait_for(
                state="visible", timeout=self.config.content_image_timeout
            )
        except PlaywrightError:
            logger.debug("No visible image after content wait, continuing")

    async def pause(self, ms: int) -> None:
        await self.page.wait_for_timeout(ms)

    def current_path(self) -> str:
        """Path component of the current URL."""
        return urlparse(self.page.url).path

    # =========================================================================
    # Screenshot and Debug Utilities
    # =========================================================================

    async def screenshot(
        self,
        name: str,
        full_page: bool = False,
        attach_to_allure: bool = True,
    ) -> Path:
        """
        Take screenshot and optionally attach to Allure.

        Args:
            name: Screenshot name (without extension)
            full_page: Capture full scrollable page
            attach_to_allure: Whether to attach to Allure report

        Returns:
            Path to saved screenshot
        """
        screenshot_dir = Path(self.config.screenshot_dir)
        screenshot_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = screenshot_dir / f"{name}_{timestamp}.png"

        png = await self.page.screenshot(path=str(filepath), full_page=full_page)

        if attach_to_allure:
            allure.attach(
                png,
                name=name,
                attachment_type=allure.attachment_type.PNG
            )

        logger.debug(f"Screenshot saved: {filepath}")
        return filepath

    async def capture_failure(self, test_name: str) -> None:
        """
        Capture debugging information on test failure.

        Saves:
            - Full-page screenshot
            - Current URL
            - Recent TMDB API responses
        """
        with allure.step("Capture failure details"):
            await self.screenshot(f"failure_{test_name}", full_page=True)

            attach_text(self.page.url, name="Current URL")
            attach_text(self.get_locator_health_report(), name="Locator Health")

            if self._captured_responses:
                attach_json(self._captured_responses[-10:], name="Recent API Responses")

    def get_locator_health_report(self) -> str:
        """Get smart locator health report."""
        return self.smart.get_health_report()


__all__ = [
    "BasePage",
    "PageBase",
]

# Many Page Objects prefer the PageBase name
PageBase = BasePage
