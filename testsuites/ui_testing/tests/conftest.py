"""
================================================================================
UI Testing Pytest Configuration
================================================================================

Fixtures for browser management, page objects and per-test logging.

Key Features:
- One browser per session, one isolated context + page per test
- Page Object fixtures (DiscoverPage, FilterComponent)
- Per-test StepLogger with start/result lines
- Screenshot capture on failure (Allure attachment + saved PNG)

================================================================================
"""

from typing import AsyncGenerator, Generator

import allure
import pytest
from loguru import logger
from playwright.async_api import Browser, BrowserContext, Page
from playwright.async_api import Error as PlaywrightError

from autotest_tools.common import ensure_directory
from testsuites.ui_testing.framework.browser_manager import BrowserManager
from testsuites.ui_testing.framework.environment import RunConfig, get_run_config, is_ci
from testsuites.ui_testing.framework.outcome import (  # noqa: F401
    failure_screenshot_path,
    final_status,
    pytest_runtest_makereport,
)
from testsuites.ui_testing.framework.step_logger import StepLogger
from testsuites.ui_testing.pages.components.filter_component import FilterComponent
from testsuites.ui_testing.pages.discover_page import DiscoverPage


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def run_config() -> RunConfig:
    """Session-wide run configuration."""
    return get_run_config()


@pytest.fixture(scope="session")
async def browser_manager(
    pytestconfig, run_config: RunConfig
) -> AsyncGenerator[BrowserManager, None]:
    """
    Session-scoped browser manager fixture.

    Honors --browser and --headed from the command line.
    """
    manager = BrowserManager(
        headless=not pytestconfig.getoption("headed"),
        browser_type=pytestconfig.getoption("browser") or run_config.browser,
        run_config=run_config,
    )
    yield manager
    await manager.close()


@pytest.fixture(scope="session")
async def browser(browser_manager: BrowserManager) -> Browser:
    """
    Session-scoped browser shared across all tests.

    Outside CI a browser that cannot be launched (e.g. `playwright install`
    never ran) skips the UI scenarios instead of erroring each one.
    """
    try:
        return await browser_manager.start()
    except PlaywrightError as e:
        if is_ci():
            raise
        pytest.skip(f"Browser could not be launched: {e}")


@pytest.fixture(scope="function")
async def context(
    browser: Browser, browser_manager: BrowserManager
) -> AsyncGenerator[BrowserContext, None]:
    """Fresh isolated context per test."""
    context = await browser_manager.new_context()
    yield context
    await browser_manager.release_context(context)


@pytest.fixture(scope="function")
async def page(context: BrowserContext, request) -> AsyncGenerator[Page, None]:
    """
    Function-scoped page fixture.

    Attaches a full-page screenshot to Allure when the test fails, unless
    `logged_page` or `discover_page` already handles it.
    """
    page = await context.new_page()
    yield page

    handled = {"logged_page", "discover_page"} & set(request.fixturenames)
    if final_status(request.node) == "failed" and not handled:
        try:
            allure.attach(
                await page.screenshot(full_page=True),
                name="failure_screenshot",
                attachment_type=allure.attachment_type.PNG,
            )
        except PlaywrightError as e:
            logger.warning(f"Failed to capture screenshot on failure: {e}")

    await page.close()


# ================================================================================
# Logging Fixtures
# ================================================================================

@pytest.fixture
def step_logger(request) -> Generator[StepLogger, None, None]:
    """
    Per-test StepLogger.

    Sets the test context on setup; logs the result line and clears the
    context on teardown.
    """
    log = StepLogger()
    log.set_test_context(request.node.name)
    yield log

    call = getattr(request.node, "rep_call", None)
    duration_ms = int(call.duration * 1000) if call is not None else None
    log.test_result(request.node.name, final_status(request.node), duration_ms)
    log.clear_test_context()


@pytest.fixture
async def logged_page(
    page: Page, request, step_logger: StepLogger, run_config: RunConfig
) -> AsyncGenerator[Page, None]:
    """
    Page with automatic start/end logging.

    On any outcome other than "passed", saves a full-page screenshot as
    screenshots/failure-<title>-<epoch-ms>.png and attaches it to Allure.
    """
    title = request.node.name
    yield page

    if final_status(request.node) == "passed":
        step_logger.success(f"Test passed: {title}")
        return

    step_logger.error(f"Test failed: {title}")
    screenshot_path = failure_screenshot_path(ensure_directory(run_config.screenshot_dir), title)
    try:
        await page.screenshot(path=str(screenshot_path), full_page=True)
    except PlaywrightError as e:
        step_logger.warn(f"Screenshot failed: {e}")
        return

    allure.attach.file(
        str(screenshot_path),
        name=screenshot_path.name,
        attachment_type=allure.attachment_type.PNG,
    )
    step_logger.info(f"Screenshot saved: {screenshot_path}")


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
async def discover_page(
    page: Page, run_config: RunConfig, request
) -> AsyncGenerator[DiscoverPage, None]:
    """
    DiscoverPage bound to this test's page (not yet navigated).

    On failure, attaches the URL, locator health and recent TMDB API
    responses to Allure.
    """
    discover = DiscoverPage(page, run_config=run_config)
    yield discover

    if final_status(request.node) == "failed":
        try:
            await discover.capture_failure(request.node.name)
        except PlaywrightError as e:
            logger.warning(f"Failed to capture failure details: {e}")


@pytest.fixture
async def loaded_discover_page(discover_page: DiscoverPage) -> DiscoverPage:
    """DiscoverPage opened at the base URL with content loaded."""
    await discover_page.open()
    return discover_page


@pytest.fixture
def filter_component(page: Page, run_config: RunConfig) -> FilterComponent:
    """FilterComponent bound to this test's page."""
    return FilterComponent(page, run_config=run_config)


# ================================================================================
# Utility Fixtures
# ================================================================================

@pytest.fixture
def test_data():
    """Common search/filter inputs for discover scenarios."""
    return {
        "search_terms": ["Batman", "Avengers", "Matrix"],
        "genres": ["Action", "Comedy", "Drama"],
        "year_range": {"min": 2000, "max": 2020},
        "nav_texts": ["Popular", "Trend", "Top"],
        "filter_texts": ["Movie", "TV", "Type", "Genre", "Year", "Rating"],
    }
