"""
================================================================================
Smart Locator
================================================================================

Named, lazily resolved element descriptions for the TMDB Discover page.

    - Every element is a set of selector strategies (primary + fallbacks)
    - Nothing is cached: each call builds a fresh Playwright Locator
    - `locate()` races all strategies under one timeout and records which matched
    - The health report lists elements that needed a fallback

The selectors describe an undocumented third-party DOM (e.g. "the parent of an
image is a card"). They are heuristics, and the health report is the place
where drift shows up first.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page


# Selector suffix restricting matches to visible elements.
VISIBLE_ONLY = " >> visible=true"


class ElementNotFoundError(Exception):
    """Raised when all locator strategies fail to find element."""
    pass


@dataclass
class LocatorHealth:
    """
    Tracks which strategy resolved an element.

    Attributes:
        element_name: Registry key
        primary_selector: The preferred selector
        used_fallback: Whether a fallback was used
        fallback_name: Name of fallback used (if any)
        fallback_selector: The fallback selector used (if any)
    """
    element_name: str
    primary_selector: str
    used_fallback: bool = False
    fallback_name: Optional[str] = None
    fallback_selector: Optional[str] = None


class SmartLocator:
    """
    Element registry with fallback strategies.

    Usage:
        >>> smart = SmartLocator(page)
        >>> await smart.click("popular_link")
        >>> await smart.fill("search_input", "Batman")
        >>> smart.get("rating_star", nth=2)       # lazy, no waiting
        >>> await smart.is_visible("next_page")   # never raises
    """

    # element_name -> {strategy_name: selector}
    LOCATORS: Dict[str, Dict[str, str]] = {
        # Navigation
        "popular_link": {
            "primary": "a:has-text('Popular')",
            "fallback_1": "[href*='popular']",
        },
        "trend_link": {
            "primary": "a:has-text('Trend')",
            "fallback_1": "[href*='trend']",
        },
        "newest_link": {
            "primary": "a:has-text('Newest')",
            "fallback_1": "a:has-text('New')",
            "fallback_2": "[href*='new']",
        },
        "top_rated_link": {
            "primary": "a:has-text('Top')",
            "fallback_1": "a:has-text('Top Rated')",
            "fallback_2": "[href*='top']",
        },

        # Search
        "search_input": {
            "primary": "input[placeholder*='Search' i]",
            "fallback_1": "input[placeholder*='SEARCH']",
            "fallback_2": "input[type='search']",
        },

        # Filters
        "type_movie": {
            "primary": "text=Movie",
        },
        "type_tv": {
            "primary": "text=TV",
        },
        "genre_dropdown": {
            "primary": "select",
            "fallback_1": "[role='listbox']",
            "fallback_2": "[class*='dropdown']",
        },
        "year_input": {
            "primary": "input[type='number']",
            "fallback_1": "input[placeholder*='year' i]",
        },
        "rating_star": {
            "primary": "[role='radio']",
            "fallback_1": "[class*='star']",
            "fallback_2": "[class*='rating']",
        },

        # Content
        "movie_image": {
            "primary": "img",
        },
        "movie_card": {
            "primary": "img >> xpath=..",
        },
        "title_text": {
            "primary": "p",
            "fallback_1": "h3",
            "fallback_2": "h4",
            "fallback_3": "[class*='title']",
        },

        # Pagination
        "prev_page": {
            "primary": "[aria-label*='Previous' i]",
            "fallback_1": "[aria-label*='Prev' i]",
            "fallback_2": "text=Previous",
            "fallback_3": "text=Prev",
        },
        "next_page": {
            "primary": "[aria-label*='Next' i]",
            "fallback_1": "text=Next",
        },
    }

    def __init__(self, page: Page, locators: Optional[Dict[str, Dict[str, str]]] = None):
        """
        Args:
            page: Playwright Page object
            locators: Extra/override registry entries for this instance
        """
        self.page = page
        self.locators: Dict[str, Dict[str, str]] = {**self.LOCATORS, **(locators or {})}
        self._health_records: List[LocatorHealth] = []
        self._fallback_used: Dict[str, LocatorHealth] = {}

    def strategies(self, element_name: str) -> Dict[str, str]:
        """Return the selector strategies for an element."""
        strategies = self.locators.get(element_name)
        if not strategies:
            raise ElementNotFoundError(
                f"No locators defined for element: {element_name}"
            )
        return strategies

    # =========================================================================
    # Lazy Resolution
    # =========================================================================

    def all(self, element_name: str) -> Locator:
        """
        Locator matching every element of any strategy.

        Built with `Locator.or_()` so text= and CSS strategies can be mixed.
        """
        selectors = list(self.strategies(element_name).values())
        locator = self.page.locator(selectors[0])
        for selector in selectors[1:]:
            locator = locator.or_(self.page.locator(selector))
        return locator

    def get(self, element_name: str, nth: Optional[int] = None) -> Locator:
        """
        Lazily resolved locator for one element (first match, or the nth).

        Does not wait. An empty match only fails once an action runs on it.
        """
        locator = self.all(element_name)
        return locator.first if nth is None else locator.nth(nth)

    # =========================================================================
    # Strategy Walk
    # =========================================================================

    def _visible(self, selector: str) -> Locator:
        return self.page.locator(f"{selector}{VISIBLE_ONLY}")

    async def _matched_strategy(self, strategies: Dict[str, str]) -> str:
        """Name of the first strategy with a visible match right now."""
        for strategy_name, selector in strategies.items():
            if await self._visible(selector).count() > 0:
                return strategy_name
        return next(iter(strategies))

    async def locate(
        self,
        element_name: str,
        timeout: int = 5000,
        nth: Optional[int] = None,
    ) -> Locator:
        """
        Locate element using smart fallback strategy.

        All strategies are raced as one visible-only union, so the whole
        lookup shares a single `timeout`. Once something is visible, the
        strategies are checked in order (without waiting) to record which
        one matched.

        Args:
            element_name: Registry key
            timeout: Timeout in milliseconds for the whole lookup
            nth: Zero-based index among the visible matches

        Returns:
            Playwright Locator for the found element

        Raises:
            ElementNotFoundError: When no strategy matches within `timeout`
        """
        strategies = self.strategies(element_name)

        selectors = list(strategies.values())
        union = self._visible(selectors[0])
        for selector in selectors[1:]:
            union = union.or_(self._visible(selector))
        locator = union.first if nth is None else union.nth(nth)

        try:
            await locator.wait_for(state="visible", timeout=timeout)
        except PlaywrightError as e:
            error_msg = (
                f"❌ No such element '{element_name}'"
                + (f" (index {nth})" if nth is not None else "")
                + f" within {timeout}ms: {str(e)[:80]}\n"
                + "\n".join(f"  - {name}: {sel}" for name, sel in strategies.items())
            )
            logger.error(error_msg)
            raise ElementNotFoundError(error_msg) from e

        strategy_name = await self._matched_strategy(strategies)
        selector = strategies[strategy_name]
        health = LocatorHealth(
            element_name=element_name,
            primary_selector=strategies.get("primary", selector),
            used_fallback=(strategy_name != "primary"),
            fallback_name=strategy_name if strategy_name != "primary" else None,
            fallback_selector=selector if strategy_name != "primary" else None,
        )
        self._health_records.append(health)

        if strategy_name != "primary":
            logger.warning(
                f"⚠️ Element '{element_name}' used fallback: "
                f"{strategy_name} -> {selector}"
            )
            self._fallback_used[element_name] = health
        else:
            logger.debug(f"✅ Element '{element_name}' found: {selector}")

        return locator

    # =========================================================================
    # Interactions
    # =========================================================================

    async def click(
        self,
        element_name: str,
        timeout: int = 5000,
        nth: Optional[int] = None,
    ) -> None:
        locator = await self.locate(element_name, timeout=timeout, nth=nth)
        await locator.click()

    async def fill(
        self,
        element_name: str,
        value: str,
        timeout: int = 5000,
        nth: Optional[int] = None,
    ) -> None:
        locator = await self.locate(element_name, timeout=timeout, nth=nth)
        await locator.fill(value)

    async def press(
        self,
        element_name: str,
        key: str,
        timeout: int = 5000,
    ) -> None:
        locator = await self.locate(element_name, timeout=timeout)
        await locator.press(key)

    async def get_text(
        self,
        element_name: str,
        timeout: int = 5000,
    ) -> str:
        locator = await self.locate(element_name, timeout=timeout)
        return await locator.text_content() or ""

    async def get_attribute(
        self,
        element_name: str,
        attribute: str,
        timeout: int = 5000,
    ) -> Optional[str]:
        locator = await self.locate(element_name, timeout=timeout)
        return await locator.get_attribute(attribute)

    async def is_visible(
        self,
        element_name: str,
        nth: Optional[int] = None,
    ) -> bool:
        """
        Check if element is visible right now.

        Returns:
            True if visible, False otherwise (including lookup errors)
        """
        try:
            return await self.get(element_name, nth=nth).is_visible()
        except (PlaywrightError, ElementNotFoundError):
            return False

    # =========================================================================
    # Maintenance
    # =========================================================================

    def get_health_report(self) -> str:
        """
        Generate locator health report.

        Returns:
            Formatted health report string
        """
        if not self._fallback_used:
            return "✅ All elements used primary locators. No maintenance needed."

        report_lines = [
            "⚠️ Locator Health Report - Fallbacks Used:",
            "",
            "The following elements used fallback locators.",
            "Consider updating the primary selectors:",
            "",
        ]

        for element_name, health in self._fallback_used.items():
            report_lines.extend([
                f"  [{element_name}]",
                f"    Failed primary: {health.primary_selector}",
                f"    Used: {health.fallback_name} -> {health.fallback_selector}",
                "",
            ])

        return "\n".join(report_lines)

    def register_locator(
        self,
        element_name: str,
        locators: Dict[str, str],
    ) -> None:
        """
        Register a locator on this instance at runtime.

        Args:
            element_name: Unique name for the element
            locators: Dictionary of strategy -> selector
        """
        self.locators[element_name] = locators
        logger.debug(f"Registered new locator: {element_name}")


__all__ = [
    "SmartLocator",
    "ElementNotFoundError",
    "LocatorHealth",
]
