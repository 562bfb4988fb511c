"""
================================================================================
Discover Page Object (Async / Playwright)
================================================================================

Main page of TMDB Discover: section navigation, search, filters, the poster
grid and pagination.

NOTE:
  The application ships no test ids. Every locator here is a heuristic over
  its current markup (text, href, aria-label, class fragments). See
  SmartLocator.get_health_report() when a scenario starts failing on lookups.

================================================================================
"""

from __future__ import annotations

from typing import Dict, List

import allure
from loguru import logger

from testsuites.ui_testing.framework.page_base import PageBase
from testsuites.ui_testing.pages.components.movie_card import MovieCardComponent


NAV_LINKS: Dict[str, str] = {
    "popular": "popular_link",
    "trend": "trend_link",
    "newest": "newest_link",
    "toprated": "top_rated_link",
}

ACTIVE_CLASS_MARKERS = ("active", "selected", "current")

TYPE_BUTTONS: Dict[str, str] = {
    "movie": "type_movie",
    "tv": "type_tv",
}

MAX_TITLE_LENGTH = 100

SCROLL_TO_BOTTOM_JS = """
() => {
    const container = document.querySelector('[class*="scroll"]') || document.body;
    container.scrollTop = container.scrollHeight;
}
"""


class DiscoverPage(PageBase):
    """Discover page object (async)."""

    URL_PATH = "/"

    @allure.step("Open discover page")
    async def open(self) -> "DiscoverPage":
        """Navigate to the discover page and wait for posters."""
        await self.goto(self.URL_PATH)
        return self

    # =========================================================================
    # Navigation
    # =========================================================================

    async def _navigate(self, section: str) -> None:
        await self.smart.click(NAV_LINKS[section], timeout=self.config.action_timeout)
        await self.wait_for_content_load()
        logger.debug(f"Navigated to section: {section}")

    @allure.step("Navigate to Popular")
    async def navigate_to_popular(self) -> None:
        await self._navigate("popular")

    @allure.step("Navigate to Trend")
    async def navigate_to_trend(self) -> None:
        await self._navigate("trend")

    @allure.step("Navigate to Newest")
    async def navigate_to_newest(self) -> None:
        await self._navigate("newest")

    @allure.step("Navigate to Top Rated")
    async def navigate_to_top_rated(self) -> None:
        await self._navigate("toprated")

    async def is_nav_active(self, section: str) -> bool:
        """
        Check whether a navigation link is marked active.

        Args:
            section: "popular", "trend", "newest" or "toprated"

        Returns:
            True if the link's class contains active/selected/current
        """
        if section not in NAV_LINKS:
            raise ValueError(
                f"Unknown section '{section}'. Expected one of: {', '.join(NAV_LINKS)}"
            )
        class_name = await self.smart.get_attribute(
            NAV_LINKS[section], "class", timeout=self.config.action_timeout
        )
        if not class_name:
            return False
        return any(marker in class_name for marker in ACTIVE_CLASS_MARKERS)

    # =========================================================================
    # Search
    # =========================================================================

    @allure.step("Search for '{query}'")
    async def search(self, query: str) -> None:
        await self.smart.fill("search_input", query, timeout=self.config.action_timeout)
        await self.smart.press("search_input", "Enter", timeout=self.config.action_timeout)
        await self.wait_for_content_load()

    @allure.step("Clear search")
    async def clear_search(self) -> None:
        search_input = await self.smart.locate("search_input", timeout=self.config.action_timeout)
        await search_input.clear()
        await search_input.press("Enter")
        await self.wait_for_content_load()

    async def get_search_value(self) -> str:
        search_input = await self.smart.locate("search_input", timeout=self.config.action_timeout)
        return await search_input.input_value()

    # =========================================================================
    # Filters
    # =========================================================================

    @allure.step("Select type: {content_type}")
    async def select_type(self, content_type: str) -> None:
        """
        Select content type.

        Args:
            content_type: "movie" or "tv"
        """
        if content_type not in TYPE_BUTTONS:
            raise ValueError(f"Unknown content type '{content_type}'. Expected 'movie' or 'tv'")
        await self.smart.click(TYPE_BUTTONS[content_type], timeout=self.config.action_timeout)
        await self.wait_for_content_load()

    @allure.step("Select genre: {genre}")
    async def select_genre(self, genre: str) -> None:
        """Select a genre from a native <select> or a custom dropdown."""
        dropdown = await self.smart.locate("genre_dropdown", timeout=self.config.action_timeout)
        is_select = await dropdown.evaluate("el => el.tagName === 'SELECT'")
        if is_select:
            await dropdown.select_option(label=genre)
        else:
            await dropdown.click()
            await self.page.get_by_text(genre).first.click()
        await self.wait_for_content_load()

    @allure.step("Set year range: {min_year} - {max_year}")
    async def set_year_range(self, min_year: int, max_year: int) -> None:
        await self.smart.fill("year_input", str(min_year), timeout=self.config.action_timeout, nth=0)
        await self.smart.fill("year_input", str(max_year), timeout=self.config.action_timeout, nth=1)
        await self.wait_for_content_load()

    @allure.step("Set rating: {stars} stars")
    async def set_rating(self, stars: int) -> None:
        """Click the nth rating control. Values outside 1-5 are ignored."""
        if not 1 <= stars <= 5:
            logger.debug(f"Ignoring out-of-range rating: {stars}")
            return
        await self.smart.click("rating_star", timeout=self.config.action_timeout, nth=stars - 1)
        await self.wait_for_content_load()

    # =========================================================================
    # Content
    # =========================================================================

    async def get_movie_card_count(self) -> int:
        """Number of poster images currently in the document."""
        return await self.smart.all("movie_image").count()

    async def get_movie_titles(self) -> List[str]:
        """Visible title-like texts, stripped, excluding empty and oversized ones."""
        texts = await self.smart.all("title_text").all_text_contents()
        return [
            text.strip()
            for text in texts
            if 0 < len(text.strip()) < MAX_TITLE_LENGTH
        ]

    async def has_content(self) -> bool:
        return await self.get_movie_card_count() > 0

    @allure.step("Click movie card #{index}")
    async def click_movie_card(self, index: int) -> None:
        await self.smart.click("movie_image", timeout=self.config.action_timeout, nth=index)

    def get_movie_card(self, index: int) -> MovieCardComponent:
        """Card component for the nth poster (resolved lazily)."""
        return MovieCardComponent(self.smart.get("movie_card", nth=index))

    # =========================================================================
    # Pagination
    # =========================================================================

    async def scroll_to_pagination(self) -> None:
        """Scroll the results container (or body) to the bottom."""
        await self.page.evaluate(SCROLL_TO_BOTTOM_JS)
        await self.pause(self.config.scroll_pause)

    @allure.step("Go to next page")
    async def go_to_next_page(self) -> None:
        await self.scroll_to_pagination()
        await self.smart.click("next_page", timeout=self.config.action_timeout)
        await self.wait_for_content_load()

    @allure.step("Go to previous page")
    async def go_to_previous_page(self) -> None:
        await self.scroll_to_pagination()
        await self.smart.click("prev_page", timeout=self.config.action_timeout)
        await self.wait_for_content_load()

    @allure.step("Go to page {page_number}")
    async def go_to_page(self, page_number: int) -> None:
        await self.scroll_to_pagination()
        target = self.page.locator(f"[aria-label='Page {page_number}']").or_(
            self.page.locator(f"a:has-text('{page_number}')")
        )
        await target.first.click()
        await self.wait_for_content_load()

    async def _is_pager_enabled(self, element_name: str) -> bool:
        if not await self.smart.is_visible(element_name):
            return False
        disabled = await self.smart.get(element_name).get_attribute("aria-disabled")
        return disabled != "true"

    async def is_next_page_enabled(self) -> bool:
        return await self._is_pager_enabled("next_page")

    async def is_previous_page_enabled(self) -> bool:
        return await self._is_pager_enabled("prev_page")

    async def get_current_path(self) -> str:
        return self.current_path()


__all__ = [
    "DiscoverPage",
    "NAV_LINKS",
]
