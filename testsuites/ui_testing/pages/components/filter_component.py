"""
================================================================================
Filter Component (Async / Playwright)
================================================================================

The filter panel of TMDB Discover: type (Movie/TV), genre, year range and
minimum rating. Reused by filter-focused scenarios on top of a DiscoverPage.

Read helpers (selected genre, available genres, year range, rating) are
best-effort: controls differ between deployments, so a failing read returns
a default instead of aborting the scenario.

================================================================================
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

import allure
from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page

from testsuites.ui_testing.framework.environment import RunConfig, get_run_config
from testsuites.ui_testing.framework.smart_locator import ElementNotFoundError, SmartLocator


MIN_YEAR_DEFAULT = 1900
RATING_STAR_COUNT = 5

# Narrower than the page-wide registry: only real form controls
FILTER_LOCATORS = {
    "genre_dropdown": {
        "primary": "select",
        "fallback_1": "[role='listbox']",
    },
    "year_input": {
        "primary": "input[type='number']",
    },
    "rating_star": {
        "primary": "[role='radio']",
        "fallback_1": "[class*='star']",
    },
}


@dataclass
class YearRange:
    min: int
    max: int


def _parse_year(value: Optional[str], default: int) -> int:
    """Leading digits of `value` ("2000abc" -> 2000), else `default`."""
    match = re.match(r"\s*(\d+)", value or "")
    if not match:
        return default
    return int(match.group(1)) or default


class FilterComponent:
    """Filter panel component (async)."""

    def __init__(self, page: Page, run_config: Optional[RunConfig] = None):
        self.page = page
        self.config = run_config or get_run_config()
        self.smart = SmartLocator(page, locators=FILTER_LOCATORS)

    async def _wait_for_update(self) -> None:
        """Wait for the grid to refresh after a filter change."""
        await self.page.wait_for_load_state("networkidle")
        await self.page.wait_for_timeout(self.config.filter_settle)

    async def _has_active_class(self, element_name: str) -> bool:
        class_name = await self.smart.get_attribute(
            element_name, "class", timeout=self.config.action_timeout
        )
        if not class_name:
            return False
        return "active" in class_name or "selected" in class_name

    # =========================================================================
    # Type Filter
    # =========================================================================

    @allure.step("Filter: select Movies")
    async def select_movies(self) -> None:
        await self.smart.click("type_movie", timeout=self.config.action_timeout)
        await self._wait_for_update()

    @allure.step("Filter: select TV Shows")
    async def select_tv_shows(self) -> None:
        await self.smart.click("type_tv", timeout=self.config.action_timeout)
        await self._wait_for_update()

    async def is_movie_selected(self) -> bool:
        return await self._has_active_class("type_movie")

    async def is_tv_selected(self) -> bool:
        return await self._has_active_class("type_tv")

    # =========================================================================
    # Genre Filter
    # =========================================================================

    @allure.step("Filter: select genre {genre}")
    async def select_genre(self, genre: str) -> None:
        dropdown = await self.smart.locate("genre_dropdown", timeout=self.config.action_timeout)
        is_select = await dropdown.evaluate("el => el.tagName === 'SELECT'")
        if is_select:
            await dropdown.select_option(label=genre)
        else:
            await dropdown.click()
            await self.page.get_by_text(genre).first.click()
        await self._wait_for_update()

    async def get_selected_genre(self) -> str:
        """Current value of the genre control, or "" if it cannot be read."""
        try:
            return await self.smart.get("genre_dropdown").input_value(
                timeout=self.config.action_timeout
            )
        except PlaywrightError:
            return ""

    async def get_available_genres(self) -> List[str]:
        """Trimmed option labels of the genre control, or [] on any failure."""
        try:
            options = await self.smart.get("genre_dropdown").locator("option").all_text_contents()
        except PlaywrightError as e:
            logger.debug(f"Could not read genre options: {e}")
            return []
        return [option.strip() for option in options]

    # =========================================================================
    # Year Filter
    # =========================================================================

    @allure.step("Filter: min year {year}")
    async def set_min_year(self, year: int) -> None:
        await self.smart.fill("year_input", str(year), timeout=self.config.action_timeout, nth=0)
        await self._wait_for_update()

    @allure.step("Filter: max year {year}")
    async def set_max_year(self, year: int) -> None:
        await self.smart.fill("year_input", str(year), timeout=self.config.action_timeout, nth=1)
        await self._wait_for_update()

    @allure.step("Filter: year range {min_year} - {max_year}")
    async def set_year_range(self, min_year: int, max_year: int) -> None:
        await self.smart.fill("year_input", str(min_year), timeout=self.config.action_timeout, nth=0)
        await self.smart.fill("year_input", str(max_year), timeout=self.config.action_timeout, nth=1)
        await self._wait_for_update()

    async def get_year_range(self) -> YearRange:
        """
        Read the year inputs.

        Empty or unparsable values fall back to 1900 and the current year.
        """
        current_year = date.today().year
        try:
            min_value = await self.smart.get("year_input", nth=0).input_value(
                timeout=self.config.action_timeout
            )
            max_value = await self.smart.get("year_input", nth=1).input_value(
                timeout=self.config.action_timeout
            )
        except PlaywrightError:
            return YearRange(min=MIN_YEAR_DEFAULT, max=current_year)

        return YearRange(
            min=_parse_year(min_value, MIN_YEAR_DEFAULT),
            max=_parse_year(max_value, current_year),
        )

    # =========================================================================
    # Rating Filter
    # =========================================================================

    @allure.step("Filter: rating {stars} stars")
    async def set_rating(self, stars: int) -> None:
        """Click the nth rating control. Values outside 1-5 are ignored."""
        if not 1 <= stars <= RATING_STAR_COUNT:
            return
        await self.smart.click("rating_star", timeout=self.config.action_timeout, nth=stars - 1)
        await self._wait_for_update()

    async def get_selected_rating(self) -> int:
        """1-based position of the first checked rating control, 0 if none."""
        count = await self.smart.all("rating_star").count()
        for i in range(min(count, RATING_STAR_COUNT)):
            try:
                checked = await self.smart.get("rating_star", nth=i).get_attribute(
                    "aria-checked", timeout=self.config.action_timeout
                )
            except (PlaywrightError, ElementNotFoundError):
                continue
            if checked == "true":
                return i + 1
        return 0


__all__ = [
    "FilterComponent",
    "YearRange",
]
