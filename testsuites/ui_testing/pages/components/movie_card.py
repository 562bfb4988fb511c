"""
Movie card component.

A card is the parent element of a poster image. Inside it the first
paragraph/heading is the title and the second span/paragraph is the genre.
Both are assumptions about the current markup, not a contract.
"""

from __future__ import annotations

from typing import Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator


# Short wait for sub-elements; a missing one means "empty", not "failure"
SUB_ELEMENT_TIMEOUT = 2000


class MovieCardComponent:
    """A single movie/TV card in the results grid."""

    def __init__(self, card: Locator):
        self.card = card
        self.image = card.locator("img").first
        self.title = card.locator("p, h3, h4").first
        self.genre = card.locator("span, p").nth(1)

    async def _text(self, locator: Locator) -> str:
        try:
            text: Optional[str] = await locator.text_content(timeout=SUB_ELEMENT_TIMEOUT)
        except PlaywrightError:
            return ""
        return (text or "").strip()

    async def get_title(self) -> str:
        return await self._text(self.title)

    async def get_genre(self) -> str:
        return await self._text(self.genre)

    async def get_image_src(self) -> str:
        try:
            return await self.image.get_attribute("src", timeout=SUB_ELEMENT_TIMEOUT) or ""
        except PlaywrightError:
            return ""

    async def is_image_loaded(self) -> bool:
        """True when the poster has a non-empty src."""
        return len(await self.get_image_src()) > 0

    async def click(self) -> None:
        await self.card.click()

    async def is_visible(self) -> bool:
        try:
            return await self.card.is_visible()
        except PlaywrightError:
            return False


__all__ = ["MovieCardComponent"]
