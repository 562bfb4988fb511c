"""
In-memory stand-ins for the parts of the Playwright async API the page
objects use. The fake "DOM" is a mapping of selector -> elements; a locator
is a lazy query over that mapping, like the real one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from playwright.async_api import Error as PlaywrightError

VISIBLE_SUFFIX = " >> visible=true"


@dataclass
class FakeElement:
    text: str = ""
    attributes: Dict[str, str] = field(default_factory=dict)
    visible: bool = True
    value: str = ""
    tag: str = "DIV"
    children: Dict[str, List["FakeElement"]] = field(default_factory=dict)
    clicks: int = 0
    pressed: List[str] = field(default_factory=list)
    selected_label: Optional[str] = None


class FakeLocator:
    def __init__(self, resolve: Callable[[], List[FakeElement]], index: Optional[int] = None,
                 waits: Optional[List[Optional[int]]] = None):
        self._resolve = resolve
        self._index = index
        self._waits = waits if waits is not None else []

    def _all(self) -> List[FakeElement]:
        elements = self._resolve()
        if self._index is None:
            return elements
        if 0 <= self._index < len(elements):
            return [elements[self._index]]
        return []

    def _one(self) -> FakeElement:
        elements = self._all()
        if not elements:
            raise PlaywrightError("Timeout exceeded: element not found")
        return elements[0]

    # Composition

    @property
    def first(self) -> "FakeLocator":
        return FakeLocator(self._all, 0, self._waits)

    def nth(self, index: int) -> "FakeLocator":
        return FakeLocator(self._all, index, self._waits)

    def or_(self, other: "FakeLocator") -> "FakeLocator":
        def union() -> List[FakeElement]:
            merged = list(self._all())
            merged.extend(e for e in other._all() if all(e is not m for m in merged))
            return merged
        return FakeLocator(union, waits=self._waits)

    def locator(self, selector: str) -> "FakeLocator":
        return FakeLocator(
            lambda: [child for e in self._all() for child in e.children.get(selector, [])],
            waits=self._waits,
        )

    # Queries

    async def count(self) -> int:
        return len(self._all())

    async def is_visible(self, timeout: Optional[int] = None) -> bool:
        elements = self._all()
        return bool(elements) and elements[0].visible

    async def wait_for(self, state: str = "visible", timeout: Optional[int] = None) -> None:
        self._waits.append(timeout)
        elements = self._all()
        if not elements or not elements[0].visible:
            raise PlaywrightError(f"Timeout {timeout}ms exceeded waiting for {state}")

    async def all_text_contents(self) -> List[str]:
        return [e.text for e in self._all()]

    async def text_content(self, timeout: Optional[int] = None) -> Optional[str]:
        return self._one().text

    async def get_attribute(self, name: str, timeout: Optional[int] = None) -> Optional[str]:
        return self._one().attributes.get(name)

    async def input_value(self, timeout: Optional[int] = None) -> str:
        return self._one().value

    async def evaluate(self, expression: str):
        element = self._one()
        if "tagName" in expression:
            return element.tag == "SELECT"
        return None

    # Actions

    async def click(self, timeout: Optional[int] = None) -> None:
        self._one().clicks += 1

    async def fill(self, value: str, timeout: Optional[int] = None) -> None:
        self._one().value = value

    async def clear(self, timeout: Optional[int] = None) -> None:
        self._one().value = ""

    async def press(self, key: str, timeout: Optional[int] = None) -> None:
        self._one().pressed.append(key)

    async def select_option(self, label: Optional[str] = None, timeout: Optional[int] = None) -> None:
        element = self._one()
        element.selected_label = label
        element.value = label or ""


class FakePage:
    """Page whose DOM is `elements` (selector -> matching elements)."""

    def __init__(self, elements: Optional[Dict[str, List[FakeElement]]] = None,
                 url: str = "https://tmdb-discover.surge.sh/"):
        self.elements: Dict[str, List[FakeElement]] = elements or {}
        self.url = url
        self.handlers: Dict[str, list] = {}
        self.load_states: List[str] = []
        self.timeouts: List[int] = []
        self.evaluated: List[str] = []
        self.visited: List[str] = []
        self.waits: List[Optional[int]] = []

    def on(self, event: str, handler) -> None:
        self.handlers.setdefault(event, []).append(handler)

    def locator(self, selector: str) -> FakeLocator:
        if selector.endswith(VISIBLE_SUFFIX):
            base = selector[: -len(VISIBLE_SUFFIX)]
            return FakeLocator(
                lambda: [e for e in self.elements.get(base, []) if e.visible], waits=self.waits
            )
        return FakeLocator(lambda: self.elements.get(selector, []), waits=self.waits)

    def get_by_text(self, text: str) -> FakeLocator:
        return FakeLocator(
            lambda: [e for group in self.elements.values() for e in group if e.text == text]
        )

    async def goto(self, url: str, wait_until: Optional[str] = None) -> None:
        self.visited.append(url)
        self.url = url

    async def wait_for_load_state(self, state: str = "load", timeout: Optional[int] = None) -> None:
        self.load_states.append(state)

    async def wait_for_timeout(self, ms: int) -> None:
        self.timeouts.append(ms)

    async def evaluate(self, expression: str):
        self.evaluated.append(expression)
        return None
