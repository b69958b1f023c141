from contextlib import asynccontextmanager
from typing import Optional

import pytest

from courtwatch.base import Court, TimeSlot


def picker_html(button_texts, extra=""):
    """Court page markup with one date-picker button per text."""
    buttons = "".join(
        f'<button class="single-date-select-one-click single-date-select-button">{text}</button>'
        for text in button_texts
    )
    return (
        "<html><body>"
        f'<div class="single-date-select-one-click date-picker">{buttons}</div>'
        f"{extra}"
        "</body></html>"
    )


def make_slot(time: str, spots: int) -> TimeSlot:
    start, end = time.split(" - ")
    return TimeSlot(time=time, start_time=start, end_time=end, spots=spots)


class FakeLocator:
    def __init__(self, page, selector, has_text=None, index=None):
        self.page = page
        self.selector = selector
        self.has_text = has_text
        self.index = index

    def nth(self, index):
        return FakeLocator(self.page, self.selector, self.has_text, index)

    @property
    def first(self):
        return self.nth(0)

    async def count(self):
        return self.page.counts.get(self.has_text or self.selector, 0)

    async def click(self):
        self.page.clicks.append((self.selector, self.has_text, self.index))


class FakePage:
    """Stands in for a Playwright page; failures are injected per method name."""

    def __init__(
        self,
        html: str = "",
        text: str = "",
        after_click_text: Optional[str] = None,
        fail_on: Optional[dict] = None,
        counts: Optional[dict] = None,
    ):
        self.html = html
        self.text = text
        self.after_click_text = after_click_text
        self.fail_on = fail_on or {}
        self.counts = counts or {}
        self.clicks = []
        self.urls = []
        self.closed = False

    def _maybe_fail(self, name):
        if name in self.fail_on:
            raise self.fail_on[name]

    async def goto(self, url, **kwargs):
        self._maybe_fail("goto")
        self.urls.append(url)

    async def wait_for_selector(self, selector, **kwargs):
        self._maybe_fail("wait_for_selector")

    async def wait_for_load_state(self, state="load", **kwargs):
        self._maybe_fail("wait_for_load_state")

    async def wait_for_timeout(self, timeout):
        pass

    async def content(self):
        self._maybe_fail("content")
        return self.html

    async def inner_text(self, selector):
        if self.clicks and self.after_click_text is not None:
            return self.after_click_text
        return self.text

    def locator(self, selector, has_text=None):
        return FakeLocator(self, selector, has_text)

    async def close(self):
        self.closed = True


class FakeSession:
    """Browser session handing out FakePages built by page_factory."""

    def __init__(self, page_factory=FakePage):
        self.page_factory = page_factory
        self.pages = []
        self.entered = False
        self.closed = False

    async def __aenter__(self):
        self.entered = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.closed = True

    @asynccontextmanager
    async def page(self):
        page = self.page_factory()
        self.pages.append(page)
        try:
            yield page
        finally:
            await page.close()


WEEK = [
    "Sunday, January 4, 2026",
    "Monday, January 5, 2026",
    "Tuesday, January 6, 2026",
    "Wednesday, January 7, 2026",
    "Thursday, January 8, 2026",
]


@pytest.fixture
def court():
    return Court("court-1", "Court 1")


@pytest.fixture
def courts():
    return [Court("c12", "Court 12"), Court("c13", "Court 13"), Court("c14", "Court 14")]
