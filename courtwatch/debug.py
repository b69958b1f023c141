import logging

from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from . import config
from .base import Court
from .courts import get_reservation_url
from .helpers import (
    describe_clickables,
    find_date_like_elements,
    find_date_picker_html,
    find_select_date_button,
    parse_html,
    text_around,
)

logger = logging.getLogger(__name__)


async def inspect_date_picker(session, court: Court) -> dict:
    """
    Snapshot of a court page's date-picker markup, for diagnosing selector drift.

    Loads the page, records clickable and date-like elements, then clicks the
    "SELECT DATE" control (if present) and records what appears afterwards.
    """
    async with session.page() as page:
        await page.goto(
            get_reservation_url(court.id),
            wait_until="networkidle",
            timeout=config.NAVIGATION_TIMEOUT_MS,
        )
        try:
            await page.wait_for_selector(config.DATE_PICKER_SELECTOR, timeout=config.PICKER_TIMEOUT_MS)
        except PlaywrightTimeoutError:
            logger.warning("Date picker did not render, inspecting page as is")
        await page.wait_for_timeout(config.DEBUG_SETTLE_MS)

        soup = parse_html(await page.content())
        page_text = await page.inner_text("body")
        date_picker_info = {
            "allButtons": describe_clickables(soup),
            "dateLikeElements": find_date_like_elements(soup),
            "selectDateButton": find_select_date_button(soup),
            "datePickerHTML": find_date_picker_html(soup),
        }

        select_date = page.locator("button, [role='button'], a", has_text="SELECT DATE")
        select_date_clicked = await select_date.count() > 0
        if select_date_clicked:
            await select_date.first.click()
        await page.wait_for_timeout(config.DEBUG_CLICK_SETTLE_MS)

        after_click_text = (await page.inner_text("body"))[:3000]
        calendar = parse_html(await page.content()).select_one(config.CALENDAR_SELECTOR)

    return {
        "datePickerInfo": date_picker_info,
        "pageText": text_around(page_text, "Select Date"),
        "selectDateClicked": select_date_clicked,
        "afterClickText": after_click_text,
        "calendarHTML": str(calendar)[:3000] if calendar is not None else None,
    }
