import logging

from playwright.async_api import Page, TimeoutError as PlaywrightTimeoutError

from . import config
from .base import Court, ScrapeFailed, ScrapeResult, ScrapeSucceeded, TaskOutcome
from .courts import get_reservation_url
from .helpers import parse_date_buttons, parse_slots, short_date

logger = logging.getLogger(__name__)


async def load_court_page(page: Page, court: Court) -> None:
    """Navigate to a court's detail page and wait for the date picker to render."""
    await page.goto(
        get_reservation_url(court.id),
        wait_until="networkidle",
        timeout=config.NAVIGATION_TIMEOUT_MS,
    )
    await page.wait_for_selector(config.DATE_PICKER_SELECTOR, timeout=config.PICKER_TIMEOUT_MS)


async def wait_for_slots(page: Page) -> None:
    """Let the slot list re-render after a date button is clicked."""
    try:
        await page.wait_for_load_state("networkidle", timeout=config.SETTLE_TIMEOUT_MS)
    except PlaywrightTimeoutError:
        logger.debug("Network did not go idle after date click, continuing")
    await page.wait_for_timeout(config.CLICK_SETTLE_MS)


async def scrape(page: Page, court: Court, date_index: int) -> TaskOutcome:
    await load_court_page(page, court)
    await page.wait_for_timeout(config.PICKER_SETTLE_MS)

    labels = parse_date_buttons(await page.content())
    if date_index >= len(labels):
        return ScrapeFailed(
            court, date_index, f"date index {date_index} out of range ({len(labels)} buttons)"
        )
    date_label = labels[date_index]
    if date_label is None:
        return ScrapeFailed(court, date_index, "date button text not recognized")

    await page.locator(config.DATE_BUTTON_SELECTOR).nth(date_index).click()
    await wait_for_slots(page)

    slots = parse_slots(await page.inner_text("body"))
    logger.info(f"✓ {court.name:<20} | {short_date(date_label):<12} | {len(slots)} slots")
    return ScrapeSucceeded(
        ScrapeResult(
            court_id=court.id,
            court_name=court.name,
            date=date_label,
            slots=tuple(slots),
        )
    )


async def scrape_court_date(session, court: Court, date_index: int) -> TaskOutcome:
    """
    Scrape one court for the date at date_index in its picker.

    Never raises: page-level failures and out-of-range indexes come back as
    ScrapeFailed so sibling tasks are unaffected.
    """
    try:
        async with session.page() as page:
            outcome = await scrape(page, court, date_index)
    except Exception as e:
        logger.warning(f"✗ {court.name:<20} | Date {date_index + 1} | Error: {e}")
        return ScrapeFailed(court, date_index, str(e))

    if isinstance(outcome, ScrapeFailed):
        logger.warning(f"✗ {court.name:<20} | Date {date_index + 1} | {outcome.reason}")
    return outcome
