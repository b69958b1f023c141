import logging

from .base import Court
from .helpers import parse_date_buttons
from .slot_scraper import load_court_page

logger = logging.getLogger(__name__)


async def discover_dates(session, court: Court) -> list[str]:
    """
    Date labels the portal currently offers, in picker order.

    The position of a label in the returned list is the date index every scrape
    task uses, so the representative court's picker order defines the run.
    Returns an empty list if the picker never renders or holds no dates.
    """
    try:
        async with session.page() as page:
            await load_court_page(page, court)
            html = await page.content()
    except Exception as e:
        logger.warning(f"Could not discover dates: {e}")
        return []

    dates = [label for label in parse_date_buttons(html) if label is not None]
    if not dates:
        logger.warning(f"No date buttons recognized on {court.name}'s page")
    return dates
