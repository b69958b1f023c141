import logging
import time
from datetime import datetime, timezone
from typing import Callable, Optional

from . import config
from .aggregator import aggregate_results, aggregate_to_weekly_view
from .base import AvailabilityReport, NoCourtsError, NoDatesFoundError, RunStats, UnknownSportError
from .browser import BrowserSession
from .courts import SPORTS, SportConfig, get_sport_config
from .discovery import discover_dates
from .helpers import short_date
from .scheduler import ScrapeFn, build_tasks, run_tasks
from .slot_scraper import scrape_court_date

logger = logging.getLogger(__name__)

RULE = "═" * 64
THIN_RULE = "─" * 64


class AvailabilityService:
    """Runs one full scrape for a sport: discover dates, scrape, aggregate."""

    def __init__(
        self,
        sports: Optional[dict[str, SportConfig]] = None,
        session_factory: Callable = BrowserSession,
        concurrency: int = config.CONCURRENCY,
        scrape: ScrapeFn = scrape_court_date,
    ):
        self.sports = sports if sports is not None else SPORTS
        self.session_factory = session_factory
        self.concurrency = concurrency
        self.scrape = scrape

    def get_courts(self, sport: str):
        sport_config = get_sport_config(sport, self.sports)
        if sport_config is None:
            raise UnknownSportError(sport)
        if not sport_config.courts:
            raise NoCourtsError(sport)
        return sport_config.courts

    async def get_availability(self, sport: str) -> AvailabilityReport:
        """
        Scrape and aggregate availability for every court of a sport.

        Raises UnknownSportError before any browser work, and NoDatesFoundError
        when the date picker yields nothing. The browser session is released on
        every path.
        """
        courts = self.get_courts(sport)
        started = time.monotonic()

        logger.info(RULE)
        logger.info(f"Starting {sport.upper()} court availability scrape")
        logger.info(RULE)

        async with self.session_factory() as session:
            logger.info("Discovering available dates...")
            dates = await discover_dates(session, courts[0])
            logger.info(f"Found {len(dates)} dates:")
            for i, date in enumerate(dates, start=1):
                logger.info(f"  {i}. {short_date(date)}")
            if not dates:
                raise NoDatesFoundError(courts[0].id)

            tasks = build_tasks(courts, dates)
            logger.info(
                f"Created {len(tasks)} scrape tasks ({len(courts)} courts × {len(dates)} dates)"
            )
            logger.info(THIN_RULE)
            run = await run_tasks(session, tasks, concurrency=self.concurrency, scrape=self.scrape)
            logger.info(THIN_RULE)

        court_availability = aggregate_results(run.results)
        weekly_view = aggregate_to_weekly_view(court_availability)
        duration = time.monotonic() - started

        stats = RunStats(
            total_tasks=run.total_tasks,
            successful=run.successful,
            dates=len(weekly_view.dates),
            time_slots=len(weekly_view.times),
        )
        logger.info("Scrape complete!")
        logger.info(f"  Total time:  {duration:.1f}s")
        logger.info(f"  Successful:  {stats.successful}/{stats.total_tasks} tasks")
        logger.info(f"  Dates found: {stats.dates}")
        logger.info(f"  Time slots:  {stats.time_slots}")
        logger.info(RULE)

        return AvailabilityReport(
            sport=sport,
            courts=court_availability,
            weekly_view=weekly_view,
            timestamp=datetime.now(timezone.utc).isoformat(),
            duration_seconds=duration,
            stats=stats,
        )
