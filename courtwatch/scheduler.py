import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Sequence

from . import config
from .base import Court, ScrapeFailed, ScrapeResult, TaskOutcome
from .slot_scraper import scrape_court_date

logger = logging.getLogger(__name__)

ScrapeFn = Callable[[object, Court, int], Awaitable[TaskOutcome]]


@dataclass(frozen=True)
class ScrapeTask:
    """One (court, date index) unit of scrape work."""
    court: Court
    date_index: int


@dataclass(frozen=True)
class ScheduleRun:
    results: list[ScrapeResult]
    total_tasks: int
    successful: int
    elapsed_seconds: float


def build_tasks(courts: Sequence[Court], dates: Sequence[str]) -> list[ScrapeTask]:
    """Cartesian product of courts and date indexes, court-major."""
    return [
        ScrapeTask(court=court, date_index=date_index)
        for court in courts
        for date_index in range(len(dates))
    ]


async def run_tasks(
    session,
    tasks: Sequence[ScrapeTask],
    concurrency: int = config.CONCURRENCY,
    scrape: ScrapeFn = scrape_court_date,
) -> ScheduleRun:
    """
    Run scrape tasks in fixed-size batches sharing one browser session.

    Each batch finishes completely before the next one starts, so at most
    `concurrency` pages are open at a time. Results come back in task order.

    Args:
        session: Browser session handed to every scrape call
        tasks: Tasks to run, usually from build_tasks()
        concurrency: Batch size
        scrape: Coroutine function returning a TaskOutcome for one task
    """
    if concurrency < 1:
        raise ValueError(f"concurrency must be positive, got {concurrency}")

    started = time.monotonic()
    results: list[ScrapeResult] = []
    total_batches = (len(tasks) + concurrency - 1) // concurrency

    for batch_num, start in enumerate(range(0, len(tasks), concurrency), start=1):
        batch = tasks[start:start + concurrency]
        logger.info(f"── Batch {batch_num}/{total_batches} ──")
        outcomes = await asyncio.gather(
            *(scrape(session, task.court, task.date_index) for task in batch),
            return_exceptions=True,
        )
        for task, outcome in zip(batch, outcomes):
            if isinstance(outcome, Exception):
                logger.warning(f"✗ {task.court.name:<20} | Date {task.date_index + 1} | Error: {outcome}")
                outcome = ScrapeFailed(task.court, task.date_index, str(outcome))
            results.append(outcome.to_result())

    successful = sum(1 for result in results if result.date is not None)
    return ScheduleRun(
        results=results,
        total_tasks=len(tasks),
        successful=successful,
        elapsed_seconds=time.monotonic() - started,
    )
