import asyncio

import pytest

from courtwatch.base import ScrapeFailed, ScrapeResult, ScrapeSucceeded
from courtwatch.scheduler import ScrapeTask, build_tasks, run_tasks
from conftest import WEEK, make_slot


class RecordingScrape:
    """Fake scrape that records start/finish order and peak concurrency."""

    def __init__(self, fail_indexes=(), delays=None):
        self.fail_indexes = set(fail_indexes)
        self.delays = delays or {}
        self.events = []
        self.active = 0
        self.peak = 0

    async def __call__(self, session, court, date_index):
        key = (court.id, date_index)
        self.events.append(("start", key))
        self.active += 1
        self.peak = max(self.peak, self.active)
        await asyncio.sleep(self.delays.get(key, 0))
        self.active -= 1
        self.events.append(("end", key))
        if date_index in self.fail_indexes:
            return ScrapeFailed(court, date_index, "boom")
        return ScrapeSucceeded(
            ScrapeResult(court.id, court.name, f"DAY {date_index}", (make_slot("9:00 AM - 10:00 AM", 1),))
        )


def test_build_tasks_is_cartesian_product(courts):
    tasks = build_tasks(courts, WEEK)
    assert len(tasks) == len(courts) * len(WEEK) == 15
    assert tasks[0] == ScrapeTask(courts[0], 0)
    assert tasks[4] == ScrapeTask(courts[0], 4)
    assert tasks[5] == ScrapeTask(courts[1], 0)
    assert len(set(tasks)) == 15


def test_build_tasks_without_dates(courts):
    assert build_tasks(courts, []) == []


def test_run_tasks_bounds_concurrency_and_finishes_each_batch(courts):
    scrape = RecordingScrape()
    tasks = build_tasks(courts, WEEK)
    run = asyncio.run(run_tasks(object(), tasks, concurrency=4, scrape=scrape))

    assert run.total_tasks == 15
    assert run.successful == 15
    assert scrape.peak == 4
    # Nothing from a later batch starts before every task of the current batch ended
    for batch_start in range(4, 15, 4):
        first_start = scrape.events.index(("start", (tasks[batch_start].court.id, tasks[batch_start].date_index)))
        finished_before = {key for kind, key in scrape.events[:first_start] if kind == "end"}
        previous = {(t.court.id, t.date_index) for t in tasks[:batch_start]}
        assert previous <= finished_before


def test_run_tasks_keeps_task_order(courts):
    # Earlier tasks finish last
    delays = {(courts[0].id, 0): 0.03, (courts[0].id, 1): 0.02, (courts[0].id, 2): 0.01}
    scrape = RecordingScrape(delays=delays)
    tasks = build_tasks(courts[:1], WEEK[:3])
    run = asyncio.run(run_tasks(object(), tasks, concurrency=3, scrape=scrape))
    assert [r.date for r in run.results] == ["DAY 0", "DAY 1", "DAY 2"]


def test_run_tasks_failures_are_isolated(courts):
    scrape = RecordingScrape(fail_indexes={1, 3})
    tasks = build_tasks(courts, WEEK)
    run = asyncio.run(run_tasks(object(), tasks, concurrency=8, scrape=scrape))

    assert run.total_tasks == 15
    assert run.successful == 9
    failed = [r for r in run.results if r.date is None]
    assert len(failed) == 6
    assert all(r.slots == () for r in failed)
    assert {r.court_id for r in failed} == {c.id for c in courts}
    assert run.elapsed_seconds >= 0


def test_run_tasks_rejects_non_positive_concurrency(courts):
    with pytest.raises(ValueError):
        asyncio.run(run_tasks(object(), build_tasks(courts, WEEK), concurrency=0, scrape=RecordingScrape()))


def test_run_tasks_raising_task_does_not_abort_its_batch(courts):
    finished = []

    async def scrape(session, court, date_index):
        if date_index == 0:
            raise RuntimeError("boom")
        await asyncio.sleep(0.01)
        finished.append(date_index)
        return ScrapeSucceeded(ScrapeResult(court.id, court.name, f"DAY {date_index}"))

    tasks = build_tasks(courts[:1], WEEK[:3])
    run = asyncio.run(run_tasks(object(), tasks, concurrency=3, scrape=scrape))

    assert sorted(finished) == [1, 2]
    assert [r.date for r in run.results] == [None, "DAY 1", "DAY 2"]
    assert run.results[0].court_id == courts[0].id
    assert run.results[0].slots == ()
    assert run.successful == 2
