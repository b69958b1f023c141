"""Pure folding of raw scrape results into per-court and weekly views."""

from functools import reduce
from typing import Iterable, Mapping

from .base import CourtAvailability, ScrapeResult, WeeklyCell, WeeklyView
from .helpers import date_sort_key, time_sort_key

CourtMap = Mapping[str, CourtAvailability]


def _fold_result(acc: CourtMap, result: ScrapeResult) -> CourtMap:
    """Return a new court map with result merged in. Null-date results are skipped."""
    if result.date is None:
        return acc
    court = acc.get(result.court_id) or CourtAvailability(
        court_id=result.court_id, court_name=result.court_name
    )
    updated = CourtAvailability(
        court_id=court.court_id,
        court_name=court.court_name,
        availability={**court.availability, result.date: tuple(result.slots)},
    )
    return {**acc, result.court_id: updated}


def aggregate_results(results: Iterable[ScrapeResult]) -> list[CourtAvailability]:
    """Group raw results by court; each court maps date label -> slots."""
    courts: CourtMap = reduce(_fold_result, results, {})
    return list(courts.values())


def aggregate_to_weekly_view(courts: Iterable[CourtAvailability]) -> WeeklyView:
    """
    Build the cross-court matrix of time label x date label.

    Each cell sums the spots of every court offering that exact time label on
    that date and counts those courts. Pairs no court offers have no cell.
    """
    # Per court: date -> time label -> spots (first slot wins on repeats)
    indexes = []
    for court in courts:
        by_date = {}
        for date, slots in court.availability.items():
            by_time = {}
            for slot in slots:
                by_time.setdefault(slot.time, slot.spots)
            by_date[date] = by_time
        indexes.append(by_date)

    dates = sorted({date for by_date in indexes for date in by_date}, key=date_sort_key)
    times = sorted(
        {time for by_date in indexes for by_time in by_date.values() for time in by_time},
        key=time_sort_key,
    )

    matrix: dict[str, dict[str, WeeklyCell]] = {}
    for time in times:
        row = {}
        for date in dates:
            offered = [by_date[date][time] for by_date in indexes if time in by_date.get(date, {})]
            if offered:
                row[date] = WeeklyCell(spots=sum(offered), courts_available=len(offered))
        matrix[time] = row

    return WeeklyView(dates=tuple(dates), times=tuple(times), matrix=matrix)
