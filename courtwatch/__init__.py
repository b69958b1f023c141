from .base import (
    AvailabilityReport,
    Court,
    CourtAvailability,
    NoCourtsError,
    NoDatesFoundError,
    RunStats,
    ScrapeError,
    ScrapeFailed,
    ScrapeResult,
    ScrapeSucceeded,
    TaskOutcome,
    TimeSlot,
    UnknownSportError,
    WeeklyCell,
    WeeklyView,
)
from .courts import DEFAULT_SPORT, SPORTS, Sport, SportConfig, get_reservation_url
from .service import AvailabilityService

__all__ = [
    "AvailabilityReport",
    "Court",
    "CourtAvailability",
    "NoCourtsError",
    "NoDatesFoundError",
    "RunStats",
    "ScrapeError",
    "ScrapeFailed",
    "ScrapeResult",
    "ScrapeSucceeded",
    "TaskOutcome",
    "TimeSlot",
    "UnknownSportError",
    "WeeklyCell",
    "WeeklyView",
    "DEFAULT_SPORT",
    "SPORTS",
    "Sport",
    "SportConfig",
    "get_reservation_url",
    "AvailabilityService",
]
