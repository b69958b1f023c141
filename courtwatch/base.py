from dataclasses import dataclass, field
from typing import Optional, Union


class ScrapeError(Exception):
    """Base class for run-level scrape failures."""


class UnknownSportError(ScrapeError):
    def __init__(self, sport: str):
        super().__init__(f"Unknown sport: {sport}")
        self.sport = sport


class NoCourtsError(ScrapeError):
    def __init__(self, sport: str):
        super().__init__(f"No courts configured for sport: {sport}")
        self.sport = sport


class NoDatesFoundError(ScrapeError):
    def __init__(self, court_id: str):
        super().__init__("No dates found on the page")
        self.court_id = court_id


@dataclass(frozen=True)
class Court:
    """A bookable court on the membership portal."""
    id: str
    name: str


@dataclass(frozen=True)
class TimeSlot:
    """One bookable time range on a court, with remaining capacity."""
    time: str  # Format: "9:00 AM - 10:00 AM"
    start_time: str
    end_time: str
    spots: int = 0

    @property
    def available(self) -> bool:
        return self.spots > 0

    def to_dict(self) -> dict:
        return {
            "time": self.time,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "spots": self.spots,
            "available": self.available,
        }


@dataclass(frozen=True)
class ScrapeResult:
    """Raw output of one (court, date index) task. date is None on failure."""
    court_id: str
    court_name: str
    date: Optional[str]
    slots: tuple[TimeSlot, ...] = ()


@dataclass(frozen=True)
class ScrapeSucceeded:
    result: ScrapeResult

    def to_result(self) -> ScrapeResult:
        return self.result


@dataclass(frozen=True)
class ScrapeFailed:
    court: Court
    date_index: int
    reason: str

    def to_result(self) -> ScrapeResult:
        return ScrapeResult(court_id=self.court.id, court_name=self.court.name, date=None)


TaskOutcome = Union[ScrapeSucceeded, ScrapeFailed]


@dataclass(frozen=True)
class CourtAvailability:
    """Availability for a single court, keyed by date label."""
    court_id: str
    court_name: str
    availability: dict[str, tuple[TimeSlot, ...]] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "courtId": self.court_id,
            "courtName": self.court_name,
            "availability": {
                date: [slot.to_dict() for slot in slots]
                for date, slots in self.availability.items()
            },
        }


@dataclass(frozen=True)
class WeeklyCell:
    spots: int
    courts_available: int

    @property
    def available(self) -> bool:
        return self.spots > 0

    def to_dict(self) -> dict:
        return {
            "spots": self.spots,
            "courtsAvailable": self.courts_available,
            "available": self.available,
        }


@dataclass(frozen=True)
class WeeklyView:
    """Cross-court summary: matrix[time][date] -> WeeklyCell."""
    dates: tuple[str, ...] = ()
    times: tuple[str, ...] = ()
    matrix: dict[str, dict[str, WeeklyCell]] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "dates": list(self.dates),
            "times": list(self.times),
            "matrix": {
                time: {date: cell.to_dict() for date, cell in row.items()}
                for time, row in self.matrix.items()
            },
        }


@dataclass(frozen=True)
class RunStats:
    total_tasks: int
    successful: int
    dates: int
    time_slots: int

    def to_dict(self) -> dict:
        return {
            "totalTasks": self.total_tasks,
            "successful": self.successful,
            "dates": self.dates,
            "timeSlots": self.time_slots,
        }


@dataclass(frozen=True)
class AvailabilityReport:
    """Everything one /availability response carries."""
    sport: str
    courts: list[CourtAvailability]
    weekly_view: WeeklyView
    timestamp: str  # ISO 8601, UTC
    duration_seconds: float
    stats: RunStats

    @property
    def scrape_duration(self) -> str:
        return f"{self.duration_seconds:.1f}s"

    def to_dict(self) -> dict:
        return {
            "sport": self.sport,
            "courts": [court.to_dict() for court in self.courts],
            "weeklyView": self.weekly_view.to_dict(),
            "timestamp": self.timestamp,
            "scrapeDuration": self.scrape_duration,
            "stats": self.stats.to_dict(),
        }
