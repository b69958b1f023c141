from dataclasses import dataclass
from typing import Optional

from . import config
from .base import Court


class Sport:
    TENNIS = "tennis"
    SQUASH = "squash"


@dataclass(frozen=True)
class SportConfig:
    name: str
    courts: tuple[Court, ...]


SPORTS: dict[str, SportConfig] = {
    Sport.TENNIS: SportConfig(
        name="Tennis",
        courts=(
            Court("3b92dfe2-3eb0-4860-b07f-f058e0e18019", "Court 1"),
            Court("58d5f7ab-8c69-41e7-bc50-a1ccbe58459a", "Court 2"),
            Court("02868885-c471-42d4-a03d-9e3cbe889bed", "Court 3"),
            Court("1b4679e7-5fa4-4b05-a16c-4dc892974716", "Court 4"),
            Court("442d6bde-6c26-46cd-bec8-9e1d7047e7b9", "Court 5"),
            Court("e11bd3c1-4e58-4b8d-98c7-9fbc1838216e", "Court 6 (1.5 Hours)"),
        ),
    ),
    Sport.SQUASH: SportConfig(
        name="Squash",
        courts=(
            Court("2e05bf1d-aa72-42c7-8f38-0619503add42", "Court 12"),
            Court("79af72b2-fa7c-45a0-af13-ba38ddac2903", "Court 13"),
            Court("ecfb57a5-0dcf-4f63-97ef-e9e2a017347f", "Court 14"),
        ),
    ),
}

DEFAULT_SPORT = Sport.TENNIS


def get_sport_config(sport: str, sports: Optional[dict[str, SportConfig]] = None) -> Optional[SportConfig]:
    """Look up a sport in the registry. Returns None for unknown sports."""
    registry = sports if sports is not None else SPORTS
    return registry.get(sport)


def get_reservation_url(court_id: str) -> str:
    """Detail page for a court on the portal."""
    return f"{config.BASE_URL}?courseId={court_id}"
