"""Text and DOM parsing shared by the scrapers and the aggregator."""

import re
from datetime import datetime, timedelta
from typing import Optional

from bs4 import BeautifulSoup

from . import config
from .base import TimeSlot

WEEKDAYS = [
    "MONDAY",
    "TUESDAY",
    "WEDNESDAY",
    "THURSDAY",
    "FRIDAY",
    "SATURDAY",
    "SUNDAY",
]
MONTHS = [
    "JANUARY",
    "FEBRUARY",
    "MARCH",
    "APRIL",
    "MAY",
    "JUNE",
    "JULY",
    "AUGUST",
    "SEPTEMBER",
    "OCTOBER",
    "NOVEMBER",
    "DECEMBER",
]

# Picker button text, e.g. "Monday, January 5, 2026"
DATE_BUTTON_RE = re.compile(
    r"(" + "|".join(WEEKDAYS) + r"),\s*(" + "|".join(MONTHS) + r")\s*(\d{1,2}),\s*(\d{4})",
    re.I,
)
SLOT_ROW_RE = re.compile(
    r"^(\d{1,2}:\d{2}\s*(?:AM|PM))\s*-\s*(\d{1,2}:\d{2}\s*(?:AM|PM))$", re.I
)
SPOTS_LEFT_RE = re.compile(r"(\d+)\s*Spots?\s*Left", re.I)
CLOCK_RE = re.compile(r"(\d{1,2}):(\d{2})\s*(AM|PM)", re.I)
FULL_MARKERS = ("No Spots Left", "Full")

DATE_LIKE_RES = [
    re.compile(r"^(MON|TUE|WED|THU|FRI|SAT|SUN)\s", re.I),
    re.compile(r"^(JAN|FEB|MAR|APR|MAY|JUN|JUL|AUG|SEP|OCT|NOV|DEC)\s*\d", re.I),
    re.compile(r"^\d{1,2}$"),
]


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


def parse_date_label(text: str) -> Optional[str]:
    """
    Turn picker button text into a canonical date label.

    "Monday, January 5, 2026" -> "MONDAY JANUARY 5 2026". Returns None when the
    text holds no recognizable date.
    """
    match = DATE_BUTTON_RE.search(text or "")
    if not match:
        return None
    weekday, month, day, year = match.groups()
    return f"{weekday.upper()} {month.upper()} {day} {year}"


def parse_date_buttons(html: str) -> list[Optional[str]]:
    """
    Labels of every date-picker button, in picker order.

    Buttons whose text does not parse keep their position as None so that
    list indexes line up with the rendered buttons.
    """
    soup = parse_html(html)
    return [
        parse_date_label(button.get_text(" ", strip=True))
        for button in soup.select(config.DATE_BUTTON_SELECTOR)
    ]


def parse_spots(following_text: str) -> int:
    """Remaining capacity from the text that follows a slot row."""
    if any(marker in following_text for marker in FULL_MARKERS):
        return 0
    match = SPOTS_LEFT_RE.search(following_text)
    if match:
        return int(match.group(1))
    # Unknown wording is treated as unavailable
    return 0


def parse_slots(text: str, lookahead: int = config.SLOT_LOOKAHEAD_LINES) -> list[TimeSlot]:
    """Extract time-slot rows from the rendered text of a court page."""
    lines = text.split("\n")
    slots = []
    for i, line in enumerate(lines):
        match = SLOT_ROW_RE.match(line.strip())
        if not match:
            continue
        start_time, end_time = match.groups()
        following = " ".join(lines[i + 1:i + 1 + lookahead])
        slots.append(
            TimeSlot(
                time=f"{start_time} - {end_time}",
                start_time=start_time,
                end_time=end_time,
                spots=parse_spots(following),
            )
        )
    return slots


def time_to_minutes(label: str) -> int:
    """Minutes since midnight of the first 12-hour clock time in label (0 if none)."""
    match = CLOCK_RE.search(label)
    if not match:
        return 0
    hours, minutes, meridiem = int(match.group(1)), int(match.group(2)), match.group(3).upper()
    if meridiem == "PM" and hours != 12:
        hours += 12
    if meridiem == "AM" and hours == 12:
        hours = 0
    return hours * 60 + minutes


def _to_int(value: str, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def label_to_datetime(label: str) -> datetime:
    """
    Parse a canonical date label for ordering.

    Unknown month falls back to January, a missing day to 1 and a missing year
    to FALLBACK_YEAR. A day past the end of the month rolls into the next one.
    """
    parts = label.upper().split(" ")
    month_name = parts[1] if len(parts) > 1 else ""
    month = MONTHS.index(month_name) + 1 if month_name in MONTHS else 1
    day = _to_int(parts[2], 0) if len(parts) > 2 else 0
    year = _to_int(parts[3], 0) if len(parts) > 3 else 0
    # TODO: infer the year from the surrounding dates when it is missing, the
    # fixed fallback misorders labels that straddle New Year.
    return datetime(year or config.FALLBACK_YEAR, month, 1) + timedelta(days=(day or 1) - 1)


def date_sort_key(label: str) -> tuple[datetime, str]:
    return label_to_datetime(label), label


def time_sort_key(label: str) -> tuple[int, str]:
    return time_to_minutes(label), label


def short_date(label: str) -> str:
    """Abbreviated label for log lines, e.g. MON JAN 5."""
    parts = label.split(" ")
    if len(parts) < 3:
        return label
    return f"{parts[0][:3]} {parts[1][:3]} {parts[2]}"


# --- Diagnostics ---


def describe_clickables(soup: BeautifulSoup) -> list[dict]:
    """Tag, classes, text and id of every clickable element."""
    return [
        {
            "tag": el.name.upper(),
            "classes": " ".join(el.get("class", [])),
            "text": el.get_text(strip=True)[:100],
            "id": el.get("id", ""),
        }
        for el in soup.select(config.CLICKABLE_SELECTOR)
    ]


def find_date_like_elements(soup: BeautifulSoup) -> list[dict]:
    """Leaf elements whose text looks like part of a date."""
    found = []
    body = soup.body or soup
    for el in body.find_all(True):
        if el.find(True) is not None:
            continue
        text = el.get_text(strip=True)
        if any(pattern.match(text) for pattern in DATE_LIKE_RES):
            parent = el.parent
            found.append(
                {
                    "tag": el.name.upper(),
                    "classes": " ".join(el.get("class", [])),
                    "text": text,
                    "parent": " ".join(parent.get("class", [])) if parent else "",
                }
            )
    return found


def find_select_date_button(soup: BeautifulSoup) -> Optional[str]:
    for el in soup.select(config.CLICKABLE_SELECTOR):
        text = el.get_text(strip=True)
        if "SELECT DATE" in text or "Select Date" in text:
            return str(el)[:500]
    return None


def find_date_picker_html(soup: BeautifulSoup) -> Optional[str]:
    """Markup of the date-picker section, preferring the "Select Date" heading's parent."""
    picker_html = None
    picker = soup.select_one(
        "[class*='date'], [class*='calendar'], [class*='picker'], [class*='selector']"
    )
    if picker is not None:
        picker_html = str(picker)[:2000]
    for section in soup.select("h3, h4, h5, .section-header"):
        if "Select Date" in section.get_text() and section.parent is not None:
            picker_html = str(section.parent)[:3000]
    return picker_html


def text_around(text: str, marker: str, length: int = 1000, fallback: int = 2000) -> str:
    index = text.find(marker)
    if index != -1:
        return text[index:index + length]
    return text[:fallback]
