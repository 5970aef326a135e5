"""
Pattern matchers used by the event detector.

Each concern (date, time, location) is an ordered list of matchers.
The detector tries them in order and the first hit wins, so adding a new
format means appending a matcher here, not touching the detector loop.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, List, Optional, Pattern, Tuple


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------

_MONTHS = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}

_MONTH_NAMES = (
    "January|February|March|April|May|June|July|August|September|October|November|December"
    "|Jan|Feb|Mar|Apr|Jun|Jul|Aug|Sept|Sep|Oct|Nov|Dec"
)


@dataclass(frozen=True)
class DateMatcher:
    """
    One date format: a regex to find it and a function turning the match into a date.
    """

    name: str
    pattern: Pattern[str]
    to_date: Callable[["re.Match[str]"], Optional[date]]

    def search(self, line: str) -> Optional["re.Match[str]"]:
        return self.pattern.search(line)


def _safe_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _long_form(m: "re.Match[str]") -> Optional[date]:
    month = _MONTHS.get(m.group("month")[:3].lower())
    if month is None:
        return None
    return _safe_date(int(m.group("year")), month, int(m.group("day")))


def _slash_form(m: "re.Match[str]") -> Optional[date]:
    year_s = m.group("year")
    if len(year_s) == 2:
        # same pivot as strptime's %y: 69-99 -> 19xx, 00-68 -> 20xx
        try:
            year = datetime.strptime(year_s, "%y").year
        except ValueError:
            return None
    elif len(year_s) == 4:
        year = int(year_s)
    else:
        return None
    return _safe_date(year, int(m.group("month")), int(m.group("day")))


def _iso_form(m: "re.Match[str]") -> Optional[date]:
    return _safe_date(int(m.group("year")), int(m.group("month")), int(m.group("day")))


DATE_MATCHERS: List[DateMatcher] = [
    # January 15, 2026 / Jan. 15 2026
    DateMatcher(
        "long",
        re.compile(
            rf"\b(?P<month>{_MONTH_NAMES})\.?\s+(?P<day>\d{{1,2}}),?\s+(?P<year>\d{{4}})\b",
            re.IGNORECASE,
        ),
        _long_form,
    ),
    # 1/15/26 or 01/15/2026
    DateMatcher(
        "slash",
        re.compile(r"\b(?P<month>\d{1,2})/(?P<day>\d{1,2})/(?P<year>\d{2,4})\b"),
        _slash_form,
    ),
    # 2026-01-15
    DateMatcher(
        "iso",
        re.compile(r"\b(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})\b"),
        _iso_form,
    ),
]


def find_date(line: str, matchers: Optional[List[DateMatcher]] = None) -> Optional[Tuple[str, Optional[date]]]:
    """
    Return (matched text, parsed date) for the first matcher family that hits.

    The parsed date is None when the text looks like a date but is not one
    (e.g. 02/30/2026). Returns None when no family matches at all.
    """
    for matcher in matchers if matchers is not None else DATE_MATCHERS:
        m = matcher.search(line)
        if m:
            return m.group(0), matcher.to_date(m)
    return None


# ---------------------------------------------------------------------------
# Times
# ---------------------------------------------------------------------------

TIME_PATTERNS: List[Pattern[str]] = [
    # 9:00 AM, 9:00am
    re.compile(r"\b\d{1,2}:\d{2}\s*(?:AM|PM)\b", re.IGNORECASE),
    # 9am, 3 PM
    re.compile(r"\b\d{1,2}\s*(?:AM|PM)\b", re.IGNORECASE),
]


def find_time(line: str) -> Optional[str]:
    for pattern in TIME_PATTERNS:
        m = pattern.search(line)
        if m:
            return m.group(0)
    return None


# ---------------------------------------------------------------------------
# Locations
# ---------------------------------------------------------------------------

_LEADING_PREPOSITION = re.compile(r"^(?:at|in)\s+", re.IGNORECASE)

LOCATION_PATTERNS: List[Pattern[str]] = [
    # Room 301, Lab B2, Building A; the identifier needs a digit or a capital
    re.compile(r"\b(?i:room|hall|building|lab|library|office)\s+(?=\w*[0-9A-Z])\w+"),
    # at Smith Hall, in Campus Recreation Center
    re.compile(
        r"\b(?:at|in)\s+((?:[A-Z][\w'-]*\s+)+(?:Hall|Room|Lab|Library|Building|Center))\b"
    ),
]


def find_location(line: str) -> Optional[str]:
    for pattern in LOCATION_PATTERNS:
        m = pattern.search(line)
        if m:
            return _LEADING_PREPOSITION.sub("", m.group(0)).strip()
    return None
