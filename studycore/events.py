"""
Event detection (document text -> calendar candidates).

- Reads the document line by line
- Turns EACH date-bearing line into at most ONE event
- Classifies it as Exam / Assignment / Quiz / Reminder
- Ranks all candidates by confidence and keeps the best few

Important rules:
- 1 line = at most 1 event
- No cross-line context, no recurrence
- Nothing is stored: the caller decides what to keep
"""

from __future__ import annotations

import logging
import re
from datetime import date
from typing import List, Optional, Tuple

from studycore.matchers import find_date, find_location, find_time
from studycore.model import DetectedEvent
from studycore.settings import DetectorSettings

logger = logging.getLogger(__name__)


# Bullets, dashes and colons left in front of the title once the date is removed
_TITLE_LEAD = re.compile(r"^[\s\-–—:•*·]+")
_SPACES = re.compile(r"\s+")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def classify_line(line: str, settings: DetectorSettings) -> Tuple[str, float]:
    """
    Return (event type, base confidence) for one line.

    Categories are checked in priority order; the first keyword hit decides.
    """
    lowered = line.lower()
    for event_type, keywords in settings.type_keywords:
        for keyword in keywords:
            if keyword in lowered:
                return event_type, settings.keyword_confidence
    return settings.default_type, settings.default_confidence


def extract_title(line: str, date_text: str, source_label: Optional[str], settings: DetectorSettings) -> str:
    """
    Build a title from the line without its date.
    """
    title = line.replace(date_text, "", 1)
    title = _SPACES.sub(" ", _TITLE_LEAD.sub("", title)).strip()

    if len(title) < settings.min_title_length:
        title = f"Event from {source_label or 'document'}"

    if len(title) > settings.max_title_length:
        title = title[: settings.max_title_length - 3] + "..."

    return title


# ---------------------------------------------------------------------------
# Line parsing (CORE LOGIC)
# ---------------------------------------------------------------------------


def parse_event_line(
    line: str,
    today: date,
    source_label: Optional[str] = None,
    settings: Optional[DetectorSettings] = None,
) -> Optional[DetectedEvent]:
    """
    Parses exactly one line into at most one event.
    """
    settings = settings or DetectorSettings()

    raw = line.strip()
    if not raw or len(raw) > settings.max_line_length:
        return None

    found = find_date(raw)
    if found is None:
        return None
    date_text, when = found

    if when is None:
        logger.debug("rejected unparseable date %r in line %r", date_text, raw)
        return None

    event_type, confidence = classify_line(raw, settings)

    # Past dates are still offered, just ranked lower
    if when < today:
        confidence *= settings.past_penalty

    return DetectedEvent(
        title=extract_title(raw, date_text, source_label, settings),
        date=when.isoformat(),
        type=event_type,
        confidence=confidence,
        time=find_time(raw),
        notes=raw if len(raw) < settings.max_notes_length else None,
        location=find_location(raw),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def detect_events(
    document: Optional[str],
    source_label: Optional[str] = None,
    settings: Optional[DetectorSettings] = None,
    today: Optional[date] = None,
) -> List[DetectedEvent]:
    """
    Scan a document and return the most likely calendar events, best first.
    """
    if document is None:
        return []
    if not isinstance(document, str):
        raise TypeError(f"document must be a string, got {type(document).__name__}")

    settings = settings or DetectorSettings()
    today = today or date.today()

    events: List[DetectedEvent] = []
    for line in document.splitlines():
        event = parse_event_line(line, today, source_label, settings)
        if event:
            events.append(event)

    logger.debug("detected %d candidate events in %s", len(events), source_label or "document")

    # sorted() is stable: equal confidence keeps document order
    ranked = sorted(events, key=lambda ev: -ev.confidence)
    return ranked[: settings.max_events]
