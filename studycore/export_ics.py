"""
iCalendar (.ics) export.

We convert accepted DetectedEvents into a calendar file that can be imported into:
- Google Calendar
- Outlook
- Apple Calendar

Events without a time become all-day entries; timed events last one hour.
"""

from __future__ import annotations

import hashlib
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Iterable, Optional

from studycore.model import DetectedEvent


_TIME_FORMATS = ("%I:%M %p", "%I %p")


def _ics_escape(text: str) -> str:
    """
    Escape text for ICS fields (very small subset, sufficient for our use).
    """
    return (
        text.replace("\\", "\\\\").replace("\r\n", "\\n").replace("\n", "\\n").replace(";", "\\;").replace(",", "\\,")
    )


def _parse_time(time_text: str) -> Optional[datetime]:
    """
    Parse '9:00 AM', '9:00am' or '3 PM' into a datetime (date part unused).
    """
    # "9:00am" -> "9:00 AM"
    cleaned = time_text.strip().upper().replace("AM", " AM").replace("PM", " PM")
    cleaned = " ".join(cleaned.split())
    for fmt in _TIME_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt)
        except ValueError:
            continue
    return None


def _uid(ev: DetectedEvent) -> str:
    digest = hashlib.sha1(f"{ev.date}|{ev.time}|{ev.title}".encode("utf-8")).hexdigest()[:16]
    return f"{ev.date.replace('-', '')}-{digest}@studycore"


def export_events_to_ics(events: Iterable[DetectedEvent], out_path: str | Path) -> int:
    """
    Export events to an .ics file. Returns number of exported events.
    """
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)

    lines: list[str] = []
    lines.append("BEGIN:VCALENDAR")
    lines.append("VERSION:2.0")
    lines.append("PRODID:-//studycore//EN")
    lines.append("CALSCALE:GREGORIAN")

    dtstamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")

    count = 0
    for ev in events:
        try:
            day = datetime.strptime(ev.date, "%Y-%m-%d")
        except ValueError:
            continue

        lines.append("BEGIN:VEVENT")
        lines.append(f"UID:{_ics_escape(_uid(ev))}")
        lines.append(f"DTSTAMP:{dtstamp}")

        clock = _parse_time(ev.time) if ev.time else None
        if clock is None:
            lines.append(f"DTSTART;VALUE=DATE:{day.strftime('%Y%m%d')}")
            lines.append(f"DTEND;VALUE=DATE:{(day + timedelta(days=1)).strftime('%Y%m%d')}")
        else:
            start = day.replace(hour=clock.hour, minute=clock.minute)
            lines.append(f"DTSTART:{start.strftime('%Y%m%dT%H%M00')}")
            lines.append(f"DTEND:{(start + timedelta(hours=1)).strftime('%Y%m%dT%H%M00')}")

        lines.append(f"SUMMARY:{_ics_escape(f'{ev.type}: {ev.title}')}")
        if ev.location:
            lines.append(f"LOCATION:{_ics_escape(ev.location)}")
        if ev.notes:
            lines.append(f"DESCRIPTION:{_ics_escape(ev.notes)}")
        lines.append(f"CATEGORIES:{ev.type.upper()}")
        lines.append("END:VEVENT")
        count += 1

    lines.append("END:VCALENDAR")

    # ICS standard uses CRLF
    out.write_text("\r\n".join(lines) + "\r\n", encoding="utf-8")
    return count
