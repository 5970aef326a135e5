"""
Unit tests for event detection.

"today" is pinned in every test so the past-date penalty is deterministic.
"""

import unittest
from dataclasses import replace
from datetime import date

from studycore.events import classify_line, detect_events, parse_event_line
from studycore.settings import DetectorSettings


SYLLABUS = """
    Math 101 Syllabus

    - Midterm Exam: February 15, 2026 at 9:00 AM in Room 301
    - Final Project Due: March 20, 2026
    - Quiz 1: January 25, 2026 at 2:00 PM
    - Office Hours: Every Wednesday 3-5 PM in Building A
    - Assignment 1 submission deadline: 02/01/2026 11:59 PM
"""


class TestDetectEventsScenarios(unittest.TestCase):
    def test_exam_and_quiz(self) -> None:
        doc = (
            "Math 101\n"
            "- Midterm Exam: February 15, 2026 at 9:00 AM in Room 301\n"
            "- Quiz 1: January 25, 2026 at 2:00 PM"
        )
        events = detect_events(doc, today=date(2026, 1, 1))
        self.assertEqual(len(events), 2)

        exam, quiz = events
        self.assertEqual(exam.type, "Exam")
        self.assertEqual(exam.date, "2026-02-15")
        self.assertEqual(exam.time, "9:00 AM")
        self.assertIn("Room 301", exam.location or "")
        self.assertEqual(exam.title, "Midterm Exam: at 9:00 AM in Room 301")
        self.assertEqual(exam.confidence, 0.8)

        self.assertEqual(quiz.type, "Quiz")
        self.assertEqual(quiz.date, "2026-01-25")
        self.assertEqual(quiz.time, "2:00 PM")
        self.assertIsNone(quiz.location)

    def test_syllabus_ranking_with_past_dates(self) -> None:
        events = detect_events(SYLLABUS, "Math 101 Syllabus.pdf", today=date(2026, 2, 10))

        self.assertEqual(
            [(ev.type, ev.date) for ev in events],
            [
                ("Exam", "2026-02-15"),
                # "final" outranks "project"/"due"
                ("Exam", "2026-03-20"),
                ("Quiz", "2026-01-25"),
                ("Assignment", "2026-02-01"),
            ],
        )
        self.assertEqual([ev.confidence for ev in events], [0.8, 0.8, 0.4, 0.4])
        self.assertEqual(events[3].time, "11:59 PM")

    def test_at_most_five_sorted_by_confidence(self) -> None:
        lines = [f"Reading {i}: March {i}, 2026" for i in range(1, 5)]
        lines += [f"Exam {i}: April {i}, 2026" for i in range(1, 5)]
        events = detect_events("\n".join(lines), today=date(2026, 1, 1))

        self.assertEqual(len(events), 5)
        confs = [ev.confidence for ev in events]
        self.assertEqual(confs, sorted(confs, reverse=True))
        self.assertEqual([ev.type for ev in events[:4]], ["Exam"] * 4)
        # first of the unclassified lines survives the cut
        self.assertEqual(events[4].title, "Reading 1:")

    def test_dates_are_iso(self) -> None:
        for ev in detect_events(SYLLABUS, today=date(2026, 1, 1)):
            self.assertEqual(date.fromisoformat(ev.date).isoformat(), ev.date)

    def test_empty_and_none_documents(self) -> None:
        self.assertEqual(detect_events(""), [])
        self.assertEqual(detect_events(None), [])
        self.assertEqual(detect_events("no dates in here\nat all"), [])

    def test_max_events_setting(self) -> None:
        settings = replace(DetectorSettings(), max_events=2)
        events = detect_events(SYLLABUS, settings=settings, today=date(2026, 1, 1))
        self.assertEqual(len(events), 2)

    def test_non_positive_max_events_is_rejected(self) -> None:
        for bad in (0, -1):
            with self.assertRaises(ValueError):
                DetectorSettings(max_events=bad)


class TestParseEventLine(unittest.TestCase):
    today = date(2026, 1, 1)

    def test_iso_date_assignment(self) -> None:
        ev = parse_event_line("Essay due 2026-03-01", self.today)
        self.assertIsNotNone(ev)
        assert ev is not None
        self.assertEqual(ev.type, "Assignment")
        self.assertEqual(ev.date, "2026-03-01")
        self.assertEqual(ev.title, "Essay due")
        self.assertEqual(ev.notes, "Essay due 2026-03-01")

    def test_abbreviated_month_and_lab_location(self) -> None:
        ev = parse_event_line("Sept. 9 2026 homework due in Lab B2", self.today)
        assert ev is not None
        self.assertEqual(ev.date, "2026-09-09")
        self.assertEqual(ev.type, "Assignment")
        self.assertEqual(ev.location, "Lab B2")

    def test_two_digit_year(self) -> None:
        ev = parse_event_line("Quiz 3 on 4/7/26", self.today)
        assert ev is not None
        self.assertEqual(ev.date, "2026-04-07")
        self.assertEqual(ev.type, "Quiz")

    def test_capitalized_place_location(self) -> None:
        ev = parse_event_line("Study group: April 2, 2026 at Campus Recreation Center", self.today)
        assert ev is not None
        self.assertEqual(ev.type, "Reminder")
        self.assertEqual(ev.confidence, 0.8)
        self.assertEqual(ev.location, "Campus Recreation Center")

    def test_hour_only_time(self) -> None:
        ev = parse_event_line("Guest talk May 4, 2026 3 PM", self.today)
        assert ev is not None
        self.assertEqual(ev.time, "3 PM")
        self.assertEqual(ev.type, "Reminder")
        self.assertEqual(ev.confidence, 0.5)

    def test_invalid_date_returns_none(self) -> None:
        self.assertIsNone(parse_event_line("Quiz on 02/30/2026", self.today))

    def test_line_without_date_returns_none(self) -> None:
        self.assertIsNone(parse_event_line("Midterm exam next week", self.today))

    def test_long_line_returns_none(self) -> None:
        line = "Exam on March 3, 2026 " + "x" * 200
        self.assertIsNone(parse_event_line(line, self.today))

    def test_empty_line_returns_none(self) -> None:
        self.assertIsNone(parse_event_line("   ", self.today))

    def test_fallback_title_uses_source_label(self) -> None:
        ev = parse_event_line("- March 3, 2026", self.today, "syllabus.pdf")
        assert ev is not None
        self.assertEqual(ev.title, "Event from syllabus.pdf")

        ev2 = parse_event_line("March 3, 2026", self.today)
        assert ev2 is not None
        self.assertEqual(ev2.title, "Event from document")

    def test_long_title_is_truncated_and_notes_dropped(self) -> None:
        line = "Project milestone March 3, 2026 " + "word " * 30
        ev = parse_event_line(line, self.today)
        assert ev is not None
        self.assertEqual(len(ev.title), 100)
        self.assertTrue(ev.title.endswith("..."))
        self.assertGreaterEqual(len(line.strip()), 150)
        self.assertIsNone(ev.notes)

    def test_past_date_halves_confidence(self) -> None:
        ev = parse_event_line("Final exam: December 1, 2025", self.today)
        assert ev is not None
        self.assertEqual(ev.confidence, 0.4)

        same_day = parse_event_line("Final exam: January 1, 2026", self.today)
        assert same_day is not None
        self.assertEqual(same_day.confidence, 0.8)


class TestClassifyLine(unittest.TestCase):
    def test_priority_order(self) -> None:
        settings = DetectorSettings()
        self.assertEqual(classify_line("Quiz before the midterm", settings), ("Exam", 0.8))
        self.assertEqual(classify_line("Homework quiz", settings), ("Assignment", 0.8))
        self.assertEqual(classify_line("Pop quiz", settings), ("Quiz", 0.8))
        self.assertEqual(classify_line("Office hours", settings), ("Reminder", 0.8))
        self.assertEqual(classify_line("Field trip", settings), ("Reminder", 0.5))


if __name__ == "__main__":
    unittest.main()
