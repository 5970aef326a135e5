"""
studycore: document-grounded answers and calendar event detection for study material.
"""

from studycore.answer import answer
from studycore.events import detect_events
from studycore.model import AnswerResult, DetectedEvent, Excerpt
from studycore.settings import AnswerSettings, DetectorSettings
from studycore.text import chunk_text

__all__ = [
    "answer",
    "detect_events",
    "chunk_text",
    "AnswerResult",
    "DetectedEvent",
    "Excerpt",
    "AnswerSettings",
    "DetectorSettings",
]
