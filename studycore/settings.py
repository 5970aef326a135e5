"""
Tunable defaults for both engines.

The scoring weights and confidence levels are plain tuning values.
They live here as dataclass defaults so callers can override single values:

    settings = dataclasses.replace(AnswerSettings(), top_k=5)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Tuple


DEFAULT_STOP_WORDS: FrozenSet[str] = frozenset(
    {
        "a", "an", "and", "are", "about", "can", "could", "define", "describe",
        "do", "does", "explain", "for", "from", "give", "how", "in", "is", "it",
        "me", "of", "on", "please", "tell", "that", "the", "their", "there",
        "these", "this", "those", "to", "was", "were", "what", "when", "where",
        "which", "who", "why", "with", "would", "you", "your",
    }
)

# Keyword categories in priority order: first category with a hit wins
DEFAULT_TYPE_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("Exam", ("exam", "midterm", "final", "test")),
    ("Assignment", ("assignment", "essay", "paper", "project", "homework", "due")),
    ("Quiz", ("quiz", "pop quiz", "short test")),
    ("Reminder", ("meeting", "review", "session", "office hours", "study group")),
)


def _require_positive(**values: int) -> None:
    for name, value in values.items():
        if value <= 0:
            raise ValueError(f"{name} must be positive: {value!r}")


@dataclass(frozen=True)
class AnswerSettings:
    """
    Knobs of the relevance extractor.
    """

    min_document_length: int = 10
    min_segment_length: int = 20
    min_token_length: int = 4
    occurrence_weight: float = 2.0
    phrase_bonus: float = 10.0
    top_k: int = 3
    fallback_count: int = 3
    stop_words: FrozenSet[str] = field(default=DEFAULT_STOP_WORDS)

    def __post_init__(self) -> None:
        _require_positive(top_k=self.top_k, fallback_count=self.fallback_count)


@dataclass(frozen=True)
class DetectorSettings:
    """
    Knobs of the event detector.
    """

    max_line_length: int = 200
    max_notes_length: int = 150
    max_title_length: int = 100
    min_title_length: int = 3
    keyword_confidence: float = 0.8
    default_confidence: float = 0.5
    past_penalty: float = 0.5
    max_events: int = 5
    type_keywords: Tuple[Tuple[str, Tuple[str, ...]], ...] = field(default=DEFAULT_TYPE_KEYWORDS)
    default_type: str = "Reminder"

    def __post_init__(self) -> None:
        _require_positive(max_events=self.max_events)
