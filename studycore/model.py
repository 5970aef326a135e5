"""
Central data model definitions used across the project.

This module defines the canonical result objects so that:
- the answer engine and the event detector share one vocabulary
- callers (chat, upload and calendar screens, the CLI) get plain data back
- results can be turned into JSON without any extra glue
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


# Reasons attached to an unsuccessful AnswerResult
REASON_EMPTY_DOCUMENT = "empty_document"
REASON_NO_MATCH = "no_match"

EVENT_TYPES = ("Exam", "Assignment", "Quiz", "Reminder")


@dataclass(frozen=True)
class Excerpt:
    """
    One scored piece of document text returned as evidence for an answer.
    """

    text: str
    score: float

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "score": self.score}


@dataclass(frozen=True)
class AnswerResult:
    """
    Outcome of one question against one document.

    found is True exactly when excerpts is non-empty.
    """

    found: bool
    excerpts: List[Excerpt] = field(default_factory=list)
    reason: Optional[str] = None

    @classmethod
    def hit(cls, excerpts: List[Excerpt]) -> "AnswerResult":
        return cls(found=bool(excerpts), excerpts=list(excerpts))

    @classmethod
    def miss(cls, reason: Optional[str] = None) -> "AnswerResult":
        return cls(found=False, excerpts=[], reason=reason)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "found": self.found,
            "excerpts": [e.to_dict() for e in self.excerpts],
        }
        if self.reason is not None:
            out["reason"] = self.reason
        return out


@dataclass(frozen=True)
class DetectedEvent:
    """
    Represents one calendar candidate found in a single line of text.

    The detector only proposes events; accepting and storing them is up to the caller.
    """

    title: str
    date: str
    type: str
    confidence: float
    time: Optional[str] = None
    notes: Optional[str] = None
    location: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "title": self.title,
            "date": self.date,
            "type": self.type,
            "confidence": self.confidence,
        }
        for key in ("time", "notes", "location"):
            value = getattr(self, key)
            if value is not None:
                out[key] = value
        return out
