"""
Relevance extraction (document + question -> excerpts).

Answers are grounded in the document only:
- the document is cut into sentence segments
- each segment is scored by how often the question's words occur in it
- the best segments are returned verbatim, or a "not found" result

Nothing here raises for string input. Every path ends in an AnswerResult
so a chat screen always has something to show.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from studycore.model import REASON_EMPTY_DOCUMENT, REASON_NO_MATCH, AnswerResult, Excerpt
from studycore.settings import AnswerSettings
from studycore.text import normalize_phrase, segment_sentences, tokenize_question

logger = logging.getLogger(__name__)


def _as_text(value: Optional[str], name: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a string, got {type(value).__name__}")
    return value


def score_segment(segment: str, tokens: List[str], phrase: str, settings: AnswerSettings) -> float:
    """
    Score one segment: occurrence_weight per token occurrence, plus
    phrase_bonus if the whole question appears in it.
    """
    lowered = segment.lower()
    score = 0.0
    for tok in tokens:
        score += lowered.count(tok) * settings.occurrence_weight
    if phrase and phrase in lowered:
        score += settings.phrase_bonus
    return score


def rank_segments(
    segments: List[str],
    tokens: List[str],
    phrase: str,
    settings: AnswerSettings,
) -> List[Tuple[str, float]]:
    """
    Return (segment, score) pairs with a positive score, best first.

    sorted() is stable, so equal scores keep document order.
    """
    scored: List[Tuple[str, float]] = []
    for seg in segments:
        score = score_segment(seg, tokens, phrase, settings)
        if score > 0:
            scored.append((seg, score))

    return sorted(scored, key=lambda pair: -pair[1])


def answer(
    document: Optional[str],
    question: Optional[str],
    settings: Optional[AnswerSettings] = None,
) -> AnswerResult:
    """
    Decide whether document answers question and pick the supporting excerpts.
    """
    settings = settings or AnswerSettings()
    doc = _as_text(document, "document")
    q = _as_text(question, "question")

    if len(doc.strip()) < max(settings.min_document_length, 1):
        logger.debug("document too short (%d chars), not scoring", len(doc.strip()))
        return AnswerResult.miss(REASON_EMPTY_DOCUMENT)

    if not q.strip():
        return AnswerResult.miss()

    segments = segment_sentences(doc, settings.min_segment_length)
    tokens = tokenize_question(q, settings.stop_words, settings.min_token_length)
    logger.debug("%d segments, tokens=%s", len(segments), tokens)

    # Greetings and vague prompts: show the start of the document instead
    if not tokens:
        head = [Excerpt(text=seg, score=0.0) for seg in segments[: settings.fallback_count]]
        if not head:
            return AnswerResult.miss(REASON_NO_MATCH)
        return AnswerResult.hit(head)

    ranked = rank_segments(segments, tokens, normalize_phrase(q), settings)
    if not ranked:
        return AnswerResult.miss(REASON_NO_MATCH)

    top = [Excerpt(text=seg, score=score) for seg, score in ranked[: settings.top_k]]
    return AnswerResult.hit(top)
