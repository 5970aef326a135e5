"""
Text helpers shared by the engines.

- split a document into sentence-like segments
- turn a question into meaningful search tokens
- cut long text into overlapping word windows
"""

from __future__ import annotations

import re
from typing import Iterable, List


# One or more sentence terminators end a segment
_SENTENCE_END = re.compile(r"[.!?]+")

# Punctuation around a question word ("intelligence?", "(ai)")
_EDGE_PUNCT = re.compile(r"^\W+|\W+$")


def segment_sentences(text: str, min_length: int = 20) -> List[str]:
    """
    Split text on runs of '.', '!' or '?' and return trimmed segments.

    Segments shorter than min_length are dropped as noise.
    Every returned segment is a literal substring of text.
    """
    segments: List[str] = []
    for part in _SENTENCE_END.split(text):
        seg = part.strip()
        if len(seg) >= min_length:
            segments.append(seg)
    return segments


def tokenize_question(
    question: str,
    stop_words: Iterable[str],
    min_length: int = 4,
) -> List[str]:
    """
    Lowercase, split on whitespace, strip punctuation and drop stop-words
    and short tokens. Repeated words are kept, so each one is scored.
    """
    stop = set(stop_words)
    tokens: List[str] = []

    for raw in question.lower().split():
        tok = _EDGE_PUNCT.sub("", raw)
        if len(tok) < min_length or tok in stop:
            continue
        tokens.append(tok)

    return tokens


def normalize_phrase(question: str) -> str:
    # "What is AI?" -> "what is ai"
    return question.strip().lower().rstrip(".!?").strip()


def chunk_text(text: str, chunk_size: int = 800, overlap: int = 150) -> List[str]:
    """
    Split text into windows of chunk_size words, each sharing overlap words
    with the previous window.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive: {chunk_size!r}")
    if overlap < 0 or overlap >= chunk_size:
        raise ValueError(f"overlap must be in [0, chunk_size): {overlap!r}")

    words = text.split()
    if not words:
        return []

    chunks: List[str] = []
    step = chunk_size - overlap
    start = 0
    while start < len(words):
        chunks.append(" ".join(words[start:start + chunk_size]))
        start += step

    return chunks
