"""
CLI (Command Line Interface).

This module provides quick terminal commands over already-extracted text files, e.g.:

    studycore answer notes.txt "What is machine learning?"
    studycore events syllabus.txt --source "Math 101 Syllabus.pdf"
    studycore export syllabus.txt out.ics
    studycore chunk notes.txt --size 800 --overlap 150

Note:
- FILE may be '-' to read from stdin
- --json prints machine-readable output instead of tables
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from studycore.answer import answer
from studycore.events import detect_events
from studycore.export_ics import export_events_to_ics
from studycore.model import REASON_EMPTY_DOCUMENT
from studycore.settings import AnswerSettings, DetectorSettings
from studycore.text import chunk_text

console = Console()
logger = logging.getLogger("studycore")


def _read_document(source: str) -> Optional[str]:
    """
    Read a plain-text document from a path or stdin ('-').

    CLI behavior: never crash on unreadable input. Print a message and
    return None so the command can exit with a non-zero code.
    """
    if source == "-":
        return sys.stdin.read()
    try:
        return Path(source).read_text(encoding="utf-8")
    except FileNotFoundError:
        console.print(f"File not found: {escape(source)}")
    except (OSError, UnicodeDecodeError) as exc:
        console.print(f"Could not read {escape(source)}: {escape(str(exc))}")
    return None


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def _cmd_answer(args: argparse.Namespace) -> int:
    """
    Answer a question strictly from the document.
    """
    question = (args.question or "").strip()
    if not question:
        console.print("Please provide a question.")
        return 1

    document = _read_document(args.file)
    if document is None:
        return 1

    settings = AnswerSettings()
    if args.top_k is not None:
        try:
            settings = replace(settings, top_k=args.top_k)
        except ValueError as exc:
            console.print(escape(str(exc)))
            return 1

    result = answer(document, question, settings)

    if args.json:
        _print_json(result.to_dict())
        return 0

    if not result.found:
        if result.reason == REASON_EMPTY_DOCUMENT:
            console.print("The document is empty. Upload a document with text first.")
        else:
            console.print("I couldn't find this in your document.")
        return 0

    table = Table(title="Excerpts", box=box.SIMPLE)
    table.add_column("#", justify="right")
    table.add_column("Score", justify="right")
    table.add_column("Text")
    for i, ex in enumerate(result.excerpts, start=1):
        table.add_row(str(i), f"{ex.score:g}", escape(ex.text))
    console.print(table)
    return 0


def _detector_settings(args: argparse.Namespace) -> Optional[DetectorSettings]:
    """
    Apply --max-events; print the problem and return None if it is invalid.
    """
    settings = DetectorSettings()
    if getattr(args, "max_events", None) is not None:
        try:
            settings = replace(settings, max_events=args.max_events)
        except ValueError as exc:
            console.print(escape(str(exc)))
            return None
    return settings


def _cmd_events(args: argparse.Namespace) -> int:
    """
    List calendar candidates found in the document.
    """
    document = _read_document(args.file)
    if document is None:
        return 1

    settings = _detector_settings(args)
    if settings is None:
        return 1

    events = detect_events(document, args.source, settings)

    if args.json:
        _print_json([ev.to_dict() for ev in events])
        return 0

    if not events:
        console.print("No events found.")
        return 0

    table = Table(title=f"Detected events (max {settings.max_events})", box=box.SIMPLE)
    table.add_column("Date")
    table.add_column("Time")
    table.add_column("Type")
    table.add_column("Title")
    table.add_column("Location")
    table.add_column("Conf.", justify="right")
    for ev in events:
        table.add_row(ev.date, ev.time or "", ev.type, escape(ev.title), escape(ev.location or ""), f"{ev.confidence:.2f}")
    console.print(table)
    return 0


def _cmd_export(args: argparse.Namespace) -> int:
    """
    Detect events and write them into an iCalendar (.ics) file.
    """
    document = _read_document(args.file)
    if document is None:
        return 1

    settings = _detector_settings(args)
    if settings is None:
        return 1

    events = detect_events(document, args.source, settings)
    if not events:
        console.print("No events to export.")
        return 0

    n = export_events_to_ics(events, args.out)
    console.print(f"Exported {n} events to: {escape(args.out)}")
    return 0


def _cmd_chunk(args: argparse.Namespace) -> int:
    """
    Show how a document is cut into overlapping word windows.
    """
    document = _read_document(args.file)
    if document is None:
        return 1

    try:
        chunks = chunk_text(document, chunk_size=args.size, overlap=args.overlap)
    except ValueError as exc:
        console.print(escape(str(exc)))
        return 1

    console.print(f"Chunks: {len(chunks)}")
    for i, chunk in enumerate(chunks, start=1):
        preview = chunk if len(chunk) <= 80 else chunk[:77] + "..."
        console.print(f"{i:>3} | {len(chunk.split())} words | {preview}", markup=False)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="studycore", description="Document-grounded answers and event detection")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_answer = sub.add_parser("answer", help="Answer a question from a document")
    p_answer.add_argument("file", type=str, help="Plain-text document ('-' for stdin)")
    p_answer.add_argument("question", type=str, help="Question text")
    p_answer.add_argument("--top-k", type=int, default=None, help="Number of excerpts (default 3)")
    p_answer.add_argument("--json", action="store_true", help="Print JSON")

    p_events = sub.add_parser("events", help="Detect calendar events in a document")
    p_events.add_argument("file", type=str, help="Plain-text document ('-' for stdin)")
    p_events.add_argument("--source", type=str, default=None, help="Source label (e.g. file name)")
    p_events.add_argument("--max-events", type=int, default=None, help="Maximum events (default 5)")
    p_events.add_argument("--json", action="store_true", help="Print JSON")

    p_export = sub.add_parser("export", help="Export detected events to .ics")
    p_export.add_argument("file", type=str, help="Plain-text document ('-' for stdin)")
    p_export.add_argument("out", type=str, help="Output file path (e.g. out.ics)")
    p_export.add_argument("--source", type=str, default=None, help="Source label (e.g. file name)")
    p_export.add_argument("--max-events", type=int, default=None, help="Maximum events (default 5)")

    p_chunk = sub.add_parser("chunk", help="Split a document into overlapping word chunks")
    p_chunk.add_argument("file", type=str, help="Plain-text document ('-' for stdin)")
    p_chunk.add_argument("--size", type=int, default=800, help="Words per chunk")
    p_chunk.add_argument("--overlap", type=int, default=150, help="Words shared between chunks")

    return parser


def _setup_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    _setup_logging(args.verbose)
    logger.debug("command: %s", args.command)

    if args.command == "answer":
        raise SystemExit(_cmd_answer(args))
    if args.command == "events":
        raise SystemExit(_cmd_events(args))
    if args.command == "export":
        raise SystemExit(_cmd_export(args))
    if args.command == "chunk":
        raise SystemExit(_cmd_chunk(args))

    raise SystemExit(2)
