#!/usr/bin/env python3
"""
Saiten log report.

Reads one karaoke scoring-device log and prints a report per performance.

Stages:
  0: tokenize → reservation index → session segmentation
  1: per-session extraction (seimitsu techniques or ysai scoring)
  2: plain-text report on stdout

Usage:
    python3 saiten_cli.py device.log                   # dialect auto-detected
    python3 saiten_cli.py device.log --dialect ysai
    python3 saiten_cli.py device.log --dialect ysai --expected-rhythm
    python3 saiten_cli.py device.log --verbose         # progress on stderr
"""

import argparse
import sys
from pathlib import Path
from typing import List

from config import DIALECT_SEIMITSU, DIALECT_YSAI, DIALECTS, LOG_ENCODING
from saiten_extraction import scoring_extractor, technique_extractor
from saiten_prep.log_tokenizer import LogLine, tokenize
from saiten_prep.reservation_index import build_reservation_index
from saiten_prep.session_segmenter import SessionSegmenter
from saiten_report.report_writer import write_report

EXTRACTORS = {
    DIALECT_SEIMITSU: technique_extractor.extract_sessions,
    DIALECT_YSAI: scoring_extractor.extract_sessions,
}


def detect_dialect(lines: List[LogLine]) -> str:
    """ysai if any line opens a ysai session, otherwise seimitsu."""
    probe = SessionSegmenter(DIALECT_YSAI)
    if any(probe.is_start(line.text) for line in lines):
        return DIALECT_YSAI
    return DIALECT_SEIMITSU


def run(raw: str, dialect: str = "auto", expected_rhythm: bool = False, verbose: bool = False) -> str:
    """Full pass over already-loaded log text. Returns the report."""
    lines = tokenize(raw)
    if dialect == "auto":
        dialect = detect_dialect(lines)
    if verbose:
        print(f"Loaded {len(lines)} lines (dialect: {dialect})", file=sys.stderr)

    index = build_reservation_index(lines)

    segmenter = SessionSegmenter(dialect)
    for line in lines:
        segmenter.feed(line)
    sessions = segmenter.finish()

    EXTRACTORS[dialect](sessions)

    if verbose:
        print(f"Found {len(sessions)} sessions, {len(index)} reservations", file=sys.stderr)
        if dialect == DIALECT_SEIMITSU:
            skipped = len(sessions) - len(technique_extractor.scored_sessions(sessions))
            print(f"Skipped {skipped} unscored sessions", file=sys.stderr)
        if segmenter.discarded_count:
            print(f"Discarded {segmenter.discarded_count} lines outside any session", file=sys.stderr)

    return write_report(dialect, sessions, index, expected_rhythm=expected_rhythm)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Per-performance report from a karaoke scoring-device log")
    parser.add_argument("log_file", help="Device log file (UTF-8)")
    parser.add_argument("--dialect", choices=("auto",) + DIALECTS, default="auto",
                        help="Firmware log dialect (default: auto-detect)")
    parser.add_argument("--expected-rhythm", action="store_true",
                        help="ysai: also print the rhythm value estimated from timing")
    parser.add_argument("--verbose", action="store_true", help="Progress output on stderr")

    args = parser.parse_args(argv)

    path = Path(args.log_file)
    try:
        raw = path.read_text(encoding=LOG_ENCODING)
    except (OSError, UnicodeDecodeError) as e:
        print(f"ERROR: Could not read {path}: {e}", file=sys.stderr)
        return 1

    report = run(raw, dialect=args.dialect, expected_rhythm=args.expected_rhythm, verbose=args.verbose)
    if report:
        print(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
