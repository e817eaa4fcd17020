#!/usr/bin/env python3
"""
Technique Extractor (seimitsu dialect)
======================================

Reads the interior of each seimitsu session and collects:
  - the reservation key the session was started for ("SEIMITSU RQNO:")
  - how often each vocal technique was detected
  - the DIO / SPR / Bonus score triple
  - the two AI sensitivity values ("<float>, <float>]")

The score and sensitivity lines are sometimes wrapped across two log
lines, so both patterns are matched against the previous line joined to
the current one. The window never holds more than that one previous
line.

Every capture is last-match-wins: a later RQNO, score or sensitivity
line replaces an earlier one. Sessions that never log a score triple are
incomplete performances and are left out of the report.
"""

import re
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from config import RESERVATION_KEY_PATTERN
from saiten_prep.session_segmenter import Session
from saiten_prep.technique_names import technique_name

REQUEST_PATTERN = re.compile(r"SEIMITSU RQNO: (" + RESERVATION_KEY_PATTERN + r")")
TECHNIQUE_PATTERN = re.compile(r"SEIMITSU detected .*? tech (\d+)")
SCORE_PATTERN = re.compile(r"DIO\s*=\s*(\d+), SPR\s*=\s*(\d+), Bonus\s*=\s*(\d+)")
SENSITIVITY_PATTERN = re.compile(r"(\d+\.\d+),\s*(\d+\.\d+)\]")


@dataclass
class ScoreTriple:
    dio: int
    spr: int
    bonus: int

    def to_dict(self) -> Dict:
        return {"dio": self.dio, "spr": self.spr, "bonus": self.bonus}


@dataclass
class TechniqueMetrics:
    """Everything the seimitsu scorer logged for one session."""
    technique_counts: Dict[str, int] = field(default_factory=dict)
    scores: Optional[ScoreTriple] = None
    sensitivity: Optional[Tuple[float, float]] = None

    @property
    def is_scored(self) -> bool:
        return self.scores is not None

    def to_dict(self) -> Dict:
        return {
            "technique_counts": dict(self.technique_counts),
            "scores": self.scores.to_dict() if self.scores else None,
            "sensitivity": list(self.sensitivity) if self.sensitivity else None,
        }


def _last_match(pattern: re.Pattern, text: str) -> Optional[re.Match]:
    last = None
    for match in pattern.finditer(text):
        last = match
    return last


def match_window(previous: str, current: str, metrics: TechniqueMetrics):
    """Match the score and sensitivity patterns against a two-line window.

    The latest match in the window wins, so a value on the current line
    beats one still visible on the previous line.
    """
    combined = previous + " " + current

    match = _last_match(SCORE_PATTERN, combined)
    if match:
        metrics.scores = ScoreTriple(*(int(g) for g in match.groups()))

    match = _last_match(SENSITIVITY_PATTERN, combined)
    if match:
        metrics.sensitivity = (float(match.group(1)), float(match.group(2)))


def extract_session(session: Session) -> TechniqueMetrics:
    """Fill in resolved_key and metrics for one seimitsu session."""
    counts = defaultdict(int)
    metrics = TechniqueMetrics()
    previous = ""

    for line in session.interior_lines:
        text = line.text

        match = REQUEST_PATTERN.search(text)
        if match:
            session.resolved_key = match.group(1)

        match = TECHNIQUE_PATTERN.search(text)
        if match:
            counts[technique_name(int(match.group(1)))] += 1

        match_window(previous, text, metrics)
        previous = text

    metrics.technique_counts = dict(counts)
    session.metrics = metrics
    return metrics


def extract_sessions(sessions: List[Session]) -> List[Session]:
    """Extract every session in place and return them in the same order."""
    for session in sessions:
        extract_session(session)
    return sessions


def scored_sessions(sessions: List[Session]) -> List[Session]:
    """Sessions with a score triple, in their original order."""
    return [s for s in sessions if s.metrics is not None and s.metrics.is_scored]
