#!/usr/bin/env python3
"""
Scoring Extractor (ysai dialect)
================================

The ysai scorer computes every performance four times and logs each
breakdown with a phase index:

  Phase 0 (base):       plain score
  Phase 1 (note):       note-accuracy bonus applied
  Phase 2 (vibrato):    vibrato bonus applied
  Phase 3 (expression): expression bonus applied

The highest total is the final score. Alongside the phases it logs
common indicators (vibrato rank, timing offset, emotion, ...) that
belong to the performance, not to a phase.

EXTRACTION:
  1. Before the "SPR Saiten" section marker only the songnum line is
     read. The marker arms extraction for the rest of the session.
  2. Armed lines are classified by their exact field prefix. The value
     is the first whitespace-delimited run of digits on the line.
  3. Timing is a signed offset printed as unsigned 32-bit; values at or
     above 100000 are wrapped back below zero.

A field that never appears stays None. Nothing is defaulted to zero,
so max/bonus computations only ever see values the device logged.
"""

import math
import re
from dataclasses import dataclass, field, fields
from typing import Dict, List, Optional

from config import (
    EXPECTED_RHYTHM_BASE,
    RESERVATION_KEY_PATTERN,
    TIMING_WRAP_THRESHOLD,
    UINT32_RANGE,
)
from saiten_prep.session_segmenter import Session

SONGNUM_PATTERN = re.compile(r"songnum\s*:\s*(" + RESERVATION_KEY_PATTERN + r")")
SECTION_MARKER = "YSAI -----SAI : SPR Saiten -----"
VALUE_PATTERN = re.compile(r"\s(\d+)(?=\s|$)")

PHASE_NAMES = ("base", "note_bonus", "vib_bonus", "exp_bonus")
PHASE_COUNT = len(PHASE_NAMES)

# ScoreRecord field -> line prefix, formatted with the phase index
PHASE_FIELD_PREFIXES = {
    "total": "YSAI >[0]Total       ({phase})",
    "note": "YSAI  [0] Note       ({phase})",
    "vib": "YSAI  [0] VibLt      ({phase})",
    "exp": "YSAI  [0] Expression ({phase})",
    "rythm": "YSAI  [0] Rythm      ({phase})",
    "stability": "YSAI  [0] Stability  ({phase})",
}

# CommonIndicators field -> line prefix
COMMON_FIELD_PREFIXES = {
    "furue": "YSAI  [0] Furue",
    "vib_rank": "YSAI  [0] VibRank",
    "hibiki": "YSAI  [0] Hibiki",
    "emotion": "YSAI >[0] Emotion",
    "emo_injustice": "YSAI  [0] EmoInjustice",
    "timing": "YSAI >[0] Timing",
    "longtone": "YSAI  [0] Longtone",
    "scoop": "YSAI  [0] Scoop",
    "kobushi": "YSAI  [0] Kobushi",
    "fall": "YSAI  [0] Fall",
}

# (prefix, phase index, field name), expanded once
_PHASE_MATCHERS = [
    (prefix.format(phase=phase), phase, name)
    for name, prefix in PHASE_FIELD_PREFIXES.items()
    for phase in range(PHASE_COUNT)
]


@dataclass
class ScoreRecord:
    """One phase's breakdown."""
    total: Optional[int] = None
    note: Optional[int] = None
    vib: Optional[int] = None
    exp: Optional[int] = None
    rythm: Optional[int] = None
    stability: Optional[int] = None

    def to_dict(self) -> Dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass
class CommonIndicators:
    """Performance-wide signals, not tied to a phase."""
    furue: Optional[int] = None
    vib_rank: Optional[int] = None
    hibiki: Optional[int] = None
    emotion: Optional[int] = None
    emo_injustice: Optional[int] = None
    timing: Optional[int] = None
    longtone: Optional[int] = None
    scoop: Optional[int] = None
    kobushi: Optional[int] = None
    fall: Optional[int] = None

    @property
    def expected_rhythm(self) -> Optional[int]:
        """Rhythm value the timing offset alone would produce."""
        if self.timing is None:
            return None
        return estimate_rhythm(self.timing)

    def to_dict(self) -> Dict:
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["expected_rhythm"] = self.expected_rhythm
        return data


@dataclass(frozen=True)
class PhaseSelection:
    final_score: Optional[int]
    winning_phase: Optional[int]
    bonus: Optional[int]

    def to_dict(self) -> Dict:
        return {
            "final_score": self.final_score,
            "winning_phase": self.winning_phase,
            "bonus": self.bonus,
        }


@dataclass
class ScoringMetrics:
    """Everything the ysai scorer logged for one session."""
    phases: List[ScoreRecord] = field(default_factory=lambda: [ScoreRecord() for _ in range(PHASE_COUNT)])
    common: CommonIndicators = field(default_factory=CommonIndicators)
    armed: bool = False

    @property
    def base(self) -> ScoreRecord:
        return self.phases[0]

    @property
    def selection(self) -> PhaseSelection:
        return select_winning_phase([p.total for p in self.phases])

    @property
    def winning_record(self) -> Optional[ScoreRecord]:
        index = self.selection.winning_phase
        return self.phases[index] if index is not None else None

    def to_dict(self) -> Dict:
        return {
            "armed": self.armed,
            "phases": {name: rec.to_dict() for name, rec in zip(PHASE_NAMES, self.phases)},
            "common": self.common.to_dict(),
            "selection": self.selection.to_dict(),
        }


def correct_timing(raw: int) -> int:
    """Undo the unsigned print of a signed 32-bit timing offset."""
    if raw >= TIMING_WRAP_THRESHOLD:
        return raw - UINT32_RANGE
    return raw


def estimate_rhythm(timing: int) -> int:
    """Rhythm score implied by a timing offset (negative = dragging)."""
    if timing < 0:
        return math.floor(EXPECTED_RHYTHM_BASE + 10 * timing)
    return math.floor(EXPECTED_RHYTHM_BASE - 155.56 * timing)


def parse_value(text: str) -> Optional[int]:
    """First whitespace-delimited run of digits, or None."""
    match = VALUE_PATTERN.search(text)
    if match is None:
        return None
    return int(match.group(1))


def select_winning_phase(totals: List[Optional[int]]) -> PhaseSelection:
    """
    Pick the final score from the four phase totals.

    The final score is the highest logged total. Ties go to the lowest
    phase index (base, then note, vibrato, expression). The bonus is
    measured against the base total. Missing totals are skipped, never
    treated as zero.
    """
    present = [t for t in totals if t is not None]
    if not present:
        return PhaseSelection(final_score=None, winning_phase=None, bonus=None)

    final_score = max(present)
    winning_phase = totals.index(final_score)
    base_total = totals[0] if totals else None
    bonus = final_score - base_total if base_total is not None else None
    return PhaseSelection(final_score=final_score, winning_phase=winning_phase, bonus=bonus)


def classify_line(text: str, metrics: ScoringMetrics):
    """Store every phase or common field the line carries."""
    for prefix, phase, name in _PHASE_MATCHERS:
        if prefix in text:
            value = parse_value(text)
            if value is not None:
                setattr(metrics.phases[phase], name, value)

    for name, prefix in COMMON_FIELD_PREFIXES.items():
        if prefix in text:
            value = parse_value(text)
            if value is None:
                continue
            if name == "timing":
                value = correct_timing(value)
            setattr(metrics.common, name, value)


def extract_session(session: Session) -> ScoringMetrics:
    """Fill in resolved_key and metrics for one ysai session."""
    metrics = ScoringMetrics()

    for line in session.interior_lines:
        text = line.text

        match = SONGNUM_PATTERN.search(text)
        if match:
            session.resolved_key = match.group(1)

        if SECTION_MARKER in text:
            metrics.armed = True
            continue

        if not metrics.armed:
            continue

        classify_line(text, metrics)

    session.metrics = metrics
    return metrics


def extract_sessions(sessions: List[Session]) -> List[Session]:
    """Extract every session in place and return them in the same order."""
    for session in sessions:
        extract_session(session)
    return sessions
