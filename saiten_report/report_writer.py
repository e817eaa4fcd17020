#!/usr/bin/env python3
"""
Report Writer
=============

Turns extracted sessions into the plain-text per-session report. One
block per session, in session order. Values that were never logged are
printed as the UNKNOWN sentinel, never as 0.

seimitsu blocks are only written for sessions that logged a score
triple. ysai blocks are written for every session with whatever fields
were captured; the song/singer lines are left out when the session
never logged its songnum.
"""

from typing import Dict, List, Optional

from config import DIALECT_SEIMITSU, DIALECT_YSAI, UNKNOWN
from saiten_extraction.scoring_extractor import ScoreRecord, ScoringMetrics
from saiten_extraction.technique_extractor import TechniqueMetrics, scored_sessions
from saiten_prep.reservation_index import SongMetadata
from saiten_prep.session_segmenter import Session

PHASE_LABELS = ("素点", "音程ボーナス", "ビブラートボーナス", "表現力ボーナス")


def fmt(value) -> str:
    return UNKNOWN if value is None else str(value)


def fmt_float(value: float) -> str:
    """Whole floats print without the trailing .0 (100.0 -> 100)."""
    return str(int(value)) if value.is_integer() else str(value)


def song_lines(key: Optional[str], index: Dict[str, SongMetadata]) -> List[str]:
    meta = index.get(key) if key else None
    song = meta.song_name if meta else UNKNOWN
    singer = meta.singer_name if meta else UNKNOWN
    return [f"Song: {song}", f"Singer: {singer}"]


# ── seimitsu ───────────────────────────────────────────────────

def seimitsu_block(session: Session, index: Dict[str, SongMetadata]) -> List[str]:
    metrics: TechniqueMetrics = session.metrics
    scores = metrics.scores
    lines = [f"Session {session.ordinal}"]
    lines.extend(song_lines(session.resolved_key, index))
    lines.append(f"DIO: {scores.dio}, SPR: {scores.spr}, Bonus: {scores.bonus}")
    if metrics.sensitivity:
        lines.append(f"Ai感性: {fmt_float(metrics.sensitivity[0])}, {fmt_float(metrics.sensitivity[1])}")
    else:
        lines.append(f"Ai感性: {UNKNOWN}")
    for label, count in metrics.technique_counts.items():
        lines.append(f"  {label}: {count}")
    lines.append("---")
    return lines


def write_seimitsu_report(sessions: List[Session], index: Dict[str, SongMetadata]) -> str:
    lines = []
    for session in scored_sessions(sessions):
        lines.extend(seimitsu_block(session, index))
    return "\n".join(lines)


# ── ysai ───────────────────────────────────────────────────────

def breakdown_lines(record: Optional[ScoreRecord]) -> List[str]:
    record = record or ScoreRecord()
    return [
        f"音程:{fmt(record.note)}",
        f"VL:{fmt(record.vib)}",
        f"表現力:{fmt(record.exp)}",
        f"リズム:{fmt(record.rythm)}",
        f"安定性:{fmt(record.stability)}",
    ]


def ysai_block(session: Session, index: Dict[str, SongMetadata],
               expected_rhythm: bool = False) -> List[str]:
    metrics: ScoringMetrics = session.metrics
    selection = metrics.selection
    common = metrics.common

    lines = ["", "-------", f"Session {session.ordinal}"]
    if session.resolved_key:
        lines.extend(song_lines(session.resolved_key, index))

    lines.append(f"総合: {fmt(selection.final_score)}")
    lines.append(f"素点: {fmt(metrics.base.total)}")
    lines.append(f"ボーナス: {fmt(selection.bonus)}")
    if selection.winning_phase is not None:
        lines.append(PHASE_LABELS[selection.winning_phase])
    else:
        lines.append(UNKNOWN)
    lines.append("")

    lines.extend(breakdown_lines(metrics.winning_record))

    lines.append("")
    lines.append("純正のチャート")
    lines.extend(breakdown_lines(metrics.base))
    lines.append("")

    lines.append(f"ビブ:{fmt(common.vib_rank)}")
    lines.append(f"ロング:{fmt(common.longtone)}")
    lines.append(f"Timing(+は走り):{fmt(common.timing)}")
    if expected_rhythm:
        lines.append(f"Timingから推定されるリズム値:{fmt(common.expected_rhythm)}")
    lines.append(f"抑揚(1000満点):{fmt(common.emotion)}")
    lines.append(f"hibiki(裏加点):{fmt(common.hibiki)}")
    lines.append(f"hurue(安定性の親の値):{fmt(common.furue)}")
    lines.append(f"抑揚不正:{fmt(common.emo_injustice)}")
    lines.append(f"しゃくり:{fmt(common.scoop)}")
    lines.append(f"こぶし:{fmt(common.kobushi)}")
    lines.append(f"フォール:{fmt(common.fall)}")
    return lines


def write_ysai_report(sessions: List[Session], index: Dict[str, SongMetadata],
                      expected_rhythm: bool = False) -> str:
    lines = []
    for session in sessions:
        lines.extend(ysai_block(session, index, expected_rhythm=expected_rhythm))
    return "\n".join(lines)


def write_report(dialect: str, sessions: List[Session], index: Dict[str, SongMetadata],
                 expected_rhythm: bool = False) -> str:
    """Report text for already-extracted sessions of the given dialect."""
    if dialect == DIALECT_SEIMITSU:
        return write_seimitsu_report(sessions, index)
    if dialect == DIALECT_YSAI:
        return write_ysai_report(sessions, index, expected_rhythm=expected_rhythm)
    raise ValueError(f"Unknown dialect: {dialect!r}")
