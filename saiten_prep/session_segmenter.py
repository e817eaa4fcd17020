#!/usr/bin/env python3
"""
Session Segmenter
=================

Cuts the flat device log into one Session per performance. A session
opens on the dialect's start marker and closes on its end marker; lines
in between are the session's interior.

STATES:
  no session: lines go to a pending appendix buffer
  in session: lines go to the open session's interior

TRANSITIONS:
  start marker, no session  → open a session
  start marker, in session  → close the open one (no end line) and open
                              a new one on the same line
  end marker, in session    → close the session, keep the end line
  end marker, no session    → ignored
  end of input, in session  → close the session (no end line)

Whenever a session closes it takes the whole pending appendix with it
and the buffer starts over. Pending lines left when the input ends with
no session to close are dropped; `discarded_count` says how many.

Usage:
    from saiten_prep.session_segmenter import segment_sessions

    sessions = segment_sessions(lines, dialect="seimitsu")
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from config import DIALECTS, SESSION_MARKERS
from saiten_prep.log_tokenizer import LogLine


@dataclass
class Session:
    """One performance: the lines between a device open and its close."""
    ordinal: int  # 1-based, first-seen order
    start_line: LogLine
    end_line: Optional[LogLine] = None
    interior_lines: List[LogLine] = field(default_factory=list)
    appendix_lines: List[LogLine] = field(default_factory=list)

    # Filled in by the extractors
    resolved_key: Optional[str] = None
    metrics: Optional[Any] = None

    @property
    def is_terminated(self) -> bool:
        return self.end_line is not None

    def to_dict(self) -> Dict:
        return {
            "ordinal": self.ordinal,
            "start_line": self.start_line.index,
            "end_line": self.end_line.index if self.end_line else None,
            "interior_count": len(self.interior_lines),
            "appendix_count": len(self.appendix_lines),
            "resolved_key": self.resolved_key,
            "metrics": self.metrics.to_dict() if self.metrics is not None else None,
        }


class SessionSegmenter:
    """Two-state machine over LogLines for one dialect."""

    def __init__(self, dialect: str):
        if dialect not in DIALECTS:
            raise ValueError(f"Unknown dialect: {dialect!r} (expected one of {', '.join(DIALECTS)})")
        start, end, exclude = SESSION_MARKERS[dialect]
        self.dialect = dialect
        self._start_re = re.compile(start)
        self._end_re = re.compile(end)
        self._start_exclude = exclude

        self.sessions: List[Session] = []
        self.current: Optional[Session] = None
        self.pending_appendix: List[LogLine] = []
        self.discarded_count = 0

    def is_start(self, text: str) -> bool:
        if self._start_exclude and self._start_exclude in text:
            return False
        return self._start_re.search(text) is not None

    def is_end(self, text: str) -> bool:
        return self._end_re.search(text) is not None

    def feed(self, line: LogLine):
        """Consume one line."""
        if self.is_start(line.text):
            if self.current is not None:
                self._close()
            self.current = Session(ordinal=len(self.sessions) + 1, start_line=line)
            return

        if self.is_end(line.text):
            if self.current is not None:
                self._close(end_line=line)
            return

        if self.current is None:
            self.pending_appendix.append(line)
        else:
            self.current.interior_lines.append(line)

    def finish(self) -> List[Session]:
        """Close any open session and return all sessions in order."""
        if self.current is not None:
            self._close()
        self.discarded_count += len(self.pending_appendix)
        self.pending_appendix = []
        return self.sessions

    def _close(self, end_line: Optional[LogLine] = None):
        session = self.current
        session.end_line = end_line
        session.appendix_lines = self.pending_appendix
        self.pending_appendix = []
        self.sessions.append(session)
        self.current = None


def segment_sessions(lines: Iterable[LogLine], dialect: str) -> List[Session]:
    """Segment a whole log into sessions for the given dialect."""
    segmenter = SessionSegmenter(dialect)
    for line in lines:
        segmenter.feed(line)
    return segmenter.finish()
