#!/usr/bin/env python3
"""
Reservation Index
=================

Maps reservation keys (e.g. "6619-30") to the song and singer that were
queued under them. The device logs a reservation as a "Try Reserve <key>"
line followed, some lines later, by "SongName = ..." and "SingerName = ..."
lines. Sessions only carry the key, so the report looks names up here.

Rules:
  - "Try Reserve" arms a new key and forgets any half-collected names
  - song/singer values are cut at the logging source marker and trimmed
  - once key, song and singer are all known, the entry is committed and
    the key is disarmed; the names stay until the next "Try Reserve"
  - a later commit under the same key replaces the earlier one

Usage:
    from saiten_prep.reservation_index import build_reservation_index

    index = build_reservation_index(lines)
    meta = index.get("6619-30")
"""

import re
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from config import (
    COMPILER_PATH_MARKER,
    RESERVE_PATTERN,
    SINGER_NAME_PATTERN,
    SONG_NAME_PATTERN,
)
from saiten_prep.log_tokenizer import LogLine


@dataclass(frozen=True)
class SongMetadata:
    """Song and singer queued under one reservation key."""
    song_name: str
    singer_name: str

    def to_dict(self) -> Dict:
        return {"song_name": self.song_name, "singer_name": self.singer_name}


def _clean_name(value: str) -> str:
    return value.split(COMPILER_PATH_MARKER)[0].strip()


class ReservationIndexBuilder:
    """
    Single forward pass over the log, committing complete reservations.

    Usage:
        builder = ReservationIndexBuilder()
        for line in lines:
            builder.feed(line.text)
        index = builder.index
    """

    def __init__(self):
        self._reserve_re = re.compile(RESERVE_PATTERN)
        self._song_re = re.compile(SONG_NAME_PATTERN)
        self._singer_re = re.compile(SINGER_NAME_PATTERN)

        # Transient candidates
        self.key: Optional[str] = None
        self.song_name: Optional[str] = None
        self.singer_name: Optional[str] = None

        self.index: Dict[str, SongMetadata] = {}
        self.commit_count = 0

    def feed(self, text: str):
        """Consume one log line."""
        match = self._reserve_re.search(text)
        if match:
            self.key = match.group(1)
            self.song_name = None
            self.singer_name = None

        match = self._song_re.search(text)
        if match:
            self.song_name = _clean_name(match.group(1))

        match = self._singer_re.search(text)
        if match:
            self.singer_name = _clean_name(match.group(1))

        if self.key and self.song_name and self.singer_name:
            self.commit(self.key, self.song_name, self.singer_name)
            self.key = None

    def commit(self, key: str, song_name: str, singer_name: str):
        """Store a reservation. Last write wins for a repeated key."""
        self.index[key] = SongMetadata(song_name=song_name, singer_name=singer_name)
        self.commit_count += 1


def build_reservation_index(lines: Iterable[LogLine]) -> Dict[str, SongMetadata]:
    """Build the key -> SongMetadata mapping for a whole log."""
    builder = ReservationIndexBuilder()
    for line in lines:
        builder.feed(line.text)
    return builder.index
