"""
Stage 0: turn a raw device log into reservations and per-song sessions.

Pure Python, no third-party dependencies. Nothing here reads files or
prints; callers pass the already-loaded log text in.
"""
from .log_tokenizer import LogLine, tokenize
from .reservation_index import ReservationIndexBuilder, SongMetadata, build_reservation_index
from .technique_names import TECHNIQUE_NAMES, UNKNOWN_TECHNIQUE, technique_name
from .session_segmenter import Session, SessionSegmenter, segment_sessions
