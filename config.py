"""
Saiten Log Configuration — Central settings for all stages.

All modules import from here. Everything is a plain constant: the tool
reads one log file per run and has no config file or environment
overrides.

    DIALECTS            — firmware log dialects the parser understands
    SESSION_MARKERS     — open/close markers per dialect
    UNKNOWN             — printed wherever a value was never observed
"""

# ── Input ──────────────────────────────────────────────────────
# Log files are read as a whole before parsing
LOG_ENCODING = "utf-8"

# ── Dialects ───────────────────────────────────────────────────
# seimitsu: technique/score logging (SEIMITSU lines)
# ysai:     four-phase scoring breakdown logging (YSAI lines)
DIALECT_SEIMITSU = "seimitsu"
DIALECT_YSAI = "ysai"
DIALECTS = (DIALECT_SEIMITSU, DIALECT_YSAI)

# Session boundaries. Each entry is (start regex, end regex, start exclusion).
# The ysai open call is logged twice: once on entry and once with its
# "..OK(0)" return code. Only the entry line starts a session.
SESSION_MARKERS = {
    DIALECT_SEIMITSU: (
        r"SEIMITSU CDioKaraokeApp::OnOpen",
        r"SEIMITSU CDioKaraokeApp::OnClose",
        None,
    ),
    DIALECT_YSAI: (
        r"YSAI saitenApiOpen",
        r"YSAI saitenApiClose(?:\(\))?\.*\s*OK\s*\(?0\)?",
        "YSAI saitenApiOpen()..OK(0)",
    ),
}

# ── Reservations ───────────────────────────────────────────────
RESERVATION_KEY_PATTERN = r"\d{4}-\d{2}"
RESERVE_PATTERN = r"Try Reserve (" + RESERVATION_KEY_PATTERN + r")"
SONG_NAME_PATTERN = r"SongName = (.+)"
SINGER_NAME_PATTERN = r"SingerName = (.+)"

# Song/singer lines carry the logging source file after the value
COMPILER_PATH_MARKER = "rqif.cpp"

# ── Reporting ──────────────────────────────────────────────────
UNKNOWN = "不明"

# ── Timing correction ──────────────────────────────────────────
# Timing is a signed 32-bit offset printed as unsigned. Anything at or
# above the threshold has wrapped around.
TIMING_WRAP_THRESHOLD = 100000
UINT32_RANGE = 2 ** 32

# Baseline for the rhythm value estimated from a timing offset
EXPECTED_RHYTHM_BASE = 100000
