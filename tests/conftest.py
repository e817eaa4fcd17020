"""Shared fixtures for the Saiten log test suite."""
import sys
from pathlib import Path

import pytest

# Add project root to path so imports work
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


# ── Minimal device logs for each dialect ────────────────────────────────

SEIMITSU_LOG = "\n".join([
    "12:00:00 boot",
    "12:00:01 RQ Try Reserve 6619-30",
    "12:00:01 RQ SongName = 夜に駆ける rqif.cpp(120)",
    "12:00:01 RQ SingerName = YOASOBI rqif.cpp(121)",
    "12:00:02 RQ Try Reserve 7001-02",
    "12:00:02 RQ SongName = 怪獣の花唄 rqif.cpp(120)",
    "12:00:02 RQ SingerName = Vaundy rqif.cpp(121)",
    "12:00:05 SEIMITSU CDioKaraokeApp::OnOpen",
    "12:00:05 SEIMITSU RQNO: 6619-30",
    "12:00:10 SEIMITSU detected pitch tech 0",
    "12:00:11 SEIMITSU detected pitch tech 0",
    "12:00:12 SEIMITSU detected pitch tech 43",
    "12:00:13 SEIMITSU detected pitch tech 17",
    "12:03:00 SEIMITSU result DIO = 92, SPR = 88,",
    "Bonus = 3",
    "12:03:00 SEIMITSU AI [0.85, 0.92]",
    "12:03:01 SEIMITSU CDioKaraokeApp::OnClose",
    "12:03:02 idle",
    "12:04:00 SEIMITSU CDioKaraokeApp::OnOpen",
    "12:04:00 SEIMITSU RQNO: 7001-02",
    "12:04:10 SEIMITSU detected pitch tech 10",
    "12:04:20 SEIMITSU CDioKaraokeApp::OnClose",
    "12:05:00 SEIMITSU CDioKaraokeApp::OnOpen",
    "12:05:00 SEIMITSU RQNO: 9999-99",
    "12:08:00 SEIMITSU result DIO = 75, SPR = 70, Bonus = 0",
    "12:08:01 SEIMITSU CDioKaraokeApp::OnClose",
]) + "\n"


def ysai_phase(field: str, phase: int, value) -> str:
    templates = {
        "total": "YSAI >[0]Total       ({})",
        "note": "YSAI  [0] Note       ({})",
        "vib": "YSAI  [0] VibLt      ({})",
        "exp": "YSAI  [0] Expression ({})",
        "rythm": "YSAI  [0] Rythm      ({})",
        "stability": "YSAI  [0] Stability  ({})",
    }
    return f"{templates[field].format(phase)}    {value} "


YSAI_SCORING_SECTION = [
    "YSAI -----SAI : SPR Saiten -----",
    ysai_phase("total", 0, 80),
    ysai_phase("total", 1, 95),
    ysai_phase("total", 2, 95),
    ysai_phase("total", 3, 70),
    ysai_phase("note", 0, 70),
    ysai_phase("note", 1, 90),
    ysai_phase("note", 2, 71),
    ysai_phase("vib", 0, 60),
    ysai_phase("vib", 1, 61),
    ysai_phase("exp", 0, 50),
    ysai_phase("exp", 1, 52),
    ysai_phase("rythm", 0, 40),
    ysai_phase("rythm", 1, 41),
    ysai_phase("stability", 0, 30),
    ysai_phase("stability", 1, 31),
    "YSAI  [0] Furue      812 ",
    "YSAI  [0] VibRank    5 ",
    "YSAI  [0] Hibiki     120 ",
    "YSAI >[0] Emotion    640 ",
    "YSAI  [0] EmoInjustice 2 ",
    "YSAI >[0] Timing     4294967291 ",
    "YSAI  [0] Longtone   77 ",
    "YSAI  [0] Scoop      14 ",
    "YSAI  [0] Kobushi    6 ",
    "YSAI  [0] Fall       3 ",
]

YSAI_LOG = "\r\n".join([
    "RQ Try Reserve 1234-56",
    "RQ SongName = 残酷な天使のテーゼ rqif.cpp(88)",
    "RQ SingerName = 高橋洋子 rqif.cpp(89)",
    "YSAI saitenApiOpen()",
    "YSAI saitenApiOpen()..OK(0)",
    "YSAI songnum : 1234-56",
    ysai_phase("total", 0, 11),
] + YSAI_SCORING_SECTION + [
    "YSAI saitenApiClose()...OK (0)",
    "idle",
    "YSAI saitenApiOpen()",
    "YSAI saitenApiOpen()..OK(0)",
    "YSAI -----SAI : SPR Saiten -----",
    ysai_phase("total", 0, 66),
    "YSAI saitenApiClose()...OK (0)",
])


@pytest.fixture
def seimitsu_log():
    return SEIMITSU_LOG


@pytest.fixture
def ysai_log():
    return YSAI_LOG


@pytest.fixture
def write_log(tmp_path):
    """Write log text to a temporary file and return its path."""
    def _write(text: str, name: str = "device.log") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def phase_line():
    """Builder for a ysai phase line: phase_line("total", 1, 95)."""
    return ysai_phase


@pytest.fixture
def scoring_section():
    return list(YSAI_SCORING_SECTION)
