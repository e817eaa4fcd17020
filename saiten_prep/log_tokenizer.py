"""Split raw log text into numbered lines."""
import re
from dataclasses import dataclass
from typing import List

_LINE_BREAK = re.compile(r"\r?\n")


@dataclass(frozen=True)
class LogLine:
    """One line of the device log and its 0-based position in the stream."""
    text: str
    index: int

    def to_dict(self) -> dict:
        return {"index": self.index, "text": self.text}


def tokenize(raw: str) -> List[LogLine]:
    """Split on LF or CRLF, keeping line content and order untouched.

    A final line break does not produce an extra empty line, and a file
    without one loses nothing.
    """
    if not raw:
        return []
    parts = _LINE_BREAK.split(raw)
    if parts[-1] == "":
        parts.pop()
    return [LogLine(text=text, index=i) for i, text in enumerate(parts)]
