"""Line scanner that knows where R strings and comments are."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

OPENERS = "([{"
CLOSERS = ")]}"
_MATCHING = {"(": ")", "[": "]", "{": "}"}
_RAW_STRING_RE = re.compile(r"[rR](['\"])(-*)([(\[{])")
_QUOTES = "\"'`"


@dataclass(frozen=True, slots=True)
class ScanState:
    """Open string carried from one line to the next."""

    closing: str | None = None
    raw: bool = False


@dataclass(slots=True)
class ScannedLine:
    starts_in_string: bool = False
    ends_in_string: bool = False
    brackets: list[tuple[int, str]] = field(default_factory=list)
    comment_start: int | None = None
    last_code: int | None = None


def _starts_raw_string(line: str, index: int) -> re.Match[str] | None:
    if index and (line[index - 1].isalnum() or line[index - 1] in "._"):
        return None
    return _RAW_STRING_RE.match(line, index)


def scan_line(line: str, state: ScanState = ScanState()) -> tuple[ScannedLine, ScanState]:
    """Locate brackets, the comment and the last code character of `line`."""
    scanned = ScannedLine(starts_in_string=state.closing is not None)
    closing, raw = state.closing, state.raw
    index = 0
    length = len(line)
    while index < length:
        char = line[index]
        if closing is not None:
            if raw:
                if line.startswith(closing, index):
                    index += len(closing)
                    scanned.last_code = index - 1
                    closing = None
                    continue
            elif char == "\\":
                index += 2
                continue
            elif char == closing:
                closing = None
            if not char.isspace():
                scanned.last_code = index
            index += 1
            continue
        if char == "#":
            scanned.comment_start = index
            break
        if char in "rR":
            match = _starts_raw_string(line, index)
            if match is not None:
                quote, dashes, opener = match.groups()
                closing, raw = _MATCHING[opener] + dashes + quote, True
                scanned.last_code = match.end() - 1
                index = match.end()
                continue
        if char in _QUOTES:
            closing, raw = char, False
        elif char in OPENERS or char in CLOSERS:
            scanned.brackets.append((index, char))
        if not char.isspace():
            scanned.last_code = index
        index += 1
    scanned.ends_in_string = closing is not None
    return scanned, ScanState(closing=closing, raw=raw)


__all__ = ["CLOSERS", "OPENERS", "ScanState", "ScannedLine", "scan_line"]
