"""Rewrite leading whitespace to a fixed number of spaces per level."""

from __future__ import annotations

import re

from r_tidy.scan import CLOSERS, OPENERS, ScanState, scan_line

_LEADING_CLOSERS_RE = re.compile(r"[)\]}\s]*")


def reindent_lines(lines: list[str], indent: int = 4) -> list[str]:
    """Indent each line by `indent` spaces per unclosed bracket level.

    A level is one earlier line holding unclosed brackets, however many it
    holds; closers at the start of a line apply to that line itself. Lines
    that begin inside a multi-line string are left alone.
    """
    state = ScanState()
    open_rows: list[int] = []
    result: list[str] = []
    for row, line in enumerate(lines):
        scanned, next_state = scan_line(line, state)
        if scanned.starts_in_string:
            result.append(line)
        else:
            content = line.lstrip(" \t")
            if not scanned.ends_in_string:
                content = content.rstrip()
            if not content:
                result.append("")
            else:
                closers = _LEADING_CLOSERS_RE.match(content).group()
                leading = sum(char in CLOSERS for char in closers)
                kept = open_rows[: max(len(open_rows) - leading, 0)]
                result.append(" " * (len(set(kept)) * indent) + content)
        for _, char in scanned.brackets:
            if char in OPENERS:
                open_rows.append(row)
            elif open_rows:
                open_rows.pop()
        state = next_state
    return result


__all__ = ["reindent_lines"]
