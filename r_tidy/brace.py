"""Put the left brace that ends a line on a line of its own."""

from __future__ import annotations

from r_tidy.scan import ScanState, scan_line


def move_leftbrace(lines: list[str]) -> list[str]:
    """Split `content {` into `content` and `{` at the same indentation."""
    state = ScanState()
    result: list[str] = []
    for line in lines:
        scanned, state_after = scan_line(line, state)
        state = state_after
        brace = scanned.last_code
        if (
            scanned.starts_in_string
            or scanned.ends_in_string
            or scanned.comment_start is not None
            or brace is None
            or not scanned.brackets
            or scanned.brackets[-1] != (brace, "{")
        ):
            result.append(line)
            continue
        content = line[:brace].rstrip()
        if not content.strip():
            result.append(line)
            continue
        indentation = line[: len(line) - len(line.lstrip(" \t"))]
        result.extend([content, indentation + "{"])
    return result


__all__ = ["move_leftbrace"]
