"""Restore the real comments from rendered, masked source."""

from __future__ import annotations

import re

from r_tidy.masking import (BEGIN_COMMENT, BRACE_PREFIX, COMMA_AFTER,
                            COMMA_BEFORE, END_COMMENT, INLINE_MARKER,
                            OWN_LINE_PREFIX, unescape_comment)

_PAYLOAD = r'((?:[^"\\\n]|\\.)*)'
_MARKER = re.escape(INLINE_MARKER)

STANDALONE_RE = re.compile(
    r'invisible\("' + re.escape(BEGIN_COMMENT) + _PAYLOAD + re.escape(END_COMMENT) + r'"\)'
)
INLINE_RE = re.compile(r"[ \t]*" + _MARKER + r'[ \t]*"' + _PAYLOAD + r'"')
BRACE_RE = re.compile(
    r'\{[ \t]*\n[ \t]*invisible\("'
    + re.escape(BEGIN_COMMENT + BRACE_PREFIX)
    + _PAYLOAD
    + re.escape(END_COMMENT)
    + r'"\)'
)
ITEM_RE = re.compile(
    r"[ \t]*\n?[ \t]*(?P<before>,[ \t]*\n?[ \t]*)?"
    + re.escape(BEGIN_COMMENT)
    + r'[ \t]*=[ \t]*"(?P<flags>'
    + re.escape(COMMA_BEFORE)
    + "?"
    + re.escape(COMMA_AFTER)
    + "?"
    + re.escape(OWN_LINE_PREFIX)
    + "?)"
    + _PAYLOAD
    + re.escape(END_COMMENT)
    + r'"(?P<after>[ \t]*,[ \t]*\n?[ \t]*)?'
)

# the renderer may wrap a long line right before or after the marker
_BREAK_BEFORE_MARKER_RE = re.compile(r"[ \t]*\n[ \t]*(?=" + _MARKER + ")")
_BREAK_AFTER_MARKER_RE = re.compile(_MARKER + r"[ \t]*\n[ \t]*")
_DANGLING_ELSE_RE = re.compile(
    "(" + _MARKER + r'[ \t]*"(?:[^"\\\n]|\\.)*")[ \t]*\n[ \t]*(?=else\b)'
)
_SEPARATOR_RE = re.compile(r"[ \t]*,")
_ELSE_RE = re.compile(r"[ \t]*else\b")


def _restore_items(text: str) -> tuple[str, int]:
    """Turn argument-slot placeholders back into comments, dropping the
    commas that were added to make room for them."""
    pieces: list[str] = []
    cursor = 0
    count = 0
    for match in ITEM_RE.finditer(text):
        flags = match.group("flags")
        comment = unescape_comment(match.group(3))
        pieces.append(text[cursor : match.start()])
        if match.group("before") and COMMA_BEFORE not in flags:
            pieces.append(",")
        if OWN_LINE_PREFIX not in flags:
            pieces.append(f"  {comment}\n")
        elif count and match.start() == cursor:
            pieces.append(f"{comment}\n")
        else:
            pieces.append(f"\n{comment}\n")
        if match.group("after") and COMMA_AFTER not in flags:
            pieces.append(match.group("after"))
        cursor = match.end()
        count += 1
    pieces.append(text[cursor:])
    return "".join(pieces), count


def _restore_inline(line: str) -> tuple[list[str], int]:
    """Turn the inline markers of one rendered line into comments.

    Consecutive markers are taken together: plain ones trail the code
    before them, own-line ones follow it on lines of their own.
    """
    match = INLINE_RE.search(line)
    if match is None:
        return [line], 0
    before = line[: match.start()]
    rest = line[match.start() :]
    trailing: list[str] = []
    own_lines: list[str] = []
    while (marker := INLINE_RE.match(rest)) is not None:
        comment = unescape_comment(marker.group(1))
        if comment.startswith(OWN_LINE_PREFIX):
            own_lines.append(comment[len(OWN_LINE_PREFIX) :])
        else:
            trailing.append(comment)
        rest = rest[marker.end() :]
    count = len(trailing) + len(own_lines)
    separator = _SEPARATOR_RE.match(rest)
    if separator is not None:
        before += ","
        rest = rest[separator.end() :]
    head = before + "".join(f"  {comment}" for comment in trailing)
    if not rest.strip():
        return [head] + own_lines, count
    if not own_lines and _ELSE_RE.match(rest) and INLINE_RE.search(rest) is None:
        # keep `} else {` together; the comment moves to the end of the line
        comments = "".join(f"  {comment}" for comment in trailing)
        return [f"{before} {rest.strip()}{comments}"], count
    lines, restored = _restore_inline(rest)
    return [head] + own_lines + lines, count + restored


def unmask_source(text_mask: str) -> tuple[str, int]:
    """Replace every placeholder in `text_mask` with its comment.

    Returns the restored text and the number of placeholders found, so the
    caller can check it against what was masked.
    """
    if not text_mask:
        return text_mask, 0
    text = _BREAK_BEFORE_MARKER_RE.sub(" ", text_mask)
    text = _BREAK_AFTER_MARKER_RE.sub(INLINE_MARKER + " ", text)
    text = _DANGLING_ELSE_RE.sub(r"\1 ", text)
    text, restored = _restore_items(text)
    text, count = BRACE_RE.subn(
        lambda match: "{  " + unescape_comment(match.group(1)), text
    )
    restored += count
    text, count = STANDALONE_RE.subn(
        lambda match: unescape_comment(match.group(1)), text
    )
    restored += count
    lines: list[str] = []
    for line in text.split("\n"):
        restored_lines, count = _restore_inline(line)
        lines.extend(restored_lines)
        restored += count
    return "\n".join(lines), restored


__all__ = ["BRACE_RE", "INLINE_RE", "ITEM_RE", "STANDALONE_RE", "unmask_source"]
