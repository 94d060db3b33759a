"""Encode comments (and blank lines) as R expressions so they survive a parse.

Standalone comments become `invisible("<begin><comment><end>")` calls and
trailing comments ride on the expression before them through an infix
operator, `expr %InLiNe_IdEnTiFiEr% "<comment>"`. Comments between the
items of an argument or parameter list take a slot of their own as a
named argument, `<begin> = "<comment><end>"`. Payload prefixes record
where a comment goes back to. `r_tidy.unmasking` reverses all of these on
the rendered text.
"""

from __future__ import annotations

import logging
import re
from bisect import bisect_left, bisect_right
from dataclasses import dataclass, field
from enum import Enum

from tree_sitter import Node

from r_tidy.exceptions import MaskingError
from r_tidy.expressions.expression import expression_children
from r_tidy.parser import check_syntax, parse_to_ast

logger = logging.getLogger(__name__)

# If you have variable names like these in your code, you really beat us:
# code containing them can be mistaken for masked comments.
BEGIN_COMMENT = ".BeGiN_TiDy_IdEnTiFiEr_HaHaHa"
END_COMMENT = ".HaHaHa_EnD_TiDy_IdEnTiFiEr"
INLINE_MARKER = "%InLiNe_IdEnTiFiEr%"
# comments start with `#`, so a payload starting with one of these cannot be one
BRACE_PREFIX = "{"
OWN_LINE_PREFIX = "^"
COMMA_BEFORE = "<"
COMMA_AFTER = ">"

BLOCK_TYPES = {"program", "braced_expression"}
SEPARATOR_TYPES = {",", "comma", ";"}
ITEM_LIST_TYPES = {"arguments", "parameters"}
OPEN_TYPES = {"(", "[", "[["}
CLOSE_TYPES = {")", "]", "]]"}
NON_EXPRESSION_TYPES = {
    "program",
    "comment",
    "comma",
    "argument",
    "arguments",
    "parameter",
    "parameters",
}

_ESCAPED_CHAR_RE = re.compile(r"\\(.)", re.S)


class CommentKind(Enum):
    STANDALONE = "standalone"
    INLINE = "inline"


@dataclass(frozen=True, slots=True)
class CommentRecord:
    """One masked comment; blank-line slots have an empty `raw_text`."""

    kind: CommentKind
    raw_text: str
    escaped_payload: str
    position_hint: tuple[int, int]


@dataclass(slots=True)
class MaskedSource:
    text: str
    comments: list[CommentRecord] = field(default_factory=list)


@dataclass(slots=True)
class _Edit:
    start: int
    end: int
    text: str
    order: int


def escape_comment(text: str, position: tuple[int, int] | None = None) -> str:
    """Escape `text` for use inside a double-quoted R string."""
    where = f" at line {position[0] + 1}" if position is not None else ""
    for marker in (BEGIN_COMMENT, END_COMMENT, INLINE_MARKER):
        if marker in text:
            raise MaskingError(f"Comment{where} contains the reserved marker {marker!r}")
    if "\x00" in text or "\n" in text:
        raise MaskingError(f"Comment{where} contains a character that cannot be escaped")
    return text.replace("\\", "\\\\").replace('"', '\\"')


def unescape_comment(payload: str) -> str:
    """Inverse of `escape_comment`."""
    return _ESCAPED_CHAR_RE.sub(r"\1", payload)


def standalone_placeholder(payload: str) -> str:
    return f'invisible("{BEGIN_COMMENT}{payload}{END_COMMENT}")'


def brace_placeholder(payload: str) -> str:
    """Placeholder for a comment that trails an opening brace."""
    return standalone_placeholder(BRACE_PREFIX + payload)


def inline_placeholder(payload: str) -> str:
    return f' {INLINE_MARKER} "{payload}"'


def item_placeholder(payload: str) -> str:
    """Named argument (or parameter) standing in for a comment in a list."""
    return f'{BEGIN_COMMENT} = "{payload}{END_COMMENT}"'


BLANK_PLACEHOLDER = standalone_placeholder("")


class _TokenIndex:
    """Source-ordered leaf tokens of a CST, comments excluded."""

    def __init__(self, root: Node):
        self.tokens: list[Node] = []
        self.comments: list[Node] = []
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type == "comment":
                self.comments.append(node)
                continue
            if node.child_count == 0:
                if node.end_byte > node.start_byte:
                    self.tokens.append(node)
                continue
            stack.extend(reversed(node.children))
        self._ends = [token.end_byte for token in self.tokens]
        self._starts = [token.start_byte for token in self.tokens]

    def index_before(self, offset: int) -> int:
        """Index of the last token ending at or before `offset`, or -1."""
        return bisect_right(self._ends, offset) - 1

    def after(self, offset: int) -> Node | None:
        index = bisect_left(self._starts, offset)
        return self.tokens[index] if index < len(self.tokens) else None


def _enclosing_statement(root: Node, start: int, end: int) -> Node | None:
    """Statement of the innermost block that spans the range, if any.

    None means the range sits between statements, where a placeholder call
    can stand on its own line.
    """
    node = root.descendant_for_byte_range(start, end)
    while node is not None:
        if node.type == "program":
            break
        if node.type in BLOCK_TYPES and node.start_byte < start < node.end_byte:
            break
        node = node.parent
    block = node if node is not None else root
    for child in expression_children(block):
        if child.start_byte < start < child.end_byte:
            return child
    return None


def _expression_ending_at(token: Node) -> Node | None:
    """Outermost expression node whose last token is `token`."""
    node: Node | None = token
    best = None
    while node is not None and node.end_byte == token.end_byte:
        if node.is_named and node.type not in NON_EXPRESSION_TYPES:
            best = node
        node = node.parent
    return best


def _in_expression_slot(expr: Node) -> bool:
    """Whether `expr %op% "..."` may replace `expr` where it stands."""
    parent = expr.parent
    if parent is None:
        return False
    match parent.type:
        case "argument" | "parameter":
            equals = [child for child in parent.children if child.type == "="]
            if not equals:
                return parent.type == "argument"
            return equals[0].end_byte <= expr.start_byte
        case "for_statement":
            return any(
                child.type == "in" and child.end_byte <= expr.start_byte
                for child in parent.children
            )
        case "call" | "subset" | "subset2" | "parameters":
            return False
        case _:
            return True


def _inline_anchor(index: _TokenIndex, position: int) -> Node | None:
    """Token after which an inline marker can be inserted, skipping `,`/`;`."""
    while position >= 0 and index.tokens[position].type in SEPARATOR_TYPES:
        position -= 1
    if position < 0:
        return None
    token = index.tokens[position]
    expr = _expression_ending_at(token)
    if expr is None or not _in_expression_slot(expr):
        return None
    return token


def _own_line_anchor(
    index: _TokenIndex, position: int, statement: Node
) -> Node | None:
    anchor = _inline_anchor(index, position)
    if anchor is None or anchor.start_byte < statement.start_byte:
        return None
    return anchor


def _expression_starting_at(token: Node) -> Node | None:
    """Outermost expression node whose first token is `token`."""
    node: Node | None = token
    best = None
    while node is not None and node.start_byte == token.start_byte:
        if node.is_named and node.type not in NON_EXPRESSION_TYPES:
            best = node
        node = node.parent
    return best


def _next_anchor(
    index: _TokenIndex, following: Node | None, statement: Node | None
) -> Node | None:
    """Expression after a comment that can carry it as an inline marker.

    Refused when other comments sit inside that expression, since they
    would then come out before this one.
    """
    if following is None or statement is None:
        return None
    if following.start_byte >= statement.end_byte:
        return None
    expr = _expression_starting_at(following)
    if expr is None or not _in_expression_slot(expr):
        return None
    for other in index.comments:
        if expr.start_byte < other.start_byte < expr.end_byte:
            return None
    return expr


def _item_list(
    comment: Node, previous: Node | None, following: Node | None
) -> Node | None:
    """Argument or parameter list the comment sits in, between two items."""
    if previous is None or following is None:
        return None
    node = comment.parent
    while node is not None and node.type not in ITEM_LIST_TYPES:
        if node.type in BLOCK_TYPES:
            return None
        node = node.parent
    if node is None:
        return None
    if previous.start_byte < node.start_byte or following.end_byte > node.end_byte:
        return None
    for item in node.named_children:
        if item.type in ("comment", "comma"):
            continue
        if item.start_byte <= previous.start_byte and following.end_byte <= item.end_byte:
            return None
    return node


def _line_offsets(source: bytes) -> list[tuple[int, bytes]]:
    offsets = []
    start = 0
    for line in source.split(b"\n"):
        offsets.append((start, line))
        start += len(line) + 1
    return offsets


def mask_comments(text: str, blank: bool = True) -> MaskedSource:
    """Replace comments in `text` with placeholders the parser accepts.

    With `blank`, interior blank lines between statements are masked as
    empty standalone placeholders as well.
    """
    source = text.encode("utf-8")
    root = check_syntax(parse_to_ast(source))
    index = _TokenIndex(root)
    edits: list[_Edit] = []
    records: list[CommentRecord] = []

    def edit(start: int, end: int, replacement: str) -> None:
        edits.append(_Edit(start, end, replacement, len(edits)))

    previous_item: Node | None = None
    for number, comment in enumerate(index.comments):
        raw = (comment.text or b"").decode("utf-8")
        position = (comment.start_point.row, comment.start_point.column)
        payload = escape_comment(raw, position)
        previous_index = index.index_before(comment.start_byte)
        previous = index.tokens[previous_index] if previous_index >= 0 else None
        following = index.after(comment.end_byte)
        trailing = (
            previous is not None and previous.end_point.row == comment.start_point.row
        )
        kind = CommentKind.INLINE if trailing else CommentKind.STANDALONE
        own_line = "" if trailing else OWN_LINE_PREFIX
        statement = _enclosing_statement(root, comment.start_byte, comment.end_byte)
        items = _item_list(comment, previous, following)

        if not trailing and statement is None:
            edit(comment.start_byte, comment.end_byte, standalone_placeholder(payload))
        elif trailing and previous.type == "{":
            edit(comment.start_byte, comment.end_byte, "\n" + brace_placeholder(payload))
        elif trailing and (anchor := _inline_anchor(index, previous_index)) is not None:
            edit(comment.start_byte, comment.end_byte, "")
            edit(anchor.end_byte, anchor.end_byte, inline_placeholder(payload))
        elif items is not None:
            # the placeholder takes an argument slot of its own, so it needs
            # a comma on whichever side has a neighbouring item
            later = index.comments[number + 1 : number + 2]
            before = previous.type not in OPEN_TYPES | SEPARATOR_TYPES and (
                previous_item is None or previous_item.start_byte < previous.end_byte
            )
            after = following.type not in CLOSE_TYPES | SEPARATOR_TYPES or (
                bool(later) and later[0].start_byte < following.start_byte
            )
            flags = (COMMA_BEFORE if before else "") + (COMMA_AFTER if after else "")
            replacement = item_placeholder(flags + own_line + payload)
            edit(
                comment.start_byte,
                comment.end_byte,
                ("," if before else "") + replacement + ("," if after else ""),
            )
            previous_item = comment
        elif not trailing and (
            anchor := _own_line_anchor(index, previous_index, statement)
        ) is not None:
            edit(comment.start_byte, comment.end_byte, "")
            edit(anchor.end_byte, anchor.end_byte, inline_placeholder(own_line + payload))
        elif trailing and following is not None and following.type == "{":
            logger.debug("Moving comment at %s after the next brace", position)
            edit(comment.start_byte, comment.end_byte, "")
            edit(following.end_byte, following.end_byte, "\n" + brace_placeholder(payload))
        elif (target := _next_anchor(index, following, statement)) is not None:
            logger.debug("Moving comment at %s after the next expression", position)
            edit(comment.start_byte, comment.end_byte, "")
            edit(target.end_byte, target.end_byte, inline_placeholder(own_line + payload))
        else:
            raise MaskingError(
                f"Cannot keep the comment at line {position[0] + 1} in place: {raw}"
            )
        records.append(CommentRecord(kind, raw, payload, position))

    if blank:
        lines = _line_offsets(source)
        code_rows = [row for row, (_, line) in enumerate(lines) if line.strip()]
        if code_rows:
            for row in range(code_rows[0] + 1, code_rows[-1]):
                offset, line = lines[row]
                if line.strip():
                    continue
                if _enclosing_statement(root, offset, offset) is not None:
                    continue
                edit(offset, offset + len(line), BLANK_PLACEHOLDER)
                records.append(CommentRecord(CommentKind.STANDALONE, "", "", (row, 0)))

    pieces: list[bytes] = []
    cursor = 0
    for item in sorted(edits, key=lambda e: (e.start, e.order)):
        pieces.append(source[cursor : item.start])
        pieces.append(item.text.encode("utf-8"))
        cursor = max(cursor, item.end)
    pieces.append(source[cursor:])
    records.sort(key=lambda record: record.position_hint)
    logger.debug("Masked %d comment(s) and blank line(s)", len(records))
    return MaskedSource(text=b"".join(pieces).decode("utf-8"), comments=records)


__all__ = [
    "BEGIN_COMMENT",
    "BLANK_PLACEHOLDER",
    "BRACE_PREFIX",
    "COMMA_AFTER",
    "COMMA_BEFORE",
    "CommentKind",
    "CommentRecord",
    "END_COMMENT",
    "INLINE_MARKER",
    "MaskedSource",
    "OWN_LINE_PREFIX",
    "brace_placeholder",
    "escape_comment",
    "inline_placeholder",
    "item_placeholder",
    "mask_comments",
    "standalone_placeholder",
    "unescape_comment",
]
