from __future__ import annotations

from pathlib import Path
from typing import Iterator

import tree_sitter_r as ts_r
from tree_sitter import Language, Node, Parser

from r_tidy.exceptions import RSyntaxError, TidyError
from r_tidy.expressions.source_code import RSourceCode

# Initialize the tree-sitter parser only once for efficiency.
R_LANGUAGE = Language(ts_r.language())
PARSER = Parser(R_LANGUAGE)


def parse_to_ast(source_code: bytes | str) -> Node:
    """Parse R source code and return the root of its CST."""
    code_bytes = (
        source_code.encode("utf-8") if isinstance(source_code, str) else source_code
    )
    tree = PARSER.parse(code_bytes)
    return tree.root_node


def _iter_nodes(node: Node) -> Iterator[Node]:
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def first_error(root: Node) -> Node | None:
    """Return the first ERROR or MISSING node in source order."""
    if not root.has_error:
        return None
    for node in _iter_nodes(root):
        if node.is_error or node.is_missing:
            return node
    return root


def syntax_error(root: Node, filename: str | None = None) -> RSyntaxError:
    """Describe where the engine gave up, as a SyntaxError would."""
    node = first_error(root) or root
    row, column = node.start_point
    if node.is_missing:
        message = f"missing '{node.type}'"
    else:
        snippet = (node.text or b"").decode("utf-8", errors="replace")
        snippet = snippet.split("\n", 1)[0].strip()
        message = f"unexpected '{snippet}'" if snippet else "unexpected input"
    line = ""
    if root.text is not None:
        lines = root.text.decode("utf-8", errors="replace").split("\n")
        if row < len(lines):
            line = lines[row]
    return RSyntaxError(
        f"{filename or '<text>'}:{row + 1}:{column + 1}: {message}",
        (filename or "<text>", row + 1, column + 1, line),
    )


def check_syntax(root: Node, filename: str | None = None) -> Node:
    if root.has_error:
        raise syntax_error(root, filename)
    return root


def parse(source_code: bytes | str | Path) -> RSourceCode:
    """Parse R source code into its top-level expression trees."""
    filename = None
    if isinstance(source_code, Path):
        filename = str(source_code)
        source_code = source_code.read_text(encoding="utf-8")
    root = check_syntax(parse_to_ast(source_code), filename)
    try:
        return RSourceCode.from_cst(root)
    except ValueError as error:
        raise RSyntaxError(f"{filename or '<text>'}: {error}") from error
    except RecursionError as error:
        raise TidyError(
            f"{filename or '<text>'}: expression nested too deeply to parse"
        ) from error


__all__ = ["check_syntax", "parse", "parse_to_ast", "syntax_error"]
