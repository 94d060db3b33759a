"""Print the call signature of functions defined in R source."""

from __future__ import annotations

from pathlib import Path

from r_tidy.expressions.binary import BinaryExpression
from r_tidy.expressions.definition import FunctionDefinition
from r_tidy.expressions.expression import DeparseContext
from r_tidy.expressions.primitive import Identifier
from r_tidy.expressions.source_code import RSourceCode
from r_tidy.options import DEFAULT_WIDTH
from r_tidy.parser import parse

CONTINUATION_INDENT = 4


def function_definitions(code: RSourceCode) -> list[tuple[Identifier, FunctionDefinition]]:
    """Functions assigned to a name at the top level, in source order."""
    found = []
    for expr in code:
        if not isinstance(expr, BinaryExpression):
            continue
        if expr.operator in ("<-", "<<-", "="):
            target, value = expr.left, expr.right
        elif expr.operator in ("->", "->>"):
            target, value = expr.right, expr.left
        else:
            continue
        if isinstance(target, Identifier) and isinstance(value, FunctionDefinition):
            found.append((target, value))
    return found


def format_usage(
    name: str,
    definition: FunctionDefinition,
    width: int = DEFAULT_WIDTH,
    indent_by_name: bool = True,
) -> str:
    """Render `name(arg, arg = default)` wrapped at `width`."""
    prefix = f"{name}("
    continuation = len(prefix) if indent_by_name else CONTINUATION_INDENT
    parameters = [
        parameter.deparse(DeparseContext(width=width))
        for parameter in definition.parameters
    ]
    lines: list[str] = []
    current = prefix
    for index, parameter in enumerate(parameters):
        last = index == len(parameters) - 1
        piece = parameter if last else parameter + ","
        if index == 0:
            current += piece
            continue
        candidate = f"{current} {piece}"
        if len(candidate) + (1 if last else 0) > width:
            lines.append(current)
            current = " " * continuation + piece
        else:
            current = candidate
    lines.append(current + ")")
    return "\n".join(lines)


def usage(
    source: str | Path,
    name: str | None = None,
    width: int = DEFAULT_WIDTH,
    indent_by_name: bool = True,
) -> str:
    """Usage lines for the functions in `source` (code text or a file path).

    Raises:
        ValueError: when `name` is given but no such function is defined.
    """
    code = parse(source)
    definitions = function_definitions(code)
    if name is not None:
        definitions = [
            (target, definition)
            for target, definition in definitions
            if target.name == name
        ]
        if not definitions:
            raise ValueError(f"No function named {name!r} is defined")
    return "\n".join(
        format_usage(target.text, definition, width, indent_by_name)
        for target, definition in definitions
    )


__all__ = ["format_usage", "function_definitions", "usage"]
