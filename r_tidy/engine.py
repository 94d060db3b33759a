"""Adapter around the tree-sitter based parser and the deparser."""

from __future__ import annotations

import logging

from r_tidy.assignment import replace_assignment
from r_tidy.exceptions import TidyError
from r_tidy.expressions.expression import RExpression
from r_tidy.options import DEFAULT_WIDTH
from r_tidy.parser import parse

logger = logging.getLogger(__name__)


def parse_expressions(text: str) -> list[RExpression]:
    return list(parse(text).expressions)


def render(expr: RExpression, width: int = DEFAULT_WIDTH) -> str:
    return expr.rebuild(width=width)


def tidy_block(
    text: str, width: int = DEFAULT_WIDTH, arrow: bool = False
) -> list[str]:
    """Parse `text` and re-serialize each top-level expression at `width`."""
    exprs = parse_expressions(text)
    if not exprs:
        return []
    logger.debug("Rendering %d top-level expression(s) at width %d", len(exprs), width)
    try:
        if arrow:
            exprs = replace_assignment(exprs)
        return [render(expr, width) for expr in exprs]
    except RecursionError as error:
        raise TidyError("Expression nested too deeply to render") from error


__all__ = ["parse_expressions", "render", "tidy_block"]
