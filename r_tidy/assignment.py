"""Rewrite `=` assignments to `<-` without touching named arguments."""

from __future__ import annotations

from r_tidy.expressions.binary import BinaryExpression
from r_tidy.expressions.expression import RExpression


def _arrow(expr: RExpression) -> RExpression:
    if isinstance(expr, BinaryExpression) and expr.operator == "=":
        return expr.model_copy(update={"operator": "<-"})
    return expr


def replace_assignment(exprs: list[RExpression]) -> list[RExpression]:
    """Return copies of `exprs` where every `=` assignment reads `<-`.

    Call arguments and function parameters keep their `=`: they are stored
    as `Argument.name` / `Parameter.name`, never as operator nodes.
    """
    return [expr.transform(_arrow) for expr in exprs]


__all__ = ["replace_assignment"]
