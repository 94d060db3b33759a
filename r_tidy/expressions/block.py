from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from tree_sitter import Node

from r_tidy.expressions.expression import (DeparseContext, RExpression,
                                           TypedExpression,
                                           expression_children)


@dataclass(slots=True)
class BracedExpression(TypedExpression):
    """A `{ ... }` block; each statement goes on its own line."""

    tree_sitter_types: ClassVar[set[str]] = {"braced_expression"}
    body: list[RExpression] = field(default_factory=list)

    @classmethod
    def from_cst(cls, node: Node) -> BracedExpression:
        from r_tidy.mapping import tree_sitter_node_to_expression

        return cls(
            body=[
                tree_sitter_node_to_expression(child)
                for child in expression_children(node)
            ]
        )

    def deparse(self, ctx: DeparseContext) -> str:
        closing = " " * ctx.indent + "}"
        if not self.body:
            return "{\n" + closing
        inner = ctx.nested()
        lines = ["{"]
        for statement in self.body:
            lines.append(" " * inner.indent + statement.deparse(inner))
        lines.append(closing)
        return "\n".join(lines)


@dataclass(slots=True)
class Parenthesis(TypedExpression):
    tree_sitter_types: ClassVar[set[str]] = {"parenthesized_expression"}
    value: RExpression | None = None

    @classmethod
    def from_cst(cls, node: Node) -> Parenthesis:
        from r_tidy.mapping import tree_sitter_node_to_expression

        inner = expression_children(node)
        if len(inner) > 1:
            raise ValueError("Parenthesized expression with several values")
        return cls(value=tree_sitter_node_to_expression(inner[0]) if inner else None)

    def deparse(self, ctx: DeparseContext) -> str:
        if self.value is None:
            return "()"
        return "(" + self.value.deparse(ctx.at(ctx.column + 1)) + ")"


__all__ = ["BracedExpression", "Parenthesis"]
