from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from tree_sitter import Node

from r_tidy.expressions.expression import (DeparseContext, RExpression,
                                           TypedExpression,
                                           expression_children)


def _parts(node: Node, minimum: int) -> list[RExpression]:
    from r_tidy.mapping import tree_sitter_node_to_expression

    children = expression_children(node)
    if len(children) < minimum:
        raise ValueError(f"Incomplete {node.type}")
    return [tree_sitter_node_to_expression(child) for child in children]


@dataclass(slots=True)
class IfExpression(TypedExpression):
    tree_sitter_types: ClassVar[set[str]] = {"if_statement"}
    condition: RExpression
    consequence: RExpression
    alternative: RExpression | None = None

    @classmethod
    def from_cst(cls, node: Node) -> IfExpression:
        parts = _parts(node, 2)
        return cls(
            condition=parts[0],
            consequence=parts[1],
            alternative=parts[2] if len(parts) > 2 else None,
        )

    def deparse(self, ctx: DeparseContext) -> str:
        """Keep `else` on the line where the consequence ends.

        A top-level `else` that starts a line is a syntax error in R, so
        the clause is never moved to a line of its own.
        """
        condition_str = self.condition.deparse(ctx.at(ctx.column + 4))
        head = f"if ({condition_str}) "
        rendered = head + self.consequence.deparse(ctx.after(head))
        if self.alternative is not None:
            rendered += " else "
            rendered += self.alternative.deparse(ctx.after(rendered))
        return rendered


@dataclass(slots=True)
class ForLoop(TypedExpression):
    tree_sitter_types: ClassVar[set[str]] = {"for_statement"}
    variable: RExpression
    sequence: RExpression
    body: RExpression

    @classmethod
    def from_cst(cls, node: Node) -> ForLoop:
        variable, sequence, body = _parts(node, 3)[:3]
        return cls(variable=variable, sequence=sequence, body=body)

    def deparse(self, ctx: DeparseContext) -> str:
        variable_str = self.variable.deparse(ctx)
        head = f"for ({variable_str} in "
        head += self.sequence.deparse(ctx.after(head)) + ") "
        return head + self.body.deparse(ctx.after(head))


@dataclass(slots=True)
class WhileLoop(TypedExpression):
    tree_sitter_types: ClassVar[set[str]] = {"while_statement"}
    condition: RExpression
    body: RExpression

    @classmethod
    def from_cst(cls, node: Node) -> WhileLoop:
        condition, body = _parts(node, 2)[:2]
        return cls(condition=condition, body=body)

    def deparse(self, ctx: DeparseContext) -> str:
        head = "while (" + self.condition.deparse(ctx.at(ctx.column + 7)) + ") "
        return head + self.body.deparse(ctx.after(head))


@dataclass(slots=True)
class RepeatLoop(TypedExpression):
    tree_sitter_types: ClassVar[set[str]] = {"repeat_statement"}
    body: RExpression

    @classmethod
    def from_cst(cls, node: Node) -> RepeatLoop:
        return cls(body=_parts(node, 1)[0])

    def deparse(self, ctx: DeparseContext) -> str:
        return "repeat " + self.body.deparse(ctx.at(ctx.column + 7))


__all__ = ["ForLoop", "IfExpression", "RepeatLoop", "WhileLoop"]
