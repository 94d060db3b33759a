from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from tree_sitter import Node

from r_tidy.expressions.expression import (DeparseContext, RExpression,
                                           TypedExpression, node_text,
                                           significant_children)


@dataclass(slots=True)
class UnaryExpression(TypedExpression):
    tree_sitter_types: ClassVar[set[str]] = {"unary_operator"}
    operator: str
    operand: RExpression

    @classmethod
    def from_cst(cls, node: Node) -> UnaryExpression:
        from r_tidy.mapping import tree_sitter_node_to_expression

        children = significant_children(node)
        if len(children) != 2:
            raise ValueError(f"Unexpected unary operator with {len(children)} children")
        operator_node, operand_node = children
        return cls(
            operator=node_text(operator_node),
            operand=tree_sitter_node_to_expression(operand_node),
        )

    def deparse(self, ctx: DeparseContext) -> str:
        """Glue the operator to its operand, as in `-x` or `!done`."""
        operand_str = self.operand.deparse(ctx.at(ctx.column + len(self.operator)))
        return f"{self.operator}{operand_str}"


__all__ = ["UnaryExpression"]
