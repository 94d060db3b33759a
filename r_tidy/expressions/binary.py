from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from tree_sitter import Node

from r_tidy.expressions.expression import (DeparseContext, RExpression,
                                           TypedExpression, node_text,
                                           significant_children)

# Operators R prints without surrounding spaces.
TIGHT_OPERATORS = {"^", ":", "$", "@", "::", ":::"}
ASSIGNMENT_OPERATORS = {"<-", "<<-", "=", "->", "->>", ":="}


@dataclass(slots=True)
class BinaryExpression(TypedExpression):
    tree_sitter_types: ClassVar[set[str]] = {
        "binary_operator",
        "extract_operator",
        "namespace_operator",
    }
    operator: str
    left: RExpression
    right: RExpression

    @classmethod
    def from_cst(cls, node: Node) -> BinaryExpression:
        """Split the node into operands around the operator token."""
        from r_tidy.mapping import tree_sitter_node_to_expression

        children = significant_children(node)
        if len(children) != 3:
            raise ValueError(
                f"Unexpected {node.type} with {len(children)} children"
            )
        left_node, operator_node, right_node = children
        return cls(
            operator=node_text(operator_node),
            left=tree_sitter_node_to_expression(left_node),
            right=tree_sitter_node_to_expression(right_node),
        )

    @property
    def is_assignment(self) -> bool:
        return self.operator in ASSIGNMENT_OPERATORS

    def deparse(self, ctx: DeparseContext) -> str:
        """Reconstruct binary expression."""
        left_str = self.left.deparse(ctx)
        if self.operator in TIGHT_OPERATORS:
            operator_str = self.operator
        else:
            operator_str = f" {self.operator} "
        right_str = self.right.deparse(ctx.after(left_str, len(operator_str)))
        return f"{left_str}{operator_str}{right_str}"


__all__ = ["ASSIGNMENT_OPERATORS", "BinaryExpression", "TIGHT_OPERATORS"]
