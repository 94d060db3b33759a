from __future__ import annotations

from dataclasses import dataclass, field

from tree_sitter import Node

from r_tidy.expressions.expression import RExpression, expression_children
from r_tidy.options import DEFAULT_WIDTH


@dataclass(slots=True)
class RSourceCode:
    """The ordered top-level expressions of one R program."""

    expressions: list[RExpression] = field(default_factory=list)

    @classmethod
    def from_cst(cls, node: Node) -> RSourceCode:
        from r_tidy.mapping import tree_sitter_node_to_expression

        return cls(
            expressions=[
                tree_sitter_node_to_expression(child)
                for child in expression_children(node)
            ]
        )

    def rebuild(self, width: int = DEFAULT_WIDTH) -> str:
        """Render every top-level expression on its own line(s)."""
        return "\n".join(expr.rebuild(width=width) for expr in self.expressions)

    def __len__(self) -> int:
        return len(self.expressions)

    def __iter__(self):
        return iter(self.expressions)


__all__ = ["RSourceCode"]
