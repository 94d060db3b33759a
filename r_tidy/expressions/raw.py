from __future__ import annotations

from dataclasses import dataclass

from tree_sitter import Node

from r_tidy.expressions.expression import (DeparseContext, RExpression,
                                           node_text)


@dataclass(slots=True, repr=False)
class RawExpression(RExpression):
    """Fallback expression that preserves raw source text."""

    text: str

    @classmethod
    def from_cst(cls, node: Node) -> RawExpression:
        return cls(text=node_text(node))

    def deparse(self, ctx: DeparseContext) -> str:
        """Return raw source to avoid losing unsupported constructs."""
        return self.text

    def __repr__(self) -> str:
        return f"RawExpression({self.text!r})"


__all__ = ["RawExpression"]
