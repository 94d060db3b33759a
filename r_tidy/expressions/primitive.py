from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from tree_sitter import Node

from r_tidy.expressions.expression import (DeparseContext, TypedExpression,
                                           node_text)


@dataclass(slots=True)
class Primitive(TypedExpression):
    """A literal token, emitted exactly as written."""

    tree_sitter_types: ClassVar[set[str]] = {
        "integer",
        "float",
        "complex",
        "string",
        "true",
        "false",
        "null",
        "inf",
        "nan",
        "na",
        "dots",
        "dot_dot_i",
        "next",
        "break",
    }
    text: str

    @classmethod
    def from_cst(cls, node: Node) -> Primitive:
        """Keep literals verbatim so escapes and number formats survive."""
        return cls(text=node_text(node))

    def deparse(self, ctx: DeparseContext) -> str:
        return self.text


@dataclass(slots=True)
class Identifier(Primitive):
    tree_sitter_types: ClassVar[set[str]] = {"identifier", "return"}

    @property
    def name(self) -> str:
        """Identifier without surrounding backticks."""
        if len(self.text) >= 2 and self.text[0] == self.text[-1] == "`":
            return self.text[1:-1]
        return self.text


__all__ = ["Identifier", "Primitive"]
