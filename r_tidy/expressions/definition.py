from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from tree_sitter import Node

from r_tidy.expressions.call import deparse_sequence
from r_tidy.expressions.expression import (DeparseContext, RExpression,
                                           TypedExpression, node_text)

PARAMETER_TYPES = {"parameter"}
PARAMETER_LIST_TYPES = {"parameters"}


@dataclass(slots=True)
class Parameter(RExpression):
    """A formal argument `name` or `name = default`."""

    name: str
    default: RExpression | None = None

    @classmethod
    def from_cst(cls, node: Node) -> Parameter:
        from r_tidy.mapping import tree_sitter_node_to_expression

        named = [child for child in node.named_children if child.type != "comment"]
        if not named:
            raise ValueError("Parameter without a name")
        default = tree_sitter_node_to_expression(named[1]) if len(named) > 1 else None
        return cls(name=node_text(named[0]), default=default)

    def deparse(self, ctx: DeparseContext) -> str:
        if self.default is None:
            return self.name
        prefix = f"{self.name} = "
        return prefix + self.default.deparse(ctx.at(ctx.column + len(prefix)))


@dataclass(slots=True)
class FunctionDefinition(TypedExpression):
    tree_sitter_types: ClassVar[set[str]] = {"function_definition"}
    parameters: list[Parameter] = field(default_factory=list)
    body: RExpression | None = None
    keyword: str = "function"

    @classmethod
    def from_cst(cls, node: Node) -> FunctionDefinition:
        """Capture the formals and the body; `\\(x)` lambdas keep their keyword."""
        from r_tidy.mapping import tree_sitter_node_to_expression

        keyword = "function"
        parameters: list[Parameter] = []
        body: RExpression | None = None
        for child in node.children:
            if child.type == "comment":
                continue
            if not child.is_named:
                if child.type in ("function", "\\"):
                    keyword = child.type
                continue
            if child.type in PARAMETER_LIST_TYPES:
                parameters = [
                    Parameter.from_cst(parameter)
                    for parameter in child.named_children
                    if parameter.type in PARAMETER_TYPES
                ]
            else:
                body = tree_sitter_node_to_expression(child)
        return cls(parameters=parameters, body=body, keyword=keyword)

    def deparse(self, ctx: DeparseContext) -> str:
        """Reconstruct function definition."""
        header = self.keyword + deparse_sequence(
            "(", self.parameters, ")", ctx.at(ctx.column + len(self.keyword))
        )
        if self.body is None:
            return header
        return f"{header} " + self.body.deparse(ctx.after(header, 1))


__all__ = ["FunctionDefinition", "Parameter"]
