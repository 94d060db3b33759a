from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import ClassVar, Sequence

from tree_sitter import Node

from r_tidy.expressions.expression import (BLOCK_INDENT, DeparseContext,
                                           RExpression, TypedExpression,
                                           end_column, first_line, node_text)

ARGUMENT_TYPES = {"argument"}
COMMA_TYPES = {"comma", ","}

BRACKETS: dict[str, tuple[str, str]] = {
    "call": ("(", ")"),
    "subset": ("[", "]"),
    "subset2": ("[[", "]]"),
}


def deparse_sequence(
    prefix: str,
    items: Sequence[RExpression],
    suffix: str,
    ctx: DeparseContext,
) -> str:
    """Render `prefix item, item, ... suffix`, wrapping after commas.

    The flat rendering wins whenever its first line fits in `ctx.width`;
    otherwise items are packed greedily and continuation lines are indented
    one level deeper than the line the sequence starts on.
    """
    flat = _deparse_flat(prefix, items, suffix, ctx)
    if len(items) < 2 or ctx.column + len(first_line(flat)) <= ctx.width:
        return flat

    continuation = ctx.indent + BLOCK_INDENT
    wrapped_ctx = replace(ctx, indent=continuation, column=continuation)
    rendered = prefix
    column = ctx.column + len(prefix)
    for index, item in enumerate(items):
        if index == 0:
            piece = item.deparse(ctx.at(column))
        else:
            piece = item.deparse(ctx.at(column + 2))
            if column + 2 + len(first_line(piece)) > ctx.width:
                rendered += ",\n" + " " * continuation
                column = continuation
                piece = item.deparse(wrapped_ctx)
            else:
                rendered += ", "
                column += 2
        rendered += piece
        column = end_column(ctx.at(column), piece)
    return rendered + suffix


def _deparse_flat(
    prefix: str,
    items: Sequence[RExpression],
    suffix: str,
    ctx: DeparseContext,
) -> str:
    rendered = prefix
    column = ctx.column + len(prefix)
    for index, item in enumerate(items):
        if index:
            rendered += ", "
            column += 2
        piece = item.deparse(ctx.at(column))
        rendered += piece
        column = end_column(ctx.at(column), piece)
    return rendered + suffix


@dataclass(slots=True)
class Argument(RExpression):
    """One slot of a call: `value`, `name = value`, `name =` or empty."""

    name: str | None = None
    value: RExpression | None = None

    @classmethod
    def from_cst(cls, node: Node) -> Argument:
        """Read the binding name, if any, separately from the value."""
        from r_tidy.mapping import tree_sitter_node_to_expression

        name: str | None = None
        value: RExpression | None = None
        seen_equals = False
        for child in node.children:
            if child.type == "comment":
                continue
            if child.type == "=":
                seen_equals = True
                continue
            if not child.is_named:
                continue
            if (
                name is None
                and not seen_equals
                and any(sibling.type == "=" for sibling in node.children)
            ):
                name = node_text(child)
            else:
                value = tree_sitter_node_to_expression(child)
        if seen_equals and name is None:
            raise ValueError("Named argument without a name")
        return cls(name=name, value=value)

    def deparse(self, ctx: DeparseContext) -> str:
        if self.name is None:
            return "" if self.value is None else self.value.deparse(ctx)
        prefix = f"{self.name} = "
        if self.value is None:
            return prefix.rstrip(" ")
        return prefix + self.value.deparse(ctx.at(ctx.column + len(prefix)))


def arguments_from_cst(node: Node) -> list[Argument]:
    """Collect arguments, materialising the empty slots of `x[, 1]`."""
    from r_tidy.mapping import tree_sitter_node_to_expression

    arguments: list[Argument] = []
    seen_comma = False
    pending = False
    for child in node.children:
        if child.type == "comment":
            continue
        if child.type in COMMA_TYPES:
            if not pending:
                arguments.append(Argument())
            seen_comma = True
            pending = False
        elif child.type in ARGUMENT_TYPES:
            arguments.append(Argument.from_cst(child))
            pending = True
        elif child.is_named:
            arguments.append(Argument(value=tree_sitter_node_to_expression(child)))
            pending = True
    if seen_comma and not pending:
        arguments.append(Argument())
    return arguments


@dataclass(slots=True)
class FunctionCall(TypedExpression):
    """A call `f(...)` or a subset `x[...]` / `x[[...]]`."""

    tree_sitter_types: ClassVar[set[str]] = set(BRACKETS)
    function: RExpression
    arguments: list[Argument] = field(default_factory=list)
    brackets: tuple[str, str] = ("(", ")")

    @classmethod
    def from_cst(cls, node: Node) -> FunctionCall:
        from r_tidy.mapping import tree_sitter_node_to_expression

        function_node = node.child_by_field_name("function")
        arguments_node = node.child_by_field_name("arguments")
        if function_node is None or arguments_node is None:
            named = [child for child in node.named_children if child.type != "comment"]
            function_node, arguments_node = named[0], named[-1]
        return cls(
            function=tree_sitter_node_to_expression(function_node),
            arguments=arguments_from_cst(arguments_node),
            brackets=BRACKETS[node.type],
        )

    def deparse(self, ctx: DeparseContext) -> str:
        """Reconstruct function call."""
        function_str = self.function.deparse(ctx)
        opening, closing = self.brackets
        return function_str + deparse_sequence(
            opening, self.arguments, closing, ctx.after(function_str)
        )


__all__ = [
    "Argument",
    "FunctionCall",
    "arguments_from_cst",
    "deparse_sequence",
]
