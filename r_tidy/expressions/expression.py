from __future__ import annotations

from copy import copy
from dataclasses import dataclass, fields, replace
from typing import Any, Callable, ClassVar, Iterator, Self

from tree_sitter import Node

from r_tidy.options import DEFAULT_WIDTH

BLOCK_INDENT = 4


@dataclass(frozen=True, slots=True)
class DeparseContext:
    """Where an expression starts and how wide its lines may grow."""

    width: int = DEFAULT_WIDTH
    indent: int = 0
    column: int = 0

    def at(self, column: int) -> DeparseContext:
        return replace(self, column=column)

    def nested(self) -> DeparseContext:
        """Context for the first column of a line one level deeper."""
        indent = self.indent + BLOCK_INDENT
        return replace(self, indent=indent, column=indent)

    def after(self, text: str, extra: int = 0) -> DeparseContext:
        """Context for whatever follows `text` (plus `extra` columns)."""
        return self.at(end_column(self, text) + extra)


def end_column(ctx: DeparseContext, text: str) -> int:
    """Column reached after emitting `text` starting at `ctx.column`."""
    if "\n" in text:
        return len(text.rsplit("\n", 1)[1])
    return ctx.column + len(text)


def first_line(text: str) -> str:
    return text.split("\n", 1)[0]


@dataclass(slots=True)
class RExpression:
    """Base class for all R expression trees."""

    @classmethod
    def from_cst(cls, node: Node) -> Self:
        """Construct an object from a CST node."""
        raise NotImplementedError

    def deparse(self, ctx: DeparseContext) -> str:
        """Render the expression starting at `ctx.column`.

        Lines after the first carry their own absolute indentation.
        """
        raise NotImplementedError

    def rebuild(self, width: int = DEFAULT_WIDTH) -> str:
        """Render the expression as a top-level statement."""
        return self.deparse(DeparseContext(width=width))

    def model_copy(self, update: dict[str, Any] | None = None) -> Self:
        """Copy nodes to enable immutable-style edits during transforms."""
        if not update:
            return copy(self)
        return replace(self, **update)

    def children(self) -> Iterator[RExpression]:
        """Yield the direct sub-expressions in source order."""
        for item in fields(self):
            value = getattr(self, item.name)
            if isinstance(value, RExpression):
                yield value
            elif isinstance(value, list):
                for element in value:
                    if isinstance(element, RExpression):
                        yield element

    def walk(self) -> Iterator[RExpression]:
        """Yield this node and every descendant, depth first."""
        yield self
        for child in self.children():
            yield from child.walk()

    def transform(self, fn: Callable[[RExpression], RExpression]) -> RExpression:
        """Rebuild the tree bottom-up, passing every node through `fn`."""
        update: dict[str, Any] = {}
        for item in fields(self):
            value = getattr(self, item.name)
            if isinstance(value, RExpression):
                update[item.name] = value.transform(fn)
            elif isinstance(value, list) and any(
                isinstance(element, RExpression) for element in value
            ):
                update[item.name] = [
                    element.transform(fn)
                    if isinstance(element, RExpression)
                    else element
                    for element in value
                ]
        return fn(self.model_copy(update=update))


class TypedExpression(RExpression):
    """Base class for all R expressions matching a tree-sitter type."""

    tree_sitter_types: ClassVar[set[str]]


def significant_children(node: Node) -> list[Node]:
    """Children of `node` that carry syntax (comments are dropped)."""
    return [child for child in node.children if child.type != "comment"]


def expression_children(node: Node) -> list[Node]:
    """Named children of `node` that are expressions."""
    return [
        child
        for child in node.named_children
        if child.type not in ("comment", "comma")
    ]


def node_text(node: Node) -> str:
    if node.text is None:
        raise ValueError(f"Missing text for {node.type}")
    return node.text.decode("utf-8")


__all__ = [
    "BLOCK_INDENT",
    "DeparseContext",
    "RExpression",
    "TypedExpression",
    "end_column",
    "expression_children",
    "first_line",
    "node_text",
    "significant_children",
]
