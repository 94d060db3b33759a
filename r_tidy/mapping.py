from __future__ import annotations

import logging

from tree_sitter import Node

from r_tidy.expressions.binary import BinaryExpression
from r_tidy.expressions.block import BracedExpression, Parenthesis
from r_tidy.expressions.call import FunctionCall
from r_tidy.expressions.control import (ForLoop, IfExpression, RepeatLoop,
                                        WhileLoop)
from r_tidy.expressions.definition import FunctionDefinition
from r_tidy.expressions.expression import RExpression, TypedExpression
from r_tidy.expressions.primitive import Identifier, Primitive
from r_tidy.expressions.raw import RawExpression
from r_tidy.expressions.unary import UnaryExpression

logger = logging.getLogger(__name__)

EXPRESSION_TYPES: set[type[TypedExpression]] = {
    BinaryExpression,
    BracedExpression,
    Parenthesis,
    FunctionCall,
    ForLoop,
    IfExpression,
    RepeatLoop,
    WhileLoop,
    FunctionDefinition,
    Identifier,
    Primitive,
    UnaryExpression,
}

TREE_SITTER_TYPE_TO_EXPRESSION: dict[str, type[TypedExpression]] = {
    tree_sitter_type: expression_type
    for expression_type in EXPRESSION_TYPES
    for tree_sitter_type in expression_type.tree_sitter_types
}


def tree_sitter_node_to_expression(node: Node) -> RExpression:
    """Centralize CST-to-expression mapping to keep parsing rules consistent.

    Node types without a model are kept verbatim as raw expressions.
    """
    expression_type = TREE_SITTER_TYPE_TO_EXPRESSION.get(node.type)
    if expression_type is None or not node.is_named:
        logger.debug("Keeping %s node verbatim", node.type)
        return RawExpression.from_cst(node)
    return expression_type.from_cst(node)
