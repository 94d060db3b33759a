from r_tidy.expressions.binary import BinaryExpression
from r_tidy.expressions.block import BracedExpression, Parenthesis
from r_tidy.expressions.call import Argument, FunctionCall
from r_tidy.expressions.control import (ForLoop, IfExpression, RepeatLoop,
                                        WhileLoop)
from r_tidy.expressions.definition import FunctionDefinition, Parameter
from r_tidy.expressions.expression import (DeparseContext, RExpression,
                                           TypedExpression)
from r_tidy.expressions.primitive import Identifier, Primitive
from r_tidy.expressions.raw import RawExpression
from r_tidy.expressions.source_code import RSourceCode
from r_tidy.expressions.unary import UnaryExpression

__all__ = [
    "Argument",
    "BinaryExpression",
    "BracedExpression",
    "DeparseContext",
    "ForLoop",
    "FunctionCall",
    "FunctionDefinition",
    "Identifier",
    "IfExpression",
    "Parameter",
    "Parenthesis",
    "Primitive",
    "RExpression",
    "RSourceCode",
    "RawExpression",
    "RepeatLoop",
    "TypedExpression",
    "UnaryExpression",
    "WhileLoop",
]
