"""
Expression parser package.

Tokenization, shunting-yard reordering, tree building, the AST node types
and the visitors implementing the tree operations.
"""

from .ast import BINARY_OPERATORS, FUNCTIONS, BinaryOp, Literal, Node, UnaryOp, Variable, nodes_equal
from .builder import TreeBuilder
from .context import Context, FunctionConfig, OperatorConfig
from .parser import Parser, parse
from .shunting_yard import ShuntingYard, to_postfix
from .tokenizer import Token, TokenType, Tokenizer

__all__ = [
    "Node",
    "Literal",
    "Variable",
    "BinaryOp",
    "UnaryOp",
    "nodes_equal",
    "BINARY_OPERATORS",
    "FUNCTIONS",
    "Token",
    "TokenType",
    "Tokenizer",
    "ShuntingYard",
    "to_postfix",
    "TreeBuilder",
    "Parser",
    "parse",
    "Context",
    "OperatorConfig",
    "FunctionConfig",
]
