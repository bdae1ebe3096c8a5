"""
Tree builder: postfix tokens to AST.

The postfix sequence is consumed from its end. An operator token builds its
right operand first, then its left one; a function token builds its single
operand. Running out of tokens while an operand is still expected means the
input was not a complete expression.
"""

import logging

from ..errors import MalformedExpressionError
from ..math.scalar import REAL, Scalar
from .ast import BinaryOp, Literal, Node, UnaryOp, Variable
from .tokenizer import Token, TokenType

logger = logging.getLogger(__name__)


class TreeBuilder:
    """
    Builds an AST from a postfix token sequence.

    Args:
        scalar: Scalar type for literal tokens. In complex mode a NUMBER is a
            real value with zero imaginary part and a COMPLEX_NUMBER is purely
            imaginary; REAL rejects COMPLEX_NUMBER tokens.
    """

    def __init__(self, scalar: Scalar = REAL):
        self.scalar = scalar
        self.tokens: list[Token] = []

    def build(self, postfix: list[Token]) -> Node:
        """
        Build the AST for a complete postfix sequence.

        Args:
            postfix: Tokens in postfix order

        Returns:
            Root AST node

        Raises:
            MalformedExpressionError: If the sequence is empty, an operator
                lacks an operand, or tokens remain after the root is built
        """
        self.tokens = list(postfix)

        if not self.tokens:
            raise MalformedExpressionError("Empty expression")

        root = self.build_next()

        if self.tokens:
            leftover = self.tokens[-1]
            raise MalformedExpressionError(
                f"Unexpected token '{leftover.value}' at position {leftover.pos}",
                details={"token": leftover.value, "pos": leftover.pos},
            )

        return root

    def build_next(self) -> Node:
        """Consume tokens from the end and build one sub-tree."""
        if not self.tokens:
            raise MalformedExpressionError("Expression ended while an operand was expected")

        token = self.tokens.pop()

        if token.type in (TokenType.NUMBER, TokenType.COMPLEX_NUMBER):
            imaginary = token.type == TokenType.COMPLEX_NUMBER
            return Literal(self.scalar.from_token(token.value, imaginary, token.pos))

        if token.type == TokenType.VARIABLE:
            return Variable(token.value)

        if token.type == TokenType.OPERATOR:
            right = self.build_next()
            left = self.build_next()
            return BinaryOp(left, token.value, right)

        if token.type == TokenType.FUNCTION:
            operand = self.build_next()
            return UnaryOp(token.value, operand)

        raise MalformedExpressionError(
            f"Unexpected token '{token.value}' at position {token.pos}",
            details={"token": token.value, "pos": token.pos},
        )
