"""
Shunting-yard reordering of infix tokens into postfix (reverse Polish) order.

Priorities come from the context: ( = 0, + - = 1, * / = 2, ^ = 3,
functions = 4. Every binary operator is left-associative, '^' included:
"2^3^2" reads as "(2^3)^2" and "8/2*2" as "(8/2)*2". Functions are
prefix operators and wait on the stack for their operand, so "sin cos x"
reads as "sin(cos(x))".

Parenthesis mismatches are not reported here. A surplus ')' empties the
stack and is dropped; a missing ')' leaves its '(' on the stack, which is
never emitted. Any structural damage shows up later when the tree builder
runs out of operands or has tokens left over.
"""

import logging

from .context import BRACKET_PRIORITY, Context
from .tokenizer import Token, TokenType

logger = logging.getLogger(__name__)

_OPERAND_TYPES = (TokenType.NUMBER, TokenType.COMPLEX_NUMBER, TokenType.VARIABLE)
_OPERATOR_TYPES = (TokenType.OPERATOR, TokenType.FUNCTION, TokenType.EQUALS)


class ShuntingYard:
    """
    Infix to postfix converter.

    Args:
        context: Parsing context supplying operator and function priorities
    """

    def __init__(self, context: Context | None = None):
        self.context = context or Context.default()

    def to_postfix(self, tokens: list[Token]) -> list[Token]:
        """
        Reorder an infix token sequence into postfix order.

        Args:
            tokens: Tokens as produced by Tokenizer.tokenize()

        Returns:
            The same tokens, minus parentheses, in postfix order
        """
        stack: list[Token] = []
        output: list[Token] = []

        for token in tokens:
            if token.type in _OPERAND_TYPES:
                output.append(token)

            elif token.type == TokenType.LPAREN:
                stack.append(token)

            elif token.type in _OPERATOR_TYPES:
                while stack and self._yields_to(stack[-1], token):
                    output.append(stack.pop())
                stack.append(token)

            elif token.type == TokenType.RPAREN:
                while stack:
                    top = stack.pop()
                    if top.type == TokenType.LPAREN:
                        break
                    output.append(top)

        logger.debug(
            "Postfix order: %s", " ".join(token.value for token in output)
        )
        return output

    def _yields_to(self, top: Token, incoming: Token) -> bool:
        """Whether the stack top must be emitted before incoming is pushed."""
        if top.type == TokenType.LPAREN:
            return False
        top_priority = self.context.get_priority(top.value)
        priority = self.context.get_priority(incoming.value)
        if incoming.type == TokenType.FUNCTION:
            return top_priority > priority
        return top_priority >= priority and priority > BRACKET_PRIORITY


def to_postfix(tokens: list[Token], context: Context | None = None) -> list[Token]:
    """Reorder infix tokens into postfix order using the given context."""
    return ShuntingYard(context).to_postfix(tokens)
