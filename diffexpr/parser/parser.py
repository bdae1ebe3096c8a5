"""
Parser for mathematical expressions.

Parsing runs three stages:
1. Tokenizer: text → infix tokens (wrapped in implicit parentheses)
2. ShuntingYard: infix tokens → postfix tokens
3. TreeBuilder: postfix tokens → AST, consumed from the end

The scalar type is chosen once per parse() call: complex when any token is
an imaginary literal, real otherwise, unless the caller forces one.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING, Optional

from ..config import get_settings
from ..errors import ExpressionTooDeepError, MalformedExpressionError
from ..math.scalar import COMPLEX, REAL, Scalar, get_scalar
from .builder import TreeBuilder
from .context import Context
from .shunting_yard import ShuntingYard
from .tokenizer import Token, TokenType, Tokenizer

if TYPE_CHECKING:
    from ..expression import Expression

logger = logging.getLogger(__name__)


class Parser:
    """
    Infix expression parser.

    Args:
        context: Parsing context (defaults to the standard grammar, or to
            settings.CONTEXT_FILE when that is set)
        max_length: Longest accepted input (defaults to
            settings.MAX_EXPRESSION_LENGTH)
    """

    def __init__(self, context: Context | None = None, max_length: Optional[int] = None):
        settings = get_settings()
        if context is None:
            if settings.CONTEXT_FILE:
                context = Context.from_yaml(settings.CONTEXT_FILE)
            else:
                context = Context.default()
        self.context = context
        self.max_length = max_length if max_length is not None else settings.MAX_EXPRESSION_LENGTH
        self.tokenizer = Tokenizer(self.context)
        self.reorderer = ShuntingYard(self.context)

    def tokenize(self, expression: str) -> list[Token]:
        """Tokenize an expression (no '=' allowed)."""
        self._check_length(expression)
        return self.tokenizer.tokenize(expression)

    def to_postfix(self, expression: str) -> list[Token]:
        """Tokenize and reorder an expression into postfix order."""
        return self.reorderer.to_postfix(self.tokenize(expression))

    def parse(self, expression: str, scalar: Scalar | str | None = None) -> "Expression":
        """
        Parse an expression string.

        Args:
            expression: The mathematical expression
            scalar: REAL, COMPLEX, their names, or None/"auto" to select
                from the tokens (settings.DEFAULT_SCALAR applies when None)

        Returns:
            Expression wrapping the AST

        Raises:
            UnknownSymbolError: On a character outside the grammar
            UnexpectedEqualsError: On '='
            MalformedExpressionError: If the tokens do not form an expression
            ScalarTypeMismatchError: If REAL is forced on an imaginary literal
        """
        from ..expression import Expression

        postfix = self.to_postfix(expression)
        active = self.select_scalar(postfix, scalar)

        try:
            root = TreeBuilder(active).build(postfix)
        except RecursionError:
            raise ExpressionTooDeepError("parse") from None

        logger.debug(
            "Parsed %r as %s expression",
            expression,
            active.name,
            extra={"extra_data": {"expression": expression, "scalar": active.name}},
        )
        return Expression.from_node(root, active)

    def select_scalar(self, tokens: list[Token], scalar: Scalar | str | None = None) -> Scalar:
        """
        Choose the scalar type for a token sequence.

        Args:
            tokens: Infix or postfix tokens
            scalar: Explicit choice; None defers to settings.DEFAULT_SCALAR

        Returns:
            REAL or COMPLEX
        """
        if scalar is None:
            scalar = get_settings().DEFAULT_SCALAR
        if isinstance(scalar, Scalar):
            return scalar
        if scalar != "auto":
            return get_scalar(scalar)
        if any(token.type == TokenType.COMPLEX_NUMBER for token in tokens):
            return COMPLEX
        return REAL

    def _check_length(self, expression: str) -> None:
        if len(expression) > self.max_length:
            raise MalformedExpressionError(
                f"Expression is longer than {self.max_length} characters",
                details={"length": len(expression), "max_length": self.max_length},
            )


@lru_cache()
def default_parser(context_file: Optional[str], max_length: int) -> Parser:
    """Shared Parser for the given settings; the context file is read once."""
    context = Context.from_yaml(context_file) if context_file else Context.default()
    return Parser(context, max_length)


def parse(expression: str, scalar: Scalar | str | None = None) -> "Expression":
    """
    Parse an expression string with the default context.

    The parser is shared between calls with the same CONTEXT_FILE and
    MAX_EXPRESSION_LENGTH settings.

    Example:
        >>> parse("(lambda*2)^lambda+(2/2)-lambda").eval({"lambda": 1})
        2.0
    """
    settings = get_settings()
    parser = default_parser(settings.CONTEXT_FILE, settings.MAX_EXPRESSION_LENGTH)
    return parser.parse(expression, scalar)
