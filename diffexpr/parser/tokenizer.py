"""
Tokenizer for mathematical expressions.

This module provides regex-based tokenization. It recognizes numbers
(optionally imaginary, with a trailing 'i'), variables, the functions of
the active context, the binary operators + - * / ^ and parentheses.

The whole input is wrapped in an implicit pair of parentheses so the
shunting-yard stage always ends by flushing its operator stack.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

from ..errors import UnexpectedEqualsError, UnknownSymbolError

if TYPE_CHECKING:
    from .context import Context

logger = logging.getLogger(__name__)


class TokenType(Enum):
    """Token types for mathematical expressions."""

    # Literals
    NUMBER = auto()
    COMPLEX_NUMBER = auto()  # imaginary literal, e.g. 2i
    VARIABLE = auto()

    # Operators and functions
    OPERATOR = auto()  # + - * / ^
    FUNCTION = auto()  # sin cos exp ln

    # Parentheses
    LPAREN = auto()  # (
    RPAREN = auto()  # )

    # Binding assignments only
    EQUALS = auto()  # =


@dataclass
class Token:
    """
    Represents a single token in the expression.

    Attributes:
        type: The token type
        value: The string value of the token
        pos: Position in the source string (for error reporting)
    """

    type: TokenType
    value: str
    pos: int

    def __repr__(self) -> str:
        return f"Token({self.type.name}, '{self.value}', pos={self.pos})"


class Tokenizer:
    """
    Tokenizes mathematical expressions using regex patterns.

    The tokenizer handles:
    - Numbers: a run of digits and dots, 'i' suffix marks an imaginary literal
    - Names: a run of letters, classified as function or variable
    - Operators: + - * / ^
    - Parentheses
    - '=' (only when tokenizing a binding assignment)
    """

    # Regex patterns for token matching
    PATTERNS = {
        # Numbers: digits and dots, optional imaginary suffix
        "NUMBER": r"[0-9.]+i?",
        # Names: letters only
        "NAME": r"[A-Za-z]+",
        "OPERATOR": r"[-+*/^]",
        "LPAREN": r"\(",
        "RPAREN": r"\)",
        "EQUALS": r"=",
        # Whitespace (to skip)
        "WHITESPACE": r"\s+",
    }

    def __init__(self, context: "Context | None" = None):
        """
        Initialize tokenizer with optional context.

        Args:
            context: Parsing context defining operators and functions
        """
        if context is None:
            from .context import Context

            context = Context.default()
        self.context = context
        self._compile_patterns()

    def _compile_patterns(self) -> None:
        """Compile regex patterns for faster matching."""
        pattern_parts = []
        for name, pattern in self.PATTERNS.items():
            pattern_parts.append(f"(?P<{name}>{pattern})")

        self.combined_pattern = re.compile("|".join(pattern_parts))

    def tokenize(self, expression: str, allow_equals: bool = False) -> list[Token]:
        """
        Tokenize a mathematical expression.

        Args:
            expression: The expression to tokenize
            allow_equals: Recognize '=' (binding assignments like x=2+1i)

        Returns:
            List of tokens, wrapped in an implicit LPAREN/RPAREN pair

        Raises:
            UnknownSymbolError: If expression contains an invalid character
            UnexpectedEqualsError: If '=' appears and allow_equals is False
        """
        tokens: list[Token] = [Token(TokenType.LPAREN, "(", -1)]
        pos = 0

        while pos < len(expression):
            match = self.combined_pattern.match(expression, pos)

            if not match:
                raise UnknownSymbolError(expression[pos], pos)

            kind = match.lastgroup
            value = match.group()
            token_pos = pos
            pos = match.end()

            if kind == "WHITESPACE":
                continue

            if kind == "NUMBER":
                token_type = (
                    TokenType.COMPLEX_NUMBER if value.endswith("i") else TokenType.NUMBER
                )
            elif kind == "NAME":
                if self.context.is_function(value):
                    token_type = TokenType.FUNCTION
                else:
                    token_type = TokenType.VARIABLE
            elif kind == "OPERATOR":
                if not self.context.is_operator(value):
                    raise UnknownSymbolError(value, token_pos)
                token_type = TokenType.OPERATOR
            elif kind == "EQUALS":
                if not allow_equals:
                    raise UnexpectedEqualsError(token_pos)
                token_type = TokenType.EQUALS
            else:
                token_type = TokenType[kind]

            tokens.append(Token(token_type, value, token_pos))

        tokens.append(Token(TokenType.RPAREN, ")", len(expression)))

        logger.debug("Tokenized %r into %d tokens", expression, len(tokens))
        return tokens
