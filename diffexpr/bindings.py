"""
Variable bindings read from text.

A binding is an assignment ``name=value`` where value is a real literal
(``x=3``), a purely imaginary literal (``x=2i``) or a real and imaginary
pair (``x=2+1i``, ``x=-0.5-1.5i``). The text is tokenized in '=' mode and
the token sequence is matched against that small grammar; no expression
evaluation takes place.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable

from pydantic import BaseModel, Field, field_validator

from .errors import ExpressionError, InvalidBindingError
from .parser.context import Context
from .parser.tokenizer import Token, TokenType, Tokenizer

logger = logging.getLogger(__name__)

_NAME_PATTERN = re.compile(r"^[A-Za-z]+$")
_SIGNS = ("+", "-")


class Binding(BaseModel):
    """
    One variable binding.

    Attributes:
        name: Variable name (letters only, as the tokenizer reads names)
        real: Real part
        imag: Imaginary part
        is_complex: Whether the value was written with an imaginary part
    """

    name: str = Field(description="The variable name")
    real: float = Field(default=0.0, description="The real part")
    imag: float = Field(default=0.0, description="The imaginary part")
    is_complex: bool = Field(default=False, description="Whether an imaginary part was given")

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        if not _NAME_PATTERN.match(value):
            raise ValueError(f"'{value}' is not a variable name")
        return value

    @property
    def value(self) -> float | complex:
        """The bound value: complex when an imaginary part was given."""
        if self.is_complex:
            return complex(self.real, self.imag)
        return self.real


def _signed(sign: Token | None, number: Token) -> float:
    text = number.value[:-1] if number.type == TokenType.COMPLEX_NUMBER else number.value
    try:
        magnitude = float(text)
    except ValueError:
        raise ValueError(f"'{number.value}' is not a number") from None
    return -magnitude if sign is not None and sign.value == "-" else magnitude


def _match_value(tokens: list[Token]) -> tuple[float, float, bool]:
    """Match [sign] number [sign imaginary] and return (real, imag, is_complex)."""
    pos = 0
    sign = None
    if pos < len(tokens) and tokens[pos].type == TokenType.OPERATOR and tokens[pos].value in _SIGNS:
        sign = tokens[pos]
        pos += 1

    if pos >= len(tokens) or tokens[pos].type not in (TokenType.NUMBER, TokenType.COMPLEX_NUMBER):
        raise ValueError("expected a number after '='")
    first = tokens[pos]
    pos += 1

    if pos == len(tokens):
        if first.type == TokenType.COMPLEX_NUMBER:
            return 0.0, _signed(sign, first), True
        return _signed(sign, first), 0.0, False

    if first.type == TokenType.COMPLEX_NUMBER:
        raise ValueError("the imaginary part must come last")

    if (
        len(tokens) - pos != 2
        or tokens[pos].type != TokenType.OPERATOR
        or tokens[pos].value not in _SIGNS
        or tokens[pos + 1].type != TokenType.COMPLEX_NUMBER
    ):
        raise ValueError("expected '+' or '-' followed by an imaginary number")

    return _signed(sign, first), _signed(tokens[pos], tokens[pos + 1]), True


def parse_binding(text: str, context: Context | None = None) -> Binding:
    """
    Parse one ``name=value`` binding.

    Args:
        text: The binding text
        context: Parsing context used by the tokenizer

    Returns:
        Binding

    Raises:
        InvalidBindingError: If the text is not a valid binding
    """
    try:
        tokens = Tokenizer(context).tokenize(text, allow_equals=True)
    except ExpressionError as exc:
        raise InvalidBindingError(text, exc.message) from exc

    # drop the implicit parentheses
    body = tokens[1:-1]

    if len(body) < 3 or body[0].type != TokenType.VARIABLE or body[1].type != TokenType.EQUALS:
        raise InvalidBindingError(text, "expected name=value")

    try:
        real, imag, is_complex = _match_value(body[2:])
    except ValueError as exc:
        raise InvalidBindingError(text, str(exc)) from None

    binding = Binding(name=body[0].value, real=real, imag=imag, is_complex=is_complex)
    logger.debug("Parsed binding %s = %r", binding.name, binding.value)
    return binding


def parse_bindings(texts: Iterable[str], context: Context | None = None) -> dict[str, float | complex]:
    """
    Parse several bindings into a binding mapping.

    Raises:
        InvalidBindingError: If any binding is invalid or a name repeats
    """
    result: dict[str, float | complex] = {}
    for text in texts:
        binding = parse_binding(text, context)
        if binding.name in result:
            raise InvalidBindingError(text, f"'{binding.name}' is bound more than once")
        result[binding.name] = binding.value
    return result


def needs_complex(bindings: dict[str, float | complex]) -> bool:
    """Whether any bound value is complex."""
    return any(isinstance(value, complex) for value in bindings.values())
