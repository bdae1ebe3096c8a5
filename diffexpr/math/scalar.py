"""
Scalar capabilities: the numeric types an expression is instantiated over.

A Scalar is a stateless strategy object. Expressions store plain Python
numbers (float for REAL, complex for COMPLEX) and hand every arithmetic
operation to their Scalar, so the AST and the parser stay generic over the
numeric representation.

Arithmetic follows IEEE semantics rather than Python's exception-raising
behaviour: dividing by zero, taking ln(0) or overflowing exp() produce
inf/nan values instead of errors.
"""

from __future__ import annotations

import cmath
import math
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, Callable

from ..errors import MalformedNumberError, ScalarTypeMismatchError

Number = float | complex


def _ieee_div(a: float, b: float) -> float:
    """Divide two floats, returning inf/nan on a zero divisor."""
    if b != 0:
        return a / b
    if a == 0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _guard(func: Callable[..., float], *args: float, overflow: float = math.inf) -> float:
    """Call a math function, mapping domain errors to nan and overflow to inf."""
    try:
        return func(*args)
    except ValueError:
        return math.nan
    except OverflowError:
        return overflow


def format_real(value: float) -> str:
    """
    Render a real value in plain decimal form.

    Integral values drop the trailing '.0' and no exponent notation is used,
    so the output can be read back by the tokenizer.

    Examples:
        1.0 -> "1", -1.0 -> "-1", 0.5 -> "0.5", 1e-05 -> "0.00001"
    """
    if not math.isfinite(value):
        return repr(value)
    if value == int(value):
        return str(int(value))
    return format(Decimal(repr(value)), "f")


class Scalar(ABC):
    """
    Abstract numeric capability.

    Subclasses implement the arithmetic and elementary functions for one
    representation. Instances are singletons (REAL, COMPLEX).
    """

    name: str = ""
    is_complex: bool = False

    @abstractmethod
    def coerce(self, value: Any) -> Number:
        """Convert a Python number to this scalar's representation."""

    @abstractmethod
    def from_token(self, text: str, imaginary: bool, pos: int = 0) -> Number:
        """Build a literal value from numeric token text."""

    @abstractmethod
    def to_string(self, value: Number) -> str:
        """Render a value for canonical output."""

    def add(self, a: Number, b: Number) -> Number:
        return a + b

    def sub(self, a: Number, b: Number) -> Number:
        return a - b

    def mul(self, a: Number, b: Number) -> Number:
        return a * b

    @abstractmethod
    def div(self, a: Number, b: Number) -> Number: ...

    @abstractmethod
    def pow(self, a: Number, b: Number) -> Number: ...

    @abstractmethod
    def sin(self, a: Number) -> Number: ...

    @abstractmethod
    def cos(self, a: Number) -> Number: ...

    @abstractmethod
    def ln(self, a: Number) -> Number: ...

    @abstractmethod
    def exp(self, a: Number) -> Number: ...

    def apply_operator(self, op: str, a: Number, b: Number) -> Number:
        """Apply a binary operator symbol."""
        return getattr(self, BINARY_METHODS[op])(a, b)

    def apply_function(self, func: str, a: Number) -> Number:
        """Apply a unary function name."""
        return getattr(self, func)(a)

    @staticmethod
    def _parse_float(text: str, pos: int) -> float:
        try:
            return float(text)
        except ValueError:
            raise MalformedNumberError(text, pos) from None

    def __repr__(self) -> str:
        return f"Scalar({self.name})"


class RealScalar(Scalar):
    """Double precision real numbers."""

    name = "real"
    is_complex = False

    def coerce(self, value: Any) -> float:
        if isinstance(value, (bool, str)):
            raise ScalarTypeMismatchError(value, self.name)
        if isinstance(value, complex):
            raise ScalarTypeMismatchError(value, self.name)
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
        except (TypeError, ValueError):
            raise ScalarTypeMismatchError(value, self.name) from None

    def from_token(self, text: str, imaginary: bool, pos: int = 0) -> float:
        if imaginary:
            raise ScalarTypeMismatchError(text, self.name)
        return self._parse_float(text, pos)

    def to_string(self, value: float) -> str:
        return format_real(value)

    def div(self, a: float, b: float) -> float:
        return _ieee_div(a, b)

    def pow(self, a: float, b: float) -> float:
        if a == 0 and b < 0:
            return math.inf
        # an overflowing power is negative only for a negative base and odd exponent
        negative = a < 0 and float(b).is_integer() and int(b) % 2 == 1
        return _guard(math.pow, a, b, overflow=-math.inf if negative else math.inf)

    def sin(self, a: float) -> float:
        return _guard(math.sin, a)

    def cos(self, a: float) -> float:
        return _guard(math.cos, a)

    def ln(self, a: float) -> float:
        if a == 0:
            return -math.inf
        return _guard(math.log, a)

    def exp(self, a: float) -> float:
        return _guard(math.exp, a)


class ComplexScalar(Scalar):
    """Complex numbers; powers and logarithms use the principal branch."""

    name = "complex"
    is_complex = True

    def coerce(self, value: Any) -> complex:
        if isinstance(value, (bool, str)):
            raise ScalarTypeMismatchError(value, self.name)
        try:
            return complex(value)
        except OverflowError:
            return complex(math.inf if value > 0 else -math.inf, 0.0)
        except (TypeError, ValueError):
            raise ScalarTypeMismatchError(value, self.name) from None

    def from_token(self, text: str, imaginary: bool, pos: int = 0) -> complex:
        if imaginary:
            return complex(0.0, self._parse_float(text[:-1], pos))
        return complex(self._parse_float(text, pos), 0.0)

    def to_string(self, value: complex) -> str:
        return f"({format_real(value.real)},{format_real(value.imag)})"

    def div(self, a: complex, b: complex) -> complex:
        if b != 0:
            return a / b
        return complex(_ieee_div(a.real, 0.0), _ieee_div(a.imag, 0.0))

    def pow(self, a: complex, b: complex) -> complex:
        if a == 0:
            if b == 0:
                return complex(1.0, 0.0)
            if b.real > 0:
                return complex(0.0, 0.0)
            return complex(math.inf, 0.0)
        return self.exp(b * self.ln(a))

    def sin(self, a: complex) -> complex:
        try:
            return cmath.sin(a)
        except (ValueError, OverflowError):
            return complex(math.nan, math.nan)

    def cos(self, a: complex) -> complex:
        try:
            return cmath.cos(a)
        except (ValueError, OverflowError):
            return complex(math.nan, math.nan)

    def ln(self, a: complex) -> complex:
        if a == 0:
            return complex(-math.inf, 0.0)
        return cmath.log(a)

    def exp(self, a: complex) -> complex:
        try:
            return cmath.exp(a)
        except OverflowError:
            # |e^a| overflows; keep the direction of the phase
            cos_y, sin_y = math.cos(a.imag), math.sin(a.imag)
            real = math.copysign(math.inf, cos_y) if cos_y else 0.0
            imag = math.copysign(math.inf, sin_y) if sin_y else 0.0
            return complex(real, imag)


BINARY_METHODS = {
    "+": "add",
    "-": "sub",
    "*": "mul",
    "/": "div",
    "^": "pow",
}

REAL = RealScalar()
COMPLEX = ComplexScalar()


def get_scalar(name: str) -> Scalar:
    """
    Look up a scalar by name.

    Args:
        name: "real" or "complex"

    Returns:
        The matching Scalar singleton

    Raises:
        ValueError: If the name is unknown
    """
    scalars = {REAL.name: REAL, COMPLEX.name: COMPLEX}
    try:
        return scalars[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown scalar type: {name}") from None


def promote(a: Scalar, b: Scalar) -> Scalar:
    """Return the scalar able to hold values of both a and b."""
    return COMPLEX if (a.is_complex or b.is_complex) else REAL
