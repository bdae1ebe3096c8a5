"""
Outcome-returning variants of the engine operations.

Each helper runs one operation and returns an Outcome instead of raising,
so callers can branch on ``outcome.success``:

    >>> outcome = try_eval(parse("x+1"), {})
    >>> outcome.success, outcome.error_kind
    (False, <ErrorKind.UNBOUND_VARIABLE: 'unbound_variable'>)
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from .errors import Outcome, attempt
from .expression import Expression
from .math.scalar import Scalar
from .parser.parser import parse


def try_parse(expression: str, scalar: Scalar | str | None = None) -> Outcome:
    """parse() as an Outcome; value is the Expression."""
    return attempt(parse, expression, scalar)


def try_eval(expression: Expression, bindings: Optional[Mapping[str, Any]] = None) -> Outcome:
    """Expression.eval() as an Outcome; value is the scalar result."""
    return attempt(expression.eval, bindings)


def try_diff(expression: Expression, name: str) -> Outcome:
    """Expression.diff() as an Outcome; value is the derivative."""
    return attempt(expression.diff, name)


def try_substitute(expression: Expression, bindings: Mapping[str, Any]) -> Outcome:
    """Expression.substitute() as an Outcome; value is the new Expression."""
    return attempt(expression.substitute, bindings)
