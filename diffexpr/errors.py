"""
Engine exceptions and explicit operation outcomes.

Every failure the engine can report has an ErrorKind and an exception class
carrying a message that names the offending token or variable. Callers that
prefer to branch on results instead of catching exceptions use the Outcome
model returned by attempt() (and the try_* helpers built on it).
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    """Kinds of failure reported by the engine."""

    UNKNOWN_SYMBOL = "unknown_symbol"
    UNEXPECTED_EQUALS = "unexpected_equals"
    MALFORMED_EXPRESSION = "malformed_expression"
    UNBOUND_VARIABLE = "unbound_variable"
    UNKNOWN_OPERATOR = "unknown_operator"
    UNKNOWN_FUNCTION = "unknown_function"
    SCALAR_TYPE_MISMATCH = "scalar_type_mismatch"
    INVALID_BINDING = "invalid_binding"


# Custom Exceptions


class ExpressionError(Exception):
    """Base exception for all engine errors"""

    kind: ErrorKind = ErrorKind.MALFORMED_EXPRESSION

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class UnknownSymbolError(ExpressionError):
    """Raised when the lexer meets a character outside the grammar"""

    kind = ErrorKind.UNKNOWN_SYMBOL

    def __init__(self, symbol: str, pos: int):
        super().__init__(
            message=f"Unknown symbol '{symbol}' at position {pos}",
            details={"symbol": symbol, "pos": pos},
        )


class UnexpectedEqualsError(ExpressionError):
    """Raised when '=' appears outside binding-assignment mode"""

    kind = ErrorKind.UNEXPECTED_EQUALS

    def __init__(self, pos: int):
        super().__init__(
            message=f"Unexpected '=' at position {pos}",
            details={"pos": pos},
        )


class MalformedExpressionError(ExpressionError):
    """Raised when the token stream does not form a complete expression"""

    kind = ErrorKind.MALFORMED_EXPRESSION


class MalformedNumberError(MalformedExpressionError):
    """Raised when a numeric token is not a valid number"""

    def __init__(self, text: str, pos: int):
        super().__init__(
            message=f"Malformed number '{text}' at position {pos}",
            details={"text": text, "pos": pos},
        )


class ExpressionTooDeepError(MalformedExpressionError):
    """Raised when an expression is nested deeper than the interpreter can recurse"""

    def __init__(self, operation: str):
        super().__init__(
            message=f"Expression is nested too deeply to {operation}",
            details={"operation": operation},
        )


class UnboundVariableError(ExpressionError):
    """Raised when evaluation meets a variable missing from the bindings"""

    kind = ErrorKind.UNBOUND_VARIABLE

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            message=f"Variable not bound: {name}",
            details={"name": name},
        )


class UnknownOperatorError(ExpressionError):
    """Raised when a binary operator symbol is outside the closed set"""

    kind = ErrorKind.UNKNOWN_OPERATOR

    def __init__(self, op: str):
        super().__init__(
            message=f"Unknown operator: {op}",
            details={"op": op},
        )


class UnknownFunctionError(ExpressionError):
    """Raised when a function name is outside the closed set"""

    kind = ErrorKind.UNKNOWN_FUNCTION

    def __init__(self, name: str):
        super().__init__(
            message=f"Unknown function: {name}",
            details={"name": name},
        )


class ScalarTypeMismatchError(ExpressionError):
    """Raised when a complex value is used where a real scalar is required"""

    kind = ErrorKind.SCALAR_TYPE_MISMATCH

    def __init__(self, value: Any, scalar_name: str):
        super().__init__(
            message=f"Value {value!r} cannot be used as a {scalar_name} scalar",
            details={"value": repr(value), "scalar": scalar_name},
        )


class InvalidBindingError(ExpressionError):
    """Raised when a name=value binding string cannot be parsed"""

    kind = ErrorKind.INVALID_BINDING

    def __init__(self, text: str, reason: str):
        super().__init__(
            message=f"Invalid binding '{text}': {reason}",
            details={"text": text, "reason": reason},
        )


# Outcomes


class Outcome(BaseModel):
    """
    Result of an engine operation.

    Attributes:
        success: Whether the operation completed
        value: The produced value (Expression, scalar, ...) on success
        error_kind: Kind of failure, None on success
        error_message: Human readable description of the failure
        details: Structured error details (offending token, name, position)
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    success: bool
    value: Any = None
    error_kind: Optional[ErrorKind] = None
    error_message: str = ""
    details: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def ok(cls, value: Any) -> "Outcome":
        return cls(success=True, value=value)

    @classmethod
    def failure(cls, error: ExpressionError) -> "Outcome":
        return cls(
            success=False,
            error_kind=error.kind,
            error_message=error.message,
            details=dict(error.details),
        )

    def unwrap(self) -> Any:
        """Return the value, or raise the failure as an ExpressionError."""
        if self.success:
            return self.value
        error = ExpressionError(self.error_message, self.details)
        error.kind = self.error_kind
        raise error


def attempt(func: Callable[..., Any], *args: Any, **kwargs: Any) -> Outcome:
    """
    Run an engine operation and capture its result as an Outcome.

    Only ExpressionError is captured; anything else is a bug and propagates.
    """
    try:
        return Outcome.ok(func(*args, **kwargs))
    except ExpressionError as exc:
        logger.info(
            "%s failed: %s",
            getattr(func, "__name__", func),
            exc.message,
            extra={"extra_data": {"error_kind": exc.kind.value, "details": exc.details}},
        )
        return Outcome.failure(exc)
