"""
diffexpr - symbolic expression engine

Parses infix expressions over real or complex scalars into immutable trees
and supports:
- Numeric evaluation under variable bindings
- Canonical, fully parenthesized re-serialization
- Structural symbolic differentiation
- Variable substitution
"""

from .errors import (
    ErrorKind,
    ExpressionError,
    ExpressionTooDeepError,
    InvalidBindingError,
    MalformedExpressionError,
    MalformedNumberError,
    Outcome,
    ScalarTypeMismatchError,
    UnboundVariableError,
    UnexpectedEqualsError,
    UnknownFunctionError,
    UnknownOperatorError,
    UnknownSymbolError,
)
from .expression import Expression, cos, exp, ln, sin
from .math import COMPLEX, REAL, Scalar
from .outcomes import try_diff, try_eval, try_parse, try_substitute
from .parser import Context, Parser, parse

__version__ = "0.1.0"

__all__ = [
    "parse",
    "Parser",
    "Context",
    "Expression",
    "sin",
    "cos",
    "ln",
    "exp",
    "Scalar",
    "REAL",
    "COMPLEX",
    "ErrorKind",
    "ExpressionError",
    "UnknownSymbolError",
    "UnexpectedEqualsError",
    "MalformedExpressionError",
    "MalformedNumberError",
    "ExpressionTooDeepError",
    "UnboundVariableError",
    "UnknownOperatorError",
    "UnknownFunctionError",
    "ScalarTypeMismatchError",
    "InvalidBindingError",
    "Outcome",
    "try_parse",
    "try_eval",
    "try_diff",
    "try_substitute",
]
