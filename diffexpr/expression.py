"""
Expression: the user-facing handle over an AST.

An Expression wraps one root node together with the Scalar it is
instantiated over. Builder operators and functions allocate one new node
over the operands' existing nodes, so combining expressions never copies
trees. The four tree operations (eval, diff, substitute, to_string) are
delegated to the visitors.

Examples:
    >>> x = Expression("x")
    >>> f = ln(x * 2)
    >>> f.to_string()
    'ln((x*2))'
    >>> f.diff("x").to_string()
    '(((1*2)+(x*0))/(x*2))'
    >>> (x ^ 2).eval({"x": 3})
    9.0

Note that Python's '^' binds more loosely than '+', so write (x ^ 2) + 1,
or use '**', which is an alias.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from .errors import ExpressionTooDeepError
from .math.scalar import COMPLEX, REAL, Scalar, promote
from .parser.ast import BinaryOp, Literal, Node, UnaryOp, Variable
from .parser.visitors import (
    CoerceVisitor,
    DiffVisitor,
    EvalVisitor,
    MemoVisitor,
    StringVisitor,
    SubstituteVisitor,
    VariableCollector,
)

logger = logging.getLogger(__name__)


def _run(visitor: MemoVisitor, node: Node, operation: str) -> Any:
    try:
        return visitor.visit(node)
    except RecursionError:
        raise ExpressionTooDeepError(operation) from None


class Expression:
    """
    Handle over an immutable expression tree.

    Args:
        value: A variable name (str) or a number (int, float, complex)
        scalar: Scalar type; defaults to COMPLEX for complex numbers and
            REAL otherwise

    Copying an Expression (or using it in several places) shares the tree.
    """

    def __init__(self, value: str | int | float | complex, scalar: Optional[Scalar] = None):
        if isinstance(value, str):
            self._node: Node = Variable(value)
            self._scalar = scalar or REAL
        else:
            self._scalar = scalar or (COMPLEX if isinstance(value, complex) else REAL)
            self._node = Literal(self._scalar.coerce(value))

    @classmethod
    def from_node(cls, node: Node, scalar: Scalar = REAL) -> "Expression":
        """Wrap an existing node without copying it."""
        expr = cls.__new__(cls)
        expr._node = node
        expr._scalar = scalar
        return expr

    @property
    def node(self) -> Node:
        """The root node."""
        return self._node

    @property
    def scalar(self) -> Scalar:
        """The scalar type this expression is instantiated over."""
        return self._scalar

    # Tree operations

    def eval(self, bindings: Optional[Mapping[str, Any]] = None) -> float | complex:
        """
        Evaluate numerically.

        Args:
            bindings: Variable name → value mappings

        Returns:
            float for REAL expressions, complex for COMPLEX ones

        Raises:
            UnboundVariableError: If a variable is missing from bindings
            ScalarTypeMismatchError: If a bound value does not fit the scalar
        """
        visitor = EvalVisitor(bindings or {}, self._scalar)
        return _run(visitor, self._node, "evaluate")

    def diff(self, name: str) -> "Expression":
        """
        Differentiate with respect to a variable.

        The result is not simplified.

        Example:
            >>> ln(Expression("x")).diff("x").to_string()
            '(1/x)'
        """
        visitor = DiffVisitor(name, self._scalar)
        return Expression.from_node(_run(visitor, self._node, "differentiate"), self._scalar)

    def substitute(self, bindings: Mapping[str, Any]) -> "Expression":
        """
        Replace bound variables by literal values.

        Variables missing from bindings are kept, so partial substitution
        yields an expression that still has free variables.
        """
        visitor = SubstituteVisitor(bindings, self._scalar)
        return Expression.from_node(_run(visitor, self._node, "substitute"), self._scalar)

    def to_string(self) -> str:
        """Canonical, fully parenthesized infix form."""
        return _run(StringVisitor(self._scalar), self._node, "render")

    def variables(self) -> list[str]:
        """Sorted names of the free variables."""
        return sorted(_run(VariableCollector(), self._node, "collect variables"))

    def with_scalar(self, scalar: Scalar) -> "Expression":
        """
        Re-type the expression for another scalar.

        Raises:
            ScalarTypeMismatchError: If a complex literal cannot become real
        """
        if scalar is self._scalar:
            return self
        node = _run(CoerceVisitor(scalar), self._node, "convert")
        return Expression.from_node(node, scalar)

    # Builders

    def _coerce_operand(self, other: Any) -> "Expression | None":
        if isinstance(other, Expression):
            return other
        if isinstance(other, bool) or not isinstance(other, (int, float, complex)):
            return None
        if isinstance(other, complex):
            return Expression(other, COMPLEX)
        return Expression(other, self._scalar)

    def _binary(self, op: str, other: Any, reflected: bool = False) -> "Expression":
        operand = self._coerce_operand(other)
        if operand is None:
            return NotImplemented
        scalar = promote(self._scalar, operand.scalar)
        left, right = self.with_scalar(scalar), operand.with_scalar(scalar)
        if reflected:
            left, right = right, left
        return Expression.from_node(BinaryOp(left.node, op, right.node), scalar)

    def __add__(self, other: Any) -> "Expression":
        return self._binary("+", other)

    def __radd__(self, other: Any) -> "Expression":
        return self._binary("+", other, reflected=True)

    def __sub__(self, other: Any) -> "Expression":
        return self._binary("-", other)

    def __rsub__(self, other: Any) -> "Expression":
        return self._binary("-", other, reflected=True)

    def __mul__(self, other: Any) -> "Expression":
        return self._binary("*", other)

    def __rmul__(self, other: Any) -> "Expression":
        return self._binary("*", other, reflected=True)

    def __truediv__(self, other: Any) -> "Expression":
        return self._binary("/", other)

    def __rtruediv__(self, other: Any) -> "Expression":
        return self._binary("/", other, reflected=True)

    def __xor__(self, other: Any) -> "Expression":
        return self._binary("^", other)

    def __rxor__(self, other: Any) -> "Expression":
        return self._binary("^", other, reflected=True)

    __pow__ = __xor__
    __rpow__ = __rxor__

    def apply(self, func: str) -> "Expression":
        """Wrap the expression in a function: sin, cos, ln or exp."""
        return Expression.from_node(UnaryOp(func, self._node), self._scalar)

    # Comparison and display

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Expression):
            return NotImplemented
        return self._scalar is other._scalar and self._node == other._node

    def __hash__(self) -> int:
        return hash((self._scalar.name, self._node))

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Expression('{self.to_string()}', scalar={self._scalar.name})"


def _as_expression(value: Expression | int | float | complex) -> Expression:
    if isinstance(value, Expression):
        return value
    return Expression(value)


def sin(value: Expression | int | float | complex) -> Expression:
    """sin(value) as an expression."""
    return _as_expression(value).apply("sin")


def cos(value: Expression | int | float | complex) -> Expression:
    """cos(value) as an expression."""
    return _as_expression(value).apply("cos")


def ln(value: Expression | int | float | complex) -> Expression:
    """Natural logarithm of value as an expression."""
    return _as_expression(value).apply("ln")


def exp(value: Expression | int | float | complex) -> Expression:
    """exp(value) as an expression."""
    return _as_expression(value).apply("exp")
