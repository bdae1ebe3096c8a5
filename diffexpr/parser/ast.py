"""
Abstract Syntax Tree (AST) node definitions for mathematical expressions.

The node set is closed: Literal, Variable, BinaryOp and UnaryOp. Nodes are
frozen dataclasses and are never modified after construction, so a node can
safely be shared by several parents (differentiation reuses operands by
reference). Operations over the tree live in visitor classes
(see visitors.py), one method per node kind.

Equality is structural. Because shared sub-trees would make a plain
recursive comparison walk the unfolded tree, each node caches its hash at
construction and nodes_equal() compares every pair of sub-trees at most once.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, Union

from ..errors import UnknownFunctionError, UnknownOperatorError

BINARY_OPERATORS = ("+", "-", "*", "/", "^")
FUNCTIONS = ("sin", "cos", "ln", "exp")


class ASTVisitor(Protocol):
    """
    Visitor protocol for traversing AST nodes.

    Implementations provide evaluation, string rendering, differentiation
    and substitution.
    """

    def visit_literal(self, node: "Literal") -> Any:
        ...

    def visit_variable(self, node: "Variable") -> Any:
        ...

    def visit_binary_op(self, node: "BinaryOp") -> Any:
        ...

    def visit_unary_op(self, node: "UnaryOp") -> Any:
        ...


class _StructuralNode:
    """Structural equality and a hash computed once per node."""

    def _seal(self, *parts: Any) -> None:
        # children hash in O(1) since their own hash is already cached
        object.__setattr__(self, "_hash", hash((type(self).__name__,) + parts))

    def label(self) -> Any:
        """The node's own data, children excluded."""
        raise NotImplementedError

    def children(self) -> tuple:
        return ()

    def __hash__(self) -> int:
        return self._hash

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _StructuralNode):
            return NotImplemented
        return nodes_equal(self, other)


def nodes_equal(a: "Node", b: "Node") -> bool:
    """
    Compare two trees structurally.

    Each pair of sub-trees is compared at most once, so trees that share
    sub-trees are compared in time proportional to their node count rather
    than to the size of the unfolded tree. No recursion is involved.
    """
    compared: set[tuple[int, int]] = set()
    pending = [(a, b)]
    while pending:
        left, right = pending.pop()
        if left is right:
            continue
        key = (id(left), id(right))
        if key in compared:
            continue
        if (
            type(left) is not type(right)
            or left._hash != right._hash
            or left.label() != right.label()
        ):
            return False
        compared.add(key)
        pending.extend(zip(left.children(), right.children()))
    return True


# Leaf Nodes (terminals)


@dataclass(frozen=True, eq=False)
class Literal(_StructuralNode):
    """
    Represents a scalar constant (float or complex).

    Examples: 2, 0.5, (0,1)
    """

    value: float | complex

    def __post_init__(self) -> None:
        self._seal(self.value)

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_literal(self)

    def label(self) -> Any:
        return self.value


@dataclass(frozen=True, eq=False)
class Variable(_StructuralNode):
    """
    Represents a named variable, resolved at evaluation or substitution time.

    Examples: x, lambda, phi
    """

    name: str

    def __post_init__(self) -> None:
        self._seal(self.name)

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_variable(self)

    def label(self) -> Any:
        return self.name


# Composite Nodes (operators and functions)


@dataclass(frozen=True, eq=False)
class BinaryOp(_StructuralNode):
    """
    Represents a binary operation.

    Examples: x + 1, a * b, x ^ 2

    Operators: +, -, *, /, ^
    """

    left: "Node"
    op: str
    right: "Node"

    def __post_init__(self) -> None:
        if self.op not in BINARY_OPERATORS:
            raise UnknownOperatorError(self.op)
        self._seal(self.op, self.left, self.right)

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_binary_op(self)

    def label(self) -> Any:
        return self.op

    def children(self) -> tuple:
        return (self.left, self.right)


@dataclass(frozen=True, eq=False)
class UnaryOp(_StructuralNode):
    """
    Represents a function applied to one operand.

    Examples: sin(x), ln(x + 1)

    Functions: sin, cos, ln, exp
    """

    func: str
    operand: "Node"

    def __post_init__(self) -> None:
        if self.func not in FUNCTIONS:
            raise UnknownFunctionError(self.func)
        self._seal(self.func, self.operand)

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_unary_op(self)

    def label(self) -> Any:
        return self.func

    def children(self) -> tuple:
        return (self.operand,)


Node = Union[Literal, Variable, BinaryOp, UnaryOp]
