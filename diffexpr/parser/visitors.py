"""
AST Visitor implementations for the tree operations.

Visitors implement the Visitor pattern to traverse and operate on AST nodes:
- StringVisitor: Convert AST to canonical, fully parenthesized infix
- EvalVisitor: Evaluate AST to a scalar under variable bindings
- DiffVisitor: Structural symbolic differentiation
- SubstituteVisitor: Replace bound variables by literals
- CoerceVisitor: Re-type literals for another scalar
- VariableCollector: Collect free variable names

Trees may share sub-trees (differentiation reuses operands by reference),
so every visitor memoises its result per node identity. A shared sub-tree
is therefore visited once, and tree-producing visitors keep the sharing in
their output.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ..errors import UnboundVariableError
from ..math.scalar import Scalar
from .ast import BinaryOp, Literal, Node, UnaryOp, Variable

logger = logging.getLogger(__name__)


class MemoVisitor:
    """Base visitor that caches results by node identity."""

    def __init__(self) -> None:
        # id -> (node, result); the node is kept so its id cannot be reused
        self._memo: dict[int, tuple[Node, Any]] = {}

    def visit(self, node: Node) -> Any:
        hit = self._memo.get(id(node))
        if hit is not None:
            return hit[1]
        result = node.accept(self)
        self._memo[id(node)] = (node, result)
        return result


class StringVisitor(MemoVisitor):
    """
    Convert AST to its canonical string.

    Examples:
    - BinaryOp(Variable('x'), '+', Literal(1.0)) → "(x+1)"
    - UnaryOp('sin', Variable('x')) → "sin(x)"
    """

    def __init__(self, scalar: Scalar):
        super().__init__()
        self.scalar = scalar

    def visit_literal(self, node: Literal) -> str:
        return self.scalar.to_string(node.value)

    def visit_variable(self, node: Variable) -> str:
        return node.name

    def visit_binary_op(self, node: BinaryOp) -> str:
        return f"({self.visit(node.left)}{node.op}{self.visit(node.right)})"

    def visit_unary_op(self, node: UnaryOp) -> str:
        return f"{node.func}({self.visit(node.operand)})"


class EvalVisitor(MemoVisitor):
    """
    Evaluate AST to a scalar value.

    Args:
        bindings: Variable name → value mappings
        scalar: Numeric capability used for every operation
    """

    def __init__(self, bindings: Mapping[str, Any], scalar: Scalar):
        super().__init__()
        self.bindings = bindings
        self.scalar = scalar

    def visit_literal(self, node: Literal) -> Any:
        return node.value

    def visit_variable(self, node: Variable) -> Any:
        if node.name not in self.bindings:
            raise UnboundVariableError(node.name)
        return self.scalar.coerce(self.bindings[node.name])

    def visit_binary_op(self, node: BinaryOp) -> Any:
        left = self.visit(node.left)
        right = self.visit(node.right)
        return self.scalar.apply_operator(node.op, left, right)

    def visit_unary_op(self, node: UnaryOp) -> Any:
        return self.scalar.apply_function(node.func, self.visit(node.operand))


class DiffVisitor(MemoVisitor):
    """
    Differentiate an AST with respect to one variable.

    One rule per node kind; results are not simplified. Operands that a
    rule needs unchanged (the right factor of a product, the base of a
    power, ...) are reused by reference, never copied.

    Examples:
    - d/dx ln(x) → (1/x)
    - d/dx (x*y) → ((1*y)+(x*0))
    """

    def __init__(self, var: str, scalar: Scalar):
        super().__init__()
        self.var = var
        self.scalar = scalar
        self.zero = Literal(scalar.coerce(0))
        self.one = Literal(scalar.coerce(1))
        self.two = Literal(scalar.coerce(2))
        self.minus_one = Literal(scalar.coerce(-1))

    def visit_literal(self, node: Literal) -> Node:
        return self.zero

    def visit_variable(self, node: Variable) -> Node:
        return self.one if node.name == self.var else self.zero

    def visit_binary_op(self, node: BinaryOp) -> Node:
        left, right = node.left, node.right
        d_left = self.visit(left)
        d_right = self.visit(right)

        if node.op in ("+", "-"):
            return BinaryOp(d_left, node.op, d_right)

        if node.op == "*":
            # product rule
            return BinaryOp(
                BinaryOp(d_left, "*", right),
                "+",
                BinaryOp(left, "*", d_right),
            )

        if node.op == "/":
            # quotient rule
            numerator = BinaryOp(
                BinaryOp(d_left, "*", right),
                "-",
                BinaryOp(left, "*", d_right),
            )
            return BinaryOp(numerator, "/", BinaryOp(right, "^", self.two))

        # op == "^": d(l^r) = r*l^(r-1)*dl + l^r*ln(l)*dr
        base_term = BinaryOp(
            BinaryOp(right, "*", BinaryOp(left, "^", BinaryOp(right, "-", self.one))),
            "*",
            d_left,
        )
        exponent_term = BinaryOp(
            BinaryOp(node, "*", UnaryOp("ln", left)),
            "*",
            d_right,
        )
        return BinaryOp(base_term, "+", exponent_term)

    def visit_unary_op(self, node: UnaryOp) -> Node:
        operand = node.operand
        d_operand = self.visit(operand)

        if node.func == "sin":
            return BinaryOp(UnaryOp("cos", operand), "*", d_operand)
        if node.func == "cos":
            return BinaryOp(
                BinaryOp(self.minus_one, "*", UnaryOp("sin", operand)),
                "*",
                d_operand,
            )
        if node.func == "ln":
            return BinaryOp(d_operand, "/", operand)
        # func == "exp"
        return BinaryOp(node, "*", d_operand)


class SubstituteVisitor(MemoVisitor):
    """
    Replace bound variables by literals, producing a new tree.

    Unbound variables are left in place, so partial substitution works.
    Sub-trees that contain no bound variable are returned as they are.
    """

    def __init__(self, bindings: Mapping[str, Any], scalar: Scalar):
        super().__init__()
        self.bindings = bindings
        self.scalar = scalar

    def visit_literal(self, node: Literal) -> Node:
        return node

    def visit_variable(self, node: Variable) -> Node:
        if node.name in self.bindings:
            return Literal(self.scalar.coerce(self.bindings[node.name]))
        return node

    def visit_binary_op(self, node: BinaryOp) -> Node:
        left = self.visit(node.left)
        right = self.visit(node.right)
        if left is node.left and right is node.right:
            return node
        return BinaryOp(left, node.op, right)

    def visit_unary_op(self, node: UnaryOp) -> Node:
        operand = self.visit(node.operand)
        if operand is node.operand:
            return node
        return UnaryOp(node.func, operand)


class CoerceVisitor(MemoVisitor):
    """Rebuild a tree with every literal converted to another scalar type."""

    def __init__(self, scalar: Scalar):
        super().__init__()
        self.scalar = scalar

    def visit_literal(self, node: Literal) -> Node:
        value = self.scalar.coerce(node.value)
        if type(value) is type(node.value):
            return node
        return Literal(value)

    def visit_variable(self, node: Variable) -> Node:
        return node

    def visit_binary_op(self, node: BinaryOp) -> Node:
        left = self.visit(node.left)
        right = self.visit(node.right)
        if left is node.left and right is node.right:
            return node
        return BinaryOp(left, node.op, right)

    def visit_unary_op(self, node: UnaryOp) -> Node:
        operand = self.visit(node.operand)
        if operand is node.operand:
            return node
        return UnaryOp(node.func, operand)


class VariableCollector(MemoVisitor):
    """Collect the names of all variables in a tree."""

    def visit_literal(self, node: Literal) -> frozenset[str]:
        return frozenset()

    def visit_variable(self, node: Variable) -> frozenset[str]:
        return frozenset((node.name,))

    def visit_binary_op(self, node: BinaryOp) -> frozenset[str]:
        return self.visit(node.left) | self.visit(node.right)

    def visit_unary_op(self, node: UnaryOp) -> frozenset[str]:
        return self.visit(node.operand)
