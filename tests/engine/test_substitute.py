"""Tests for variable substitution."""

import pytest

from diffexpr import COMPLEX, Expression, ln, parse
from diffexpr.errors import ScalarTypeMismatchError


class TestSubstitution:
    """Test replacing variables by literals."""

    def test_substitute_into_derivative(self):
        """Test the ln example: d/dx ln(x) at x=123."""
        derivative = ln(Expression("x")).diff("x")
        assert derivative.substitute({"x": 123}).to_string() == "(1/123)"

    def test_partial_substitution(self):
        """Test that unbound variables stay in place."""
        expr = parse("x+y").substitute({"x": 2})
        assert expr.to_string() == "(2+y)"
        assert expr.variables() == ["y"]

    def test_original_is_unchanged(self):
        """Test that substitution builds a new tree."""
        expr = parse("x*x")
        expr.substitute({"x": 3})
        assert expr.to_string() == "(x*x)"

    @pytest.mark.parametrize(
        "text", ["x*y+1", "sin(x)^y", "ln(x)/exp(y)", "(x-y)*(x+y)"]
    )
    def test_substitute_then_eval(self, text):
        """Test that substituting everything gives the same value as eval."""
        bindings = {"x": 1.5, "y": 0.5}
        expr = parse(text)
        assert expr.substitute(bindings).eval({}) == expr.eval(bindings)

    def test_complex_substitution(self):
        """Test substitution in a complex expression."""
        expr = Expression("x", COMPLEX) + 1j
        assert expr.substitute({"x": 2}).to_string() == "((2,0)+(0,1))"

    def test_untouched_subtree_is_shared(self):
        """Test that sub-trees without bound variables are reused."""
        expr = parse("sin(y)+x")
        result = expr.substitute({"x": 1})
        assert result.node.left is expr.node.left

    def test_nothing_to_substitute(self):
        """Test that an empty mapping returns the same tree."""
        expr = parse("x+1")
        assert expr.substitute({}).node is expr.node

    def test_complex_value_in_real_expression(self):
        """Test that a real expression refuses complex values."""
        with pytest.raises(ScalarTypeMismatchError):
            parse("x").substitute({"x": 1j})
