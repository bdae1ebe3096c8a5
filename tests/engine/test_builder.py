"""Tests for building trees from postfix tokens."""

import pytest

from diffexpr.errors import (
    MalformedExpressionError,
    MalformedNumberError,
    ScalarTypeMismatchError,
)
from diffexpr.math import COMPLEX, REAL
from diffexpr.parser import (
    BinaryOp,
    Literal,
    ShuntingYard,
    Token,
    Tokenizer,
    TokenType,
    TreeBuilder,
    UnaryOp,
    Variable,
)


def build(text, scalar=REAL):
    postfix = ShuntingYard().to_postfix(Tokenizer().tokenize(text))
    return TreeBuilder(scalar).build(postfix)


class TestTreeShape:
    """Test the trees produced for well-formed input."""

    def test_single_literal(self):
        """Test a lone number."""
        assert build("123") == Literal(123.0)

    def test_single_variable(self):
        """Test a lone name."""
        assert build("x") == Variable("x")

    def test_operands_keep_their_order(self):
        """Test that the right operand is built first but stays on the right."""
        assert build("x-2") == BinaryOp(Variable("x"), "-", Literal(2.0))

    def test_precedence_shape(self):
        """Test 1+2*3 as 1+(2*3)."""
        assert build("1+2*3") == BinaryOp(
            Literal(1.0), "+", BinaryOp(Literal(2.0), "*", Literal(3.0))
        )

    def test_function_shape(self):
        """Test a function wrapping a sum."""
        assert build("ln(x+1)") == UnaryOp(
            "ln", BinaryOp(Variable("x"), "+", Literal(1.0))
        )

    def test_complex_literals(self):
        """Test literal values in complex mode."""
        tree = build("3+2i", scalar=COMPLEX)
        assert tree == BinaryOp(Literal(3 + 0j), "+", Literal(2j))
        assert isinstance(tree.left.value, complex)


class TestMalformedInput:
    """Test token sequences that do not form one expression."""

    @pytest.mark.parametrize("text", ["", "()", "1+", "+", "sin", "2 3", "x y"])
    def test_malformed(self, text):
        """Test missing operands and leftover tokens."""
        with pytest.raises(MalformedExpressionError):
            build(text)

    def test_empty_message(self):
        """Test the message for empty input."""
        with pytest.raises(MalformedExpressionError, match="Empty expression"):
            build("")

    def test_leftover_token_is_reported(self):
        """Test that the leftover operand is named."""
        with pytest.raises(MalformedExpressionError) as exc_info:
            build("2 3")
        assert exc_info.value.details["token"] == "2"

    def test_equals_token(self):
        """Test that '=' never builds a node."""
        with pytest.raises(MalformedExpressionError):
            TreeBuilder().build([Token(TokenType.EQUALS, "=", 1)])

    @pytest.mark.parametrize("text", ["1.2.3", ".", "2..i"])
    def test_malformed_numbers(self, text):
        """Test digit-and-dot runs that are not numbers."""
        with pytest.raises(MalformedNumberError):
            build(text, scalar=COMPLEX)

    def test_imaginary_literal_in_real_mode(self):
        """Test that REAL rejects imaginary literals."""
        with pytest.raises(ScalarTypeMismatchError):
            build("3i")
