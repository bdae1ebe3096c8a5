"""Tests for the shunting-yard reordering."""

import pytest

from diffexpr.parser import ShuntingYard, Tokenizer, to_postfix


def postfix(text, allow_equals=False):
    tokens = Tokenizer().tokenize(text, allow_equals=allow_equals)
    return " ".join(token.value for token in ShuntingYard().to_postfix(tokens))


class TestPrecedence:
    """Test ordering by priority."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("1+2", "1 2 +"),
            ("1+2*3", "1 2 3 * +"),
            ("1*2+3", "1 2 * 3 +"),
            ("(1+2)*3", "1 2 + 3 *"),
            ("2*x^2", "2 x 2 ^ *"),
            ("x", "x"),
        ],
    )
    def test_binary_precedence(self, text, expected):
        """Test that * / bind tighter than + - and ^ tighter than both."""
        assert postfix(text) == expected

    def test_functions_bind_tightest(self):
        """Test function application against operators."""
        assert postfix("sin(x)") == "x sin"
        assert postfix("2*sin(x)+1") == "2 x sin * 1 +"
        assert postfix("sin x^2") == "x sin 2 ^"

    def test_nested_functions_without_parentheses(self):
        """Test that prefix functions wait for their operand."""
        assert postfix("sin cos x") == "x cos sin"

    def test_mixed_expression(self):
        """Test the lambda example expression."""
        assert postfix("(lambda*2)^lambda+(2/2)-lambda") == (
            "lambda 2 * lambda ^ 2 2 / + lambda -"
        )


class TestAssociativity:
    """Test that equal priorities group to the left."""

    def test_power_is_left_associative(self):
        """Test 2^3^2 as (2^3)^2."""
        assert postfix("2^3^2") == "2 3 ^ 2 ^"

    def test_subtraction_is_left_associative(self):
        """Test 1-2-3 as (1-2)-3."""
        assert postfix("1-2-3") == "1 2 - 3 -"

    def test_division_and_multiplication(self):
        """Test 8/2*2 as (8/2)*2."""
        assert postfix("8/2*2") == "8 2 / 2 *"


class TestParenthesisMismatch:
    """Test that mismatched parentheses are not reported here."""

    def test_surplus_right_parenthesis(self):
        """Test that an extra ')' is dropped."""
        assert postfix("(1+2))") == "1 2 +"

    def test_missing_right_parenthesis(self):
        """Test that an unclosed '(' is left behind."""
        assert postfix("(1+2") == "1 2 +"

    def test_empty_input(self):
        """Test that empty input gives an empty sequence."""
        assert postfix("") == ""


class TestEquals:
    """Test binding assignments."""

    def test_equals_has_lowest_priority(self):
        """Test that '=' is emitted last."""
        assert postfix("x=2+1i", allow_equals=True) == "x 2 1i + ="


def test_module_level_helper():
    """Test to_postfix() with the default context."""
    tokens = Tokenizer().tokenize("a*b")
    assert [t.value for t in to_postfix(tokens)] == ["a", "b", "*"]
