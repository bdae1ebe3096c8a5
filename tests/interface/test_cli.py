"""Tests for the command line interface."""

import pytest

from diffexpr.cli import main


def run(capsys, *argv):
    code = main(list(argv))
    captured = capsys.readouterr()
    return code, captured.out.splitlines(), captured.err


class TestParseCommand:
    """Test `diffexpr parse`."""

    def test_tokens_postfix_and_canonical_form(self, capsys):
        """Test the three sections of the output."""
        code, out, _ = run(capsys, "parse", "x+2*y")
        assert code == 0
        assert out[0] == "Token type: LPAREN, Value: ("
        assert out[1] == "Token type: VARIABLE, Value: x"
        assert out[2] == "Token type: OPERATOR, Value: +"
        assert "Result ordered in polish notation: x 2 y * +" in out
        assert out[-1] == "(x+(2*y))"

    def test_unknown_symbol(self, capsys):
        """Test that lexer errors are reported with exit code 1."""
        code, out, err = run(capsys, "parse", "2#3")
        assert code == 1
        assert out == []
        assert "Error: Unknown symbol '#' at position 1" in err

    def test_malformed(self, capsys):
        """Test that incomplete input fails after printing the tokens."""
        code, _, err = run(capsys, "parse", "1+")
        assert code == 1
        assert "Error:" in err


class TestEvalCommand:
    """Test `diffexpr eval`."""

    def test_real(self, capsys):
        """Test a real evaluation."""
        code, out, _ = run(capsys, "eval", "(lambda*2)^lambda+(2/2)-lambda", "lambda=1")
        assert code == 0
        assert out == ["2"]

    def test_complex_binding_widens(self, capsys):
        """Test that a complex binding makes the evaluation complex."""
        code, out, _ = run(capsys, "eval", "x+1", "x=0+1i")
        assert code == 0
        assert out == ["(1,1)"]

    def test_forced_complex(self, capsys):
        """Test --complex."""
        code, out, _ = run(capsys, "--complex", "eval", "x*2", "x=1")
        assert code == 0
        assert out == ["(2,0)"]

    def test_forced_real_with_complex_binding(self, capsys):
        """Test --real refusing a complex binding."""
        code, _, err = run(capsys, "--real", "eval", "x", "x=1i")
        assert code == 1
        assert "Error:" in err

    def test_unbound_variable(self, capsys):
        """Test a missing binding."""
        code, _, err = run(capsys, "eval", "x+y", "x=1")
        assert code == 1
        assert "Error: Variable not bound: y" in err

    def test_invalid_binding(self, capsys):
        """Test a binding that does not parse."""
        code, _, err = run(capsys, "eval", "x", "x=abc")
        assert code == 1
        assert "Invalid binding 'x=abc'" in err


class TestDiffCommand:
    """Test `diffexpr diff`."""

    def test_derivative(self, capsys):
        """Test printing the derivative."""
        code, out, _ = run(capsys, "diff", "ln(x)", "x")
        assert code == 0
        assert out == ["(1/x)"]

    def test_derivative_at_point(self, capsys):
        """Test --at printing the substituted derivative."""
        code, out, _ = run(capsys, "diff", "ln(x)", "x", "--at", "x=123")
        assert code == 0
        assert out == ["(1/x)", "(1/123)"]

    def test_absent_variable(self, capsys):
        """Test differentiating by a variable that does not occur."""
        code, out, _ = run(capsys, "diff", "y", "x")
        assert code == 0
        assert out == ["0"]


class TestSubstituteCommand:
    """Test `diffexpr substitute`."""

    def test_partial(self, capsys):
        """Test partial substitution."""
        code, out, _ = run(capsys, "substitute", "x+y", "x=2")
        assert code == 0
        assert out == ["(2+y)"]

    def test_duplicate_binding(self, capsys):
        """Test binding a name twice."""
        code, _, err = run(capsys, "substitute", "x", "x=1", "x=2")
        assert code == 1
        assert "more than once" in err


class TestUsage:
    """Test argument handling."""

    def test_missing_command(self, capsys):
        """Test that a subcommand is required."""
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 2

    def test_conflicting_scalars(self, capsys):
        """Test that --real and --complex exclude each other."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--real", "--complex", "eval", "1"])
        assert exc_info.value.code == 2

    def test_verbose_logs_stages(self, capsys):
        """Test that -v logs the parser stages to stderr."""
        code, _, err = run(capsys, "-v", "eval", "1+1")
        assert code == 0
        assert "Postfix order: 1 1 +" in err
