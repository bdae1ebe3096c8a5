"""Tests for parsing contexts."""

import pytest

from diffexpr import Parser
from diffexpr.errors import UnknownFunctionError, UnknownOperatorError, UnknownSymbolError
from diffexpr.parser import Context


def write(tmp_path, text):
    path = tmp_path / "context.yaml"
    path.write_text(text)
    return path


class TestDefaultContext:
    """Test the standard grammar."""

    def test_operators_and_priorities(self):
        """Test the priority table."""
        context = Context.default()
        assert [context.get_priority(op) for op in "+-*/^"] == [1, 1, 2, 2, 3]
        assert context.get_priority("sin") == 4
        assert context.get_priority("(") == 0

    def test_functions(self):
        """Test the function set."""
        context = Context.default()
        assert all(context.is_function(name) for name in ("sin", "cos", "ln", "exp"))
        assert not context.is_function("tan")


class TestYamlContext:
    """Test loading contexts from YAML."""

    def test_restricted_grammar(self, tmp_path):
        """Test a context without functions or powers."""
        path = write(
            tmp_path,
            "name: Polynomial\n"
            "operators:\n"
            "  - symbol: '+'\n"
            "    priority: 1\n"
            "  - symbol: '*'\n"
            "    priority: 2\n"
            "functions: []\n",
        )
        context = Context.from_yaml(path)
        assert context.name == "Polynomial"
        assert sorted(context.operators) == ["*", "+"]
        assert context.functions == {}

        parser = Parser(context)
        assert parser.parse("sin+1").to_string() == "(sin+1)"
        with pytest.raises(UnknownSymbolError):
            parser.parse("x^2")

    def test_string_entries(self, tmp_path):
        """Test bare symbols taking their default priorities."""
        path = write(tmp_path, "operators: ['+', '*']\nfunctions: [ln]\n")
        context = Context.from_yaml(path)
        assert context.name == "Custom"
        assert context.get_priority("*") == 2
        assert context.is_function("ln")
        assert not context.is_function("sin")

    def test_reprioritized_operators(self, tmp_path):
        """Test that priorities come from the file."""
        path = write(
            tmp_path,
            "operators:\n"
            "  - symbol: '+'\n"
            "    priority: 2\n"
            "  - symbol: '*'\n"
            "    priority: 1\n",
        )
        parser = Parser(Context.from_yaml(path))
        assert parser.parse("1+2*3").to_string() == "((1+2)*3)"

    def test_empty_file(self, tmp_path):
        """Test that an empty file gives the default grammar."""
        context = Context.from_yaml(write(tmp_path, ""))
        assert context.operators == Context.default().operators
        assert context.functions == Context.default().functions

    def test_unknown_operator(self, tmp_path):
        """Test that operators outside the closed set are rejected."""
        with pytest.raises(UnknownOperatorError):
            Context.from_yaml(write(tmp_path, "operators: ['%']\n"))

    def test_unknown_function(self, tmp_path):
        """Test that functions outside the closed set are rejected."""
        with pytest.raises(UnknownFunctionError):
            Context.from_yaml(write(tmp_path, "functions: [tan]\n"))

    def test_context_file_setting(self, tmp_path, monkeypatch):
        """Test DIFFEXPR_CONTEXT_FILE."""
        path = write(tmp_path, "functions: []\n")
        monkeypatch.setenv("DIFFEXPR_CONTEXT_FILE", str(path))
        assert Parser().parse("exp*2").variables() == ["exp"]
