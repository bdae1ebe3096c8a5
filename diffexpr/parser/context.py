"""
Context system for expression parsing.

A context defines the parsing environment:
- Which binary operators are recognized and their priorities
- Which names are functions (everything else alphabetic is a variable)

The default context is the full grammar: + - * / ^ and sin, cos, exp, ln.
A context loaded from YAML may narrow the grammar or re-prioritize it, but
can only draw from that closed set, since the AST knows no other symbols.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from ..errors import UnknownFunctionError, UnknownOperatorError
from .ast import BINARY_OPERATORS, FUNCTIONS

logger = logging.getLogger(__name__)

# Priority of '(' and '=' on the operator stack; nothing pops past them
BRACKET_PRIORITY = 0


@dataclass
class OperatorConfig:
    """Configuration for a binary operator."""

    symbol: str
    priority: int


@dataclass
class FunctionConfig:
    """Configuration for a unary function."""

    name: str
    priority: int = 4


DEFAULT_PRIORITIES = {
    "+": 1,
    "-": 1,
    "*": 2,
    "/": 2,
    "^": 3,
}

DEFAULT_FUNCTION_PRIORITY = 4


@dataclass
class Context:
    """
    Parsing context.

    Attributes:
        name: Context name (e.g., "Default")
        operators: Recognized binary operators with their priorities
        functions: Recognized function names with their priorities
    """

    name: str
    operators: dict[str, OperatorConfig] = field(default_factory=dict)
    functions: dict[str, FunctionConfig] = field(default_factory=dict)

    @classmethod
    def default(cls) -> "Context":
        """
        Create the standard context.

        Priorities: ( = 0, + - = 1, * / = 2, ^ = 3, functions = 4.
        """
        context = cls(name="Default")
        for symbol, priority in DEFAULT_PRIORITIES.items():
            context.operators[symbol] = OperatorConfig(symbol, priority)
        for func in FUNCTIONS:
            context.functions[func] = FunctionConfig(func, DEFAULT_FUNCTION_PRIORITY)
        return context

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Context":
        """
        Load context from YAML file.

        Example file:

            name: Polynomial
            operators:
              - symbol: "+"
                priority: 1
              - symbol: "*"
                priority: 2
            functions: []

        Omitted sections fall back to the default table.

        Args:
            path: Path to YAML configuration file

        Returns:
            Context instance

        Raises:
            UnknownOperatorError: If an operator is outside + - * / ^
            UnknownFunctionError: If a function is outside sin, cos, ln, exp
        """
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}

        default = cls.default()

        # Parse operators
        operators = {}
        if "operators" in data:
            for op_data in data["operators"] or []:
                if isinstance(op_data, str):
                    symbol = op_data
                    priority = DEFAULT_PRIORITIES.get(symbol, 0)
                else:
                    symbol = op_data["symbol"]
                    priority = op_data.get("priority", DEFAULT_PRIORITIES.get(symbol, 0))
                if symbol not in BINARY_OPERATORS:
                    raise UnknownOperatorError(symbol)
                operators[symbol] = OperatorConfig(symbol, int(priority))
        else:
            operators = default.operators

        # Parse functions
        functions = {}
        if "functions" in data:
            for func_data in data["functions"] or []:
                if isinstance(func_data, str):
                    name = func_data
                    priority = DEFAULT_FUNCTION_PRIORITY
                else:
                    name = func_data["name"]
                    priority = func_data.get("priority", DEFAULT_FUNCTION_PRIORITY)
                if name not in FUNCTIONS:
                    raise UnknownFunctionError(name)
                functions[name] = FunctionConfig(name, int(priority))
        else:
            functions = default.functions

        logger.debug(
            "Loaded context %r from %s: operators=%s functions=%s",
            data.get("name", "Custom"),
            path,
            sorted(operators),
            sorted(functions),
        )

        return cls(
            name=data.get("name", "Custom"),
            operators=operators,
            functions=functions,
        )

    def is_operator(self, symbol: str) -> bool:
        """Check if symbol is a binary operator in this context."""
        return symbol in self.operators

    def is_function(self, name: str) -> bool:
        """Check if name is a function in this context."""
        return name in self.functions

    def get_priority(self, symbol: str) -> int:
        """
        Get the stack priority of an operator or function.

        Brackets, '=' and unknown symbols have the lowest priority.
        """
        if symbol in self.operators:
            return self.operators[symbol].priority
        if symbol in self.functions:
            return self.functions[symbol].priority
        return BRACKET_PRIORITY
