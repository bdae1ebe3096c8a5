"""Command line interface for diffexpr."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from .bindings import needs_complex, parse_bindings
from .errors import Outcome, attempt
from .expression import Expression
from .logging import setup_logging
from .math.scalar import COMPLEX
from .outcomes import try_diff, try_eval, try_substitute
from .parser.parser import Parser

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="diffexpr",
        description="Parse, evaluate and differentiate infix expressions.",
    )
    scalar_group = parser.add_mutually_exclusive_group()
    scalar_group.add_argument(
        "--complex",
        dest="scalar",
        action="store_const",
        const="complex",
        help="Use complex scalars regardless of the input.",
    )
    scalar_group.add_argument(
        "--real",
        dest="scalar",
        action="store_const",
        const="real",
        help="Use real scalars; imaginary literals become errors.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log parser stages at DEBUG level to stderr.",
    )

    commands = parser.add_subparsers(dest="mode", required=True)

    parse_cmd = commands.add_parser(
        "parse", help="Show tokens, postfix order and canonical form."
    )
    parse_cmd.add_argument("expression", help="Infix expression, e.g. 'sin(x)^2+1'.")

    eval_cmd = commands.add_parser("eval", help="Evaluate an expression.")
    eval_cmd.add_argument("expression", help="Infix expression.")
    eval_cmd.add_argument(
        "bindings",
        nargs="*",
        metavar="name=value",
        help="Variable bindings: x=3, x=2i or x=2+1i.",
    )

    diff_cmd = commands.add_parser("diff", help="Differentiate an expression.")
    diff_cmd.add_argument("expression", help="Infix expression.")
    diff_cmd.add_argument("variable", help="Variable to differentiate with respect to.")
    diff_cmd.add_argument(
        "--at",
        nargs="+",
        default=[],
        metavar="name=value",
        help="Also print the derivative with these bindings substituted.",
    )

    subst_cmd = commands.add_parser("substitute", help="Substitute variables by values.")
    subst_cmd.add_argument("expression", help="Infix expression.")
    subst_cmd.add_argument(
        "bindings",
        nargs="+",
        metavar="name=value",
        help="Variable bindings: x=3, x=2i or x=2+1i.",
    )

    return parser


def _fail(outcome: Outcome) -> int:
    print(f"Error: {outcome.error_message}", file=sys.stderr)
    return 1


def _load(expression: str, scalar: Optional[str], bindings: list[str]) -> Outcome:
    """Parse bindings and expression, widening to complex when a binding needs it."""
    parsed_bindings = attempt(parse_bindings, bindings)
    if not parsed_bindings.success:
        return parsed_bindings

    parser = Parser()
    parsed = attempt(parser.parse, expression, scalar)
    if not parsed.success:
        return parsed

    expr: Expression = parsed.value
    if scalar is None and needs_complex(parsed_bindings.value):
        expr = expr.with_scalar(COMPLEX)
    return Outcome.ok((expr, parsed_bindings.value))


def _run_parse(args: argparse.Namespace) -> int:
    parser = Parser()
    tokens = attempt(parser.tokenize, args.expression)
    if not tokens.success:
        return _fail(tokens)

    for token in tokens.value:
        print(f"Token type: {token.type.name}, Value: {token.value}")

    postfix = parser.reorderer.to_postfix(tokens.value)
    print("Result ordered in polish notation: " + " ".join(t.value for t in postfix))

    parsed = attempt(parser.parse, args.expression, args.scalar)
    if not parsed.success:
        return _fail(parsed)
    print(parsed.value.to_string())
    return 0


def _run_eval(args: argparse.Namespace) -> int:
    loaded = _load(args.expression, args.scalar, args.bindings)
    if not loaded.success:
        return _fail(loaded)
    expr, bindings = loaded.value

    result = try_eval(expr, bindings)
    if not result.success:
        return _fail(result)
    print(expr.scalar.to_string(result.value))
    return 0


def _run_diff(args: argparse.Namespace) -> int:
    loaded = _load(args.expression, args.scalar, args.at)
    if not loaded.success:
        return _fail(loaded)
    expr, bindings = loaded.value

    if args.variable not in expr.variables():
        logger.info("'%s' does not occur in %s", args.variable, expr.to_string())

    derivative = try_diff(expr, args.variable)
    if not derivative.success:
        return _fail(derivative)
    print(derivative.value.to_string())

    if bindings:
        substituted = try_substitute(derivative.value, bindings)
        if not substituted.success:
            return _fail(substituted)
        print(substituted.value.to_string())
    return 0


def _run_substitute(args: argparse.Namespace) -> int:
    loaded = _load(args.expression, args.scalar, args.bindings)
    if not loaded.success:
        return _fail(loaded)
    expr, bindings = loaded.value

    substituted = try_substitute(expr, bindings)
    if not substituted.success:
        return _fail(substituted)
    print(substituted.value.to_string())
    return 0


_COMMANDS = {
    "parse": _run_parse,
    "eval": _run_eval,
    "diff": _run_diff,
    "substitute": _run_substitute,
}


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    setup_logging(level="DEBUG" if args.verbose else None)

    return _COMMANDS[args.mode](args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
