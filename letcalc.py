#!/usr/bin/env python3
"""
letcalc.py — LetCalc command line tool.

Evaluates one expression locally and prints the integer result.

Configuration: environment variables with the LETCALC_ prefix or a .env file
(e.g. LETCALC_LOG_LEVEL=DEBUG, LETCALC_MAX_NESTING_DEPTH=512).

Usage:
    python letcalc.py "add(1, mult(2, 3))"
    python letcalc.py "let(a, 5, add(a, a))" --steps
    python letcalc.py "add(x, y)" --var x=2 --var y=40
"""
from __future__ import annotations

import argparse
import logging
import re
import sys
from typing import Any, Sequence

from rich import box
from rich.console import Console
from rich.table import Table

from adapters.calculator import DefaultCalculator
from config import Settings
from contracts import CalcResult, ErrorKind

USAGE = """Usage:
letcalc <expression>

  An expression is one of the following:
    Numbers: integers between -2147483648 and 2147483647
    Variables: strings of characters, where each character is one of a-z, A-Z
    Arithmetic functions: add, sub, mult, div, each taking two arbitrary expressions as arguments. In other words, each argument may be any of the expressions on this list.
    A "let" operator for assigning values to variables:
      let(<variable name>, <value expression>, <expression where variable is used>)
  As with arithmetic functions, the value expression and the expression where the variable is used may be an arbitrary expression from this list.

Examples:
  add(1, 2) --> 3
  add(1, mult(2, 3)) --> 7
  mult(add(2, 2), div(9, 3)) --> 12
  let(a, 5, add(a, a)) --> 10
  let(a, 5, let(b, mult(a, 10), add(b, a))) --> 55
  let(a, let(b, 10, add(b, b)), let(b, 20, add(a, b))) --> 40"""

_VAR_RE = re.compile(r"([a-zA-Z]+)=(-?[0-9]+)")


# -- helpers ---------------------------------------------------------------

_CONSOLE: Console | None = None


def _console() -> Console:
    global _CONSOLE
    if _CONSOLE is None:
        _CONSOLE = Console(highlight=False)
    return _CONSOLE


def _print_steps_table(result: CalcResult) -> None:
    table = Table(
        title=f"Steps [{len(result.steps)}]",
        box=box.ASCII,
        show_lines=False,
    )
    table.add_column("#", justify="right", no_wrap=True)
    table.add_column("Step")
    for idx, step in enumerate(result.steps, 1):
        table.add_row(str(idx), step)
    exact = result.exact
    if exact is not None and not exact.is_integer():
        table.add_row("", f"exact: {exact} (truncated toward zero)")
    else:
        table.add_row("", f"exact: {exact}")
    _console().print(table)


def _variable(value: str) -> tuple[str, int]:
    match = _VAR_RE.fullmatch(value)
    if match is None:
        raise argparse.ArgumentTypeError(f"expected NAME=INTEGER, got {value!r}")
    return match.group(1), int(match.group(2))


def _report_failure(expression: str, result: CalcResult) -> None:
    message = result.error.message if result.error else "unknown error"
    if result.error is not None and result.error.kind == ErrorKind.PARSE_FAILURE:
        print(f"Unable to parse the expression: {expression}", file=sys.stderr)
    else:
        print(f"Unexpected error while evaluating the expression: {expression}", file=sys.stderr)
    print(f"  Error: {message}", file=sys.stderr)
    print(USAGE, file=sys.stderr)


# -- main ------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="letcalc",
        description="LetCalc — exact calculator for add/sub/mult/div/let expressions",
    )
    parser.add_argument("expression", nargs="?", help="Expression to evaluate")
    parser.add_argument("--steps", "-s", action="store_true",
                        help="Show the evaluation steps")
    parser.add_argument("--var", dest="variables", action="append",
                        type=_variable, default=[], metavar="NAME=VALUE",
                        help="Bind a variable around the whole expression")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args: Any = build_parser().parse_args(argv)

    settings = Settings()
    logging.basicConfig(level=settings.log_level.upper())
    # results are arbitrary-precision; print them in full
    sys.set_int_max_str_digits(0)

    if args.expression is None:
        print(USAGE)
        return 0

    calculator = DefaultCalculator.from_settings(settings)
    result = calculator.evaluate(args.expression, dict(args.variables))

    if not result.ok:
        _report_failure(args.expression, result)
        return 1

    print(result.value)
    if args.steps:
        _print_steps_table(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
