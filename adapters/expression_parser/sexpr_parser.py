"""
Adapter: SExprParser
Implements the ExpressionParser port.

Grammar (case-sensitive, parsed after removing all whitespace):
  S        = INTEGER | VARNAME
           | add(S,S) | sub(S,S) | mult(S,S) | div(S,S)
           | let(VARNAME,S,S)
  INTEGER  = '-'? [0-9]+   (signed 32-bit range)
  VARNAME  = [a-zA-Z]+

Each form is handled by a recursive-descent step: the argument list is split
by scan_arguments() using a paren-depth counter, so commas and parens inside
nested calls never split the outer list.
"""
from __future__ import annotations

import logging
import re

from contracts import (
    BinOpNode,
    ExprAST,
    LetNode,
    NumberNode,
    ParsedExpression,
    ParseFailure,
    VariableNode,
)

logger = logging.getLogger("letcalc.parser")

_WHITESPACE_RE = re.compile(r"\s+")
_INTEGER_RE = re.compile(r"-?[0-9]+")
_VARNAME_RE = re.compile(r"[a-zA-Z]+")

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1
_INT32_MAX_DIGITS = len(str(INT32_MAX))

DEFAULT_MAX_DEPTH = 256

# keyword → arity; dispatch checks prefixes in this order
_FORMS: dict[str, int] = {
    "add": 2,
    "sub": 2,
    "mult": 2,
    "div": 2,
    "let": 3,
}


def strip_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub("", text)


class SExprParser:
    """
    Parses calculator source text into an ExprAST.
    Never raises — failures are returned in ParsedExpression.error.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self._max_depth = max_depth

    # -- ExpressionParser protocol -----------------------------------------

    def parse(self, text: str) -> ParsedExpression:
        source = strip_whitespace(text)
        try:
            ast = self.parse_expression(source)
        except ParseFailure as exc:
            logger.info("Rejected expression %r: %s", source, exc)
            return ParsedExpression(source=source, error=exc.to_error())
        return ParsedExpression(source=source, expr_ast=ast)

    # -- Recursive descent ---------------------------------------------------

    def parse_expression(self, expression: str, offset: int = 0, depth: int = 0) -> ExprAST:
        """
        Parses an already whitespace-stripped expression.
        offset: position of `expression` inside the full input (for errors).
        Raises ParseFailure.
        """
        if depth > self._max_depth:
            raise ParseFailure(
                f"Expression nested deeper than {self._max_depth} levels",
                expression,
                offset,
            )

        if _INTEGER_RE.fullmatch(expression):
            return self._parse_integer(expression, offset)

        if _VARNAME_RE.fullmatch(expression):
            return VariableNode(name=expression)

        for keyword, arity in _FORMS.items():
            if expression.startswith(keyword):
                args = self.scan_arguments(
                    expression, len(keyword), len(expression), offset, depth
                )
                if len(args) < arity:
                    raise ParseFailure(
                        f"Not enough arguments for {keyword}: {expression}",
                        expression,
                        offset + len(keyword),
                    )
                if keyword == "let":
                    return self._build_let(expression, offset, args)
                return BinOpNode(op=keyword, left=args[0], right=args[1])  # type: ignore[arg-type]

        raise ParseFailure(
            f"Unable to parse the expression: {expression}",
            expression,
            offset,
        )

    def scan_arguments(
        self,
        expression: str,
        beginning: int,
        end: int,
        offset: int = 0,
        depth: int = 0,
    ) -> list[ExprAST]:
        """
        Splits the argument list found in expression[beginning:end].

        The first '(' at depth 0 opens the list, ',' at depth 1 separates
        arguments and the ')' that brings depth back to 0 closes the last
        one. Each argument is parsed recursively as it is closed.
        """
        args: list[ExprAST] = []
        stack = 0
        start = beginning
        for i in range(beginning, end):
            char = expression[i]
            if char == "(":
                if stack == 0:
                    start = i + 1
                stack += 1
            elif char == ")":
                stack -= 1
                if stack == 0:
                    args.append(
                        self.parse_expression(expression[start:i], offset + start, depth + 1)
                    )
            elif char == "," and stack == 1:
                args.append(
                    self.parse_expression(expression[start:i], offset + start, depth + 1)
                )
                start = i + 1
        return args

    # -- Private -------------------------------------------------------------

    @staticmethod
    def _parse_integer(expression: str, offset: int) -> NumberNode:
        sign = "-" if expression.startswith("-") else ""
        digits = expression[len(sign):].lstrip("0") or "0"
        # length first: int() refuses digit strings past sys.get_int_max_str_digits()
        value = int(sign + digits) if len(digits) <= _INT32_MAX_DIGITS else None
        if value is None or not INT32_MIN <= value <= INT32_MAX:
            raise ParseFailure(
                f"Integer literal out of 32-bit range: {expression}",
                expression,
                offset,
            )
        return NumberNode(value=value)

    @staticmethod
    def _build_let(expression: str, offset: int, args: list[ExprAST]) -> LetNode:
        declaration, value, body = args[0], args[1], args[2]
        if not isinstance(declaration, VariableNode):
            raise ParseFailure(
                f"let expects a variable name as its first argument: {expression}",
                expression,
                offset + len("let"),
            )
        return LetNode(variable=declaration, value=value, body=body)
