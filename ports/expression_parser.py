"""
Port: ExpressionParser
Responsibility: turning calculator source text into an expression AST.
"""
from typing import Protocol, runtime_checkable

from contracts import ParsedExpression


@runtime_checkable
class ExpressionParser(Protocol):
    def parse(self, text: str) -> ParsedExpression:
        """
        Parses source text such as "let(a, 5, add(a, a))" into an AST.
        Whitespace anywhere in the text is ignored.

        Returns ParsedExpression with expr_ast set on success, or with
        error (kind=parse_failure) carrying the offending substring.
        Never raises; errors are encoded in the returned object.
        """
        ...
