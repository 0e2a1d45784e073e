"""
Port: Calculator
Responsibility: the end-to-end entry point, text in and integer out.
"""
from typing import Mapping, Optional, Protocol, runtime_checkable

from contracts import CalcResult


@runtime_checkable
class Calculator(Protocol):
    def evaluate(
        self,
        expression: str,
        variables: Optional[Mapping[str, int]] = None,
    ) -> CalcResult:
        """
        Parses and evaluates an expression.
        variables: optional outer bindings visible to the whole expression.
        Returns CalcResult whose value is the exact result truncated toward
        zero, or whose error is one of parse_failure, unbound_variable,
        division_by_zero. Never raises for these faults.
        """
        ...
