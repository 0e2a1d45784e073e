"""
Adapter: DefaultCalculator
Implements the Calculator port by chaining ExpressionParser and Evaluator.

  text → parse (whitespace stripped) → eval_expr (empty or seeded scope)
       → Rational → reduce() (truncation toward zero)
"""
from __future__ import annotations

import logging
from typing import Mapping, Optional

from adapters.evaluator.ast_evaluator import ASTEvaluator
from adapters.expression_parser.sexpr_parser import SExprParser
from config import Settings
from contracts import CalcResult, Scope
from ports.evaluator import Evaluator
from ports.expression_parser import ExpressionParser

logger = logging.getLogger("letcalc.calculator")


class DefaultCalculator:
    """
    Stateless between calls: every evaluate() builds its own AST and scope
    chain, so one instance can be shared freely.
    """

    def __init__(
        self,
        parser: ExpressionParser | None = None,
        evaluator: Evaluator | None = None,
    ) -> None:
        self._parser = parser or SExprParser()
        self._evaluator = evaluator or ASTEvaluator()

    @classmethod
    def from_settings(cls, settings: Settings) -> DefaultCalculator:
        return cls(parser=SExprParser(max_depth=settings.max_nesting_depth))

    # -- Calculator protocol -------------------------------------------------

    def evaluate(
        self,
        expression: str,
        variables: Optional[Mapping[str, int]] = None,
    ) -> CalcResult:
        parsed = self._parser.parse(expression)
        if parsed.error is not None or parsed.expr_ast is None:
            return CalcResult(expression=expression, error=parsed.error)

        scope = Scope.from_mapping(variables) if variables else None
        result = self._evaluator.eval_expr(parsed.expr_ast, scope)
        if result.error is not None or result.value is None:
            return CalcResult(expression=expression, steps=result.steps, error=result.error)

        value = result.value.reduce()
        logger.debug("%s = %s", parsed.source, result.value)
        return CalcResult(
            expression=expression,
            value=value,
            exact=result.value,
            steps=result.steps,
        )


def evaluate(
    expression: str,
    variables: Optional[Mapping[str, int]] = None,
) -> CalcResult:
    """Evaluates one expression with a default DefaultCalculator."""
    return DefaultCalculator().evaluate(expression, variables)
