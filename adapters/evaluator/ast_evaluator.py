"""
Adapter: ASTEvaluator
Implements the Evaluator port: recursive walk over ExprAST with Rational.

Rationals keep division exact, so add(div(13,4), div(11,4)) is 24/4 before
the caller truncates it, never 3 + 2.

eval_expr() — computes the value and the readable steps; faults are
returned in EvalResult.error instead of being raised.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

from contracts import (
    BinOpNode,
    CalcException,
    EvalResult,
    ExprAST,
    LetNode,
    NumberNode,
    Rational,
    Scope,
    UnboundVariable,
    VariableNode,
)

logger = logging.getLogger("letcalc.evaluator")

# Operator name → Rational operation; `div` divides its first argument by the second
_OP_FUNCS: dict[str, Callable[[Rational, Rational], Rational]] = {
    "add":  lambda a, b: a.add(b),
    "sub":  lambda a, b: a.add(b.negate()),
    "mult": lambda a, b: a.multiply(b),
    "div":  lambda a, b: a.divide(b),
}


class ASTEvaluator:
    """Exact evaluator for calculator ASTs with lexical `let` scoping."""

    # -- Evaluator protocol ------------------------------------------------

    def eval_expr(
        self,
        ast: ExprAST,
        scope: Optional[Scope] = None,
    ) -> EvalResult:
        """
        Recursively computes the value of the AST.
        scope: optional enclosing bindings (see Scope.from_mapping).
        """
        steps: list[str] = []
        try:
            value = self._eval(ast, scope, steps)
        except CalcException as exc:
            logger.debug("Evaluation failed: %s", exc)
            return EvalResult(steps=steps, error=exc.to_error())
        return EvalResult(value=value, steps=steps)

    # -- Private -----------------------------------------------------------

    def _eval(
        self,
        node: ExprAST,
        scope: Optional[Scope],
        steps: list[str],
    ) -> Rational:
        """Returns the node value, appending to `steps` as it goes."""

        if isinstance(node, NumberNode):
            return Rational.of(node.value)

        if isinstance(node, VariableNode):
            if scope is None:
                raise UnboundVariable(node.name)
            value = scope.lookup(node.name)
            steps.append(f"{node.name} = {value}")
            return value

        if isinstance(node, BinOpNode):
            left = self._eval(node.left, scope, steps)
            right = self._eval(node.right, scope, steps)

            fn = _OP_FUNCS.get(node.op)
            if fn is None:
                raise ValueError(f"Unknown operator: {node.op!r}")

            result = fn(left, right)
            steps.append(f"{node.op}({left}, {right}) = {result}")
            return result

        if isinstance(node, LetNode):
            # value sees the outer scope only; the new frame covers body
            bound = self._eval(node.value, scope, steps)
            steps.append(f"let {node.variable.name} = {bound}")
            if scope is None:
                inner = Scope(name=node.variable.name, value=bound)
            else:
                inner = scope.bind(node.variable.name, bound)
            return self._eval(node.body, inner, steps)

        raise TypeError(f"Unknown AST node type: {type(node)}")
