"""
Port: Evaluator
Responsibility: exact evaluation of an expression AST within a lexical scope.
"""
from typing import Optional, Protocol, runtime_checkable

from contracts import EvalResult, ExprAST, Scope


@runtime_checkable
class Evaluator(Protocol):
    def eval_expr(
        self,
        ast: ExprAST,
        scope: Optional[Scope] = None,
    ) -> EvalResult:
        """
        Evaluates an expression AST to an exact Rational.
        scope: optional enclosing bindings for VariableNode resolution;
        None means no variable is bound.
        Returns EvalResult with:
          - value: Rational (not reduced to lowest terms)
          - steps: human-readable computation steps in evaluation order
        Never raises for unbound variables or division by zero; these are
        returned in EvalResult.error.
        """
        ...
