from __future__ import annotations

import pytest

from adapters.evaluator.ast_evaluator import ASTEvaluator
from contracts import (
    BinOpNode,
    ErrorKind,
    LetNode,
    NumberNode,
    Rational,
    Scope,
    UnboundVariable,
    VariableNode,
)
from ports.evaluator import Evaluator


def _num(value: int) -> NumberNode:
    return NumberNode(value=value)


def _var(name: str) -> VariableNode:
    return VariableNode(name=name)


@pytest.fixture
def evaluator() -> ASTEvaluator:
    return ASTEvaluator()


def test_evaluator_implements_port(evaluator):
    assert isinstance(evaluator, Evaluator)


def test_literal_ignores_scope(evaluator):
    scope = Scope(name="a", value=Rational.of(1))

    result = evaluator.eval_expr(_num(7), scope)

    assert result.value == Rational.of(7)
    assert result.steps == []


@pytest.mark.parametrize(
    "op, expected",
    [
        ("add", Rational(numerator=11, denominator=1)),
        ("sub", Rational(numerator=5, denominator=1)),
        ("mult", Rational(numerator=24, denominator=1)),
        ("div", Rational(numerator=8, denominator=3)),
    ],
)
def test_binary_operations(evaluator, op, expected):
    result = evaluator.eval_expr(BinOpNode(op=op, left=_num(8), right=_num(3)))

    assert result.ok
    assert result.value == expected


def test_steps_follow_evaluation_order(evaluator):
    ast = BinOpNode(
        op="add",
        left=_num(1),
        right=BinOpNode(op="mult", left=_num(2), right=_num(3)),
    )

    result = evaluator.eval_expr(ast)

    assert result.steps == ["mult(2, 3) = 6", "add(1, 6) = 7"]


def test_let_binds_name_for_body_only(evaluator):
    ast = LetNode(
        variable=_var("a"),
        value=_num(5),
        body=BinOpNode(op="add", left=_var("a"), right=_var("a")),
    )

    result = evaluator.eval_expr(ast)

    assert result.value.reduce() == 10
    assert result.steps == ["let a = 5", "a = 5", "a = 5", "add(5, 5) = 10"]


def test_let_value_is_evaluated_in_outer_scope(evaluator):
    # let(a, 1, let(a, add(a, 1), a)) -> inner value sees outer a
    ast = LetNode(
        variable=_var("a"),
        value=_num(1),
        body=LetNode(
            variable=_var("a"),
            value=BinOpNode(op="add", left=_var("a"), right=_num(1)),
            body=_var("a"),
        ),
    )

    assert evaluator.eval_expr(ast).value.reduce() == 2


def test_variable_without_scope_is_unbound(evaluator):
    result = evaluator.eval_expr(_var("a"))

    assert result.value is None
    assert result.error.kind == ErrorKind.UNBOUND_VARIABLE
    assert result.error.name == "a"


def test_variable_missing_from_scope_chain_is_unbound(evaluator):
    scope = Scope(name="a", value=Rational.of(1)).bind("b", Rational.of(2))

    result = evaluator.eval_expr(_var("c"), scope)

    assert result.error.kind == ErrorKind.UNBOUND_VARIABLE
    assert result.error.message == "Unbound variable: c"


def test_binding_does_not_leak_out_of_let_body(evaluator):
    # add(let(a, 1, a), a)
    ast = BinOpNode(
        op="add",
        left=LetNode(variable=_var("a"), value=_num(1), body=_var("a")),
        right=_var("a"),
    )

    result = evaluator.eval_expr(ast)

    assert result.error.kind == ErrorKind.UNBOUND_VARIABLE


def test_division_by_zero_is_returned(evaluator):
    result = evaluator.eval_expr(BinOpNode(op="div", left=_num(1), right=_num(0)))

    assert result.error.kind == ErrorKind.DIVISION_BY_ZERO


def test_division_by_zero_valued_subexpression(evaluator):
    ast = BinOpNode(
        op="div",
        left=_num(10),
        right=BinOpNode(op="sub", left=_num(3), right=_num(3)),
    )

    result = evaluator.eval_expr(ast)

    assert result.error.kind == ErrorKind.DIVISION_BY_ZERO
    assert result.steps == ["sub(3, 3) = 0"]


def test_scope_lookup_first_match_wins():
    scope = Scope(name="a", value=Rational.of(1)).bind("a", Rational.of(2))

    assert scope.lookup("a") == Rational.of(2)
    assert scope.parent.lookup("a") == Rational.of(1)


def test_scope_lookup_raises_unbound_variable():
    with pytest.raises(UnboundVariable) as exc_info:
        Scope(name="a", value=Rational.of(1)).lookup("b")

    assert exc_info.value.name == "b"


def test_scope_from_mapping():
    scope = Scope.from_mapping({"x": 2, "y": 40})

    assert scope is not None
    assert scope.lookup("x") == Rational.of(2)
    assert scope.lookup("y") == Rational.of(40)
    assert Scope.from_mapping({}) is None
