"""
contracts.py — Single source of truth for every data type in LetCalc.
All modules import their types ONLY from here.
"""
from __future__ import annotations

import math
from enum import Enum
from typing import Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

CONTRACTS_VERSION = "1.0.0"


# ─────────────────────────── Errors ──────────────────────────────────────

class ErrorKind(str, Enum):
    PARSE_FAILURE = "parse_failure"
    UNBOUND_VARIABLE = "unbound_variable"
    DIVISION_BY_ZERO = "division_by_zero"


class CalcError(BaseModel):
    kind: ErrorKind
    message: str
    offending_text: Optional[str] = None  # only for parse_failure
    position: Optional[int] = None        # offset in the whitespace-stripped input
    name: Optional[str] = None            # only for unbound_variable


class CalcException(Exception):
    """Base class for faults raised while parsing or evaluating."""

    kind: ErrorKind

    def to_error(self) -> CalcError:
        return CalcError(kind=self.kind, message=str(self))


class ParseFailure(CalcException, ValueError):
    kind = ErrorKind.PARSE_FAILURE

    def __init__(self, message: str, offending_text: str, position: int = 0) -> None:
        super().__init__(message)
        self.offending_text = offending_text
        self.position = position

    def to_error(self) -> CalcError:
        return CalcError(
            kind=self.kind,
            message=str(self),
            offending_text=self.offending_text,
            position=self.position,
        )


class UnboundVariable(CalcException, ValueError):
    kind = ErrorKind.UNBOUND_VARIABLE

    def __init__(self, name: str) -> None:
        super().__init__(f"Unbound variable: {name}")
        self.name = name

    def to_error(self) -> CalcError:
        return CalcError(kind=self.kind, message=str(self), name=self.name)


class DivisionByZero(CalcException, ZeroDivisionError):
    kind = ErrorKind.DIVISION_BY_ZERO

    def __init__(self, message: str = "Division by zero") -> None:
        super().__init__(message)


# ─────────────────────────── Rational ────────────────────────────────────

class Rational(BaseModel):
    """
    Exact fraction over arbitrary-precision ints.

    Results are NOT kept in lowest terms; only reduce() turns a value into
    the integer shown to the user.
    """

    model_config = ConfigDict(frozen=True)

    numerator: int
    denominator: int = 1

    @field_validator("denominator")
    @classmethod
    def _non_zero(cls, v: int) -> int:
        if v == 0:
            raise ValueError("denominator must not be zero")
        return v

    @classmethod
    def of(cls, value: int) -> Rational:
        return cls(numerator=value, denominator=1)

    def add(self, other: Rational) -> Rational:
        lcm = _lcm(self.denominator, other.denominator)
        scaled = self.numerator * (lcm // self.denominator)
        other_scaled = other.numerator * (lcm // other.denominator)
        return Rational(numerator=scaled + other_scaled, denominator=lcm)

    def multiply(self, other: Rational) -> Rational:
        return Rational(
            numerator=self.numerator * other.numerator,
            denominator=self.denominator * other.denominator,
        )

    def divide(self, other: Rational) -> Rational:
        if other.numerator == 0:
            raise DivisionByZero()
        return self.multiply(
            Rational(numerator=other.denominator, denominator=other.numerator)
        )

    def negate(self) -> Rational:
        return Rational(numerator=-self.numerator, denominator=self.denominator)

    def reduce(self) -> int:
        """Integer division rounding toward zero (not floor division)."""
        quotient = abs(self.numerator) // abs(self.denominator)
        if (self.numerator < 0) != (self.denominator < 0):
            return -quotient
        return quotient

    def is_integer(self) -> bool:
        return self.numerator % self.denominator == 0

    def __str__(self) -> str:
        if self.denominator == 1:
            return _fmt_int(self.numerator)
        return f"{_fmt_int(self.numerator)}/{_fmt_int(self.denominator)}"


# keeps str() well below sys.get_int_max_str_digits() (4300 by default)
_MAX_STR_BITS = 10_000


def _fmt_int(n: int) -> str:
    """str(n), or an approximate digit count once n is too long to print."""
    if n.bit_length() <= _MAX_STR_BITS:
        return str(n)
    digits = int(n.bit_length() * math.log10(2)) + 1
    sign = "-" if n < 0 else ""
    return f"{sign}<~{digits} digits>"


def _lcm(a: int, b: int) -> int:
    return a * b // math.gcd(a, b)


# ─────────────────────────── Expression AST ──────────────────────────────

class NumberNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    node_type: Literal["number"] = "number"
    value: int


class VariableNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    node_type: Literal["variable"] = "variable"
    name: str


class BinOpNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    node_type: Literal["binop"] = "binop"
    op: Literal["add", "sub", "mult", "div"]
    left: "ExprAST"
    right: "ExprAST"


class LetNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    node_type: Literal["let"] = "let"
    variable: VariableNode
    value: "ExprAST"   # evaluated in the enclosing scope
    body: "ExprAST"    # evaluated with `variable` bound


ExprAST = Union[NumberNode, VariableNode, BinOpNode, LetNode]
BinOpNode.model_rebuild()
LetNode.model_rebuild()


# ─────────────────────────── Scope ───────────────────────────────────────

class Scope(BaseModel):
    """One `let` frame: a single binding plus the enclosing scope."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: Rational
    parent: Optional["Scope"] = None

    @classmethod
    def from_mapping(cls, bindings: Mapping[str, int]) -> Optional[Scope]:
        scope: Optional[Scope] = None
        for name, value in bindings.items():
            scope = cls(name=name, value=Rational.of(value), parent=scope)
        return scope

    def bind(self, name: str, value: Rational) -> Scope:
        return Scope(name=name, value=value, parent=self)

    def lookup(self, name: str) -> Rational:
        scope: Optional[Scope] = self
        while scope is not None:
            if scope.name == name:
                return scope.value
            scope = scope.parent
        raise UnboundVariable(name)


Scope.model_rebuild()


# ─────────────────────────── Parser ──────────────────────────────────────

class ParsedExpression(BaseModel):
    source: str
    expr_ast: Optional[ExprAST] = None
    error: Optional[CalcError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


# ─────────────────────────── Evaluator ───────────────────────────────────

class EvalResult(BaseModel):
    value: Optional[Rational] = None
    steps: list[str] = Field(default_factory=list)  # readable steps
    error: Optional[CalcError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


# ─────────────────────────── Calculator ──────────────────────────────────

class CalcResult(BaseModel):
    expression: str
    value: Optional[int] = None        # exact.reduce()
    exact: Optional[Rational] = None
    steps: list[str] = Field(default_factory=list)
    error: Optional[CalcError] = None

    @property
    def ok(self) -> bool:
        return self.error is None
