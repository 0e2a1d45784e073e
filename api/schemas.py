"""
schemas.py — FastAPI request/response models.
Kept apart from contracts.py so the API can evolve independently.
"""
from __future__ import annotations

from pydantic import BaseModel, Field

from contracts import CalcError, Rational


# ─────────────────────────── /evaluate ───────────────────────────

class EvaluateRequest(BaseModel):
    expression: str
    variables: dict[str, int] = Field(default_factory=dict)


class EvaluateResponse(BaseModel):
    expression: str
    value: int
    exact: Rational
    steps: list[str]


class ErrorResponse(BaseModel):
    detail: CalcError


# ─────────────────────────── /health ─────────────────────────────

class HealthResponse(BaseModel):
    status: str
    version: str
