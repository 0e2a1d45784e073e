"""
dependencies.py — FastAPI dependency injection.
Each dependency returns its adapter from Request.app.state.
"""
from __future__ import annotations

from fastapi import Request

from adapters.calculator import DefaultCalculator


def get_calculator(request: Request) -> DefaultCalculator:
    return request.app.state.calculator
