from .calculator import DefaultCalculator, evaluate

__all__ = [
    "DefaultCalculator",
    "evaluate",
]
