"""Chained calculator: incremental expression builder, evaluator and PySide6 host."""

from .config_manager import CalculatorConfig
from .Evaluator import EvaluationResult
from .ExpressionBuilder import CompositionState
from .Session import CalculatorSession

__all__ = [
    "CalculatorConfig",
    "CalculatorSession",
    "CompositionState",
    "EvaluationResult",
]

__version__ = "1.0.0"
