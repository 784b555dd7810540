"""StringCalc package: validator, normalizer, expander, shunting-yard and evaluator behind one calculator."""

from .calculator import StringCalculator
from .handlers import create_calculator, default_handlers

__all__ = [
    "api",
    "calculator",
    "cli",
    "config",
    "evaluator",
    "expander",
    "handlers",
    "logging_config",
    "normalizer",
    "shunting_yard",
    "tokenizer",
    "types",
    "validator",
    "StringCalculator",
    "create_calculator",
    "default_handlers",
]

# Public API exports

__api_exports__ = [
    "evaluate",
    "normalize",
    "expand",
    "validate_expression",
]
