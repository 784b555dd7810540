"""Built-in custom string handlers.

Every handler follows the chain contract
``handler(calculator, expression, name, value) -> str`` and returns an empty
string for function names it does not own.
"""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal
from typing import Any

import sympy as sp

from .calculator import StringCalculator
from .config import MATH_FUNCTIONS
from .evaluator import format_decimal
from .logging_config import get_logger
from .types import ArithmeticFaultError, CustomStringHandler

logger = get_logger("handlers")


def _evaluate_argument(calculator: StringCalculator, value: str) -> Decimal:
    # Arguments may hold nested custom functions: "cal(cal(1+2)*2)".
    return calculator.compute(calculator.normalize(value))


def cal_handler(calculator: StringCalculator, expression: str, name: str, value: str) -> str:
    """``cal(expr)`` -> the computed value of ``expr``."""
    if name != "cal":
        return ""
    return format_decimal(_evaluate_argument(calculator, value), 0)


def func_handler(calculator: StringCalculator, expression: str, name: str, value: str) -> str:
    """``func(expr)`` -> ``expr`` unchanged."""
    if name != "func":
        return ""
    return value


def _to_decimal(result: Any, name: str, argument: Decimal) -> Decimal:
    if not (result.is_real and result.is_finite):
        raise ArithmeticFaultError(f"{name}({argument}) has no finite real value")
    return Decimal(str(result))


def math_function_handler(
    calculator: StringCalculator, expression: str, name: str, value: str
) -> str:
    """Evaluate sqrt, abs, sin, log and the other MATH_FUNCTIONS with SymPy.

    The argument is computed first and handed to SymPy as an exact rational,
    then the result is evaluated numerically at the calculator's precision.
    """
    function = MATH_FUNCTIONS.get(name)
    if function is None:
        return ""
    argument = _evaluate_argument(calculator, value)
    try:
        result = sp.N(function(sp.Rational(str(argument))), calculator.precision)
    except (ValueError, TypeError, ZeroDivisionError) as e:
        raise ArithmeticFaultError(f"Cannot evaluate {name}({argument}): {e}") from e
    logger.debug("%s(%s) = %s", name, argument, result)
    return format_decimal(_to_decimal(result, name, argument), 0)


def function_handler(
    name: str, function: Callable[[Decimal], Decimal]
) -> CustomStringHandler:
    """Build a handler that applies ``function`` to the computed argument of ``name(...)``.

    Example:
        >>> calc.add_custom_string_handler(function_handler("double", lambda x: x * 2))
        >>> calc.compute(calc.normalize("double(4)+1"))
        Decimal('9')
    """

    def handler(calculator: StringCalculator, expression: str, called: str, value: str) -> str:
        if called != name:
            return ""
        return format_decimal(Decimal(function(_evaluate_argument(calculator, value))), 0)

    handler.__name__ = f"{name}_handler"
    return handler


def default_handlers() -> list[CustomStringHandler]:
    """Handler chain used by the CLI and the API: cal, func, then math functions."""
    return [cal_handler, func_handler, math_function_handler]


def create_calculator(**kwargs: Any) -> StringCalculator:
    """Build a StringCalculator seeded with ``default_handlers()``."""
    return StringCalculator(*default_handlers(), **kwargs)
