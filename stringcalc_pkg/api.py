"""Public API for StringCalc - returns structured objects without raising."""

from __future__ import annotations

from .calculator import StringCalculator
from .evaluator import format_decimal
from .handlers import create_calculator
from .logging_config import get_logger
from .types import CalculatorError, EvalResult, ExpandResult
from .validator import check_length, validate_expression as _validate

logger = get_logger("api")


def _failure(error: Exception) -> tuple[str, str]:
    if isinstance(error, CalculatorError):
        return error.message, error.code
    return str(error), "INVALID_INPUT"


def evaluate(expression: str, calculator: StringCalculator | None = None) -> EvalResult:
    """Normalize, expand and compute an expression.

    Args:
        expression: Expression string (e.g., "cal(1+2)*[2,3]")
        calculator: Calculator to use (default: one with the built-in handlers)

    Returns:
        EvalResult whose ``results`` holds one value per expansion and
        ``result`` the first of them

    Example:
        >>> from stringcalc_pkg.api import evaluate
        >>> evaluate("cal(1+2)*[2,3]").results
        ['6', '9']
    """
    calc = calculator or create_calculator()
    try:
        check_length(expression)
        normalized = calc.normalize(expression)
        values = [
            format_decimal(calc.compute(text))
            for text in calc.generate_transformed_array(normalized)
        ]
    except (CalculatorError, TypeError) as e:
        message, code = _failure(e)
        logger.debug("Evaluation of %r failed: %s", expression, message)
        return EvalResult(ok=False, error=message, error_code=code)
    return EvalResult(ok=True, result=values[0], results=values)


def normalize(expression: str, calculator: StringCalculator | None = None) -> EvalResult:
    """Rewrite custom functions and insert implicit multiplication.

    Example:
        >>> from stringcalc_pkg.api import normalize
        >>> normalize("2(func(1+2))").result
        '2*(1+2)'
    """
    calc = calculator or create_calculator()
    try:
        check_length(expression)
        return EvalResult(ok=True, result=calc.normalize(expression))
    except (CalculatorError, TypeError) as e:
        message, code = _failure(e)
        return EvalResult(ok=False, error=message, error_code=code)


def expand(expression: str, calculator: StringCalculator | None = None) -> ExpandResult:
    """List every combination of the bracketed lists in ``expression``.

    Example:
        >>> from stringcalc_pkg.api import expand
        >>> expand("[1,2]+[3,4]").expressions
        ['1+3', '1+4', '2+3', '2+4']
    """
    calc = calculator or StringCalculator()
    try:
        check_length(expression)
        return ExpandResult(
            ok=True, expressions=list(calc.generate_transformed_array(expression))
        )
    except (CalculatorError, TypeError) as e:
        message, code = _failure(e)
        return ExpandResult(ok=False, error=message, error_code=code)


def validate_expression(expression: str) -> tuple[bool, str | None]:
    """Validate an expression without evaluating it.

    Returns:
        Tuple of (is_valid, error_message)

    Example:
        >>> from stringcalc_pkg.api import validate_expression
        >>> validate_expression("(1+2")
        (False, 'Cannot process expression due to mismatched brackets at position 0')
    """
    try:
        check_length(expression)
        _validate(expression)
        return True, None
    except CalculatorError as e:
        return False, e.message
    except TypeError as e:
        return False, f"Validation error: {e}"
