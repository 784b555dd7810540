"""Postfix evaluation with a value stack over decimal operands."""

from __future__ import annotations

import math
from collections.abc import Sequence
from decimal import Context, Decimal, DecimalException

from . import config
from .config import DECIMAL_PRECISION, OPERAND_BASE
from .logging_config import get_logger
from .tokenizer import is_operand
from .types import (
    ArithmeticFaultError,
    MalformedExpressionError,
    UnsupportedOperatorError,
)

logger = get_logger("evaluator")


def make_context(precision: int = DECIMAL_PRECISION) -> Context:
    return Context(prec=precision)


def format_decimal(value: Decimal, precision: int | None = None) -> str:
    """Format a decimal in positional notation without trailing zeros.

    Args:
        value: Value to format
        precision: Significant digits to round to (0 keeps every digit,
            None uses config.OUTPUT_PRECISION)

    Returns:
        Text that can be fed back into an expression (never "1E+2")
    """
    if precision is None:
        precision = config.OUTPUT_PRECISION
    if precision > 0:
        value = Context(prec=precision).plus(value)
    text = f"{value:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text


def _power(lvalue: Decimal, rvalue: Decimal) -> Decimal:
    # Goes through float on purpose; only '^' loses precision this way.
    try:
        result = math.pow(float(lvalue), float(rvalue))
    except (ValueError, OverflowError) as e:
        raise ArithmeticFaultError(f"Cannot compute {lvalue}^{rvalue}: {e}") from e
    if not math.isfinite(result):
        raise ArithmeticFaultError(f"Cannot compute {lvalue}^{rvalue}: result is not finite")
    return Decimal(repr(result))


def calculate(lvalue: Decimal, rvalue: Decimal, operator: str, context: Context) -> Decimal:
    """Apply a binary operator.

    Raises:
        ArithmeticFaultError: division by zero, invalid operation or a failed power
        UnsupportedOperatorError: operator is not one of + - * / ^
    """
    try:
        if operator == "+":
            return context.add(lvalue, rvalue)
        if operator == "-":
            return context.subtract(lvalue, rvalue)
        if operator == "*":
            return context.multiply(lvalue, rvalue)
        if operator == "/":
            return context.divide(lvalue, rvalue)
    except DecimalException as e:
        raise ArithmeticFaultError(
            f"Arithmetic error in {lvalue} {operator} {rvalue}: {type(e).__name__}"
        ) from e
    if operator == "^":
        return _power(lvalue, rvalue)
    raise UnsupportedOperatorError(f"Unsupported operator: {operator!r}")


def evaluate_postfix(
    postfix: Sequence[int], values: Sequence[Decimal], context: Context | None = None
) -> Decimal:
    """Reduce a postfix sequence to a single value.

    Sequences of length 0 or 2 cannot hold a complete expression and yield 0;
    a sequence of length 1 yields its only operand.

    Raises:
        ArithmeticFaultError: an arithmetic operation failed
        MalformedExpressionError: operators and operands do not balance
    """
    if len(postfix) <= 2:
        if len(postfix) == 1:
            if not is_operand(postfix[0]):
                raise MalformedExpressionError(
                    f"Operator {chr(postfix[0])!r} has no operands"
                )
            return values[postfix[0] - OPERAND_BASE]
        return Decimal(0)

    context = context or make_context()
    stack: list[Decimal] = []
    for code in postfix:
        if is_operand(code):
            stack.append(values[code - OPERAND_BASE])
            continue
        if len(stack) < 2:
            raise MalformedExpressionError(
                f"Operator {chr(code)!r} is missing an operand"
            )
        rvalue = stack.pop()
        lvalue = stack.pop()
        stack.append(calculate(lvalue, rvalue, chr(code), context))

    if len(stack) != 1:
        raise MalformedExpressionError(
            f"Expression leaves {len(stack)} values instead of one"
        )
    return stack.pop()
