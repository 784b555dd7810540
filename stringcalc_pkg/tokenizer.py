"""Infix text to token codes.

``compute`` runs ``sanitize_expression`` and ``adjust_signs`` before
``map_expression``; the mapper turns every numeric literal into an operand
code (OPERAND_BASE + k) with its signed value stored at ``values[k]``.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from .config import OPERAND_BASE
from .logging_config import get_logger
from .types import MalformedNumberError, MappedExpression
from .validator import is_digit

logger = get_logger("tokenizer")

_GROUPING = {"{": "(", "[": "(", "}": ")", "]": ")"}


def is_operand(code: int) -> bool:
    return code >= OPERAND_BASE


def sanitize_expression(expr: str) -> str:
    """Drop spaces and '=' and turn braces/square brackets into parentheses."""
    parts = []
    for char in expr:
        if char in (" ", "="):
            continue
        parts.append(_GROUPING.get(char, char))
    return "".join(parts)


def adjust_signs(expr: str) -> str:
    """Rewrite unary signs into forms the mapper folds into literals.

    - a '-' at the start or after '(' gets a leading '0' ("-5" -> "0-5")
    - a '-' after '*', '/' or '^' becomes "-1" and the operator
      ("2*-3" -> "2*-1*3")
    - a '-' between '+' or '-' and '(' negates the whole group
      ("1+-(2+3)" -> "1+-1*(2+3)")
    - a leading '+' is dropped
    """
    parts = []
    for i, char in enumerate(expr):
        if char == "-":
            previous = expr[i - 1] if i > 0 else None
            if previous is None or previous == "(":
                parts.append("0")
            elif previous in "+-" and expr[i + 1 : i + 2] == "(":
                parts.append("-1*")
                continue
            elif previous in "*/^":
                parts.append(f"-1{previous}")
                continue
            parts.append(char)
        elif i == 0 and char == "+":
            continue
        else:
            parts.append(char)
    return "".join(parts)


def _number_end(expr: str, start: int) -> int:
    """Index one past the literal that begins at ``start``."""
    index = start
    while index < len(expr) and (is_digit(expr[index]) or expr[index] == "."):
        index += 1
    return index


def _is_unary_minus(expr: str, index: int) -> bool:
    if index == 0:
        return True
    previous = expr[index - 1]
    return not is_digit(previous) and previous != ")"


def map_expression(expr: str) -> MappedExpression:
    """Split ``expr`` into operator codes and operand references.

    A '-' not preceded by a digit or ')' toggles the sign of the next
    literal instead of becoming an operator, so "--5" maps to +5.

    Raises:
        MalformedNumberError: a literal such as "1.2.3" or "."
    """
    mapped = MappedExpression()
    sign = 1
    index = 0
    while index < len(expr):
        char = expr[index]
        if not (is_digit(char) or char == "."):
            if char == "-" and _is_unary_minus(expr, index):
                sign = -sign
            else:
                mapped.tokens.append(ord(char))
            index += 1
            continue

        end = _number_end(expr, index)
        literal = expr[index:end]
        try:
            value = Decimal(literal)
        except InvalidOperation as e:
            raise MalformedNumberError(
                f"Invalid number {literal!r} at position {index}"
            ) from e

        mapped.values.append(value.copy_negate() if sign < 0 else value)
        mapped.tokens.append(OPERAND_BASE + len(mapped.values) - 1)
        index = end
        sign = 1

    logger.debug("Mapped %r to %s with values %s", expr, mapped.tokens, mapped.values)
    return mapped
