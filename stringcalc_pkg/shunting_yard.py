"""Infix to postfix conversion (shunting-yard) over token codes."""

from __future__ import annotations

from collections.abc import Sequence

from .config import PRECEDENCE
from .logging_config import get_logger
from .tokenizer import is_operand
from .types import MalformedExpressionError, UnsupportedOperatorError

logger = get_logger("shunting_yard")

LEFT_PAREN = ord("(")
RIGHT_PAREN = ord(")")


def _rank(code: int) -> int:
    try:
        return PRECEDENCE[chr(code)]
    except KeyError:
        raise UnsupportedOperatorError(f"Unsupported operator: {chr(code)!r}") from None


def to_postfix(infix: Sequence[int]) -> list[int]:
    """Reorder infix token codes into postfix order.

    Operators of equal rank pop each other, so every operator, '^'
    included, is left-associative: "2^3^2" evaluates as (2^3)^2.

    Raises:
        UnsupportedOperatorError: a character missing from the precedence table
        MalformedExpressionError: a ')' without a matching '(' on the stack
    """
    output: list[int] = []
    stack: list[int] = []

    for code in infix:
        if is_operand(code):
            output.append(code)
        elif code == RIGHT_PAREN:
            while stack and stack[-1] != LEFT_PAREN:
                output.append(stack.pop())
            if not stack:
                raise MalformedExpressionError("Unmatched ')' in expression")
            stack.pop()
        else:
            rank = _rank(code)
            if not stack or code == LEFT_PAREN:
                stack.append(code)
                continue
            while stack and rank <= _rank(stack[-1]):
                output.append(stack.pop())
            stack.append(code)

    while stack:
        output.append(stack.pop())

    logger.debug("Postfix sequence %s", output)
    return output
