"""Custom-function rewriting and implicit multiplication.

A custom function is a run of letters directly followed by a parenthesis
group, e.g. ``cal(10+20)``. Each site is offered to the handler chain in
order; the first non-blank result replaces every verbatim occurrence of the
site in the current text and scanning resumes at the same position, so
functions introduced by the replacement are picked up too.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from .config import MAX_REWRITE_STEPS
from .logging_config import get_logger
from .types import CustomStringHandler, MalformedFunctionCallError
from .validator import is_digit

if TYPE_CHECKING:
    from .calculator import StringCalculator

logger = get_logger("normalizer")


def find_closing_bracket(
    expr: str, start: int, open_bracket: str, close_bracket: str
) -> int:
    """Return the index of the bracket closing the one at ``start``, or -1."""
    depth = 0
    for index in range(start, len(expr)):
        char = expr[index]
        if char == open_bracket:
            depth += 1
        elif char == close_bracket:
            depth -= 1
        if depth == 0:
            return index
    return -1


def dispatch_handlers(
    calculator: StringCalculator,
    expression: str,
    name: str,
    argument: str,
    handlers: Iterable[CustomStringHandler],
) -> str | None:
    """Return the first non-blank handler result, or None if nobody handled it."""
    for handler in handlers:
        result = handler(calculator, expression, name, argument)
        if result is None:
            continue
        result = str(result)
        if result.strip():
            return result
    return None


def rewrite_custom_functions(
    calculator: StringCalculator,
    expression: str,
    handlers: Iterable[CustomStringHandler],
    strict: bool = True,
    max_steps: int = MAX_REWRITE_STEPS,
) -> str:
    """Replace custom-function sites with handler output until none is left.

    Args:
        calculator: Passed through to every handler
        expression: Text without spaces
        handlers: Handler chain, consulted in order at each site
        strict: Fail on a site no handler resolves instead of keeping it
        max_steps: Upper bound on substitutions

    Raises:
        MalformedFunctionCallError: letters not followed by '(', an unresolved
            site in strict mode, or more than ``max_steps`` substitutions
    """
    handlers = tuple(handlers)
    steps = 0
    index = 0
    while index < len(expression):
        if not expression[index].isalpha():
            index += 1
            continue

        pivot = index
        while pivot < len(expression) and expression[pivot].isalpha():
            pivot += 1
        name = expression[index:pivot]
        if pivot >= len(expression) or expression[pivot] != "(":
            raise MalformedFunctionCallError(
                f"Function name {name!r} at position {index} is not followed by '('"
            )

        end = find_closing_bracket(expression, pivot, "(", ")")
        if end == -1:
            raise MalformedFunctionCallError(
                f"Function {name!r} at position {index} is never closed"
            )

        site = expression[index : end + 1]
        argument = expression[pivot + 1 : end]
        replacement = dispatch_handlers(calculator, expression, name, argument, handlers)

        if replacement is None:
            if strict:
                raise MalformedFunctionCallError(
                    f"No handler resolved custom function {site!r}"
                )
            logger.debug("Leaving unresolved function %r in place", site)
            index = pivot
            continue

        steps += 1
        if steps > max_steps:
            raise MalformedFunctionCallError(
                f"Custom function rewriting exceeded {max_steps} steps"
            )
        logger.debug("Rewrote %r as %r", site, replacement)
        expression = expression.replace(site, replacement)
        # Rescan from the start of any letter run the replacement joined.
        while index > 0 and expression[index - 1].isalpha():
            index -= 1

    return expression


def insert_implicit_multiplication(expr: str) -> str:
    """Insert '*' before a '(' preceded by a digit or '.' ("2(3)" -> "2*(3)")."""
    parts = []
    for index, char in enumerate(expr):
        if char == "(" and index > 0 and (is_digit(expr[index - 1]) or expr[index - 1] == "."):
            parts.append("*")
        parts.append(char)
    return "".join(parts)
