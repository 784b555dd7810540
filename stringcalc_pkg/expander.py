"""Combinatorial expansion of bracketed comma-lists.

``[1,2]+[3,4]`` expands to ``1+3``, ``1+4``, ``2+3``, ``2+4``: one expression
per element choice, first list varying slowest. Elements may hold further
lists, which are expanded recursively.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from itertools import product

from .config import OPERAND_BASE, SIGN_COLLAPSE_RULES
from .logging_config import get_logger
from .normalizer import find_closing_bracket
from .tokenizer import is_operand
from .types import UnbalancedBracketsError

logger = get_logger("expander")


def split_top_level(
    source: str, separator: str = ",", open_bracket: str = "[", close_bracket: str = "]"
) -> list[str]:
    """Split on ``separator`` outside nested brackets; empty parts are kept."""
    parts: list[str] = []
    current: list[str] = []
    depth = 0
    for char in source:
        if char == open_bracket:
            depth += 1
        elif char == close_bracket:
            depth -= 1
        if char == separator and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)
    parts.append("".join(current))
    return parts


def collapse_signs(expr: str) -> str:
    """Simplify sign pairs left by substitution: ``++``/``--`` -> ``+``, ``+-``/``-+`` -> ``-``."""
    for pattern, replacement in SIGN_COLLAPSE_RULES:
        expr = pattern.sub(replacement, expr)
    return expr


def extract_lists(expr: str) -> tuple[list[int], list[list[str]]]:
    """Replace each top-level ``[...]`` with a placeholder code.

    Returns:
        Tuple of (template codes, element lists). Placeholder
        ``OPERAND_BASE + k`` stands for a choice from ``element_lists[k]``.
    """
    template: list[int] = []
    element_lists: list[list[str]] = []
    index = 0
    while index < len(expr):
        char = expr[index]
        if char == "[":
            end = find_closing_bracket(expr, index, "[", "]")
            if end == -1:
                raise UnbalancedBracketsError(
                    f"Unclosed '[' at position {index} in {expr!r}"
                )
            element_lists.append(split_top_level(expr[index + 1 : end]))
            template.append(OPERAND_BASE + len(element_lists) - 1)
            index = end + 1
            continue
        template.append(ord(char))
        index += 1
    return template, element_lists


def rebuild(template: Sequence[int], choice: Sequence[str]) -> str:
    return "".join(
        choice[code - OPERAND_BASE] if is_operand(code) else chr(code)
        for code in template
    )


def expand_combinations(expr: str) -> Iterator[str]:
    """Lazily yield every bracket-free expression ``expr`` expands to."""
    if "[" not in expr:
        yield expr
        return

    template, element_lists = extract_lists(expr)
    logger.debug(
        "Expanding %r over %d lists of sizes %s",
        expr,
        len(element_lists),
        [len(elements) for elements in element_lists],
    )
    for choice in product(*element_lists):
        yield from expand_combinations(collapse_signs(rebuild(template, choice)))


class ExpansionSequence:
    """Restartable, order-preserving view over the expansions of one expression.

    Nothing is computed until iteration; every ``iter()`` starts over.
    """

    def __init__(self, expression: str):
        self.expression = expression

    def __iter__(self) -> Iterator[str]:
        return expand_combinations(self.expression)

    def __repr__(self) -> str:
        return f"ExpansionSequence({self.expression!r})"
