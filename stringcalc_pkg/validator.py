"""Input validation run before any transformation.

Checks, in the order ``validate_expression`` applies them:
- character set (letters, non-ASCII and disallowed symbols are rejected)
- bracket balance across (), {} and []
- runs of three or more '-' characters
- a '(' directly after a digit
"""

from __future__ import annotations

from .config import (
    BRACKET_PAIRS,
    DISALLOWED_CHARACTERS,
    MAX_INPUT_LENGTH,
    SIGN_RUN_TOKEN,
)
from .logging_config import get_logger
from .types import (
    DigitFollowedByParenthesisError,
    InvalidCharacterError,
    InvalidSignRunError,
    UnbalancedBracketsError,
    ValidationError,
)

logger = get_logger("validator")


def is_digit(char: str) -> bool:
    """ASCII digit test; ``str.isdigit`` also accepts superscripts."""
    return "0" <= char <= "9"


def find_invalid_character(input_str: str) -> int | None:
    """Return the position of the first disallowed character, or None."""
    for i, char in enumerate(input_str):
        if char.isalpha() or ord(char) > 127 or char in DISALLOWED_CHARACTERS:
            return i
    return None


def is_balanced(input_str: str) -> tuple[bool, int | None]:
    """Check if parentheses/brackets are balanced. Returns (is_balanced, error_position)."""
    stack: list[tuple[str, int]] = []  # (char, position)
    closing = set(BRACKET_PAIRS.values())
    for i, char in enumerate(input_str):
        if char in BRACKET_PAIRS:
            stack.append((char, i))
        elif char in closing:
            if not stack:
                return False, i
            opening, _ = stack.pop()
            if BRACKET_PAIRS[opening] != char:
                return False, i
    if stack:
        return False, stack[0][1]  # Return position of first unmatched
    return True, None


def find_digit_before_parenthesis(input_str: str) -> int | None:
    """Return the position of a '(' that directly follows a digit, or None."""
    for i in range(1, len(input_str)):
        if input_str[i] == "(" and is_digit(input_str[i - 1]):
            return i
    return None


def check_length(input_str: str, limit: int = MAX_INPUT_LENGTH) -> None:
    """Boundary guard used by the API and CLI; 0 disables it.

    The calculator operations themselves accept input of any length.
    """
    if limit > 0 and len(input_str) > limit:
        raise ValidationError(f"Input too long (>{limit} characters)", "TOO_LONG")


def check_brackets(input_str: str) -> None:
    """Raise UnbalancedBracketsError unless every bracket is matched and nested."""
    balanced, position = is_balanced(input_str)
    if not balanced:
        logger.debug("Unbalanced bracket at position %s in %r", position, input_str)
        raise UnbalancedBracketsError(
            f"Cannot process expression due to mismatched brackets at position {position}"
        )


def validate_expression(input_str: str) -> None:
    """Run all structural checks, failing on the first violation.

    Raises:
        InvalidCharacterError: letters, non-ASCII or disallowed symbols
        UnbalancedBracketsError: mismatched (), {} or []
        InvalidSignRunError: three or more consecutive '-'
        DigitFollowedByParenthesisError: '(' directly after a digit
    """
    position = find_invalid_character(input_str)
    if position is not None:
        raise InvalidCharacterError(
            f"The expression contains an invalid character {input_str[position]!r} "
            f"at position {position}"
        )

    check_brackets(input_str)

    if SIGN_RUN_TOKEN in input_str:
        raise InvalidSignRunError(
            "The expression contains three or more consecutive '-' characters"
        )

    position = find_digit_before_parenthesis(input_str)
    if position is not None:
        raise DigitFollowedByParenthesisError(
            f"Parentheses are not allowed immediately after a digit (position {position})"
        )
