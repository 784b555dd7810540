"""Type definitions, result dataclasses and the error taxonomy."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Callable, Optional

if TYPE_CHECKING:
    from .calculator import StringCalculator

# (calculator, full expression, function name, argument text) -> replacement
CustomStringHandler = Callable[["StringCalculator", str, str, str], Optional[str]]


@dataclass
class MappedExpression:
    """Infix token codes plus the operand values they reference.

    Codes below OPERAND_BASE are operator/bracket characters; code
    ``OPERAND_BASE + k`` refers to ``values[k]``.
    """

    tokens: list[int] = field(default_factory=list)
    values: list[Decimal] = field(default_factory=list)


@dataclass
class EvalResult:
    """Result of evaluating or normalizing an expression."""

    ok: bool
    result: str | None = None
    results: list[str] | None = None
    error: str | None = None
    error_code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok}
        if self.result is not None:
            result_dict["result"] = self.result
        if self.results is not None:
            result_dict["results"] = self.results
        if self.error is not None:
            result_dict["error"] = self.error
        if self.error_code is not None:
            result_dict["error_code"] = self.error_code
        return result_dict

    def __repr__(self) -> str:
        if not self.ok:
            return f"EvalResult(ok=False, error={self.error!r}, error_code={self.error_code!r})"
        parts = [f"ok={self.ok}"]
        if self.result is not None:
            parts.append(f"result={self.result!r}")
        if self.results is not None:
            parts.append(f"results={self.results!r}")
        return f"EvalResult({', '.join(parts)})"


@dataclass
class ExpandResult:
    """Result of expanding bracketed combination lists."""

    ok: bool
    expressions: list[str] | None = None
    error: str | None = None
    error_code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok}
        if self.expressions is not None:
            result_dict["expressions"] = self.expressions
        if self.error is not None:
            result_dict["error"] = self.error
        if self.error_code is not None:
            result_dict["error_code"] = self.error_code
        return result_dict


class CalculatorError(Exception):
    """Base class for every failure raised by the calculator."""

    def __init__(self, message: str, code: str = "CALCULATOR_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class ValidationError(CalculatorError):
    """Raised when input validation fails."""

    def __init__(self, message: str, code: str = "VALIDATION_ERROR"):
        super().__init__(message, code)


class ParseError(CalculatorError):
    """Raised when tokenizing or restructuring an expression fails."""

    def __init__(self, message: str, code: str = "PARSE_ERROR"):
        super().__init__(message, code)


class EvaluationError(CalculatorError):
    """Raised when evaluating a postfix sequence fails."""

    def __init__(self, message: str, code: str = "EVALUATION_ERROR"):
        super().__init__(message, code)


class InvalidCharacterError(ValidationError):
    def __init__(self, message: str, code: str = "INVALID_CHARACTER"):
        super().__init__(message, code)


class UnbalancedBracketsError(ValidationError):
    def __init__(self, message: str, code: str = "UNBALANCED_BRACKETS"):
        super().__init__(message, code)


class InvalidSignRunError(ValidationError):
    def __init__(self, message: str, code: str = "INVALID_SIGN_RUN"):
        super().__init__(message, code)


class DigitFollowedByParenthesisError(ValidationError):
    def __init__(self, message: str, code: str = "DIGIT_FOLLOWED_BY_PARENTHESIS"):
        super().__init__(message, code)


class InvalidHandlerError(ValidationError):
    def __init__(self, message: str, code: str = "INVALID_HANDLER"):
        super().__init__(message, code)


class MalformedFunctionCallError(ParseError):
    def __init__(self, message: str, code: str = "MALFORMED_FUNCTION_CALL"):
        super().__init__(message, code)


class MalformedNumberError(ParseError):
    def __init__(self, message: str, code: str = "MALFORMED_NUMBER"):
        super().__init__(message, code)


class MalformedExpressionError(ParseError):
    def __init__(self, message: str, code: str = "MALFORMED_EXPRESSION"):
        super().__init__(message, code)


class UnsupportedOperatorError(ParseError):
    def __init__(self, message: str, code: str = "UNSUPPORTED_OPERATOR"):
        super().__init__(message, code)


class ArithmeticFaultError(EvaluationError):
    def __init__(self, message: str, code: str = "ARITHMETIC_FAULT"):
        super().__init__(message, code)
