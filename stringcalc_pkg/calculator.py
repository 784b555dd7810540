"""String calculator: the four public operations over the pipeline modules.

The handler chain is the only state that outlives a call. It is not
synchronized; callers sharing one calculator across threads must guard
``add_custom_string_handler``/``remove_custom_string_handler`` themselves.
"""

from __future__ import annotations

from decimal import Decimal

from .config import DECIMAL_PRECISION, MAX_REWRITE_STEPS, STRICT_CUSTOM_FUNCTIONS
from .evaluator import evaluate_postfix, make_context
from .expander import ExpansionSequence
from .logging_config import get_logger
from .normalizer import insert_implicit_multiplication, rewrite_custom_functions
from .shunting_yard import to_postfix
from .tokenizer import adjust_signs, map_expression, sanitize_expression
from .types import CustomStringHandler, InvalidHandlerError
from .validator import check_brackets, validate_expression

logger = get_logger("calculator")


def _require_text(expression: object) -> str:
    if not isinstance(expression, str):
        raise TypeError(
            f"expression must be a string, not {type(expression).__name__}"
        )
    return expression


def _require_handler(handler: object) -> CustomStringHandler:
    if handler is None or not callable(handler):
        raise InvalidHandlerError(f"Custom string handler must be callable, got {handler!r}")
    return handler


class StringCalculator:
    """Evaluates infix expressions with custom functions and combination lists.

    Example:
        >>> calc = StringCalculator()
        >>> calc.compute("30+-4*(10)")
        Decimal('-10')
        >>> list(calc.generate_transformed_array("[1,2]+3"))
        ['1+3', '2+3']
    """

    def __init__(
        self,
        *handlers: CustomStringHandler,
        strict_functions: bool = STRICT_CUSTOM_FUNCTIONS,
        precision: int = DECIMAL_PRECISION,
        max_rewrite_steps: int = MAX_REWRITE_STEPS,
    ):
        self._handlers: list[CustomStringHandler] = []
        self.strict_functions = strict_functions
        self.max_rewrite_steps = max_rewrite_steps
        self._context = make_context(precision)
        for handler in handlers:
            self.add_custom_string_handler(handler)

    @property
    def handlers(self) -> tuple[CustomStringHandler, ...]:
        """Snapshot of the handler chain in invocation order."""
        return tuple(self._handlers)

    @property
    def precision(self) -> int:
        return self._context.prec

    def add_custom_string_handler(self, handler: CustomStringHandler) -> None:
        """Append a handler to the chain; duplicates are kept."""
        self._handlers.append(_require_handler(handler))
        logger.debug("Added handler %r (%d in chain)", handler, len(self._handlers))

    def remove_custom_string_handler(self, handler: CustomStringHandler) -> None:
        """Remove the most recently added occurrence of ``handler``; no-op if absent."""
        _require_handler(handler)
        for index in range(len(self._handlers) - 1, -1, -1):
            if self._handlers[index] == handler:
                del self._handlers[index]
                logger.debug("Removed handler %r (%d in chain)", handler, len(self._handlers))
                return

    def compute(self, expression: str) -> Decimal:
        """Evaluate an arithmetic expression without custom functions or lists.

        Braces and square brackets group like parentheses here.

        Raises:
            ValidationError: a validation check failed
            ParseError: malformed number, operator or expression
            ArithmeticFaultError: division by zero or a failed power
        """
        expression = _require_text(expression)
        validate_expression(expression)

        prepared = adjust_signs(sanitize_expression(expression))
        infix = map_expression(prepared)
        postfix = to_postfix(infix.tokens)
        result = evaluate_postfix(postfix, infix.values, self._context)
        logger.debug("Computed %r = %s", expression, result)
        return result

    def normalize(self, expression: str) -> str:
        """Rewrite custom functions through the handler chain and make implicit
        multiplication explicit. Spaces are removed.

        Raises:
            UnbalancedBracketsError: mismatched brackets
            MalformedFunctionCallError: a function site could not be rewritten
        """
        expression = _require_text(expression)
        check_brackets(expression)

        expression = expression.replace(" ", "")
        expression = rewrite_custom_functions(
            self,
            expression,
            self._handlers,
            strict=self.strict_functions,
            max_steps=self.max_rewrite_steps,
        )
        return insert_implicit_multiplication(expression)

    def generate_transformed_array(self, expression: str) -> ExpansionSequence:
        """Expand every ``[a,b,...]`` list into one expression per combination.

        Validation runs immediately; expansion happens lazily on iteration.
        """
        expression = _require_text(expression)
        validate_expression(expression)
        return ExpansionSequence(expression)

    def __repr__(self) -> str:
        return (
            f"StringCalculator(handlers={len(self._handlers)}, "
            f"strict_functions={self.strict_functions}, precision={self.precision})"
        )
