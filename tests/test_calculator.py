"""End-to-end tests for StringCalculator operations and handler chain."""

from decimal import Decimal

import pytest

from stringcalc_pkg.calculator import StringCalculator
from stringcalc_pkg.expander import ExpansionSequence
from stringcalc_pkg.types import (
    ArithmeticFaultError,
    DigitFollowedByParenthesisError,
    InvalidCharacterError,
    InvalidHandlerError,
    InvalidSignRunError,
    MalformedExpressionError,
    MalformedFunctionCallError,
    MalformedNumberError,
    UnbalancedBracketsError,
)


def named_handler(name, text):
    def handler(calculator, expression, called, value):
        return text if called == name else ""

    return handler


class TestCompute:
    """Arithmetic through validate, map, shunting-yard and evaluate."""

    @pytest.mark.parametrize(
        "expression,expected",
        [
            ("5", Decimal(5)),
            ("-5", Decimal(-5)),
            ("--5", Decimal(5)),
            ("(-7)", Decimal(-7)),
            ("+3", Decimal(3)),
            ("3.25", Decimal("3.25")),
            (".5", Decimal("0.5")),
        ],
    )
    def test_single_literal(self, expression, expected):
        assert StringCalculator().compute(expression) == expected

    def test_unary_minus_in_product(self):
        assert StringCalculator().compute("30+-4*(10)") == Decimal(-10)

    def test_precedence_and_associativity(self):
        calc = StringCalculator()
        assert calc.compute("2+3*4") == 14
        assert calc.compute("(2+3)*4") == 20
        assert calc.compute("10-4-3") == 3
        assert calc.compute("2^3^2") == 64
        assert calc.compute("2*3^2") == 18

    def test_signs_after_operators(self):
        calc = StringCalculator()
        assert calc.compute("2*-3") == -6
        assert calc.compute("3-(-2)") == 5
        assert calc.compute("6/-2") == -3

    @pytest.mark.parametrize(
        "expression,expected",
        [
            ("1+-(2+3)", Decimal(-4)),
            ("1--(2+3)", Decimal(6)),
            ("2+-(3*4)", Decimal(-10)),
            ("10-(-(1+1))", Decimal(12)),
            ("+-(2+3)*2", Decimal(-10)),
        ],
    )
    def test_negated_group_applies_to_whole_group(self, expression, expected):
        assert StringCalculator().compute(expression) == expected

    def test_braces_and_square_brackets_group(self):
        assert StringCalculator().compute("{1+2}*[3]") == 9

    def test_decimal_precision(self):
        assert StringCalculator().compute("1/3") == Decimal("0.3333333333333333333333333333")
        assert StringCalculator(precision=5).compute("1/3") == Decimal("0.33333")
        assert StringCalculator().compute("0.1+0.2") == Decimal("0.3")

    def test_degenerate_sequences_yield_zero(self):
        calc = StringCalculator()
        assert calc.compute("") == 0
        assert calc.compute("2+") == 0

    def test_division_by_zero(self):
        with pytest.raises(ArithmeticFaultError):
            StringCalculator().compute("1/(2-2)")

    def test_malformed_number(self):
        with pytest.raises(MalformedNumberError):
            StringCalculator().compute("1..2+3")

    def test_malformed_expression(self):
        with pytest.raises(MalformedExpressionError):
            StringCalculator().compute("1+2+")

    @pytest.mark.parametrize(
        "expression,error",
        [
            ("a+1", InvalidCharacterError),
            ("1 + 2", InvalidCharacterError),
            ("1€2", InvalidCharacterError),
            ("a(1", InvalidCharacterError),
            ("(1+2", UnbalancedBracketsError),
            ("[1+2)", UnbalancedBracketsError),
            ("1---2", InvalidSignRunError),
            ("(1---2", UnbalancedBracketsError),
            ("2(3)", DigitFollowedByParenthesisError),
        ],
    )
    def test_validation_failures(self, expression, error):
        with pytest.raises(error):
            StringCalculator().compute(expression)

    def test_rejects_non_string(self):
        with pytest.raises(TypeError):
            StringCalculator().compute(5)

    def test_calculator_usable_after_failure(self):
        calc = StringCalculator()
        with pytest.raises(ArithmeticFaultError):
            calc.compute("1/0")
        assert calc.compute("1+1") == 2


class TestMismatchedBracketsEverywhere:
    """Unbalanced input fails in every operation that checks brackets."""

    def test_compute(self):
        with pytest.raises(UnbalancedBracketsError):
            StringCalculator().compute("(1+2")

    def test_normalize(self):
        with pytest.raises(UnbalancedBracketsError):
            StringCalculator().normalize("(1+2")

    def test_generate_transformed_array(self):
        with pytest.raises(UnbalancedBracketsError):
            StringCalculator().generate_transformed_array("(1+2")


class TestNormalizeRoundTrip:
    """Without handler output only spaces and implicit '*' change."""

    @pytest.mark.parametrize(
        "expression,expected",
        [
            ("1 + 2", "1+2"),
            ("3 (4)", "3*(4)"),
            ("(1)(2)", "(1)(2)"),
            ("[1, 2] + {3}", "[1,2]+{3}"),
        ],
    )
    def test_no_handlers(self, expression, expected):
        assert StringCalculator().normalize(expression) == expected


class TestHandlerChain:
    """Add/remove semantics of the handler chain."""

    def test_constructor_seeds_chain_in_order(self):
        first, second = named_handler("a", "1"), named_handler("b", "2")
        calc = StringCalculator(first, second)
        assert calc.handlers == (first, second)

    def test_second_handler_used_then_removed(self):
        first, second = named_handler("a", "1"), named_handler("b", "2")
        calc = StringCalculator(first, second)
        assert calc.normalize("b(9)+1") == "2+1"

        calc.remove_custom_string_handler(second)
        with pytest.raises(MalformedFunctionCallError):
            calc.normalize("b(9)+1")

    def test_removed_handler_lenient_keeps_site(self):
        second = named_handler("b", "2")
        calc = StringCalculator(second, strict_functions=False)
        calc.remove_custom_string_handler(second)
        assert calc.normalize("b(9)+1") == "b(9)+1"

    def test_duplicates_kept_and_last_removed(self):
        h, g = named_handler("h", "1"), named_handler("g", "2")
        calc = StringCalculator()
        calc.add_custom_string_handler(h)
        calc.add_custom_string_handler(g)
        calc.add_custom_string_handler(h)
        assert calc.handlers == (h, g, h)

        calc.remove_custom_string_handler(h)
        assert calc.handlers == (h, g)

    def test_remove_absent_is_noop(self):
        h = named_handler("h", "1")
        calc = StringCalculator(h)
        calc.remove_custom_string_handler(named_handler("h", "1"))
        assert calc.handlers == (h,)

    @pytest.mark.parametrize("bad", [None, 5, "cal"])
    def test_invalid_handler(self, bad):
        calc = StringCalculator()
        with pytest.raises(InvalidHandlerError):
            calc.add_custom_string_handler(bad)
        with pytest.raises(InvalidHandlerError):
            calc.remove_custom_string_handler(bad)
        assert calc.handlers == ()

    def test_handlers_snapshot_is_read_only(self):
        calc = StringCalculator(named_handler("a", "1"))
        snapshot = calc.handlers
        calc.add_custom_string_handler(named_handler("b", "2"))
        assert len(snapshot) == 1
        assert len(calc.handlers) == 2


class TestGenerateTransformedArray:
    """Expansion through the calculator."""

    def test_no_brackets_single_element(self):
        assert list(StringCalculator().generate_transformed_array("1+2")) == ["1+2"]

    def test_combinations_in_order(self):
        seq = StringCalculator().generate_transformed_array("[1,2]+[3,4]")
        assert isinstance(seq, ExpansionSequence)
        assert list(seq) == ["1+3", "1+4", "2+3", "2+4"]

    def test_every_expansion_computes(self):
        calc = StringCalculator()
        values = [calc.compute(text) for text in calc.generate_transformed_array("[1,2]*[3,-4]")]
        assert values == [3, -4, 6, -8]
