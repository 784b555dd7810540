"""Fuzzing tests for the calculator with random inputs."""

import random
import string
import unittest

from stringcalc_pkg.calculator import StringCalculator
from stringcalc_pkg.handlers import create_calculator
from stringcalc_pkg.types import CalculatorError

CALCULATOR_ALPHABET = "0123456789.+-*/^()[]{},"


class TestCalculatorFuzzing(unittest.TestCase):
    """Random input must either compute or fail with a CalculatorError."""

    def setUp(self):
        self.rng = random.Random(20240611)
        self.calc = StringCalculator()

    def test_random_printable_strings(self):
        """Test that garbage is rejected through the error taxonomy."""
        for _ in range(200):
            length = self.rng.randint(1, 60)
            text = "".join(self.rng.choices(string.printable, k=length))
            try:
                self.calc.compute(text)
            except CalculatorError:
                pass

    def test_random_calculator_alphabet(self):
        """Test operator soup made only of accepted characters."""
        for _ in range(500):
            length = self.rng.randint(1, 30)
            text = "".join(self.rng.choices(CALCULATOR_ALPHABET, k=length))
            try:
                self.calc.compute(text)
            except CalculatorError:
                pass

    def test_random_normalize_input(self):
        calc = create_calculator(strict_functions=False)
        alphabet = CALCULATOR_ALPHABET + "calfunc "
        for _ in range(300):
            length = self.rng.randint(1, 30)
            text = "".join(self.rng.choices(alphabet, k=length))
            try:
                calc.normalize(text)
            except CalculatorError:
                pass

    def test_random_valid_expressions(self):
        """Test well-formed sums and products of random integers."""
        for _ in range(100):
            numbers = [self.rng.randint(-999, 999) for _ in range(self.rng.randint(1, 6))]
            text = "+".join(f"({n})" for n in numbers)
            self.assertEqual(self.calc.compute(text), sum(numbers))

    def test_random_expansions_count(self):
        for _ in range(50):
            sizes = [self.rng.randint(1, 3) for _ in range(self.rng.randint(1, 3))]
            lists = ["[" + ",".join(str(i) for i in range(size)) + "]" for size in sizes]
            expansions = list(self.calc.generate_transformed_array("+".join(lists)))
            expected = 1
            for size in sizes:
                expected *= size
            self.assertEqual(len(expansions), expected)


if __name__ == "__main__":
    unittest.main()
