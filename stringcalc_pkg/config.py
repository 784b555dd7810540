"""Centralized configuration for StringCalc.

This module defines:
- Arithmetic precision and output formatting
- Input validation limits (length, rewrite steps)
- The operator precedence table and character sets used by the validator
- Regex patterns for sign clean-up during expansion
- Math functions available to the built-in custom-function handler

Configuration can be overridden via:
- CLI flags (see cli.py)
- Environment variables (prefixed with STRINGCALC_)
"""

import os
import re
from types import MappingProxyType

import sympy as sp

try:
    import importlib.metadata

    VERSION = importlib.metadata.version("stringcalc")
except Exception:
    # Fallback if package not installed
    VERSION = "1.0.0"

# Arithmetic configuration
DECIMAL_PRECISION = int(
    os.getenv("STRINGCALC_DECIMAL_PRECISION", "28")
)  # significant digits
OUTPUT_PRECISION = int(os.getenv("STRINGCALC_OUTPUT_PRECISION", "0"))  # 0 = exact

# Input validation limits
# API/CLI boundary only, 0 = unlimited
MAX_INPUT_LENGTH = int(os.getenv("STRINGCALC_MAX_INPUT_LENGTH", "10000"))  # characters
MAX_REWRITE_STEPS = int(
    os.getenv("STRINGCALC_MAX_REWRITE_STEPS", "10000")
)  # custom-function substitutions per normalize call

# Custom-function policy
STRICT_CUSTOM_FUNCTIONS = (
    os.getenv("STRINGCALC_STRICT_CUSTOM_FUNCTIONS", "true").lower() == "true"
)

LOG_LEVEL = os.getenv("STRINGCALC_LOG_LEVEL", "INFO")

# Token codes at or above this value reference operands, below it characters
OPERAND_BASE = 128

PRECEDENCE = MappingProxyType(
    {
        "^": 4,
        "*": 3,
        "/": 3,
        "+": 2,
        "-": 2,
        "(": 1,
    }
)

DISALLOWED_CHARACTERS = frozenset(" !@#$%&_=`~<>?:;'\"\\")

BRACKET_PAIRS = MappingProxyType({"(": ")", "{": "}", "[": "]"})

SIGN_RUN_TOKEN = "---"

# Applied in order when rebuilding an expanded expression
SIGN_COLLAPSE_RULES = (
    (re.compile(r"\+\+|--"), "+"),
    (re.compile(r"\+-"), "-"),
    (re.compile(r"-\+"), "-"),
)

MATH_FUNCTIONS = MappingProxyType(
    {
        "sqrt": sp.sqrt,
        "abs": sp.Abs,
        "sin": sp.sin,
        "cos": sp.cos,
        "tan": sp.tan,
        "asin": sp.asin,
        "acos": sp.acos,
        "atan": sp.atan,
        "log": sp.log,
        "ln": sp.log,
        "exp": sp.exp,
        "floor": sp.floor,
        "ceil": sp.ceiling,
    }
)
