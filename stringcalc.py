#!/usr/bin/env python3
"""
StringCalc - shunting-yard string calculator

Main entry point for the StringCalc application. This file serves as a thin
wrapper that delegates all functionality to the stringcalc_pkg package.

Usage:
    python stringcalc.py                              # Interactive REPL
    python stringcalc.py -e "30+-4*(10)"              # Evaluate expression
    python stringcalc.py -e "[1,2]+[3,4]" --expand    # List combinations
    python stringcalc.py -i input.txt -o output.txt   # Batch mode
    python stringcalc.py --help                       # Show help
"""

from __future__ import annotations

import sys


def main() -> int:
    """
    Main entry point for StringCalc.

    Delegates all functionality to the stringcalc_pkg.cli module,
    which handles argument parsing, expression evaluation, and output formatting.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        from stringcalc_pkg.cli import main_entry
    except ImportError as e:
        print(f"Error: Failed to import stringcalc_pkg: {e}")
        print("Please ensure all dependencies are installed: pip install -e .")
        return 1

    try:
        return main_entry(sys.argv[1:])
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
