"""Main entry point for running stringcalc_pkg as a module.

This allows running StringCalc with:
    python -m stringcalc_pkg
    python -m stringcalc_pkg --health-check
    python -m stringcalc_pkg -e "2+2"
    python -m stringcalc_pkg -i input.txt -o output.txt

This is equivalent to running:
    python -m stringcalc_pkg.cli
    python stringcalc.py
"""

from __future__ import annotations

import sys

from .cli import main_entry

if __name__ == "__main__":
    sys.exit(main_entry())
