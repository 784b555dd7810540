from __future__ import annotations

import argparse
import json
from typing import Any

from .api import evaluate, expand, normalize
from .calculator import StringCalculator
from .config import LOG_LEVEL, VERSION
from .evaluator import format_decimal
from .handlers import default_handlers
from .logging_config import get_logger, setup_logging
from .types import CalculatorError
from .validator import check_length

logger = get_logger("cli")

REPL_EXIT_COMMANDS = {"quit", "exit"}


def print_result_pretty(res: dict[str, Any], output_format: str = "human") -> None:
    """Print result in specified format.

    Args:
        res: Result dictionary (from EvalResult.to_dict or ExpandResult.to_dict)
        output_format: "json" for JSON output, "human" for human-readable
    """
    if output_format == "json":
        print(json.dumps(res, indent=2, ensure_ascii=False))
        return
    if not res.get("ok"):
        print("Error:", res.get("error"))
        return
    if "expressions" in res:
        for expression in res["expressions"]:
            print(expression)
    elif "results" in res:
        for value in res["results"]:
            print(value)
    else:
        print(res.get("result"))


def _health_check() -> int:
    """Run health check to verify dependencies and basic operations.

    Returns:
        Exit code (0 for success, non-zero for failures)
    """
    checks_passed = 0
    checks_failed = 0

    print("Running StringCalc health check...")
    print("-" * 50)

    try:
        import sympy as sp

        print(f"[OK] SymPy {sp.__version__} imported successfully")
        checks_passed += 1
    except ImportError as e:
        print(f"[FAIL] SymPy import failed: {e}")
        checks_failed += 1

    checks = [
        ("Basic arithmetic", "30+-4*(10)", ["-10"]),
        ("Custom functions", "cal(1+2)*func(4)", ["12"]),
        ("Combination lists", "[1,2]+[3,4]", ["4", "5", "5", "6"]),
    ]
    for label, expression, expected in checks:
        result = evaluate(expression)
        if result.ok and result.results == expected:
            print(f"[OK] {label} works")
            checks_passed += 1
        else:
            print(f"[FAIL] {label} check failed: {result}")
            checks_failed += 1

    print("-" * 50)
    print(f"Health check: {checks_passed} passed, {checks_failed} failed")
    return 0 if checks_failed == 0 else 1


def run_batch(
    calculator: StringCalculator,
    input_path: str,
    output_path: str | None = None,
    output_format: str = "human",
) -> int:
    """Compute every line of ``input_path``, one result per line.

    Lines are printed as ``line = result``; results are written to
    ``output_path`` only when every line succeeded.
    """
    results: list[dict[str, str]] = []
    with open(input_path, encoding="utf-8") as handle:
        for line in handle:
            expression = line.rstrip("\r\n")
            try:
                check_length(expression)
                value = calculator.compute(calculator.normalize(expression.replace(" ", "")))
            except CalculatorError as e:
                logger.error(
                    "Failed to compute line: %s",
                    e,
                    extra={"expression": expression, "error_code": e.code},
                )
                print_result_pretty(
                    {"ok": False, "error": f"{expression}: {e}", "error_code": e.code},
                    output_format,
                )
                return 1
            text = format_decimal(value)
            results.append({"expression": expression, "result": text})
            if output_format != "json":
                print(f"{expression} = {text}")

    if output_format == "json":
        print(json.dumps({"ok": True, "lines": results}, indent=2, ensure_ascii=False))
    if output_path:
        with open(output_path, "w", encoding="utf-8") as handle:
            for entry in results:
                handle.write(entry["result"] + "\n")
    return 0


def repl_loop(calculator: StringCalculator, output_format: str = "human") -> None:
    """Interactive loop: each line is evaluated like ``--eval``."""
    try:
        import readline  # noqa: F401
    except ImportError:
        # readline not available on Windows - that's fine
        pass

    print("StringCalc - type 'quit' to exit.")
    while True:
        try:
            line = input(">>> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            return
        if not line:
            continue
        if line.lower() in REPL_EXIT_COMMANDS:
            return
        print_result_pretty(evaluate(line, calculator).to_dict(), output_format)


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for StringCalc CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = argparse.ArgumentParser(prog="stringcalc")
    parser.add_argument(
        "-e",
        "--eval",
        type=str,
        help="Evaluate one expression and exit (non-interactive)",
        dest="eval_expr",
    )
    stage = parser.add_mutually_exclusive_group()
    stage.add_argument(
        "--normalize",
        action="store_true",
        help="With --eval: only rewrite custom functions",
    )
    stage.add_argument(
        "--expand",
        action="store_true",
        help="With --eval: only expand [a,b,...] combination lists",
    )
    parser.add_argument(
        "-i", "--input", type=str, help="Compute every line of this file"
    )
    parser.add_argument(
        "-o", "--output", type=str, help="With --input: write results to this file"
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (human-readable)",
    )
    parser.add_argument(
        "--lenient-functions",
        action="store_true",
        help="Leave custom functions no handler resolves instead of failing",
    )
    parser.add_argument(
        "--no-builtin-handlers",
        action="store_true",
        help="Start with an empty custom-function handler chain",
    )
    parser.add_argument(
        "-p", "--precision", type=int, help="Set output precision (significant digits)"
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=LOG_LEVEL.upper(),
        help="Set logging level",
    )
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    parser.add_argument(
        "--health-check",
        action="store_true",
        help="Run health check and verify dependencies",
    )
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level, log_file=args.log_file)

    import stringcalc_pkg.config as _config

    if args.precision and args.precision > 0:
        _config.OUTPUT_PRECISION = int(args.precision)

    if args.version:
        print(VERSION)
        return 0
    if args.health_check:
        return _health_check()

    handlers = [] if args.no_builtin_handlers else default_handlers()
    calculator = StringCalculator(
        *handlers, strict_functions=not args.lenient_functions
    )

    if args.input:
        try:
            return run_batch(calculator, args.input, args.output, args.format)
        except OSError as e:
            logger.error("Cannot process %s: %s", args.input, e)
            print_result_pretty({"ok": False, "error": str(e)}, args.format)
            return 1

    if args.eval_expr is not None:
        expr = args.eval_expr.strip()
        if args.normalize:
            res = normalize(expr, calculator).to_dict()
        elif args.expand:
            res = expand(expr, calculator).to_dict()
        else:
            res = evaluate(expr, calculator).to_dict()
        if not res.get("ok"):
            logger.error(
                "Evaluation failed: %s",
                res.get("error"),
                extra={"expression": expr, "error_code": res.get("error_code")},
            )
        print_result_pretty(res, output_format=args.format)
        return 0 if res.get("ok") else 1

    repl_loop(calculator, output_format=args.format)
    return 0


if __name__ == "__main__":
    """Allow running the CLI module directly with python -m stringcalc_pkg.cli"""
    import sys

    sys.exit(main_entry())
