from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from . import config as _config
from .api import evaluate, to_rpn
from .config import VERSION
from .session import replay
from .types import EvalResult, ValidationError


def print_result_pretty(
    res: EvalResult, output_format: str = "human", rpn: list[str] | None = None
) -> None:
    """Print result in specified format.

    Args:
        res: Evaluation result
        output_format: "json" for JSON output, "human" for human-readable
        rpn: Optional postfix lexemes to show alongside the result
    """
    if output_format == "json":
        data: dict[str, Any] = res.to_dict()
        if rpn is not None:
            data["rpn"] = rpn
        print(json.dumps(data, indent=2, ensure_ascii=False))
        return
    if rpn is not None:
        print("RPN:", " ".join(rpn))
    if not res.ok:
        print("Error:", res.error)
        return
    print(res.result)


def print_help_text() -> None:
    print(
        "Type an expression with spaces around every token, e.g.\n"
        "  2 + 3 × 4\n"
        "  sin ( 30 ) + log ( 100 )\n"
        "  − 4 ^ 2\n"
        "Operators: + − × ÷ ^  (ASCII - * / also accepted)\n"
        "Functions: sin cos tan (degrees), log (base 10), ln\n"
        "Commands: help, quit"
    )


def repl_loop(output_format: str = "human", show_rpn: bool = False) -> None:
    """Interactive REPL loop."""
    try:
        import readline  # noqa: F401
    except ImportError:
        # readline not available on Windows - that's fine
        pass

    print("Kalkulator Saku - type 'help' for commands, 'quit' to exit.")
    while True:
        try:
            raw = input(">>> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nGoodbye.")
            return
        if not raw:
            continue
        if raw.lower() in ("quit", "exit"):
            print("Goodbye.")
            return
        if raw.lower() == "help":
            print_help_text()
            continue
        print_result_pretty(
            evaluate(raw), output_format, rpn=to_rpn(raw) if show_rpn else None
        )


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for Kalkulator Saku CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = argparse.ArgumentParser(prog="saku")
    parser.add_argument(
        "-e",
        "--eval",
        type=str,
        help="Evaluate one expression and exit (non-interactive)",
        dest="eval_expr",
    )
    parser.add_argument(
        "-k",
        "--keys",
        type=str,
        help="Replay whitespace-separated keypad keys (e.g. '7 add 3 equals') and print the display",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (human-readable)",
    )
    parser.add_argument(
        "--rpn", action="store_true", help="Also print the postfix (RPN) form"
    )
    parser.add_argument(
        "-p", "--precision", type=int, help="Set output precision (significant digits)"
    )
    parser.add_argument(
        "--strict-parens",
        action="store_true",
        help="Reject unbalanced parentheses instead of recovering",
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=_config.LOG_LEVEL.upper(),
        help="Set logging level",
    )
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    args = parser.parse_args(argv)

    from .logging_config import setup_logging

    setup_logging(level=args.log_level, log_file=args.log_file)

    # Apply CLI configuration overrides
    if args.precision and args.precision > 0:
        _config.OUTPUT_PRECISION = int(args.precision)
    if args.strict_parens:
        _config.STRICT_PARENTHESES = True

    if args.version:
        print(VERSION)
        return 0

    if args.keys is not None:
        try:
            session = replay(args.keys.split())
        except ValidationError as e:
            print("Error:", e)
            return 1
        if args.format == "json":
            print(
                json.dumps(
                    {
                        "display": session.display,
                        "expression": session.expression,
                        "memory": session.memory,
                    },
                    indent=2,
                    ensure_ascii=False,
                )
            )
        else:
            print(session.display)
        return 1 if session.display == _config.ERROR_DISPLAY else 0

    if args.eval_expr is not None:
        expr = args.eval_expr.strip()
        if not expr:
            print("Error: Empty input. Please enter an expression.")
            return 1
        res = evaluate(expr)
        print_result_pretty(
            res, args.format, rpn=to_rpn(expr) if args.rpn else None
        )
        return 0 if res.ok else 1

    repl_loop(args.format, show_rpn=args.rpn)
    return 0


if __name__ == "__main__":
    sys.exit(main_entry())
