"""Centralized configuration for Kalkulator Saku.

This module defines:
- Display precision for human-readable output
- Input validation limits
- Cache size for the evaluation pipeline
- Parenthesis strictness policy
- Lexeme tables shared by the tokenizer and the keypad session

Configuration can be overridden via:
- CLI flags (see cli.py)
- Environment variables (prefixed with SAKU_)
"""

import os

try:
    import importlib.metadata

    VERSION = importlib.metadata.version("kalkulator-saku")
except importlib.metadata.PackageNotFoundError:
    # Running from a source checkout
    VERSION = "1.0.0"

# Output formatting
OUTPUT_PRECISION = int(os.getenv("SAKU_OUTPUT_PRECISION", "12"))  # significant digits

# Input validation limits
MAX_INPUT_LENGTH = int(os.getenv("SAKU_MAX_INPUT_LENGTH", "1000"))  # characters

# Cache configuration
CACHE_SIZE_EVAL = int(os.getenv("SAKU_CACHE_SIZE_EVAL", "1024"))

# Unmatched parentheses are recovered from unless strict mode is on
STRICT_PARENTHESES = os.getenv("SAKU_STRICT_PARENTHESES", "false").lower() == "true"

LOG_LEVEL = os.getenv("SAKU_LOG_LEVEL", "WARNING")

# What the keypad display shows when an evaluation fails
ERROR_DISPLAY = "Error"
EMPTY_DISPLAY = "0"

# Keyboard-typed spellings accepted in place of the keypad symbols
OPERATOR_ALIASES = {
    "-": "−",
    "*": "×",
    "/": "÷",
}

MINUS_LEXEMES = frozenset({"−", "-"})

# Keypad actions that append an operator, mapped to the symbol they insert
OPERATOR_ACTIONS = {
    "add": "+",
    "subtract": "−",
    "multiply": "×",
    "divide": "÷",
    "pow": "^",
}
