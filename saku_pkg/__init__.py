"""Kalkulator Saku package: tokenizer, postfix converter, evaluator, keypad session and CLI."""

__all__ = [
    "config",
    "parser",
    "evaluator",
    "session",
    "cli",
    "types",
    "api",
    "logging_config",
]

# Public API exports

__api_exports__ = [
    "evaluate",
    "to_rpn",
    "validate_expression",
]
