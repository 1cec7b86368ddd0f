"""Expression tokenizing and infix-to-postfix conversion.

This module handles:
- Splitting a spaced keypad expression into tokens
- Folding unary minus into signed number literals
- Shunting-yard conversion to postfix (Reverse Polish) order
- Parenthesis balance checks for strict mode
- Number formatting for display
"""

from __future__ import annotations

import math
import re
from typing import Any, Sequence

from .config import MINUS_LEXEMES, OPERATOR_ALIASES, OUTPUT_PRECISION
from .logging_config import get_logger
from .types import (
    Function,
    FunctionName,
    LeftParen,
    Number,
    Operator,
    OperatorSymbol,
    RightParen,
    Token,
)

logger = get_logger("parser")

NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")

_OPERATORS = {symbol.value: symbol for symbol in OperatorSymbol}
_OPERATORS.update(
    {alias: OperatorSymbol(symbol) for alias, symbol in OPERATOR_ALIASES.items()}
)
_FUNCTIONS = {name.value: name for name in FunctionName}


def parse_number(lexeme: str) -> float | None:
    """Return the value of a decimal literal, or None if the lexeme is not one.

    Literals that overflow to infinity are not numbers.
    """
    if not NUMBER_RE.match(lexeme):
        return None
    value = float(lexeme)
    if not math.isfinite(value):
        return None
    return value


def _opens_operand(lexeme: str | None) -> bool:
    """True when a minus after ``lexeme`` must be a sign rather than subtraction."""
    return lexeme is None or lexeme in _OPERATORS or lexeme in _FUNCTIONS or lexeme == "("


def tokenize(expression: str) -> list[Token]:
    """Split a spaced expression into tokens.

    Args:
        expression: Expression with whitespace around every operator,
            parenthesis and operand (e.g., "2 + sin ( 30 )")

    Returns:
        List of tokens. Unrecognized lexemes are skipped; this never raises.
    """
    lexemes = expression.split()
    tokens: list[Token] = []
    i = 0
    while i < len(lexemes):
        lexeme = lexemes[i]
        previous = lexemes[i - 1] if i > 0 else None

        if lexeme in MINUS_LEXEMES and _opens_operand(previous) and i + 1 < len(lexemes):
            operand = parse_number(lexemes[i + 1])
            if operand is not None:
                tokens.append(Number(-operand))
                i += 2
                continue

        value = parse_number(lexeme)
        if value is not None:
            tokens.append(Number(value))
        elif lexeme in _OPERATORS:
            tokens.append(Operator(_OPERATORS[lexeme]))
        elif lexeme in _FUNCTIONS:
            tokens.append(Function(_FUNCTIONS[lexeme]))
        elif lexeme == "(":
            tokens.append(LeftParen())
        elif lexeme == ")":
            tokens.append(RightParen())
        else:
            logger.debug("Skipping unrecognized lexeme %r", lexeme)
        i += 1
    return tokens


def _dominates(top: Token, incoming: OperatorSymbol) -> bool:
    if not isinstance(top, Operator):
        return False
    if incoming.right_associative:
        return top.symbol.precedence > incoming.precedence
    return top.symbol.precedence >= incoming.precedence


def to_postfix(tokens: Sequence[Token]) -> list[Token]:
    """Reorder infix tokens into postfix order using the shunting-yard algorithm.

    Unbalanced parentheses are recovered from rather than rejected: an extra
    ``)`` drains the stack, and a ``(`` left open at the end is dropped.
    Structural problems surface later as evaluation errors.
    """
    output: list[Token] = []
    stack: list[Token] = []

    for token in tokens:
        if isinstance(token, Number):
            output.append(token)
        elif isinstance(token, Operator):
            while stack and _dominates(stack[-1], token.symbol):
                output.append(stack.pop())
            stack.append(token)
        elif isinstance(token, (Function, LeftParen)):
            stack.append(token)
        elif isinstance(token, RightParen):
            while stack and not isinstance(stack[-1], LeftParen):
                output.append(stack.pop())
            if stack:
                stack.pop()  # the matching (
            if stack and isinstance(stack[-1], Function):
                output.append(stack.pop())

    while stack:
        token = stack.pop()
        if not isinstance(token, LeftParen):
            output.append(token)

    logger.debug("Postfix: %s", " ".join(str(token) for token in output))
    return output


def is_balanced(tokens: Sequence[Token]) -> tuple[bool, int | None]:
    """Check if parentheses are balanced. Returns (is_balanced, error_index)."""
    open_positions: list[int] = []
    for i, token in enumerate(tokens):
        if isinstance(token, LeftParen):
            open_positions.append(i)
        elif isinstance(token, RightParen):
            if not open_positions:
                return False, i
            open_positions.pop()
    if open_positions:
        return False, open_positions[0]  # first unmatched
    return True, None


def format_number(val: Any, precision: int = OUTPUT_PRECISION) -> str:
    """Format a numeric value with specified precision.

    Args:
        val: Numeric value to format
        precision: Number of significant digits (default: OUTPUT_PRECISION)

    Returns:
        Formatted string representation of the number
    """
    try:
        fmt = "{:." + str(int(precision)) + "g}"
        text = fmt.format(float(val))
    except (ValueError, TypeError, OverflowError):
        return str(val)
    if text == "-0":
        return "0"
    return text
