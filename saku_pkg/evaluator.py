"""Postfix evaluation and the full expression pipeline."""

from __future__ import annotations

from functools import lru_cache
from typing import Callable, Sequence

import numpy as np

from .config import CACHE_SIZE_EVAL
from .logging_config import get_logger
from .parser import to_postfix, tokenize
from .types import (
    EvaluationError,
    Function,
    FunctionName,
    MalformedExpressionError,
    Number,
    Operator,
    OperatorSymbol,
    Token,
)

logger = get_logger("evaluator")

BINARY_OPERATIONS: dict[OperatorSymbol, Callable[..., np.float64]] = {
    OperatorSymbol.ADD: np.add,
    OperatorSymbol.SUB: np.subtract,
    OperatorSymbol.MUL: np.multiply,
    OperatorSymbol.DIV: np.true_divide,
    OperatorSymbol.POW: np.power,
}

# Trig arguments are in degrees.
NUMPY_FUNCTIONS: dict[FunctionName, Callable[[np.float64], np.float64]] = {
    FunctionName.SIN: lambda a: np.sin(a * np.pi / 180),
    FunctionName.COS: lambda a: np.cos(a * np.pi / 180),
    FunctionName.TAN: lambda a: np.tan(a * np.pi / 180),
    FunctionName.LOG: np.log10,
    FunctionName.LN: np.log,
}


def apply_operator(symbol: OperatorSymbol, a: float, b: float) -> float:
    """Compute ``a symbol b`` with IEEE-754 semantics.

    Division by zero, overflow and invalid powers produce inf or nan
    instead of raising.
    """
    with np.errstate(all="ignore"):
        return float(BINARY_OPERATIONS[symbol](np.float64(a), np.float64(b)))


def apply_function(name: FunctionName, a: float) -> float:
    """Apply a keypad function to one argument.

    ``tan ( 90 )`` is not a pole in float64: pi / 2 is inexact, so the
    result is a large finite number.

    Raises:
        EvaluationError: if ``log`` or ``ln`` receives a non-positive argument
    """
    if name.domain_restricted and a <= 0:
        raise EvaluationError(
            f"{name.value} is undefined for {a!r}", code="DOMAIN_ERROR"
        )
    with np.errstate(all="ignore"):
        return float(NUMPY_FUNCTIONS[name](np.float64(a)))


def evaluate_postfix(postfix: Sequence[Token]) -> float:
    """Evaluate a postfix token sequence with a numeric stack.

    Args:
        postfix: Tokens in Reverse Polish order

    Returns:
        The bottom-of-stack value. Extra values left on the stack are ignored.

    Raises:
        MalformedExpressionError: if an operator or function lacks operands,
            or nothing is left to return
        EvaluationError: if ``log``/``ln`` receives a non-positive argument
    """
    stack: list[float] = []

    for token in postfix:
        if isinstance(token, Number):
            stack.append(token.value)
        elif isinstance(token, Operator):
            if len(stack) < 2:
                raise MalformedExpressionError(
                    f"Operator {token} needs two operands"
                )
            b = stack.pop()
            a = stack.pop()
            stack.append(apply_operator(token.symbol, a, b))
        elif isinstance(token, Function):
            if not stack:
                raise MalformedExpressionError(f"Function {token} needs an argument")
            stack.append(apply_function(token.name, stack.pop()))

    if not stack:
        raise MalformedExpressionError("Empty expression", code="EMPTY_EXPRESSION")
    if len(stack) > 1:
        logger.debug("Ignoring %d extra value(s) left on the stack", len(stack) - 1)
    return stack[0]


@lru_cache(maxsize=CACHE_SIZE_EVAL)
def calculate(expression: str) -> float:
    """Evaluate a spaced infix expression.

    Example:
        >>> from saku_pkg.evaluator import calculate
        >>> calculate("2 + 3 × 4")
        14.0
        >>> calculate("2 ^ 3 ^ 2")
        512.0
    """
    tokens = tokenize(expression)
    return evaluate_postfix(to_postfix(tokens))


def clear_cache() -> None:
    """Drop memoised results (used when configuration changes)."""
    calculate.cache_clear()
