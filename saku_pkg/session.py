"""Keypad session: builds the spaced expression string from button presses.

A ``CalculatorSession`` is an immutable snapshot of everything the keypad
tracks (the expression being typed, the operand currently being entered, the
memory register and the display text). Each handler takes a session and
returns a new one, so the evaluation engine never sees UI state.

Example:
    >>> from saku_pkg.session import replay
    >>> replay(["7", "multiply", "open-bracket", "2", "add", "3",
    ...         "close-bracket", "equals"]).display
    '35'
"""

from __future__ import annotations

import math
import random
import re
from dataclasses import dataclass, replace
from typing import Iterable

from .config import EMPTY_DISPLAY, ERROR_DISPLAY, OPERATOR_ACTIONS
from .evaluator import calculate
from .logging_config import get_logger
from .types import EvaluationError, FunctionName, ValidationError, number_literal

logger = get_logger("session")

DIGIT_KEYS = frozenset("0123456789")
FUNCTION_ACTIONS = frozenset(name.value for name in FunctionName)
CONSTANTS = {
    "pi": math.pi,
    "euler": math.e,
}

_ENDS_WITH_OPERAND = re.compile(r"[\d)]$")


@dataclass(frozen=True)
class CalculatorSession:
    expression: str = ""
    current: str = ""
    memory: float = 0.0
    display: str = EMPTY_DISPLAY


def _needs_multiplication(expression: str) -> bool:
    """True when the expression ends with a digit or ``)``."""
    return bool(_ENDS_WITH_OPERAND.search(expression.rstrip()))


def _error(session: CalculatorSession) -> CalculatorSession:
    return replace(session, expression="", current="", display=ERROR_DISPLAY)


def handle_digit(session: CalculatorSession, digit: str) -> CalculatorSession:
    expression = session.expression
    if expression.rstrip().endswith(")"):
        expression += " × "
    expression += digit
    return replace(
        session,
        expression=expression,
        current=session.current + digit,
        display=expression,
    )


def handle_operator(session: CalculatorSession, symbol: str) -> CalculatorSession:
    expression = f"{session.expression} {symbol} "
    return replace(session, expression=expression, current="", display=expression)


def handle_bracket(session: CalculatorSession, bracket: str) -> CalculatorSession:
    expression = session.expression
    if bracket == "(" and _needs_multiplication(expression):
        expression += " × "
    expression += f" {bracket} "
    return replace(session, expression=expression, current="", display=expression)


def _insert_operand(session: CalculatorSession, text: str) -> CalculatorSession:
    expression = session.expression
    if _needs_multiplication(expression):
        expression += " × "
    expression += text
    return replace(session, expression=expression, display=expression)


def _equals(session: CalculatorSession) -> CalculatorSession:
    try:
        value = calculate(session.expression)
    except EvaluationError as e:
        logger.debug("Evaluation of %r failed: %s", session.expression, e)
        return _error(session)
    if not math.isfinite(value):
        logger.debug("Evaluation of %r is not finite: %r", session.expression, value)
        return _error(session)
    text = number_literal(value)
    return replace(session, expression=text, current=text, display=text)


def _decimal(session: CalculatorSession) -> CalculatorSession:
    if "." in session.current:
        return session
    if session.current:
        addition = "."
    else:
        addition = "0."
        if session.expression.rstrip().endswith(")"):
            addition = " × 0."
    expression = session.expression + addition
    current = (session.current or "0") + "."
    return replace(session, expression=expression, current=current, display=expression)


def _current_value(session: CalculatorSession) -> float:
    try:
        return float(session.current or "0")
    except ValueError:
        return 0.0


def _memory(session: CalculatorSession, sign: int) -> CalculatorSession:
    memory = session.memory + sign * _current_value(session)
    text = number_literal(memory)
    return replace(session, memory=memory, current=text, display=text)


def _sqrt(session: CalculatorSession) -> CalculatorSession:
    value = _current_value(session)
    if value < 0:
        return _error(session)
    text = number_literal(math.sqrt(value))
    return replace(session, expression=text, current=text, display=text)


def handle_action(
    session: CalculatorSession, action: str, rng: random.Random | None = None
) -> CalculatorSession:
    """Apply one keypad action and return the resulting session.

    Args:
        session: Current session state
        action: Action name (e.g., "add", "equals", "open-bracket", "sin", "mplus")
        rng: Random source for the "random" action (default: module-level random)

    Raises:
        ValidationError: if the action is unknown
    """
    if action == "clear":
        return replace(session, expression="", current="", display=EMPTY_DISPLAY)
    if action in OPERATOR_ACTIONS:
        return handle_operator(session, OPERATOR_ACTIONS[action])
    if action == "equals":
        return _equals(session)
    if action == "open-bracket":
        return handle_bracket(session, "(")
    if action == "close-bracket":
        return handle_bracket(session, ")")
    if action == "decimal":
        return _decimal(session)
    if action == "mc":
        return replace(session, memory=0.0)
    if action == "mplus":
        return _memory(session, 1)
    if action == "mminus":
        return _memory(session, -1)
    if action == "sqrt":
        return _sqrt(session)
    if action in FUNCTION_ACTIONS:
        session = _insert_operand(session, "")
        expression = f"{session.expression} {action} ( "
        return replace(session, expression=expression, current="", display=expression)
    if action in CONSTANTS:
        text = number_literal(CONSTANTS[action])
        return replace(_insert_operand(session, text), current=text)
    if action == "random":
        text = number_literal((rng or random).random())
        return replace(session, expression=text, current=text, display=text)
    raise ValidationError(f"Unknown keypad action: {action}", code="UNKNOWN_ACTION")


def press(
    session: CalculatorSession, key: str, rng: random.Random | None = None
) -> CalculatorSession:
    """Route a key to the digit handler or the action handler."""
    if key in DIGIT_KEYS:
        return handle_digit(session, key)
    return handle_action(session, key, rng=rng)


def replay(
    keys: Iterable[str],
    session: CalculatorSession | None = None,
    rng: random.Random | None = None,
) -> CalculatorSession:
    """Press each key in turn, starting from ``session`` or a fresh one."""
    session = session or CalculatorSession()
    for key in keys:
        session = press(session, key, rng=rng)
    return session
