"""Token definitions, result dataclasses and error types."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class OperatorSymbol(Enum):
    """Binary infix operators as they appear on the keypad."""

    ADD = "+"
    SUB = "−"
    MUL = "×"
    DIV = "÷"
    POW = "^"

    @property
    def precedence(self) -> int:
        return _PRECEDENCE[self]

    @property
    def right_associative(self) -> bool:
        return self is OperatorSymbol.POW


_PRECEDENCE = {
    OperatorSymbol.POW: 4,
    OperatorSymbol.MUL: 3,
    OperatorSymbol.DIV: 3,
    OperatorSymbol.ADD: 2,
    OperatorSymbol.SUB: 2,
}


class FunctionName(Enum):
    """Unary prefix functions. Trigonometric ones take degrees."""

    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    LOG = "log"  # base 10
    LN = "ln"

    @property
    def domain_restricted(self) -> bool:
        """True for functions only defined on positive arguments."""
        return self in (FunctionName.LOG, FunctionName.LN)


def number_literal(value: float) -> str:
    """Render a float so that tokenizing the text gives the same float back.

    Integral values drop the trailing ``.0`` (``14.0`` -> ``"14"``).
    """
    if math.isfinite(value) and value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


@dataclass(frozen=True)
class Number:
    value: float

    def __post_init__(self) -> None:
        if not math.isfinite(self.value):
            raise ValueError(f"Number literal must be finite, got {self.value!r}")

    def __str__(self) -> str:
        return number_literal(self.value)


@dataclass(frozen=True)
class Operator:
    symbol: OperatorSymbol

    def __str__(self) -> str:
        return self.symbol.value


@dataclass(frozen=True)
class Function:
    name: FunctionName

    def __str__(self) -> str:
        return self.name.value


@dataclass(frozen=True)
class LeftParen:
    def __str__(self) -> str:
        return "("


@dataclass(frozen=True)
class RightParen:
    def __str__(self) -> str:
        return ")"


Token = Union[Number, Operator, Function, LeftParen, RightParen]


@dataclass
class EvalResult:
    """Result of evaluating an expression."""

    ok: bool
    value: float | None = None
    result: str | None = None
    error: str | None = None
    error_code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok}
        if self.value is not None:
            result_dict["value"] = self.value
        if self.result is not None:
            result_dict["result"] = self.result
        if self.error is not None:
            result_dict["error"] = self.error
        if self.error_code is not None:
            result_dict["error_code"] = self.error_code
        return result_dict

    def __repr__(self) -> str:
        if not self.ok:
            return f"EvalResult(ok=False, error={self.error!r}, error_code={self.error_code!r})"
        return f"EvalResult(ok=True, value={self.value!r}, result={self.result!r})"


class ValidationError(Exception):
    """Raised when input is rejected before evaluation."""

    def __init__(self, message: str, code: str = "VALIDATION_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class EvaluationError(Exception):
    """Raised when an expression cannot be reduced to a number."""

    def __init__(self, message: str, code: str = "EVALUATION_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class MalformedExpressionError(EvaluationError):
    """Raised when the token structure leaves an operator without operands."""

    def __init__(self, message: str, code: str = "STACK_UNDERFLOW"):
        super().__init__(message, code)
