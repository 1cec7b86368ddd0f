"""Public API for Kalkulator Saku - returns structured objects without side effects."""

from __future__ import annotations

from . import config
from .evaluator import calculate
from .logging_config import get_logger
from .parser import format_number, is_balanced, to_postfix, tokenize
from .types import EvalResult, EvaluationError, ValidationError

logger = get_logger("api")


def check_input(expression: str) -> None:
    """Reject input the engine should not see.

    Raises:
        ValidationError: if the input is too long, or has unbalanced
            parentheses while strict mode is on
    """
    if len(expression) > config.MAX_INPUT_LENGTH:
        raise ValidationError(
            f"Input too long ({len(expression)} > {config.MAX_INPUT_LENGTH} characters)",
            code="TOO_LONG",
        )
    if config.STRICT_PARENTHESES:
        balanced, position = is_balanced(tokenize(expression))
        if not balanced:
            raise ValidationError(
                f"Unbalanced parenthesis at token {position}",
                code="UNBALANCED_PARENS",
            )


def evaluate(expression: str, precision: int | None = None) -> EvalResult:
    """Evaluate a spaced infix expression.

    Args:
        expression: Expression string (e.g., "2 + 3 × 4", "sin ( 90 )")
        precision: Significant digits for the display string
            (default: config.OUTPUT_PRECISION)

    Returns:
        EvalResult with the value and its display string, or the error

    Example:
        >>> from saku_pkg.api import evaluate
        >>> evaluate("2 ^ 3 ^ 2").result
        '512'
        >>> evaluate("log ( -5 )").error_code
        'DOMAIN_ERROR'
    """
    try:
        check_input(expression)
        value = calculate(expression)
    except (ValidationError, EvaluationError) as e:
        logger.info("Rejected %r: %s", expression, e)
        return EvalResult(ok=False, error=str(e), error_code=e.code)
    if precision is None:
        precision = config.OUTPUT_PRECISION
    return EvalResult(ok=True, value=value, result=format_number(value, precision))


def to_rpn(expression: str) -> list[str]:
    """Return the postfix form of an expression as lexemes.

    Example:
        >>> from saku_pkg.api import to_rpn
        >>> to_rpn("sin ( 30 ) + 2 × 3")
        ['30', 'sin', '2', '3', '×', '+']
    """
    return [str(token) for token in to_postfix(tokenize(expression))]


def validate_expression(expression: str) -> tuple[bool, str | None]:
    """Check whether an expression would evaluate successfully.

    Returns:
        Tuple of (is_valid, error_message)
    """
    result = evaluate(expression)
    return result.ok, result.error
