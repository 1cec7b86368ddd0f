"""Compare the engine against SymPy's parser on plain arithmetic."""

import random

import pytest
from sympy.parsing.sympy_parser import parse_expr

from saku_pkg.evaluator import calculate

ASCII_SPELLING = {"×": "*", "÷": "/", "−": "-", "^": "**"}


def reference(expression: str) -> float:
    """Evaluate with SymPy using standard Python precedence rules."""
    python_expr = " ".join(ASCII_SPELLING.get(lexeme, lexeme) for lexeme in expression.split())
    return float(parse_expr(python_expr))


def random_chain(rng: random.Random, operands: int) -> str:
    parts = [str(rng.randint(1, 9))]
    for _ in range(operands - 1):
        parts.append(rng.choice(["+", "−", "×", "÷"]))
        parts.append(str(rng.randint(1, 9)))
    return " ".join(parts)


class TestAgainstReference:
    @pytest.mark.parametrize(
        "expression",
        [
            "2 + 3 × 4",
            "7 − 2 − 1",
            "8 ÷ 4 ÷ 2",
            "2 ^ 3 ^ 2",
            "2 × 3 ^ 2 − 1",
            "( 1 + 2 ) × ( 3 + 4 )",
            "( 9 − 3 ) ÷ ( 1 + 2 ) ^ 2",
            "1.5 × 4 − 0.25",
            "2 ^ ( 1 ÷ 2 )",
        ],
    )
    def test_fixed_expressions(self, expression):
        assert calculate(expression) == pytest.approx(reference(expression), rel=1e-12)

    def test_random_operator_chains(self):
        rng = random.Random(2024)
        for _ in range(200):
            expression = random_chain(rng, rng.randint(2, 7))
            assert calculate(expression) == pytest.approx(
                reference(expression), rel=1e-9, abs=1e-6
            ), expression
