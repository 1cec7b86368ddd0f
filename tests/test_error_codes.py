"""Test error codes raised and returned by the engine."""

import unittest

from saku_pkg.api import check_input, evaluate
from saku_pkg.evaluator import calculate
from saku_pkg.session import CalculatorSession, handle_action
from saku_pkg.types import (
    EvaluationError,
    MalformedExpressionError,
    ValidationError,
)


class TestErrorCodes(unittest.TestCase):
    """Test that failures carry the appropriate error code."""

    def test_stack_underflow_code(self):
        try:
            calculate("2 +")
            self.fail("Should have raised EvaluationError")
        except EvaluationError as e:
            self.assertEqual(e.code, "STACK_UNDERFLOW")
            self.assertIn("operand", str(e).lower())

    def test_empty_expression_code(self):
        with self.assertRaises(MalformedExpressionError) as ctx:
            calculate("   ")
        self.assertEqual(ctx.exception.code, "EMPTY_EXPRESSION")

    def test_domain_error_code(self):
        for expression in ("log ( 0 )", "log ( -5 )", "ln ( 0 )", "ln ( − 1 )"):
            with self.assertRaises(EvaluationError) as ctx:
                calculate(expression)
            self.assertEqual(ctx.exception.code, "DOMAIN_ERROR", expression)

    def test_all_engine_errors_share_base_class(self):
        self.assertTrue(issubclass(MalformedExpressionError, EvaluationError))
        self.assertFalse(issubclass(ValidationError, EvaluationError))

    def test_too_long_code(self):
        with self.assertRaises(ValidationError) as ctx:
            check_input("1" * 100000)
        self.assertEqual(ctx.exception.code, "TOO_LONG")
        self.assertIn("too long", str(ctx.exception).lower())

    def test_unknown_action_code(self):
        with self.assertRaises(ValidationError) as ctx:
            handle_action(CalculatorSession(), "percent")
        self.assertEqual(ctx.exception.code, "UNKNOWN_ACTION")

    def test_api_reports_code(self):
        result = evaluate("sin ( )")
        self.assertFalse(result.ok)
        self.assertEqual(result.error_code, "STACK_UNDERFLOW")


if __name__ == "__main__":
    unittest.main()
