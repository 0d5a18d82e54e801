"""Tests for RDBMS precision/scale derivation."""

import pytest

from fixed_decimal.errors import DecimalErrorKind, ScaleExceedsPrecisionError
from fixed_decimal.math.policy import (
    ArithmeticOperation,
    RdbmsArithmeticResult,
    calculate_addition_result_precision_scale,
    calculate_division_result_precision_scale,
    calculate_multiplication_result_precision_scale,
    calculate_rdbms_arithmetic_result,
    validate_and_adjust_precision_scale,
    validate_precision_scale,
)


def shape(precision: int, scale: int) -> RdbmsArithmeticResult:
    return RdbmsArithmeticResult(precision=precision, scale=scale)


class TestResultFormulas:
    """Tests for the per-operation formulas."""

    def test_addition(self):
        """(5,2) + (3,2) -> (6,2)."""
        assert calculate_addition_result_precision_scale(5, 2, 3, 2) == shape(6, 2)

    def test_addition_mixed_scales(self):
        """(10,2) + (5,4) -> scale 4, precision 8 + 4 + 1."""
        assert calculate_addition_result_precision_scale(10, 2, 5, 4) == shape(13, 4)

    def test_addition_commutes(self):
        """Operand order does not change the shape."""
        assert calculate_addition_result_precision_scale(
            7, 3, 4, 1
        ) == calculate_addition_result_precision_scale(4, 1, 7, 3)

    def test_multiplication(self):
        """(3,2) * (4,3) -> (8,5)."""
        assert calculate_multiplication_result_precision_scale(3, 2, 4, 3) == shape(8, 5)

    def test_division(self):
        """(4,3) / (3,2) -> scale max(6, 7), precision 1 + 2 + 7."""
        assert calculate_division_result_precision_scale(4, 3, 3, 2) == shape(10, 7)

    def test_division_min_scale(self):
        """(1,0) / (1,0) uses the minimum scale 6."""
        assert calculate_division_result_precision_scale(1, 0, 1, 0) == shape(7, 6)

    def test_division_custom_min_scale(self):
        """min_scale is configurable."""
        assert calculate_division_result_precision_scale(1, 0, 1, 0, min_scale=0) == shape(3, 2)

    @pytest.mark.parametrize(
        "p,s,message",
        [
            (0, 0, "Precision must be positive"),
            (5, -1, "Scale must be non-negative"),
            (2, 3, "Scale must not exceed precision"),
        ],
    )
    def test_invalid_operand(self, p, s, message):
        """Invalid operand shapes are rejected."""
        with pytest.raises(ScaleExceedsPrecisionError, match=message):
            calculate_addition_result_precision_scale(p, s, 5, 2)


class TestClamp:
    """Tests for validate_and_adjust_precision_scale."""

    @pytest.mark.parametrize(
        "args,expected",
        [
            ((50, 45, 30, 20), (30, 20)),
            ((50, 40, 35), (35, 34)),
            ((40, 40, 30), (30, 29)),
            ((38, 38), (38, 38)),
            ((50, 10), (38, 10)),
            ((10, 2), (10, 2)),
        ],
    )
    def test_clamp(self, args, expected):
        """Caps precision and scale, keeping one integer digit when adjusted."""
        assert validate_and_adjust_precision_scale(*args) == shape(*expected)

    @pytest.mark.parametrize(
        "args,expected",
        [
            ((77, 39, 38, 38, 6), (38, 6)),
            ((50, 20, 38, 38, 6), (38, 8)),
            ((50, 4, 38, 38, 6), (38, 4)),
            ((40, 10, 38, 38, 6), (38, 8)),
            ((30, 10, 38, 38, 6), (30, 10)),
        ],
    )
    def test_clamp_with_min_scale(self, args, expected):
        """Scale shrinks toward the integer-digit need, never below min_scale."""
        assert validate_and_adjust_precision_scale(*args) == shape(*expected)


class TestRdbmsArithmeticResult:
    """Tests for calculate_rdbms_arithmetic_result."""

    def test_add_clamped(self):
        """("add", 100, 2, 5, 4) -> (38, 4)."""
        assert calculate_rdbms_arithmetic_result("add", 100, 2, 5, 4) == shape(38, 4)

    def test_add_unclamped(self):
        """clamp=False returns the raw formula."""
        result = calculate_rdbms_arithmetic_result("add", 100, 2, 5, 4, clamp=False)
        assert result == shape(103, 4)

    @pytest.mark.parametrize(
        "operation,expected",
        [
            (ArithmeticOperation.ADD, (6, 2)),
            (ArithmeticOperation.SUBTRACT, (6, 2)),
            (ArithmeticOperation.MULTIPLY, (9, 4)),
            (ArithmeticOperation.DIVIDE, (11, 6)),
        ],
    )
    def test_dispatch(self, operation, expected):
        """Each operation uses its formula."""
        assert calculate_rdbms_arithmetic_result(operation, 5, 2, 3, 2) == shape(*expected)

    def test_custom_division_min_scale(self):
        """division_min_scale reaches the division formula."""
        result = calculate_rdbms_arithmetic_result("divide", 1, 0, 1, 0, division_min_scale=10)
        assert result == shape(11, 10)

    def test_custom_limits(self):
        """max_precision/max_scale reach the clamp step; multiply keeps 11 integer digits."""
        result = calculate_rdbms_arithmetic_result(
            "multiply", 10, 5, 10, 5, max_precision=15, max_scale=8
        )
        assert result == shape(15, 6)

    def test_divide_keeps_integer_digits(self):
        """(38,0) / (38,0) clamps to (38,6) instead of leaving one integer digit."""
        assert calculate_rdbms_arithmetic_result("divide", 38, 0, 38, 0) == shape(38, 6)

    def test_multiply_keeps_integer_digits(self):
        """(38,10) * (38,10) gives up scale down to 6 to hold its integer digits."""
        assert calculate_rdbms_arithmetic_result("multiply", 38, 10, 38, 10) == shape(38, 6)

    def test_add_keeps_legacy_clamp(self):
        """Addition still caps precision, then scale."""
        assert calculate_rdbms_arithmetic_result("add", 38, 30, 38, 30) == shape(38, 30)

    def test_unsupported_operation(self):
        """Unknown operations are rejected."""
        with pytest.raises(ValueError, match="Unsupported operation: power"):
            calculate_rdbms_arithmetic_result("power", 5, 2, 3, 2)


class TestValidatePrecisionScale:
    """Tests for validate_precision_scale."""

    def test_valid(self):
        """A fitting coefficient is valid."""
        check = validate_precision_scale(12345, 5, 2)
        assert check.is_valid
        assert check.reason is None

    def test_zero_fits_anything(self):
        """Zero has no digits."""
        assert validate_precision_scale(0, 1, 1).is_valid

    def test_too_many_digits(self):
        """A coefficient longer than precision is a precision violation."""
        check = validate_precision_scale(123456, 5, 2)
        assert not check.is_valid
        assert check.error is DecimalErrorKind.PRECISION_EXCEEDED
        assert "6 digits" in check.reason

    @pytest.mark.parametrize(
        "precision,scale,reason",
        [
            (0, 0, "Precision must be positive"),
            (5, -1, "Scale must be non-negative"),
            (2, 3, "Scale must be less than or equal to precision"),
        ],
    )
    def test_invalid_shape(self, precision, scale, reason):
        """Invalid shapes report scale-exceeds-precision."""
        check = validate_precision_scale(1, precision, scale)
        assert check.error is DecimalErrorKind.SCALE_EXCEEDS_PRECISION
        assert check.error_detail == reason
