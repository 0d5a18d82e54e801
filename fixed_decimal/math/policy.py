"""RDBMS-standard precision/scale derivation for arithmetic results.

Given operand shapes (p1, s1) and (p2, s2), these functions derive the
(precision, scale) of an operation's result before the coefficient is
computed:

- add/subtract: scale = max(s1, s2); precision = max(p1-s1, p2-s2) + scale + 1
- multiply:     scale = s1 + s2;     precision = p1 + p2 + 1
- divide:       scale = max(min_scale, s1 + p2 + 1);
                precision = (p1 - s1) + s2 + scale

An optional clamp step caps the result to system maxima (38/38 by default,
SQL Server compatible).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import structlog

from fixed_decimal.config import (
    DEFAULT_DIVISION_MIN_SCALE,
    DEFAULT_MAX_PRECISION,
    DEFAULT_MAX_SCALE,
)
from fixed_decimal.errors import DecimalErrorKind, ScaleExceedsPrecisionError
from fixed_decimal.math.scaling import digit_count

__all__ = [
    "ArithmeticOperation",
    "RdbmsArithmeticResult",
    "PrecisionScaleCheck",
    "validate_precision_scale",
    "calculate_addition_result_precision_scale",
    "calculate_multiplication_result_precision_scale",
    "calculate_division_result_precision_scale",
    "validate_and_adjust_precision_scale",
    "calculate_rdbms_arithmetic_result",
]

logger = structlog.get_logger()


class ArithmeticOperation(str, Enum):
    """Operations with an RDBMS result-shape formula."""

    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"


@dataclass(frozen=True)
class RdbmsArithmeticResult:
    """Derived (precision, scale) of an arithmetic result."""

    precision: int
    scale: int


@dataclass(frozen=True)
class PrecisionScaleCheck:
    """Result of validating a coefficient against a (precision, scale) pair.

    Provides explicit success/failure handling for callers that need to
    inspect a violation rather than catch an exception.

    Attributes:
        error: Taxonomy kind of the violation, or None if valid
        error_detail: Human-readable reason for the violation

    Examples:
        check = validate_precision_scale(12345, 5, 2)
        assert check.is_valid

        check = validate_precision_scale(123456, 5, 2)
        assert check.error is DecimalErrorKind.PRECISION_EXCEEDED
    """

    error: DecimalErrorKind | None = None
    error_detail: str | None = None

    @property
    def is_valid(self) -> bool:
        """True if the coefficient fits the shape."""
        return self.error is None

    @property
    def reason(self) -> str | None:
        """Alias for error_detail."""
        return self.error_detail


def _shape_violation(precision: int, scale: int) -> str | None:
    if precision < 1:
        return "Precision must be positive"
    if scale < 0:
        return "Scale must be non-negative"
    if scale > precision:
        return "Scale must be less than or equal to precision"
    return None


def validate_precision_scale(coefficient: int, precision: int, scale: int) -> PrecisionScaleCheck:
    """Check that (precision, scale) is well formed and the coefficient fits it."""
    violation = _shape_violation(precision, scale)
    if violation is not None:
        return PrecisionScaleCheck(DecimalErrorKind.SCALE_EXCEEDS_PRECISION, violation)

    digits = digit_count(coefficient)
    if digits > precision:
        return PrecisionScaleCheck(
            DecimalErrorKind.PRECISION_EXCEEDED,
            f"Coefficient has {digits} digits, exceeding precision {precision}",
        )
    return PrecisionScaleCheck()


def _validate_operand(precision: int, scale: int) -> None:
    if precision < 1:
        raise ScaleExceedsPrecisionError("Precision must be positive")
    if scale < 0:
        raise ScaleExceedsPrecisionError("Scale must be non-negative")
    if scale > precision:
        raise ScaleExceedsPrecisionError("Scale must not exceed precision")


def calculate_addition_result_precision_scale(
    p1: int, s1: int, p2: int, s2: int
) -> RdbmsArithmeticResult:
    """Result shape of addition or subtraction.

    The extra digit of precision absorbs a carry or borrow.
    """
    _validate_operand(p1, s1)
    _validate_operand(p2, s2)
    scale = max(s1, s2)
    precision = max(p1 - s1, p2 - s2) + scale + 1
    return RdbmsArithmeticResult(precision=precision, scale=scale)


def calculate_multiplication_result_precision_scale(
    p1: int, s1: int, p2: int, s2: int
) -> RdbmsArithmeticResult:
    """Result shape of multiplication."""
    _validate_operand(p1, s1)
    _validate_operand(p2, s2)
    return RdbmsArithmeticResult(precision=p1 + p2 + 1, scale=s1 + s2)


def calculate_division_result_precision_scale(
    p1: int,
    s1: int,
    p2: int,
    s2: int,
    min_scale: int = DEFAULT_DIVISION_MIN_SCALE,
) -> RdbmsArithmeticResult:
    """Result shape of division (dividend p1/s1, divisor p2/s2)."""
    _validate_operand(p1, s1)
    _validate_operand(p2, s2)
    if min_scale < 0:
        raise ScaleExceedsPrecisionError("Scale must be non-negative")
    scale = max(min_scale, s1 + p2 + 1)
    precision = (p1 - s1) + s2 + scale
    return RdbmsArithmeticResult(precision=precision, scale=scale)


def validate_and_adjust_precision_scale(
    precision: int,
    scale: int,
    max_precision: int = DEFAULT_MAX_PRECISION,
    max_scale: int = DEFAULT_MAX_SCALE,
    min_scale: int | None = None,
) -> RdbmsArithmeticResult:
    """Clamp a result shape to system maxima.

    Precision is capped first, then scale. If anything was adjusted and the
    scale no longer leaves room for an integer digit, the scale is reduced
    to precision - 1. Shapes already within limits are returned unchanged,
    including scale == precision.

    With min_scale, an over-wide precision instead gives up fractional
    digits before integer digits: the scale shrinks until the integer
    digits fit under max_precision, but not below min_scale (or the
    original scale, if smaller).

    Examples:
        validate_and_adjust_precision_scale(50, 10)     -> (38, 10)
        validate_and_adjust_precision_scale(50, 40, 35) -> (35, 34)
        validate_and_adjust_precision_scale(38, 38)     -> (38, 38)
        validate_and_adjust_precision_scale(77, 39, min_scale=6) -> (38, 6)
    """
    _validate_operand(precision, scale)

    adjusted_scale = scale
    if min_scale is not None and precision > max_precision:
        integer_digits = precision - scale
        adjusted_scale = max(min(scale, max_precision - integer_digits), min(scale, min_scale))

    adjusted_precision = min(precision, max_precision)
    adjusted_scale = min(adjusted_scale, max_scale)
    adjusted = (adjusted_precision, adjusted_scale) != (precision, scale)
    if adjusted and adjusted_scale >= adjusted_precision:
        adjusted_scale = max(adjusted_precision - 1, 0)

    if adjusted:
        logger.debug(
            "precision_scale_clamped",
            precision=precision,
            scale=scale,
            adjusted_precision=adjusted_precision,
            adjusted_scale=adjusted_scale,
        )
    return RdbmsArithmeticResult(precision=adjusted_precision, scale=adjusted_scale)


def _unclamped_result(
    operation: ArithmeticOperation,
    p1: int,
    s1: int,
    p2: int,
    s2: int,
    division_min_scale: int,
) -> RdbmsArithmeticResult:
    if operation in (ArithmeticOperation.ADD, ArithmeticOperation.SUBTRACT):
        return calculate_addition_result_precision_scale(p1, s1, p2, s2)
    if operation is ArithmeticOperation.MULTIPLY:
        return calculate_multiplication_result_precision_scale(p1, s1, p2, s2)
    return calculate_division_result_precision_scale(p1, s1, p2, s2, division_min_scale)


def calculate_rdbms_arithmetic_result(
    operation: ArithmeticOperation | str,
    p1: int,
    s1: int,
    p2: int,
    s2: int,
    *,
    max_precision: int = DEFAULT_MAX_PRECISION,
    max_scale: int = DEFAULT_MAX_SCALE,
    division_min_scale: int = DEFAULT_DIVISION_MIN_SCALE,
    clamp: bool = True,
) -> RdbmsArithmeticResult:
    """Derive and (optionally) clamp the result shape of an operation.

    Args:
        operation: One of ArithmeticOperation (or its string value)
        p1, s1: Precision and scale of the left operand
        p2, s2: Precision and scale of the right operand
        max_precision: Precision cap for the clamp step
        max_scale: Scale cap for the clamp step
        division_min_scale: Minimum scale of a division result; also the
            floor the clamp step keeps when multiply or divide trades
            fractional digits for integer digits
        clamp: If False, skip the clamp step (unbounded precision)

    Raises:
        ValueError: If the operation is not supported
        ScaleExceedsPrecisionError: If an operand shape is invalid
    """
    try:
        op = ArithmeticOperation(operation)
    except ValueError as err:
        name = getattr(operation, "value", operation)
        raise ValueError(f"Unsupported operation: {name}") from err

    result = _unclamped_result(op, p1, s1, p2, s2, division_min_scale)
    if not clamp:
        return result
    min_scale = None
    if op in (ArithmeticOperation.MULTIPLY, ArithmeticOperation.DIVIDE):
        min_scale = division_min_scale
    return validate_and_adjust_precision_scale(
        result.precision, result.scale, max_precision, max_scale, min_scale
    )
