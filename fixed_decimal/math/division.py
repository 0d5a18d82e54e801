"""Long division to a target scale with repeating-decimal detection.

The quotient is always truncated toward zero, never rounded: a division has
infinitely many digits in general and truncation is the only outcome that
is consistent regardless of sign.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from fixed_decimal.config import DEFAULT_MAX_REPEATING_ITERATIONS
from fixed_decimal.errors import (
    DivisionByZeroError,
    PrecisionExceededError,
    ScaleExceedsPrecisionError,
)
from fixed_decimal.math.pow10 import pow10
from fixed_decimal.math.scaling import digit_count, scale_up

__all__ = ["DivisionResult", "long_division", "find_repeating_digits"]

logger = structlog.get_logger()


@dataclass(frozen=True)
class DivisionResult:
    """Result of a long division.

    Attributes:
        quotient: Signed quotient coefficient at ``scale``
        remainder: Remainder left after the last quotient digit; carries the
            sign of the dividend
        is_exact: True if no nonzero remainder was discarded
        repeating_digits: The repeating block of the fractional expansion
            (e.g. "3" for 1/3, "142857" for 1/7), or None when the division
            terminates or no cycle appeared within the iteration cap
        scale: Scale the quotient is expressed at. Lower than the requested
            scale only when low-order digits were truncated to fit precision.
    """

    quotient: int
    remainder: int
    is_exact: bool
    repeating_digits: str | None
    scale: int


def find_repeating_digits(
    numerator: int,
    denominator: int,
    max_iterations: int = DEFAULT_MAX_REPEATING_ITERATIONS,
) -> str | None:
    """Find the repeating block in the fractional expansion of numerator/denominator.

    Tracks remainder -> digit position; the first remainder seen twice marks
    the start of the cycle.

    Examples:
        find_repeating_digits(1, 3)  -> "3"
        find_repeating_digits(1, 6)  -> "6"
        find_repeating_digits(1, 4)  -> None   (0.25 terminates)

    Raises:
        DivisionByZeroError: If denominator is zero
    """
    if denominator == 0:
        raise DivisionByZeroError("Division by zero")

    numerator, denominator = abs(numerator), abs(denominator)
    remainder = numerator % denominator
    seen: dict[int, int] = {}
    digits: list[str] = []

    position = 0
    while remainder != 0 and position < max_iterations:
        if remainder in seen:
            return "".join(digits[seen[remainder] :])
        seen[remainder] = position
        remainder *= 10
        digits.append(str(remainder // denominator))
        remainder %= denominator
        position += 1

    if remainder != 0:
        logger.debug(
            "repeating_digits_not_found",
            max_iterations=max_iterations,
            denominator_digits=digit_count(denominator),
        )
    return None


def long_division(
    dividend: int,
    divisor: int,
    scale: int,
    precision: int,
    *,
    max_iterations: int = DEFAULT_MAX_REPEATING_ITERATIONS,
) -> DivisionResult:
    """Divide two integers to ``scale`` fractional digits.

    Computes trunc(dividend * 10^scale / divisor). If the quotient has more
    than ``precision`` digits, low-order fractional digits are truncated
    (and the result scale reduced accordingly).

    Examples:
        long_division(10, 3, 3, 10)     -> quotient=3333, remainder=1
        long_division(4565, 123, 2, 10) -> quotient=3711

    Args:
        dividend: Signed integer dividend
        divisor: Signed integer divisor
        scale: Number of fractional digits to compute
        precision: Maximum number of digits in the quotient
        max_iterations: Cap on cycle detection steps

    Raises:
        DivisionByZeroError: If divisor is zero
        ScaleExceedsPrecisionError: If precision/scale are invalid
        PrecisionExceededError: If the integer part of the quotient alone
            exceeds precision
    """
    if divisor == 0:
        raise DivisionByZeroError("Division by zero")
    if precision < 1:
        raise ScaleExceedsPrecisionError("Precision must be positive")
    if scale < 0:
        raise ScaleExceedsPrecisionError("Scale must be non-negative")
    if scale > precision:
        raise ScaleExceedsPrecisionError("Scale must be less than or equal to precision")

    negative = (dividend < 0) != (divisor < 0)
    numerator, denominator = abs(dividend), abs(divisor)

    quotient, remainder = divmod(scale_up(numerator, scale), denominator)

    digits = digit_count(quotient)
    if digits > precision:
        excess = digits - precision
        if excess > scale:
            raise PrecisionExceededError(
                f"Quotient needs {digits - scale} integer digits, "
                f"exceeding precision {precision}"
            )
        logger.debug(
            "division_quotient_truncated",
            digits=digits,
            precision=precision,
            dropped_digits=excess,
        )
        scale -= excess
        quotient //= pow10(excess)
        remainder = scale_up(numerator, scale) - quotient * denominator

    is_exact = remainder == 0
    repeating = None if is_exact else find_repeating_digits(numerator, denominator, max_iterations)

    return DivisionResult(
        quotient=-quotient if negative else quotient,
        remainder=-remainder if dividend < 0 else remainder,
        is_exact=is_exact,
        repeating_digits=repeating,
        scale=scale,
    )
