"""Rounding strategies for rescaling coefficients.

All three strategies share the shape
``round(coefficient, current_scale, target_scale) -> coefficient`` and are
pure integer operations. When the target scale is at or above the current
scale the coefficient is padded with zeros, which is exact for every
strategy.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum

from fixed_decimal.errors import PrecisionExceededError
from fixed_decimal.math.pow10 import pow10
from fixed_decimal.math.scaling import digit_count, scale_down, scale_up

__all__ = [
    "RoundingMode",
    "round_half_up",
    "ceil_round",
    "floor_round",
    "round_to_scale",
    "fit_to_precision",
]


class RoundingMode(str, Enum):
    """How discarded fractional digits are resolved."""

    HALF_UP = "round"
    CEILING = "ceil"
    FLOOR = "floor"


def _check_scales(current_scale: int, target_scale: int) -> None:
    if current_scale < 0 or target_scale < 0:
        raise ValueError("Scales must be non-negative")


def round_half_up(coefficient: int, current_scale: int, target_scale: int) -> int:
    """Rescale rounding ties away from zero.

    Examples:
        round_half_up(125, 1, 0)  -> 13   (12.5 -> 13)
        round_half_up(-125, 1, 0) -> -13  (-12.5 -> -13)

    Raises:
        ValueError: If either scale is negative
    """
    _check_scales(current_scale, target_scale)
    if target_scale >= current_scale:
        return scale_up(coefficient, target_scale - current_scale)

    divisor = pow10(current_scale - target_scale)
    quotient, remainder = divmod(abs(coefficient), divisor)
    if remainder * 2 >= divisor:
        quotient += 1
    return -quotient if coefficient < 0 else quotient


def ceil_round(coefficient: int, current_scale: int, target_scale: int) -> int:
    """Rescale rounding toward positive infinity.

    Only a positive value with a nonzero remainder is bumped; a negative
    value is never moved further from zero.

    Raises:
        ValueError: If either scale is negative
    """
    _check_scales(current_scale, target_scale)
    if target_scale >= current_scale:
        return scale_up(coefficient, target_scale - current_scale)

    divisor = pow10(current_scale - target_scale)
    return -(-coefficient // divisor)


def floor_round(coefficient: int, current_scale: int, target_scale: int) -> int:
    """Rescale rounding toward negative infinity.

    Only a negative value with a nonzero remainder is lowered.

    Raises:
        ValueError: If either scale is negative
    """
    _check_scales(current_scale, target_scale)
    if target_scale >= current_scale:
        return scale_up(coefficient, target_scale - current_scale)

    divisor = pow10(current_scale - target_scale)
    return coefficient // divisor


_STRATEGIES: dict[RoundingMode, Callable[[int, int, int], int]] = {
    RoundingMode.HALF_UP: round_half_up,
    RoundingMode.CEILING: ceil_round,
    RoundingMode.FLOOR: floor_round,
}


def round_to_scale(
    coefficient: int,
    current_scale: int,
    target_scale: int,
    mode: RoundingMode | str = RoundingMode.HALF_UP,
) -> int:
    """Rescale a coefficient using the strategy named by mode."""
    return _STRATEGIES[RoundingMode(mode)](coefficient, current_scale, target_scale)


def fit_to_precision(
    coefficient: int,
    precision: int,
    scale: int,
    mode: RoundingMode | str = RoundingMode.HALF_UP,
    max_scale: int | None = None,
) -> tuple[int, int]:
    """Drop low-order fractional digits until the coefficient fits precision.

    Only fractional digits may be discarded; integer digits are never
    sacrificed. The resulting scale never exceeds precision (or max_scale,
    if given), and the discarded digits are rounded exactly once.

    Examples:
        fit_to_precision(123456, 5, 3) -> (12346, 2)   # 123.456 -> 123.46
        fit_to_precision(12345, 5, 2)  -> (12345, 2)   # already fits
        fit_to_precision(56088, 3, 6)  -> (56, 3)      # 0.056088 -> 0.056
        fit_to_precision(99996, 4, 3)  -> (1000, 1)    # 99.996 -> 100.0

    Args:
        coefficient: Signed coefficient
        precision: Maximum number of digits allowed
        scale: Current scale of the coefficient
        mode: Rounding strategy for the discarded digits
        max_scale: Optional further cap on the resulting scale

    Returns:
        Tuple of (coefficient, scale) after fitting

    Raises:
        PrecisionExceededError: If the integer part alone needs more than
            precision digits, or a rounding carry overflows it
    """
    scale_limit = precision if max_scale is None else min(precision, max_scale)
    digits = digit_count(coefficient)
    excess = max(digits - precision, scale - max(scale_limit, 0), 0)
    if excess == 0:
        return coefficient, scale

    if excess > scale:
        raise PrecisionExceededError(
            f"Cannot fit {digits} digits into precision {precision}: "
            f"only {scale} fractional digits can be discarded"
        )

    new_scale = scale - excess
    rounded = round_to_scale(coefficient, scale, new_scale, mode)
    if digit_count(rounded) > precision:
        if new_scale == 0:
            raise PrecisionExceededError(
                f"Rounding carry overflows precision {precision} at scale {new_scale}"
            )
        # A carry leaves exactly 10^precision, so the extra digit is a zero.
        rounded = scale_down(rounded, 1)
        new_scale -= 1
    return rounded, new_scale
