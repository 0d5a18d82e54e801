"""Operand alignment for addition, subtraction and comparison."""

from __future__ import annotations

from dataclasses import dataclass

from fixed_decimal.math.rounding import RoundingMode, round_to_scale

__all__ = ["AlignedOperands", "align_operands"]


@dataclass(frozen=True)
class AlignedOperands:
    """Two coefficients brought to a common scale.

    Attributes:
        a: First coefficient at target_scale
        b: Second coefficient at target_scale
        target_scale: The common scale
        scale_adjustment: Difference between the operands' original scales
    """

    a: int
    b: int
    target_scale: int
    scale_adjustment: int


def align_operands(
    a: int,
    a_scale: int,
    b: int,
    b_scale: int,
    max_scale: int | None = None,
    mode: RoundingMode | str = RoundingMode.HALF_UP,
) -> AlignedOperands:
    """Bring two coefficients to the common scale max(a_scale, b_scale).

    The lower-scale operand is padded with zeros, which is exact. If
    max_scale caps the common scale, operands above the cap are rounded
    down to it using mode.

    Examples:
        align_operands(12345, 2, 678, 1)     -> a=12345, b=6780, target_scale=2
        align_operands(12345, 2, 6789, 2, 1) -> a=1235, b=679, target_scale=1

    Raises:
        ValueError: If any scale (or max_scale) is negative
    """
    if a_scale < 0 or b_scale < 0 or (max_scale is not None and max_scale < 0):
        raise ValueError("Scales must be non-negative")

    target_scale = max(a_scale, b_scale)
    if max_scale is not None and target_scale > max_scale:
        target_scale = max_scale

    return AlignedOperands(
        a=round_to_scale(a, a_scale, target_scale, mode),
        b=round_to_scale(b, b_scale, target_scale, mode),
        target_scale=target_scale,
        scale_adjustment=abs(a_scale - b_scale),
    )
