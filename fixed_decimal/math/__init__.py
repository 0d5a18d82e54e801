"""Integer-domain numeric primitives for the decimal engine.

This package provides the building blocks Decimal is composed from:
- Power-of-ten memoization
- Scaling (implied decimal point shifts), digit counting and formatting
- Rounding strategies (half-up, ceiling, floor)
- Operand alignment
- Long division with repeating-decimal detection
- RDBMS precision/scale policy
"""

from fixed_decimal.math.alignment import AlignedOperands, align_operands
from fixed_decimal.math.division import DivisionResult, find_repeating_digits, long_division
from fixed_decimal.math.policy import (
    ArithmeticOperation,
    PrecisionScaleCheck,
    RdbmsArithmeticResult,
    calculate_addition_result_precision_scale,
    calculate_division_result_precision_scale,
    calculate_multiplication_result_precision_scale,
    calculate_rdbms_arithmetic_result,
    validate_and_adjust_precision_scale,
    validate_precision_scale,
)
from fixed_decimal.math.pow10 import PowerOfTenCache, get_pow10_cache, pow10, set_pow10_cache
from fixed_decimal.math.rounding import (
    RoundingMode,
    ceil_round,
    fit_to_precision,
    floor_round,
    round_half_up,
    round_to_scale,
)
from fixed_decimal.math.scaling import (
    digit_count,
    format_coefficient,
    parse_digits,
    render_digits,
    scale_down,
    scale_up,
)

__all__ = [
    # Power-of-ten cache
    "PowerOfTenCache",
    "get_pow10_cache",
    "set_pow10_cache",
    "pow10",
    # Scaling
    "scale_up",
    "scale_down",
    "digit_count",
    "parse_digits",
    "render_digits",
    "format_coefficient",
    # Rounding
    "RoundingMode",
    "round_half_up",
    "ceil_round",
    "floor_round",
    "round_to_scale",
    "fit_to_precision",
    # Alignment
    "AlignedOperands",
    "align_operands",
    # Division
    "DivisionResult",
    "long_division",
    "find_repeating_digits",
    # Policy
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
