"""Scaling primitives on decimal coefficients.

A coefficient is the integer formed by a value's significant digits with the
decimal point implied by its scale: 123.45 is coefficient 12345 at scale 2.
Scaling moves that implied point with exact integer multiply/divide.
"""

from __future__ import annotations

from fixed_decimal.errors import PrecisionExceededError
from fixed_decimal.math.pow10 import pow10

__all__ = [
    "scale_up",
    "scale_down",
    "digit_count",
    "parse_digits",
    "render_digits",
    "format_coefficient",
]

# int() and str() refuse to convert more than sys.get_int_max_str_digits()
# digits (4300 by default); longer runs are split at powers of ten.
_DIRECT_CONVERSION_DIGITS = 1000


def _div_trunc(a: int, b: int) -> int:
    """Integer division with truncation toward zero.

    Python's // floors toward -inf; for a negative dividend and a positive
    divisor that is one step further from zero than truncation.

    Examples:
        Python: -127 // 10 = -13
        Truncated: -127 / 10 = -12
    """
    if (a >= 0) == (b >= 0):
        return a // b
    return -(abs(a) // abs(b))


def scale_up(coefficient: int, scale_factor: int) -> int:
    """Move the implied decimal point right: coefficient * 10^scale_factor.

    Raises:
        ValueError: If scale_factor is negative
    """
    if scale_factor < 0:
        raise ValueError("Scale factor must be non-negative")
    if scale_factor == 0:
        return coefficient
    return coefficient * pow10(scale_factor)


def scale_down(coefficient: int, scale_factor: int) -> int:
    """Move the implied decimal point left, truncating toward zero.

    No rounding is applied; use this only where truncation is the intended
    outcome (e.g. division overflow). Use fixed_decimal.math.rounding for
    rounded rescaling.

    Raises:
        ValueError: If scale_factor is negative
    """
    if scale_factor < 0:
        raise ValueError("Scale factor must be non-negative")
    if scale_factor == 0:
        return coefficient
    return _div_trunc(coefficient, pow10(scale_factor))


def digit_count(n: int) -> int:
    """Number of base-10 digits of |n|; zero has zero digits.

    Estimates from the bit length (1233 / 4096 ~ log10(2)) and corrects
    against exact powers of ten, so no string conversion is needed.
    """
    n = abs(n)
    if n == 0:
        return 0
    digits = ((n.bit_length() * 1233) >> 12) + 1
    while digits > 1 and n < pow10(digits - 1):
        digits -= 1
    while n >= pow10(digits):
        digits += 1
    return digits


def parse_digits(digits: str) -> int:
    """Convert a run of decimal digits to a non-negative int of any length.

    Examples:
        parse_digits("00123")          -> 123
        parse_digits("1" + "0" * 5000) -> 10**5000

    Raises:
        ValueError: If digits is empty or contains a non-digit
    """
    if len(digits) <= _DIRECT_CONVERSION_DIGITS:
        return int(digits)
    low_length = len(digits) // 2
    high = parse_digits(digits[:-low_length])
    return high * pow10(low_length) + parse_digits(digits[-low_length:])


def render_digits(n: int, width: int = 0) -> str:
    """Render a non-negative int as decimal digits, zero-padded to width.

    Raises:
        ValueError: If n is negative
    """
    if n < 0:
        raise ValueError("Value must be non-negative")
    digits = digit_count(n)
    if digits <= _DIRECT_CONVERSION_DIGITS:
        return str(n).rjust(width, "0")
    low_length = digits // 2
    high, low = divmod(n, pow10(low_length))
    return render_digits(high, width - low_length) + render_digits(low, low_length)


def format_coefficient(coefficient: int, scale: int, precision: int | None = None) -> str:
    """Render a coefficient as canonical decimal text.

    The output is ``[-]digits['.'digits]`` with exactly ``scale`` fractional
    digits, no leading integer zeros except a bare "0", and no exponent:
      (12345, 2)  -> '123.45'
      (-1, 3)     -> '-0.001'
      (0, 2)      -> '0.00'

    Args:
        coefficient: Signed coefficient
        scale: Number of fractional digits (non-negative)
        precision: If given, the coefficient's digit count is validated
            against it

    Raises:
        ValueError: If scale is negative
        PrecisionExceededError: If the coefficient has more digits than precision
    """
    if scale < 0:
        raise ValueError("Scale must be non-negative")
    if precision is not None and digit_count(coefficient) > precision:
        raise PrecisionExceededError(
            f"Coefficient has {digit_count(coefficient)} digits, exceeding precision {precision}"
        )

    sign = "-" if coefficient < 0 else ""
    digits = render_digits(abs(coefficient))
    if scale == 0:
        return f"{sign}{digits}" if coefficient != 0 else "0"

    digits = digits.rjust(scale + 1, "0")
    integer_part = digits[:-scale]
    fractional_part = digits[-scale:]
    return f"{sign}{integer_part}.{fractional_part}"
