"""Fixed-point, arbitrary-precision decimal value type.

A Decimal is ``coefficient * 10^-scale`` with a declared precision (maximum
number of significant digits). All arithmetic is exact integer arithmetic on
the coefficient; floats never enter the computation path.

Usage:
    from fixed_decimal import Decimal

    price = Decimal.from_text("19.99")            # precision 4, scale 2
    amount = Decimal.from_text("123.456", 6, 2)   # 123.46 (rounded half-up)
    total = price.multiply(Decimal.from_text("3"))
    print(total)                                  # 59.97

Result shapes of add/subtract/multiply/divide follow RDBMS rules (see
fixed_decimal.math.policy). Values are immutable; every operation returns
a new instance.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from decimal import Decimal as StdDecimal
from typing import Any

from fixed_decimal.config import DEFAULT_DECIMAL_CONFIG, DecimalConfig
from fixed_decimal.errors import (
    DecimalOverflowError,
    DivisionByZeroError,
    InvalidFormatError,
    PrecisionExceededError,
    ScaleExceedsPrecisionError,
    StructureMismatchError,
    error_for_kind,
)
from fixed_decimal.math.alignment import align_operands
from fixed_decimal.math.division import long_division
from fixed_decimal.math.policy import (
    ArithmeticOperation,
    RdbmsArithmeticResult,
    calculate_rdbms_arithmetic_result,
    validate_precision_scale,
)
from fixed_decimal.math.rounding import (
    RoundingMode,
    fit_to_precision,
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
    "Decimal",
    "DecimalQuotient",
    "ensure_decimal",
    "DECIMAL_PATTERN",
]

# Signed decimal literal with optional exponent and optional "m" suffix
DECIMAL_PATTERN = r"^\s*[+-]?\d+(\.\d+)?([eE][+-]?\d+)?m?\s*$"

_LITERAL_RE = re.compile(r"^([+-]?)(\d+)(?:\.(\d+))?(?:[eE]([+-]?\d+))?$")

# Exponents beyond this would expand into absurdly long digit strings
MAX_EXPONENT_MAGNITUDE = 100_000


def _strip_literal(text: str) -> str:
    trimmed = text.strip()
    if trimmed.endswith("m"):
        trimmed = trimmed[:-1]
    return trimmed


def _match_literal(text: str) -> tuple[str, str, str, int]:
    """Split a literal into (sign, integer digits, fractional digits, exponent).

    Raises:
        InvalidFormatError: If text does not match the grammar or its exponent
            magnitude exceeds MAX_EXPONENT_MAGNITUDE
    """
    match = _LITERAL_RE.match(_strip_literal(text))
    if match is None:
        raise InvalidFormatError(f"Invalid decimal string format: '{text}'")

    sign, integer_part, fractional_part, exponent_part = match.groups()
    exponent_part = exponent_part or "0"
    exponent_digits = exponent_part.lstrip("+-").lstrip("0") or "0"
    if (
        len(exponent_digits) > len(str(MAX_EXPONENT_MAGNITUDE))
        or int(exponent_digits) > MAX_EXPONENT_MAGNITUDE
    ):
        raise InvalidFormatError(f"Exponent out of range in '{text}'")
    exponent = -int(exponent_digits) if exponent_part.startswith("-") else int(exponent_digits)
    return sign, integer_part, fractional_part or "", exponent


def _parse_literal(text: str) -> tuple[bool, str, str]:
    """Split a literal into (negative, integer digits, fractional digits).

    The exponent, if any, is applied by moving digits between the integer
    and fractional parts, so "1.5e2" yields ("150", "") and "15e-3" yields
    ("0", "015").
    """
    sign, integer_part, fractional_part, exponent = _match_literal(text)

    if exponent > 0:
        if len(fractional_part) > exponent:
            integer_part += fractional_part[:exponent]
            fractional_part = fractional_part[exponent:]
        else:
            integer_part += fractional_part.ljust(exponent, "0")
            fractional_part = ""
    elif exponent < 0:
        shift = -exponent
        if len(integer_part) > shift:
            fractional_part = integer_part[-shift:] + fractional_part
            integer_part = integer_part[:-shift]
        else:
            fractional_part = integer_part.rjust(shift, "0") + fractional_part
            integer_part = "0"

    return sign == "-", integer_part, fractional_part


def _check_shape(precision: int, scale: int) -> None:
    if precision < 1:
        raise ScaleExceedsPrecisionError("Precision must be positive")
    if scale < 0:
        raise ScaleExceedsPrecisionError("Scale must be non-negative")
    if scale > precision:
        raise ScaleExceedsPrecisionError(
            f"Scale must be less than or equal to precision (precision={precision}, scale={scale})"
        )


def _number_text(value: object) -> str:
    """Canonical text of a native number (shortest round-trip for floats)."""
    if isinstance(value, bool):
        raise InvalidFormatError("Booleans cannot be converted to Decimal")
    if isinstance(value, int):
        return ("-" if value < 0 else "") + render_digits(abs(value))
    if isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidFormatError(f"Non-finite float cannot be converted to Decimal: {value}")
        return repr(value)
    raise InvalidFormatError(f"Unsupported number type: {type(value).__name__}")


@dataclass(frozen=True)
class DecimalQuotient:
    """Detailed result of Decimal.divide_detailed.

    Attributes:
        value: The truncated quotient
        is_exact: True if the division terminated within the result scale
        repeating_digits: Repeating block of the fractional expansion, or None
            if the expansion terminates or no cycle was found within the cap
    """

    value: Decimal
    is_exact: bool
    repeating_digits: str | None


class Decimal:
    """Immutable fixed-point decimal with declared precision and scale.

    Precision & scale:
    - precision: total number of significant digits the value may hold
    - scale: number of digits after the decimal point
    - integer digits available = precision - scale

    Attributes:
        coefficient: Signed integer of significant digits (read-only)
        precision: Declared precision (read-only)
        scale: Declared scale (read-only)
    """

    __slots__ = ("_coefficient", "_precision", "_scale")
    _coefficient: int
    _precision: int
    _scale: int

    def __init__(self, coefficient: int, precision: int, scale: int) -> None:
        """Create a Decimal from a raw coefficient and shape.

        Raises:
            TypeError: If any argument is not an int
            ScaleExceedsPrecisionError: If the shape is invalid
            PrecisionExceededError: If the coefficient has more than precision digits
        """
        for name, arg in (("coefficient", coefficient), ("precision", precision), ("scale", scale)):
            if not isinstance(arg, int) or isinstance(arg, bool):
                raise TypeError(f"Decimal {name} must be int, got {type(arg).__name__}")

        check = validate_precision_scale(coefficient, precision, scale)
        if not check.is_valid:
            raise error_for_kind(check.error)(check.error_detail)  # type: ignore[arg-type]

        self._coefficient = coefficient
        self._precision = precision
        self._scale = scale

    # --- Factories ---

    @classmethod
    def from_text(
        cls, text: str, precision: int | None = None, scale: int | None = None
    ) -> Decimal:
        """Parse a decimal literal.

        Accepts an optional sign, integer digits, optional fractional digits,
        an optional e/E exponent and an optional trailing "m" suffix.

        If scale is omitted it is the literal's fractional digit count; if
        precision is omitted it is the significant integer digit count plus
        scale (at least 1). An explicit scale rounds the fraction half-up.

        Raises:
            InvalidFormatError: If text is not a valid decimal literal
            ScaleExceedsPrecisionError: If the shape is invalid
            PrecisionExceededError: If digits remain over budget after rounding
        """
        if not isinstance(text, str):
            raise InvalidFormatError(f"Decimal text must be str, got {type(text).__name__}")

        negative, integer_part, fractional_part = _parse_literal(text)
        if scale is None:
            scale = len(fractional_part)
        if precision is None:
            precision = max(1, len(integer_part.lstrip("0")) + scale)
        _check_shape(precision, scale)

        magnitude = parse_digits(integer_part + fractional_part)
        coefficient = round_half_up(
            -magnitude if negative else magnitude, len(fractional_part), scale
        )
        if digit_count(coefficient) > precision:
            raise PrecisionExceededError(
                f"Value '{text}' exceeds specified precision ({precision}) after rounding"
            )
        return cls(coefficient, precision, scale)

    @classmethod
    def from_decimal(
        cls, source: Decimal, precision: int | None = None, scale: int | None = None
    ) -> Decimal:
        """Copy or reshape another Decimal.

        Omitted shape parameters are taken from source. Increasing the scale
        pads with zeros; decreasing it rounds half-up. The integer part is
        never shrunk.

        Raises:
            ScaleExceedsPrecisionError: If the target shape is invalid
            PrecisionExceededError: If the value does not fit the target shape
        """
        if not isinstance(source, Decimal):
            raise TypeError(f"from_decimal requires Decimal, got {type(source).__name__}")
        if precision is None:
            precision = source.precision
        if scale is None:
            scale = source.scale
        _check_shape(precision, scale)

        integer_digits = digit_count(scale_down(source.coefficient, source.scale))
        if integer_digits > precision - scale:
            raise PrecisionExceededError(
                f"Cannot adjust precision: integer part needs {integer_digits} digits, "
                f"but target precision-scale only allows {precision - scale}"
            )

        coefficient = round_half_up(source.coefficient, source.scale, scale)
        if digit_count(coefficient) > precision:
            raise PrecisionExceededError(
                f"Value exceeds the specified precision ({precision}) after scaling"
            )
        return cls(coefficient, precision, scale)

    @classmethod
    def from_number(cls, value: int | float, precision: int, scale: int) -> Decimal:
        """Create from a native number with an explicit shape.

        A float carries no precision contract of its own, so the shape is
        required. The number's shortest round-trip text is parsed.

        Raises:
            InvalidFormatError: If value is not a finite int or float
        """
        return cls.from_text(_number_text(value), precision, scale)

    @staticmethod
    def is_valid_decimal(text: str) -> bool:
        """True if text is a literal from_text accepts, exponent range included."""
        if not isinstance(text, str):
            return False
        try:
            _match_literal(text)
        except InvalidFormatError:
            return False
        return True

    # --- Properties ---

    @property
    def coefficient(self) -> int:
        """The signed coefficient (significant digits, no decimal point)."""
        return self._coefficient

    @property
    def precision(self) -> int:
        """Declared maximum number of significant digits."""
        return self._precision

    @property
    def scale(self) -> int:
        """Number of digits after the decimal point."""
        return self._scale

    @property
    def is_zero(self) -> bool:
        return self._coefficient == 0

    @property
    def sign(self) -> int:
        """1 for positive, -1 for negative, 0 for zero."""
        return (self._coefficient > 0) - (self._coefficient < 0)

    # --- Conversion ---

    def to_string(self) -> str:
        """Canonical text: ``[-]digits['.'digits]`` with exactly scale fractional digits."""
        return format_coefficient(self._coefficient, self._scale)

    def to_number(self) -> float:
        """Best-effort lossy conversion to float.

        Raises:
            DecimalOverflowError: If the magnitude exceeds the float range
        """
        value = float(self.to_string())
        if math.isinf(value):
            raise DecimalOverflowError("Conversion to float results in infinity")
        return value

    def convert(self, precision: int, scale: int) -> Decimal:
        """Return this value reshaped to (precision, scale).

        Raises:
            ScaleExceedsPrecisionError: If scale > precision
            PrecisionExceededError: If the value does not fit
        """
        if scale > precision:
            raise ScaleExceedsPrecisionError("Scale must be less than or equal to precision")
        return Decimal.from_decimal(self, precision, scale)

    def format_pattern(self) -> str:
        """Shape as a pattern of placeholders, e.g. "xxx.xx" for (5, 2)."""
        integer_part = "x" * (self._precision - self._scale)
        if self._scale == 0:
            return integer_part
        return f"{integer_part}.{'x' * self._scale}"

    # --- Comparison ---

    def compare_structure(self, other: Decimal) -> bool:
        """True if other has the same (precision, scale)."""
        return self._precision == other._precision and self._scale == other._scale

    def compare_to(self, other: Decimal) -> int:
        """Compare values: 1 if greater, -1 if less, 0 if equal.

        Raises:
            StructureMismatchError: If the shapes differ
        """
        other = _require_decimal(other)
        if not self.compare_structure(other):
            raise StructureMismatchError(
                "Decimals must have the same precision and scale for comparison: "
                f"({self._precision}, {self._scale}) vs ({other._precision}, {other._scale})"
            )
        return (self._coefficient > other._coefficient) - (self._coefficient < other._coefficient)

    def equals(self, other: Decimal) -> bool:
        return self.compare_to(other) == 0

    def less_than(self, other: Decimal) -> bool:
        return self.compare_to(other) < 0

    def greater_than(self, other: Decimal) -> bool:
        return self.compare_to(other) > 0

    def less_than_or_equal(self, other: Decimal) -> bool:
        return self.compare_to(other) <= 0

    def greater_than_or_equal(self, other: Decimal) -> bool:
        return self.compare_to(other) >= 0

    # --- Arithmetic ---

    def _result_shape(
        self, operation: ArithmeticOperation, other: Decimal, config: DecimalConfig
    ) -> RdbmsArithmeticResult:
        return calculate_rdbms_arithmetic_result(
            operation,
            self._precision,
            self._scale,
            other._precision,
            other._scale,
            max_precision=config.max_precision,
            max_scale=config.max_scale,
            division_min_scale=config.division_min_scale,
            clamp=config.clamp_results,
        )

    def _add_sub(
        self, other: Decimal, operation: ArithmeticOperation, config: DecimalConfig | None
    ) -> Decimal:
        other = _require_decimal(other)
        shape = self._result_shape(operation, other, config or DEFAULT_DECIMAL_CONFIG)

        aligned = align_operands(
            self._coefficient, self._scale, other._coefficient, other._scale, shape.scale
        )
        if operation is ArithmeticOperation.ADD:
            coefficient = aligned.a + aligned.b
        else:
            coefficient = aligned.a - aligned.b

        if digit_count(coefficient) > shape.precision:
            raise PrecisionExceededError(
                f"Result of {operation.value} needs {digit_count(coefficient)} digits, "
                f"exceeding precision {shape.precision}"
            )
        return Decimal(coefficient, shape.precision, aligned.target_scale)

    def add(self, other: Decimal, *, config: DecimalConfig | None = None) -> Decimal:
        """Sum with scale max(s1, s2) and precision max(p1-s1, p2-s2) + scale + 1."""
        return self._add_sub(other, ArithmeticOperation.ADD, config)

    def subtract(self, other: Decimal, *, config: DecimalConfig | None = None) -> Decimal:
        """Difference with the same result shape as add."""
        return self._add_sub(other, ArithmeticOperation.SUBTRACT, config)

    def multiply(
        self,
        other: Decimal,
        *,
        precision: int | None = None,
        scale: int | None = None,
        config: DecimalConfig | None = None,
    ) -> Decimal:
        """Product with scale s1 + s2 and precision p1 + p2 + 1.

        An explicit scale rounds the product half-up to it (keeping the
        derived integer digit budget). An explicit precision alone drops
        fractional digits, rounding half-up once, until the product fits;
        the result scale is then at most min(s1 + s2, precision), so
        0.123 * 0.456 at precision 3 is 0.056.

        Raises:
            PrecisionExceededError: If the product does not fit the requested shape
        """
        other = _require_decimal(other)
        config = config or DEFAULT_DECIMAL_CONFIG
        shape = self._result_shape(ArithmeticOperation.MULTIPLY, other, config)
        product = self._coefficient * other._coefficient
        product_scale = self._scale + other._scale

        if scale is None and (precision is not None or config.clamp_results):
            target_precision = shape.precision if precision is None else precision
            if target_precision < 1:
                raise ScaleExceedsPrecisionError("Precision must be positive")
            coefficient, target_scale = fit_to_precision(
                product, target_precision, product_scale, max_scale=shape.scale
            )
            return Decimal(coefficient, target_precision, target_scale)

        target_scale = shape.scale if scale is None else scale
        if precision is not None:
            target_precision = precision
        elif scale is not None:
            target_precision = max(1, shape.precision - shape.scale + target_scale)
        else:
            target_precision = shape.precision
        _check_shape(target_precision, target_scale)

        coefficient = round_half_up(product, product_scale, target_scale)
        if digit_count(coefficient) > target_precision:
            raise PrecisionExceededError(
                f"Product needs {digit_count(coefficient)} digits, "
                f"exceeding precision {target_precision}"
            )
        return Decimal(coefficient, target_precision, target_scale)

    def divide_detailed(
        self,
        other: Decimal,
        *,
        scale: int | None = None,
        precision: int | None = None,
        config: DecimalConfig | None = None,
    ) -> DecimalQuotient:
        """Quotient plus exactness and repeating-decimal information.

        The result scale defaults to max(min_scale, s1 + p2 + 1); an explicit
        scale re-derives the precision as (p1 - s1) + s2 + scale. An explicit
        precision alone starts from scale min(default scale, precision) and
        gives up further fractional digits if the integer part needs them,
        so 1 / 3 at precision 4 is 0.3333. The quotient is truncated, never
        rounded.

        Raises:
            DivisionByZeroError: If other is zero
            PrecisionExceededError: If the integer part of the quotient does
                not fit the precision
        """
        other = _require_decimal(other)
        if other.is_zero:
            raise DivisionByZeroError("Division by zero")
        config = config or DEFAULT_DECIMAL_CONFIG
        shape = self._result_shape(ArithmeticOperation.DIVIDE, other, config)

        target_scale = shape.scale if scale is None else scale
        if precision is not None:
            target_precision = precision
            if scale is None:
                target_scale = min(target_scale, max(precision, 0))
        elif scale is not None:
            target_precision = max(
                1, (self._precision - self._scale) + other._scale + target_scale
            )
        else:
            target_precision = shape.precision
        _check_shape(target_precision, target_scale)

        # value ratio: (c1 / 10^s1) / (c2 / 10^s2) = (c1 * 10^s2) / (c2 * 10^s1)
        result = long_division(
            scale_up(self._coefficient, other._scale),
            scale_up(other._coefficient, self._scale),
            target_scale,
            target_precision,
            max_iterations=config.max_repeating_iterations,
        )
        return DecimalQuotient(
            value=Decimal(result.quotient, target_precision, result.scale),
            is_exact=result.is_exact,
            repeating_digits=result.repeating_digits,
        )

    def divide(
        self,
        other: Decimal,
        *,
        scale: int | None = None,
        precision: int | None = None,
        config: DecimalConfig | None = None,
    ) -> Decimal:
        """Truncated quotient; see divide_detailed."""
        return self.divide_detailed(other, scale=scale, precision=precision, config=config).value

    def mod(self, other: Decimal) -> Decimal:
        """Remainder of truncated division; carries the sign of the dividend.

        Result scale is max(s1, s2); precision is max(digits, p1, p2).

        Raises:
            DivisionByZeroError: If other is zero
        """
        other = _require_decimal(other)
        if other.is_zero:
            raise DivisionByZeroError("Division by zero")

        aligned = align_operands(self._coefficient, self._scale, other._coefficient, other._scale)
        remainder = abs(aligned.a) % abs(aligned.b)
        if aligned.a < 0:
            remainder = -remainder

        precision = max(digit_count(remainder), self._precision, other._precision)
        return Decimal(remainder, precision, aligned.target_scale)

    def _rescale(self, precision: int, scale: int, mode: RoundingMode) -> Decimal:
        _check_shape(precision, scale)
        coefficient = round_to_scale(self._coefficient, self._scale, scale, mode)
        if digit_count(coefficient) > precision:
            raise PrecisionExceededError(
                f"Value {self} exceeds precision ({precision}) at scale {scale}"
            )
        return Decimal(coefficient, precision, scale)

    def round(self, precision: int, scale: int) -> Decimal:
        """Rescale to (precision, scale) rounding half-up."""
        return self._rescale(precision, scale, RoundingMode.HALF_UP)

    def ceil(self, precision: int, scale: int) -> Decimal:
        """Rescale to (precision, scale) rounding toward positive infinity."""
        return self._rescale(precision, scale, RoundingMode.CEILING)

    def floor(self, precision: int, scale: int) -> Decimal:
        """Rescale to (precision, scale) rounding toward negative infinity."""
        return self._rescale(precision, scale, RoundingMode.FLOOR)

    def negate(self) -> Decimal:
        return Decimal(-self._coefficient, self._precision, self._scale)

    def abs(self) -> Decimal:
        return Decimal(abs(self._coefficient), self._precision, self._scale)

    # --- Python protocol ---

    def __add__(self, other: object) -> Decimal:
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> Decimal:
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, other: object) -> Decimal:
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.multiply(other)

    def __truediv__(self, other: object) -> Decimal:
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.divide(other)

    def __mod__(self, other: object) -> Decimal:
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.mod(other)

    def __neg__(self) -> Decimal:
        return self.negate()

    def __pos__(self) -> Decimal:
        return self

    def __abs__(self) -> Decimal:
        return self.abs()

    def __eq__(self, other: object) -> bool:
        # Structural equality: never raises, consistent with __hash__.
        if not isinstance(other, Decimal):
            return NotImplemented
        return (self._coefficient, self._precision, self._scale) == (
            other._coefficient,
            other._precision,
            other._scale,
        )

    def __hash__(self) -> int:
        return hash((self._coefficient, self._precision, self._scale))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.less_than(other)

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.less_than_or_equal(other)

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.greater_than(other)

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.greater_than_or_equal(other)

    def __bool__(self) -> bool:
        return self._coefficient != 0

    def __float__(self) -> float:
        return self.to_number()

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Decimal('{self}', precision={self._precision}, scale={self._scale})"


def _require_decimal(value: object) -> Decimal:
    if not isinstance(value, Decimal):
        raise TypeError(f"Decimal operation requires Decimal operand, got {type(value).__name__}")
    return value


def ensure_decimal(value: Any) -> Decimal:
    """Coerce a collaborator-supplied value to a Decimal.

    - Decimal: returned as-is
    - str: parsed with an inferred shape
    - int/float: parsed from the number's canonical text with an inferred shape
    - decimal.Decimal (standard library): parsed from its text form

    Raises:
        InvalidFormatError: If the value cannot be interpreted as a decimal
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, str):
        return Decimal.from_text(value)
    if isinstance(value, StdDecimal):
        if not value.is_finite():
            raise InvalidFormatError(f"Non-finite decimal cannot be converted: {value}")
        return Decimal.from_text(str(value))
    if isinstance(value, (int, float)):
        return Decimal.from_text(_number_text(value))
    raise InvalidFormatError(f"Unsupported value type for Decimal conversion: {type(value).__name__}")
