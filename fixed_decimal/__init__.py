"""Fixed-point, arbitrary-precision decimal arithmetic with RDBMS semantics.

This package provides an exact DECIMAL(precision, scale) value type:
- Decimal: immutable coefficient x 10^-scale with declared precision
- Result shapes for add/subtract/multiply/divide following RDBMS rules
- Half-up, ceiling and floor rounding; truncating division with
  repeating-decimal detection
- Pydantic field types (fixed_decimal.types) for schema-validated models
"""

from fixed_decimal.config import DEFAULT_DECIMAL_CONFIG, DecimalConfig, load_config_from_env
from fixed_decimal.decimal_type import Decimal, DecimalQuotient, ensure_decimal
from fixed_decimal.errors import (
    DecimalError,
    DecimalErrorKind,
    DecimalOverflowError,
    DivisionByZeroError,
    InvalidFormatError,
    PrecisionExceededError,
    ScaleExceedsPrecisionError,
    StructureMismatchError,
)
from fixed_decimal.math.rounding import RoundingMode

__version__ = "0.1.0"

__all__ = [
    "Decimal",
    "DecimalQuotient",
    "ensure_decimal",
    "RoundingMode",
    "DecimalConfig",
    "DEFAULT_DECIMAL_CONFIG",
    "load_config_from_env",
    "DecimalError",
    "DecimalErrorKind",
    "InvalidFormatError",
    "PrecisionExceededError",
    "ScaleExceedsPrecisionError",
    "StructureMismatchError",
    "DivisionByZeroError",
    "DecimalOverflowError",
]
