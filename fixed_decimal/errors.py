"""Decimal error classes.

Every failure raised by the engine is a DecimalError. Each subclass maps to
one entry of the error taxonomy via its ``kind`` so collaborators (e.g. a
schema validator) can branch on the kind without importing every class.
"""

from __future__ import annotations

from enum import Enum
from typing import ClassVar

__all__ = [
    "DecimalErrorKind",
    "DecimalError",
    "InvalidFormatError",
    "PrecisionExceededError",
    "ScaleExceedsPrecisionError",
    "StructureMismatchError",
    "DivisionByZeroError",
    "DecimalOverflowError",
    "error_for_kind",
]


class DecimalErrorKind(str, Enum):
    """Taxonomy of decimal failures."""

    INVALID_FORMAT = "invalid-format"
    PRECISION_EXCEEDED = "precision-exceeded"
    SCALE_EXCEEDS_PRECISION = "scale-exceeds-precision"
    STRUCTURE_MISMATCH = "structure-mismatch"
    DIVISION_BY_ZERO = "division-by-zero"
    OVERFLOW = "overflow"


class DecimalError(ArithmeticError):
    """Base error for Decimal operations."""

    kind: ClassVar[DecimalErrorKind]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.kind.value}: {self})"


class InvalidFormatError(DecimalError, ValueError):
    """Input does not match the signed decimal/exponential grammar."""

    kind = DecimalErrorKind.INVALID_FORMAT


class PrecisionExceededError(DecimalError):
    """An operation would need more significant digits than declared."""

    kind = DecimalErrorKind.PRECISION_EXCEEDED


class ScaleExceedsPrecisionError(PrecisionExceededError, ValueError):
    """A requested (precision, scale) pair is structurally invalid.

    A scale wider than the precision can never be stored, so this is also a
    PrecisionExceededError; ``kind`` tells the two apart.
    """

    kind = DecimalErrorKind.SCALE_EXCEEDS_PRECISION


class StructureMismatchError(DecimalError):
    """Comparison between Decimals of different (precision, scale)."""

    kind = DecimalErrorKind.STRUCTURE_MISMATCH


class DivisionByZeroError(DecimalError, ZeroDivisionError):
    """Division or modulo by a zero Decimal."""

    kind = DecimalErrorKind.DIVISION_BY_ZERO


class DecimalOverflowError(DecimalError, OverflowError):
    """Lossy float conversion exceeds the finite float range."""

    kind = DecimalErrorKind.OVERFLOW


_ERRORS_BY_KIND: dict[DecimalErrorKind, type[DecimalError]] = {
    cls.kind: cls
    for cls in (
        InvalidFormatError,
        PrecisionExceededError,
        ScaleExceedsPrecisionError,
        StructureMismatchError,
        DivisionByZeroError,
        DecimalOverflowError,
    )
}


def error_for_kind(kind: DecimalErrorKind | str) -> type[DecimalError]:
    """Return the exception class for a taxonomy kind.

    Raises:
        ValueError: If kind is not a known taxonomy name
    """
    return _ERRORS_BY_KIND[DecimalErrorKind(kind)]
