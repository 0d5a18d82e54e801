"""Pydantic field types for Decimal values.

These types let schema-validated models hold exact decimals:

    from pydantic import BaseModel
    from fixed_decimal.types import DecimalValue, decimal_member

    class Invoice(BaseModel):
        subtotal: DecimalValue
        tax_rate: decimal_member(5, 4)

Input may be a Decimal, a decimal string or a native number. Values are
serialized as canonical decimal strings so nothing is lost in transit.
"""

from typing import Annotated, Any

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

from fixed_decimal.decimal_type import DECIMAL_PATTERN, Decimal, ensure_decimal
from fixed_decimal.errors import DecimalError

__all__ = ["DecimalAnnotation", "DecimalValue", "decimal_member", "validate_decimal"]


def validate_decimal(value: Any, precision: int | None = None, scale: int | None = None) -> Decimal:
    """Coerce a value to a Decimal, optionally converting to a declared shape.

    Args:
        value: Decimal, decimal string, int or float
        precision: Declared precision of the member (requires scale)
        scale: Declared scale of the member (requires precision)

    Returns:
        The coerced Decimal

    Raises:
        ValueError: If the value is not a valid decimal or does not fit the shape
    """
    try:
        decimal = ensure_decimal(value)
        if precision is not None and scale is not None:
            decimal = decimal.convert(precision, scale)
    except DecimalError as err:
        raise ValueError(f"{err.kind.value}: {err}") from err
    return decimal


def _serialize_decimal(value: Decimal) -> str:
    return value.to_string()


class DecimalAnnotation:
    """Annotated metadata that validates and serializes a Decimal field."""

    __slots__ = ("precision", "scale")

    def __init__(self, precision: int | None = None, scale: int | None = None) -> None:
        if (precision is None) != (scale is None):
            raise ValueError("precision and scale must be given together")
        self.precision = precision
        self.scale = scale

    def _validate(self, value: Any) -> Decimal:
        return validate_decimal(value, self.precision, self.scale)

    def __get_pydantic_core_schema__(
        self, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            self._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                _serialize_decimal, return_schema=core_schema.str_schema()
            ),
        )

    def __get_pydantic_json_schema__(
        self, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        json_schema: JsonSchemaValue = {"type": "string", "pattern": DECIMAL_PATTERN}
        if self.precision is not None:
            json_schema["description"] = f"DECIMAL({self.precision}, {self.scale})"
        return json_schema

    def __repr__(self) -> str:
        return f"DecimalAnnotation(precision={self.precision}, scale={self.scale})"


# Decimal with the shape inferred from its input
DecimalValue = Annotated[Decimal, DecimalAnnotation()]


def decimal_member(precision: int, scale: int) -> Any:
    """Field type for a DECIMAL(precision, scale) member.

    Input is coerced and then converted to the declared shape (scale
    changes round half-up; values that do not fit are rejected).

    Raises:
        ScaleExceedsPrecisionError: If the declared shape is invalid
    """
    # Validate the declared shape eagerly, at model definition time
    Decimal(0, precision, scale)
    return Annotated[Decimal, DecimalAnnotation(precision, scale)]
