"""Factory functions for creating test values.

Usage:
    from tests.helpers import D
    # or
    from tests.helpers.factories import make_decimal

    price = D("19.99")
    rate = D("0.0825", 5, 4)
"""

from fixed_decimal import Decimal, DecimalConfig


def make_decimal(text: str, precision: int | None = None, scale: int | None = None) -> Decimal:
    """Create a Decimal from a literal, inferring any omitted shape.

    Args:
        text: Decimal literal (e.g. "123.45", "1.5e2")
        precision: Declared precision (default: inferred from text)
        scale: Declared scale (default: fractional digit count of text)

    Returns:
        Parsed Decimal
    """
    return Decimal.from_text(text, precision, scale)


# Short alias used throughout the tests
D = make_decimal


def clamping_config(**overrides: int) -> DecimalConfig:
    """DecimalConfig with result clamping enabled."""
    return DecimalConfig(clamp_results=True, **overrides)
