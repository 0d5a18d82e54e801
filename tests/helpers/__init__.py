"""Test helpers module for shared test utilities.

- factories: Decimal and config factory functions
"""

from tests.helpers.factories import D, clamping_config, make_decimal

__all__ = ["D", "make_decimal", "clamping_config"]
