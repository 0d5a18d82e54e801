"""Tests for rounding strategies and precision fitting."""

import pytest

from fixed_decimal.errors import PrecisionExceededError
from fixed_decimal.math.rounding import (
    RoundingMode,
    ceil_round,
    fit_to_precision,
    floor_round,
    round_half_up,
    round_to_scale,
)


class TestRoundHalfUp:
    """Tests for round_half_up."""

    def test_tie_rounds_away_from_zero_positive(self):
        """123.455 -> 123.46."""
        assert round_half_up(123455, 3, 2) == 12346

    def test_tie_rounds_away_from_zero_negative(self):
        """-123.455 -> -123.46."""
        assert round_half_up(-123455, 3, 2) == -12346

    def test_below_half_rounds_toward_zero(self):
        """123.454 -> 123.45."""
        assert round_half_up(123454, 3, 2) == 12345
        assert round_half_up(-123454, 3, 2) == -12345

    def test_single_digit_tie(self):
        """12.5 -> 13 and -12.5 -> -13."""
        assert round_half_up(125, 1, 0) == 13
        assert round_half_up(-125, 1, 0) == -13

    def test_carry_into_new_digit(self):
        """9.995 -> 10.00."""
        assert round_half_up(9995, 3, 2) == 1000

    def test_higher_target_pads_zeros(self):
        """Rounding to more fractional digits is exact padding."""
        assert round_half_up(12, 1, 3) == 1200

    def test_same_scale_is_identity(self):
        """Equal scales return the coefficient unchanged."""
        assert round_half_up(-777, 2, 2) == -777


class TestCeilRound:
    """Tests for ceil_round."""

    def test_positive_with_remainder_bumps(self):
        """12.1 -> 13."""
        assert ceil_round(121, 1, 0) == 13

    def test_positive_without_remainder_unchanged(self):
        """12.0 -> 12."""
        assert ceil_round(120, 1, 0) == 12

    def test_negative_moves_toward_zero(self):
        """-12.9 -> -12."""
        assert ceil_round(-129, 1, 0) == -12

    def test_higher_target_pads_zeros(self):
        """Padding is exact for ceiling too."""
        assert ceil_round(-5, 0, 2) == -500


class TestFloorRound:
    """Tests for floor_round."""

    def test_positive_truncates(self):
        """12.9 -> 12."""
        assert floor_round(129, 1, 0) == 12

    def test_negative_with_remainder_lowers(self):
        """-12.1 -> -13."""
        assert floor_round(-121, 1, 0) == -13

    def test_negative_without_remainder_unchanged(self):
        """-12.0 -> -12."""
        assert floor_round(-120, 1, 0) == -12

    def test_higher_target_pads_zeros(self):
        """Padding is exact for floor too."""
        assert floor_round(7, 1, 4) == 7000


class TestRoundToScale:
    """Tests for round_to_scale dispatch."""

    @pytest.mark.parametrize(
        "mode,expected",
        [
            (RoundingMode.HALF_UP, -12),
            (RoundingMode.CEILING, -12),
            (RoundingMode.FLOOR, -13),
            ("round", -12),
            ("ceil", -12),
            ("floor", -13),
        ],
    )
    def test_dispatch(self, mode, expected):
        """Modes (enum or string value) select the matching strategy."""
        assert round_to_scale(-124, 1, 0, mode) == expected

    def test_unknown_mode_raises(self):
        """Unknown mode names are rejected."""
        with pytest.raises(ValueError):
            round_to_scale(1, 1, 0, "banker")

    @pytest.mark.parametrize("strategy", [round_half_up, ceil_round, floor_round])
    def test_negative_scale_raises(self, strategy):
        """Every strategy rejects negative scales."""
        with pytest.raises(ValueError, match="non-negative"):
            strategy(1, -1, 0)
        with pytest.raises(ValueError, match="non-negative"):
            strategy(1, 0, -1)


class TestFitToPrecision:
    """Tests for fit_to_precision."""

    def test_drops_fractional_digits(self):
        """123.456 in precision 5 -> 123.46."""
        assert fit_to_precision(123456, 5, 3) == (12346, 2)

    def test_negative_value(self):
        """-123.456 in precision 5 -> -123.46."""
        assert fit_to_precision(-123456, 5, 3) == (-12346, 2)

    def test_already_fits(self):
        """A fitting coefficient is returned unchanged."""
        assert fit_to_precision(12345, 5, 2) == (12345, 2)

    def test_floor_mode(self):
        """The rounding mode applies to discarded digits."""
        assert fit_to_precision(123456, 5, 3, RoundingMode.FLOOR) == (12345, 2)

    def test_integer_digits_never_dropped(self):
        """1234.56 cannot fit precision 3."""
        with pytest.raises(PrecisionExceededError):
            fit_to_precision(123456, 3, 2)

    def test_rounding_carry_overflow(self):
        """999.9 rounds to 1000, which does not fit precision 3."""
        with pytest.raises(PrecisionExceededError, match="carry"):
            fit_to_precision(9999, 3, 1)

    def test_scale_capped_at_precision(self):
        """0.056088 in precision 3 -> 0.056, scale never above precision."""
        assert fit_to_precision(56088, 3, 6) == (56, 3)

    def test_max_scale_cap(self):
        """max_scale limits the result scale in a single rounding step."""
        assert fit_to_precision(44951, 5, 5, max_scale=2) == (45, 2)
        assert fit_to_precision(44949, 5, 5, max_scale=1) == (4, 1)

    def test_carry_with_fraction_room(self):
        """99.996 in precision 4 carries to 100.0 instead of failing."""
        assert fit_to_precision(99996, 4, 3) == (1000, 1)
        assert fit_to_precision(-99996, 4, 3) == (-1000, 1)

    def test_zero_with_large_scale(self):
        """Zero fits any precision once the scale is capped."""
        assert fit_to_precision(0, 2, 6) == (0, 2)
