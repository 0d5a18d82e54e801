"""Engine configuration for decimal arithmetic."""

import os
from dataclasses import dataclass

# SQL Server compatible system limits
DEFAULT_MAX_PRECISION = 38
DEFAULT_MAX_SCALE = 38

# Minimum result scale for division (SQL Server / T-SQL convention)
DEFAULT_DIVISION_MIN_SCALE = 6

# Upper bound on long division steps spent looking for a repeating cycle
DEFAULT_MAX_REPEATING_ITERATIONS = 1000

_ENV_PREFIX = "FIXED_DECIMAL_"


@dataclass(frozen=True)
class DecimalConfig:
    """Centralized configuration for result shape derivation.

    Holds the system limits and behavior flags used when arithmetic derives
    the (precision, scale) of a result. Passing a custom instance makes it
    easy to test different RDBMS conventions.

    Attributes:
        max_precision: Precision cap applied when clamping (default: 38)
        max_scale: Scale cap applied when clamping (default: 38)
        division_min_scale: Minimum scale of a division result (default: 6)
        max_repeating_iterations: Long division steps spent looking for a
            repeating cycle before giving up (default: 1000)
        clamp_results: If True, arithmetic results are clamped to
            max_precision/max_scale. If False (default), precision grows
            without a ceiling.
    """

    max_precision: int = DEFAULT_MAX_PRECISION
    max_scale: int = DEFAULT_MAX_SCALE
    division_min_scale: int = DEFAULT_DIVISION_MIN_SCALE
    max_repeating_iterations: int = DEFAULT_MAX_REPEATING_ITERATIONS
    clamp_results: bool = False

    def __post_init__(self) -> None:
        if self.max_precision < 1:
            raise ValueError(f"max_precision must be positive, got {self.max_precision}")
        if self.max_scale < 0:
            raise ValueError(f"max_scale must be non-negative, got {self.max_scale}")
        if self.division_min_scale < 0:
            raise ValueError(
                f"division_min_scale must be non-negative, got {self.division_min_scale}"
            )
        if self.max_repeating_iterations < 0:
            raise ValueError(
                "max_repeating_iterations must be non-negative, "
                f"got {self.max_repeating_iterations}"
            )


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(_ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as err:
        raise ValueError(f"{_ENV_PREFIX}{name} must be an integer: '{raw}'") from err


def load_config_from_env() -> DecimalConfig:
    """Build a DecimalConfig from environment variables.

    Configuration via environment variables:
    - FIXED_DECIMAL_MAX_PRECISION: Precision cap (default: 38)
    - FIXED_DECIMAL_MAX_SCALE: Scale cap (default: 38)
    - FIXED_DECIMAL_DIVISION_MIN_SCALE: Minimum division scale (default: 6)
    - FIXED_DECIMAL_MAX_REPEATING_ITERATIONS: Cycle detection cap (default: 1000)
    - FIXED_DECIMAL_CLAMP_RESULTS: Clamp arithmetic results (default: false)
    """
    clamp = os.environ.get(_ENV_PREFIX + "CLAMP_RESULTS", "false").lower() in ("true", "1", "yes")
    return DecimalConfig(
        max_precision=_env_int("MAX_PRECISION", DEFAULT_MAX_PRECISION),
        max_scale=_env_int("MAX_SCALE", DEFAULT_MAX_SCALE),
        division_min_scale=_env_int("DIVISION_MIN_SCALE", DEFAULT_DIVISION_MIN_SCALE),
        max_repeating_iterations=_env_int(
            "MAX_REPEATING_ITERATIONS", DEFAULT_MAX_REPEATING_ITERATIONS
        ),
        clamp_results=clamp,
    )


# Default configuration instance
DEFAULT_DECIMAL_CONFIG = DecimalConfig()
