"""Runtime configuration model for LedgerLens.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field

from core.constants import (
    DEFAULT_DIRECTORY_MARKER,
    DEFAULT_HOT_COLUMN_RATIO,
    DEFAULT_IQR_MULTIPLIER,
    DEFAULT_MIN_IQR_GROUP_SIZE,
    DEFAULT_MIN_ZSCORE_GROUP_SIZE,
    DEFAULT_OUTLIER_THRESHOLD,
    DEFAULT_ZSCORE_THRESHOLD,
)
from core.errors import LedgerLensConfigError
from core.verification_types import VerificationThresholds


@dataclass(frozen=True)
class LedgerLensConfig:
    """Validated runtime configuration.

    Attributes:
        directory_marker: Case-insensitive label fragment marking the
            company directory batch.
        thresholds: Verification limits applied by default.
    """

    directory_marker: str = DEFAULT_DIRECTORY_MARKER
    thresholds: VerificationThresholds = field(default_factory=VerificationThresholds)

    @classmethod
    def from_env(cls) -> "LedgerLensConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            LedgerLensConfigError: If environment values are invalid.
        """
        marker = os.getenv("LEDGERLENS_DIRECTORY_MARKER", DEFAULT_DIRECTORY_MARKER).strip()
        if not marker:
            raise LedgerLensConfigError(
                "Invalid LEDGERLENS_DIRECTORY_MARKER value: expected a non-empty string. "
                "Unset it to use the default 'sociedad' marker."
            )
        thresholds = VerificationThresholds(
            outlier_threshold=_parse_positive_float(
                "LEDGERLENS_OUTLIER_THRESHOLD", DEFAULT_OUTLIER_THRESHOLD
            ),
            hot_column_ratio=_parse_ratio("LEDGERLENS_HOT_COLUMN_RATIO", DEFAULT_HOT_COLUMN_RATIO),
            iqr_multiplier=_parse_positive_float(
                "LEDGERLENS_IQR_MULTIPLIER", DEFAULT_IQR_MULTIPLIER
            ),
            zscore_threshold=_parse_positive_float(
                "LEDGERLENS_ZSCORE_THRESHOLD", DEFAULT_ZSCORE_THRESHOLD
            ),
            min_iqr_group_size=_parse_group_size(
                "LEDGERLENS_MIN_IQR_GROUP_SIZE", DEFAULT_MIN_IQR_GROUP_SIZE
            ),
            min_zscore_group_size=_parse_group_size(
                "LEDGERLENS_MIN_ZSCORE_GROUP_SIZE", DEFAULT_MIN_ZSCORE_GROUP_SIZE
            ),
        )
        return cls(directory_marker=marker, thresholds=thresholds)


def _parse_positive_float(env_name: str, default: float) -> float:
    """Parse a strictly positive float environment value.

    Args:
        env_name: Environment variable name.
        default: Value used when the variable is unset.

    Returns:
        Parsed float.

    Raises:
        LedgerLensConfigError: If value is not a finite positive number.
    """
    raw_value = os.getenv(env_name)
    if raw_value is None:
        return default
    try:
        value = float(raw_value)
    except ValueError as error:
        raise LedgerLensConfigError(
            f"Invalid {env_name} value: expected number, got '{raw_value}'. "
            f"Set {env_name} to a positive numeric value."
        ) from error
    if not math.isfinite(value) or value <= 0:
        raise LedgerLensConfigError(
            f"Invalid {env_name} value: expected a finite positive number, got '{raw_value}'."
        )
    return value


def _parse_ratio(env_name: str, default: float) -> float:
    value = _parse_positive_float(env_name, default)
    if value > 1:
        raise LedgerLensConfigError(
            f"Invalid {env_name} value: expected a ratio in (0, 1], got {value}."
        )
    return value


def _parse_group_size(env_name: str, default: int) -> int:
    raw_value = os.getenv(env_name)
    if raw_value is None:
        return default
    try:
        value = int(raw_value)
    except ValueError as error:
        raise LedgerLensConfigError(
            f"Invalid {env_name} value: expected integer, got '{raw_value}'. "
            f"Set {env_name} to a whole number of samples."
        ) from error
    if value < 1:
        raise LedgerLensConfigError(
            f"Invalid {env_name} value: expected at least 1 sample, got {value}."
        )
    return value
