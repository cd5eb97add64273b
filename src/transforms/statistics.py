"""Descriptive statistics used by anomaly checks.

Quartiles use linear interpolation between closest ranks, and the
standard deviation is the population form (divide by n).
"""

from __future__ import annotations

import math
from typing import Sequence


def quantile(sorted_values: Sequence[float], probability: float) -> float:
    """Interpolated quantile of an ascending sample.

    Args:
        sorted_values: Sample sorted ascending.
        probability: Quantile position in [0, 1].

    Returns:
        Quantile value, ``0.0`` for an empty sample.
    """
    if not sorted_values:
        return 0.0
    position = (len(sorted_values) - 1) * probability
    lower = math.floor(position)
    upper = math.ceil(position)
    if lower == upper:
        return sorted_values[lower]
    weight = position - lower
    return sorted_values[lower] + (sorted_values[upper] - sorted_values[lower]) * weight


def iqr_bounds(values: Sequence[float], multiplier: float) -> tuple[float, float]:
    """Return ``(Q1 - k*IQR, Q3 + k*IQR)`` for a sample."""
    ordered = sorted(values)
    first_quartile = quantile(ordered, 0.25)
    third_quartile = quantile(ordered, 0.75)
    spread = third_quartile - first_quartile
    return first_quartile - multiplier * spread, third_quartile + multiplier * spread


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean, ``0.0`` for an empty sample."""
    if not values:
        return 0.0
    return math.fsum(values) / len(values)


def population_stdev(values: Sequence[float]) -> float:
    """Population standard deviation, ``0.0`` below two samples."""
    if len(values) < 2:
        return 0.0
    center = mean(values)
    return math.sqrt(math.fsum((value - center) ** 2 for value in values) / len(values))


def z_score(value: float, center: float, spread: float) -> float | None:
    """Absolute z-score, or ``None`` when the spread is zero."""
    if spread <= 0:
        return None
    return abs(value - center) / spread
