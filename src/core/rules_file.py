"""Typed parsing for YAML verification rules files.

A rules file overrides verification thresholds and sign keywords
without code changes. The schema is strict so a misspelled key fails
loudly instead of being silently ignored.

Example::

    version: 1
    thresholds:
      outlier_threshold: 5.0e+9
      hot_column_ratio: 0.2
    keywords:
      revenue: [venta, ingres]
      expense: [gasto, compr]
"""

from __future__ import annotations

import math
from dataclasses import replace
from pathlib import Path
from typing import Mapping, cast

import yaml

from core.errors import LedgerLensRulesError
from core.verification_types import VerificationThresholds

SUPPORTED_RULES_VERSION = 1
_ROOT_KEYS = {"version", "thresholds", "keywords"}
_FLOAT_THRESHOLD_KEYS = {
    "outlier_threshold",
    "hot_column_ratio",
    "iqr_multiplier",
    "zscore_threshold",
}
_INT_THRESHOLD_KEYS = {"min_iqr_group_size", "min_zscore_group_size"}
_KEYWORD_FIELDS = {"revenue": "revenue_keywords", "expense": "expense_keywords"}


def load_verification_rules(
    rules_path: str,
    base: VerificationThresholds | None = None,
) -> VerificationThresholds:
    """Load a YAML rules file on top of base thresholds.

    Args:
        rules_path: File path to the YAML rules file.
        base: Thresholds to override, defaults when omitted.

    Returns:
        Thresholds with file overrides applied.

    Raises:
        LedgerLensRulesError: If the file is missing, unparsable, or invalid.
    """
    payload = _load_yaml_payload(rules_path)
    root = _expect_mapping(payload, "rules file root")
    unknown = sorted(set(root) - _ROOT_KEYS)
    if unknown:
        raise LedgerLensRulesError(
            f"Unsupported rules file keys: {', '.join(unknown)}. "
            f"Allowed keys: {', '.join(sorted(_ROOT_KEYS))}."
        )
    _validate_version(root.get("version", SUPPORTED_RULES_VERSION))
    thresholds = base or VerificationThresholds()
    overrides: dict[str, object] = {}
    if "thresholds" in root:
        overrides.update(_parse_thresholds(root["thresholds"]))
    if "keywords" in root:
        overrides.update(_parse_keywords(root["keywords"]))
    return replace(thresholds, **overrides)  # type: ignore[arg-type]


def _load_yaml_payload(rules_path: str) -> object:
    rules_file = Path(rules_path).expanduser().resolve()
    if not rules_file.exists():
        raise LedgerLensRulesError(
            f"Rules file does not exist at {rules_file}. Provide a valid YAML file path."
        )
    try:
        payload = cast(object, yaml.safe_load(rules_file.read_text(encoding="utf-8")))
    except OSError as error:
        raise LedgerLensRulesError(
            f"Failed to read rules file at {rules_file}: {error}. Check file permissions."
        ) from error
    except yaml.YAMLError as error:
        raise LedgerLensRulesError(
            f"Failed to parse YAML rules file at {rules_file}: {error}. Fix YAML syntax and retry."
        ) from error
    if payload is None:
        raise LedgerLensRulesError(f"Rules file at {rules_file} is empty.")
    return payload


def _expect_mapping(value: object, context: str) -> Mapping[str, object]:
    if not isinstance(value, Mapping):
        raise LedgerLensRulesError(
            f"Invalid {context}: expected mapping, got {type(value).__name__}."
        )
    for key in value:
        if not isinstance(key, str):
            raise LedgerLensRulesError(
                f"Invalid {context}: expected string keys, got {type(key).__name__}."
            )
    return cast(Mapping[str, object], value)


def _validate_version(raw_version: object) -> None:
    if raw_version != SUPPORTED_RULES_VERSION:
        raise LedgerLensRulesError(
            f"Unsupported rules file version {raw_version!r}. "
            f"Expected version: {SUPPORTED_RULES_VERSION}."
        )


def _parse_thresholds(raw_value: object) -> dict[str, object]:
    section = _expect_mapping(raw_value, "thresholds section")
    allowed = _FLOAT_THRESHOLD_KEYS | _INT_THRESHOLD_KEYS
    unknown = sorted(set(section) - allowed)
    if unknown:
        raise LedgerLensRulesError(
            f"Unsupported threshold keys: {', '.join(unknown)}. "
            f"Allowed keys: {', '.join(sorted(allowed))}."
        )
    parsed: dict[str, object] = {}
    for key, value in section.items():
        if key in _INT_THRESHOLD_KEYS:
            parsed[key] = _parse_group_size(key, value)
        else:
            parsed[key] = _parse_positive_number(key, value)
    ratio = parsed.get("hot_column_ratio")
    if isinstance(ratio, float) and ratio > 1:
        raise LedgerLensRulesError(
            f"Invalid hot_column_ratio {ratio}: expected a ratio in (0, 1]."
        )
    return parsed


def _parse_positive_number(key: str, value: object) -> float:
    if isinstance(value, bool):
        raise LedgerLensRulesError(f"Invalid {key}: expected number, got boolean.")
    try:
        number = float(cast(float, value))
    except (TypeError, ValueError) as error:
        raise LedgerLensRulesError(f"Invalid {key}: expected number, got {value!r}.") from error
    if not math.isfinite(number) or number <= 0:
        raise LedgerLensRulesError(f"Invalid {key}: expected a finite positive number.")
    return number


def _parse_group_size(key: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise LedgerLensRulesError(f"Invalid {key}: expected an integer >= 1, got {value!r}.")
    return value


def _parse_keywords(raw_value: object) -> dict[str, tuple[str, ...]]:
    section = _expect_mapping(raw_value, "keywords section")
    unknown = sorted(set(section) - set(_KEYWORD_FIELDS))
    if unknown:
        raise LedgerLensRulesError(
            f"Unsupported keyword groups: {', '.join(unknown)}. Allowed: expense, revenue."
        )
    parsed: dict[str, tuple[str, ...]] = {}
    for group, keywords in section.items():
        if not isinstance(keywords, list) or not all(isinstance(item, str) for item in keywords):
            raise LedgerLensRulesError(f"Invalid keywords.{group}: expected a list of strings.")
        cleaned = tuple(item.strip().lower() for item in keywords if item.strip())
        parsed[_KEYWORD_FIELDS[group]] = cleaned
    return parsed
