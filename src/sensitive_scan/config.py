"""YAML/dict config loader for sensitive-scan.

Supports loading from a YAML file or a plain dict (for embedding in a
larger service config).

Example YAML:

    sensitive_scan:
      block_threshold: 50
      email_weight: 15
      weights:
        structured: {high: 30, medium: 15, low: 5}
        keyword: {high: 25, medium: 15, low: 5}
      keywords_enabled: true
      max_input_length: 100000
      max_matches_per_rule: 1000
      rule_time_budget: 0.25
      skip_types:
        - ipAddress
      allow_list:
        - support@example.com
      extra_rules:
        - type_id: employeeBadge
          pattern: "\\bEMP-\\d{6}\\b"
          severity: medium
          suggestion: Employee badge number detected
          priority: contextual_id
"""

from __future__ import annotations
from pathlib import Path
from typing import Any

import regex

from . import scoring
from .detector import (
    DEFAULT_MAX_INPUT_LENGTH,
    Detector,
    DetectorConfig,
)
from .errors import ConfigError
from .scanner import DEFAULT_MAX_MATCHES, DEFAULT_TIME_BUDGET
from .types import DetectionRule, Priority, Severity


def _severity(value: Any) -> Severity:
    try:
        return Severity(str(value).lower())
    except ValueError:
        raise ConfigError(f"unknown severity: {value!r}") from None


def _integer(data: dict, key: str, default: int) -> int:
    value = data.get(key, default)
    if not isinstance(value, int) or isinstance(value, bool):
        raise ConfigError(f"{key} must be an integer, got {value!r}")
    return value


def _seconds(data: dict, key: str, default: float) -> float:
    value = data.get(key, default)
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise ConfigError(f"{key} must be a number of seconds, got {value!r}")
    return float(value)


def _flag(data: dict, key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"{key} must be true or false, got {value!r}")
    return value


def _strings(data: dict, key: str) -> set[str]:
    values = data.get(key) or []
    if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
        raise ConfigError(f"{key} must be a list of strings, got {values!r}")
    return set(values)


def _weights(data: dict | None, defaults: dict[Severity, int]) -> dict[Severity, int]:
    weights = dict(defaults)
    for key, value in (data or {}).items():
        if not isinstance(value, int) or isinstance(value, bool):
            raise ConfigError(f"weight for {key!r} must be an integer, got {value!r}")
        weights[_severity(key)] = value
    return weights


def _extra_rule(entry: dict[str, Any]) -> DetectionRule:
    try:
        type_id = entry["type_id"]
        source = entry["pattern"]
    except KeyError as e:
        raise ConfigError(f"extra rule missing {e.args[0]!r}: {entry!r}") from None

    flags = regex.IGNORECASE if entry.get("ignore_case", False) else 0
    try:
        pattern = regex.compile(source, flags)
    except (regex.error, TypeError) as e:
        raise ConfigError(f"extra rule {type_id!r} has a bad pattern: {e}") from None

    priority_name = str(entry.get("priority", "structured")).upper()
    try:
        priority = Priority[priority_name]
    except KeyError:
        raise ConfigError(f"extra rule {type_id!r} has unknown priority {priority_name!r}") from None

    return DetectionRule(
        type_id=type_id,
        pattern=pattern,
        severity=_severity(entry.get("severity", "medium")),
        suggestion=entry.get("suggestion", f"{type_id} detected"),
        priority=priority,
    )


def load_config(data: dict[str, Any]) -> dict[str, Any]:
    """Normalize a config dict (from YAML or inline).

    Raises ConfigError for values of the wrong type.
    """
    # Support nested under "sensitive_scan" key or flat
    if "sensitive_scan" in data:
        data = data["sensitive_scan"] or {}
    if not isinstance(data, dict):
        raise ConfigError(f"config must be a mapping, got {type(data).__name__}")

    weights = data.get("weights", {}) or {}
    extra_rules = data.get("extra_rules", []) or []
    if not isinstance(extra_rules, list) or not all(isinstance(r, dict) for r in extra_rules):
        raise ConfigError("extra_rules must be a list of mappings")
    return {
        "block_threshold": _integer(data, "block_threshold", scoring.BLOCK_THRESHOLD),
        "email_weight": _integer(data, "email_weight", scoring.EMAIL_WEIGHT),
        "structured_weights": _weights(weights.get("structured"), dict(scoring.STRUCTURED_WEIGHTS)),
        "keyword_weights": _weights(weights.get("keyword"), dict(scoring.KEYWORD_WEIGHTS)),
        "keywords_enabled": _flag(data, "keywords_enabled", True),
        "max_input_length": _integer(data, "max_input_length", DEFAULT_MAX_INPUT_LENGTH),
        "max_matches_per_rule": _integer(data, "max_matches_per_rule", DEFAULT_MAX_MATCHES),
        "rule_time_budget": _seconds(data, "rule_time_budget", DEFAULT_TIME_BUDGET),
        "skip_types": _strings(data, "skip_types"),
        "allow_list": _strings(data, "allow_list"),
        "extra_rules": [_extra_rule(r) for r in extra_rules],
    }


def load_from_yaml(path: str | Path) -> dict[str, Any]:
    """Load config from a YAML file."""
    import yaml
    with open(path) as f:
        return load_config(yaml.safe_load(f) or {})


def create_detector(config: dict[str, Any] | None = None) -> Detector:
    """Create a fully configured detector from a config dict."""
    config = config or {}
    # Already normalized dicts carry "structured_weights"; raw ones use "weights"
    cfg = config if "structured_weights" in config else load_config(config)
    return Detector(DetectorConfig(**cfg))
