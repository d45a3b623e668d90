# -------------------------------------
# expansion configuration
# -------------------------------------
"""
Numeric limits that bound an expansion.

Defaults:
  max_bracket_options = 10    hard cap on options in one [ ... ] group
  max_preview         = 5     units shown in a preview
  warn_threshold      = 50    combinations above this get a warning
  danger_threshold    = 100   combinations above this get a danger warning
  max_pipeline_steps  = 15    hard cap on | separated steps

Configs load from YAML (optionally nested under an `expansion:` key).
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError


@dataclass(frozen=True)
class ExpansionConfig:
    max_bracket_options: int = 10
    max_preview: int = 5
    warn_threshold: int = 50
    danger_threshold: int = 100
    max_pipeline_steps: int = 15
    trim_whitespace: bool = True
    # thresholds become hard limits (OVERFLOW) instead of warnings
    enforce_thresholds: bool = False
    per_unit_cost: float | None = None

    def replace(self, **changes: Any) -> ExpansionConfig:
        return config_from_mapping({**dataclasses.asdict(self), **changes})


DEFAULT_CONFIG = ExpansionConfig()

_INT_FIELDS = (
    "max_bracket_options",
    "max_preview",
    "warn_threshold",
    "danger_threshold",
    "max_pipeline_steps",
)
_BOOL_FIELDS = ("trim_whitespace", "enforce_thresholds")

_ALIASES = {
    "maxBracketOptions": "max_bracket_options",
    "maxOptions": "max_bracket_options",
    "maxPreview": "max_preview",
    "warnThreshold": "warn_threshold",
    "dangerThreshold": "danger_threshold",
    "maxPipelineSteps": "max_pipeline_steps",
    "trimWhitespace": "trim_whitespace",
    "enforceThresholds": "enforce_thresholds",
    "perUnitCost": "per_unit_cost",
}


def config_from_mapping(data: dict[str, Any] | None) -> ExpansionConfig:
    """
    Build a validated ExpansionConfig from a plain dict.

    Unknown keys, non-positive limits and warn_threshold > danger_threshold
    raise ConfigError. per_unit_cost may be a number or an arithmetic string.
    """
    if data is None:
        return DEFAULT_CONFIG
    if not isinstance(data, dict):
        raise ConfigError(f"config must be a mapping, got {type(data).__name__}")

    known = {f.name for f in dataclasses.fields(ExpansionConfig)}
    values: dict[str, Any] = {}
    for raw_key, value in data.items():
        key = _ALIASES.get(str(raw_key), str(raw_key))
        if key not in known:
            raise ConfigError(f"unknown config key: {raw_key!r}")
        values[key] = value

    for key in _INT_FIELDS:
        if key not in values:
            continue
        v = values[key]
        if isinstance(v, bool) or not isinstance(v, int):
            raise ConfigError(f"{key} must be an integer, got {v!r}")
        if v < 1:
            raise ConfigError(f"{key} must be >= 1, got {v}")

    for key in _BOOL_FIELDS:
        if key in values and not isinstance(values[key], bool):
            raise ConfigError(f"{key} must be true or false, got {values[key]!r}")

    if values.get("per_unit_cost") is not None:
        from .cost import parse_cost

        values["per_unit_cost"] = parse_cost(values["per_unit_cost"])

    cfg = ExpansionConfig(**values)
    if cfg.warn_threshold > cfg.danger_threshold:
        raise ConfigError(
            f"warn_threshold ({cfg.warn_threshold}) must not exceed "
            f"danger_threshold ({cfg.danger_threshold})"
        )
    return cfg


def load_config(path: str | Path) -> ExpansionConfig:
    """
    Load an ExpansionConfig from a YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        yaml.YAMLError: If the file is not valid YAML
        ConfigError: If the values are not a valid config
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return DEFAULT_CONFIG
    if isinstance(data, dict) and "expansion" in data:
        data = data["expansion"]
    return config_from_mapping(data)
