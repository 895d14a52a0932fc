"""Configuration loading (YAML or JSON)."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict

import yaml

from oncall.domain.errors import ConfigurationError

MAX_SLOTS_PER_ROLE = 10


def clamp_count(value: int) -> int:
    """Clamp a per-day slot count to [0, 10]."""
    return max(0, min(MAX_SLOTS_PER_ROLE, int(value)))


@dataclass
class CostWeights:
    count_weight: int = 1000
    at_min_penalty: int = 500
    at_max_penalty: int = 100000
    preferred_bonus: int = -5
    not_preferred_penalty: int = 10
    weekend_tiebreak: int = 2
    same_day_penalty: int = 1000000


@dataclass
class SchedulerConfig:
    """Business rules for a scheduling run."""

    primary_count: int = 1
    secondary_count: int = 1
    shift_start: str = "20:00"  # HH:MM, local
    team_name: str = "RAOD"
    max_swap_passes: int = 100
    swap_improvement_threshold: int = 20
    max_balance_iterations: int = 500
    weights: CostWeights = field(default_factory=CostWeights)

    def __post_init__(self):
        self.primary_count = clamp_count(self.primary_count)
        self.secondary_count = clamp_count(self.secondary_count)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SchedulerConfig":
        data = dict(data or {})
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(f"Unknown config keys: {', '.join(sorted(unknown))}")

        weights_data = data.pop("weights", None) or {}
        weight_keys = {f.name for f in fields(CostWeights)}
        unknown = set(weights_data) - weight_keys
        if unknown:
            raise ConfigurationError(f"Unknown weight keys: {', '.join(sorted(unknown))}")

        return cls(weights=CostWeights(**weights_data), **data)


def load_config(path: str | Path) -> SchedulerConfig:
    """
    Load a SchedulerConfig from a YAML or JSON file.

    Args:
        path: ``.yaml``/``.yml`` or ``.json`` file

    Returns:
        SchedulerConfig with file values over the defaults
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        data = json.loads(text) if text.strip() else {}
    else:
        data = yaml.safe_load(text) or {}

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")
    return SchedulerConfig.from_dict(data)
