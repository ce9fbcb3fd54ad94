#!/usr/bin/env python3
"""
Simulation configuration.

Defaults come from constants.py. A JSON file can override any of them:
{
  "gravity": 9.81,
  "dt": 0.01,
  "path_limit": 2000,
  "segment_length": 0.7,
  "segment_mass": 1.0,
  "initial_segments": 1,
  "anchor": [0.0, 0.5],
  "append_anchor": [0.0, 0.75]
}
Unknown keys are ignored with a warning. Invalid values raise ConfigurationError so a
bad file is reported at startup rather than turning into NaN angles later.
"""
import json
import logging
import math
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Optional, Tuple

from .constants import (
    ANCHOR,
    APPEND_ANCHOR,
    DT,
    G,
    INITIAL_LENGTH,
    INITIAL_MASS,
    PATH_LIMIT,
)
from .data_models import require_positive
from .errors import ConfigurationError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationConfig:
    gravity: float = G
    dt: float = DT
    path_limit: int = PATH_LIMIT
    segment_length: float = INITIAL_LENGTH
    segment_mass: float = INITIAL_MASS
    initial_segments: int = 1
    anchor: Tuple[float, float] = ANCHOR
    append_anchor: Tuple[float, float] = APPEND_ANCHOR

    def __post_init__(self):
        gravity = float(self.gravity)
        if not math.isfinite(gravity):
            raise ConfigurationError(f"gravity must be finite, got {self.gravity!r}")
        object.__setattr__(self, "gravity", gravity)
        object.__setattr__(self, "dt", require_positive("dt", self.dt))
        object.__setattr__(self, "segment_length", require_positive("segment_length", self.segment_length))
        object.__setattr__(self, "segment_mass", require_positive("segment_mass", self.segment_mass))
        object.__setattr__(self, "path_limit", _positive_int("path_limit", self.path_limit))
        object.__setattr__(self, "initial_segments", _positive_int("initial_segments", self.initial_segments))
        object.__setattr__(self, "anchor", _point("anchor", self.anchor))
        object.__setattr__(self, "append_anchor", _point("append_anchor", self.append_anchor))

    def with_overrides(self, **overrides: Any) -> "SimulationConfig":
        """Copy with the non-None overrides applied (used for command-line flags)."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def _positive_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be an integer >= 1, got {value!r}")
    try:
        as_int = int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} must be an integer >= 1, got {value!r}") from None
    if as_int != value or as_int < 1:
        raise ConfigurationError(f"{name} must be an integer >= 1, got {value!r}")
    return as_int


def _point(name: str, value: Any) -> Tuple[float, float]:
    try:
        x, y = float(value[0]), float(value[1])
    except (TypeError, ValueError, IndexError):
        raise ConfigurationError(f"{name} must be an [x, y] pair, got {value!r}") from None
    if len(value) != 2 or not (math.isfinite(x) and math.isfinite(y)):
        raise ConfigurationError(f"{name} must be a finite [x, y] pair, got {value!r}")
    return (x, y)


def config_from_mapping(data: Mapping[str, Any]) -> SimulationConfig:
    known = {f.name for f in fields(SimulationConfig)}
    for key in data:
        if key not in known:
            log.warning("ignoring unknown config key %r", key)
    return SimulationConfig(**{k: v for k, v in data.items() if k in known})


def load_config(path: Optional[str] = None) -> SimulationConfig:
    """Load a config JSON file, or return the defaults when path is None."""
    if path is None:
        return SimulationConfig()
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as exc:
        raise ConfigurationError(f"cannot read config {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"config {path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"config {path} must contain a JSON object")
    config = config_from_mapping(data)
    log.info("loaded config from %s", path)
    return config
