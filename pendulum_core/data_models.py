#!/usr/bin/env python3
"""
Data models for the Pendulum Chain simulator.

This module defines the records shared between physics, rendering, and UI.

Units and usage
- length is in meters [m], mass in kilograms [kg].
- theta is measured from the downward vertical in radians, omega in rad/s.
- Segment is immutable once created; the changing angle state lives in ChainState.
"""
import math
from dataclasses import dataclass

from .errors import ConfigurationError


def require_positive(name: str, value: float) -> float:
    """Return value as float, raising ConfigurationError unless it is finite and > 0."""
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from None
    if not math.isfinite(value) or value <= 0.0:
        raise ConfigurationError(f"{name} must be positive and finite, got {value!r}")
    return value


@dataclass(frozen=True)
class Segment:
    """
    Static parameters of one rigid link in the chain.

    Fields:
    - length: Link length in meters (> 0)
    - mass: Bob mass in kilograms (> 0); only the coupled pairwise formula reads it
    """
    length: float
    mass: float

    def __post_init__(self):
        object.__setattr__(self, "length", require_positive("length", self.length))
        object.__setattr__(self, "mass", require_positive("mass", self.mass))


@dataclass(frozen=True)
class SegmentState:
    """Read-only snapshot of one segment handed to renderers and UI."""
    length: float
    mass: float
    theta: float
    omega: float
