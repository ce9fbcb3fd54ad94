#!/usr/bin/env python3
"""
Chain state storage: the segments plus their parallel angle and velocity lists.

Index 0 hangs from the anchor; index i hangs from the tip of index i - 1. The three
lists always have the same length and are never empty. Only the integrator writes
theta/omega and only the chain editor resizes the lists.
"""
import math
from typing import List

from .constants import INITIAL_LENGTH, INITIAL_MASS, FIRST_THETA, FIRST_OMEGA
from .data_models import Segment, SegmentState
from .errors import ConfigurationError, PendulumError


class ChainState:
    """
    Ordered segments with index-aligned theta (rad) and omega (rad/s) lists.

    The integrator reads and writes ``theta``/``omega`` directly for speed; structural
    changes go through push_segment/pop_segment so the lists cannot drift apart.
    """

    def __init__(self, first: Segment, theta: float = FIRST_THETA, omega: float = FIRST_OMEGA):
        self.segments: List[Segment] = []
        self.theta: List[float] = []
        self.omega: List[float] = []
        self.push_segment(first, theta, omega)

    @classmethod
    def initial(cls) -> "ChainState":
        """A single segment started inverted with a small angular velocity."""
        return cls(Segment(INITIAL_LENGTH, INITIAL_MASS), FIRST_THETA, FIRST_OMEGA)

    def __len__(self) -> int:
        return len(self.segments)

    @property
    def count(self) -> int:
        return len(self.segments)

    def length(self, i: int) -> float:
        return self.segments[i].length

    def mass(self, i: int) -> float:
        return self.segments[i].mass

    def push_segment(self, segment: Segment, theta: float, omega: float) -> None:
        """Append one segment and its initial angle state at the end of the chain."""
        theta = float(theta)
        omega = float(omega)
        if not (math.isfinite(theta) and math.isfinite(omega)):
            raise ConfigurationError(f"initial theta/omega must be finite, got {theta!r}/{omega!r}")
        self.segments.append(segment)
        self.theta.append(theta)
        self.omega.append(omega)

    def pop_segment(self) -> Segment:
        """Remove and return the terminal segment. The first segment cannot be removed."""
        if len(self.segments) <= 1:
            raise PendulumError("the first segment cannot be removed")
        self.theta.pop()
        self.omega.pop()
        return self.segments.pop()

    def snapshot(self) -> List[SegmentState]:
        return [
            SegmentState(seg.length, seg.mass, th, om)
            for seg, th, om in zip(self.segments, self.theta, self.omega)
        ]
