#!/usr/bin/env python3
"""
Vector helper functions for 2D points.
"""
import math
from typing import Tuple

Point = Tuple[float, float]


def clamp(x: float, a: float, b: float) -> float:
    """Clamp x to the inclusive range [a, b]."""
    return max(a, min(b, x))


def polar_offset(origin: Point, length: float, theta: float) -> Point:
    """Point hanging ``length`` below origin, rotated by theta from the downward vertical."""
    return (origin[0] + length * math.sin(theta), origin[1] - length * math.cos(theta))
