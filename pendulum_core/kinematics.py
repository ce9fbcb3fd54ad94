#!/usr/bin/env python3
"""
Forward kinematics for the pendulum chain.

Each tip is found from the previous one (the anchor for segment 0):
    x_i = x_{i-1} + L_i * sin(theta_i)
    y_i = y_{i-1} - L_i * cos(theta_i)
World y points up. All functions here are pure and O(n).
"""
from typing import List

from .chain_state import ChainState
from .constants import ANCHOR
from .vector_utils import Point, polar_offset


def compute_tip_positions(chain: ChainState, anchor: Point = ANCHOR) -> List[Point]:
    """Return the world-space tip of every segment, in chain order."""
    tips: List[Point] = []
    prev = (float(anchor[0]), float(anchor[1]))
    for seg, th in zip(chain.segments, chain.theta):
        prev = polar_offset(prev, seg.length, th)
        tips.append(prev)
    return tips


def terminal_tip(chain: ChainState, anchor: Point = ANCHOR) -> Point:
    """Tip of the last segment; this is the point traced into the trail."""
    return compute_tip_positions(chain, anchor)[-1]
