#!/usr/bin/env python3
"""
Bounded FIFO history of terminal-tip positions used to draw the recent path.
"""
from collections import deque
from typing import Deque, Iterator, List

from .constants import PATH_LIMIT
from .errors import ConfigurationError
from .vector_utils import Point


class TrailBuffer:
    """
    Keeps at most ``capacity`` points; appending to a full buffer evicts the oldest one.
    """

    def __init__(self, capacity: int = PATH_LIMIT):
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 1:
            raise ConfigurationError(f"trail capacity must be a positive integer, got {capacity!r}")
        self._points: Deque[Point] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._points.maxlen

    def append(self, point: Point) -> None:
        self._points.append((float(point[0]), float(point[1])))

    def clear(self) -> None:
        self._points.clear()

    def snapshot(self) -> List[Point]:
        """Copy of the points, oldest first."""
        return list(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self._points)
