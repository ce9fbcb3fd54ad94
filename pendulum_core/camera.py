#!/usr/bin/env python3
"""
Camera utilities for 2D world-to-screen transforms.

World space is y-up with the origin at the viewport center; screen space is pygame's
y-down pixel grid.
"""
from typing import Optional, Tuple

from .constants import VIEW_EXTENT, VIEW_HEIGHT, VIEW_WIDTH
from .vector_utils import clamp

MIN_UNITS_PER_PIXEL = 1e-4
MAX_UNITS_PER_PIXEL = 0.1


class Camera2D:
    """
    Maps world coordinates to screen pixels.

    The default zoom fits [-VIEW_EXTENT, VIEW_EXTENT] across the shorter viewport side.
    """

    def __init__(self, center=(0.0, 0.0), viewport_size=(VIEW_WIDTH, VIEW_HEIGHT)):
        self.center = [center[0], center[1]]
        self.viewport_size = (viewport_size[0], viewport_size[1])
        self.upp = self.fit_units_per_pixel()

    def fit_units_per_pixel(self) -> float:
        return 2.0 * VIEW_EXTENT / max(1, min(self.viewport_size))

    def set_viewport_size(self, w: int, h: int) -> None:
        """Resize, keeping the current zoom relative to the fitted view."""
        zoom = self.upp / self.fit_units_per_pixel()
        self.viewport_size = (w, h)
        self.upp = clamp(self.fit_units_per_pixel() * zoom, MIN_UNITS_PER_PIXEL, MAX_UNITS_PER_PIXEL)

    def world_to_screen(self, pos: Tuple[float, float]) -> Tuple[int, int]:
        cx, cy = self.center
        px = (pos[0] - cx) / self.upp + self.viewport_size[0] / 2
        py = (cy - pos[1]) / self.upp + self.viewport_size[1] / 2
        return (int(round(px)), int(round(py)))

    def screen_to_world(self, screen: Tuple[int, int]) -> Tuple[float, float]:
        cx, cy = self.center
        wx = (screen[0] - self.viewport_size[0] / 2) * self.upp + cx
        wy = cy - (screen[1] - self.viewport_size[1] / 2) * self.upp
        return (wx, wy)

    def length_to_pixels(self, length: float) -> int:
        return max(1, int(round(length / self.upp)))

    def zoom(self, factor, pivot_screen: Optional[Tuple[int, int]] = None):
        factor = clamp(factor, 0.05, 20.0)
        before = None
        if pivot_screen is not None:
            before = self.screen_to_world(pivot_screen)
        self.upp = clamp(self.upp / factor, MIN_UNITS_PER_PIXEL, MAX_UNITS_PER_PIXEL)
        if before is not None:
            after = self.screen_to_world(pivot_screen)
            self.center[0] += (before[0] - after[0])
            self.center[1] += (before[1] - after[1])
