#!/usr/bin/env python3
"""
Exception types raised by the simulation core.
"""


class PendulumError(Exception):
    """Base class for all errors raised by pendulum_core."""


class ConfigurationError(PendulumError, ValueError):
    """A segment, config value or tick input is outside its valid range."""


class DivergenceError(PendulumError):
    """A step produced non-finite angles or velocities; the step was rolled back."""
