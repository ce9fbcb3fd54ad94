#!/usr/bin/env python3
"""
Core Physics Engine for the Pendulum Chain simulator

Responsibilities
- Advance the angle state of a ChainState by one fixed timestep.
- A lone segment is a simple gravity pendulum.
- Longer chains apply the closed-form double-pendulum accelerations to each adjacent
  pair (i, i + 1), walking from the anchor towards the terminal segment.

Units and conventions
- Angles are in radians from the downward vertical, angular velocities in rad/s.
- Lengths in meters [m], masses in kilograms [kg], time steps in seconds [s].

Numerical notes
- Semi-implicit (symplectic) Euler: omega is updated first and the new omega is used
  to advance theta. Swapping the order makes the single pendulum gain energy.
- Pairwise chaining: every interior segment is written twice per step, once as the
  lower bob of pair (i - 1, i) and once as the upper bob of pair (i, i + 1). This is
  not a full N-link Lagrangian solve; the recurrence is kept as is so trajectories
  stay comparable with earlier runs.
- Chains of two or more segments are chaotic; tiny differences in the initial state
  grow quickly, so only single-step results are reproducible across platforms.

Threading
- Pure compute apart from the gravity parameter. Callers serialize it with edits.
"""

import math
from typing import Tuple

from .chain_state import ChainState
from .constants import G
from .errors import ConfigurationError, DivergenceError


def single_pendulum_acceleration(theta: float, length: float, gravity: float = G) -> float:
    """Angular acceleration of a simple pendulum: a = -(g / L) * sin(theta)."""
    return (-gravity / length) * math.sin(theta)


def pair_accelerations(theta1: float, theta2: float,
                       omega1: float, omega2: float,
                       l1: float, m1: float, l2: float, m2: float,
                       gravity: float = G) -> Tuple[float, float]:
    """
    Angular accelerations of an ideal double pendulum.

    Args:
        theta1, theta2: Angles of the upper and lower link (rad).
        omega1, omega2: Angular velocities of the upper and lower link (rad/s).
        l1, m1: Length and mass of the upper link.
        l2, m2: Length and mass of the lower link.
        gravity: Gravitational acceleration (m/s^2).

    Returns:
        (a1, a2) in rad/s^2.
    """
    delta = theta2 - theta1
    sin_d = math.sin(delta)
    cos_d = math.cos(delta)

    denom1 = (m1 + m2) * l1 - m2 * l1 * cos_d * cos_d
    denom2 = (l2 / l1) * denom1

    a1 = (m2 * l1 * omega1 * omega1 * sin_d * cos_d
          + m2 * gravity * math.sin(theta2) * cos_d
          + m2 * l2 * omega2 * omega2 * sin_d
          - (m1 + m2) * gravity * math.sin(theta1)) / denom1

    a2 = (-l1 / l2 * omega1 * omega1 * sin_d * cos_d
          + gravity * math.sin(theta1) * cos_d
          - gravity * math.sin(theta2)) / denom2

    return a1, a2


def check_dt(dt: float) -> float:
    """Return dt as float, raising ConfigurationError unless it is finite and > 0."""
    if isinstance(dt, bool):
        raise ConfigurationError(f"dt must be a number, got {dt!r}")
    try:
        value = float(dt)
    except (TypeError, ValueError):
        raise ConfigurationError(f"dt must be a number, got {dt!r}") from None
    if not math.isfinite(value) or value <= 0.0:
        raise ConfigurationError(f"dt must be positive and finite, got {dt!r}")
    return value


class ChainIntegrator:
    """
    Fixed-step integrator for a linear pendulum chain.

    The engine owns no chain state; step() mutates the theta/omega lists of the chain
    passed to it.
    """

    def __init__(self, gravity: float = G):
        """
        Initialize the integrator.

        Args:
            gravity: Gravitational acceleration in m/s^2 (finite)
        """
        self.set_gravity(gravity)

    def set_gravity(self, gravity: float) -> None:
        gravity = float(gravity)
        if not math.isfinite(gravity):
            raise ConfigurationError(f"gravity must be finite, got {gravity!r}")
        self.gravity = gravity

    def step(self, chain: ChainState, dt: float) -> None:
        """
        Advance the chain by one timestep.

        Args:
            chain: Chain whose theta/omega lists are updated in place.
            dt: Time step in seconds (finite, > 0). Invalid values are rejected before
                anything is written.

        Raises:
            DivergenceError: the step overflowed. theta/omega are restored to their
                values before the call.
        """
        dt = check_dt(dt)
        theta_before = list(chain.theta)
        omega_before = list(chain.omega)
        try:
            if chain.count == 1:
                self._step_single(chain, dt)
            else:
                self._step_pairs(chain, dt)
            finite = all(math.isfinite(v) for v in chain.theta) and all(math.isfinite(v) for v in chain.omega)
        except (ValueError, OverflowError):
            # math.sin raises on an infinite angle written earlier in the same pass
            finite = False
        if not finite:
            chain.theta[:] = theta_before
            chain.omega[:] = omega_before
            raise DivergenceError(f"chain of {chain.count} segment(s) diverged; step rolled back")

    def _step_single(self, chain: ChainState, dt: float) -> None:
        a = single_pendulum_acceleration(chain.theta[0], chain.length(0), self.gravity)
        chain.omega[0] += a * dt
        chain.theta[0] += chain.omega[0] * dt

    def _step_pairs(self, chain: ChainState, dt: float) -> None:
        theta = chain.theta
        omega = chain.omega
        segs = chain.segments

        for i in range(len(segs) - 1):
            upper = segs[i]
            lower = segs[i + 1]
            a1, a2 = pair_accelerations(
                theta[i], theta[i + 1],
                omega[i], omega[i + 1],
                upper.length, upper.mass,
                lower.length, lower.mass,
                self.gravity,
            )
            omega[i] += a1 * dt
            omega[i + 1] += a2 * dt
            theta[i] += omega[i] * dt
            theta[i + 1] += omega[i + 1] * dt
