#!/usr/bin/env python3
"""
Shared constants for the Pendulum Chain simulator (SI units unless stated otherwise).

Keeping constants in one place helps ensure values are consistent across the
codebase; SimulationConfig takes its defaults from here.
"""
import math

# Physical constants
G = 9.81  # m/s^2

# Physics controls
DT = 0.01  # seconds of simulation time per tick, never derived from wall time
PATH_LIMIT = 2000  # max points kept in the terminal-tip trail

# Segment defaults
INITIAL_LENGTH = 0.7  # m
INITIAL_MASS = 1.0  # kg

# First segment starts inverted with a small push so it visibly moves
FIRST_THETA = math.pi
FIRST_OMEGA = 0.5
# Appended segments
APPENDED_THETA = math.pi / 4.0
APPENDED_OMEGA = 0.0

# Fixed pivot of segment 0 used for physics, trail and drawing
ANCHOR = (0.0, 0.5)
# Pivot used when computing the attach point of a newly appended segment.
# Differs from ANCHOR; kept separate until it is settled which one is canonical.
APPEND_ANCHOR = (0.0, 0.75)

# Rendering (viewport)
VIEW_WIDTH = 800
VIEW_HEIGHT = 800
VIEW_EXTENT = 2.0  # world units from center to each viewport edge
PENDULUM_RADIUS = 0.04  # world units
BACKGROUND_COLOR = (0, 0, 0)
BOB_COLOR = (255, 0, 0)
STRING_COLOR = (255, 0, 0)
TRAIL_COLOR = (255, 0, 0)
HUD_COLOR = (200, 200, 200)

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000
