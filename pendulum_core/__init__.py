"""Simulation core for the Pendulum Chain simulator: chain state, physics, trail, edits."""
