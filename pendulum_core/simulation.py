#!/usr/bin/env python3
"""
Simulation facade shared by the renderer, the control panel and headless runs.

What it owns
- The ChainState, the TrailBuffer of terminal-tip positions, the ChainIntegrator and
  the ChainEditor command queue.

Tick order (see step)
1) drain pending edit commands
2) integrate one fixed dt
3) compute the terminal tip
4) append it to the trail

Threading
- The viewport thread calls step(); the UI thread only enqueues commands and reads
  snapshots. A re-entrant lock guards the short critical sections so a snapshot never
  sees a half-applied tick.
"""
import logging
import threading
from typing import List, Optional

from .chain_state import ChainState
from .config import SimulationConfig
from .data_models import Segment, SegmentState
from .editor import ChainEditor, EditCommand
from .kinematics import compute_tip_positions, terminal_tip
from .physics import ChainIntegrator, check_dt
from .trail import TrailBuffer
from .vector_utils import Point

log = logging.getLogger(__name__)


class PendulumSimulation:
    def __init__(self, config: Optional[SimulationConfig] = None):
        self.config = config or SimulationConfig()
        self.lock = threading.RLock()
        self.running = True  # app running
        self.playing = True  # ticks advance
        self.show_trail = True
        self.last_error: Optional[str] = None  # shown once by the control panel

        self.integrator = ChainIntegrator(self.config.gravity)
        self.editor = ChainEditor(
            self.config.segment_length,
            self.config.segment_mass,
            append_anchor=self.config.append_anchor,
        )
        self.trail = TrailBuffer(self.config.path_limit)
        self.chain = self._build_chain()
        self.tick_count = 0

    def _build_chain(self) -> ChainState:
        chain = ChainState(Segment(self.config.segment_length, self.config.segment_mass))
        for _ in range(self.config.initial_segments - 1):
            self.editor.append(chain)
        return chain

    @property
    def sim_time(self) -> float:
        return self.tick_count * self.config.dt

    # -----------------------
    # Edit commands
    # -----------------------

    def append_segment(self) -> None:
        self.editor.enqueue(EditCommand.APPEND)

    def remove_segment(self) -> None:
        self.editor.enqueue(EditCommand.REMOVE)

    def reset(self) -> None:
        """Back to the initial chain with an empty trail; pending edits are dropped."""
        with self.lock:
            self.editor.discard_pending()
            self.trail.clear()
            self.chain = self._build_chain()
            self.tick_count = 0
        log.info("simulation reset to %d segment(s)", self.config.initial_segments)

    # -----------------------
    # Ticking
    # -----------------------

    def step(self, dt: Optional[float] = None) -> None:
        """
        Run one full tick. dt defaults to the configured fixed step.

        Queued edits stay applied if the integrator raises DivergenceError; the physics
        step itself is rolled back and no trail point or tick is recorded.
        """
        if dt is None:
            dt = self.config.dt
        # Reject before the edit queue is drained so a bad tick changes nothing
        check_dt(dt)
        with self.lock:
            applied = self.editor.apply_pending(self.chain, self.trail)
            if applied:
                log.debug("applied %d edit(s); chain has %d segment(s)", applied, self.chain.count)
            self.integrator.step(self.chain, dt)
            self.trail.append(terminal_tip(self.chain, self.config.anchor))
            self.tick_count += 1

    def run(self, ticks: int) -> None:
        for _ in range(ticks):
            self.step()

    # -----------------------
    # Snapshots
    # -----------------------

    def get_segments(self) -> List[SegmentState]:
        with self.lock:
            return self.chain.snapshot()

    def get_terminal_trail(self) -> List[Point]:
        with self.lock:
            return self.trail.snapshot()

    def get_tip_positions(self, anchor: Optional[Point] = None) -> List[Point]:
        with self.lock:
            return compute_tip_positions(self.chain, anchor if anchor is not None else self.config.anchor)
