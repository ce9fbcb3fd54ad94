#!/usr/bin/env python3
"""
Chain editing: append/remove segment commands.

Input handlers never touch the chain directly. They enqueue an EditCommand and the
simulation drains the queue once per tick, before integrating, so an edit can never
land in the middle of a step.
"""
import enum
import logging
from collections import deque
from typing import Deque

from .chain_state import ChainState
from .constants import (
    APPEND_ANCHOR,
    APPENDED_OMEGA,
    APPENDED_THETA,
    INITIAL_LENGTH,
    INITIAL_MASS,
)
from .data_models import Segment
from .kinematics import terminal_tip
from .trail import TrailBuffer
from .vector_utils import Point

log = logging.getLogger(__name__)


class EditCommand(enum.Enum):
    APPEND = "append"
    REMOVE = "remove"


class ChainEditor:
    """
    Queue of pending edit commands plus the operations that apply them.

    Enqueueing is safe from another thread (deque append/popleft are atomic); applying
    must happen on the thread that runs the integrator.
    """

    def __init__(self, segment_length: float = INITIAL_LENGTH, segment_mass: float = INITIAL_MASS,
                 append_anchor: Point = APPEND_ANCHOR):
        # Validate once so a bad default is reported at startup, not on first click
        self.template = Segment(segment_length, segment_mass)
        self.append_anchor = append_anchor
        self._pending: Deque[EditCommand] = deque()

    def enqueue(self, command: EditCommand) -> None:
        self._pending.append(EditCommand(command))

    @property
    def pending(self) -> int:
        return len(self._pending)

    def discard_pending(self) -> None:
        self._pending.clear()

    def apply_pending(self, chain: ChainState, trail: TrailBuffer) -> int:
        """Apply every queued command in order. Returns how many were applied."""
        applied = 0
        while self._pending:
            command = self._pending.popleft()
            if command is EditCommand.APPEND:
                self.append(chain)
            else:
                self.remove(chain, trail)
            applied += 1
        return applied

    def append(self, chain: ChainState) -> bool:
        """Hang a new segment (theta pi/4, at rest) from the current terminal tip."""
        attach = None
        if log.isEnabledFor(logging.DEBUG):
            attach = terminal_tip(chain, self.append_anchor)
        chain.push_segment(self.template, APPENDED_THETA, APPENDED_OMEGA)
        if attach is not None:
            log.debug("appended segment %d at (%.4f, %.4f)", chain.count - 1, attach[0], attach[1])
        return True

    def remove(self, chain: ChainState, trail: TrailBuffer) -> bool:
        """
        Drop the terminal segment.

        The first segment is never removed: on a one-segment chain this clears the
        trail instead and returns False.
        """
        if chain.count > 1:
            chain.pop_segment()
            log.debug("removed terminal segment, %d left", chain.count)
            return True
        trail.clear()
        log.warning("first segment cannot be removed; cleared the trail instead")
        return False
