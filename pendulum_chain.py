#!/usr/bin/env python3
"""
Pendulum Chain application entry point and UI/renderer coordination.

What this module does
- Starts two event loops: a Pygame rendering thread (viewport) and the Dear PyGui UI
  (running on the main thread).
- Both share one PendulumSimulation that owns the chain, the trail and the edit queue.
- Mouse in the viewport: left click appends a segment, right click removes the last
  one (or clears the trail when only the first segment is left).

Threading model
- PygameRenderer runs in a background thread and performs: input handling, one fixed
  physics tick per frame, and drawing. Edits from either window are queued and applied
  at the start of the next tick.
- The UI class runs in the main thread via Dear PyGui and refreshes its readouts on a
  periodic frame callback from snapshots.

Units and conventions
- SI units: meters [m], kilograms [kg], seconds [s]; angles in radians from the
  downward vertical. World y points up; the anchor sits at (0, 0.5).
- Each tick advances exactly config.dt of simulated time, whatever the frame rate.

Running
1) Install dependencies: `pip install -e .`
2) Run this module: `python pendulum_chain.py [--segments N] [--config FILE]`
3) Without a window: `python pendulum_chain.py --headless --ticks 5000`
"""

import argparse
import logging
import math
import sys
import threading

# GUI and Rendering libs
import pygame
from pygame import gfxdraw
import dearpygui.dearpygui as dpg

from pendulum_core.camera import Camera2D
from pendulum_core.config import load_config
from pendulum_core.constants import (
    BACKGROUND_COLOR,
    BOB_COLOR,
    HUD_COLOR,
    PENDULUM_RADIUS,
    SAFE_COORD_LIMIT,
    STRING_COLOR,
    TRAIL_COLOR,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from pendulum_core.errors import PendulumError
from pendulum_core.simulation import PendulumSimulation

log = logging.getLogger("pendulum_chain")

FPS = 60

# ============================================================
# Pygame Renderer Thread
# ============================================================


class PygameRenderer(threading.Thread):
    """
    Pygame loop: ticks the simulation, draws strings, bobs and the terminal trail.
    """

    def __init__(self, sim: PendulumSimulation):
        super().__init__(daemon=True)
        self.sim = sim
        self.camera = Camera2D(center=(0.0, 0.0))
        self.surface = None
        self.clock = None
        self.running = True

    def run(self):
        pygame.init()
        pygame.display.set_caption("Pendulum System")
        self.surface = pygame.display.set_mode((VIEW_WIDTH, VIEW_HEIGHT), pygame.RESIZABLE)
        self.camera.set_viewport_size(VIEW_WIDTH, VIEW_HEIGHT)
        self.clock = pygame.time.Clock()
        log.info("viewport opened (%dx%d)", VIEW_WIDTH, VIEW_HEIGHT)

        try:
            while self.running and self.sim.running:
                self.handle_events()

                with self.sim.lock:
                    playing = self.sim.playing
                if playing:
                    self.tick()

                self.draw()
                self.clock.tick(FPS)
        finally:
            pygame.quit()
            log.info("viewport closed")

    def tick(self):
        """One simulation tick; a failed tick pauses playback instead of killing the thread."""
        try:
            self.sim.step()
        except PendulumError as exc:
            log.error("tick failed, pausing: %s", exc)
            with self.sim.lock:
                self.sim.playing = False
                self.sim.last_error = f"{exc} (paused; Reset to continue)"

    def handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.sim.running = False
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.surface = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                self.camera.set_viewport_size(event.w, event.h)

            elif event.type == pygame.MOUSEWHEEL:
                factor = 1.1 if event.y > 0 else 1.0 / 1.1
                self.camera.zoom(factor, pygame.mouse.get_pos())

            elif event.type == pygame.MOUSEBUTTONDOWN:
                if event.button == 1:
                    self.sim.append_segment()
                elif event.button == 3:
                    self.sim.remove_segment()

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_SPACE:
                    with self.sim.lock:
                        self.sim.playing = not self.sim.playing

    def draw(self):
        surf = self.surface
        surf.fill(BACKGROUND_COLOR)

        # Snapshot for consistency during draw
        with self.sim.lock:
            anchor = self.sim.config.anchor
            tips = self.sim.get_tip_positions()
            trail = self.sim.get_terminal_trail() if self.sim.show_trail else []
            count = self.sim.chain.count
            sim_time = self.sim.sim_time
            playing = self.sim.playing

        # Trail of the terminal tip
        if len(trail) > 1:
            pts = [p for p in (_safe_point(self.camera, t) for t in trail) if p]
            if len(pts) > 1:
                pygame.draw.aalines(surf, TRAIL_COLOR, False, pts)

        # Strings from the anchor through every tip
        chain_pts = [_safe_point(self.camera, p) for p in [anchor] + tips]
        for a, b in zip(chain_pts, chain_pts[1:]):
            if a and b:
                pygame.draw.aaline(surf, STRING_COLOR, a, b)

        # Bobs
        r = self.camera.length_to_pixels(PENDULUM_RADIUS)
        for p in chain_pts[1:]:
            if p:
                gfxdraw.filled_circle(surf, p[0], p[1], r, BOB_COLOR)
                gfxdraw.aacircle(surf, p[0], p[1], r, BOB_COLOR)

        draw_text(surf, "Left click: add segment | Right click: remove | Wheel: zoom | Space: Pause/Play",
                  10, 10, HUD_COLOR)
        draw_text(surf, f"Segments: {count}  t = {sim_time:.2f} s  [{'Playing' if playing else 'Paused'}]",
                  10, 30, HUD_COLOR)

        pygame.display.flip()


_cached_font = None


def draw_text(surface, text, x, y, color):
    global _cached_font
    if _cached_font is None:
        if not pygame.font.get_init():
            pygame.font.init()
        _cached_font = pygame.font.SysFont("consolas", 16)
    img = _cached_font.render(text, True, color)
    surface.blit(img, (x, y))


def _safe_point(camera, world_pt):
    """Integer pixel point, or None when the world point is non-finite or far off screen."""
    if not (math.isfinite(world_pt[0]) and math.isfinite(world_pt[1])):
        return None
    x, y = camera.world_to_screen(world_pt)
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None

# ============================================================
# Dear PyGui UI
# ============================================================


class UI:
    """
    Dear PyGui control panel: edit buttons, playback, trail toggle, segment readout.
    """

    def __init__(self, sim: PendulumSimulation):
        self.sim = sim

        self.status_msg_id = None
        self.summary_id = None
        self.segment_list_id = None

        self._build_ui()
        self._schedule_sync()

    def _schedule_sync(self):
        """Reschedule the periodic sync callback using frame callbacks (approx ~10Hz)."""
        dpg.set_frame_callback(dpg.get_frame_count() + 6, self._sync_ui_with_sim)

    # -----------------------
    # UI Construction
    # -----------------------

    def _build_ui(self):
        dpg.create_context()
        dpg.create_viewport(title='Pendulum System - Controls', width=460, height=520)

        with dpg.window(label="Controls", width=440, height=500, pos=(10, 10), tag="main_window"):
            dpg.add_text("Chain")
            with dpg.group(horizontal=True):
                dpg.add_button(label="Append Segment", callback=self._on_append)
                dpg.add_button(label="Remove Segment", callback=self._on_remove)
                dpg.add_button(label="Reset", callback=self._on_reset)
            self.status_msg_id = dpg.add_text("")

            dpg.add_separator()

            dpg.add_text("Simulation Controls")
            with dpg.group(horizontal=True):
                dpg.add_button(label="Play/Pause", callback=self._toggle_play)
                dpg.add_button(label="Step", callback=self._step_once)
                dpg.add_checkbox(label="Trail", default_value=True, callback=self._toggle_trail)
            self.summary_id = dpg.add_text("")

            dpg.add_separator()

            dpg.add_text("Segments")
            self.segment_list_id = dpg.add_listbox(items=[], width=420, num_items=12)

        dpg.setup_dearpygui()
        dpg.show_viewport()
        dpg.set_primary_window("main_window", True)

    # -----------------------
    # UI Callbacks
    # -----------------------

    def _set_status(self, msg: str, color=(180, 220, 180)):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=color)

    def _set_error(self, msg: str):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=(255, 120, 120))

    def _on_append(self):
        self.sim.append_segment()
        self._set_status("Segment queued.")

    def _on_remove(self):
        with self.sim.lock:
            only_one = self.sim.chain.count == 1
        self.sim.remove_segment()
        self._set_status("Trail cleared (first segment is kept)." if only_one else "Removal queued.")

    def _on_reset(self):
        self.sim.reset()
        self._set_status("Chain reset.")

    def _toggle_play(self):
        with self.sim.lock:
            self.sim.playing = not self.sim.playing
            state = "Playing" if self.sim.playing else "Paused"
        self._set_status(f"Simulation {state}.")

    def _step_once(self):
        with self.sim.lock:
            self.sim.playing = False
        try:
            self.sim.step()
        except PendulumError as exc:
            log.error("step failed: %s", exc)
            self._set_error(str(exc))
            return
        self._set_status("Stepped one tick.")

    def _toggle_trail(self, sender, value, user_data=None):
        with self.sim.lock:
            self.sim.show_trail = bool(value)
        if not value:
            with self.sim.lock:
                self.sim.trail.clear()
        self._set_status(f"Trail {'ON' if value else 'OFF'}.")

    def _sync_ui_with_sim(self):
        """Periodic refresh of the summary line and segment readout."""
        segments = self.sim.get_segments()
        with self.sim.lock:
            ticks = self.sim.tick_count
            sim_time = self.sim.sim_time
            trail_len = len(self.sim.trail)
            err = self.sim.last_error
            self.sim.last_error = None
        if err:
            self._set_error(err)
        dpg.set_value(self.summary_id,
                      f"Ticks: {ticks}  t = {sim_time:.2f} s  trail: {trail_len} pts")
        items = [
            f"#{i}  L={s.length:.2f} m  M={s.mass:.2f} kg  theta={s.theta:+.3f}  omega={s.omega:+.3f}"
            for i, s in enumerate(segments)
        ]
        dpg.configure_item(self.segment_list_id, items=items)
        self._schedule_sync()

# ============================================================
# Application Entry
# ============================================================


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Interactive pendulum chain simulator")
    parser.add_argument("--config", default=None, help="Path to a JSON config file")
    parser.add_argument("--segments", type=int, default=None,
                        help="Number of segments to start with (overrides config)")
    parser.add_argument("--headless", action="store_true",
                        help="Run without windows and log the final state")
    parser.add_argument("--ticks", type=int, default=1000,
                        help="Ticks to run in headless mode")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser, parser.parse_args(argv)


def run_headless(sim: PendulumSimulation, ticks: int) -> bool:
    """Advance up to ``ticks`` ticks and log the final state. False if a tick failed."""
    ok = True
    try:
        sim.run(ticks)
    except PendulumError as exc:
        log.error("stopped after %d ticks: %s", sim.tick_count, exc)
        ok = False
    log.info("ran %d ticks (t = %.2f s), trail has %d points", sim.tick_count, sim.sim_time, len(sim.trail))
    for i, s in enumerate(sim.get_segments()):
        log.info("segment %d: theta=%.6f omega=%.6f", i, s.theta, s.omega)
    tip = sim.get_tip_positions()[-1]
    log.info("terminal tip at (%.6f, %.6f)", tip[0], tip[1])
    return ok


def main(argv=None):
    parser, args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        config = load_config(args.config).with_overrides(initial_segments=args.segments)
    except PendulumError as exc:
        parser.error(str(exc))
    sim = PendulumSimulation(config)
    log.info("starting with %d segment(s), dt = %.4f s", sim.chain.count, config.dt)

    if args.headless:
        if args.ticks < 0:
            parser.error("--ticks must be >= 0")
        return 0 if run_headless(sim, args.ticks) else 1

    renderer = PygameRenderer(sim)

    # Start Pygame renderer thread
    renderer.start()

    ui = UI(sim)

    with dpg.handler_registry():
        def key_down(sender, app_data):
            if app_data == dpg.mvKey_Spacebar:
                ui._toggle_play()
        dpg.add_key_press_handler(callback=key_down)

    # Run Dear PyGui event loop
    try:
        dpg.start_dearpygui()
    finally:
        sim.running = False
        renderer.running = False
        renderer.join(timeout=2.0)
        dpg.destroy_context()
    return 0


if __name__ == "__main__":
    sys.exit(main())
