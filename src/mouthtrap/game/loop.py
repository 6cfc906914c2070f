from __future__ import annotations

import logging
from collections.abc import Callable

from mouthtrap.game.snapshot import RenderSnapshot, make_snapshot
from mouthtrap.game.world import Simulation

logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]


class GameLoop:
    """
    Timestamp-driven frame scheduler.

    The host supplies request_frame, which must arrange for the given
    callback to be called once on the next animation frame with a
    monotonic timestamp in milliseconds. Every frame runs one simulation
    update followed by one render, then asks for the next frame for as
    long as the loop is running (game over included, so the frozen world
    keeps being drawn).
    """

    def __init__(
        self,
        *,
        simulation: Simulation,
        render_fn: Callable[[RenderSnapshot], None],
        request_frame: Callable[[FrameCallback], None],
        max_frame_ms: float = 50.0,
    ) -> None:
        self._simulation = simulation
        self._render_fn = render_fn
        self._request_frame = request_frame
        self._max_frame_ms = max_frame_ms

        self._running = False
        self._last_t = 0.0
        self._frames = 0

    @property
    def running(self) -> bool:
        return self._running

    @property
    def frames(self) -> int:
        return self._frames

    def start(self, timestamp: float) -> None:
        if self._running:
            return
        self._running = True
        self._last_t = timestamp
        logger.info("Game loop started")
        self._request_frame(self.on_frame)

    def stop(self) -> None:
        """Teardown hook for when the view goes away. No more frames are requested."""
        if self._running:
            logger.info(f"Game loop stopped after {self._frames} frames")
        self._running = False

    def on_frame(self, timestamp: float) -> None:
        if not self._running:
            return

        # Clamp to avoid huge dt after stalls (window drag, minimize).
        dt = min(self._max_frame_ms, timestamp - self._last_t)
        self._last_t = timestamp

        try:
            self._simulation.update(dt)
            self._render_fn(self.snapshot())
        except Exception:
            # Fail fast rather than keep drawing a corrupt world.
            self.stop()
            raise

        self._frames += 1
        if self._running:
            self._request_frame(self.on_frame)

    def snapshot(self) -> RenderSnapshot:
        sim = self._simulation
        return make_snapshot(sim.world, sim.width, sim.height, sim.config.ground_height)
