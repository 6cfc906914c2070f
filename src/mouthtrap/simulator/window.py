"""
Desktop window for MOUTH TRAP using pygame.

Hosts the game: pumps pygame events into debounced activate presses,
plays the role of the browser's animation-frame scheduler for the game
loop, handles resizing and shows the loading and landing screens.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Optional

import pygame

from mouthtrap.config.settings import Settings
from mouthtrap.core.events import Event, EventBus, EventType, activate_event, resize_event
from mouthtrap.game.loop import FrameCallback, GameLoop
from mouthtrap.game.snapshot import RenderSnapshot
from mouthtrap.game.world import Simulation
from mouthtrap.graphics.assets import BACKGROUND, GROUND, AssetLibrary
from mouthtrap.graphics.layout import fit_playfield
from mouthtrap.graphics.renderer import GameRenderer
from mouthtrap.simulator.input import ActivateButton

logger = logging.getLogger(__name__)

SCREEN_LOADING = "loading"
SCREEN_LANDING = "landing"
SCREEN_GAME = "game"


class GameWindow:
    """
    Main game window.

    Controls:
        SPACE / left click / touch: Start, flap, restart
        ESC / Q: Quit
    """

    def __init__(
        self,
        *,
        settings: Settings,
        simulation: Simulation,
        assets: AssetLibrary,
        event_bus: EventBus,
        renderer: Optional[GameRenderer] = None,
    ) -> None:
        self.settings = settings
        self.simulation = simulation
        self.assets = assets
        self.event_bus = event_bus
        self.renderer = renderer or GameRenderer(assets)

        self.loop = GameLoop(
            simulation=simulation,
            render_fn=self._draw_game,
            request_frame=self.request_frame,
            max_frame_ms=settings.game.max_frame_ms,
        )
        self.simulation.set_on_start(lambda: self.loop.start(self._now()))

        self._screen: Optional[pygame.Surface] = None
        self._playfield: Optional[pygame.Surface] = None
        self._clock: Optional[pygame.time.Clock] = None
        self._running = False
        self._mode = SCREEN_LOADING
        self._frame_callbacks: list[FrameCallback] = []

        # One button per physical source so each debounces on its own
        self.key_button = ActivateButton("keyboard")
        self.pointer_button = ActivateButton("pointer")
        self.touch_button = ActivateButton("touch")
        for button in (self.key_button, self.pointer_button, self.touch_button):
            button.on_press(self._make_emitter(button.name))

        self._unsubscribers: list[Callable[[], None]] = [
            event_bus.subscribe(EventType.ACTIVATE, self._on_activate),
            event_bus.subscribe(EventType.RESIZE, self._on_resize),
        ]

    @property
    def mode(self) -> str:
        return self._mode

    def request_frame(self, callback: FrameCallback) -> None:
        """Queue callback for the next frame (the loop's animation-frame hook)."""
        self._frame_callbacks.append(callback)

    def _make_emitter(self, source: str) -> Callable[[], None]:
        def emit() -> None:
            self.event_bus.emit(activate_event(source))
        return emit

    @staticmethod
    def _now() -> float:
        return float(pygame.time.get_ticks())

    def _init_pygame(self) -> None:
        pygame.init()
        pygame.display.set_caption(self.settings.title)

        display = self.settings.display
        flags = pygame.RESIZABLE if display.resizable else 0
        self._screen = pygame.display.set_mode((display.window_width, display.window_height), flags)
        self._clock = pygame.time.Clock()
        self._playfield = pygame.Surface((int(self.simulation.width), int(self.simulation.height)))

        logger.info(f"Pygame initialized: {display.window_width}x{display.window_height}")

    # Event handling
    def _handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                if event.key in (pygame.K_ESCAPE, pygame.K_q):
                    self._running = False
                elif event.key == pygame.K_SPACE:
                    self.key_button.press()

            elif event.type == pygame.KEYUP:
                if event.key == pygame.K_SPACE:
                    self.key_button.release()

            # Touches also arrive as synthetic mouse events; those are skipped
            elif event.type == pygame.MOUSEBUTTONDOWN:
                if event.button == 1 and not getattr(event, "touch", False):
                    self.pointer_button.press()
            elif event.type == pygame.MOUSEBUTTONUP:
                if event.button == 1 and not getattr(event, "touch", False):
                    self.pointer_button.release()

            elif event.type == pygame.FINGERDOWN:
                self.touch_button.press()
            elif event.type == pygame.FINGERUP:
                self.touch_button.release()

            elif event.type == pygame.VIDEORESIZE:
                self.event_bus.queue_event(resize_event(event.w, event.h))

    def _on_activate(self, event: Event) -> None:
        if self._mode == SCREEN_LOADING:
            return
        if self._mode == SCREEN_LANDING:
            logger.info("Leaving landing screen")
            self._mode = SCREEN_GAME
            return
        self.simulation.activate()

    def _on_resize(self, event: Event) -> None:
        width, height = fit_playfield(event.data["width"], event.data["height"], self.settings.display)
        if self.simulation.resize(width, height):
            self._playfield = pygame.Surface((width, height))

    # Frame
    def _run_frame_callbacks(self) -> None:
        callbacks, self._frame_callbacks = self._frame_callbacks, []
        now = self._now()
        for callback in callbacks:
            callback(now)

    def _advance_loading(self) -> None:
        self.assets.load_next()
        if self._mode != SCREEN_LOADING:
            return
        if self.assets.is_settled(BACKGROUND) or self.assets.is_settled(GROUND):
            logger.info("Assets settled, showing landing screen")
            self._mode = SCREEN_LANDING

    def _draw_game(self, snapshot: RenderSnapshot) -> None:
        if self._playfield is not None:
            self.renderer.render_game(self._playfield, snapshot)

    def _render(self) -> None:
        if not self._screen or not self._playfield:
            return

        if self._mode == SCREEN_LOADING:
            self.renderer.render_loading(self._playfield)
        elif self._mode == SCREEN_LANDING:
            self.renderer.render_landing(self._playfield, self.settings.game.ground_height)
        elif not self.loop.running:
            # Before the first input there is no loop yet; draw the idle world directly
            self.renderer.render_game(self._playfield, self.loop.snapshot())

        self._screen.fill((0, 0, 0))
        x = (self._screen.get_width() - self._playfield.get_width()) // 2
        self._screen.blit(self._playfield, (x, 0))
        pygame.display.flip()

    async def run(self) -> None:
        """Main window loop."""
        self._init_pygame()
        self._running = True
        logger.info("Window started")

        try:
            while self._running:
                self._handle_events()

                if self.assets.pending:
                    self._advance_loading()

                self._run_frame_callbacks()
                await self.event_bus.process_queue()
                self._render()

                if self._clock:
                    self._clock.tick(self.settings.display.fps)

                # Yield to other tasks
                await asyncio.sleep(0)
        finally:
            self._cleanup()

    def _cleanup(self) -> None:
        self.loop.stop()
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self.event_bus.emit(Event(EventType.SHUTDOWN, source="window"))
        pygame.quit()
        logger.info("Window closed")

    def stop(self) -> None:
        self._running = False
