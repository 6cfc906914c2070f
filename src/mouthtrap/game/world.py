"""World simulation for MOUTH TRAP.

Owns the complete mutable game state and advances it one frame at a time:
player physics first, then background scroll, then obstacles (movement,
removal, scoring, collisions) and finally the spawn timer. Scoring and
collisions therefore always see the player's position for the current
frame.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Callable, Optional

from mouthtrap.config.settings import GameSettings
from mouthtrap.core.events import Event, EventBus, EventType
from mouthtrap.core.exceptions import ConfigurationError, StorageError
from mouthtrap.core.state import State, StateMachine
from mouthtrap.game.geometry import overlaps
from mouthtrap.game.obstacle import Obstacle, advance, is_offscreen, spawn_obstacle
from mouthtrap.game.physics import PlayerState, apply_impulse, clamp_to_playfield, integrate
from mouthtrap.game.rng import RandomSource
from mouthtrap.storage.best_score import BestScoreRepository

logger = logging.getLogger(__name__)


@dataclass
class WorldState:
    """Everything that changes while playing."""

    player: PlayerState
    obstacles: list[Obstacle] = field(default_factory=list)  # spawn order, left to right
    score: int = 0
    best_score: int = 0
    running: bool = False
    game_over: bool = False
    time_since_last_spawn: float = 0.0  # ms
    background_offset: float = 0.0


class Simulation:
    """Runs the game rules on a WorldState.

    Lifecycle:
        IDLE      - nothing moves until the first activate()
        RUNNING   - update() advances the world, activate() flaps
        GAME_OVER - world frozen, activate() resets and restarts

    The loop driver is started through the on_start callback the first
    time the player activates.
    """

    def __init__(
        self,
        config: GameSettings,
        width: float,
        height: float,
        *,
        best_scores: Optional[BestScoreRepository] = None,
        rng: Optional[RandomSource] = None,
        event_bus: Optional[EventBus] = None,
        state_machine: Optional[StateMachine] = None,
    ) -> None:
        if width <= 0:
            raise ConfigurationError(f"Playfield width must be positive, got {width}")
        config.check_playfield(height)

        self.config = config
        self._width = float(width)
        self._height = float(height)
        self._best_scores = best_scores
        self._rng: RandomSource = rng or random.Random()
        self._event_bus = event_bus
        self.state_machine = state_machine or StateMachine()

        self._on_start: Optional[Callable[[], None]] = None
        if event_bus is not None:
            self.state_machine.add_listener(self._on_state_changed)

        best = best_scores.load() if best_scores else 0
        self.world = WorldState(player=self._new_player(), best_score=best)
        logger.info(f"Simulation ready: {width}x{height}, best score {best}")

    # Properties
    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    @property
    def phase(self) -> State:
        return self.state_machine.state

    @property
    def floor_y(self) -> float:
        """Top edge of the ground strip."""
        return self._height - self.config.ground_height

    @property
    def ground_limit(self) -> float:
        """Largest player y before touching the ground."""
        return self.floor_y - self.config.player_size

    def set_on_start(self, callback: Callable[[], None]) -> None:
        """Set callback for the first activation (starts the loop driver)."""
        self._on_start = callback

    # Input
    def activate(self) -> None:
        """Handle the single game input: start, flap or restart."""
        w = self.world

        if not w.running:
            w.running = True
            self.state_machine.transition(State.RUNNING)
            if self._on_start:
                self._on_start()

        if w.game_over:
            self.reset()
            self.state_machine.transition(State.RUNNING)
            return

        apply_impulse(w.player, self.config.flap_strength)

    def reset(self) -> None:
        """Start a fresh run. The best score and the running flag survive."""
        w = self.world
        w.player = self._new_player()
        w.obstacles = []
        w.score = 0
        w.game_over = False
        w.time_since_last_spawn = 0.0
        w.background_offset = 0.0
        logger.debug("World reset")

    def resize(self, width: float, height: float) -> bool:
        """Adopt a new playfield size.

        Existing coordinates are kept as they are; they catch up with the
        new size on their own. A size that could not fit an obstacle gap
        is refused and the old size kept.

        Returns:
            True if the new size was applied
        """
        try:
            if width <= 0:
                raise ConfigurationError(f"Playfield width must be positive, got {width}")
            self.config.check_playfield(height)
        except ConfigurationError as e:
            logger.warning(f"Ignoring resize to {width}x{height}: {e}")
            return False

        self._width = float(width)
        self._height = float(height)
        logger.debug(f"Playfield resized to {width}x{height}")
        return True

    # Per-frame update
    def update(self, delta_ms: float) -> None:
        """Advance the world by one frame.

        Args:
            delta_ms: Time since last update in milliseconds (only the
                spawn timer uses it; motion is per frame)
        """
        w = self.world
        if not w.running or w.game_over:
            return

        cfg = self.config
        player = w.player

        integrate(player, cfg.gravity)
        if clamp_to_playfield(player, self.ground_limit):
            self._end_run("ground")

        w.background_offset = (w.background_offset + cfg.scroll_speed) % self._width

        player_box = player.box()
        floor_y = self.floor_y
        obstacles = w.obstacles
        for i in range(len(obstacles) - 1, -1, -1):
            obstacle = obstacles[i]
            advance(obstacle, cfg.scroll_speed)
            if is_offscreen(obstacle, cfg.removal_threshold):
                del obstacles[i]
                continue

            if not obstacle.passed and obstacle.center_x < player.center_x:
                obstacle.passed = True
                self._add_point()

            if overlaps(player_box, obstacle.top_box()) or overlaps(player_box, obstacle.bottom_box(floor_y)):
                self._end_run("teeth")

        w.time_since_last_spawn += delta_ms
        if w.time_since_last_spawn > cfg.spawn_interval_ms:
            obstacles.append(
                spawn_obstacle(self._width, self._height, cfg.ground_height, cfg, self._rng)
            )
            w.time_since_last_spawn = 0.0

    # Internals
    def _new_player(self) -> PlayerState:
        return PlayerState(
            x=self._width * self.config.player_x_ratio,
            y=self._height / 2,
            size=self.config.player_size,
        )

    def _add_point(self) -> None:
        w = self.world
        w.score += 1
        self._emit(EventType.SCORE_CHANGED, {"score": w.score})

        if w.score > w.best_score:
            w.best_score = w.score
            self._persist_best()
            self._emit(EventType.BEST_SCORE, {"best_score": w.best_score})

    def _persist_best(self) -> None:
        if self._best_scores is None:
            return
        try:
            self._best_scores.save(self.world.best_score)
        except StorageError as e:
            logger.warning(f"Could not persist best score: {e}")

    def _end_run(self, cause: str) -> None:
        w = self.world
        if w.game_over:
            return
        w.game_over = True
        self.state_machine.transition(State.GAME_OVER)
        logger.info(f"Game over ({cause}): score {w.score}, best {w.best_score}")
        self._emit(EventType.GAME_OVER, {"score": w.score, "best_score": w.best_score, "cause": cause})

    def _on_state_changed(self, old: State, new: State) -> None:
        self._emit(EventType.STATE_CHANGED, {"old": old.name, "new": new.name})

    def _emit(self, event_type: EventType, data: dict) -> None:
        if self._event_bus is not None:
            self._event_bus.emit(Event(event_type, data=data, source="simulation"))
