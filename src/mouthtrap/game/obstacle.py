"""Obstacle pairs: a top and a bottom row of teeth with a gap between them."""

import logging
from dataclasses import dataclass

from mouthtrap.config.settings import GameSettings
from mouthtrap.game.geometry import Box
from mouthtrap.game.rng import RandomSource

logger = logging.getLogger(__name__)


@dataclass
class Obstacle:
    x: float
    width: float
    top_height: float  # bottom edge of the top barrier
    gap: float
    passed: bool = False

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def gap_bottom(self) -> float:
        return self.top_height + self.gap

    def top_box(self) -> Box:
        return Box(self.x, 0.0, self.width, self.top_height)

    def bottom_box(self, floor_y: float) -> Box:
        """Bottom barrier, running from the gap down to the ground strip at floor_y."""
        return Box(self.x, self.gap_bottom, self.width, floor_y - self.gap_bottom)


def spawn_obstacle(
    playfield_width: float,
    playfield_height: float,
    ground_height: float,
    config: GameSettings,
    rng: RandomSource,
) -> Obstacle:
    """Create an obstacle just past the right edge with a random gap.

    The gap size is drawn from [gap_min, gap_max], then the top height from
    [top_limit, playfield_height - ground_height - bottom_margin - gap].
    Callers must have validated the playfield with
    GameSettings.check_playfield so this envelope is never empty.
    """
    gap = config.gap_min + rng.random() * (config.gap_max - config.gap_min)

    lowest_top = playfield_height - ground_height - config.bottom_margin - gap
    top_height = config.top_limit + rng.random() * (lowest_top - config.top_limit)

    obstacle = Obstacle(
        x=playfield_width + config.obstacle_width,
        width=config.obstacle_width,
        top_height=top_height,
        gap=gap,
    )
    logger.debug(f"Spawned obstacle: top={top_height:.1f} gap={gap:.1f} x={obstacle.x:.1f}")
    return obstacle


def advance(obstacle: Obstacle, scroll_speed: float) -> None:
    obstacle.x -= scroll_speed


def is_offscreen(obstacle: Obstacle, threshold: float) -> bool:
    """True once the obstacle's right edge is left of threshold."""
    return obstacle.x + obstacle.width < threshold
