"""Read-only view of the world handed to renderers."""

from dataclasses import dataclass
from typing import Tuple

from mouthtrap.game.world import WorldState

# Radians of tilt per unit of vertical velocity is 1/9, clamped to this range
TILT_MIN = -0.5
TILT_MAX = 1.0
TILT_DIVISOR = 9.0


@dataclass(frozen=True)
class PlayerSnapshot:
    x: float
    y: float
    size: float
    tilt: float  # radians, positive = nose down


@dataclass(frozen=True)
class ObstacleSnapshot:
    x: float
    width: float
    top_height: float
    gap: float


@dataclass(frozen=True)
class RenderSnapshot:
    width: float
    height: float
    ground_height: float
    player: PlayerSnapshot
    obstacles: Tuple[ObstacleSnapshot, ...]
    score: int
    best_score: int
    running: bool
    game_over: bool
    background_offset: float

    @property
    def floor_y(self) -> float:
        return self.height - self.ground_height


def tilt_for(vy: float) -> float:
    return max(TILT_MIN, min(TILT_MAX, vy / TILT_DIVISOR))


def make_snapshot(world: WorldState, width: float, height: float, ground_height: float) -> RenderSnapshot:
    p = world.player
    return RenderSnapshot(
        width=width,
        height=height,
        ground_height=ground_height,
        player=PlayerSnapshot(x=p.x, y=p.y, size=p.size, tilt=tilt_for(p.vy)),
        obstacles=tuple(
            ObstacleSnapshot(x=o.x, width=o.width, top_height=o.top_height, gap=o.gap)
            for o in world.obstacles
        ),
        score=world.score,
        best_score=world.best_score,
        running=world.running,
        game_over=world.game_over,
        background_offset=world.background_offset,
    )
