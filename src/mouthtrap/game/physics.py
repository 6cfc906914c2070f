"""Vertical motion of the player sprite.

All quantities are per frame: one call to integrate() is one frame of
gravity no matter how long the frame took. The loop driver only bounds the
frame delta; it never scales these constants by it.
"""

from dataclasses import dataclass

from mouthtrap.game.geometry import Box


@dataclass
class PlayerState:
    x: float
    y: float
    size: float
    vy: float = 0.0

    @property
    def center_x(self) -> float:
        return self.x + self.size / 2

    def box(self) -> Box:
        return Box(self.x, self.y, self.size, self.size)


def apply_impulse(player: PlayerState, strength: float) -> None:
    """Flap: replace the vertical velocity, so repeated presses never stack."""
    player.vy = strength


def integrate(player: PlayerState, gravity: float) -> None:
    player.vy += gravity
    player.y += player.vy


def clamp_to_playfield(player: PlayerState, ground_limit: float) -> bool:
    """Keep the player inside [0, ground_limit].

    Hitting the ceiling just stops upward motion. Returns True when the
    player reached the ground, which ends the run.
    """
    if player.y < 0:
        player.y = 0.0
        player.vy = 0.0
    if player.y > ground_limit:
        player.y = ground_limit
        return True
    return False
