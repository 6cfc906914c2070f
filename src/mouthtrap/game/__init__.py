"""Game rules for MOUTH TRAP: physics, obstacles, scoring and the frame loop."""

from mouthtrap.game.geometry import Box, overlaps
from mouthtrap.game.obstacle import Obstacle, spawn_obstacle
from mouthtrap.game.physics import PlayerState
from mouthtrap.game.world import Simulation, WorldState
from mouthtrap.game.snapshot import RenderSnapshot, make_snapshot
from mouthtrap.game.loop import GameLoop

__all__ = [
    "Box",
    "overlaps",
    "Obstacle",
    "spawn_obstacle",
    "PlayerState",
    "Simulation",
    "WorldState",
    "RenderSnapshot",
    "make_snapshot",
    "GameLoop",
]
