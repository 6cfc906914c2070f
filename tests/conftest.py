import os

# Headless pygame for renderer/asset tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from mouthtrap.config.settings import GameSettings
from mouthtrap.core.events import EventBus
from mouthtrap.game.world import Simulation
from mouthtrap.storage.best_score import BestScoreRepository, MemoryStore


class ScriptedRandom:
    """RandomSource returning a fixed sequence, then repeating the last value."""

    def __init__(self, *values: float) -> None:
        self._values = list(values) or [0.5]
        self.calls = 0

    def random(self) -> float:
        value = self._values[min(self.calls, len(self._values) - 1)]
        self.calls += 1
        return value


class RecordingStore(MemoryStore):
    def __init__(self, initial=None) -> None:
        super().__init__(initial)
        self.writes: list[tuple[str, str]] = []

    def set(self, key: str, value: str) -> None:
        self.writes.append((key, value))
        super().set(key, value)


@pytest.fixture
def config() -> GameSettings:
    return GameSettings()


@pytest.fixture
def store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def make_sim(config, store, event_bus):
    def factory(width: float = 480, height: float = 720, *, rng=None, best: int | None = None) -> Simulation:
        if best is not None:
            store.set("mouth_trap_best", str(best))
            store.writes.clear()
        return Simulation(
            config,
            width,
            height,
            best_scores=BestScoreRepository(store),
            rng=rng or ScriptedRandom(0.5),
            event_bus=event_bus,
        )
    return factory
