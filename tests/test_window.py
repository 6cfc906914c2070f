import asyncio

import pygame
import pytest

from mouthtrap.config.settings import Settings
from mouthtrap.core.events import activate_event, resize_event
from mouthtrap.core.state import State
from mouthtrap.graphics.assets import AssetLibrary
from mouthtrap.simulator.window import SCREEN_GAME, SCREEN_LANDING, SCREEN_LOADING, GameWindow


@pytest.fixture
def window(make_sim, event_bus, tmp_path):
    settings = Settings(_env_file=None)
    return GameWindow(
        settings=settings,
        simulation=make_sim(),
        assets=AssetLibrary(tmp_path, event_bus=event_bus),
        event_bus=event_bus,
    )


def finish_loading(window):
    while window.assets.pending:
        window._advance_loading()


def test_landing_once_background_settles(window):
    assert window.mode == SCREEN_LOADING
    window._advance_loading()
    assert window.mode == SCREEN_LANDING
    assert window.assets.pending


def test_activate_flow(window, event_bus):
    event_bus.emit(activate_event())
    assert window.mode == SCREEN_LOADING
    assert window.simulation.phase is State.IDLE

    finish_loading(window)
    event_bus.emit(activate_event("pointer"))
    assert window.mode == SCREEN_GAME
    assert window.simulation.phase is State.IDLE
    assert not window.loop.running

    event_bus.emit(activate_event("touch"))
    assert window.simulation.phase is State.RUNNING
    assert window.loop.running

    window._run_frame_callbacks()
    assert window.loop.frames == 1


def test_buttons_emit_activate(window, event_bus):
    finish_loading(window)
    window.key_button.press()
    window.key_button.press()  # held
    assert window.mode == SCREEN_GAME
    assert window.simulation.phase is State.IDLE

    window.key_button.release()
    window.key_button.press()
    assert window.simulation.phase is State.RUNNING


def test_resize_fits_playfield(window, event_bus):
    event_bus.emit(resize_event(1000, 800))
    assert (window.simulation.width, window.simulation.height) == (1000, 800)

    # Too short for an obstacle gap: the old size stays
    event_bus.emit(resize_event(400, 200))
    assert (window.simulation.width, window.simulation.height) == (1000, 800)


def test_window_resize_applies_on_next_frame(window, monkeypatch):
    resized = pygame.event.Event(pygame.VIDEORESIZE, w=1000, h=2000, size=(1000, 2000))
    monkeypatch.setattr(pygame.event, "get", lambda: [resized])

    window._handle_events()
    assert (window.simulation.width, window.simulation.height) == (480, 720)

    asyncio.run(window.event_bus.process_queue())
    assert (window.simulation.width, window.simulation.height) == (1000, 1500)
