import random

import pytest

from mouthtrap.game.physics import PlayerState, apply_impulse, clamp_to_playfield, integrate

GROUND_LIMIT = 608.0


def test_impulse_overrides_velocity():
    p = PlayerState(x=0, y=300, size=32, vy=12.0)
    apply_impulse(p, -7.5)
    assert p.vy == -7.5

    # Chained presses do not compound
    apply_impulse(p, -7.5)
    assert p.vy == -7.5


def test_integrate_is_per_frame():
    p = PlayerState(x=0, y=100, size=32, vy=0.0)
    integrate(p, 0.45)
    assert p.vy == pytest.approx(0.45)
    assert p.y == pytest.approx(100.45)
    integrate(p, 0.45)
    assert p.vy == pytest.approx(0.9)
    assert p.y == pytest.approx(101.35)


def test_ceiling_stops_without_ending_run():
    p = PlayerState(x=0, y=3, size=32, vy=-7.5)
    integrate(p, 0.45)
    assert clamp_to_playfield(p, GROUND_LIMIT) is False
    assert p.y == 0.0
    assert p.vy == 0.0


def test_ground_contact_is_fatal():
    p = PlayerState(x=0, y=605, size=32, vy=5.0)
    integrate(p, 0.45)
    assert clamp_to_playfield(p, GROUND_LIMIT) is True
    assert p.y == GROUND_LIMIT


def test_position_always_within_bounds():
    rng = random.Random(7)
    p = PlayerState(x=0, y=300, size=32)
    for _ in range(2000):
        if rng.random() < 0.1:
            apply_impulse(p, -7.5)
        if rng.random() < 0.01:
            p.vy = rng.uniform(-100, 100)
        integrate(p, 0.45)
        clamp_to_playfield(p, GROUND_LIMIT)
        assert 0.0 <= p.y <= GROUND_LIMIT
