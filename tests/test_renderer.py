import pygame
import pytest

from mouthtrap.core.events import EventBus, EventType
from mouthtrap.game.obstacle import Obstacle
from mouthtrap.game.physics import PlayerState
from mouthtrap.game.snapshot import make_snapshot
from mouthtrap.game.world import WorldState
from mouthtrap.graphics.assets import BACKGROUND, GROUND, MOUTH, TONGUE, AssetLibrary
from mouthtrap.graphics.renderer import GameRenderer

WIDTH, HEIGHT, GROUND_HEIGHT = 480, 720, 80


@pytest.fixture(scope="module", autouse=True)
def headless_pygame():
    pygame.init()
    yield
    pygame.quit()


def save_image(path, color, size=(16, 16)):
    image = pygame.Surface(size)
    image.fill(color)
    pygame.image.save(image, str(path))


def rgb(surface, x, y):
    return tuple(surface.get_at((x, y)))[:3]


def game_frame(**world_fields):
    world = WorldState(player=PlayerState(x=134.4, y=360.0, size=32.0), running=True, **world_fields)
    return make_snapshot(world, WIDTH, HEIGHT, GROUND_HEIGHT)


def test_missing_assets_all_fail(tmp_path):
    bus = EventBus()
    assets = AssetLibrary(tmp_path, event_bus=bus)

    assets.load_all()

    assert not assets.pending
    for name in (BACKGROUND, GROUND, MOUTH, TONGUE):
        assert assets.is_settled(name)
        assert not assets.is_ready(name)
        assert assets.surface(name) is None
    loaded = bus.get_history(EventType.ASSET_LOADED)
    assert [e.data["name"] for e in loaded] == [BACKGROUND, GROUND, MOUTH, TONGUE]
    assert not any(e.data["ready"] for e in loaded)


def test_load_next_is_one_at_a_time(tmp_path):
    assets = AssetLibrary(tmp_path)
    assert assets.load_next() is True
    assert assets.is_settled(BACKGROUND)
    assert not assets.is_settled(GROUND)


def test_background_falls_back_to_jpg(tmp_path):
    save_image(tmp_path / "backgroundtexture.jpg", (90, 140, 200))
    assets = AssetLibrary(tmp_path)

    assets.load_all()

    assert assets.is_ready(BACKGROUND)
    assert assets.surface(BACKGROUND).get_size() == (16, 16)
    assert assets.rgba(BACKGROUND).shape == (16, 16, 4)


def test_scaled_surfaces_are_cached(tmp_path):
    save_image(tmp_path / "tongue-img.png", (10, 20, 30))
    assets = AssetLibrary(tmp_path)
    assets.load_all()

    first = assets.surface(MOUTH, (32, 32))
    assert first.get_size() == (32, 32)
    assert assets.surface(MOUTH, (32, 32)) is first


def test_game_frame_with_fallbacks(tmp_path):
    assets = AssetLibrary(tmp_path)
    assets.load_all()
    renderer = GameRenderer(assets)
    surface = pygame.Surface((WIDTH, HEIGHT))

    snap = game_frame(obstacles=[Obstacle(x=300.0, width=70.0, top_height=100.0, gap=200.0)])
    renderer.render_game(surface, snap)

    assert rgb(surface, 450, 300) == GameRenderer.SKY
    assert rgb(surface, 330, 50) == GameRenderer.TOOTH
    assert rgb(surface, 330, 500) == GameRenderer.TOOTH
    assert rgb(surface, 330, 95) == GameRenderer.TOOTH_LIP
    # Inside the gap
    assert rgb(surface, 330, 200) == GameRenderer.SKY


def test_ground_strip_top_and_bottom(tmp_path):
    ground = (200, 0, 0)
    save_image(tmp_path / "teethbackground.png", ground)
    assets = AssetLibrary(tmp_path)
    assets.load_all()
    surface = pygame.Surface((WIDTH, HEIGHT))

    GameRenderer(assets).render_game(surface, game_frame())

    assert rgb(surface, 240, HEIGHT - 10) == ground
    assert rgb(surface, 240, 10) == ground
    assert rgb(surface, 450, 300) == GameRenderer.SKY


def test_background_texture_is_dimmed(tmp_path):
    save_image(tmp_path / "backgroundtexture.png", (100, 200, 50))
    assets = AssetLibrary(tmp_path)
    assets.load_all()
    surface = pygame.Surface((WIDTH, HEIGHT))

    GameRenderer(assets).render_game(surface, game_frame(background_offset=37.0))

    r, g, b = rgb(surface, 450, 300)
    assert r == pytest.approx(60, abs=1)
    assert g == pytest.approx(120, abs=1)
    assert b == pytest.approx(30, abs=1)


def test_landing_and_loading_screens(tmp_path):
    assets = AssetLibrary(tmp_path)
    assets.load_all()
    renderer = GameRenderer(assets)
    surface = pygame.Surface((WIDTH, HEIGHT))

    renderer.render_loading(surface)
    assert rgb(surface, 5, 5) == GameRenderer.LOADING_BG

    renderer.render_landing(surface, GROUND_HEIGHT)
    bx, by, bw, bh = GameRenderer.button_rect(WIDTH, HEIGHT)
    assert (bx, by, bw, bh) == (140, 432, 200, 60)
    assert rgb(surface, bx + 3, by + 3) == GameRenderer.BUTTON
    assert rgb(surface, 5, 300) == GameRenderer.SKY


def test_rgba_arrays_are_cached(tmp_path):
    save_image(tmp_path / "teethbackground.png", (200, 0, 0))
    assets = AssetLibrary(tmp_path)
    assets.load_all()

    strip = assets.rgba(GROUND, (WIDTH, GROUND_HEIGHT))
    assert strip.shape == (GROUND_HEIGHT, WIDTH, 4)
    assert assets.rgba(GROUND, (WIDTH, GROUND_HEIGHT)) is strip
    assert assets.rgba(GROUND) is assets.rgba(GROUND)


def test_tiled_background_reused_between_frames(tmp_path):
    save_image(tmp_path / "backgroundtexture.png", (100, 200, 50), size=(50, 40))
    assets = AssetLibrary(tmp_path)
    assets.load_all()
    renderer = GameRenderer(assets)
    surface = pygame.Surface((WIDTH, HEIGHT))

    renderer.render_game(surface, game_frame())
    tiled = renderer._tiled[(WIDTH, HEIGHT)][1]
    # ceil(480 / 50) + 1 tiles across
    assert tiled.shape == (HEIGHT, 11 * 50, 4)

    renderer.render_game(surface, game_frame(background_offset=99.0))
    assert renderer._tiled[(WIDTH, HEIGHT)][1] is tiled
