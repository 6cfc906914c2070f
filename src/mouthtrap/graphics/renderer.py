"""Draws MOUTH TRAP screens onto pygame surfaces.

The backdrop, ground strips and teeth are composed in a numpy buffer and
pushed to the surface in one go; the rotated player sprite and the text
are drawn with pygame on top.
"""

import logging
import math
from typing import Dict, Optional, Tuple

import numpy as np
import pygame

from mouthtrap.game.snapshot import PlayerSnapshot, RenderSnapshot
from mouthtrap.graphics.assets import BACKGROUND, GROUND, MOUTH, TONGUE, AssetLibrary
from mouthtrap.graphics.primitives import (
    Buffer, Color, draw_image, draw_rect, draw_scrolled, fill, new_buffer, tile_cover,
)

logger = logging.getLogger(__name__)


class GameRenderer:
    """Renders the loading screen, the landing screen and game frames."""

    SKY: Color = (0x70, 0xC5, 0xCE)
    STRIPE: Color = (0x8B, 0xE0, 0xEC)
    TOOTH: Color = (0xFF, 0xF2, 0x00)
    TOOTH_LIP: Color = (0xE0, 0xC7, 0x00)
    FACE: Color = (0xFF, 0xD1, 0x66)
    EYE: Color = (0, 0, 0)
    TONGUE_RED: Color = (0xFF, 0x6B, 0x6B)
    TEXT: Color = (255, 255, 255)
    SHADOW: Color = (40, 40, 40)
    LOADING_BG: Color = (0x0B, 0x18, 0x20)
    BUTTON: Color = (0xFF, 0xF2, 0x00)
    BUTTON_TEXT: Color = (0, 0, 0)

    BACKGROUND_ALPHA = 0.6
    STRIPE_SPACING = 120
    LIP_HEIGHT = 10
    LIP_OVERHANG = 4
    BUTTON_SIZE = (200, 60)

    def __init__(self, assets: AssetLibrary) -> None:
        self.assets = assets
        self._fonts: Dict[Tuple[int, bool], pygame.font.Font] = {}
        self._tiled: Dict[Tuple[int, int], Tuple[np.ndarray, np.ndarray]] = {}

    # Screens
    def render_loading(self, surface: pygame.Surface) -> None:
        w, h = surface.get_size()
        surface.fill(self.LOADING_BG)
        self._text(surface, "LOADING...", 32, (w / 2, h / 2))

    def render_landing(self, surface: pygame.Surface, ground_height: float) -> None:
        w, h = surface.get_size()
        buffer = self._backdrop(w, h, 0.0, ground_height)

        bx, by, bw, bh = self.button_rect(w, h)
        draw_rect(buffer, bx, by, bw, bh, self.BUTTON)
        self._blit_buffer(surface, buffer)

        self._text(surface, "MOUTH TRAP", 64, (w / 2, h * 0.4), shadow=2)
        self._text(surface, "CLICK ANYWHERE TO START PLAYING!", 20, (w / 2, h * 0.5), shadow=1)
        self._text(surface, "START GAME", 26, (w / 2, by + bh / 2), color=self.BUTTON_TEXT)

    def render_game(self, surface: pygame.Surface, snap: RenderSnapshot) -> None:
        w, h = surface.get_size()
        buffer = self._backdrop(w, h, snap.background_offset, snap.ground_height)

        floor_y = snap.floor_y
        for o in snap.obstacles:
            gap_bottom = o.top_height + o.gap
            draw_rect(buffer, o.x, 0, o.width, o.top_height, self.TOOTH)
            draw_rect(buffer, o.x, gap_bottom, o.width, floor_y - gap_bottom, self.TOOTH)

            lip_x = o.x - self.LIP_OVERHANG
            lip_w = o.width + 2 * self.LIP_OVERHANG
            draw_rect(buffer, lip_x, o.top_height - self.LIP_HEIGHT, lip_w, self.LIP_HEIGHT, self.TOOTH_LIP)
            draw_rect(buffer, lip_x, gap_bottom, lip_w, self.LIP_HEIGHT, self.TOOTH_LIP)

        self._blit_buffer(surface, buffer)
        self._draw_player(surface, snap.player)
        self._draw_hud(surface, snap)

    @classmethod
    def button_rect(cls, width: float, height: float) -> Tuple[int, int, int, int]:
        bw, bh = cls.BUTTON_SIZE
        return int((width - bw) / 2), int(height * 0.6), bw, bh

    # Buffer layers
    def _backdrop(self, w: int, h: int, offset: float, ground_height: float) -> Buffer:
        buffer = new_buffer(w, h)

        texture = self.assets.rgba(BACKGROUND)
        if texture is not None:
            tiled = self._tiled_background(texture, w, h)
            draw_scrolled(buffer, tiled, texture.shape[1], offset_x=offset, alpha=self.BACKGROUND_ALPHA)
        else:
            fill(buffer, self.SKY)
            start = -(int(offset) % self.STRIPE_SPACING)
            for x in range(start, w, self.STRIPE_SPACING):
                draw_rect(buffer, x, 120, 60, 10, self.STRIPE)

        gh = int(ground_height)
        ground = self.assets.rgba(GROUND, (w, gh)) if gh > 0 else None
        if ground is not None:
            draw_image(buffer, ground, 0, h - gh)
            # Same strip mirrored along the top edge
            draw_image(buffer, np.flipud(ground), 0, 0)

        return buffer

    def _tiled_background(self, texture: np.ndarray, w: int, h: int) -> np.ndarray:
        # Rebuilt only when the playfield size changes
        cached = self._tiled.get((w, h))
        if cached is None or cached[0] is not texture:
            cached = (texture, tile_cover(texture, w, h))
            self._tiled = {(w, h): cached}
        return cached[1]

    @staticmethod
    def _blit_buffer(surface: pygame.Surface, buffer: Buffer) -> None:
        frame = pygame.surfarray.make_surface(buffer.swapaxes(0, 1))
        surface.blit(frame, (0, 0))

    # Sprites
    def _draw_player(self, surface: pygame.Surface, player: PlayerSnapshot) -> None:
        size = max(1, int(player.size))
        sprite = self.assets.surface(MOUTH, (size, size))
        if sprite is None:
            sprite = self._fallback_sprite(size)

        # Screen y points down, so a positive tilt turns the sprite clockwise
        rotated = pygame.transform.rotate(sprite, -math.degrees(player.tilt))
        center = (player.x + player.size / 2, player.y + player.size / 2)
        surface.blit(rotated, rotated.get_rect(center=(int(center[0]), int(center[1]))))

    def _fallback_sprite(self, size: int) -> pygame.Surface:
        """Round face with an eye and a tongue poking out to the right."""
        # Twice the size so the tongue fits and rotation stays centred
        sprite = pygame.Surface((size * 2, size * 2), pygame.SRCALPHA)
        c = size

        pygame.draw.circle(sprite, self.FACE, (c, c), size // 2)
        pygame.draw.circle(sprite, self.EYE, (c + size // 6, c - size // 6), 3)

        tongue_w, tongue_h = 12, 8
        tongue_pos = (c + size // 2 - 4, c - tongue_h // 2)
        decal = self.assets.surface(TONGUE, (tongue_w, tongue_h))
        if decal is not None:
            sprite.blit(decal, tongue_pos)
        else:
            pygame.draw.rect(sprite, self.TONGUE_RED, pygame.Rect(tongue_pos, (tongue_w, tongue_h)))
        return sprite

    # Text
    def _draw_hud(self, surface: pygame.Surface, snap: RenderSnapshot) -> None:
        w, h = surface.get_size()
        self._text(surface, f"SCORE: {snap.score}", 32, (18, h / 2 - 20), anchor="midleft")
        self._text(surface, f"BEST: {snap.best_score}", 32, (18, h / 2 + 20), anchor="midleft")

        if not snap.running:
            self._text(surface, "CLICK OR PRESS SPACE TO START", 24, (w / 2, h * 0.42))

        if snap.game_over:
            self._text(surface, "GAME OVER", 40, (w / 2, h * 0.45))
            self._text(surface, "CLICK OR PRESS SPACE TO RESTART", 22, (w / 2, h * 0.52))

    def _font(self, size: int, bold: bool = True) -> pygame.font.Font:
        key = (size, bold)
        if key not in self._fonts:
            if not pygame.font.get_init():
                pygame.font.init()
            font = pygame.font.Font(None, size)
            font.set_bold(bold)
            self._fonts[key] = font
        return self._fonts[key]

    def _text(
        self,
        surface: pygame.Surface,
        text: str,
        size: int,
        pos: Tuple[float, float],
        *,
        color: Optional[Color] = None,
        anchor: str = "center",
        shadow: int = 0,
    ) -> pygame.Rect:
        font = self._font(size)
        point = (int(pos[0]), int(pos[1]))

        if shadow:
            shade = font.render(text, True, self.SHADOW)
            rect = shade.get_rect(**{anchor: (point[0] + shadow, point[1] + shadow)})
            surface.blit(shade, rect)

        rendered = font.render(text, True, color or self.TEXT)
        rect = rendered.get_rect(**{anchor: point})
        surface.blit(rendered, rect)
        return rect
