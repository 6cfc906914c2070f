"""Playfield sizing for arbitrary window sizes."""

from typing import Tuple

from mouthtrap.config.settings import DisplaySettings


def fit_playfield(viewport_width: int, viewport_height: int, display: DisplaySettings) -> Tuple[int, int]:
    """Size the playfield for a viewport.

    The playfield takes the full viewport width (never less than
    min_width) and the height matching the aspect ratio, but no taller
    than the viewport.
    """
    width = max(display.min_width, int(viewport_width))
    height_by_aspect = (display.aspect_height * width) // display.aspect_width
    height = min(height_by_aspect, int(viewport_height))
    return width, height
