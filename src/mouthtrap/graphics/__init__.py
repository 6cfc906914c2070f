"""Graphics for MOUTH TRAP: layout, assets and rendering."""

from mouthtrap.graphics.layout import fit_playfield
from mouthtrap.graphics.assets import AssetLibrary
from mouthtrap.graphics.renderer import GameRenderer

__all__ = ["fit_playfield", "AssetLibrary", "GameRenderer"]
