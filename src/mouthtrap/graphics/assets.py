"""
Image assets with fallbacks.

Assets are loaded one per frame while the loading screen is up, so the
window never stalls on disk I/O. Each asset ends up either ready or
failed; renderers check is_ready() and draw shapes for anything missing.
The simulation never looks at assets.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import numpy as np
import pygame
from numpy.typing import NDArray

from mouthtrap.core.events import Event, EventBus, EventType

logger = logging.getLogger(__name__)

BACKGROUND = "background"
GROUND = "ground"
MOUTH = "mouth"
TONGUE = "tongue"

# Asset name -> candidate files, tried in order
DEFAULT_ASSETS: Dict[str, Tuple[str, ...]] = {
    BACKGROUND: ("backgroundtexture.png", "backgroundtexture.jpg"),
    GROUND: ("teethbackground.png",),
    MOUTH: ("tongue-img.png",),
    TONGUE: ("tongue-small.png",),
}


@dataclass
class Asset:
    name: str
    candidates: Tuple[str, ...]
    surface: Optional[pygame.Surface] = None
    failed: bool = False
    source: Optional[Path] = None

    @property
    def ready(self) -> bool:
        return self.surface is not None

    @property
    def settled(self) -> bool:
        return self.ready or self.failed


@dataclass
class AssetLibrary:
    """Loads and caches the game's images."""

    base_path: Path
    event_bus: Optional[EventBus] = None
    specs: Dict[str, Tuple[str, ...]] = field(default_factory=lambda: dict(DEFAULT_ASSETS))

    def __post_init__(self) -> None:
        self._assets: Dict[str, Asset] = {
            name: Asset(name=name, candidates=files) for name, files in self.specs.items()
        }
        self._pending: List[str] = list(self.specs)
        self._scaled: Dict[Tuple[str, int, int], pygame.Surface] = {}
        self._arrays: Dict[Tuple[str, int, int], NDArray[np.uint8]] = {}

    @property
    def pending(self) -> bool:
        return bool(self._pending)

    def is_ready(self, name: str) -> bool:
        asset = self._assets.get(name)
        return asset is not None and asset.ready

    def is_settled(self, name: str) -> bool:
        asset = self._assets.get(name)
        return asset is None or asset.settled

    def load_next(self) -> bool:
        """Load the next pending asset. Returns True while more remain."""
        if self._pending:
            self._load(self._assets[self._pending.pop(0)])
        return bool(self._pending)

    def load_all(self) -> None:
        while self.load_next():
            pass

    def surface(self, name: str, size: Optional[Tuple[int, int]] = None) -> Optional[pygame.Surface]:
        """Get an asset surface, optionally scaled (cached per size)."""
        asset = self._assets.get(name)
        if asset is None or asset.surface is None:
            return None
        if size is None or size == asset.surface.get_size():
            return asset.surface

        w, h = max(1, int(size[0])), max(1, int(size[1]))
        key = (name, w, h)
        if key not in self._scaled:
            self._scaled[key] = pygame.transform.smoothscale(asset.surface, (w, h))
        return self._scaled[key]

    def rgba(self, name: str, size: Optional[Tuple[int, int]] = None) -> Optional[NDArray[np.uint8]]:
        """Get an asset as a (height, width, 4) array for buffer drawing."""
        surf = self.surface(name, size)
        if surf is None:
            return None
        w, h = surf.get_size()
        key = (name, w, h)
        if key not in self._arrays:
            self._arrays[key] = np.frombuffer(pygame.image.tobytes(surf, "RGBA"), dtype=np.uint8).reshape(h, w, 4)
        return self._arrays[key]

    def _load(self, asset: Asset) -> None:
        for filename in asset.candidates:
            path = self.base_path / filename
            try:
                loaded = pygame.image.load(str(path))
            except (pygame.error, FileNotFoundError, OSError) as e:
                logger.warning(f"Asset {asset.name}: cannot load {path}: {e}")
                continue

            # Normalise to 32-bit RGBA so scaling and byte export always work
            size = loaded.get_size()
            asset.surface = pygame.image.frombytes(pygame.image.tobytes(loaded, "RGBA"), size, "RGBA")
            asset.source = path
            logger.info(f"Asset {asset.name} loaded from {path.name} ({size[0]}x{size[1]})")
            break
        else:
            asset.failed = True
            logger.warning(f"Asset {asset.name} unavailable, using fallback drawing")

        if self.event_bus is not None:
            self.event_bus.emit(Event(
                EventType.ASSET_LOADED,
                data={"name": asset.name, "ready": asset.ready},
                source="assets",
            ))
