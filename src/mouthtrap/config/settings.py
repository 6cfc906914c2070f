"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support,
e.g. ``MOUTHTRAP_GAME__GRAVITY=0.5`` or ``MOUTHTRAP_DEBUG=true``.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mouthtrap.core.exceptions import ConfigurationError


class GameSettings(BaseSettings):
    """Simulation constants.

    Gravity, flap strength and scroll speed are per-frame quantities,
    not per-second ones.
    """

    # Physics (pixels per frame)
    gravity: float = Field(default=0.45, gt=0)
    flap_strength: float = Field(default=-7.5, lt=0)

    # Obstacles
    gap_min: float = Field(default=140.0, gt=0)
    gap_max: float = Field(default=200.0, gt=0)
    obstacle_width: float = Field(default=70.0, gt=0)
    spawn_interval_ms: float = Field(default=1400.0, gt=0)
    scroll_speed: float = Field(default=2.6, gt=0)
    top_limit: float = Field(default=40.0, ge=0)
    bottom_margin: float = Field(default=40.0, ge=0)
    removal_threshold: float = -10.0

    # Player
    player_size: float = Field(default=32.0, gt=0)
    player_x_ratio: float = Field(default=0.28, ge=0.0, le=1.0)

    # Ground strip
    ground_height: float = Field(default=80.0, ge=0)

    # Loop
    max_frame_ms: float = Field(default=50.0, gt=0)

    @model_validator(mode="after")
    def _check_gap_range(self) -> "GameSettings":
        if self.gap_min > self.gap_max:
            raise ValueError("gap_min must not exceed gap_max")
        return self

    def spawn_ceiling(self, playfield_height: float) -> float:
        """Lowest allowed top height for the widest gap at this playfield height."""
        return playfield_height - self.ground_height - self.bottom_margin - self.gap_max

    def check_playfield(self, playfield_height: float) -> None:
        """Raise ConfigurationError if obstacles cannot be placed at this height."""
        if playfield_height <= 0:
            raise ConfigurationError(f"Playfield height must be positive, got {playfield_height}")
        ceiling = self.spawn_ceiling(playfield_height)
        if ceiling <= self.top_limit:
            raise ConfigurationError(
                f"Playfield height {playfield_height} leaves no room for a {self.gap_max}px gap "
                f"(placement envelope [{self.top_limit}, {ceiling}])"
            )


class DisplaySettings(BaseSettings):
    """Window and playfield sizing."""

    # Playfield aspect ratio (width:height)
    aspect_width: int = Field(default=2, gt=0)
    aspect_height: int = Field(default=3, gt=0)
    min_width: int = Field(default=320, gt=0)

    # Initial window
    window_width: int = Field(default=480, gt=0)
    window_height: int = Field(default=720, gt=0)
    resizable: bool = True

    fps: int = Field(default=60, gt=0)


class StorageSettings(BaseSettings):
    """Best score persistence."""

    store_path: Path = Field(default_factory=lambda: Path.home() / ".mouthtrap" / "storage.json")
    best_score_key: str = "mouth_trap_best"


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="MOUTHTRAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = False
    log_file: Path | None = None
    title: str = "MOUTH TRAP"

    # Paths
    assets_path: Path = Field(
        default_factory=lambda: Path(__file__).resolve().parent.parent.parent.parent / "assets"
    )

    # Nested settings
    game: GameSettings = Field(default_factory=GameSettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
