"""Configuration for MOUTH TRAP."""

from .settings import DisplaySettings, GameSettings, Settings, StorageSettings, get_settings

__all__ = ["DisplaySettings", "GameSettings", "Settings", "StorageSettings", "get_settings"]
