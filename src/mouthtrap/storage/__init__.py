"""Durable storage for MOUTH TRAP."""

from .best_score import BestScoreRepository, JsonFileStore, KeyValueStore, MemoryStore

__all__ = ["BestScoreRepository", "JsonFileStore", "KeyValueStore", "MemoryStore"]
