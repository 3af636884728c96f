"""Public dungeon package interface."""

from .config import DungeonConfig, DungeonConfigError
from .facing import Facing
from .pipeline import GenerationResult, generate
from .registry import SessionRegistry
from .session import DungeonSession, MoveOutcome, Snapshot
from .tiles import (
    DOOR,
    ENCOUNTER,
    FLOOR,
    START,
    TREASURE,
    UNEXPLORED,
    WALL,
    TileKind,
)  # noqa: F401

__all__ = [
    "DungeonConfig",
    "DungeonConfigError",
    "DungeonSession",
    "Facing",
    "GenerationResult",
    "MoveOutcome",
    "SessionRegistry",
    "Snapshot",
    "generate",
    "TileKind",
    "UNEXPLORED",
    "WALL",
    "FLOOR",
    "DOOR",
    "ENCOUNTER",
    "TREASURE",
    "START",
]
