# Tile kinds centralized for modular imports
from enum import Enum


class TileKind(str, Enum):
    """Closed set of tile kinds; the value is the single-char wire form."""

    UNEXPLORED = "?"
    WALL = "W"
    FLOOR = "F"
    DOOR = "D"
    ENCOUNTER = "E"
    TREASURE = "T"
    START = "S"

    @classmethod
    def from_char(cls, ch: str) -> "TileKind":
        return cls(ch)


UNEXPLORED = TileKind.UNEXPLORED
WALL = TileKind.WALL
FLOOR = TileKind.FLOOR
DOOR = TileKind.DOOR
ENCOUNTER = TileKind.ENCOUNTER
TREASURE = TileKind.TREASURE
START = TileKind.START

# Every kind the internal grid may hold (UNEXPLORED is visible-grid only)
INTERNAL_KINDS = frozenset(k for k in TileKind if k is not UNEXPLORED)
WALKABLE = frozenset({FLOOR, DOOR, ENCOUNTER, TREASURE, START})

__all__ = [
    "TileKind",
    "UNEXPLORED",
    "WALL",
    "FLOOR",
    "DOOR",
    "ENCOUNTER",
    "TREASURE",
    "START",
    "INTERNAL_KINDS",
    "WALKABLE",
]
