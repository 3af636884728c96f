from enum import Enum
from typing import Tuple


class Facing(Enum):
    """Cardinal facings in clockwise order; the value is the (dx, dy) step (y grows south)."""

    NORTH = (0, -1)
    EAST = (1, 0)
    SOUTH = (0, 1)
    WEST = (-1, 0)

    @property
    def delta(self) -> Tuple[int, int]:
        return self.value

    @property
    def left(self) -> "Facing":
        order = list(Facing)
        return order[(order.index(self) - 1) % len(order)]

    @property
    def right(self) -> "Facing":
        order = list(Facing)
        return order[(order.index(self) + 1) % len(order)]

    @classmethod
    def from_name(cls, name: str) -> "Facing":
        return cls[name.strip().upper()]
