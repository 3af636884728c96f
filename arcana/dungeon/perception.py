"""Fog-of-war reveal.

The visible grid only ever moves a cell from UNEXPLORED to whatever the
internal grid holds there; nothing here writes UNEXPLORED back.
"""

from __future__ import annotations

from .cells import Coord, Grid, in_bounds
from .tiles import UNEXPLORED

__all__ = ["REVEAL_RADIUS", "reveal_fog_of_war"]

REVEAL_RADIUS = 1


def reveal_fog_of_war(visible: Grid, internal: Grid, center: Coord, radius: int = REVEAL_RADIUS) -> int:
    """Copy internal kinds into ``visible`` for every in-bounds cell within Chebyshev ``radius``.

    Returns the number of cells that were UNEXPLORED before the call.
    """
    px, py = center
    newly = 0
    for y in range(py - radius, py + radius + 1):
        for x in range(px - radius, px + radius + 1):
            if not in_bounds(internal, x, y):
                continue
            if visible[y][x] == UNEXPLORED:
                newly += 1
            visible[y][x] = internal[y][x]
    return newly
