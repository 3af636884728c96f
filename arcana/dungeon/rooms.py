import random
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .cells import ORTHOGONAL, Coord, Grid, chebyshev, in_bounds, tile_at
from .tiles import TREASURE, WALL

ROOM_RADIUS = 1  # 3x3 block
ROOM_CLEARANCE = 2  # 5x5 neighbourhood must be solid wall


@dataclass
class RoomSite:
    dead_end: Coord
    connection: Coord
    center: Coord

    def cells(self):
        cx, cy = self.center
        for iy in range(cy - ROOM_RADIUS, cy + ROOM_RADIUS + 1):
            for ix in range(cx - ROOM_RADIUS, cx + ROOM_RADIUS + 1):
                yield ix, iy


def room_site(grid: Grid, dead_end: Coord) -> Optional[RoomSite]:
    """Site extending the corridor through ``dead_end``.

    The connection cell sits one step past the dead end (away from its only open
    neighbour) and the 3x3 block starts two steps past it.
    """
    x, y = dead_end
    for dx, dy in ORTHOGONAL:
        if tile_at(grid, x + dx, y + dy) != WALL:
            return RoomSite(
                dead_end=dead_end,
                connection=(x - dx, y - dy),
                center=(x - dx * (ROOM_RADIUS + 2), y - dy * (ROOM_RADIUS + 2)),
            )
    return None


def can_carve_room(grid: Grid, center: Coord) -> bool:
    cx, cy = center
    for y in range(cy - ROOM_CLEARANCE, cy + ROOM_CLEARANCE + 1):
        for x in range(cx - ROOM_CLEARANCE, cx + ROOM_CLEARANCE + 1):
            if not in_bounds(grid, x, y) or grid[y][x] != WALL:
                return False
    return True


def carve_room(grid: Grid, site: RoomSite) -> None:
    for x, y in site.cells():
        grid[y][x] = TREASURE
    cx, cy = site.connection
    grid[cy][cx] = TREASURE


def place_treasure_rooms(
    grid: Grid,
    dead_ends: Iterable[Coord],
    rng: random.Random,
    min_rooms: int = 3,
    max_rooms: int = 5,
    spacing: int = 5,
) -> Tuple[List[Coord], int, int]:
    """Carve treasure rooms off shuffled dead ends.

    Returns (centers, target, skipped). Candidates that overlap existing
    structure, leave the map or crowd an earlier room are skipped, not retried.

    Note: after a full DFS carve every odd/odd interior cell is FLOOR, so no
    5x5 window of a generated maze is solid wall and ``generate`` places no
    rooms; rooms only land on sparser hand-built grids.
    """
    candidates = list(dead_ends)
    rng.shuffle(candidates)
    target = rng.randint(min_rooms, max_rooms)
    centers: List[Coord] = []
    skipped = 0
    for dead_end in candidates:
        if len(centers) >= target:
            break
        site = room_site(grid, dead_end)
        if site is None:
            skipped += 1
            continue
        too_close = any(chebyshev(site.center, c) < spacing for c in centers)
        if too_close or not can_carve_room(grid, site.center):
            skipped += 1
            continue
        carve_room(grid, site)
        centers.append(site.center)
    return centers, target, skipped
