"""Core structural generation phases: grid init, DFS corridor carving, loop injection, dead ends, special tiles."""
from __future__ import annotations

import logging
import random
from typing import List, Optional, Tuple

from .cells import Coord, Grid, iter_cells, manhattan, new_grid, open_neighbor_count
from .tiles import DOOR, ENCOUNTER, FLOOR, START, WALL

ORIGIN: Coord = (1, 1)
CARVE_STEPS = ((0, -2), (0, 2), (-2, 0), (2, 0))

logger = logging.getLogger(__name__)


def find_dead_ends(grid: Grid) -> List[Coord]:
    """Non-wall interior cells with exactly one non-wall orthogonal neighbour, in scan order."""
    height = len(grid)
    width = len(grid[0]) if grid else 0
    return [
        (x, y)
        for x, y, kind in iter_cells(grid)
        if 0 < x < width - 1 and 0 < y < height - 1 and kind != WALL and open_neighbor_count(grid, x, y) == 1
    ]


class Generator:
    def __init__(self, width: int, height: int, rng: random.Random, loop_chance: float = 0.20):
        self.width = width
        self.height = height
        self.rng = rng
        self.loop_chance = loop_chance

    def init_grid(self) -> Grid:
        return new_grid(self.width, self.height, WALL)

    def _is_interior(self, x: int, y: int) -> bool:
        return 1 <= x <= self.width - 2 and 1 <= y <= self.height - 2

    def _shuffled_steps(self):
        steps = list(CARVE_STEPS)
        self.rng.shuffle(steps)
        return iter(steps)

    def carve_maze(self, grid: Grid, origin: Coord = ORIGIN) -> int:
        """Randomized depth-first carve of a perfect maze.

        Each stack frame keeps its own shuffled step iterator so resuming a cell
        continues where it left off (same visit order as the recursive form).
        Cells are set to FLOOR when first carved, never when popped.
        Returns the number of cells carved.
        """
        ox, oy = origin
        grid[oy][ox] = FLOOR
        carved = 1
        stack = [(ox, oy, self._shuffled_steps())]
        while stack:
            x, y, steps = stack[-1]
            for dx, dy in steps:
                nx, ny = x + dx, y + dy
                if self._is_interior(nx, ny) and grid[ny][nx] == WALL:
                    grid[y + dy // 2][x + dx // 2] = FLOOR
                    grid[ny][nx] = FLOOR
                    carved += 2
                    stack.append((nx, ny, self._shuffled_steps()))
                    break
            else:
                stack.pop()
        return carved

    def add_loops(self, grid: Grid) -> int:
        """Open interior walls that separate two passages; only ever adds edges."""
        loops = 0
        if self.loop_chance <= 0:
            return loops
        for y in range(1, self.height - 1):
            for x in range(1, self.width - 1):
                if grid[y][x] != WALL:
                    continue
                horizontal = grid[y][x - 1] != WALL and grid[y][x + 1] != WALL
                vertical = grid[y - 1][x] != WALL and grid[y + 1][x] != WALL
                if not (horizontal or vertical):
                    continue
                if self.rng.random() < self.loop_chance:
                    grid[y][x] = FLOOR
                    loops += 1
        return loops

    def place_special_tiles(self, grid: Grid, start: Coord = ORIGIN) -> Tuple[Coord, Optional[Coord], bool]:
        """Mark START, then DOOR on the farthest floor dead end, then a random ENCOUNTER.

        Returns (door, encounter, door_fallback). ``encounter`` is None only when no
        floor cell remains, which a valid (>= 5x5) maze never produces.
        """
        sx, sy = start
        grid[sy][sx] = START
        floors = [(x, y) for x, y, kind in iter_cells(grid) if kind == FLOOR]
        dead_ends = [c for c in find_dead_ends(grid) if grid[c[1]][c[0]] == FLOOR]
        door_fallback = not dead_ends
        if dead_ends:
            door = max(dead_ends, key=lambda c: manhattan(c, start))
        else:
            door = self.rng.choice(floors)
        grid[door[1]][door[0]] = DOOR
        floors.remove(door)
        encounter = None
        if floors:
            encounter = self.rng.choice(floors)
            grid[encounter[1]][encounter[0]] = ENCOUNTER
        else:
            logger.warning("No floor left for encounter placement size=%sx%s", self.width, self.height)
        return door, encounter, door_fallback
