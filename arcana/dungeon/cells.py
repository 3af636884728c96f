from typing import Iterator, List, Tuple

from .tiles import WALL, TileKind

Grid = List[List[TileKind]]
FrozenGrid = Tuple[Tuple[TileKind, ...], ...]
Coord = Tuple[int, int]

ORTHOGONAL = ((0, -1), (0, 1), (-1, 0), (1, 0))  # N, S, W, E


def new_grid(width: int, height: int, fill: TileKind) -> Grid:
    """Row-major grid: ``grid[y][x]``."""
    return [[fill for _ in range(width)] for _ in range(height)]


def grid_size(grid) -> Tuple[int, int]:
    return (len(grid[0]) if grid else 0, len(grid))


def in_bounds(grid, x: int, y: int) -> bool:
    return 0 <= y < len(grid) and 0 <= x < len(grid[y])


def tile_at(grid, x: int, y: int) -> TileKind:
    """Kind at (x, y); anything off the map reads as WALL."""
    if not in_bounds(grid, x, y):
        return WALL
    return grid[y][x]


def orthogonal_neighbors(x: int, y: int) -> Iterator[Coord]:
    for dx, dy in ORTHOGONAL:
        yield x + dx, y + dy


def open_neighbor_count(grid, x: int, y: int) -> int:
    return sum(1 for nx, ny in orthogonal_neighbors(x, y) if tile_at(grid, nx, ny) != WALL)


def iter_cells(grid) -> Iterator[Tuple[int, int, TileKind]]:
    for y, row in enumerate(grid):
        for x, kind in enumerate(row):
            yield x, y, kind


def freeze(grid) -> FrozenGrid:
    return tuple(tuple(row) for row in grid)


def manhattan(a: Coord, b: Coord) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def chebyshev(a: Coord, b: Coord) -> int:
    return max(abs(a[0] - b[0]), abs(a[1] - b[1]))
