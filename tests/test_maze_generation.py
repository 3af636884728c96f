import random

import pytest

from arcana.dungeon import DOOR, ENCOUNTER, START, UNEXPLORED, WALL, DungeonConfig, DungeonConfigError, generate
from arcana.dungeon.cells import manhattan
from arcana.dungeon.generator import find_dead_ends

from dungeon_test_utils import bfs_reachable, count_kind, rows_of, walkable_cells

SEEDS = [1, 7, 42, 101, 2024]


@pytest.mark.parametrize("seed", SEEDS)
def test_single_start_door_and_encounter(seed):
    result = generate(25, 25, random.Random(seed))
    assert count_kind(result.grid, START) == 1
    assert count_kind(result.grid, DOOR) == 1
    assert count_kind(result.grid, ENCOUNTER) == 1
    assert result.start == (1, 1)
    assert result.grid[1][1] == START
    dx, dy = result.door
    assert result.grid[dy][dx] == DOOR


@pytest.mark.parametrize("size", [(5, 5), (7, 11), (25, 25), (41, 21)])
def test_every_walkable_cell_reachable_from_start(size):
    width, height = size
    for seed in SEEDS:
        result = generate(width, height, random.Random(seed))
        reach = bfs_reachable(result.grid, result.start)
        assert reach == walkable_cells(result.grid), f"disconnected maze seed={seed} size={size}"


def test_border_is_solid_wall_and_nothing_unexplored():
    result = generate(31, 21, random.Random(3))
    h, w = len(result.grid), len(result.grid[0])
    assert (w, h) == (31, 21)
    for x in range(w):
        assert result.grid[0][x] == WALL
        assert result.grid[h - 1][x] == WALL
    for y in range(h):
        assert result.grid[y][0] == WALL
        assert result.grid[y][w - 1] == WALL
    assert count_kind(result.grid, UNEXPLORED) == 0


@pytest.mark.parametrize("seed", SEEDS)
def test_door_is_farthest_dead_end_from_start(seed):
    result = generate(25, 25, random.Random(seed))
    if result.metrics["door_fallback"]:
        pytest.skip("maze without floor dead ends")
    dead_ends = find_dead_ends(result.grid)
    assert result.door in dead_ends
    door_distance = manhattan(result.door, result.start)
    for x, y in dead_ends:
        if result.grid[y][x] in (DOOR, START):
            continue
        assert manhattan((x, y), result.start) <= door_distance


def test_same_seed_same_layout():
    a = generate(25, 25, random.Random(99))
    b = generate(25, 25, random.Random(99))
    c = generate(25, 25, random.Random(100))
    assert rows_of(a.grid) == rows_of(b.grid)
    assert a.door == b.door and a.encounter == b.encounter
    assert rows_of(a.grid) != rows_of(c.grid)


def test_config_seed_used_when_no_rng_given():
    cfg = DungeonConfig(width=15, height=15, seed=1234)
    a = generate(15, 15, config=cfg)
    b = generate(15, 15, config=cfg)
    assert rows_of(a.grid) == rows_of(b.grid)


def test_smallest_maze_still_has_exit_and_encounter():
    result = generate(5, 5, random.Random(0))
    assert count_kind(result.grid, DOOR) == 1
    assert result.encounter is not None
    assert result.door != result.start


@pytest.mark.parametrize(
    "width,height,field",
    [(4, 25, "width"), (25, 3, "height"), (24, 25, "width"), (25, 26, "height"), (0, 0, "width")],
)
def test_invalid_dimensions_rejected(width, height, field):
    with pytest.raises(DungeonConfigError) as exc:
        generate(width, height, random.Random(1))
    assert exc.value.field == field


def test_metrics_populated():
    result = generate(25, 25, random.Random(8))
    m = result.metrics
    for k in [
        "cells_carved",
        "loops_added",
        "dead_ends",
        "rooms_requested",
        "rooms_placed",
        "rooms_skipped",
        "door_fallback",
        "encounter_placed",
        "runtime_ms",
        "phase_ms",
    ]:
        assert k in m
    assert m["cells_carved"] == 2 * 12 * 12 - 1
    assert 3 <= m["rooms_requested"] <= 5
    assert m["rooms_placed"] == len(result.rooms)
    assert m["encounter_placed"] is True
    assert set(m["phase_ms"]) == {"init", "carve", "loops", "dead_ends", "treasure_rooms", "special_tiles"}
