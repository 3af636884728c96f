"""Pipeline orchestration for dungeon generation.

`generate(width, height, rng)` is the single public entry point. It runs the
ordered phases from `generator` and `rooms` against one grid and one random
stream, recording per-phase timings and counters into the metrics dict.
Given the same `random.Random` state the output is identical.
"""
from __future__ import annotations

import logging
import random
import time
from typing import Any, Dict, List, NamedTuple, Optional

from .cells import Coord, Grid
from .config import DungeonConfig, validate_dimensions
from .generator import ORIGIN, Generator, find_dead_ends
from .metrics import init_metrics
from .rooms import place_treasure_rooms

logger = logging.getLogger(__name__)


class GenerationResult(NamedTuple):
    grid: Grid
    start: Coord
    door: Coord
    encounter: Optional[Coord]
    rooms: List[Coord]
    metrics: Dict[str, Any]

    @property
    def width(self) -> int:
        return len(self.grid[0])

    @property
    def height(self) -> int:
        return len(self.grid)


def generate(
    width: int,
    height: int,
    rng: Optional[random.Random] = None,
    config: Optional[DungeonConfig] = None,
) -> GenerationResult:
    validate_dimensions(width, height)
    config = config or DungeonConfig(width=width, height=height)
    if rng is None:
        rng = random.Random(config.seed)
    metrics = init_metrics()
    phase_times: Dict[str, int] = {}
    start = time.perf_counter()

    def _phase(label, fn, *a, **k):
        ps = time.perf_counter()
        r = fn(*a, **k)
        phase_times[label] = int((time.perf_counter() - ps) * 1000)
        return r

    gen = Generator(width, height, rng, loop_chance=config.loop_chance)
    grid = _phase('init', gen.init_grid)
    metrics['cells_carved'] = _phase('carve', gen.carve_maze, grid, ORIGIN)
    metrics['loops_added'] = _phase('loops', gen.add_loops, grid)
    dead_ends = _phase('dead_ends', find_dead_ends, grid)
    metrics['dead_ends'] = len(dead_ends)
    rooms, target, skipped = _phase(
        'treasure_rooms',
        place_treasure_rooms,
        grid,
        dead_ends,
        rng,
        min_rooms=config.min_rooms,
        max_rooms=config.max_rooms,
        spacing=config.room_spacing,
    )
    metrics['rooms_requested'] = target
    metrics['rooms_placed'] = len(rooms)
    metrics['rooms_skipped'] = skipped
    door, encounter, door_fallback = _phase('special_tiles', gen.place_special_tiles, grid, ORIGIN)
    metrics['door_fallback'] = door_fallback
    metrics['encounter_placed'] = encounter is not None
    metrics['runtime_ms'] = int((time.perf_counter() - start) * 1000)
    metrics['phase_ms'] = phase_times

    logger.debug(
        "Dungeon generated size=%sx%s carved=%s loops=%s dead_ends=%s rooms=%s/%s door=%s runtime_ms=%s",
        width,
        height,
        metrics['cells_carved'],
        metrics['loops_added'],
        metrics['dead_ends'],
        metrics['rooms_placed'],
        target,
        door,
        metrics['runtime_ms'],
    )
    return GenerationResult(grid, ORIGIN, door, encounter, rooms, metrics)
