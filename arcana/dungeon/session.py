"""
project: Arcana Crawler
module: session.py
License: MIT

Player navigation state machine over a generated dungeon.

A DungeonSession owns the hidden internal grid, the fogged visible grid, the
player's position and facing, and the status message. Every transition runs
under the session lock and ends by publishing one immutable Snapshot, so a
reader never sees a new position paired with a stale visible grid.

Battle signalling is a return value (MoveOutcome.ENCOUNTER); an optional
``on_encounter`` callable and subscribed listeners are notified after the
lock is released.
"""

from __future__ import annotations

import dataclasses
import random
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from arcana.logging_utils import get_logger

from .cells import Coord, FrozenGrid, Grid, freeze, new_grid, tile_at
from .config import DungeonConfig
from .facing import Facing
from .perception import reveal_fog_of_war
from .pipeline import GenerationResult, generate
from .tiles import DOOR, ENCOUNTER, FLOOR, START, TREASURE, UNEXPLORED, WALL, TileKind

log = get_logger("arcana.session")


class MoveOutcome(str, Enum):
    BLOCKED = "blocked"
    MOVED = "moved"
    FOUND_TREASURE = "found_treasure"
    ENCOUNTER = "encounter"
    REACHED_EXIT = "reached_exit"


ENTER_MESSAGE = "You enter the dungeon."
TURN_LEFT_MESSAGE = "You turn left."
TURN_RIGHT_MESSAGE = "You turn right."

MOVE_MESSAGES: Dict[MoveOutcome, str] = {
    MoveOutcome.BLOCKED: "A cold, damp wall blocks your path.",
    MoveOutcome.MOVED: "You walk forward.",
    MoveOutcome.FOUND_TREASURE: "You found a treasure room!",
    MoveOutcome.ENCOUNTER: "You are ambushed!",
    MoveOutcome.REACHED_EXIT: "You found the exit! A new dungeon awaits.",
}

# Exhaustive over TileKind; tests assert every kind has an entry.
MOVE_EFFECTS: Dict[TileKind, MoveOutcome] = {
    UNEXPLORED: MoveOutcome.BLOCKED,
    WALL: MoveOutcome.BLOCKED,
    FLOOR: MoveOutcome.MOVED,
    START: MoveOutcome.MOVED,
    TREASURE: MoveOutcome.FOUND_TREASURE,
    ENCOUNTER: MoveOutcome.ENCOUNTER,
    DOOR: MoveOutcome.REACHED_EXIT,
}

Generate = Callable[..., GenerationResult]
Listener = Callable[["Snapshot", Optional[MoveOutcome]], None]


@dataclass(frozen=True)
class Snapshot:
    visible: FrozenGrid
    position: Coord
    facing: Facing
    message: str
    level: int

    @property
    def width(self) -> int:
        return len(self.visible[0])

    @property
    def height(self) -> int:
        return len(self.visible)

    def to_dict(self) -> dict:
        return {
            "grid": ["".join(kind.value for kind in row) for row in self.visible],
            "width": self.width,
            "height": self.height,
            "pos": [self.position[0], self.position[1]],
            "facing": self.facing.name.lower(),
            "message": self.message,
            "level": self.level,
        }


class DungeonSession:
    def __init__(
        self,
        width: Optional[int] = None,
        height: Optional[int] = None,
        *,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        config: Optional[DungeonConfig] = None,
        generate_fn: Generate = generate,
    ):
        config = config or DungeonConfig()
        overrides = {k: v for k, v in (("width", width), ("height", height), ("seed", seed)) if v is not None}
        self.config = dataclasses.replace(config, **overrides).validate()
        self.rng = rng or random.Random(self.config.seed)
        self._generate = generate_fn
        self._lock = threading.RLock()
        self._listeners: List[Listener] = []
        self._level = 0
        with self._lock:
            self._start_level(ENTER_MESSAGE)
            self._publish()

    # ---- Read side ----

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    @property
    def visible_grid(self) -> FrozenGrid:
        return self._snapshot.visible

    @property
    def player_position(self) -> Coord:
        return self._snapshot.position

    @property
    def player_facing(self) -> Facing:
        return self._snapshot.facing

    @property
    def status_message(self) -> str:
        return self._snapshot.message

    @property
    def level(self) -> int:
        return self._snapshot.level

    @property
    def internal_grid(self) -> FrozenGrid:
        """Read-only view of the hidden map; a new object per generated level."""
        return self._internal_view

    @property
    def layout(self) -> GenerationResult:
        return self._layout

    @property
    def metrics(self) -> dict:
        return dict(self._layout.metrics)

    def subscribe(self, listener: Listener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    # ---- Transitions ----

    def turn_left(self) -> Snapshot:
        return self._turn(lambda f: f.left, TURN_LEFT_MESSAGE)

    def turn_right(self) -> Snapshot:
        return self._turn(lambda f: f.right, TURN_RIGHT_MESSAGE)

    def move_forward(self, on_encounter: Optional[Callable[[], None]] = None) -> MoveOutcome:
        return self.advance(on_encounter)[0]

    def advance(self, on_encounter: Optional[Callable[[], None]] = None) -> Tuple[MoveOutcome, Snapshot]:
        """Step forward and return the outcome with the snapshot published for that step.

        Callers that render the result should use this snapshot rather than
        re-reading ``snapshot``, which may already reflect a later transition.
        """
        with self._lock:
            x, y = self._position
            dx, dy = self._facing.delta
            target = (x + dx, y + dy)
            outcome = MOVE_EFFECTS[tile_at(self._internal, *target)]
            if outcome is MoveOutcome.BLOCKED:
                self._message = MOVE_MESSAGES[outcome]
            elif outcome is MoveOutcome.REACHED_EXIT:
                log.info(event="exit_reached", dungeon_level=self._level, door=target)
                self._start_level(MOVE_MESSAGES[outcome])
            else:
                if outcome is MoveOutcome.ENCOUNTER:
                    log.info(event="encounter_triggered", dungeon_level=self._level, pos=target)
                    if self.config.consume_encounters:
                        self._internal[target[1]][target[0]] = FLOOR
                        self._internal_view = freeze(self._internal)
                self._position = target
                reveal_fog_of_war(self._visible, self._internal, target)
                self._message = MOVE_MESSAGES[outcome]
            snap = self._publish()
        if outcome is MoveOutcome.ENCOUNTER and on_encounter is not None:
            on_encounter()
        self._notify(snap, outcome)
        return outcome, snap

    def reveal_fog_of_war(self, center: Coord) -> int:
        with self._lock:
            newly = reveal_fog_of_war(self._visible, self._internal, center)
            snap = self._publish()
        self._notify(snap, None)
        return newly

    def regenerate(self, message: str = ENTER_MESSAGE) -> Snapshot:
        """Discard the current level and start a fresh one (the exit path does this too)."""
        with self._lock:
            self._start_level(message)
            snap = self._publish()
        self._notify(snap, None)
        return snap

    # ---- Internals ----

    def _turn(self, rotate: Callable[[Facing], Facing], message: str) -> Snapshot:
        with self._lock:
            self._facing = rotate(self._facing)
            self._message = message
            snap = self._publish()
        self._notify(snap, None)
        return snap

    def _start_level(self, message: str) -> None:
        layout = self._generate(self.config.width, self.config.height, self.rng, self.config)
        self._layout = layout
        self._internal: Grid = layout.grid
        self._internal_view = freeze(layout.grid)
        self._visible: Grid = new_grid(layout.width, layout.height, UNEXPLORED)
        self._position: Coord = layout.start
        self._facing = Facing.NORTH
        self._message = message
        self._level += 1
        reveal_fog_of_war(self._visible, self._internal, layout.start)
        log.info(
            event="level_generated",
            dungeon_level=self._level,
            width=layout.width,
            height=layout.height,
            start=layout.start,
            rooms=len(layout.rooms),
        )

    def _publish(self) -> Snapshot:
        self._snapshot = Snapshot(
            visible=freeze(self._visible),
            position=self._position,
            facing=self._facing,
            message=self._message,
            level=self._level,
        )
        return self._snapshot

    def _notify(self, snap: Snapshot, outcome: Optional[MoveOutcome]) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener(snap, outcome)
