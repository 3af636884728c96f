from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional

MIN_DIMENSION = 5


class DungeonConfigError(ValueError):
    """Raised once at construction for dimensions or tuning the generator cannot honor."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


@dataclass
class DungeonConfig:
    width: int = 25
    height: int = 25
    loop_chance: float = 0.20
    min_rooms: int = 3
    max_rooms: int = 5
    room_spacing: int = 5
    seed: Optional[int] = None
    consume_encounters: bool = False

    def validate(self) -> "DungeonConfig":
        validate_dimensions(self.width, self.height)
        if not 0.0 <= self.loop_chance <= 1.0:
            raise DungeonConfigError("loop_chance", "must be between 0 and 1")
        if self.min_rooms < 0 or self.max_rooms < self.min_rooms:
            raise DungeonConfigError("max_rooms", "room bounds must satisfy 0 <= min_rooms <= max_rooms")
        if self.room_spacing < 0:
            raise DungeonConfigError("room_spacing", "must be non-negative")
        return self

    @classmethod
    def from_mapping(cls, cfg: Mapping[str, Any]) -> "DungeonConfig":
        """Build from a Flask-style config mapping (``DUNGEON_<FIELD>`` keys).

        Values may be raw strings (environment) or already-typed values.
        """
        kwargs = {}
        for f in fields(cls):
            key = f"DUNGEON_{f.name.upper()}"
            if key not in cfg or cfg[key] in (None, ""):
                continue
            kwargs[f.name] = _coerce(f.name, cfg[key])
        return cls(**kwargs).validate()


_BOOL_FIELDS = {"consume_encounters"}
_FLOAT_FIELDS = {"loop_chance"}


def _coerce(name: str, raw: Any):
    if name in _BOOL_FIELDS:
        if isinstance(raw, str):
            return raw.strip().lower() not in {"0", "false", "no", "off", ""}
        return bool(raw)
    try:
        if name in _FLOAT_FIELDS:
            return float(raw)
        return int(raw)
    except (TypeError, ValueError):
        raise DungeonConfigError(name, f"invalid value {raw!r}") from None


def validate_dimensions(width: int, height: int) -> None:
    for name, value in (("width", width), ("height", height)):
        if not isinstance(value, int) or isinstance(value, bool):
            raise DungeonConfigError(name, "must be an integer")
        if value < MIN_DIMENSION:
            raise DungeonConfigError(name, f"must be at least {MIN_DIMENSION}")
        if value % 2 == 0:
            raise DungeonConfigError(name, "must be odd so stride-2 carving stays on interior cells")


__all__ = ["DungeonConfig", "DungeonConfigError", "validate_dimensions", "MIN_DIMENSION"]
