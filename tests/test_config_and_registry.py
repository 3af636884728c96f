import pytest

from arcana.dungeon import DungeonConfig, DungeonConfigError, SessionRegistry


def test_defaults():
    cfg = DungeonConfig()
    assert (cfg.width, cfg.height) == (25, 25)
    assert cfg.loop_chance == pytest.approx(0.2)
    assert (cfg.min_rooms, cfg.max_rooms, cfg.room_spacing) == (3, 5, 5)
    assert cfg.seed is None
    assert cfg.consume_encounters is False


def test_from_mapping_coerces_env_strings():
    cfg = DungeonConfig.from_mapping(
        {
            "DUNGEON_WIDTH": "31",
            "DUNGEON_HEIGHT": "21",
            "DUNGEON_LOOP_CHANCE": "0.5",
            "DUNGEON_SEED": "42",
            "DUNGEON_CONSUME_ENCOUNTERS": "yes",
            "DUNGEON_MIN_ROOMS": "",
            "UNRELATED": "x",
        }
    )
    assert (cfg.width, cfg.height) == (31, 21)
    assert cfg.loop_chance == pytest.approx(0.5)
    assert cfg.seed == 42
    assert cfg.consume_encounters is True
    assert cfg.min_rooms == 3


@pytest.mark.parametrize("raw", ["0", "false", "off", "No"])
def test_from_mapping_false_strings(raw):
    assert DungeonConfig.from_mapping({"DUNGEON_CONSUME_ENCOUNTERS": raw}).consume_encounters is False


def test_from_mapping_bad_number():
    with pytest.raises(DungeonConfigError) as exc:
        DungeonConfig.from_mapping({"DUNGEON_WIDTH": "wide"})
    assert exc.value.field == "width"


@pytest.mark.parametrize(
    "kwargs,field",
    [
        ({"width": 24}, "width"),
        ({"height": 3}, "height"),
        ({"width": True}, "width"),
        ({"loop_chance": 1.5}, "loop_chance"),
        ({"min_rooms": 4, "max_rooms": 2}, "max_rooms"),
        ({"room_spacing": -1}, "room_spacing"),
    ],
)
def test_validate_rejects(kwargs, field):
    with pytest.raises(DungeonConfigError) as exc:
        DungeonConfig(**kwargs).validate()
    assert exc.value.field == field
    assert isinstance(exc.value, ValueError)


class _Stub:
    def __init__(self, n):
        self.n = n


def _counter_factory():
    made = []

    def factory():
        s = _Stub(len(made))
        made.append(s)
        return s

    return factory, made


def test_registry_get_or_create():
    factory, made = _counter_factory()
    reg = SessionRegistry(factory)
    a, created = reg.get_or_create("a")
    assert created is True
    again, created = reg.get_or_create("a")
    assert created is False
    assert again is a
    assert len(made) == 1
    assert "a" in reg and len(reg) == 1


def test_registry_evicts_least_recently_used():
    factory, _ = _counter_factory()
    reg = SessionRegistry(factory, max_sessions=2)
    reg.get_or_create("a")
    reg.get_or_create("b")
    reg.get("a")
    reg.get_or_create("c")
    assert "a" in reg and "c" in reg
    assert "b" not in reg


def test_registry_replace_discard_clear():
    factory, _ = _counter_factory()
    reg = SessionRegistry(factory)
    first, _ = reg.get_or_create("k")
    fresh = _Stub(99)
    reg.replace("k", fresh)
    assert reg.get("k") is fresh and reg.get("k") is not first
    assert reg.discard("k") is True
    assert reg.discard("k") is False
    reg.get_or_create("x")
    reg.clear()
    assert len(reg) == 0
    assert reg.get("x") is None
