from functools import cmp_to_key

import pytest

from voxelworld.tick import OrderedTick, Priority, Tick, priority_from_int
from voxelworld.view import BlockPos


@pytest.mark.parametrize(
    "value, member",
    [
        (-3, Priority.EXTREMELY_HIGH),
        (-2, Priority.VERY_HIGH),
        (-1, Priority.HIGH),
        (0, Priority.NORMAL),
        (1, Priority.LOW),
        (2, Priority.VERY_LOW),
        (3, Priority.EXTREMELY_LOW),
    ],
)
def test_priority_values(value, member):
    assert Priority(value) is member
    assert priority_from_int(value) is member
    assert int(member) == value


def test_priority_order():
    priorities = [priority_from_int(v) for v in range(3, -4, -1)]
    assert min(priorities) is Priority.EXTREMELY_HIGH
    assert max(priorities) is Priority.EXTREMELY_LOW
    assert priority_from_int(-1) < priority_from_int(0) < priority_from_int(1)


@pytest.mark.parametrize("value", range(-3, 4))
def test_priority_from_int_in_range(value):
    assert priority_from_int(value) is Priority(value)


@pytest.mark.parametrize("value", [-4, -100])
def test_priority_from_int_clamps_low(value):
    assert priority_from_int(value) is Priority.EXTREMELY_HIGH


@pytest.mark.parametrize("value", [4, 100])
def test_priority_from_int_clamps_high(value):
    assert priority_from_int(value) is Priority.EXTREMELY_LOW


def test_tick_defaults():
    tick = Tick("stone", BlockPos(1, 2, 3))
    assert tick.delay == 0
    assert tick.priority is Priority.NORMAL


def test_tick_equality_ignores_delay_and_priority():
    pos = BlockPos(1, 2, 3)
    a = Tick("stone", pos, delay=5, priority=Priority.HIGH)
    b = Tick("stone", pos)
    assert a == b
    assert hash(a) == hash(b)
    assert len({a, b}) == 1
    assert Tick("dirt", pos) != b
    assert Tick("stone", BlockPos(0, 2, 3)) != b


def test_tick_to_dict_fields():
    tick = Tick("water", BlockPos(4, -5, 6), delay=7, priority=Priority.VERY_LOW)
    assert tick.to_dict() == {"i": "water", "x": 4, "y": -5, "z": 6, "t": 7, "p": 2}


def test_tick_round_trip():
    tick = Tick("lava", BlockPos(-1, 64, 9), delay=20, priority=Priority.EXTREMELY_HIGH)
    restored = Tick.from_dict(tick.to_dict())
    assert restored == tick
    assert restored.delay == tick.delay
    assert restored.priority is tick.priority
    assert restored.pos == tick.pos


def test_tick_from_dict_invalid_priority():
    data = Tick("a", BlockPos(0, 0, 0)).to_dict()
    data["p"] = 5
    with pytest.raises(ValueError):
        Tick.from_dict(data)


def test_tick_from_dict_missing_field():
    data = Tick("a", BlockPos(0, 0, 0)).to_dict()
    del data["t"]
    with pytest.raises(ValueError):
        Tick.from_dict(data)


def _ordered(name, trigger, priority, order):
    return OrderedTick(name, BlockPos(0, 0, 0), trigger, priority, order)


def test_ordered_tick_sorts_by_priority_then_order():
    a = _ordered("a", 10, Priority.LOW, 0)
    b = _ordered("b", 0, Priority.HIGH, 5)
    c = _ordered("c", 5, Priority.HIGH, 1)
    assert [t.ty for t in sorted([a, b, c])] == ["c", "b", "a"]
    assert c < b < a
    assert a > b
    assert c <= c and c >= c


def test_ordered_tick_equality_by_type_and_pos():
    pos = BlockPos(1, 1, 1)
    a = OrderedTick("x", pos, 1, Priority.HIGH, 3)
    b = OrderedTick("x", pos, 9, Priority.LOW, 0)
    assert a == b
    assert hash(a) == hash(b)


def test_trigger_tick_cmp_prefers_trigger():
    early = _ordered("a", 1, Priority.EXTREMELY_LOW, 9)
    late = _ordered("b", 2, Priority.EXTREMELY_HIGH, 0)
    assert early.trigger_tick_cmp(late) < 0
    assert late.trigger_tick_cmp(early) > 0


def test_trigger_tick_cmp_falls_back_to_order():
    a = _ordered("a", 3, Priority.NORMAL, 2)
    b = _ordered("b", 3, Priority.NORMAL, 1)
    assert a.trigger_tick_cmp(b) > 0
    assert a.trigger_tick_cmp(a) == 0
    ticks = sorted([a, b, _ordered("c", 0, Priority.LOW, 0)], key=cmp_to_key(OrderedTick.trigger_tick_cmp))
    assert [t.ty for t in ticks] == ["c", "b", "a"]