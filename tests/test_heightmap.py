import pytest

from voxelworld.heightmap import Heightmap, HeightmapType
from voxelworld.view import BlockPos, HeightLimit

SOLID = "stone"
AIR = "air"


def _blocking(state):
    return state is not None and state != AIR


TYPE = HeightmapType("motion_blocking", _blocking)


def _build(world, limit=HeightLimit(64, 0)):
    hm = Heightmap(limit, TYPE)
    for (x, y, z), state in sorted(world.items(), key=lambda kv: kv[0][1]):
        hm.track_update(x, y, z, state, lambda pos: world.get((pos.x, pos.y, pos.z)))
    return hm


def _peeker(world):
    return lambda pos: world.get((pos.x, pos.y, pos.z))


def test_new_heightmap_starts_at_bottom():
    limit = HeightLimit(384, -64)
    hm = Heightmap(limit, TYPE)
    assert hm.get(0, 0) == limit.bottom
    assert hm.get(15, 15) == limit.bottom


def test_set_get_round_trip():
    limit = HeightLimit(384, -64)
    hm = Heightmap(limit, TYPE)
    hm.set(3, 7, 100)
    assert hm.get(3, 7) == 100
    assert hm.get(7, 3) == limit.bottom


def test_get_out_of_range_is_none():
    hm = Heightmap(HeightLimit(64, 0), TYPE)
    assert hm.get(0, 16) is None
    assert hm.get(-1, 0) is None


def test_set_out_of_range_raises():
    hm = Heightmap(HeightLimit(64, 0), TYPE)
    with pytest.raises(IndexError):
        hm.set(0, 16, 5)


def test_set_unrepresentable_height_raises():
    limit = HeightLimit(64, 0)
    hm = Heightmap(limit, TYPE)
    with pytest.raises(ValueError):
        hm.set(0, 0, 10**6)
    with pytest.raises(ValueError):
        hm.set(0, 0, limit.bottom - 1)


def test_type_equality_by_name():
    assert HeightmapType("motion_blocking", lambda s: True) == TYPE
    assert hash(HeightmapType("motion_blocking", lambda s: False)) == hash(TYPE)
    assert TYPE.predicate(None) is False
    assert TYPE.predicate(SOLID) is True


def test_placing_on_top_raises_height():
    hm = Heightmap(HeightLimit(64, 0), TYPE)
    assert hm.track_update(0, 0, 0, SOLID, _peeker({})) is True
    assert hm.get(0, 0) == 0 + 1


def test_stacked_column():
    world = {(2, y, 2): SOLID for y in range(5)}
    hm = _build(world)
    assert hm.get(2, 2) == 4 + 1


def test_changes_below_top_are_ignored():
    world = {(0, y, 0): SOLID for y in range(5)}
    hm = _build(world)
    before = hm.get(0, 0)
    assert hm.track_update(0, 1, 0, AIR, _peeker(world)) is False
    assert hm.track_update(0, 3, 0, SOLID, _peeker(world)) is False
    assert hm.track_update(0, 4, 0, SOLID, _peeker(world)) is False
    assert hm.get(0, 0) == before


def test_removing_top_falls_to_next_block():
    world = {(0, y, 0): SOLID for y in range(5)}
    hm = _build(world)
    world[(0, 4, 0)] = AIR
    assert hm.track_update(0, 4, 0, AIR, _peeker(world)) is True
    assert hm.get(0, 0) == 3 + 1


def test_removing_over_gap():
    world = {(0, 0, 0): SOLID, (0, 5, 0): SOLID}
    hm = _build(world)
    assert hm.get(0, 0) == 5 + 1
    del world[(0, 5, 0)]
    assert hm.track_update(0, 5, 0, AIR, _peeker(world)) is True
    assert hm.get(0, 0) == 0 + 1


def test_removing_last_block_returns_to_bottom():
    limit = HeightLimit(64, -16)
    world = {(1, -16, 1): SOLID}
    hm = _build(world, limit)
    del world[(1, -16, 1)]
    assert hm.track_update(1, -16, 1, AIR, _peeker(world)) is True
    assert hm.get(1, 1) == limit.bottom


def test_scan_goes_downwards_from_below_change():
    limit = HeightLimit(64, 0)
    hm = Heightmap(limit, TYPE)
    hm.set(0, 0, 5)
    calls = []

    def peeker(pos):
        calls.append(pos)
        return None

    assert hm.track_update(0, 4, 0, AIR, peeker) is True
    assert calls == [BlockPos(0, j, 0) for j in range(3, limit.bottom - 1, -1)]
    assert hm.get(0, 0) == limit.bottom