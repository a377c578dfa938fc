import pytest

from voxelworld.light import ChunkSkyLight
from voxelworld.view import HeightLimit

LIMIT = HeightLimit(384, -64)


def test_min_y_is_below_bottom():
    sky = ChunkSkyLight(LIMIT)
    assert sky.min_y < LIMIT.bottom
    assert sky.min_y == LIMIT.bottom - 1


def test_initial_levels_are_min_y():
    sky = ChunkSkyLight(LIMIT)
    assert sky.get(0, 0) == sky.min_y
    assert sky.get(15, 15) == sky.min_y


def test_set_get_round_trip():
    sky = ChunkSkyLight(LIMIT)
    sky.set(3, 4, 100)
    assert sky.get(3, 4) == 100
    assert sky.get(4, 3) == sky.min_y


def test_full_range_is_storable():
    sky = ChunkSkyLight(LIMIT)
    sky.set(0, 0, LIMIT.top())
    sky.set(1, 0, sky.min_y)
    assert sky.get(0, 0) == LIMIT.top()
    assert sky.get(1, 0) == sky.min_y


def test_value_below_min_raises():
    sky = ChunkSkyLight(LIMIT)
    with pytest.raises(ValueError):
        sky.set(0, 0, sky.min_y - 1)


def test_value_too_large_raises():
    sky = ChunkSkyLight(LIMIT)
    with pytest.raises(ValueError):
        sky.set(0, 0, 10**6)


def test_out_of_range_column():
    sky = ChunkSkyLight(LIMIT)
    assert sky.get(0, 16) is None
    with pytest.raises(IndexError):
        sky.set(-1, 0, 0)