"""Chunk lighting data."""

from __future__ import annotations

from typing import Optional

from voxelworld.view import HeightLimit

_COLUMNS = 256


class ChunkSkyLight:
    """Per-column Y level of the highest block that stops sky light."""

    def __init__(self, height: HeightLimit) -> None:
        self.min_y = height.bottom - 1
        bits = (height.top() - self.min_y + 1).bit_length()
        self._max_value = (1 << bits) - 1
        self._storage = [0] * _COLUMNS

    @staticmethod
    def _index(x: int, z: int) -> int:
        return x + z * 16

    def get(self, x: int, z: int) -> Optional[int]:
        """Return the stored level at the column, or None if out of range."""
        index = self._index(x, z)
        if not 0 <= index < _COLUMNS:
            return None
        return self._storage[index] + self.min_y

    def set(self, x: int, z: int, value: int) -> None:
        """Store a level at the column.

        Raises IndexError for a column out of range and ValueError for a
        level the storage cannot hold.
        """
        index = self._index(x, z)
        if not 0 <= index < _COLUMNS:
            raise IndexError(f"column ({x}, {z}) is out of bounds")
        relative = value - self.min_y
        if not 0 <= relative <= self._max_value:
            raise ValueError(f"level {value} does not fit in this sky light map")
        self._storage[index] = relative