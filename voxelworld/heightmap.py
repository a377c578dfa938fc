"""Per-column maps of the highest block matching a predicate."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from voxelworld.view import BlockPos, HeightLimit

STORAGE_LEN = 256
"""Number of columns tracked by a heightmap (16 x 16)."""


@dataclass(frozen=True)
class HeightmapType:
    """A kind of heightmap, defined by the block states it counts as blocking.

    ``test`` receives a block state, or None where no state is available.
    Types compare and hash by name.
    """

    name: str
    test: Callable[[Any], bool] = field(compare=False, repr=False)
    updates_on_block_change: bool = field(default=True, compare=False)

    def predicate(self, state: Any) -> bool:
        """Whether ``state`` counts towards the height of this map."""
        return bool(self.test(state))


def _to_index(x: int, z: int) -> int:
    return x + z * 16


class Heightmap:
    """Stores the Y level above the highest matching block for each column."""

    def __init__(self, height_limit: HeightLimit, ty: HeightmapType) -> None:
        self.height_limit = height_limit
        self.type = ty
        self._max_value = (1 << (height_limit.height + 1).bit_length()) - 1
        self._storage = [0] * STORAGE_LEN

    def get(self, x: int, z: int) -> Optional[int]:
        """Return the stored height at the column, or None if out of range."""
        index = _to_index(x, z)
        if not 0 <= index < STORAGE_LEN:
            return None
        return self._storage[index] + self.height_limit.bottom

    def set(self, x: int, z: int, height: int) -> None:
        """Set the stored height at the column.

        Raises IndexError for a column out of range and ValueError for a
        height the map cannot hold.
        """
        index = _to_index(x, z)
        if not 0 <= index < STORAGE_LEN:
            raise IndexError(f"column ({x}, {z}) is out of bounds")
        value = height - self.height_limit.bottom
        if not 0 <= value <= self._max_value:
            raise ValueError(f"height {height} does not fit in this heightmap")
        self._storage[index] = value

    def track_update(
        self,
        x: int,
        y: int,
        z: int,
        state: Any,
        peeker: Callable[[BlockPos], Any],
    ) -> bool:
        """Update the map after the state at (x, y, z) changed to ``state``.

        ``peeker`` returns the block state at a position, or None.
        Returns whether the map changed.
        """
        current = self.get(x, z)
        if current is None or not y > current - 2:
            return False

        if self.type.predicate(state):
            if y >= current:
                self.set(x, z, y + 1)
                return True
            return False

        if y != current - 1:
            return False

        bottom = self.height_limit.bottom
        for j in range(y - 1, bottom - 1, -1):
            if self.type.predicate(peeker(BlockPos(x, j, z))):
                self.set(x, z, j + 1)
                return True

        self.set(x, z, bottom)
        return True