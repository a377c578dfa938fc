"""Chunk positions, block entities and the base chunk data structure."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from voxelworld.heightmap import Heightmap, HeightmapType
from voxelworld.section import BlockState, ChunkSection, new_section
from voxelworld.upgrade import UpgradeData
from voxelworld.view import BlockPos, HeightLimit, section_coord

BORDER_LEN = 16
"""The length of the border of a chunk."""


@dataclass(frozen=True)
class ChunkPos:
    """Horizontal position of a chunk, in chunk coordinates."""

    x: int
    z: int

    @classmethod
    def from_block_pos(cls, pos: BlockPos) -> "ChunkPos":
        """Return the position of the chunk containing ``pos``."""
        return cls(section_coord(pos.x), section_coord(pos.z))

    @property
    def start_x(self) -> int:
        """Lowest block X coordinate in this chunk."""
        return self.x * BORDER_LEN

    @property
    def start_z(self) -> int:
        """Lowest block Z coordinate in this chunk."""
        return self.z * BORDER_LEN


@dataclass(eq=False)
class BlockEntity:
    """A block entity bound to a block position."""

    pos: BlockPos
    state: Optional[BlockState] = None
    data: dict = field(default_factory=dict)
    removed: bool = False

    @property
    def is_removed(self) -> bool:
        return self.removed

    def mark_removed(self) -> None:
        """Mark this block entity as removed from its chunk."""
        self.removed = True

    def cancel_removal(self) -> None:
        """Clear the removed mark of this block entity."""
        self.removed = False


class BaseChunk:
    """A generic chunk: vertical sections, heightmaps and block entities.

    ``sections``, when given, must hold exactly one entry per vertical
    section of ``height_limit``; None entries are filled with new sections
    of the default block state and biome.
    """

    def __init__(
        self,
        pos: ChunkPos,
        height_limit: HeightLimit,
        default_state: BlockState,
        default_biome: Any,
        upgrade_data: Optional[UpgradeData] = None,
        inhabited_time: int = 0,
        sections: Optional[Iterable[Optional[ChunkSection]]] = None,
    ) -> None:
        self.pos = pos
        self.height_limit = height_limit
        self.upgrade_data = upgrade_data if upgrade_data is not None else UpgradeData()
        self.inhabited_time = inhabited_time
        self.needs_saving = False
        self.heightmaps: dict[HeightmapType, Heightmap] = {}
        self.block_entities: dict[BlockPos, BlockEntity] = {}
        self.block_entity_nbts: dict[BlockPos, Any] = {}
        self.lock = threading.RLock()

        count = height_limit.count_vertical_sections()
        if sections is None:
            self.sections = [new_section(default_state, default_biome) for _ in range(count)]
        else:
            given = list(sections)
            if len(given) != count:
                raise ValueError(
                    "length of given section array should be the count of vertical "
                    f"sections of the chunk: expected {count}, got {len(given)}"
                )
            self.sections = [
                section if section is not None else new_section(default_state, default_biome)
                for section in given
            ]

    def __repr__(self) -> str:
        return (
            f"BaseChunk(pos={self.pos!r}, height_limit={self.height_limit!r}, "
            f"sections={len(self.sections)}, inhabited_time={self.inhabited_time}, "
            f"needs_saving={self.needs_saving})"
        )

    def section(self, index: int) -> Optional[ChunkSection]:
        """Return the section at the given Y index, or None if out of range."""
        if 0 <= index < len(self.sections):
            return self.sections[index]
        return None

    def highest_non_empty_section(self) -> Optional[int]:
        """Return the index of the highest non-empty section, or None."""
        with self.lock:
            for index in range(len(self.sections) - 1, -1, -1):
                if not self.sections[index].is_empty():
                    return index
        return None

    def heightmap(self, ty: HeightmapType) -> Optional[Heightmap]:
        """Return the heightmap of the given type, or None if absent."""
        return self.heightmaps.get(ty)

    def add_heightmap(self, ty: HeightmapType) -> Heightmap:
        """Return the heightmap of the given type, creating it when absent."""
        with self.lock:
            existing = self.heightmaps.get(ty)
            if existing is None:
                existing = Heightmap(self.height_limit, ty)
                self.heightmaps[ty] = existing
            return existing