"""Chunks that live in a world: block states, heightmaps and block entities."""

from __future__ import annotations

import enum
from typing import Any, Callable, Optional

from voxelworld.chunk import BORDER_LEN, BaseChunk, BlockEntity, ChunkPos
from voxelworld.section import BlockState, ChunkSection, FluidState
from voxelworld.view import BlockPos, BlockView, HeightLimit, StateOption

BlockEntityLoader = Callable[[BlockPos, BlockState, Any], BlockEntity]
"""Builds a block entity from its position, block state and saved compound."""

_MASK = BORDER_LEN - 1


class CreationType(enum.Enum):
    """How a missing block entity is handled when it is looked up."""

    IMMEDIATE = "immediate"
    QUEUED = "queued"
    CHECK = "check"


class WorldChunk(BlockView):
    """A chunk loaded into a world.

    ``block_entity_loader`` turns saved block entity data into block
    entities; it may raise ValueError, KeyError or TypeError for invalid
    data, in which case the data is dropped.
    """

    def __init__(
        self,
        base: BaseChunk,
        is_client: bool = False,
        loaded_to_world: bool = False,
        block_entity_loader: Optional[BlockEntityLoader] = None,
    ) -> None:
        self.base = base
        self.is_client = is_client
        self.loaded_to_world = loaded_to_world
        self._loader = block_entity_loader

    def __repr__(self) -> str:
        return f"WorldChunk(base={self.base!r})"

    @property
    def pos(self) -> ChunkPos:
        return self.base.pos

    @property
    def height_limit(self) -> HeightLimit:
        return self.base.height_limit

    def _can_tick_block_entities(self) -> bool:
        return self.loaded_to_world or self.is_client

    def _section_at(self, y: int) -> Optional[ChunkSection]:
        return self.base.section(self.base.height_limit.section_index(y))

    def block_state(self, pos: BlockPos) -> Optional[BlockState]:
        """Return the block state at ``pos``.

        None is returned outside the chunk's height and inside empty sections.
        """
        section = self._section_at(pos.y)
        if section is None or section.is_empty():
            return None
        return section.block_state(pos.x & _MASK, pos.y & _MASK, pos.z & _MASK)

    def fluid_state(self, pos: BlockPos) -> Optional[FluidState]:
        """Return the fluid state at ``pos``, with the same rules as block states."""
        section = self._section_at(pos.y)
        if section is None or section.is_empty():
            return None
        return section.fluid_state(pos.x & _MASK, pos.y & _MASK, pos.z & _MASK)

    def block_entity(self, pos: BlockPos) -> Optional[BlockEntity]:
        """Return the block entity at ``pos`` without creating one."""
        return self.peek_block_entity(pos, CreationType.CHECK)

    def peek_block_entity(
        self, pos: BlockPos, creation_type: CreationType
    ) -> Optional[BlockEntity]:
        """Look up the block entity at ``pos``.

        Removed entities are dropped from the chunk. Saved data for the
        position is loaded when no entity is present. With
        :attr:`CreationType.IMMEDIATE` a missing entity is created and
        stored, but only an entity that existed or was loaded is returned.
        """
        with self.base.lock:
            existing = self.base.block_entities.get(pos)
            if existing is not None:
                if existing.is_removed:
                    del self.base.block_entities[pos]
                    return None
                return existing

            nbt = self.base.block_entity_nbts.pop(pos, None)
            if nbt is not None:
                loaded = self._load_block_entity(pos, nbt)
                if loaded is not None:
                    return loaded

            if creation_type is CreationType.IMMEDIATE:
                created = self._create_block_entity(pos)
                if created is not None:
                    self.add_block_entity(created)
            return None

    def add_block_entity(self, block_entity: BlockEntity) -> None:
        """Add a block entity to this chunk."""
        self.set_block_entity(block_entity)

    def set_block_entity(self, block_entity: BlockEntity) -> None:
        """Store a block entity if the block state at its position has one.

        A block entity it replaces is marked removed.
        """
        state = self.block_state(block_entity.pos)
        if state is None or not state.has_block_entity:
            return
        with self.base.lock:
            block_entity.cancel_removal()
            previous = self.base.block_entities.get(block_entity.pos)
            self.base.block_entities[block_entity.pos] = block_entity
            if previous is not None and previous is not block_entity:
                previous.mark_removed()

    def remove_block_entity(self, pos: BlockPos) -> Optional[BlockEntity]:
        """Remove and return the block entity at ``pos``, marking it removed.

        Nothing is removed unless the chunk is loaded into a world or is
        client-side.
        """
        if not self._can_tick_block_entities():
            return None
        with self.base.lock:
            removed = self.base.block_entities.pop(pos, None)
        if removed is not None:
            removed.mark_removed()
        return removed

    def set_block_state(
        self, pos: BlockPos, state: BlockState, moved: bool = False
    ) -> Optional[BlockState]:
        """Set the block state at ``pos`` and return the old one if it changed.

        Returns None when ``pos`` is outside the chunk's height, when an
        empty state is placed into an empty section, or when the state is
        unchanged. Heightmaps that follow block changes are updated, and the
        block entity of the new state is created when missing.
        """
        section = self._section_at(pos.y)
        if section is None:
            return None
        if section.is_empty() and state.block.settings.is_empty:
            return None

        x, z = pos.x & _MASK, pos.z & _MASK
        old = section.set_block_state(x, pos.y & _MASK, z, state)
        if old == state:
            return None

        for ty, heightmap in list(self.base.heightmaps.items()):
            if ty.updates_on_block_change:
                heightmap.track_update(x, pos.y, z, state, self.block_state)

        if (
            self.is_client
            and old.block != state.block
            and old.has_block_entity
        ):
            self.remove_block_entity(pos)

        if state.has_block_entity:
            entity = self.peek_block_entity(pos, CreationType.CHECK)
            if entity is None:
                created = self._create_block_entity(pos)
                if created is not None:
                    self.add_block_entity(created)
            else:
                entity.state = state

        self.base.needs_saving = True
        return old

    def luminance(self, pos: BlockPos) -> StateOption[int]:
        """Return the luminance at ``pos``.

        Outside the chunk's height the void variant is returned; where no
        state is available, the none variant.
        """
        if self.base.height_limit.is_out_of_limit(pos.y):
            return StateOption.VOID  # type: ignore[attr-defined]
        state = self.block_state(pos)
        if state is None:
            return StateOption.NONE  # type: ignore[attr-defined]
        return StateOption.some(state.luminance)

    def max_light_level(self) -> int:
        """Return the max light level of this chunk."""
        return super().max_light_level()

    def _load_block_entity(self, pos: BlockPos, nbt: Any) -> Optional[BlockEntity]:
        state = self.block_state(pos)
        if state is None:
            raise LookupError(f"no block state at {pos} to load a block entity for")
        if self._loader is None:
            return None
        try:
            entity = self._loader(pos, state, nbt)
        except (ValueError, KeyError, TypeError):
            return None
        if entity is None:
            return None
        self.add_block_entity(entity)
        return self.base.block_entities.get(pos)

    def _create_block_entity(self, pos: BlockPos) -> Optional[BlockEntity]:
        state = self.block_state(pos)
        if state is None or state.block_entity_factory is None:
            return None
        return state.block_entity_factory(pos)