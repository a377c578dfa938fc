"""Block and fluid states, and the 16x16x16 chunk section holding them."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional

EDGE_BITS = 4
"""Bits per axis of block state indices within a section."""

BIOME_EDGE_BITS = 2
"""Bits per axis of biome indices within a section."""

SECTION_VOLUME = 1 << (3 * EDGE_BITS)
BIOME_VOLUME = 1 << (3 * BIOME_EDGE_BITS)


@dataclass(frozen=True)
class Settings:
    """Settings shared by blocks and fluids."""

    is_empty: bool = False
    random_ticks: bool = False


@dataclass(frozen=True)
class Fluid:
    """A kind of fluid."""

    name: str
    settings: Settings = field(default_factory=Settings)


@dataclass(frozen=True)
class FluidState:
    """A state of a fluid."""

    fluid: Fluid
    properties: tuple = ()

    @property
    def is_empty(self) -> bool:
        return self.fluid.settings.is_empty


EMPTY_FLUID = Fluid("empty", Settings(is_empty=True))
EMPTY_FLUID_STATE = FluidState(EMPTY_FLUID)


@dataclass(frozen=True)
class Block:
    """A kind of block."""

    name: str
    settings: Settings = field(default_factory=Settings)


@dataclass(frozen=True)
class BlockState:
    """A state of a block.

    ``fluid`` is the fluid state the block holds; None means no fluid.
    ``block_entity_factory``, when set, builds the block entity for a position.
    """

    block: Block
    properties: tuple = ()
    fluid: Optional[FluidState] = None
    luminance: int = 0
    block_entity_factory: Optional[Callable[[Any], Any]] = field(
        default=None, compare=False, repr=False
    )

    @property
    def has_block_entity(self) -> bool:
        return self.block_entity_factory is not None

    def to_fluid_state(self) -> FluidState:
        """Return the fluid state held by this block state."""
        return self.fluid if self.fluid is not None else EMPTY_FLUID_STATE


def compute_index(x: int, y: int, z: int, edge_bits: int) -> int:
    """Compute the container index of a position within a section.

    Raises ValueError for negative coordinates.
    """
    if x < 0 or y < 0 or z < 0:
        raise ValueError(f"section coordinates must not be negative: ({x}, {y}, {z})")
    return (((y << edge_bits) | z) << edge_bits) | x


class ChunkSection:
    """A 16x16x16 section of block states with a 4x4x4 grid of biomes."""

    def __init__(self, block_states: Iterable[BlockState], biomes: Iterable[Any]) -> None:
        self._states = list(block_states)
        self._biomes = list(biomes)
        if len(self._states) != SECTION_VOLUME:
            raise ValueError(
                f"expected {SECTION_VOLUME} block states, got {len(self._states)}"
            )
        if len(self._biomes) != BIOME_VOLUME:
            raise ValueError(f"expected {BIOME_VOLUME} biomes, got {len(self._biomes)}")
        self._non_empty_blocks = 0
        self._random_tick_blocks = 0
        self._non_empty_fluids = 0
        self.calculate_counts()

    def __repr__(self) -> str:
        return (
            f"ChunkSection(non_empty_blocks={self._non_empty_blocks}, "
            f"random_tick_blocks={self._random_tick_blocks}, "
            f"non_empty_fluids={self._non_empty_fluids})"
        )

    @property
    def block_states(self) -> tuple:
        return tuple(self._states)

    @property
    def biomes(self) -> tuple:
        return tuple(self._biomes)

    @property
    def non_empty_block_count(self) -> int:
        return self._non_empty_blocks

    @property
    def random_tick_block_count(self) -> int:
        return self._random_tick_blocks

    @property
    def non_empty_fluid_count(self) -> int:
        return self._non_empty_fluids

    def calculate_counts(self) -> None:
        """Recount non-empty blocks, random-ticking blocks and ticking fluids."""
        non_empty = random_ticks = fluids = 0
        for state, count in Counter(self._states).items():
            fluid = state.to_fluid_state()
            if not state.block.settings.is_empty:
                non_empty += count
            if state.block.settings.random_ticks:
                random_ticks += count
            if not fluid.fluid.settings.is_empty:
                non_empty += count
                if fluid.fluid.settings.random_ticks:
                    fluids += count
        self._non_empty_blocks = non_empty
        self._random_tick_blocks = random_ticks
        self._non_empty_fluids = fluids

    def is_empty(self) -> bool:
        """Whether the section holds no non-empty blocks."""
        return self._non_empty_blocks == 0

    def has_random_tick_blocks(self) -> bool:
        return self._random_tick_blocks > 0

    def has_random_tick_fluids(self) -> bool:
        return self._non_empty_fluids > 0

    def has_random_ticks(self) -> bool:
        """Whether the section receives random ticks."""
        return self.has_random_tick_blocks() or self.has_random_tick_fluids()

    def block_state(self, x: int, y: int, z: int) -> Optional[BlockState]:
        """Return the block state at the position, or None if out of range."""
        index = compute_index(x, y, z, EDGE_BITS)
        return self._states[index] if index < SECTION_VOLUME else None

    def fluid_state(self, x: int, y: int, z: int) -> Optional[FluidState]:
        """Return the fluid state at the position, or None if out of range."""
        state = self.block_state(x, y, z)
        return None if state is None else state.to_fluid_state()

    def biome(self, x: int, y: int, z: int) -> Any:
        """Return the biome at the biome-grid position, or None if out of range."""
        index = compute_index(x, y, z, BIOME_EDGE_BITS)
        return self._biomes[index] if index < BIOME_VOLUME else None

    def set_block_state(self, x: int, y: int, z: int, state: BlockState) -> BlockState:
        """Replace the block state at the position and return the old one.

        Raises IndexError if the position is out of range.
        """
        index = compute_index(x, y, z, EDGE_BITS)
        if index >= SECTION_VOLUME:
            raise IndexError(f"position ({x}, {y}, {z}) is outside the section")
        old = self._states[index]
        self._states[index] = state

        if not old.block.settings.is_empty:
            self._non_empty_blocks -= 1
            if old.block.settings.random_ticks:
                self._random_tick_blocks -= 1
        if not old.to_fluid_state().is_empty:
            self._non_empty_fluids -= 1

        if not state.block.settings.is_empty:
            self._non_empty_blocks += 1
            if state.block.settings.random_ticks:
                self._random_tick_blocks += 1
        if not state.to_fluid_state().is_empty:
            self._non_empty_fluids += 1

        return old


def new_section(default_state: BlockState, default_biome: Any) -> ChunkSection:
    """Create a section filled with the default block state and biome.

    The counters start at zero, as for a section of air; call
    :meth:`ChunkSection.calculate_counts` when the default is not empty.
    """
    section = ChunkSection([default_state] * SECTION_VOLUME, [default_biome] * BIOME_VOLUME)
    section._non_empty_blocks = 0
    section._random_tick_blocks = 0
    section._non_empty_fluids = 0
    return section