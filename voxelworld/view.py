"""Height limits, optional state results and the block view interface."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

T = TypeVar("T")
U = TypeVar("U")

DEFAULT_MAX_LIGHT_LEVEL = 15
"""The default max light level of a view."""


def section_coord(coord: int) -> int:
    """Return the section coordinate containing the given block coordinate."""
    return coord >> 4


@dataclass(frozen=True)
class BlockPos:
    """Position of a block in a world."""

    x: int
    y: int
    z: int


@dataclass(frozen=True)
class HeightLimit:
    """Vertical extent of a view: ``height`` blocks starting at ``bottom``."""

    height: int
    bottom: int

    def __post_init__(self) -> None:
        if self.height < 0:
            raise ValueError(f"height must not be negative, got {self.height}")

    def top(self) -> int:
        """Return the top Y level, exclusive."""
        return self.bottom + self.height

    def bottom_section_coord(self) -> int:
        """Return the bottom section coordinate, inclusive."""
        return section_coord(self.bottom)

    def top_section_coord(self) -> int:
        """Return the top section coordinate, exclusive."""
        return section_coord(self.top() - 1) + 1

    def count_vertical_sections(self) -> int:
        """Return the number of sections in the view, vertically."""
        return self.top_section_coord() - self.bottom_section_coord()

    def is_out_of_limit(self, y: int) -> bool:
        """Whether the given Y level lies outside this height limit."""
        return y < self.bottom or y >= self.top()

    def section_index(self, y: int) -> int:
        """Return the zero-based section index for the given Y level.

        The result is negative for levels below the bottom section.
        """
        return self.section_coord_to_index(section_coord(y))

    def section_coord_to_index(self, coord: int) -> int:
        """Convert a section coordinate to a zero-based section index."""
        return coord - self.bottom_section_coord()

    def section_index_to_coord(self, index: int) -> int:
        """Convert a zero-based section index to a section coordinate."""
        return index + self.bottom_section_coord()


@dataclass(frozen=True)
class StateOption(Generic[T]):
    """Optional state result: a state, the void variant, or nothing."""

    class Kind(enum.Enum):
        SOME = "some"
        VOID = "void"
        NONE = "none"

    kind: "StateOption.Kind"
    value: Optional[T] = None

    @classmethod
    def some(cls, value: T) -> "StateOption[T]":
        """Wrap a present state."""
        return cls(cls.Kind.SOME, value)

    @property
    def is_some(self) -> bool:
        return self.kind is StateOption.Kind.SOME

    @property
    def is_void(self) -> bool:
        return self.kind is StateOption.Kind.VOID

    @property
    def is_none(self) -> bool:
        return self.kind is StateOption.Kind.NONE

    def map(self, mapper: Callable[[T], U]) -> "StateOption[U]":
        """Apply ``mapper`` to a present state; void and none stay as they are."""
        if self.is_some:
            return StateOption.some(mapper(self.value))  # type: ignore[arg-type]
        return self  # type: ignore[return-value]


StateOption.VOID = StateOption(StateOption.Kind.VOID)  # type: ignore[attr-defined]
StateOption.NONE = StateOption(StateOption.Kind.NONE)  # type: ignore[attr-defined]


def state_option(value: Optional[T]) -> StateOption[T]:
    """Convert an optional value to a :class:`StateOption`."""
    if value is None:
        return StateOption.NONE  # type: ignore[attr-defined]
    return StateOption.some(value)


class BlockView(ABC):
    """A scoped view of block states, fluid states and block entities."""

    @abstractmethod
    def block_state(self, pos: BlockPos) -> Any:
        """Return the block state at ``pos``, or None."""

    @abstractmethod
    def fluid_state(self, pos: BlockPos) -> Any:
        """Return the fluid state at ``pos``, or None."""

    @abstractmethod
    def block_entity(self, pos: BlockPos) -> Any:
        """Return the block entity at ``pos``, or None."""

    @abstractmethod
    def luminance(self, pos: BlockPos) -> StateOption[int]:
        """Return the luminance source level at ``pos``."""

    def max_light_level(self) -> int:
        """Return the max light level of this view."""
        return DEFAULT_MAX_LIGHT_LEVEL