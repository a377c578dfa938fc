"""Upgrade data attached to chunks saved by older versions."""

from __future__ import annotations

import enum
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Optional

from voxelworld.view import HeightLimit

_U32_MAX = (1 << 32) - 1

_INDICES_KEY = "Indices"
_SIDES_KEY = "Sides"
_BLOCK_TICKS_KEY = "neighbor_block_ticks"
_FLUID_TICKS_KEY = "neighbor_fluid_ticks"


class EightWayDirection(enum.IntEnum):
    """Horizontal directions including diagonals; the value is the bit index."""

    NORTH = 0
    NORTH_EAST = 1
    EAST = 2
    SOUTH_EAST = 3
    SOUTH = 4
    SOUTH_WEST = 5
    WEST = 6
    NORTH_WEST = 7


class UpgradeDataError(ValueError):
    """Raised when serialized upgrade data is invalid."""


@dataclass
class UpgradeData:
    """Upgrade data for a chunk.

    ``center_indices_upgrade`` holds one index array per vertical section.
    ``block_ticks`` and ``fluid_ticks`` hold resolved registry entries.
    """

    sides_to_upgrade: tuple = ()
    center_indices_upgrade: tuple = ()
    block_ticks: list = field(default_factory=list)
    fluid_ticks: list = field(default_factory=list)


def _parse_index(key: Any) -> int:
    if isinstance(key, bool):
        raise UpgradeDataError(f"invalid section index: {key!r}")
    if isinstance(key, int):
        return key
    if isinstance(key, str):
        try:
            return int(key)
        except ValueError as exc:
            raise UpgradeDataError(f"invalid section index: {key!r}") from exc
    raise UpgradeDataError(f"expected a number as section index, got {key!r}")


def _parse_int_array(value: Any) -> tuple:
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise UpgradeDataError(f"expected an int array, got {value!r}")
    items = tuple(value)
    if any(isinstance(item, bool) or not isinstance(item, int) for item in items):
        raise UpgradeDataError(f"int array holds non-integer values: {value!r}")
    return items


def _parse_indices(value: Any, count: int) -> tuple:
    if not isinstance(value, Mapping):
        raise UpgradeDataError(f"expected a map of indices, got {value!r}")
    indices: list[tuple] = [() for _ in range(count)]
    for key, array in value.items():
        index = _parse_index(key)
        if 0 <= index < count:
            indices[index] = _parse_int_array(array)
    return tuple(indices)


def _parse_sides(value: Any) -> tuple:
    if isinstance(value, bool) or not isinstance(value, int):
        raise UpgradeDataError(f"expected an unsigned integer for sides, got {value!r}")
    if not 0 <= value <= _U32_MAX:
        raise UpgradeDataError(f"sides bitmask out of range: {value}")
    return tuple(d for d in EightWayDirection if value & (1 << d.value))


def _parse_ticks(value: Any, registry: Mapping, default: Optional[Any]) -> list:
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise UpgradeDataError(f"expected a sequence of ticked entries, got {value!r}")
    entries = []
    for key in value:
        try:
            entry = registry.get(key)
        except TypeError as exc:
            raise UpgradeDataError(f"invalid registry key: {key!r}") from exc
        if entry is None:
            entry = default
        if entry is None:
            raise UpgradeDataError("no valid entry deserialized")
        entries.append(entry)
    return entries


def load_upgrade_data(
    nbt: Mapping,
    height_limit: HeightLimit,
    blocks: Mapping,
    fluids: Mapping,
    default_block: Optional[Any] = None,
    default_fluid: Optional[Any] = None,
) -> UpgradeData:
    """Build upgrade data from its serialized compound and the chunk height limit.

    Ticked entries unknown to their registry fall back to the registry's
    default; without one an :class:`UpgradeDataError` is raised. Indices
    outside the chunk's vertical sections and unknown fields are ignored.
    """
    if not isinstance(nbt, Mapping):
        raise UpgradeDataError(f"expected a compound of upgrade data, got {nbt!r}")

    count = height_limit.count_vertical_sections()
    indices: tuple = tuple(() for _ in range(count))
    sides: tuple = ()
    block_ticks: list = []
    fluid_ticks: list = []

    for key, value in nbt.items():
        if key == _INDICES_KEY:
            indices = _parse_indices(value, count)
        elif key == _SIDES_KEY:
            sides = _parse_sides(value)
        elif key == _BLOCK_TICKS_KEY:
            block_ticks.extend(_parse_ticks(value, blocks, default_block))
        elif key == _FLUID_TICKS_KEY:
            fluid_ticks.extend(_parse_ticks(value, fluids, default_fluid))

    return UpgradeData(
        sides_to_upgrade=sides,
        center_indices_upgrade=indices,
        block_ticks=block_ticks,
        fluid_ticks=fluid_ticks,
    )