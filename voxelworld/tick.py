"""Scheduled ticks and their priorities."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Generic, Mapping, TypeVar

from voxelworld.view import BlockPos

T = TypeVar("T")


class Priority(enum.IntEnum):
    """Priority of a tick; lower values run first."""

    EXTREMELY_HIGH = -3
    VERY_HIGH = -2
    HIGH = -1
    NORMAL = 0
    LOW = 1
    VERY_LOW = 2
    EXTREMELY_LOW = 3


def priority_from_int(value: int) -> Priority:
    """Convert an integer to a priority, clamping out-of-range values."""
    return Priority(max(Priority.EXTREMELY_HIGH, min(Priority.EXTREMELY_LOW, value)))


@dataclass(frozen=True, eq=False)
class Tick(Generic[T]):
    """A tick of an in-game object. Equality considers type and position only."""

    ty: T
    pos: BlockPos
    delay: int = 0
    priority: Priority = Priority.NORMAL

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tick):
            return NotImplemented
        return self.ty == other.ty and self.pos == other.pos

    def __hash__(self) -> int:
        return hash((self.ty, self.pos))

    def to_dict(self) -> dict:
        """Return the serialized form of this tick."""
        return {
            "i": self.ty,
            "x": self.pos.x,
            "y": self.pos.y,
            "z": self.pos.z,
            "t": self.delay,
            "p": int(self.priority),
        }

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "Tick":
        """Build a tick from its serialized form.

        Raises ValueError on missing fields or an unknown priority.
        """
        missing = [key for key in ("i", "x", "y", "z", "t", "p") if key not in data]
        if missing:
            raise ValueError(f"missing tick fields: {', '.join(missing)}")
        try:
            priority = Priority(data["p"])
        except ValueError as exc:
            raise ValueError(f"invalid tick priority: {data['p']!r}") from exc
        return Tick(
            ty=data["i"],
            pos=BlockPos(int(data["x"]), int(data["y"]), int(data["z"])),
            delay=int(data["t"]),
            priority=priority,
        )


@dataclass(frozen=True, eq=False)
class OrderedTick(Generic[T]):
    """A tick with a trigger time and an order within its priority.

    Equality considers type and position; ordering considers priority and
    sub-tick order.
    """

    ty: T
    pos: BlockPos
    trigger_tick: int
    priority: Priority
    sub_tick_order: int

    def _order_key(self) -> tuple:
        return (self.priority, self.sub_tick_order)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OrderedTick):
            return NotImplemented
        return self.ty == other.ty and self.pos == other.pos

    def __hash__(self) -> int:
        return hash((self.ty, self.pos))

    def __lt__(self, other: "OrderedTick") -> bool:
        if not isinstance(other, OrderedTick):
            return NotImplemented
        return self._order_key() < other._order_key()

    def __le__(self, other: "OrderedTick") -> bool:
        if not isinstance(other, OrderedTick):
            return NotImplemented
        return self._order_key() <= other._order_key()

    def __gt__(self, other: "OrderedTick") -> bool:
        if not isinstance(other, OrderedTick):
            return NotImplemented
        return self._order_key() > other._order_key()

    def __ge__(self, other: "OrderedTick") -> bool:
        if not isinstance(other, OrderedTick):
            return NotImplemented
        return self._order_key() >= other._order_key()

    def trigger_tick_cmp(self, other: "OrderedTick") -> int:
        """Compare by trigger tick, then by priority and sub-tick order.

        Returns a negative number, zero or a positive number.
        """
        a = (self.trigger_tick, *self._order_key())
        b = (other.trigger_tick, *other._order_key())
        return (a > b) - (a < b)