"""Shared type surface for the pager core.

Centralizes the end-of-sequence sentinel, the slot/direction enums and the
loader contracts so the core modules can share them without importing each
other.
"""
from __future__ import annotations

from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any, Final, TypeAlias, TypeVar

T = TypeVar("T")


class EndOfSequence:
    """Terminal value returned by a loader when no item exists in a direction.

    Distinct from ``None`` so that ``None`` stays usable as an item payload.
    There is exactly one instance, exported as ``END``.
    """

    _instance: EndOfSequence | None = None

    def __new__(cls) -> EndOfSequence:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "END"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "END"


END: Final = EndOfSequence()


def is_end(value: Any) -> bool:
    """Return True when ``value`` is the end-of-sequence sentinel."""
    return value is END


class CellState(str, Enum):
    PENDING = "pending"
    RESOLVED = "resolved"
    FAILED = "failed"


class Slot(str, Enum):
    PREVIOUS = "previous"
    CURRENT = "current"
    NEXT = "next"


class Direction(str, Enum):
    LEFT = "left"
    RIGHT = "right"

    @property
    def slot(self) -> Slot:
        """The neighbour slot that lies in this direction."""
        return Slot.PREVIOUS if self is Direction.LEFT else Slot.NEXT

    @property
    def opposite(self) -> Direction:
        return Direction.RIGHT if self is Direction.LEFT else Direction.LEFT


class ControllerPhase(str, Enum):
    IDLE = "idle"
    INITIALIZING = "initializing"
    READY = "ready"
    SETTLING = "settling"
    CLOSED = "closed"


class RefusalReason(str, Enum):
    """Why a navigation request was turned down."""

    INITIALIZING = "initializing"
    PENDING = "pending"
    FAILED = "failed"
    END_REACHED = "end_reached"
    CLOSED = "closed"


AnchorLoader: TypeAlias = Callable[[], Awaitable[Any]]
NeighborLoader: TypeAlias = Callable[[Any], Awaitable[Any]]
