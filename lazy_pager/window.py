"""Three-slot window state with anchored indexing."""
from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from .completion import Completion
from .errors import NotReadyError
from .types import CellState, Direction, Slot, is_end

DEFAULT_ANCHOR_OFFSET = 10_000


@dataclass(slots=True)
class WindowState:
    """The previous/current/next cells, exhaustion flags and anchored index.

    ``index`` starts at ``anchor_offset`` so a bidirectionally unbounded walk
    stays non-negative; the logical position is ``index - anchor_offset``.
    A neighbour slot holding ``None`` has not been issued yet (the anchor is
    still loading) and reads as PENDING.

    Owned by exactly one controller and only mutated on the event loop thread.
    """

    anchor_offset: int = DEFAULT_ANCHOR_OFFSET
    index: int = -1
    previous: Completion[Any] | None = None
    current: Completion[Any] | None = None
    next: Completion[Any] | None = None
    left_exhausted: bool = False
    right_exhausted: bool = False

    def __post_init__(self) -> None:
        if self.anchor_offset <= 0:
            raise ValueError(f"anchor_offset must be positive, got {self.anchor_offset}")
        if self.index < 0:
            self.index = self.anchor_offset

    @property
    def current_index(self) -> int:
        return self.index - self.anchor_offset

    def cell(self, slot: Slot) -> Completion[Any] | None:
        if slot is Slot.PREVIOUS:
            return self.previous
        if slot is Slot.CURRENT:
            return self.current
        return self.next

    def set_cell(self, slot: Slot, cell: Completion[Any] | None) -> Completion[Any] | None:
        """Install ``cell`` in ``slot`` and return the cell it replaced."""
        replaced = self.cell(slot)
        if slot is Slot.PREVIOUS:
            self.previous = cell
        elif slot is Slot.CURRENT:
            self.current = cell
        else:
            self.next = cell
        return replaced

    def cells(self) -> Iterator[tuple[Slot, Completion[Any]]]:
        for slot in Slot:
            cell = self.cell(slot)
            if cell is not None:
                yield slot, cell

    def holds(self, slot: Slot, cell: Completion[Any]) -> bool:
        return self.cell(slot) is cell

    def peek(self, slot: Slot) -> CellState:
        cell = self.cell(slot)
        if cell is None:
            return CellState.PENDING
        return cell.peek()

    def get(self, slot: Slot) -> Any:
        cell = self.cell(slot)
        if cell is None:
            raise NotReadyError(f"Slot '{slot.value}' has not been issued yet")
        return cell.get()

    def has_value(self, slot: Slot) -> bool:
        """True when ``slot`` resolved to a real item (not END)."""
        cell = self.cell(slot)
        return cell is not None and cell.is_resolved and not is_end(cell.get())

    def exhausted(self, direction: Direction) -> bool:
        if direction is Direction.LEFT:
            return self.left_exhausted
        return self.right_exhausted

    def set_exhausted(self, direction: Direction, value: bool) -> bool:
        """Set the flag for ``direction``; return True when it changed."""
        changed = self.exhausted(direction) != value
        if direction is Direction.LEFT:
            self.left_exhausted = value
        else:
            self.right_exhausted = value
        return changed

    def shift(self, direction: Direction) -> Completion[Any] | None:
        """Move the window one slot toward ``direction``.

        The cell in ``direction`` becomes current, current becomes the trailing
        neighbour and the leading slot is left empty for the caller to refill.
        Returns the trailing cell that fell out of the window.
        """
        if direction is Direction.RIGHT:
            dropped = self.previous
            self.previous, self.current, self.next = self.current, self.next, None
            self.index += 1
        else:
            dropped = self.next
            self.next, self.current, self.previous = self.current, self.previous, None
            self.index -= 1
        return dropped

    def snapshot(self) -> dict[str, Any]:
        """Plain-data view for logging and JSON output."""
        return {
            "index": self.current_index,
            "slots": {slot.value: self.peek(slot).value for slot in Slot},
            "left_exhausted": self.left_exhausted,
            "right_exhausted": self.right_exhausted,
        }
