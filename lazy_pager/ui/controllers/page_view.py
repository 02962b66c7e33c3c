"""Page-view driver logic (UI-agnostic).

Translates what a scrolling surface reports (the position it settled on,
pointer drags) into controller navigation, and tells the surface what to draw
at each position. The surface keeps positions in the controller's raw,
anchor-biased index space.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from lazy_pager.controller import WindowController
from lazy_pager.types import CellState, Direction, Slot, is_end


class ItemKind(str, Enum):
    PAGE = "page"
    PLACEHOLDER = "placeholder"
    BLANK = "blank"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class PageItem:
    """What to draw at one position."""

    kind: ItemKind
    value: Any = None


@dataclass(frozen=True, slots=True)
class PageTurn:
    """Result of a settled page change reported by the surface."""

    moved: bool
    position: int
    snap_back: bool = False


_OFFSET_SLOTS = {-1: Slot.PREVIOUS, 0: Slot.CURRENT, 1: Slot.NEXT}


@dataclass(slots=True)
class PageViewDriver:
    """Drives a ``WindowController`` from a paging surface."""

    controller: WindowController[Any]
    _last_x: float | None = None

    @property
    def position(self) -> int:
        return self.controller.page_view_index

    def page_changed(self, page: int) -> PageTurn:
        """Handle the surface settling on ``page``.

        A one-step move becomes advance/retreat. When the controller refuses,
        or the surface jumped more than one page, the surface must snap back
        to ``position``.
        """
        position = self.position
        if page == position:
            return PageTurn(moved=False, position=position)
        if page == position + 1:
            moved = self.controller.advance()
        elif page == position - 1:
            moved = self.controller.retreat()
        else:
            moved = False
        return PageTurn(moved=moved, position=self.position, snap_back=not moved)

    def pointer_moved(self, x: float) -> int | None:
        """Track a drag; return a rebound target when pulling past an end."""
        last, self._last_x = self._last_x, x
        if last is None:
            return None
        if x > last and self.controller.left_exhausted:
            return self.position
        if x < last and self.controller.right_exhausted:
            return self.position
        return None

    def pointer_released(self) -> None:
        self._last_x = None

    def item_at(self, position: int) -> PageItem:
        controller = self.controller
        if controller.peek_slot(Slot.CURRENT) is CellState.PENDING:
            return PageItem(ItemKind.PLACEHOLDER)

        offset = position - self.position
        slot = _OFFSET_SLOTS.get(offset)
        if slot is None:
            direction = Direction.RIGHT if offset > 0 else Direction.LEFT
            if controller.window.exhausted(direction):
                return PageItem(ItemKind.BLANK)
            return PageItem(ItemKind.PLACEHOLDER)

        state = controller.peek_slot(slot)
        if state is CellState.FAILED:
            cell = controller.window.cell(slot)
            return PageItem(ItemKind.ERROR, cell.failure if cell is not None else None)
        if state is CellState.PENDING:
            return PageItem(ItemKind.PLACEHOLDER)
        value = controller.get_slot(slot)
        if is_end(value):
            return PageItem(ItemKind.BLANK)
        return PageItem(ItemKind.PAGE, value)

    def retry(self, position: int) -> bool:
        """Reload the slot shown at ``position`` if it failed."""
        slot = _OFFSET_SLOTS.get(position - self.position)
        if slot is None or self.controller.peek_slot(slot) is not CellState.FAILED:
            return False
        return self.controller.reload(slot)
