"""Anchored sliding-window prefetch controller.

The controller owns a ``WindowState`` and keeps its three cells populated:
the anchor is fetched first, then both neighbours are derived from whatever
item is current. Navigation shifts the window one slot and issues exactly one
new fetch at the leading edge. Fetch completions are applied from
done-callbacks on the event loop; a completion for a cell that no longer
occupies its slot is dropped.

All public operations are synchronous and never wait on a fetch. They either
take effect immediately or refuse.
"""
from __future__ import annotations

import asyncio
import logging
from functools import partial
from typing import TYPE_CHECKING, Any, Generic

from .completion import Completion, FailureSink
from .events import (
    EndReachedEvent,
    EndUnreachedEvent,
    FetchFailedEvent,
    NavigationRefusedEvent,
    PageChangedEvent,
    PagerEvent,
    WindowChangedEvent,
)
from .notifier import PagerListener, PagerNotifier
from .types import (
    END,
    AnchorLoader,
    CellState,
    ControllerPhase,
    Direction,
    NeighborLoader,
    RefusalReason,
    Slot,
    T,
    is_end,
)
from .window import DEFAULT_ANCHOR_OFFSET, WindowState

if TYPE_CHECKING:
    from .config import PagerConfig

logger = logging.getLogger(__name__)


async def _invoke(loader: Any, *args: Any) -> Any:
    return await loader(*args)


class WindowController(Generic[T]):
    """Three-slot prefetch window over a lazily discovered sequence."""

    def __init__(
        self,
        load_anchor: AnchorLoader,
        load_next: NeighborLoader,
        load_previous: NeighborLoader,
        *,
        anchor_offset: int = DEFAULT_ANCHOR_OFFSET,
        cancel_discarded: bool = False,
        on_event: PagerListener | None = None,
        on_failure: FailureSink | None = None,
        notifier: PagerNotifier | None = None,
    ) -> None:
        self._load_anchor = load_anchor
        self._loaders: dict[Direction, NeighborLoader] = {
            Direction.LEFT: load_previous,
            Direction.RIGHT: load_next,
        }
        self._window = WindowState(anchor_offset=anchor_offset)
        self._cancel_discarded = cancel_discarded
        self._on_failure = on_failure
        self.notifier = notifier or PagerNotifier()
        if on_event is not None:
            self.notifier.add_listener(on_event)
        self._started = False
        self._closed = False
        self._settling = False
        # Reached callbacks are suppressed until the first anchor resolves.
        self._startup = True

    @classmethod
    def from_config(
        cls,
        config: "PagerConfig",
        load_anchor: AnchorLoader,
        load_next: NeighborLoader,
        load_previous: NeighborLoader,
        **kwargs: Any,
    ) -> WindowController[Any]:
        return cls(
            load_anchor,
            load_next,
            load_previous,
            anchor_offset=config.window.anchor_offset,
            cancel_discarded=config.window.cancel_discarded,
            **kwargs,
        )

    # ------------------------------------------------------------------
    # Inspection

    @property
    def window(self) -> WindowState:
        return self._window

    @property
    def page_view_index(self) -> int:
        """Raw, anchor-biased index (never negative in practice)."""
        return self._window.index

    @property
    def left_exhausted(self) -> bool:
        return self._window.left_exhausted

    @property
    def right_exhausted(self) -> bool:
        return self._window.right_exhausted

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def phase(self) -> ControllerPhase:
        if self._closed:
            return ControllerPhase.CLOSED
        if not self._started:
            return ControllerPhase.IDLE
        if self._settling:
            return ControllerPhase.SETTLING
        if self._window.peek(Slot.CURRENT) is not CellState.RESOLVED:
            return ControllerPhase.INITIALIZING
        return ControllerPhase.READY

    def current_index(self) -> int:
        return self._window.current_index

    def peek_slot(self, slot: Slot) -> CellState:
        return self._window.peek(slot)

    def get_slot(self, slot: Slot) -> Any:
        """Return the resolved value of ``slot`` (may be END).

        Raises:
            NotReadyError: the slot is pending or not issued yet.
            FailedFetchError: the slot's loader failed.
        """
        return self._window.get(slot)

    def can_advance(self) -> bool:
        return self._refusal(Direction.RIGHT) is None

    def can_retreat(self) -> bool:
        return self._refusal(Direction.LEFT) is None

    # ------------------------------------------------------------------
    # Operations

    def start(self) -> None:
        """Issue the anchor fetch. Must be called with a running event loop."""
        if self._closed:
            raise RuntimeError("Controller is closed")
        if self._started:
            raise RuntimeError("Controller already started")
        self._issue_anchor()
        self._started = True
        self._changed("started", Slot.CURRENT)

    def advance(self) -> bool:
        """Move one step toward ``next``; return whether the window shifted."""
        return self._move(Direction.RIGHT)

    def retreat(self) -> bool:
        """Move one step toward ``previous``; return whether the window shifted."""
        return self._move(Direction.LEFT)

    def reload(self, slot: Slot) -> bool:
        """Reissue the fetch for ``slot`` without shifting the window.

        Reloading CURRENT re-runs the anchor loader; the index and the other
        slots are untouched until it resolves, then the neighbours are
        rederived from the new item. Reloading a neighbour requires a
        resolved, real current item. Returns whether a fetch was issued.
        """
        if self._closed or not self._started:
            return False
        if slot is Slot.CURRENT:
            self._issue_anchor()
            self._changed("reloaded", slot)
            return True
        if not self._window.has_value(Slot.CURRENT):
            logger.debug("Reload of %s skipped: no current item", slot.value)
            return False
        direction = Direction.LEFT if slot is Slot.PREVIOUS else Direction.RIGHT
        self._issue_neighbor(direction)
        self._changed("reloaded", slot)
        return True

    def close(self) -> None:
        """Tear the controller down; pending fetches become unobservable."""
        if self._closed:
            return
        self._closed = True
        for _, cell in list(self._window.cells()):
            cell.discard(cancel=self._cancel_discarded)
        self.notifier.clear()
        logger.debug("Controller closed at index %d", self.current_index())

    async def wait_idle(self) -> None:
        """Wait until no live cell is pending. Never raises on fetch errors."""
        while not self._closed:
            pending = [cell for _, cell in self._window.cells() if cell.is_pending]
            if not pending:
                return
            await asyncio.gather(*(cell.wait() for cell in pending))

    # ------------------------------------------------------------------
    # Navigation

    def _refusal(self, direction: Direction) -> RefusalReason | None:
        if self._closed:
            return RefusalReason.CLOSED
        current = self._window.current
        if current is None or not current.is_resolved:
            return RefusalReason.INITIALIZING
        if is_end(current.get()):
            return RefusalReason.END_REACHED
        neighbor = self._window.cell(direction.slot)
        if neighbor is None or neighbor.is_pending:
            return RefusalReason.PENDING
        if neighbor.is_failed:
            return RefusalReason.FAILED
        if is_end(neighbor.get()):
            return RefusalReason.END_REACHED
        return None

    def _move(self, direction: Direction) -> bool:
        reason = self._refusal(direction)
        if reason is not None:
            logger.debug("Refused %s move: %s", direction.value, reason.value)
            if not self._closed:
                self._emit(
                    NavigationRefusedEvent(
                        index=self.current_index(), direction=direction, reason=reason
                    )
                )
            return False

        self._settling = True
        try:
            dropped = self._window.shift(direction)
            if dropped is not None:
                dropped.discard(cancel=self._cancel_discarded)
            # The trailing neighbour is the item we just left, so that side is
            # known to be populated.
            self._window.set_exhausted(direction.opposite, False)
            self._issue_neighbor(direction)
            value = self._window.get(Slot.CURRENT)
            logger.debug("Moved %s to index %d", direction.value, self.current_index())
            self._emit(
                PageChangedEvent(index=self.current_index(), direction=direction, value=value)
            )
            self._changed("shifted", Slot.CURRENT)
        finally:
            self._settling = False
        return True

    # ------------------------------------------------------------------
    # Fetch issuing

    def _make_cell(self, label: str, loader: Any, *args: Any) -> Completion[Any]:
        logger.debug("Issuing %s", label)
        return Completion(_invoke(loader, *args), label=label, on_failure=self._on_failure)

    def _replace(self, slot: Slot, cell: Completion[Any]) -> None:
        replaced = self._window.set_cell(slot, cell)
        if replaced is not None and replaced is not cell:
            replaced.discard(cancel=self._cancel_discarded)

    def _issue_anchor(self) -> None:
        cell = self._make_cell("anchor", self._load_anchor)
        self._replace(Slot.CURRENT, cell)
        cell.add_done_callback(self._on_anchor_settled)

    def _issue_neighbor(self, direction: Direction, *, initial: bool = False) -> None:
        slot = direction.slot
        base = self._window.get(Slot.CURRENT)
        cell = self._make_cell(
            f"{slot.value}@{self.current_index()}", self._loaders[direction], base
        )
        self._replace(slot, cell)
        cell.add_done_callback(partial(self._on_neighbor_settled, direction, initial))

    # ------------------------------------------------------------------
    # Completion handling

    def _on_anchor_settled(self, cell: Completion[Any]) -> None:
        if self._closed or not self._window.holds(Slot.CURRENT, cell):
            return
        if cell.is_failed:
            self._report_failure(Slot.CURRENT, cell)
            self._changed("failed", Slot.CURRENT)
            return

        initial, self._startup = self._startup, False
        value = cell.get()
        if is_end(value):
            # Empty sequence: nothing exists on either side.
            for direction in Direction:
                self._replace(direction.slot, Completion.resolved(END, label=direction.slot.value))
                self._mark_end(direction, value, suppress=initial)
        else:
            for direction in Direction:
                self._issue_neighbor(direction, initial=initial)
        self._changed("resolved", Slot.CURRENT)

    def _on_neighbor_settled(
        self, direction: Direction, initial: bool, cell: Completion[Any]
    ) -> None:
        slot = direction.slot
        if self._closed or not self._window.holds(slot, cell):
            return
        if not self._window.has_value(Slot.CURRENT):
            # Issued from the item a pending re-anchor is replacing.
            logger.debug("Ignoring %s result during re-anchor", cell.label)
            return
        if cell.is_failed:
            self._report_failure(slot, cell)
            self._changed("failed", slot)
            return

        current = self._window.get(Slot.CURRENT)
        if is_end(cell.get()):
            self._mark_end(direction, current, suppress=initial)
        elif self._window.set_exhausted(direction, False):
            self._emit(
                EndUnreachedEvent(index=self.current_index(), direction=direction, value=current)
            )
        self._changed("resolved", slot)

    def _mark_end(self, direction: Direction, current: Any, *, suppress: bool) -> None:
        if self._window.set_exhausted(direction, True) and not suppress:
            self._emit(
                EndReachedEvent(index=self.current_index(), direction=direction, value=current)
            )

    def _report_failure(self, slot: Slot, cell: Completion[Any]) -> None:
        failure = cell.failure
        self._emit(
            FetchFailedEvent(
                index=self.current_index(),
                slot=slot,
                message=failure.describe() if failure else "",
                error_type=failure.error_type if failure else "",
            )
        )

    # ------------------------------------------------------------------
    # Notification

    def _emit(self, event: PagerEvent) -> None:
        self.notifier.emit(event)

    def _changed(self, reason: str, slot: Slot | None = None) -> None:
        self._emit(WindowChangedEvent(index=self.current_index(), reason=reason, slot=slot))
