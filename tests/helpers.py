"""In-memory sequences and event recorders for driving the controller in tests."""
from __future__ import annotations

import asyncio
from typing import Any

from lazy_pager import END, PagerEvent, WindowController


class ListSource:
    """Sequence backed by a mutable list.

    With ``gated=True`` every fetch blocks until ``release`` lets it through,
    so tests control exactly when each completion lands. ``fail_once`` holds
    ``(op, arg)`` pairs whose next fetch raises; a retry then succeeds.
    """

    def __init__(self, items: list[Any], *, start: int = 0, gated: bool = False) -> None:
        self.items = list(items)
        self.start = start
        self.gated = gated
        self.calls: list[tuple[str, Any]] = []
        self.fail_once: set[tuple[str, Any]] = set()
        self._gates: list[tuple[str, Any, asyncio.Event]] = []

    async def _enter(self, op: str, arg: Any) -> None:
        self.calls.append((op, arg))
        if self.gated:
            gate = asyncio.Event()
            self._gates.append((op, arg, gate))
            await gate.wait()
        if (op, arg) in self.fail_once:
            self.fail_once.discard((op, arg))
            raise RuntimeError(f"{op} failed for {arg!r}")

    @property
    def waiting(self) -> list[tuple[str, Any]]:
        return [(op, arg) for op, arg, gate in self._gates if not gate.is_set()]

    def release(self, op: str | None = None, arg: Any = None) -> int:
        """Open matching gates (all of them when ``op`` is None)."""
        released = 0
        for gate_op, gate_arg, gate in self._gates:
            if gate.is_set():
                continue
            if op is not None and (gate_op != op or (arg is not None and gate_arg != arg)):
                continue
            gate.set()
            released += 1
        return released

    async def load_anchor(self) -> Any:
        await self._enter("anchor", None)
        if not self.items:
            return END
        return self.items[self.start]

    async def load_next(self, current: Any) -> Any:
        await self._enter("next", current)
        position = self.items.index(current) + 1
        return self.items[position] if position < len(self.items) else END

    async def load_previous(self, current: Any) -> Any:
        await self._enter("previous", current)
        position = self.items.index(current) - 1
        return self.items[position] if position >= 0 else END


class EventRecorder:
    def __init__(self) -> None:
        self.events: list[PagerEvent] = []

    def __call__(self, event: PagerEvent) -> None:
        self.events.append(event)

    def of(self, event_type: type[PagerEvent]) -> list[Any]:
        return [event for event in self.events if isinstance(event, event_type)]

    def clear(self) -> None:
        self.events.clear()


def make_controller(source: ListSource, **kwargs: Any) -> tuple[WindowController[Any], EventRecorder]:
    recorder = EventRecorder()
    controller = WindowController(
        source.load_anchor,
        source.load_next,
        source.load_previous,
        on_event=recorder,
        **kwargs,
    )
    return controller, recorder


async def settle(rounds: int = 20) -> None:
    """Let released fetches and their done-callbacks run."""
    for _ in range(rounds):
        await asyncio.sleep(0)
