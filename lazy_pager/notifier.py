"""Observer registry for pager events."""
from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeAlias

from .events import (
    EndReachedEvent,
    EndUnreachedEvent,
    PageChangedEvent,
    PagerEvent,
    WindowChangedEvent,
)
from .types import Direction

logger = logging.getLogger(__name__)

PagerListener: TypeAlias = Callable[[PagerEvent], None]
ValueCallback: TypeAlias = Callable[[Any], None]
Unsubscribe: TypeAlias = Callable[[], None]


class PagerNotifier:
    """Dispatches pager events to registered listeners.

    Listeners are called synchronously, in registration order, on the thread
    that emits (the event loop thread). A listener that raises is logged and
    skipped; delivery to the remaining listeners continues.
    """

    def __init__(self) -> None:
        self._listeners: list[tuple[type[PagerEvent], PagerListener]] = []

    def __len__(self) -> int:
        return len(self._listeners)

    def add_listener(
        self,
        listener: PagerListener,
        event_type: type[PagerEvent] = PagerEvent,
    ) -> Unsubscribe:
        """Register ``listener`` for ``event_type`` (and subclasses)."""
        entry = (event_type, listener)
        self._listeners.append(entry)

        def unsubscribe() -> None:
            if entry in self._listeners:
                self._listeners.remove(entry)

        return unsubscribe

    def remove_listener(self, listener: PagerListener) -> None:
        self._listeners = [entry for entry in self._listeners if entry[1] != listener]

    def clear(self) -> None:
        self._listeners.clear()

    def emit(self, event: PagerEvent) -> None:
        for event_type, listener in list(self._listeners):
            if not isinstance(event, event_type):
                continue
            try:
                listener(event)
            except Exception:
                logger.exception("Pager listener %r failed on %s", listener, event.kind)

    # Value-style hooks, one per observable transition.

    def on_window_changed(self, callback: Callable[[WindowChangedEvent], None]) -> Unsubscribe:
        return self.add_listener(callback, WindowChangedEvent)  # type: ignore[arg-type]

    def on_page_changed(self, callback: ValueCallback) -> Unsubscribe:
        return self.add_listener(lambda e: callback(e.value), PageChangedEvent)  # type: ignore[attr-defined]

    def on_left_end_reached(self, callback: ValueCallback) -> Unsubscribe:
        return self._on_direction(EndReachedEvent, Direction.LEFT, callback)

    def on_right_end_reached(self, callback: ValueCallback) -> Unsubscribe:
        return self._on_direction(EndReachedEvent, Direction.RIGHT, callback)

    def on_left_end_unreached(self, callback: ValueCallback) -> Unsubscribe:
        return self._on_direction(EndUnreachedEvent, Direction.LEFT, callback)

    def on_right_end_unreached(self, callback: ValueCallback) -> Unsubscribe:
        return self._on_direction(EndUnreachedEvent, Direction.RIGHT, callback)

    def _on_direction(
        self,
        event_type: type[EndReachedEvent] | type[EndUnreachedEvent],
        direction: Direction,
        callback: ValueCallback,
    ) -> Unsubscribe:
        def listener(event: PagerEvent) -> None:
            if getattr(event, "direction", None) is direction:
                callback(getattr(event, "value", None))

        return self.add_listener(listener, event_type)
