"""Pager event types emitted by the window controller (no rendering concerns)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

from .types import Direction, RefusalReason, Slot


@dataclass
class PagerEvent:
    """Base event for controller callbacks."""

    kind: ClassVar[str] = "event"

    index: int = 0


@dataclass
class WindowChangedEvent(PagerEvent):
    """Any change to window state: a slot settled, shifted or was reissued."""

    kind: ClassVar[str] = "window_changed"

    reason: str = ""
    slot: Slot | None = None


@dataclass
class PageChangedEvent(PagerEvent):
    """The current page moved one step; ``value`` is the new current item."""

    kind: ClassVar[str] = "page_changed"

    direction: Direction = Direction.RIGHT
    value: Any = None


@dataclass
class EndReachedEvent(PagerEvent):
    """The loader for ``direction`` returned END relative to ``value``."""

    kind: ClassVar[str] = "end_reached"

    direction: Direction = Direction.RIGHT
    value: Any = None


@dataclass
class EndUnreachedEvent(PagerEvent):
    """A previously exhausted direction produced a real item again."""

    kind: ClassVar[str] = "end_unreached"

    direction: Direction = Direction.RIGHT
    value: Any = None


@dataclass
class NavigationRefusedEvent(PagerEvent):
    kind: ClassVar[str] = "navigation_refused"

    direction: Direction = Direction.RIGHT
    reason: RefusalReason = RefusalReason.PENDING


@dataclass
class FetchFailedEvent(PagerEvent):
    kind: ClassVar[str] = "fetch_failed"

    slot: Slot = Slot.CURRENT
    message: str = ""
    error_type: str = ""
