"""Display backends rendering pager events and pages."""
from __future__ import annotations

import dataclasses
import json
import sys
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Mapping, TextIO

from lazy_pager.events import (
    EndReachedEvent,
    EndUnreachedEvent,
    FetchFailedEvent,
    NavigationRefusedEvent,
    PageChangedEvent,
    PagerEvent,
    WindowChangedEvent,
)
from lazy_pager.types import is_end

from .formatting import describe_value, page_body, truncate_lines


def format_event(event: PagerEvent) -> str | None:
    """Plain one-line description of an event, or None if it has none."""
    tag = f"[{event.index:+d}]"
    if isinstance(event, PageChangedEvent):
        return f"{tag} page {event.direction.value}: {describe_value(event.value)}"
    if isinstance(event, EndReachedEvent):
        return f"{tag} {event.direction.value} end reached at {describe_value(event.value)}"
    if isinstance(event, EndUnreachedEvent):
        return f"{tag} {event.direction.value} end unreached at {describe_value(event.value)}"
    if isinstance(event, NavigationRefusedEvent):
        return f"{tag} {event.direction.value} move refused ({event.reason.value})"
    if isinstance(event, FetchFailedEvent):
        return f"{tag} {event.slot.value} fetch failed: {event.message}"
    if isinstance(event, WindowChangedEvent):
        slot = f" {event.slot.value}" if event.slot is not None else ""
        return f"{tag} window {event.reason}{slot}"
    return None


class DisplayBackend(ABC):
    """Interface for rendering pager output (text, JSON, rich)."""

    def __init__(self, verbosity: int = 0) -> None:
        self.verbosity = verbosity

    def wants(self, event: PagerEvent) -> bool:
        # Window bookkeeping is noisy; only show it when asked for.
        if isinstance(event, WindowChangedEvent):
            return self.verbosity >= 2
        return True

    def display(self, event: PagerEvent) -> None:
        if self.wants(event):
            self.display_event(event)

    @abstractmethod
    def display_event(self, event: PagerEvent) -> None:
        raise NotImplementedError

    @abstractmethod
    def display_page(self, index: int, value: Any) -> None:
        raise NotImplementedError


class HeadlessDisplayBackend(DisplayBackend):
    """Plain text renderer for headless/non-interactive scenarios."""

    def __init__(
        self,
        stream: TextIO | None = None,
        *,
        verbosity: int = 0,
        max_body_chars: int = 4000,
        max_body_lines: int = 200,
    ) -> None:
        super().__init__(verbosity)
        self.stream = stream or sys.stdout
        self.max_body_chars = max_body_chars
        self.max_body_lines = max_body_lines

    def _write(self, text: str) -> None:
        self.stream.write(text)
        self.stream.write("\n")
        self.stream.flush()

    def display_event(self, event: PagerEvent) -> None:
        text = format_event(event)
        if text is not None:
            self._write(text)

    def display_page(self, index: int, value: Any) -> None:
        self._write(f"=== [{index:+d}] {describe_value(value)} ===")
        if is_end(value):
            return
        self._write(truncate_lines(page_body(value), self.max_body_chars, self.max_body_lines))


class JsonDisplayBackend(DisplayBackend):
    """JSONL renderer for automation scenarios."""

    def __init__(self, stream: TextIO | None = None, *, verbosity: int = 0) -> None:
        super().__init__(verbosity)
        self.stream = stream or sys.stdout

    def _write_record(self, record: Mapping[str, Any]) -> None:
        json.dump(record, self.stream, default=self._default)
        self.stream.write("\n")
        self.stream.flush()

    @staticmethod
    def _default(value: Any) -> Any:
        if hasattr(value, "model_dump"):
            return value.model_dump()
        if isinstance(value, Enum):
            return value.value
        if is_end(value):
            return None
        return repr(value)

    def display_event(self, event: PagerEvent) -> None:
        payload = {f.name: getattr(event, f.name) for f in dataclasses.fields(event)}
        if "value" in payload and is_end(payload["value"]):
            payload["value"] = None
            payload["end"] = True
        self._write_record({"kind": event.kind, **payload})

    def display_page(self, index: int, value: Any) -> None:
        record: dict[str, Any] = {"kind": "page", "index": index}
        if is_end(value):
            record["end"] = True
        else:
            record["value"] = value
        self._write_record(record)


class RichDisplayBackend(DisplayBackend):
    """Rich console renderer for terminals without the TUI."""

    _EVENT_STYLES = {
        PageChangedEvent: "bold cyan",
        EndReachedEvent: "yellow",
        EndUnreachedEvent: "green",
        NavigationRefusedEvent: "dim",
        FetchFailedEvent: "bold red",
        WindowChangedEvent: "dim",
    }

    def __init__(
        self,
        stream: TextIO | None = None,
        *,
        verbosity: int = 0,
        force_terminal: bool | None = None,
        max_body_chars: int = 4000,
        max_body_lines: int = 200,
    ) -> None:
        from rich.console import Console

        super().__init__(verbosity)
        self.console = Console(file=stream or sys.stdout, force_terminal=force_terminal)
        self.max_body_chars = max_body_chars
        self.max_body_lines = max_body_lines

    def display_event(self, event: PagerEvent) -> None:
        from rich.text import Text

        text = format_event(event)
        if text is None:
            return
        style = self._EVENT_STYLES.get(type(event), "")
        self.console.print(Text(text, style=style))

    def display_page(self, index: int, value: Any) -> None:
        from rich.panel import Panel
        from rich.text import Text

        title = f"[{index:+d}] {describe_value(value)}"
        if is_end(value):
            self.console.print(Panel(Text("No pages", style="dim"), title=title))
            return
        body = truncate_lines(page_body(value), self.max_body_chars, self.max_body_lines)
        self.console.print(Panel(Text(body), title=title))
