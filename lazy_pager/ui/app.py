"""Textual TUI application for lazy-pager.

The app is a thin consumer: key presses go through ``PageViewDriver`` and the
page is redrawn whenever the controller reports a change.
"""
from __future__ import annotations

from typing import Any, Callable

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.css.query import NoMatches
from textual.widgets import Footer, Header

from lazy_pager.controller import WindowController
from lazy_pager.events import PagerEvent, WindowChangedEvent
from lazy_pager.types import ControllerPhase, Slot

from .controllers import PageViewDriver
from .display import format_event
from .widgets import PageBuilder, PageView, StatusLine


class PagerApp(App[None]):
    """Interactive pager over a ``WindowController``."""

    ENABLE_COMMAND_PALETTE = False

    CSS = """
    Screen {
        layout: vertical;
    }
    """

    BINDINGS = [
        Binding("right,l", "next_page", "Next", show=True),
        Binding("left,h", "previous_page", "Previous", show=True),
        Binding("r", "retry", "Retry", show=True),
        Binding("a", "reanchor", "Re-anchor", show=False),
        Binding("q", "quit", "Quit", show=True),
    ]

    def __init__(
        self,
        controller: WindowController[Any],
        *,
        placeholder: str = "Loading...",
        page_builder: PageBuilder | None = None,
        max_body_chars: int = 4000,
        max_body_lines: int = 200,
        close_on_exit: bool = True,
        title: str | None = None,
    ) -> None:
        super().__init__()
        self.controller = controller
        self.driver = PageViewDriver(controller)
        self._placeholder = placeholder
        self._page_builder = page_builder
        self._max_body_chars = max_body_chars
        self._max_body_lines = max_body_lines
        self._close_on_exit = close_on_exit
        self._unsubscribe: Callable[[], None] | None = None
        self.last_message: str = ""
        if title:
            self.title = title

    def compose(self) -> ComposeResult:
        yield Header()
        yield PageView(
            id="page",
            placeholder=self._placeholder,
            page_builder=self._page_builder,
            max_body_chars=self._max_body_chars,
            max_body_lines=self._max_body_lines,
        )
        yield StatusLine(id="status")
        yield Footer()

    async def on_mount(self) -> None:
        self._unsubscribe = self.controller.notifier.add_listener(self._on_pager_event)
        if self.controller.phase is ControllerPhase.IDLE:
            self.controller.start()
        self.refresh_page()

    async def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self._close_on_exit:
            self.controller.close()

    def _on_pager_event(self, event: PagerEvent) -> None:
        if not isinstance(event, WindowChangedEvent):
            self.last_message = format_event(event) or ""
        self.refresh_page()

    def status_text(self) -> str:
        controller = self.controller
        left = "|<" if controller.left_exhausted else "<"
        right = ">|" if controller.right_exhausted else ">"
        parts = [f"{left} page {controller.current_index():+d} {right}"]
        if self.last_message:
            parts.append(self.last_message)
        return "  ".join(parts)

    def refresh_page(self) -> None:
        try:
            page = self.query_one("#page", PageView)
        except NoMatches:
            return
        page.show(self.driver.item_at(self.driver.position))
        self.query_one("#status", StatusLine).update(self.status_text())

    def _turn(self, step: int) -> None:
        turn = self.driver.page_changed(self.driver.position + step)
        if turn.snap_back:
            self.bell()
        self.refresh_page()

    def action_next_page(self) -> None:
        self._turn(1)

    def action_previous_page(self) -> None:
        self._turn(-1)

    def action_retry(self) -> None:
        position = self.driver.position
        for candidate in (position, position + 1, position - 1):
            if self.driver.retry(candidate):
                break
        self.refresh_page()

    def action_reanchor(self) -> None:
        self.controller.reload(Slot.CURRENT)
        self.refresh_page()
