"""Page display widgets for the Textual TUI."""
from __future__ import annotations

from typing import Any, Callable

from rich.console import RenderableType
from rich.panel import Panel
from rich.text import Text
from textual.widgets import Static

from lazy_pager.ui.controllers import ItemKind, PageItem
from lazy_pager.ui.formatting import describe_value, page_body, truncate_lines

PageBuilder = Callable[[Any], RenderableType]


class PageView(Static):
    """Shows the item at the controller's current position."""

    DEFAULT_CSS = """
    PageView {
        width: 100%;
        height: 1fr;
        padding: 0 1;
    }
    """

    def __init__(
        self,
        *,
        placeholder: str = "Loading...",
        page_builder: PageBuilder | None = None,
        max_body_chars: int = 4000,
        max_body_lines: int = 200,
        **kwargs: Any,
    ) -> None:
        super().__init__("", **kwargs)
        self.placeholder = placeholder
        self.max_body_chars = max_body_chars
        self.max_body_lines = max_body_lines
        self._page_builder = page_builder or self._default_page
        self.item: PageItem | None = None

    def _default_page(self, value: Any) -> RenderableType:
        body = truncate_lines(page_body(value), self.max_body_chars, self.max_body_lines)
        return Panel(Text(body), title=describe_value(value), title_align="left")

    def render_item(self, item: PageItem) -> RenderableType:
        if item.kind is ItemKind.PAGE:
            return self._page_builder(item.value)
        if item.kind is ItemKind.ERROR:
            detail = item.value.describe() if item.value is not None else "unknown error"
            return Text(f"Failed to load page: {detail}\nPress 'r' to retry.", style="bold red")
        if item.kind is ItemKind.BLANK:
            return Text("No pages", style="dim")
        return Text(self.placeholder, style="dim italic")

    def show(self, item: PageItem) -> None:
        self.item = item
        self.update(self.render_item(item))


class StatusLine(Static):
    """Index, end markers and the latest pager event."""

    DEFAULT_CSS = """
    StatusLine {
        height: 1;
        color: $text-muted;
        padding: 0 1;
    }
    """
