"""UI components for the lazy-pager CLI."""
from .controllers import ItemKind, PageItem, PageTurn, PageViewDriver
from .display import (
    DisplayBackend,
    HeadlessDisplayBackend,
    JsonDisplayBackend,
    RichDisplayBackend,
    format_event,
)

__all__ = [
    # Display backends
    "DisplayBackend",
    "HeadlessDisplayBackend",
    "JsonDisplayBackend",
    "RichDisplayBackend",
    "format_event",
    # Driver
    "ItemKind",
    "PageItem",
    "PageTurn",
    "PageViewDriver",
]
