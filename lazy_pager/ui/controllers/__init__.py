"""UI-agnostic controllers for the Textual TUI.

These components encapsulate stateful paging logic without depending on
Textual, so they can be unit tested and reused by other frontends.
"""

from .page_view import ItemKind, PageItem, PageTurn, PageViewDriver

__all__ = [
    "ItemKind",
    "PageItem",
    "PageTurn",
    "PageViewDriver",
]
