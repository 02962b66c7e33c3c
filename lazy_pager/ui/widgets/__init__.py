"""Textual widgets for the lazy-pager TUI."""
from .page import PageBuilder, PageView, StatusLine

__all__ = ["PageBuilder", "PageView", "StatusLine"]
