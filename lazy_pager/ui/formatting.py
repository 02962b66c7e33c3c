"""Text helpers shared by the display backends and the TUI."""
from __future__ import annotations

from typing import Any

from lazy_pager.types import is_end

TRUNCATION_SUFFIX = "... [truncated]"
LINES_TRUNCATION_SUFFIX = "... ({count} more lines)"


def truncate_text(text: str, max_len: int, *, suffix: str = TRUNCATION_SUFFIX) -> str:
    if len(text) <= max_len:
        return text
    return text[:max_len] + suffix


def truncate_lines(
    text: str,
    max_len: int,
    max_lines: int,
    *,
    suffix: str = TRUNCATION_SUFFIX,
    lines_suffix: str = LINES_TRUNCATION_SUFFIX,
) -> str:
    """Cap a page body at ``max_lines`` lines, then at ``max_len`` characters.

    The hidden-line count counts lines of the full body, so it stays accurate
    even when the character cap cuts further.
    """
    lines = text.splitlines()
    hidden = len(lines) - max_lines
    if hidden > 0:
        text = "\n".join(lines[:max_lines])
    text = truncate_text(text, max_len, suffix=suffix)
    if hidden > 0:
        text += "\n" + lines_suffix.format(count=hidden)
    return text


def describe_value(value: Any, max_len: int = 80) -> str:
    """One-line label for a page value (records use their title)."""
    if is_end(value):
        return "<end>"
    title = getattr(value, "title", None)
    text = title if isinstance(title, str) else repr(value)
    return truncate_text(text.replace("\n", " "), max_len, suffix="...")


def page_body(value: Any) -> str:
    body = getattr(value, "body", None)
    return body if isinstance(body, str) else str(value)
