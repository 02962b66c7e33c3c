from __future__ import annotations

from lazy_pager import END
from lazy_pager.sources import PageRecord
from lazy_pager.ui.formatting import describe_value, page_body, truncate_lines, truncate_text


def test_truncate_text_appends_suffix() -> None:
    assert truncate_text("abcdef", 3) == "abc... [truncated]"
    assert truncate_text("abc", 3) == "abc"


def test_truncate_lines_counts_hidden_lines() -> None:
    assert truncate_lines("a\nb\nc", 100, 1) == "a\n... (2 more lines)"
    assert truncate_lines("a\nb", 100, 5) == "a\nb"


def test_truncate_lines_applies_both_caps() -> None:
    assert truncate_lines("abcdef\nx\ny", 3, 1) == "abc... [truncated]\n... (2 more lines)"


def test_describe_value_prefers_title() -> None:
    record = PageRecord(key="k", title="Chapter 1")
    assert describe_value(record) == "Chapter 1"
    assert describe_value(END) == "<end>"
    assert describe_value(None) == "None"
    assert describe_value("x" * 100, max_len=5) == "'xxxx..."


def test_page_body_falls_back_to_str() -> None:
    assert page_body(PageRecord(key="k", title="t", body="text")) == "text"
    assert page_body(42) == "42"
