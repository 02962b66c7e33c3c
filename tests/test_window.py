from __future__ import annotations

import pytest

from lazy_pager import END, CellState, Completion, Direction, NotReadyError, Slot, WindowState


def _filled(offset: int = 100) -> WindowState:
    window = WindowState(anchor_offset=offset)
    window.previous = Completion.resolved("a", label="previous")
    window.current = Completion.resolved("b", label="current")
    window.next = Completion.resolved("c", label="next")
    return window


def test_index_starts_at_anchor_offset() -> None:
    window = WindowState()
    assert window.index == 10_000
    assert window.current_index == 0


@pytest.mark.parametrize("offset", [0, -1])
def test_non_positive_offset_rejected(offset: int) -> None:
    with pytest.raises(ValueError, match="must be positive"):
        WindowState(anchor_offset=offset)


def test_unissued_slot_reads_pending() -> None:
    window = WindowState()
    assert window.peek(Slot.NEXT) is CellState.PENDING
    with pytest.raises(NotReadyError, match="next"):
        window.get(Slot.NEXT)
    assert list(window.cells()) == []


def test_shift_right_rotates_cells() -> None:
    window = _filled()
    old_previous, old_current, old_next = window.previous, window.current, window.next

    dropped = window.shift(Direction.RIGHT)

    assert dropped is old_previous
    assert window.previous is old_current
    assert window.current is old_next
    assert window.next is None
    assert window.current_index == 1
    assert window.index == 101


def test_shift_left_rotates_cells() -> None:
    window = _filled()
    old_previous, old_current, old_next = window.previous, window.current, window.next

    dropped = window.shift(Direction.LEFT)

    assert dropped is old_next
    assert window.next is old_current
    assert window.current is old_previous
    assert window.previous is None
    assert window.current_index == -1
    assert window.index == 99


def test_set_cell_returns_replaced() -> None:
    window = _filled()
    old = window.next
    fresh = Completion.resolved("d")

    assert window.set_cell(Slot.NEXT, fresh) is old
    assert window.holds(Slot.NEXT, fresh)
    assert not window.holds(Slot.NEXT, old)


def test_has_value_excludes_end() -> None:
    window = _filled()
    window.next = Completion.resolved(END)
    window.previous = Completion.resolved(None)

    assert window.has_value(Slot.CURRENT)
    assert window.has_value(Slot.PREVIOUS)
    assert not window.has_value(Slot.NEXT)


def test_set_exhausted_reports_change() -> None:
    window = WindowState()
    assert window.set_exhausted(Direction.RIGHT, True) is True
    assert window.set_exhausted(Direction.RIGHT, True) is False
    assert window.exhausted(Direction.RIGHT)
    assert not window.exhausted(Direction.LEFT)
    assert window.set_exhausted(Direction.RIGHT, False) is True


def test_snapshot_is_plain_data() -> None:
    window = _filled()
    window.next = None
    window.left_exhausted = True

    assert window.snapshot() == {
        "index": 0,
        "slots": {"previous": "resolved", "current": "resolved", "next": "pending"},
        "left_exhausted": True,
        "right_exhausted": False,
    }
