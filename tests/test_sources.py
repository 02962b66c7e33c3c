"""Tests for the filesystem-backed sequences."""
import pytest

from lazy_pager import END, Slot, WindowController
from lazy_pager.sources import DirectorySequence, LineSequence, PageRecord


@pytest.fixture
def pages(tmp_path):
    for name, body in [("a.txt", "alpha"), ("b.txt", "bravo"), ("c.txt", "charlie")]:
        (tmp_path / name).write_text(body)
    (tmp_path / ".hidden").write_text("skip me")
    (tmp_path / "nested").mkdir()
    return tmp_path


class TestDirectorySequence:
    @pytest.mark.anyio
    async def test_anchor_is_first_file(self, pages):
        source = DirectorySequence(pages)

        record = await source.load_anchor()

        assert record == PageRecord(key="a.txt", title="a.txt", body="alpha", position=0)

    @pytest.mark.anyio
    async def test_start_key_and_neighbours(self, pages):
        source = DirectorySequence(pages, start="b.txt")

        anchor = await source.load_anchor()
        assert anchor.key == "b.txt"
        assert (await source.load_next(anchor)).key == "c.txt"
        assert (await source.load_previous(anchor)).key == "a.txt"

    @pytest.mark.anyio
    async def test_edges_return_end(self, pages):
        source = DirectorySequence(pages, start="c.txt")

        last = await source.load_anchor()
        first = await source.load_previous(await source.load_previous(last))

        assert await source.load_next(last) is END
        assert await source.load_previous(first) is END

    @pytest.mark.anyio
    async def test_empty_directory_anchors_on_end(self, tmp_path):
        assert await DirectorySequence(tmp_path).load_anchor() is END

    @pytest.mark.anyio
    async def test_unknown_start_fails(self, pages):
        with pytest.raises(KeyError, match="missing.txt"):
            await DirectorySequence(pages, start="missing.txt").load_anchor()

    @pytest.mark.anyio
    async def test_pattern_filters_files(self, pages):
        (pages / "notes.md").write_text("# notes")

        source = DirectorySequence(pages, pattern="*.md")

        assert (await source.load_anchor()).key == "notes.md"

    @pytest.mark.anyio
    async def test_new_file_shows_up_after_end(self, pages):
        controller = _controller(DirectorySequence(pages, start="c.txt"))
        controller.start()
        await controller.wait_idle()
        assert controller.right_exhausted is True

        (pages / "d.txt").write_text("delta")
        controller.reload(Slot.NEXT)
        await controller.wait_idle()

        assert controller.right_exhausted is False
        assert controller.advance() is True
        assert controller.get_slot(Slot.CURRENT).body == "delta"
        controller.close()

    def test_negative_delay_rejected(self, pages):
        with pytest.raises(ValueError, match="delay"):
            DirectorySequence(pages, delay=-1)


class TestLineSequence:
    @pytest.mark.anyio
    async def test_skips_blank_lines(self, tmp_path):
        path = tmp_path / "lines.txt"
        path.write_text("first\n\n  \nsecond\nthird\n")
        source = LineSequence(path, start="2")

        anchor = await source.load_anchor()

        assert anchor.body == "second"
        assert anchor.title == "lines.txt:2"
        assert (await source.load_next(anchor)).body == "third"
        assert (await source.load_previous(anchor)).body == "first"

    @pytest.mark.anyio
    async def test_walks_whole_file_through_controller(self, tmp_path):
        path = tmp_path / "lines.txt"
        path.write_text("one\ntwo\nthree\n")
        controller = _controller(LineSequence(path))
        controller.start()
        await controller.wait_idle()

        seen = [controller.get_slot(Slot.CURRENT).body]
        while controller.advance():
            seen.append(controller.get_slot(Slot.CURRENT).body)
            await controller.wait_idle()

        assert seen == ["one", "two", "three"]
        assert controller.current_index() == 2
        controller.close()


def _controller(source):
    return WindowController(source.load_anchor, source.load_next, source.load_previous)
