"""Tests for the lazy-pager command line in headless and JSON modes."""
import json

import pytest

from lazy_pager.cli.main import build_source, main, parse_steps
from lazy_pager.config import LOG_LEVEL_ENV
from lazy_pager.sources import DirectorySequence, LineSequence


@pytest.fixture
def pages(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    root = tmp_path / "pages"
    root.mkdir()
    for name, body in [("a.txt", "alpha"), ("b.txt", "bravo"), ("c.txt", "charlie")]:
        (root / name).write_text(body)
    return root


def test_parse_steps_accepts_aliases() -> None:
    assert parse_steps("> >, n<p ra") == [">", ">", ">", "<", "<", "r", "a"]


def test_parse_steps_rejects_unknown() -> None:
    with pytest.raises(ValueError, match="'x'"):
        parse_steps(">x")


def test_build_source_picks_by_path(tmp_path) -> None:
    text = tmp_path / "notes.txt"
    text.write_text("one\n")

    assert isinstance(build_source(tmp_path), DirectorySequence)
    assert isinstance(build_source(text), LineSequence)
    with pytest.raises(ValueError, match="--lines"):
        build_source(tmp_path, lines=True)
    with pytest.raises(FileNotFoundError):
        build_source(tmp_path / "missing")


def test_headless_replay_walks_to_the_end(pages, capsys) -> None:
    code = main([str(pages), "--headless", "--steps", ">>>"])

    out = capsys.readouterr().out.splitlines()
    assert code == 0
    assert out == [
        "=== [+0] a.txt ===",
        "alpha",
        "[+1] page right: b.txt",
        "=== [+1] b.txt ===",
        "bravo",
        "[+2] page right: c.txt",
        "[+2] right end reached at c.txt",
        "=== [+2] c.txt ===",
        "charlie",
        "[+2] right move refused (end_reached)",
    ]


def test_headless_start_key_and_retreat(pages, capsys) -> None:
    code = main([str(pages), "--start", "b.txt", "--steps", "<<"])

    out = capsys.readouterr().out
    assert code == 0
    assert "=== [-1] a.txt ===" in out
    assert "[-1] left end reached at a.txt" in out
    assert "[-1] left move refused (end_reached)" in out


def test_json_mode_emits_records(pages, capsys) -> None:
    code = main([str(pages), "--json", "--steps", ">"])

    records = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    assert code == 0
    assert [r["kind"] for r in records] == ["page", "page_changed", "page"]
    assert records[0]["value"]["key"] == "a.txt"
    assert records[2]["index"] == 1


def test_lines_mode(tmp_path, monkeypatch, capsys) -> None:
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "list.txt"
    path.write_text("first\n\nsecond\n")

    code = main([str(path), "--lines", "--headless", "--steps", ">"])

    out = capsys.readouterr().out
    assert code == 0
    assert "=== [+1] list.txt:2 ===" in out
    assert "second" in out


def test_failed_anchor_exits_nonzero(pages, capsys) -> None:
    code = main([str(pages), "--headless", "--start", "zzz.txt"])

    captured = capsys.readouterr()
    assert code == 1
    assert "current fetch failed: KeyError" in captured.out


def test_missing_path_reports_error(tmp_path, monkeypatch, capsys) -> None:
    monkeypatch.chdir(tmp_path)

    code = main([str(tmp_path / "nope"), "--headless"])

    assert code == 1
    assert "Error: Path not found" in capsys.readouterr().err


def test_debug_reraises(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    with pytest.raises(FileNotFoundError):
        main([str(tmp_path / "nope"), "--headless", "--debug"])


def test_conflicting_modes_rejected(pages, capsys) -> None:
    assert main([str(pages), "--json", "--tui"]) == 1
    assert "Cannot combine --json and --tui" in capsys.readouterr().err


def test_invalid_steps_exit_with_usage_error(pages) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main([str(pages), "--steps", "?"])
    assert excinfo.value.code == 2


def test_invalid_config_reported(pages, capsys) -> None:
    (pages.parent / "lazy-pager.toml").write_text("[window]\nanchor_offset = -5\n")

    code = main([str(pages), "--headless"])

    assert code == 1
    assert "anchor_offset must be positive" in capsys.readouterr().err
