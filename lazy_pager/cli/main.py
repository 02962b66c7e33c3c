#!/usr/bin/env python
"""Page through a directory of files or the lines of a text file.

Usage:
    lazy-pager <directory>                 # interactive TUI when on a TTY
    lazy-pager <file> --lines              # one page per non-empty line
    lazy-pager <directory> --steps ">>><"  # headless replay of navigation

Navigation steps (headless mode):
    > or n   advance to the next page
    < or p   retreat to the previous page
    r        retry every slot whose fetch failed
    a        re-anchor (reload the current slot from the start page)

Only three pages are ever loaded: previous, current and next. Neighbours
are looked up again on every fetch, so files added while paging appear
once the window reaches them.
"""
from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Sequence

from ..config import PagerConfig, load_config
from ..controller import WindowController
from ..errors import ConfigError
from ..logging_utils import configure_logging, resolve_log_level
from ..sources import DirectorySequence, LineSequence
from ..types import CellState, Slot
from ..ui import (
    DisplayBackend,
    HeadlessDisplayBackend,
    JsonDisplayBackend,
    RichDisplayBackend,
)

STEP_ALIASES = {">": ">", "n": ">", "<": "<", "p": "<", "r": "r", "a": "a"}

Source = DirectorySequence | LineSequence


def parse_steps(raw: str) -> list[str]:
    """Normalize a navigation script; whitespace and commas are ignored."""
    steps: list[str] = []
    for char in raw:
        if char.isspace() or char == ",":
            continue
        step = STEP_ALIASES.get(char.lower())
        if step is None:
            raise ValueError(f"Unknown navigation step {char!r} (use > < n p r a)")
        steps.append(step)
    return steps


def build_source(
    path: Path,
    *,
    lines: bool = False,
    start: str | None = None,
    delay: float = 0.0,
    pattern: str = "*",
) -> Source:
    if not path.exists():
        raise FileNotFoundError(f"Path not found: {path}")
    if lines or path.is_file():
        if not path.is_file():
            raise ValueError(f"--lines needs a file, got directory: {path}")
        return LineSequence(path, start=start, delay=delay)
    return DirectorySequence(path, pattern=pattern, start=start, delay=delay)


def build_controller(source: Source, config: PagerConfig, backend: DisplayBackend | None = None) -> WindowController:
    return WindowController.from_config(
        config,
        source.load_anchor,
        source.load_next,
        source.load_previous,
        on_event=backend.display if backend is not None else None,
    )


def _show_current(controller: WindowController, backend: DisplayBackend) -> None:
    if controller.peek_slot(Slot.CURRENT) is CellState.RESOLVED:
        backend.display_page(controller.current_index(), controller.get_slot(Slot.CURRENT))


def _apply_step(controller: WindowController, step: str) -> bool:
    """Apply one step; return True when the current page changed."""
    if step == ">":
        return controller.advance()
    if step == "<":
        return controller.retreat()
    if step == "a":
        return controller.reload(Slot.CURRENT)
    reloaded = False
    for slot in Slot:
        if controller.peek_slot(slot) is CellState.FAILED:
            controller.reload(slot)
            reloaded = reloaded or slot is Slot.CURRENT
    return reloaded


async def _run_headless_mode(
    source: Source,
    steps: Sequence[str],
    backend: DisplayBackend,
    config: PagerConfig,
) -> int:
    controller = build_controller(source, config, backend)
    controller.start()
    try:
        await controller.wait_idle()
        _show_current(controller, backend)
        for step in steps:
            changed = _apply_step(controller, step)
            await controller.wait_idle()
            if changed:
                _show_current(controller, backend)
        return 0 if controller.peek_slot(Slot.CURRENT) is CellState.RESOLVED else 1
    finally:
        controller.close()


def _run_tui_mode(source: Source, config: PagerConfig, title: str) -> int:
    from ..ui.app import PagerApp

    controller = build_controller(source, config)
    app = PagerApp(
        controller,
        placeholder=config.display.placeholder,
        max_body_chars=config.display.max_body_chars,
        max_body_lines=config.display.max_body_lines,
        title=title,
    )
    app.run()
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the lazy-pager CLI.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = argparse.ArgumentParser(
        prog="lazy-pager",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("path", help="Directory of pages, or a text file with --lines")
    parser.add_argument(
        "--lines",
        action="store_true",
        help="Treat PATH as a text file with one page per non-empty line",
    )
    parser.add_argument("--start", help="Anchor page (file name, or 1-based line number)")
    parser.add_argument(
        "--pattern",
        default="*",
        help="Glob selecting files in a directory (default: *)",
    )
    parser.add_argument(
        "--steps",
        default=None,
        help="Navigation script replayed in headless mode, e.g. '>>><'",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=0.0,
        help="Artificial latency per fetch in seconds",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="More output (-v info logging, -vv debug logging and window events)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output pages and events as JSON lines",
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Force headless mode (no TUI, plain text output)",
    )
    parser.add_argument(
        "--tui",
        action="store_true",
        help="Force TUI mode (interactive UI)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show full tracebacks on error",
    )

    args = parser.parse_args(argv)

    if args.json and args.tui:
        print("Cannot combine --json and --tui", file=sys.stderr)
        return 1
    if args.headless and args.tui:
        print("Cannot combine --headless and --tui", file=sys.stderr)
        return 1
    if args.steps is not None and args.tui:
        print("Cannot combine --steps and --tui", file=sys.stderr)
        return 1

    try:
        steps = parse_steps(args.steps or "")
    except ValueError as e:
        parser.error(str(e))

    try:
        config = load_config(Path.cwd())
        configure_logging(resolve_log_level(args.verbose, config))
        source = build_source(
            Path(args.path),
            lines=args.lines,
            start=args.start,
            delay=args.delay,
            pattern=args.pattern,
        )
    except (ConfigError, FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.debug:
            raise
        return 1

    use_tui = args.tui or (
        sys.stdout.isatty() and not args.headless and not args.json and args.steps is None
    )

    try:
        if use_tui:
            return _run_tui_mode(source, config, title=f"lazy-pager: {args.path}")

        backend: DisplayBackend
        limits = {
            "max_body_chars": config.display.max_body_chars,
            "max_body_lines": config.display.max_body_lines,
        }
        if args.json:
            backend = JsonDisplayBackend(stream=sys.stdout, verbosity=args.verbose)
        elif sys.stdout.isatty():
            backend = RichDisplayBackend(stream=sys.stdout, verbosity=args.verbose, **limits)
        else:
            backend = HeadlessDisplayBackend(stream=sys.stdout, verbosity=args.verbose, **limits)
        return asyncio.run(_run_headless_mode(source, steps, backend, config))
    except KeyboardInterrupt:
        print("\nAborted by user", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        if args.debug:
            raise
        return 1


if __name__ == "__main__":
    sys.exit(main())
