"""Console logging setup for the lazy-pager CLI."""
from __future__ import annotations

import logging
import os
from typing import Optional, TextIO

from rich.console import Console
from rich.logging import RichHandler

from .config import LOG_LEVEL_ENV, PagerConfig, normalize_level

PACKAGE_LOGGER = "lazy_pager"

_VERBOSITY_LEVELS = {1: "INFO", 2: "DEBUG"}


def resolve_log_level(
    verbosity: int = 0,
    config: Optional[PagerConfig] = None,
    environ: Optional[dict[str, str]] = None,
) -> str:
    """Pick the effective level name.

    Precedence: -v flags, LAZY_PAGER_LOG_LEVEL, config file, WARNING.
    """
    if verbosity > 0:
        return _VERBOSITY_LEVELS.get(min(verbosity, 2), "DEBUG")
    env = os.environ if environ is None else environ
    if env.get(LOG_LEVEL_ENV):
        return normalize_level(env[LOG_LEVEL_ENV], source=LOG_LEVEL_ENV)
    if config is not None:
        return config.logging.level
    return "WARNING"


def configure_logging(level: str = "WARNING", *, stream: Optional[TextIO] = None) -> logging.Logger:
    """Attach a single rich handler to the package logger.

    Calling it again replaces the handler rather than stacking another one.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if getattr(handler, "_lazy_pager", False):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(file=stream, stderr=stream is None),
        show_path=False,
        show_time=True,
        omit_repeated_times=True,
        rich_tracebacks=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    handler._lazy_pager = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger
