"""Configuration loading for lazy-pager.

Reads an optional TOML config file from the working directory to control the
window bias, discard behaviour, logging level and display limits.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:  # pragma: no cover - fallback for <3.11
    import tomli as tomllib

from .errors import ConfigError
from .window import DEFAULT_ANCHOR_OFFSET

CONFIG_FILENAMES = ("lazy-pager.toml",)

# Environment variable overriding [logging] level
LOG_LEVEL_ENV = "LAZY_PAGER_LOG_LEVEL"

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass
class WindowSettings:
    anchor_offset: int = DEFAULT_ANCHOR_OFFSET
    cancel_discarded: bool = False


@dataclass
class LoggingSettings:
    level: str = "WARNING"


@dataclass
class DisplaySettings:
    placeholder: str = "Loading..."
    max_body_chars: int = 4000
    max_body_lines: int = 200


@dataclass
class PagerConfig:
    window: WindowSettings = field(default_factory=WindowSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    display: DisplaySettings = field(default_factory=DisplaySettings)
    path: Optional[Path] = None


def load_config(base_dir: Path, environ: Optional[dict[str, str]] = None) -> PagerConfig:
    """Load config from the first matching file in ``base_dir``.

    Environment overrides are applied on top of the file (or the defaults when
    no file exists).
    """
    env = os.environ if environ is None else environ
    config = PagerConfig()

    for filename in CONFIG_FILENAMES:
        candidate = base_dir / filename
        if not candidate.exists():
            continue
        with candidate.open("rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as exc:
                raise ConfigError(f"Invalid TOML in {candidate}: {exc}") from exc
        config = PagerConfig(
            window=_parse_window(data.get("window", {})),
            logging=_parse_logging(data.get("logging", {})),
            display=_parse_display(data.get("display", {})),
            path=candidate,
        )
        break

    level = env.get(LOG_LEVEL_ENV)
    if level:
        config.logging = LoggingSettings(level=normalize_level(level, source=LOG_LEVEL_ENV))
    return config


def _expect(raw: dict[str, Any], key: str, kind: type, default: Any, section: str) -> Any:
    value = raw.get(key, default)
    # bool is an int subclass; keep the two apart.
    if kind is int and isinstance(value, bool):
        raise ConfigError(f"[{section}] {key} must be an integer, got {value!r}")
    if not isinstance(value, kind):
        raise ConfigError(f"[{section}] {key} must be {kind.__name__}, got {value!r}")
    return value


def normalize_level(level: str, *, source: str) -> str:
    normalized = level.strip().upper()
    if normalized not in LOG_LEVELS:
        choices = ", ".join(LOG_LEVELS)
        raise ConfigError(f"{source}: unknown log level {level!r} (expected one of {choices})")
    return normalized


def _parse_window(raw: dict) -> WindowSettings:
    anchor_offset = _expect(raw, "anchor_offset", int, DEFAULT_ANCHOR_OFFSET, "window")
    if anchor_offset <= 0:
        raise ConfigError(f"[window] anchor_offset must be positive, got {anchor_offset}")
    cancel_discarded = _expect(raw, "cancel_discarded", bool, False, "window")
    return WindowSettings(anchor_offset=anchor_offset, cancel_discarded=cancel_discarded)


def _parse_logging(raw: dict) -> LoggingSettings:
    level = _expect(raw, "level", str, "WARNING", "logging")
    return LoggingSettings(level=normalize_level(level, source="[logging] level"))


def _parse_display(raw: dict) -> DisplaySettings:
    defaults = DisplaySettings()
    placeholder = _expect(raw, "placeholder", str, defaults.placeholder, "display")
    max_chars = _expect(raw, "max_body_chars", int, defaults.max_body_chars, "display")
    max_lines = _expect(raw, "max_body_lines", int, defaults.max_body_lines, "display")
    if max_chars <= 0 or max_lines <= 0:
        raise ConfigError("[display] body limits must be positive")
    return DisplaySettings(
        placeholder=placeholder,
        max_body_chars=max_chars,
        max_body_lines=max_lines,
    )
