"""lazy-pager: a three-slot prefetch window over lazily discovered sequences.

Main entry points:
- WindowController: anchored sliding-window controller (advance/retreat/reload)
- Completion: non-blocking async result cell
- lazy-pager CLI: page through files or lines from the terminal

Loaders return the ``END`` sentinel when nothing exists in a direction; ``None``
stays a legitimate item.
"""
from __future__ import annotations

from .completion import Completion, FetchFailure, log_failure
from .config import PagerConfig, load_config
from .controller import WindowController
from .errors import ConfigError, FailedFetchError, NotReadyError, PagerError
from .events import (
    EndReachedEvent,
    EndUnreachedEvent,
    FetchFailedEvent,
    NavigationRefusedEvent,
    PageChangedEvent,
    PagerEvent,
    WindowChangedEvent,
)
from .notifier import PagerNotifier
from .types import (
    END,
    CellState,
    ControllerPhase,
    Direction,
    EndOfSequence,
    RefusalReason,
    Slot,
    is_end,
)
from .window import DEFAULT_ANCHOR_OFFSET, WindowState

__all__ = [
    # Core
    "Completion",
    "FetchFailure",
    "log_failure",
    "WindowController",
    "WindowState",
    "DEFAULT_ANCHOR_OFFSET",
    "PagerNotifier",
    # Types
    "END",
    "EndOfSequence",
    "is_end",
    "CellState",
    "ControllerPhase",
    "Direction",
    "RefusalReason",
    "Slot",
    # Events
    "PagerEvent",
    "WindowChangedEvent",
    "PageChangedEvent",
    "EndReachedEvent",
    "EndUnreachedEvent",
    "NavigationRefusedEvent",
    "FetchFailedEvent",
    # Errors
    "PagerError",
    "NotReadyError",
    "FailedFetchError",
    "ConfigError",
    # Config
    "PagerConfig",
    "load_config",
    # Version
    "__version__",
]

__version__ = "0.1.0"
