"""Error taxonomy for lazy-pager.

The end-of-sequence sentinel is deliberately absent here: reaching the end of
a sequence is a value, not an error.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .completion import FetchFailure


class PagerError(Exception):
    """Base class for every error raised by lazy-pager."""


class NotReadyError(PagerError, LookupError):
    """Raised when a value is read from a cell that has not resolved yet.

    This is a contract violation by the caller, never a reason to wait:
    check ``peek()`` first.
    """


class FailedFetchError(PagerError):
    """Raised when a value is read from a cell whose loader failed."""

    def __init__(self, failure: "FetchFailure") -> None:
        super().__init__(f"Fetch '{failure.label}' failed: {failure.describe()}")
        self.failure = failure

    @property
    def error(self) -> BaseException:
        return self.failure.error


class ConfigError(PagerError, ValueError):
    """Raised when a configuration file or environment value is invalid."""
